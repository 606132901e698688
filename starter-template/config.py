import os
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


class Config:
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY', 'dev-secret-key-change-in-production')

    # Hosted backend
    BACKEND_URL = os.getenv('BACKEND_URL', '')
    BACKEND_ANON_KEY = os.getenv('BACKEND_ANON_KEY', '')
    IMAGES_BUCKET = os.getenv('IMAGES_BUCKET', 'blog-images')

    # Static site
    SITE_URL = os.getenv('SITE_URL', 'http://localhost:8000')
    SITE_TITLE = 'My Pressroom Blog'
    SITE_DESCRIPTION = 'Built with Pressroom'
    OUTPUT_DIR = os.path.join(BASE_DIR, 'docs')
    # TEMPLATES_DIR = os.path.join(BASE_DIR, 'templates')  # to override the bundled page templates

    LOG_DB = os.path.join(BASE_DIR, 'databases', 'app_logs.db')
