import os
from dotenv import load_dotenv

load_dotenv(override=True)


def as_bool(value):
    """Truthiness of a config value that may arrive as a string ("0", "false", ...)"""
    if isinstance(value, str):
        return value.strip().lower() in ('1', 'true', 'yes', 'on')
    return bool(value)


def _env_bool(name, default='0'):
    return as_bool(os.getenv(name, default))


class Config:
    """
    Base configuration for Pressroom.
    Host apps override any of these through app.config.
    """
    # Flask settings
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY')

    # Hosted backend (Supabase-style REST API)
    BACKEND_URL = os.getenv('BACKEND_URL', os.getenv('SUPABASE_URL', ''))
    BACKEND_ANON_KEY = os.getenv('BACKEND_ANON_KEY', os.getenv('SUPABASE_ANON_KEY', ''))
    BACKEND_TIMEOUT = int(os.getenv('BACKEND_TIMEOUT', '30'))
    IMAGES_BUCKET = os.getenv('IMAGES_BUCKET', 'blog-images')

    # Table names
    POSTS_TABLE = "posts"
    IMAGES_TABLE = "images"

    # Static site
    SITE_URL = os.getenv('SITE_URL', 'http://localhost:8000').rstrip('/')
    SITE_TITLE = os.getenv('SITE_TITLE', 'My Blog')
    SITE_DESCRIPTION = os.getenv('SITE_DESCRIPTION', 'Thoughts and notes')
    SITE_LANGUAGE = os.getenv('SITE_LANGUAGE', 'en')
    OUTPUT_DIR = os.getenv('OUTPUT_DIR', os.path.join(os.getcwd(), 'docs'))
    # Empty means the templates bundled with pressroom.sitegen
    TEMPLATES_DIR = os.getenv('TEMPLATES_DIR', '')
    STRICT_TEMPLATES = _env_bool('STRICT_TEMPLATES')
    HOMEPAGE_POST_LIMIT = int(os.getenv('HOMEPAGE_POST_LIMIT', '6'))
    FEED_POST_LIMIT = int(os.getenv('FEED_POST_LIMIT', '10'))

    # Uploads
    MAX_IMAGE_BYTES = int(os.getenv('MAX_IMAGE_BYTES', str(5 * 1024 * 1024)))

    # Application logs
    DB_DIR = os.getenv('DB_DIR', os.path.join(os.getcwd(), 'databases'))
    LOG_DB = os.getenv('LOG_DB', os.path.join(DB_DIR, "app_logs.db"))

    @classmethod
    def as_dict(cls):
        """Upper-case settings as a plain dict, the shape app.config uses."""
        return {key: getattr(cls, key) for key in dir(cls) if key.isupper()}


def get_config_value(key, default=None):
    """Get configuration value: Flask app config first, then Config, then env var"""
    try:
        from flask import current_app
        val = current_app.config.get(key)
        if val is not None:
            return val
    except RuntimeError:
        pass
    val = getattr(Config, key, None)
    if val is not None:
        return val
    return os.getenv(key, default)
