"""
Pressroom - Blog Admin Panel and Static Site Generator
======================================================

A Flask admin panel for a blog whose content lives in a hosted backend
(Supabase-style REST API), plus a generator that renders the published posts
into a static site.

Usage:
    from flask import Flask
    from pressroom import Pressroom

    app = Flask(__name__)
    pressroom = Pressroom(app)            # builds a BackendClient from config
    pressroom = Pressroom(app, store=fake) # or inject any client

    # Static site, from the shell:
    #   pressroom-generate
    #   flask generate-site
"""

__version__ = '0.1.0'

from flask import jsonify

from .core.config import Config
from .core.errors import PressroomError, StoreError
from .core.database import Database
from .core.logging_service import LoggingService
from .core.store import BackendClient


class Pressroom:
    """Flask extension registering the admin modules on an app."""

    DEFAULT_FEATURES = {
        'dashboard': True,
        'posts': True,
        'images': True,
        'posts_public': True,
    }

    def __init__(self, app=None, config=None, store=None):
        self._config = config or {}
        self.store = store
        self._registered = []
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        for key, value in Config.as_dict().items():
            if app.config.get(key) is None:
                app.config[key] = value

        if self.store is None:
            self.store = BackendClient.from_config(app.config)

        self._setup_log_dir(app)
        self._register_blueprints(app)
        self._register_error_handlers(app)
        self._register_commands(app)

        @app.context_processor
        def inject_pressroom():
            return {
                'brand_name': app.config.get('SITE_TITLE') or 'Pressroom',
                'pressroom_features': self.features,
            }

        app.extensions['pressroom'] = self

    @property
    def features(self):
        features = dict(self.DEFAULT_FEATURES)
        features.update(self._config.get('features', {}))
        return features

    def config(self, key, default=None):
        """Setting from the current app's config"""
        val = self.app_config().get(key)
        return default if val is None else val

    def app_config(self):
        from flask import current_app
        return current_app.config

    def get_registered_modules(self):
        return list(self._registered)

    # ===== Setup =====

    def _setup_log_dir(self, app):
        log_db = app.config.get('LOG_DB')
        if log_db:
            Database.ensure_dir(log_db)

    def _register_blueprints(self, app):
        features = self.features

        if features.get('dashboard'):
            from .modules.dashboard import dashboard_bp
            app.register_blueprint(dashboard_bp)
            self._registered.append('dashboard')

        if features.get('posts'):
            from .modules.posts import posts_bp
            app.register_blueprint(posts_bp)
            self._registered.append('posts')

        if features.get('images'):
            from .modules.images import images_bp
            app.register_blueprint(images_bp)
            self._registered.append('images')

        if features.get('posts_public'):
            from .modules.posts_public import posts_public_bp
            app.register_blueprint(posts_public_bp)
            self._registered.append('posts_public')

    def _register_error_handlers(self, app):
        @app.errorhandler(PressroomError)
        def handle_pressroom_error(error):
            if isinstance(error, StoreError) or error.status >= 500:
                LoggingService.error('api', error.message, details=error.to_dict())
            return jsonify(error.to_dict()), error.status

    def _register_commands(self, app):
        @app.cli.command('generate-site')
        def generate_site_command():
            """Generate the static site from published posts."""
            from .sitegen.cli import run
            status = run(self.store, app.config)
            if status:
                raise SystemExit(status)


__all__ = ['Pressroom', 'BackendClient', 'Config', '__version__']
