"""
PressDesk - Admin Screens for a Content Backend
===============================================

Flask admin screens over a content site's REST API:
- Blog post management (status filter, delete with confirmation)
- Newsletter subscriber management (pagination, search, status edits,
  CSV export, delete with confirmation)

Usage:
    from flask import Flask
    from pressdesk import PressDesk

    app = Flask(__name__)
    app.config['PRESSDESK_API_URL'] = 'https://example.com/api'
    PressDesk(app)
"""

import logging

from .core.api_client import BackendClient
from .core.config import Config, get_config_value

__version__ = '0.1.0'

logger = logging.getLogger(__name__)

DEFAULT_FEATURES = {
    'blog': True,
    'newsletter': True,
}

CONFIG_DEFAULTS = [
    'PRESSDESK_API_URL',
    'PRESSDESK_API_TOKEN',
    'PRESSDESK_API_TIMEOUT',
    'PRESSDESK_LOG_DB',
    'PRESSDESK_BRAND_NAME',
    'PRESSDESK_BLOG_NEW_URL',
    'PRESSDESK_BLOG_VIEW_URL',
    'PRESSDESK_BLOG_EDIT_URL',
]


class PressDesk:
    """Flask extension: registers the admin screens on an app"""

    def __init__(self, app=None, config=None):
        self._config = {}
        self._registered = []
        self.client = None
        if app is not None:
            self.init_app(app, config)

    def init_app(self, app, config=None):
        self._config = self._build_config(app, config or {})

        for key in CONFIG_DEFAULTS:
            app.config.setdefault(key, getattr(Config, key))
        if not app.config.get('SECRET_KEY') and Config.SECRET_KEY:
            app.config['SECRET_KEY'] = Config.SECRET_KEY

        with app.app_context():
            self.client = BackendClient.from_config()

        self._register_modules(app)
        self._setup_template_context(app)

        app.extensions['pressdesk'] = self
        logger.info(f"PressDesk initialised with modules: {', '.join(self._registered)}")

    @staticmethod
    def _build_config(app, overrides):
        features = dict(DEFAULT_FEATURES)
        features.update(overrides.get('features', {}))
        return {
            'brand_name': overrides.get('brand_name')
            or app.config.get('PRESSDESK_BRAND_NAME')
            or Config.PRESSDESK_BRAND_NAME,
            'features': features,
        }

    def _register_modules(self, app):
        from .modules.components import components_bp
        app.register_blueprint(components_bp)

        features = self._config['features']
        if features.get('blog'):
            from .modules.blog_admin import blog_admin_bp
            app.register_blueprint(blog_admin_bp)
            self._registered.append('blog')
        if features.get('newsletter'):
            from .modules.newsletter_admin import newsletter_admin_bp
            app.register_blueprint(newsletter_admin_bp)
            self._registered.append('newsletter')

    def _setup_template_context(self, app):
        @app.context_processor
        def inject_pressdesk():
            return {
                'pressdesk_config': self._config,
                'brand_name': self._config['brand_name'],
            }

    def get_registered_modules(self):
        return list(self._registered)

    @property
    def config(self):
        return self._config


__all__ = ['PressDesk', 'BackendClient', 'get_config_value', '__version__']
