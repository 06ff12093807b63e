import os
from dotenv import load_dotenv

load_dotenv(override=True)


def _int_env(key, default):
    try:
        return int(os.getenv(key, default))
    except (TypeError, ValueError):
        return default


class Config:
    """
    Base configuration for PressDesk.
    Projects point the admin screens at their backend via environment variables.
    """
    # Flask settings
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY')

    # Backend API the screens talk to
    PRESSDESK_API_URL = os.getenv('PRESSDESK_API_URL', 'http://localhost:5000/api')
    PRESSDESK_API_TOKEN = os.getenv('PRESSDESK_API_TOKEN')
    PRESSDESK_API_TIMEOUT = _int_env('PRESSDESK_API_TIMEOUT', 15)

    # Diagnostics log (SQLite). Unset disables persistent logging.
    PRESSDESK_LOG_DB = os.getenv('PRESSDESK_LOG_DB')

    PRESSDESK_BRAND_NAME = os.getenv('PRESSDESK_BRAND_NAME', 'PressDesk')

    # Host app pages the blog screen links to ({id} is substituted)
    PRESSDESK_BLOG_NEW_URL = os.getenv('PRESSDESK_BLOG_NEW_URL', '/admin/blog/new')
    PRESSDESK_BLOG_VIEW_URL = os.getenv('PRESSDESK_BLOG_VIEW_URL', '/admin/blog/{id}')
    PRESSDESK_BLOG_EDIT_URL = os.getenv('PRESSDESK_BLOG_EDIT_URL', '/admin/blog/edit/{id}')


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
