"""
Newsletter Admin Module
=======================

Admin management of newsletter subscribers held by the content backend.

Provides:
- Subscriber stats and paginated table with status filter and search
- Inline status changes
- CSV export
- Delete with confirmation
"""

from flask import Blueprint

newsletter_admin_bp = Blueprint(
    'newsletter_admin',
    __name__,
    url_prefix='/admin/newsletter',
    template_folder='templates'
)

from . import routes

__all__ = ['newsletter_admin_bp']
