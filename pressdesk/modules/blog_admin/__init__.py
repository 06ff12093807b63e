"""
Blog Admin Module
=================

Admin list of blog posts served by the content backend.

Provides:
- Post table with status filter
- Delete with confirmation
- Links out to the host app's post editor
"""

from flask import Blueprint

blog_admin_bp = Blueprint(
    'blog_admin',
    __name__,
    url_prefix='/admin/blog',
    template_folder='templates'
)

from . import routes

__all__ = ['blog_admin_bp']
