"""
Components Module
=================

Shared admin layout, the delete confirmation modal macro, and the
template filters used by the list screens.
"""

from flask import Blueprint

components_bp = Blueprint(
    'pressdesk_components',
    __name__,
    template_folder='templates'
)

from . import filters

__all__ = ['components_bp']
