"""
PressDesk Modules
=================

Flask blueprint modules for the admin screens.
"""

__all__ = ['blog_admin', 'newsletter_admin', 'components']
