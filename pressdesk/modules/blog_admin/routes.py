"""
Blog Admin Routes
=================

- GET  /admin/blog              -- post list (?status=all|published|draft|archived)
- GET  /admin/blog/<id>/delete  -- post list with the delete confirmation open
- POST /admin/blog/<id>/delete  -- confirm the delete
"""

import logging

from flask import render_template, request, redirect, url_for, abort

from . import blog_admin_bp
from .screen import BlogScreen
from ...core.api_client import get_backend_client
from ...core.config import get_config_value
from ...core.errors import InvalidStatus
from ...core.notifications import FlashNotifier

logger = logging.getLogger(__name__)


def _build_screen(status_filter):
    try:
        return BlogScreen(get_backend_client(), FlashNotifier(), status_filter=status_filter)
    except InvalidStatus as e:
        abort(400, description=str(e))


def _status_arg():
    return request.values.get('status', 'all')


def _render(screen):
    return render_template(
        'blog_admin/list.html',
        screen=screen,
        new_post_url=get_config_value('PRESSDESK_BLOG_NEW_URL', '/admin/blog/new'),
        view_url_template=get_config_value('PRESSDESK_BLOG_VIEW_URL', '/admin/blog/{id}'),
        edit_url_template=get_config_value('PRESSDESK_BLOG_EDIT_URL', '/admin/blog/edit/{id}'),
    )


@blog_admin_bp.route('', methods=['GET'])
def blog_list():
    """Blog management page"""
    screen = _build_screen(_status_arg())
    screen.refresh()
    return _render(screen)


@blog_admin_bp.route('/<blog_id>/delete', methods=['GET'])
def confirm_delete_blog(blog_id):
    """Show the list with the delete confirmation for one post"""
    screen = _build_screen(_status_arg())
    screen.refresh()

    post = screen.find(blog_id)
    if post is None:
        if screen.loaded:
            screen.notifier.error('Blog post not found')
        return redirect(url_for('blog_admin.blog_list', status=screen.status_filter))

    screen.request_delete_post(post)
    return _render(screen)


@blog_admin_bp.route('/<blog_id>/delete', methods=['POST'])
def delete_blog(blog_id):
    """Confirmed delete. Success redirects; the list GET is the re-fetch."""
    screen = _build_screen(_status_arg())
    screen.request_delete(blog_id, request.form.get('item_name') or None)

    if screen.confirm_delete(reconcile=False):
        return redirect(url_for('blog_admin.blog_list', status=screen.status_filter))

    # Keep the dialog open (loading cleared) over the current list
    screen.refresh()
    return _render(screen)
