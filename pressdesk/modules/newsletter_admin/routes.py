"""
Newsletter Admin Routes
=======================

- GET  /admin/newsletter               -- subscriber list (?page=&status=&q=)
- POST /admin/newsletter/<id>/status   -- change one subscriber's status
- GET  /admin/newsletter/<id>/delete   -- list with the delete confirmation open
- POST /admin/newsletter/<id>/delete   -- confirm the delete
- GET  /admin/newsletter/export        -- CSV download
"""

import logging
from io import BytesIO

from flask import render_template, request, redirect, url_for, abort, send_file

from . import newsletter_admin_bp
from .screen import NewsletterScreen
from ...core.api_client import get_backend_client
from ...core.errors import InvalidStatus
from ...core.notifications import FlashNotifier

logger = logging.getLogger(__name__)


def _build_screen():
    """Screen for the page/status/search carried by the request (query or form)"""
    try:
        return NewsletterScreen(
            get_backend_client(),
            FlashNotifier(),
            page=request.values.get('page', 1, type=int) or 1,
            status_filter=request.values.get('status', 'all'),
            search=request.values.get('q', ''),
        )
    except InvalidStatus as e:
        abort(400, description=str(e))


def _list_url(screen):
    params = {'page': screen.pagination.current, 'status': screen.status_filter}
    if screen.search:
        params['q'] = screen.search
    return url_for('newsletter_admin.subscriber_list', **params)


def _render(screen):
    return render_template('newsletter_admin/list.html', screen=screen)


@newsletter_admin_bp.route('', methods=['GET'])
def subscriber_list():
    """Newsletter subscribers page"""
    screen = _build_screen()
    screen.refresh()
    return _render(screen)


@newsletter_admin_bp.route('/<subscriber_id>/status', methods=['POST'])
def update_status(subscriber_id):
    """Inline status change; the redirected list GET re-fetches from the backend"""
    screen = _build_screen()
    new_status = request.form.get('new_status', '')
    try:
        screen.change_status(subscriber_id, new_status, reconcile=False)
    except InvalidStatus as e:
        abort(400, description=str(e))
    return redirect(_list_url(screen))


@newsletter_admin_bp.route('/<subscriber_id>/delete', methods=['GET'])
def confirm_delete_subscriber(subscriber_id):
    """Show the list with the delete confirmation for one subscriber"""
    screen = _build_screen()
    screen.refresh()

    subscriber = screen.find(subscriber_id)
    if subscriber is None:
        if screen.loaded:
            screen.notifier.error('Subscriber not found')
        return redirect(_list_url(screen))

    screen.request_delete_subscriber(subscriber)
    return _render(screen)


@newsletter_admin_bp.route('/<subscriber_id>/delete', methods=['POST'])
def delete_subscriber(subscriber_id):
    """Confirmed delete. Success redirects; the list GET is the re-fetch."""
    screen = _build_screen()
    screen.request_delete(subscriber_id, request.form.get('item_name') or None)

    if screen.confirm_delete(reconcile=False):
        return redirect(_list_url(screen))

    screen.refresh()
    return _render(screen)


@newsletter_admin_bp.route('/export', methods=['GET'])
def export_subscribers():
    """Download all subscribers as CSV"""
    screen = _build_screen()
    export = screen.export(notify_success=False)
    if export is None:
        return redirect(_list_url(screen))

    return send_file(
        BytesIO(export.content),
        mimetype=export.mimetype,
        as_attachment=True,
        download_name=export.filename,
    )
