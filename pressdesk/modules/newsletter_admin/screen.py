"""
Newsletter subscriber list: paginated, status-filtered, locally searchable,
with inline status changes, CSV export and delete with confirmation.
"""

import logging
from dataclasses import replace

from ...core.errors import BackendError
from ...core.logging_service import LoggingService, db_log
from ...core.models import (
    ALL, ExportFile, Pagination, SubscriberStatus, filter_subscribers,
    parse_status, parse_status_filter,
)
from ...core.screen import ListScreen

logger = logging.getLogger(__name__)

EXPORT_FILENAME = 'newsletter-subscribers.csv'


class NewsletterScreen(ListScreen):
    source = 'newsletter'
    entity_label = 'subscriber'
    load_error_message = 'Failed to load subscribers'
    delete_success_message = 'Subscriber deleted successfully'
    delete_error_message = 'Failed to delete subscriber'
    delete_title = 'Delete Subscriber'
    delete_message = 'Are you sure you want to delete this subscriber? This action cannot be undone.'

    status_choices = [(s.value, s.value.title()) for s in SubscriberStatus]
    filter_choices = [(ALL, 'All Status')] + status_choices

    def __init__(self, client, notifier, page=1, status_filter=ALL, search=''):
        super().__init__(client, notifier)
        self.status = parse_status_filter(status_filter, SubscriberStatus)
        self.pagination = Pagination(current=max(int(page), 1))
        self.search = search or ''

    # ----- state -----

    @property
    def status_filter(self):
        return self.status.value if self.status else ALL

    @property
    def subscribers(self):
        return self.rows

    @property
    def visible_subscribers(self):
        """The fetched page narrowed by the search box"""
        return filter_subscribers(self.rows, self.search)

    @property
    def total_count(self):
        return self.pagination.total

    @property
    def active_count(self):
        return sum(1 for s in self.rows if s.status == SubscriberStatus.ACTIVE)

    @property
    def unsubscribed_count(self):
        return sum(1 for s in self.rows if s.status == SubscriberStatus.UNSUBSCRIBED)

    def query(self):
        return {'page': self.pagination.current, 'status': self.status_filter}

    def set_page(self, page):
        self.pagination = replace(self.pagination, current=max(int(page), 1))
        return self.refresh()

    def set_status_filter(self, value):
        self.status = parse_status_filter(value, SubscriberStatus)
        return self.refresh()

    def set_search(self, text):
        """Local only: never fetches"""
        self.search = text or ''

    # ----- ListScreen hooks -----

    def _fetch(self, query):
        return self.client.list_subscribers(page=query['page'], status=query['status'])

    def _apply(self, result):
        self.rows = list(result.subscribers)
        self.pagination = result.pagination

    def _delete(self, record_id):
        self.client.delete_subscriber(record_id)

    def request_delete_subscriber(self, subscriber):
        self.request_delete(subscriber.id, subscriber.email)

    # ----- row actions -----

    def change_status(self, subscriber_id, new_status, reconcile=True):
        """
        Ask the backend to move one subscriber to ``new_status``.

        No local change is made: on success the list is re-fetched (or the
        caller reconciles), on failure the displayed status stays as fetched.
        """
        status = parse_status(new_status, SubscriberStatus)
        try:
            self.client.update_subscriber_status(subscriber_id, status)
        except BackendError as e:
            logger.error(f"Error updating status for subscriber {subscriber_id}: {e}")
            LoggingService.log_error_with_traceback(self.source, e, {
                'id': subscriber_id, 'status': status.value
            })
            self.notifier.error('Failed to update status')
            return False

        db_log('info', self.source, f"Subscriber {subscriber_id} set to {status.value}")
        self.notifier.success('Subscriber status updated')
        if reconcile:
            self.refresh()
        return True

    def export(self, notify_success=True):
        """
        Fetch the CSV export. Returns an ExportFile, or None on failure.

        Callers that answer with the file itself pass notify_success=False:
        the download is the confirmation and no page renders a toast.
        """
        try:
            content = self.client.export_subscribers()
        except BackendError as e:
            logger.error(f"Error exporting subscribers: {e}")
            LoggingService.log_error_with_traceback(self.source, e)
            self.notifier.error('Failed to export subscribers')
            return None

        if notify_success:
            self.notifier.success('Subscribers exported successfully')
        return ExportFile(filename=EXPORT_FILENAME, content=content)
