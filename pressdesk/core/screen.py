"""
List Screen Core
================

Shared state handling for the admin list screens:

- ListScreen: fetch/render/mutate/re-fetch cycle with sequenced fetches
- DeleteConfirmation: the confirm-before-delete modal state machine

Screens do no rendering and know nothing about Flask; the blueprints build
one per request and hand it to a template.
"""

import logging
from collections import namedtuple
from enum import Enum

from .errors import BackendError, InvalidTransition
from .logging_service import db_log, LoggingService

logger = logging.getLogger(__name__)

FetchTicket = namedtuple('FetchTicket', ['seq', 'query'])


class ConfirmationState(str, Enum):
    CLOSED = "closed"
    OPEN_IDLE = "open-idle"
    OPEN_CONFIRMING = "open-confirming"


class DeleteConfirmation:
    """
    Modal shown before a destructive mutation.

    closed -> open-idle -> open-confirming -> closed (success)
                                           -> open-idle (failure)
    open-idle -> closed (cancel)

    Performs no I/O: the owning screen runs the delete between
    begin_confirm() and succeed()/fail().
    """

    def __init__(self, title, message):
        self.title = title
        self.message = message
        self.state = ConfirmationState.CLOSED
        self.record_id = None
        self.item_name = None

    @property
    def is_open(self):
        return self.state != ConfirmationState.CLOSED

    @property
    def loading(self):
        return self.state == ConfirmationState.OPEN_CONFIRMING

    def _require(self, state, action):
        if self.state != state:
            raise InvalidTransition(f"Cannot {action} a delete confirmation that is {self.state.value}")

    def open(self, record_id, item_name=None):
        self._require(ConfirmationState.CLOSED, 'open')
        self.record_id = record_id
        self.item_name = item_name
        self.state = ConfirmationState.OPEN_IDLE

    def begin_confirm(self):
        self._require(ConfirmationState.OPEN_IDLE, 'confirm')
        self.state = ConfirmationState.OPEN_CONFIRMING
        return self.record_id

    def succeed(self):
        self._require(ConfirmationState.OPEN_CONFIRMING, 'complete')
        self._close()

    def fail(self):
        self._require(ConfirmationState.OPEN_CONFIRMING, 'fail')
        self.state = ConfirmationState.OPEN_IDLE

    def cancel(self):
        """Close without deleting. Ignored while confirming (the control is disabled)."""
        if self.state == ConfirmationState.OPEN_CONFIRMING:
            return False
        self._close()
        return True

    def _close(self):
        self.state = ConfirmationState.CLOSED
        self.record_id = None
        self.item_name = None


class ListScreen:
    """
    Base class for a backend-backed admin list.

    Subclasses provide the query for the current filter/page state, the
    list request, how a response is applied, and the delete request.
    Every mutation is followed by a full re-fetch; nothing is patched locally.
    """

    source = 'screen'
    entity_label = 'record'
    load_error_message = 'Failed to load records'
    delete_success_message = 'Record deleted successfully'
    delete_error_message = 'Failed to delete record'
    delete_title = 'Delete Record'
    delete_message = 'Are you sure you want to delete this record? This action cannot be undone.'

    def __init__(self, client, notifier):
        self.client = client
        self.notifier = notifier
        self.rows = []
        self.loading = True
        self.loaded = False
        self._issued = 0
        self._inflight_query = None
        self.delete_confirmation = DeleteConfirmation(self.delete_title, self.delete_message)

    # ----- hooks -----

    def query(self):
        raise NotImplementedError

    def _fetch(self, query):
        raise NotImplementedError

    def _apply(self, result):
        raise NotImplementedError

    def _delete(self, record_id):
        raise NotImplementedError

    # ----- fetching -----

    def begin_fetch(self):
        """Issue a ticket for the current query, or None if that query is already in flight"""
        query = self.query()
        if self._inflight_query is not None and self._inflight_query == query:
            logger.debug(f"[{self.source}] fetch for {query} already in flight")
            return None
        self._issued += 1
        self._inflight_query = query
        self.loading = True
        return FetchTicket(self._issued, query)

    def is_current(self, ticket):
        return ticket.seq == self._issued

    def complete_fetch(self, ticket, result):
        """Apply a response unless a newer fetch has been issued since"""
        if not self.is_current(ticket):
            logger.debug(f"[{self.source}] discarding stale response #{ticket.seq}")
            return False
        self._apply(result)
        self._settle()
        self.loaded = True
        return True

    def fail_fetch(self, ticket, error):
        """Record a failed fetch; previously loaded rows stay as they were"""
        if not self.is_current(ticket):
            logger.debug(f"[{self.source}] discarding stale failure #{ticket.seq}: {error}")
            return False
        logger.error(f"[{self.source}] error fetching {self.entity_label}s: {error}")
        LoggingService.log_error_with_traceback(self.source, error, {'query': ticket.query})
        self.notifier.error(self.load_error_message)
        self._settle()
        return True

    def _settle(self):
        self.loading = False
        self._inflight_query = None

    def refresh(self):
        """Fetch the current query and apply it. Returns True if rows were replaced."""
        ticket = self.begin_fetch()
        if ticket is None:
            return False
        try:
            result = self._fetch(ticket.query)
        except BackendError as e:
            self.fail_fetch(ticket, e)
            return False
        return self.complete_fetch(ticket, result)

    def find(self, record_id):
        return next((row for row in self.rows if row.id == str(record_id)), None)

    # ----- delete -----

    def request_delete(self, record_id, item_name=None):
        """Open the confirmation; nothing is sent until confirm_delete()"""
        self.delete_confirmation.open(record_id, item_name)

    def cancel_delete(self):
        return self.delete_confirmation.cancel()

    def confirm_delete(self, reconcile=True):
        """
        Send the delete for the captured record.

        On success the confirmation closes and the list is re-fetched
        (unless the caller reconciles itself). On failure the confirmation
        drops back to open-idle so the user can retry or cancel.
        """
        record_id = self.delete_confirmation.begin_confirm()
        try:
            self._delete(record_id)
        except BackendError as e:
            logger.error(f"[{self.source}] error deleting {self.entity_label} {record_id}: {e}")
            LoggingService.log_error_with_traceback(self.source, e, {'id': record_id})
            self.notifier.error(self.delete_error_message)
            self.delete_confirmation.fail()
            return False

        db_log('info', self.source, f"Deleted {self.entity_label} {record_id}")
        self.notifier.success(self.delete_success_message)
        self.delete_confirmation.succeed()
        if reconcile:
            self.refresh()
        return True
