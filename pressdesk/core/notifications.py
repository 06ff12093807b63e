"""
User notifications (toasts). Screens receive a Notifier instead of
reaching for a global, so tests can record what the user would see.
"""

from flask import flash


class Notifier:
    """Interface: transient, non-blocking user messages"""

    def success(self, message):
        raise NotImplementedError

    def error(self, message):
        raise NotImplementedError


class FlashNotifier(Notifier):
    """Queues messages with Flask's flash; base.html renders them as toasts"""

    def success(self, message):
        flash(message, 'success')

    def error(self, message):
        flash(message, 'error')
