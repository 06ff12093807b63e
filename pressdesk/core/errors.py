"""
PressDesk Errors
================

Every backend failure surfaces as a BackendError subclass so screens can
catch one type at each call site.
"""


class PressDeskError(Exception):
    """Base class for all PressDesk errors"""


class BackendError(PressDeskError):
    """A backend call did not produce a usable result"""


class TransportError(BackendError):
    """The request never got a response (connection refused, timeout, ...)"""


class BackendRejected(BackendError):
    """The backend answered with an HTTP error or ``success: false``"""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class MalformedResponse(BackendError):
    """The response body could not be read as the expected payload"""


class InvalidTransition(PressDeskError):
    """A delete confirmation was driven through an illegal transition"""


class InvalidStatus(PressDeskError, ValueError):
    """A status or status filter outside the closed set"""
