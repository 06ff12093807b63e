"""
Shared fixtures and test doubles for the PressDesk tests.
"""

import pytest
from flask import Flask

from pressdesk import PressDesk
from pressdesk.core.errors import BackendRejected, TransportError
from pressdesk.core.models import Pagination, Post, Subscriber, SubscriberPage
from pressdesk.core.notifications import Notifier


# ---------------------------------------------------------------------------
# Sample payloads (as the backend sends them)
# ---------------------------------------------------------------------------

def blog_payload(blog_id='abc123', title='Hello World', status='published', **extra):
    payload = {
        '_id': blog_id,
        'title': title,
        'status': status,
        'author': {'fullname': 'Ada Lovelace'},
        'category': {'name': 'News', 'color': '#ff0000'},
        'views': 42,
        'createdAt': '2024-03-05T10:00:00.000Z',
    }
    payload.update(extra)
    return payload


def subscriber_payload(subscriber_id='s1', email='ada@example.com', name='Ada', status='active'):
    return {
        '_id': subscriber_id,
        'email': email,
        'name': name,
        'status': status,
        'createdAt': '2024-01-15T08:30:00.000Z',
    }


def make_posts(*payloads):
    return [Post.from_api(p) for p in payloads]


def make_subscriber_page(subscribers, current=1, pages=1, total=None):
    subs = [Subscriber.from_api(p) for p in subscribers]
    return SubscriberPage(
        subscribers=subs,
        pagination=Pagination(current=current, pages=pages,
                              total=len(subs) if total is None else total),
    )


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------

class RecordingNotifier(Notifier):
    """Collects the toasts a user would have seen"""

    def __init__(self):
        self.successes = []
        self.errors = []

    def success(self, message):
        self.successes.append(message)

    def error(self, message):
        self.errors.append(message)


class FakeBackend:
    """In-memory stand-in for BackendClient that records every call"""

    def __init__(self):
        self.calls = []
        self.blogs = []
        self.subscriber_page = SubscriberPage()
        self.export_content = b'email,name,status\nada@example.com,Ada,active\n'
        self.failing = {}

    def fail(self, method, error=None):
        self.failing[method] = error or BackendRejected(f'{method} failed', status_code=500)

    def recover(self, method):
        self.failing.pop(method, None)

    def calls_to(self, method):
        return [call[1:] for call in self.calls if call[0] == method]

    def _record(self, method, *args):
        self.calls.append((method,) + args)
        if method in self.failing:
            raise self.failing[method]

    def list_blogs(self, status=None):
        self._record('list_blogs', status)
        return list(self.blogs)

    def delete_blog(self, blog_id):
        self._record('delete_blog', blog_id)

    def list_subscribers(self, page=1, status='all'):
        self._record('list_subscribers', page, status)
        return self.subscriber_page

    def delete_subscriber(self, subscriber_id):
        self._record('delete_subscriber', subscriber_id)

    def update_subscriber_status(self, subscriber_id, status):
        self._record('update_subscriber_status', subscriber_id, getattr(status, 'value', status))

    def export_subscribers(self):
        self._record('export_subscribers')
        return self.export_content


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def app(backend):
    """Flask app with PressDesk registered and the backend replaced by a fake"""
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["SECRET_KEY"] = "test-secret"
    app.config["PRESSDESK_API_URL"] = "http://backend.test/api"

    PressDesk(app, {'brand_name': 'Test Desk'})
    app.extensions['pressdesk'].client = backend
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def transport_error():
    return TransportError('connection refused')
