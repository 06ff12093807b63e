"""
Backend API Client
==================

The only place PressDesk talks to the network. Wraps the REST backend's
admin endpoints and turns every failure into a BackendError subclass.
"""

import logging
from typing import List, Optional
from urllib.parse import quote

import requests

from .config import get_config_value
from .errors import BackendRejected, MalformedResponse, TransportError
from .logging_service import LoggingService
from .models import Post, Subscriber, SubscriberPage, Pagination, ALL

logger = logging.getLogger(__name__)


class BackendClient:
    """Client for the content backend's admin API"""

    def __init__(self, base_url: str, token: Optional[str] = None, timeout: int = 15,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip('/')
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls):
        """Build a client from app config > Config > env"""
        return cls(
            base_url=get_config_value('PRESSDESK_API_URL', 'http://localhost:5000/api'),
            token=get_config_value('PRESSDESK_API_TOKEN'),
            timeout=int(get_config_value('PRESSDESK_API_TIMEOUT', 15)),
        )

    # ===== Transport =====

    def _headers(self):
        headers = {'Accept': 'application/json'}
        if self.token:
            headers['Authorization'] = f'Bearer {self.token}'
        return headers

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, headers=self._headers(),
                                            timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"Backend {method} {path} failed: {e}")
            raise TransportError(f"{method} {path} failed: {e}") from e

        LoggingService.log_api_call('backend', path, method, response.status_code)

        if response.status_code >= 400:
            message = self._error_message(response) or f"HTTP {response.status_code}"
            logger.warning(f"Backend {method} {path} returned {response.status_code}: {message}")
            raise BackendRejected(message, status_code=response.status_code)

        return response

    @staticmethod
    def _error_message(response):
        try:
            payload = response.json()
        except ValueError:
            return None
        if isinstance(payload, dict):
            return payload.get('message') or payload.get('error')
        return None

    def _data(self, response: requests.Response) -> dict:
        """Unwrap a ``{success, data}`` envelope"""
        try:
            payload = response.json()
        except ValueError as e:
            raise MalformedResponse(f"Response from {response.url} is not JSON") from e

        if not isinstance(payload, dict):
            raise MalformedResponse(f"Unexpected response body: {payload!r}")
        if not payload.get('success'):
            raise BackendRejected(payload.get('message') or 'Request was not successful',
                                  status_code=response.status_code)

        data = payload.get('data')
        if not isinstance(data, dict):
            raise MalformedResponse("Response is missing its data object")
        return data

    def _check_mutation(self, response: requests.Response):
        """Mutations may reply with an empty body; honour an explicit success: false"""
        if not response.content:
            return
        try:
            payload = response.json()
        except ValueError:
            return
        if isinstance(payload, dict) and payload.get('success') is False:
            raise BackendRejected(payload.get('message') or 'Request was not successful',
                                  status_code=response.status_code)

    @staticmethod
    def _parse_rows(items, parse, label):
        """Parse list rows, skipping (and logging) any row that cannot be read"""
        rows = []
        for item in items:
            try:
                rows.append(parse(item))
            except MalformedResponse as e:
                logger.warning(f"Skipping unreadable {label}: {e}")
                LoggingService.warning('backend', f"Skipped unreadable {label}", {
                    'error': str(e), 'row': item
                })
        return rows

    # ===== Blog =====

    def list_blogs(self, status=None) -> List[Post]:
        """GET /blog/admin/all, filtered by status unless it is None/'all'"""
        params = {}
        if status is not None and status != ALL:
            params['status'] = getattr(status, 'value', status)

        data = self._data(self._request('GET', '/blog/admin/all', params=params))
        blogs = data.get('blogs')
        if not isinstance(blogs, list):
            raise MalformedResponse("Blog list response is missing 'blogs'")
        return self._parse_rows(blogs, Post.from_api, 'blog post')

    def delete_blog(self, blog_id):
        response = self._request('DELETE', f'/blog/admin/{quote(str(blog_id), safe="")}')
        self._check_mutation(response)

    # ===== Newsletter =====

    def list_subscribers(self, page=1, status=ALL) -> SubscriberPage:
        """GET /admin/newsletter with page and status (status always sent)"""
        params = {'page': int(page), 'status': getattr(status, 'value', status) or ALL}

        data = self._data(self._request('GET', '/admin/newsletter', params=params))
        subscribers = data.get('subscribers')
        if not isinstance(subscribers, list):
            raise MalformedResponse("Subscriber list response is missing 'subscribers'")
        return SubscriberPage(
            subscribers=self._parse_rows(subscribers, Subscriber.from_api, 'subscriber'),
            pagination=Pagination.from_api(data.get('pagination')),
        )

    def delete_subscriber(self, subscriber_id):
        response = self._request('DELETE', f'/admin/newsletter/{quote(str(subscriber_id), safe="")}')
        self._check_mutation(response)

    def update_subscriber_status(self, subscriber_id, status):
        value = getattr(status, 'value', status)
        response = self._request('PUT', f'/admin/newsletter/{quote(str(subscriber_id), safe="")}/status',
                                 json={'status': value})
        self._check_mutation(response)

    def export_subscribers(self) -> bytes:
        """GET /admin/newsletter/export, returns the raw CSV payload"""
        return self._request('GET', '/admin/newsletter/export').content


def get_backend_client():
    """The client registered by PressDesk on the current app, or one built from config"""
    from flask import current_app
    ext = current_app.extensions.get('pressdesk')
    if ext is not None and ext.client is not None:
        return ext.client
    return BackendClient.from_config()
