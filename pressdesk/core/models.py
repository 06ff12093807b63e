"""
PressDesk Models
================

Records mirrored from the backend. They are parsed from API payloads and
never created, cached or mutated client-side.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from .errors import InvalidStatus, MalformedResponse

ALL = 'all'


class PostStatus(str, Enum):
    """Blog post status."""

    PUBLISHED = "published"
    DRAFT = "draft"
    ARCHIVED = "archived"


class SubscriberStatus(str, Enum):
    """Newsletter subscriber status."""

    ACTIVE = "active"
    UNSUBSCRIBED = "unsubscribed"
    PENDING = "pending"


def parse_status(value, status_cls):
    """Return the ``status_cls`` member for ``value`` or raise InvalidStatus"""
    if isinstance(value, status_cls):
        return value
    try:
        return status_cls(value)
    except ValueError:
        allowed = ', '.join(s.value for s in status_cls)
        raise InvalidStatus(f"Invalid status '{value}' (expected one of: {allowed})")


def parse_status_filter(value, status_cls):
    """Parse a list filter: None for 'all' (or empty), else a status member"""
    if value is None or value == '' or value == ALL:
        return None
    return parse_status(value, status_cls)


def parse_timestamp(value):
    """Parse an ISO-8601 timestamp as sent by the backend, None if unreadable"""
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _record_id(payload):
    # Mongo-style backends send _id
    record_id = payload.get('_id', payload.get('id'))
    if record_id is None or record_id == '':
        raise MalformedResponse(f"Record without identifier: {payload!r}")
    return str(record_id)


def _status_from_payload(payload, status_cls):
    try:
        return parse_status(payload.get('status'), status_cls)
    except InvalidStatus as e:
        raise MalformedResponse(str(e)) from e


@dataclass(frozen=True)
class Author:
    fullname: Optional[str] = None

    @classmethod
    def from_api(cls, payload):
        if not isinstance(payload, dict):
            return None
        return cls(fullname=payload.get('fullname') or None)


@dataclass(frozen=True)
class Category:
    name: str
    color: Optional[str] = None

    @classmethod
    def from_api(cls, payload):
        if not isinstance(payload, dict) or not payload.get('name'):
            return None
        return cls(name=payload['name'], color=payload.get('color'))


@dataclass(frozen=True)
class Post:
    """A blog post as listed by the admin endpoint."""

    id: str
    title: str
    status: PostStatus
    author: Optional[Author] = None
    category: Optional[Category] = None
    views: int = 0
    created_at: Optional[datetime] = None
    featured_image: Optional[str] = None
    excerpt: Optional[str] = None

    @property
    def author_name(self):
        if self.author and self.author.fullname:
            return self.author.fullname
        return 'Unknown'

    @classmethod
    def from_api(cls, payload):
        if not isinstance(payload, dict):
            raise MalformedResponse(f"Expected a blog object, got {type(payload).__name__}")
        try:
            views = int(payload.get('views') or 0)
        except (TypeError, ValueError):
            views = 0
        return cls(
            id=_record_id(payload),
            title=payload.get('title') or '',
            status=_status_from_payload(payload, PostStatus),
            author=Author.from_api(payload.get('author')),
            category=Category.from_api(payload.get('category')),
            views=views,
            created_at=parse_timestamp(payload.get('createdAt')),
            featured_image=payload.get('featuredImage') or None,
            excerpt=payload.get('excerpt') or None,
        )


@dataclass(frozen=True)
class Subscriber:
    """A newsletter subscriber."""

    id: str
    email: str
    status: SubscriberStatus
    name: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def display_name(self):
        return self.name or 'Anonymous'

    @classmethod
    def from_api(cls, payload):
        if not isinstance(payload, dict):
            raise MalformedResponse(f"Expected a subscriber object, got {type(payload).__name__}")
        email = payload.get('email')
        if not email:
            raise MalformedResponse(f"Subscriber without email: {payload!r}")
        return cls(
            id=_record_id(payload),
            email=email,
            status=_status_from_payload(payload, SubscriberStatus),
            name=payload.get('name') or None,
            created_at=parse_timestamp(payload.get('createdAt')),
        )


@dataclass(frozen=True)
class Pagination:
    """Server-computed page cursor; the client only reflects it."""

    current: int = 1
    pages: int = 1
    total: int = 0

    @property
    def has_previous(self):
        return self.current > 1

    @property
    def has_next(self):
        return self.current < self.pages

    @property
    def is_paginated(self):
        return self.pages > 1

    @property
    def page_numbers(self):
        return list(range(1, self.pages + 1))

    @classmethod
    def from_api(cls, payload):
        if not isinstance(payload, dict):
            raise MalformedResponse("Missing pagination object")
        try:
            return cls(
                current=int(payload['current']),
                pages=int(payload['pages']),
                total=int(payload['total']),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedResponse(f"Bad pagination object: {payload!r}") from e


@dataclass(frozen=True)
class SubscriberPage:
    subscribers: List[Subscriber] = field(default_factory=list)
    pagination: Pagination = field(default_factory=Pagination)


@dataclass(frozen=True)
class ExportFile:
    filename: str
    content: bytes
    mimetype: str = 'text/csv'


def filter_subscribers(subscribers, query):
    """
    Case-insensitive substring search over email and name.

    Pure: works on the given page of subscribers only and never fetches.
    """
    needle = (query or '').lower()
    if not needle:
        return list(subscribers)
    return [
        s for s in subscribers
        if needle in s.email.lower() or (s.name and needle in s.name.lower())
    ]
