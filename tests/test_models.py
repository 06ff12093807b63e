"""
Tests for the backend record models and the local subscriber search.
"""

from datetime import datetime, timezone

import pytest

from pressdesk.core.errors import InvalidStatus, MalformedResponse
from pressdesk.core.models import (
    Pagination, Post, PostStatus, Subscriber, SubscriberStatus,
    filter_subscribers, parse_status_filter, parse_timestamp,
)

from conftest import blog_payload, subscriber_payload


# ---------------------------------------------------------------------------
# 1. Post parsing
# ---------------------------------------------------------------------------

def test_post_from_api_reads_backend_fields():
    post = Post.from_api(blog_payload(featuredImage='/img/a.png', excerpt='Short'))

    assert post.id == 'abc123'
    assert post.status is PostStatus.PUBLISHED
    assert post.author_name == 'Ada Lovelace'
    assert post.category.name == 'News'
    assert post.category.color == '#ff0000'
    assert post.views == 42
    assert post.featured_image == '/img/a.png'
    assert post.created_at == datetime(2024, 3, 5, 10, 0, tzinfo=timezone.utc)


def test_post_without_author_or_category():
    post = Post.from_api(blog_payload(author=None, category=None))

    assert post.author_name == 'Unknown'
    assert post.category is None


def test_post_with_unknown_status_is_malformed():
    """Status is a closed set; anything else invalidates the payload."""
    with pytest.raises(MalformedResponse):
        Post.from_api(blog_payload(status='scheduled'))


def test_record_without_id_is_malformed():
    payload = blog_payload()
    del payload['_id']
    with pytest.raises(MalformedResponse):
        Post.from_api(payload)


def test_plain_id_field_is_accepted():
    payload = subscriber_payload()
    payload['id'] = payload.pop('_id')
    assert Subscriber.from_api(payload).id == 's1'


# ---------------------------------------------------------------------------
# 2. Subscriber parsing
# ---------------------------------------------------------------------------

def test_subscriber_display_name_falls_back_to_anonymous():
    sub = Subscriber.from_api(subscriber_payload(name=None))
    assert sub.display_name == 'Anonymous'
    assert sub.status is SubscriberStatus.ACTIVE


def test_subscriber_without_email_is_malformed():
    with pytest.raises(MalformedResponse):
        Subscriber.from_api(subscriber_payload(email=''))


# ---------------------------------------------------------------------------
# 3. Status filters
# ---------------------------------------------------------------------------

@pytest.mark.parametrize('value', [None, '', 'all'])
def test_all_filter_parses_to_none(value):
    assert parse_status_filter(value, PostStatus) is None


def test_filter_rejects_values_outside_the_enum():
    with pytest.raises(InvalidStatus):
        parse_status_filter('active', PostStatus)


def test_invalid_status_is_a_value_error():
    with pytest.raises(ValueError):
        parse_status_filter('bogus', SubscriberStatus)


# ---------------------------------------------------------------------------
# 4. Pagination
# ---------------------------------------------------------------------------

def test_middle_page_enables_previous_and_next():
    pagination = Pagination.from_api({'current': 2, 'pages': 3, 'total': 45})

    assert pagination.has_previous
    assert pagination.has_next
    assert pagination.is_paginated
    assert pagination.page_numbers == [1, 2, 3]


def test_first_and_last_pages():
    assert not Pagination(current=1, pages=3).has_previous
    assert not Pagination(current=3, pages=3).has_next
    assert not Pagination(current=1, pages=1).is_paginated


def test_pagination_missing_keys_is_malformed():
    with pytest.raises(MalformedResponse):
        Pagination.from_api({'current': 1})


# ---------------------------------------------------------------------------
# 5. Timestamps
# ---------------------------------------------------------------------------

def test_unreadable_timestamp_is_none():
    assert parse_timestamp('yesterday') is None
    assert parse_timestamp(None) is None


# ---------------------------------------------------------------------------
# 6. Local search
# ---------------------------------------------------------------------------

@pytest.fixture
def subscribers():
    return [
        Subscriber.from_api(subscriber_payload('s1', 'ada@example.com', 'Ada', 'active')),
        Subscriber.from_api(subscriber_payload('s2', 'GRACE@navy.mil', 'Grace Hopper', 'pending')),
        Subscriber.from_api(subscriber_payload('s3', 'anon@example.com', None, 'unsubscribed')),
    ]


def test_search_matches_email_case_insensitively(subscribers):
    assert [s.id for s in filter_subscribers(subscribers, 'navy')] == ['s2']
    assert [s.id for s in filter_subscribers(subscribers, 'EXAMPLE')] == ['s1', 's3']


def test_search_matches_name(subscribers):
    assert [s.id for s in filter_subscribers(subscribers, 'hopper')] == ['s2']


def test_search_skips_missing_names(subscribers):
    assert filter_subscribers(subscribers, 'anonymous') == []


def test_empty_search_returns_everything(subscribers):
    assert filter_subscribers(subscribers, '') == subscribers


def test_search_is_pure(subscribers):
    """Given S and q the result is exactly the matching subset; S is untouched."""
    before = list(subscribers)
    query = 'a'
    expected = [s for s in subscribers
                if query in s.email.lower() or (s.name and query in s.name.lower())]

    assert filter_subscribers(subscribers, query) == expected
    assert subscribers == before
