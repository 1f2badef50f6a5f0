"""Unit tests for the persisted data models.

Test coverage includes:

1. Wire format
   - Ensures models serialize to camelCase keys and ISO-8601 UTC timestamps.
   - Ensures documents written by other clients (missing optional keys) parse.

2. ShortURLModel behavior
   - Expiry check and click appending.

3. Immutability
"""

import dataclasses
from datetime import datetime, timedelta, UTC

import pytest

from localshortener.constants import LogEventType
from localshortener.models import UserModel, ClickEventModel, ShortURLModel, LogEventModel


NOW = datetime(2025, 10, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
def short_url() -> ShortURLModel:
    return ShortURLModel(
        shortcode='abc123',
        target='https://example.com/blog/article-123',
        created_at=NOW,
        expires_at=NOW + timedelta(minutes=30),
        validity_period=30,
    )


# -------------------------------
# 1. Wire format
# -------------------------------


def test_short_url_to_dict(short_url):
    assert short_url.to_dict() == {
        'shortcode': 'abc123',
        'longURL': 'https://example.com/blog/article-123',
        'createdAt': '2025-10-15T12:00:00.000Z',
        'expiresAt': '2025-10-15T12:30:00.000Z',
        'validityPeriod': 30,
        'clicks': [],
    }


def test_short_url_from_dict_with_clicks():
    record = ShortURLModel.from_dict(
        {
            'shortcode': 'abc123',
            'longURL': 'https://example.com',
            'createdAt': '2025-10-15T12:00:00.000Z',
            'expiresAt': '2025-10-15T12:30:00.000Z',
            'validityPeriod': 30,
            'clicks': [
                {'timestamp': '2025-10-15T12:01:00.000Z', 'referrer': 'https://news.ycombinator.com', 'location': 'Tokyo, Japan'},
                {'timestamp': '2025-10-15T12:02:00.000Z'},
            ],
        }
    )

    assert record.expires_at == NOW + timedelta(minutes=30)
    assert record.clicks[0] == ClickEventModel(NOW + timedelta(minutes=1), 'https://news.ycombinator.com', 'Tokyo, Japan')
    assert record.clicks[1].referrer == 'Direct'
    assert record.clicks[1].location == ''


def test_short_url_from_dict_missing_key():
    with pytest.raises(KeyError):
        ShortURLModel.from_dict({'shortcode': 'abc123'})


def test_user_round_trip():
    user = UserModel(id='demo-user-1', email='demo@example.com', name='Demo User', created_at=NOW)

    assert user.to_dict() == {'id': 'demo-user-1', 'email': 'demo@example.com', 'name': 'Demo User', 'createdAt': '2025-10-15T12:00:00.000Z'}
    assert UserModel.from_dict(user.to_dict()) == user


def test_log_event_to_dict():
    event = LogEventModel(type=LogEventType.URL_CLICKED, timestamp=NOW, message='URL clicked: abc123', data={'shortcode': 'abc123'})

    assert event.to_dict() == {
        'type': 'URL_CLICKED',
        'timestamp': '2025-10-15T12:00:00.000Z',
        'message': 'URL clicked: abc123',
        'data': {'shortcode': 'abc123'},
    }


def test_log_event_unknown_type():
    with pytest.raises(ValueError):
        LogEventModel.from_dict({'type': 'SOMETHING', 'timestamp': '2025-10-15T12:00:00.000Z', 'message': ''})


# -------------------------------
# 2. ShortURLModel behavior
# -------------------------------


def test_is_expired(short_url):
    assert not short_url.is_expired(NOW)
    assert not short_url.is_expired(short_url.expires_at)
    assert short_url.is_expired(short_url.expires_at + timedelta(milliseconds=1))


def test_with_click_appends_without_touching_original(short_url):
    first = ClickEventModel(timestamp=NOW + timedelta(minutes=1))
    second = ClickEventModel(timestamp=NOW + timedelta(minutes=2), referrer='https://t.co', location='London, UK')

    once = short_url.with_click(first)
    twice = once.with_click(second)

    assert short_url.clicks == ()
    assert once.clicks == (first,)
    assert twice.clicks == (first, second)


# -------------------------------
# 3. Immutability
# -------------------------------


def test_models_are_frozen(short_url):
    with pytest.raises(dataclasses.FrozenInstanceError):
        short_url.target = 'https://evil.example.com'
