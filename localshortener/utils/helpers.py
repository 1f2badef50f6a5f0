"""Helper utilities shared by the storage layer, services and route handlers.

Functions:
    utcnow() -> datetime
        Current moment as a timezone-aware UTC datetime
    to_iso(dt: datetime) -> str
        Serialize a datetime as an ISO-8601 UTC string with millisecond precision
    from_iso(value: str) -> datetime
        Parse an ISO-8601 string (with 'Z' or offset) into an aware datetime
    base_url(event: dict) -> str
        Extract public base URL from a handler event
    get_short_url(shortcode: str, event: dict) -> str
        Get string representation of short URL for a given shortcode
    mock_location() -> str
        Pick a random location for a click event
    guarantee_500_response(handler) -> Callable
        Decorator: Turn unexpected handler exceptions into 500 responses

Example:
    >>> from localshortener.utils.helpers import base_url
    >>> base_url({'headers': {'Host': 'sho.rt'}})
    'https://sho.rt'

    >>> base_url({})
    'http://localhost:3000'
"""

import json
import random
import logging
import functools
from datetime import datetime, UTC
from typing import Any
from collections.abc import Callable

from localshortener.constants import MOCK_LOCATIONS, UNKNOWN_INTERNAL_SERVER_ERROR
from localshortener.utils.runtime import running_locally


logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    """Current UTC time, truncated to milliseconds (the precision of stored timestamps)"""
    now = datetime.now(UTC)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def to_iso(dt: datetime) -> str:
    """Serialize a datetime as ISO-8601 UTC with milliseconds and a trailing Z

    Example:
        >>> to_iso(datetime(2025, 10, 15, 12, 0, tzinfo=UTC))
        '2025-10-15T12:00:00.000Z'
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def from_iso(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into an aware UTC datetime

    Raises:
        ValueError:
            If the value is not a valid ISO-8601 timestamp.
    """
    dt = datetime.fromisoformat(value.replace('Z', '+00:00'))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def base_url(event: dict[str, Any]) -> str:
    """Extract public base URL from a handler event

    Uses the 'Host' header (and 'X-Forwarded-Proto' when present).
    Falls back to the local development server address.

    Args:
        event (dict): handler event object

    Returns:
        str: Base URL, e.g. "https://sho.rt"
    """
    headers = {k.lower(): v for k, v in (event.get('headers') or {}).items()}
    host = headers.get('host', '')
    scheme = headers.get('x-forwarded-proto', 'https')

    if host:
        return f'{scheme}://{host}'
    else:
        # Fallback: local invocation (tests, dev server, etc.)
        return 'http://localhost:3000'


def get_short_url(shortcode: str, event: dict[str, Any]) -> str:
    """Get string representation of shortened URL

    Args:
        shortcode (str): shortcode
        event (dict): handler event object

    Returns:
        str: short url string representation
    """
    return f'{base_url(event).rstrip("/")}/{shortcode}'


def mock_location() -> str:
    """Return a random location for a click event (geolocation is mocked)"""
    return random.choice(MOCK_LOCATIONS)  # noqa: S311


def guarantee_500_response(handler: Callable) -> Callable:
    """Decorator: respond with 500 when a handler raises an unexpected exception

    When running locally the original exception is re-raised instead, so the
    traceback reaches the developer.
    """

    @functools.wraps(handler)
    def wrapper(event, *args, **kwargs):
        try:
            return handler(event, *args, **kwargs)
        except Exception:
            if running_locally():
                raise
            logger.exception('Unhandled exception in route handler. Responding with 500.', extra={'handler': handler.__name__})
            return {
                'statusCode': 500,
                'headers': {'Content-Type': 'application/json'},
                'body': json.dumps(
                    {
                        'message': 'Internal Server Error',
                        'errorCode': UNKNOWN_INTERNAL_SERVER_ERROR,
                    }
                ),
            }

    return wrapper
