"""Input validation and sanitization

All validators are pure predicates: they return a boolean and never raise on
bad input. When an event logger is given, a failed check is also recorded as a
VALIDATION_ERROR event in the domain event log.

Functions:
    validate_url(url, events=None) -> bool
    validate_validity_period(period, events=None) -> bool
    validate_shortcode(shortcode, events=None) -> bool
    parse_validity_period(period) -> int | None
    is_reserved_shortcode(shortcode) -> bool
    sanitize_url(url) -> str

Example:
    >>> validate_url(sanitize_url('  example.com/page '))
    True
    >>> validate_validity_period('43201')
    False
    >>> validate_shortcode('abc!23')
    False
"""

import re
import logging
from urllib.parse import urlsplit

from localshortener.constants import TTL, Limits, RESERVED_SHORTCODES


logger = logging.getLogger(__name__)

SHORTCODE_PATTERN = re.compile(rf'[A-Za-z0-9]{{{Limits.SHORTCODE_MIN_LENGTH},{Limits.SHORTCODE_MAX_LENGTH}}}')
_LEADING_INTEGER = re.compile(r'^\s*([+-]?\d+)')
_WHITESPACE = re.compile(r'\s')


def _reject(events, field: str, value: str, reason: str) -> bool:
    logger.debug('Validation failed for %s: %s', field, reason, extra={'field': field, 'value': value})
    if events is not None:
        events.validation_error(field, value, reason)
    return False


def validate_url(url: str, events=None) -> bool:
    """Check that `url` parses as an absolute URL with a scheme and a host

    Args:
        url (str):
            URL to check (usually sanitized first).
        events (EventLogger, optional):
            Domain event logger receiving a VALIDATION_ERROR on failure.
    """
    reason = 'Invalid URL format'
    try:
        components = urlsplit(url)
        components.port  # raises ValueError on a malformed port
    except (ValueError, TypeError, AttributeError):
        return _reject(events, 'url', url, reason)

    if not components.scheme or not components.netloc or not components.hostname:
        return _reject(events, 'url', url, reason)
    if _WHITESPACE.search(components.netloc):
        return _reject(events, 'url', url, reason)
    return True


def parse_validity_period(period: str | int) -> int | None:
    """Parse the leading integer of `period`, None if there is none

    Example:
        >>> parse_validity_period('30')
        30
        >>> parse_validity_period('12min')
        12
        >>> parse_validity_period('abc') is None
        True
    """
    if isinstance(period, bool):
        return None
    if isinstance(period, int):
        return period
    match = _LEADING_INTEGER.match(period or '')
    return int(match.group(1)) if match else None


def validate_validity_period(period: str | int, events=None) -> bool:
    """Check that `period` is an integer number of minutes in 1..43200 (30 days)"""
    minutes = parse_validity_period(period)
    if minutes is None or not 1 <= minutes <= TTL.MAX_VALIDITY_MINUTES:
        return _reject(
            events,
            'validityPeriod',
            str(period),
            f'Must be a positive integer between 1 and {TTL.MAX_VALIDITY_MINUTES} minutes',
        )
    return True


def validate_shortcode(shortcode: str, events=None) -> bool:
    """Check that `shortcode` is 4 to 10 alphanumeric characters"""
    if not isinstance(shortcode, str) or not SHORTCODE_PATTERN.fullmatch(shortcode):
        return _reject(
            events,
            'shortcode',
            str(shortcode),
            f'Must be {Limits.SHORTCODE_MIN_LENGTH}-{Limits.SHORTCODE_MAX_LENGTH} alphanumeric characters',
        )
    return True


def is_reserved_shortcode(shortcode: str) -> bool:
    """Tell whether `shortcode` collides with a route path (/login, /stats, ...)"""
    return shortcode.lower() in RESERVED_SHORTCODES


def sanitize_url(url: str) -> str:
    """Trim whitespace and default to https:// when no http(s) scheme is given

    Sanitizing an already sanitized URL returns it unchanged.
    """
    url = url.strip()
    if not url.startswith(('http://', 'https://')):
        url = f'https://{url}'
    return url
