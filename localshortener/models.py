"""Data models persisted in the key-value store.

Every model is a frozen dataclass. `to_dict()` / `from_dict()` convert to and
from the JSON wire format: camelCase keys and ISO-8601 UTC timestamps.

Example:
    >>> from datetime import timedelta
    >>> from localshortener.utils import utcnow
    >>> now = utcnow()
    >>> url = ShortURLModel(
    ...     shortcode='abc123',
    ...     target='https://example.com/article/123',
    ...     created_at=now,
    ...     expires_at=now + timedelta(minutes=30),
    ...     validity_period=30,
    ... )
    >>> url.to_dict()['longURL']
    'https://example.com/article/123'
    >>> url.is_expired(now)
    False
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any

from localshortener.constants import LogEventType, DIRECT_REFERRER
from localshortener.utils.helpers import to_iso, from_iso, utcnow


# fmt: off
@dataclass(frozen=True)
class UserModel:
    id: str                 # Opaque unique identifier
    email: str              # Unique, case-sensitive login
    name: str               # Display name
    created_at: datetime    # Registration time
# fmt: on

    def to_dict(self) -> dict[str, Any]:
        return {
            'id': self.id,
            'email': self.email,
            'name': self.name,
            'createdAt': to_iso(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'UserModel':
        return cls(
            id=data['id'],
            email=data['email'],
            name=data['name'],
            created_at=from_iso(data['createdAt']),
        )


# fmt: off
@dataclass(frozen=True)
class ClickEventModel:
    timestamp: datetime                 # Time of the click
    referrer: str = DIRECT_REFERRER     # Referring page, 'Direct' when unknown
    location: str = ''                  # Mocked geolocation
# fmt: on

    def to_dict(self) -> dict[str, Any]:
        return {
            'timestamp': to_iso(self.timestamp),
            'referrer': self.referrer,
            'location': self.location,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'ClickEventModel':
        return cls(
            timestamp=from_iso(data['timestamp']),
            referrer=data.get('referrer') or DIRECT_REFERRER,
            location=data.get('location', ''),
        )


@dataclass(frozen=True)
class ShortURLModel:
    """Represent a shortened URL mapping.

    Attributes:
        shortcode (str):
            The unique short identifier representing the shortened URL.
        target (str):
            The original long URL that the shortcode redirects to.
        created_at (datetime):
            Creation time of the mapping.
        expires_at (datetime):
            `created_at + validity_period` minutes. The mapping is swept
            once this moment has passed.
        validity_period (int):
            Lifetime of the mapping in minutes (1..43200).
        clicks (tuple[ClickEventModel, ...]):
            Click events in chronological (append) order.
    """

    shortcode: str
    target: str
    created_at: datetime
    expires_at: datetime
    validity_period: int
    clicks: tuple[ClickEventModel, ...] = field(default_factory=tuple)

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or utcnow()) > self.expires_at

    def with_click(self, click: ClickEventModel) -> 'ShortURLModel':
        """Return a copy with `click` appended to the click events"""
        return replace(self, clicks=(*self.clicks, click))

    def to_dict(self) -> dict[str, Any]:
        return {
            'shortcode': self.shortcode,
            'longURL': self.target,
            'createdAt': to_iso(self.created_at),
            'expiresAt': to_iso(self.expires_at),
            'validityPeriod': self.validity_period,
            'clicks': [click.to_dict() for click in self.clicks],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'ShortURLModel':
        return cls(
            shortcode=data['shortcode'],
            target=data['longURL'],
            created_at=from_iso(data['createdAt']),
            expires_at=from_iso(data['expiresAt']),
            validity_period=int(data['validityPeriod']),
            clicks=tuple(ClickEventModel.from_dict(click) for click in data.get('clicks') or []),
        )


# fmt: off
@dataclass(frozen=True)
class LogEventModel:
    type: LogEventType      # Kind of domain event
    timestamp: datetime     # Time the event was recorded
    message: str            # Human readable summary
    data: Any = None        # Arbitrary JSON-serializable payload
# fmt: on

    def to_dict(self) -> dict[str, Any]:
        return {
            'type': str(self.type),
            'timestamp': to_iso(self.timestamp),
            'message': self.message,
            'data': self.data,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'LogEventModel':
        return cls(
            type=LogEventType(data['type']),
            timestamp=from_iso(data['timestamp']),
            message=data['message'],
            data=data.get('data'),
        )
