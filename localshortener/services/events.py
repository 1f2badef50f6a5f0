"""Domain event log

The event log records what happened in the application (links created,
clicked, failed validations, errors) into a ring buffer persisted in the
key-value store. It is separate from process logging: recording an event
never fails the caller, persistence errors only reach the Python logger.

Classes:
    EventLogger:
        Facade over EventLogBaseDAO with one helper per event type.

Example:
    >>> events = EventLogger(EventLogKeyValueDAO(store=store))
    >>> events.url_created('abc123', 'https://example.com')
    >>> events.logs()[-1].message
    'URL shortened: https://example.com -> abc123'
"""

import logging
from typing import Any

from localshortener.constants import LogEventType, Limits
from localshortener.models import LogEventModel
from localshortener.dao.base import EventLogBaseDAO
from localshortener.dao.exceptions import DAOError
from localshortener.utils.helpers import utcnow


logger = logging.getLogger(__name__)


class EventLogger:
    def __init__(self, dao: EventLogBaseDAO, capacity: int = Limits.MAX_LOG_EVENTS):
        self.dao = dao
        self.capacity = capacity

    def record(self, type: LogEventType, message: str, data: Any = None) -> None:
        """Append an event to the log, keeping only the most recent `capacity` events

        Persistence failures are logged and swallowed.
        """
        event = LogEventModel(type=LogEventType(type), timestamp=utcnow(), message=message, data=data)
        try:
            self.dao.append(event, capacity=self.capacity)
        except DAOError:
            logger.warning(
                'Failed to persist event log entry.',
                exc_info=True,
                extra={'event_type': str(event.type), 'event_message': message},
            )

    def url_created(self, shortcode: str, long_url: str) -> None:
        self.record(
            LogEventType.URL_CREATED,
            f'URL shortened: {long_url} -> {shortcode}',
            {'shortcode': shortcode, 'longURL': long_url},
        )

    def url_clicked(self, shortcode: str, long_url: str, referrer: str) -> None:
        self.record(
            LogEventType.URL_CLICKED,
            f'URL clicked: {shortcode}',
            {'shortcode': shortcode, 'longURL': long_url, 'referrer': referrer},
        )

    def error(self, message: str, data: Any = None) -> None:
        self.record(LogEventType.ERROR, message, data)

    def validation_error(self, field: str, value: Any, reason: str) -> None:
        self.record(
            LogEventType.VALIDATION_ERROR,
            f'Validation failed for {field}: {reason}',
            {'field': field, 'value': value, 'reason': reason},
        )

    def logs(self) -> list[LogEventModel]:
        """Return a copy of the retained events, oldest first (empty if unreadable)"""
        try:
            return list(self.dao.all())
        except DAOError:
            logger.warning('Failed to read event log.', exc_info=True)
            return []

    def clear(self) -> None:
        try:
            self.dao.clear()
        except DAOError:
            logger.warning('Failed to clear event log.', exc_info=True)
