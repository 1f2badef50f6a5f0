"""Key-value implementation of EventLogBaseDAO

The whole log is one JSON list under `<prefix>:logs`, oldest event first.
Each append rewrites the list truncated to its `capacity` most recent events.
"""

import logging

from beartype import beartype

from localshortener.constants import Limits
from localshortener.models import LogEventModel
from localshortener.dao.base import EventLogBaseDAO
from localshortener.dao.kv.mixins import KeyValueDocumentMixin


logger = logging.getLogger(__name__)


class EventLogKeyValueDAO(KeyValueDocumentMixin, EventLogBaseDAO):
    @beartype
    def all(self) -> list[LogEventModel]:
        events = []
        for document in self._load_document(self.keys.logs_key(), default=[]):
            try:
                events.append(LogEventModel.from_dict(document))
            except (KeyError, TypeError, ValueError, AttributeError):
                logger.warning('Skipping malformed log event.', extra={'record': document})
        return events

    @beartype
    def append(self, event: LogEventModel, capacity: int = Limits.MAX_LOG_EVENTS) -> int:
        if capacity <= 0:
            raise ValueError(f'Capacity must be a positive integer (given: {capacity}).')

        documents = self._load_document(self.keys.logs_key(), default=[])
        documents.append(event.to_dict())
        documents = documents[-capacity:]
        self._save_document(self.keys.logs_key(), documents)
        return len(documents)

    @beartype
    def clear(self) -> 'EventLogKeyValueDAO':
        self.store.remove(self.keys.logs_key())
        return self

    def __repr__(self) -> str:
        return f'<{type(self).__name__}>'
