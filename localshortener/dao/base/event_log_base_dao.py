from abc import ABC, abstractmethod

from localshortener.constants import Limits
from localshortener.models import LogEventModel


class EventLogBaseDAO(ABC):
    """Interface for the ring-buffered domain event log.

    Methods:
        all() -> list[LogEventModel]:
            Return retained events, oldest first.

        append(event: LogEventModel, capacity: int) -> int:
            Append an event, keep only the `capacity` most recent ones.
            Returns the number of retained events.

        clear() -> EventLogBaseDAO:
            Drop every event.
    """

    @abstractmethod
    def all(self) -> list[LogEventModel]:
        pass

    @abstractmethod
    def append(self, event: LogEventModel, capacity: int = Limits.MAX_LOG_EVENTS) -> int:
        pass

    @abstractmethod
    def clear(self) -> 'EventLogBaseDAO':
        pass
