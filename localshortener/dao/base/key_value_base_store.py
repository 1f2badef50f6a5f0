"""Abstract base class for persistent key-value stores.

The key-value store is the only persistence primitive of the application.
Every namespace (users, credentials, current user pointer, per-owner short URL
lists, the event log) is a single string value under a single key, so a
backend only has to provide four operations.

Responsibilities:
    - Read, write and delete string values by key.
    - Translate backend-specific failures into DataStoreError.

Example:
    >>> from localshortener.dao.redis import RedisKeyValueStore
    >>> store = RedisKeyValueStore.from_config({'host': 'localhost'})
    >>> store.set('greeting', 'hello').get('greeting')
    'hello'
    >>> store.remove('greeting').get('greeting') is None
    True
"""

from abc import ABC, abstractmethod


class KeyValueBaseStore(ABC):
    """Interface for string-keyed persistent stores.

    Methods:
        get(key: str) -> str | None:
            Return the value stored under `key`, None if absent.
            Raises DataStoreError on connection or read failure.

        set(key: str, value: str) -> KeyValueBaseStore:
            Store `value` under `key`, replacing any previous value.
            Raises DataStoreError on connection or write failure.

        remove(key: str) -> KeyValueBaseStore:
            Delete `key`. Removing a missing key is a no-op.
            Raises DataStoreError on connection or write failure.

        set_many(items: dict[str, str]) -> KeyValueBaseStore:
            Store several values at once, all or nothing.
            Raises DataStoreError on connection or write failure.

    NOTE:
        - There is no versioning: concurrent writers of the same key follow
          last-write-wins semantics.
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the value stored under `key`, or None if the key doesn't exist."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> 'KeyValueBaseStore':
        """Store `value` under `key`.

        Returns:
            KeyValueBaseStore: self (for method chaining)
        """
        pass

    @abstractmethod
    def remove(self, key: str) -> 'KeyValueBaseStore':
        """Delete `key` if it exists.

        Returns:
            KeyValueBaseStore: self (for method chaining)
        """
        pass

    @abstractmethod
    def set_many(self, items: dict[str, str]) -> 'KeyValueBaseStore':
        """Store every `key: value` pair of `items` atomically.

        When the write fails no key is changed.

        Returns:
            KeyValueBaseStore: self (for method chaining)
        """
        pass
