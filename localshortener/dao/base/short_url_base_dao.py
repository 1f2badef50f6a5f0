"""Abstract base class for ShortURL data access objects (DAOs).

This class establishes a consistent contract for all ShortURL DAO implementations,
regardless of the underlying storage layout.

Responsibilities:
    - Store short URL records per owner (user id or 'guest').
    - Resolve shortcodes globally, across all owners.
    - Append click events and sweep expired records.

Example:
    Typical usage with a key-value backed implementation:

        >>> from localshortener.dao.kv import ShortURLKeyValueDAO
        >>> dao = ShortURLKeyValueDAO(store=store)

        >>> dao.insert(short_url, owner='user-1')
        >>> retrieved = dao.get('a1b2c3')
        >>> print(retrieved.target)
        https://example.com/blog/article-123

        >>> updated = dao.hit('a1b2c3', referrer='Direct', location='Tokyo, Japan')
        >>> len(updated.clicks)
        1
"""

from abc import ABC, abstractmethod
from datetime import datetime

from localshortener.constants import GUEST_OWNER, DIRECT_REFERRER
from localshortener.models import ShortURLModel


class ShortURLBaseDAO(ABC):
    """Interface for ShortURL data access objects (DAOs).

    Methods:
        all(owner: str) -> list[ShortURLModel]:
            Return every record of an owner, in insertion order.

        insert(short_url: ShortURLModel, owner: str) -> ShortURLBaseDAO:
            Append a new record to the owner's records.
            Raises ShortURLAlreadyExistsError if the shortcode is taken.

        insert_many(short_urls: list[ShortURLModel], owner: str) -> ShortURLBaseDAO:
            Append several records at once, all or nothing.
            Raises ShortURLAlreadyExistsError if any shortcode is taken.

        get(shortcode: str) -> ShortURLModel:
            Retrieve a record by shortcode, whoever owns it.
            Raises ShortURLNotFoundError if the shortcode doesn't exist.

        exists(shortcode: str) -> bool:
            Tell whether a shortcode is taken by an unexpired record of any owner.
            Shortcodes of expired records are free for reuse.

        owner(shortcode: str) -> str | None:
            Return the owner of a shortcode, None if it doesn't exist.

        hit(shortcode: str, referrer: str, location: str) -> ShortURLModel:
            Append a click event and return the updated record.
            Raises ShortURLNotFoundError if the shortcode doesn't exist.

        sweep_expired(owner: str, now: datetime | None) -> list[ShortURLModel]:
            Drop the owner's expired records and return the remaining ones.

    All methods raise DataStoreError on connection, read or write failure.

    NOTE:
        - Records are immutable apart from their append-only click events.
          There is no manual deletion, records only leave through the sweep.
    """

    @abstractmethod
    def all(self, owner: str = GUEST_OWNER) -> list[ShortURLModel]:
        pass

    @abstractmethod
    def insert(self, short_url: ShortURLModel, owner: str = GUEST_OWNER) -> 'ShortURLBaseDAO':
        """Insert a new ShortURLModel into the owner's records.

        Args:
            short_url (ShortURLModel):
                The ShortURLModel instance to be inserted.

            owner (str):
                User id of the creator, 'guest' when anonymous.

        Returns:
            ShortURLBaseDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If a ShortURLModel with the same shortcode already exists

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def insert_many(self, short_urls: list[ShortURLModel], owner: str = GUEST_OWNER) -> 'ShortURLBaseDAO':
        """Insert a batch of ShortURLModel into the owner's records.

        Either every record is stored or, when an error is raised, none is.

        Raises:
            ShortURLAlreadyExistsError:
                If any shortcode is taken (or repeated in the batch).

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, shortcode: str) -> ShortURLModel:
        """Retrieve a ShortURLModel from the data store by its shortcode.

        Raises:
            ShortURLNotFoundError:
                If no ShortURLModel with the given shortcode exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def exists(self, shortcode: str) -> bool:
        pass

    @abstractmethod
    def owner(self, shortcode: str) -> str | None:
        pass

    @abstractmethod
    def hit(self, shortcode: str, referrer: str = DIRECT_REFERRER, location: str = '') -> ShortURLModel:
        """Append a click event with the current timestamp to a record.

        Previously recorded clicks are left untouched and keep their order.

        Returns:
            ShortURLModel: the updated record.

        Raises:
            ShortURLNotFoundError:
                If no ShortURLModel with the given shortcode exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def sweep_expired(self, owner: str = GUEST_OWNER, now: datetime | None = None) -> list[ShortURLModel]:
        """Keep only the owner's records whose expiry is strictly after `now`.

        Returns:
            list[ShortURLModel]: the records which survived the sweep.
        """
        pass
