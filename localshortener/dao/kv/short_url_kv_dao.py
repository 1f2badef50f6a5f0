"""Data Access Object (DAO) implementation for managing shortened URLs in a key-value store

This module provides a key-value based implementation of ShortURLBaseDAO.

Storage layout (see KeySchema):
    <prefix>:shortened_urls_<owner>   -> JSON list of ShortURLModel documents
    <prefix>:shortcode_index          -> JSON object {shortcode: owner}

Records live in their owner's list so that an owner's statistics are a single
read. The shortcode index makes shortcodes unique across owners and lets any
visitor resolve any short link, whoever is logged in.

Every operation is a whole-document read-modify-write: load the list, mutate
it, serialize and store it back. Writes touching a list and the index go out
in one atomic store write. There is no locking, so two concurrent writers of
the same owner follow last-write-wins semantics.

Classes:
    ShortURLKeyValueDAO:
        DAO for storing and retrieving ShortURLModel in a key-value store.

Example:
    >>> dao = ShortURLKeyValueDAO(store=store, prefix='app:dev')
    >>> dao.insert(short_url, owner='user-1')
    <ShortURLKeyValueDAO>
    >>> dao.get('abc123').target
    'https://example.com/page'
    >>> len(dao.hit('abc123', referrer='Direct', location='Singapore').clicks)
    1
"""

import logging
from datetime import datetime

from beartype import beartype

from localshortener.constants import GUEST_OWNER, DIRECT_REFERRER
from localshortener.models import ShortURLModel, ClickEventModel
from localshortener.dao.base import ShortURLBaseDAO
from localshortener.dao.kv.mixins import KeyValueDocumentMixin
from localshortener.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError
from localshortener.utils.helpers import utcnow


logger = logging.getLogger(__name__)


class ShortURLKeyValueDAO(KeyValueDocumentMixin, ShortURLBaseDAO):
    """Key-value based Data Access Object (DAO) for managing short URL records

    Attributes (see KeyValueDocumentMixin):
        store (KeyValueBaseStore):
            Persistent key-value store.
        keys (KeySchema):
            Key schema helper for generating namespaced keys.
    """

    @beartype
    def all(self, owner: str = GUEST_OWNER) -> list[ShortURLModel]:
        """Return every readable record of `owner`, in insertion order

        Malformed records are skipped (and dropped on the next write of the list).
        """
        documents = self._load_document(self.keys.short_urls_key(owner), default=[])

        records = []
        for document in documents:
            try:
                records.append(ShortURLModel.from_dict(document))
            except (KeyError, TypeError, ValueError, AttributeError):
                logger.warning('Skipping malformed short URL record.', extra={'owner': owner, 'record': document})
        return records

    @beartype
    def insert(self, short_url: ShortURLModel, owner: str = GUEST_OWNER) -> 'ShortURLKeyValueDAO':
        """Append one short URL record to the owner's list (see insert_many)"""
        return self.insert_many([short_url], owner=owner)

    @beartype
    def insert_many(self, short_urls: list[ShortURLModel], owner: str = GUEST_OWNER) -> 'ShortURLKeyValueDAO':
        """Append short URL records to the owner's list and index their shortcodes

        Every touched list and the index go out in a single atomic store
        write: either the whole batch is stored and resolvable, or nothing is.

        A shortcode whose indexed record has expired (or vanished) is free. Its
        stale record is removed from the previous owner's list in the same write.

        Raises:
            ShortURLAlreadyExistsError:
                If a shortcode belongs to an unexpired record, or is repeated in the batch.
            DataStoreError:
                If the key-value store fails. Nothing is written then.
        """
        now = utcnow()
        index = self._index()
        lists = {owner: self.all(owner)}

        for short_url in short_urls:
            shortcode = short_url.shortcode
            previous_owner = index.get(shortcode)
            if previous_owner is not None:
                if previous_owner not in lists:
                    lists[previous_owner] = self.all(previous_owner)
                if any(r.shortcode == shortcode and r.expires_at > now for r in lists[previous_owner]):
                    raise ShortURLAlreadyExistsError(f"Short URL with code '{shortcode}' already exists.")

                lists[previous_owner] = [r for r in lists[previous_owner] if r.shortcode != shortcode]
                logger.debug('Reclaiming expired shortcode.', extra={'shortcode': shortcode, 'previous_owner': previous_owner})

            lists[owner].append(short_url)
            index[shortcode] = owner

        documents = {self.keys.short_urls_key(o): [r.to_dict() for r in records] for o, records in lists.items()}
        documents[self.keys.shortcode_index_key()] = index
        self._save_documents(documents)
        return self

    @beartype
    def get(self, shortcode: str) -> ShortURLModel:
        """Retrieve a stored short URL record by shortcode

        Raises:
            ShortURLNotFoundError:
                If the shortcode isn't indexed or its record is gone.
        """
        _, _, record = self._locate(shortcode)
        return record

    @beartype
    def exists(self, shortcode: str) -> bool:
        """Tell whether a shortcode is taken by an unexpired record

        Expired records keep their index entry until their owner is swept,
        but their shortcode can already be reused.
        """
        try:
            _, _, record = self._locate(shortcode)
        except ShortURLNotFoundError:
            return False
        return record.expires_at > utcnow()

    @beartype
    def owner(self, shortcode: str) -> str | None:
        return self._index().get(shortcode)

    @beartype
    def hit(self, shortcode: str, referrer: str = DIRECT_REFERRER, location: str = '') -> ShortURLModel:
        """Append a click event to a record and persist the owner's whole list

        Example:
            >>> dao.hit('abc123', referrer='https://news.ycombinator.com', location='London, UK')
            ShortURLModel(shortcode='abc123', ..., clicks=(ClickEventModel(...),))
        """
        owner, records, record = self._locate(shortcode)

        click = ClickEventModel(timestamp=utcnow(), referrer=referrer or DIRECT_REFERRER, location=location)
        updated = record.with_click(click)
        records = [updated if r.shortcode == shortcode else r for r in records]
        self._save(owner, records)
        return updated

    @beartype
    def sweep_expired(self, owner: str = GUEST_OWNER, now: datetime | None = None) -> list[ShortURLModel]:
        """Drop the owner's expired records and un-index their shortcodes

        A record is kept only if its `expires_at` is strictly after `now`.
        Dropped records are not archived.

        Returns:
            list[ShortURLModel]: the records which survived the sweep.
        """
        now = now or utcnow()
        records = self.all(owner)
        kept = [r for r in records if r.expires_at > now]
        expired = [r.shortcode for r in records if r.expires_at <= now]
        if not expired:
            return kept

        index = self._index()
        for shortcode in expired:
            if index.get(shortcode) == owner:
                del index[shortcode]

        self._save_documents(
            {
                self.keys.short_urls_key(owner): [r.to_dict() for r in kept],
                self.keys.shortcode_index_key(): index,
            }
        )
        logger.debug('Swept expired short URLs.', extra={'owner': owner, 'shortcodes': expired})
        return kept

    def _index(self) -> dict[str, str]:
        return self._load_document(self.keys.shortcode_index_key(), default={})

    def _save(self, owner: str, records: list[ShortURLModel]) -> None:
        self._save_document(self.keys.short_urls_key(owner), [r.to_dict() for r in records])

    def _locate(self, shortcode: str) -> tuple[str, list[ShortURLModel], ShortURLModel]:
        owner = self._index().get(shortcode)
        if owner is None:
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")

        records = self.all(owner)
        for record in records:
            if record.shortcode == shortcode:
                return owner, records, record
        raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")

    def __repr__(self) -> str:
        return f'<{type(self).__name__}>'
