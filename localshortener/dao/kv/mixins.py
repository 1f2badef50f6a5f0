"""Key-value mixin providing JSON document access for DAOs.

Responsibilities:
    - Hold the key-value store and the key schema
    - Read namespaces as JSON documents, degrading to a default on corruption
    - Write namespaces as compact JSON documents, one or several at once

Classes:
    - KeyValueDocumentMixin: Base mixin for DAOs persisting whole JSON documents.

Example:
    Typical usage with a DAO implementation:

        >>> class UserKeyValueDAO(KeyValueDocumentMixin, UserBaseDAO):
        ...     pass
        ...
        >>> dao = UserKeyValueDAO(store=store, prefix='myapp:prod')
        >>> dao.keys.users_key()
        'myapp:prod:users'
"""

import json
import logging
from typing import Any, Optional

from localshortener.dao.base import KeyValueBaseStore
from localshortener.dao.kv.key_schema import KeySchema


logger = logging.getLogger(__name__)


class KeyValueDocumentMixin:
    """Mixin JSON (de)serialization of whole namespaces for key-value backed DAOs.

    Attributes:
        store (KeyValueBaseStore):
            Persistent key-value store.

        keys (KeySchema):
            Helper class for generating namespaced key names.
    """

    def __init__(self, store: KeyValueBaseStore, prefix: Optional[str] = None):
        self.store = store
        self.keys = KeySchema(prefix=prefix)

    def _load_document(self, key: str, default: Any) -> Any:
        """Read and parse the JSON document stored under `key`

        Returns `default` when the key is absent, when the value isn't valid
        JSON, or when the parsed value has a different type than `default`.
        Connectivity failures (DataStoreError) are not swallowed.
        """
        blob = self.store.get(key)
        if blob is None:
            return default

        try:
            document = json.loads(blob)
        except json.JSONDecodeError:
            logger.warning('Discarding unparsable document.', extra={'key': key})
            return default

        if not isinstance(document, type(default)):
            logger.warning(
                'Discarding document of unexpected type.',
                extra={'key': key, 'expected': type(default).__name__, 'given': type(document).__name__},
            )
            return default
        return document

    def _save_document(self, key: str, document: Any) -> None:
        self.store.set(key, _dump(document))

    def _save_documents(self, documents: dict[str, Any]) -> None:
        """Write several documents in one atomic store write"""
        self.store.set_many({key: _dump(document) for key, document in documents.items()})


def _dump(document: Any) -> str:
    return json.dumps(document, separators=(',', ':'), ensure_ascii=False)
