"""Redis implementation of the key-value store

Each namespace of the application is one Redis string. Values are written
with plain SET/GET/DEL, and with MULTI/EXEC when several namespaces have to
change together. There is no TTL: expiry of short URLs is handled by the
sweep in the DAO layer.

Classes:
    RedisKeyValueStore:
        KeyValueBaseStore backed by a Redis client.

Example:
    >>> store = RedisKeyValueStore.from_config({'host': 'localhost', 'db': 2})
    >>> store.set('localshortener:local:logs', '[]')
    <RedisKeyValueStore>
    >>> store.get('localshortener:local:logs')
    '[]'
"""

from beartype import beartype

from localshortener.dao.base import KeyValueBaseStore
from localshortener.dao.redis.mixins import RedisClientMixin
from localshortener.dao.redis.helpers import handle_redis_connection_error


class RedisKeyValueStore(RedisClientMixin, KeyValueBaseStore):
    """Redis-based key-value store

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.

    Methods:
        get(key: str) -> str | None:
            GET a key. Raises DataStoreError on connectivity issues with Redis.

        set(key: str, value: str) -> RedisKeyValueStore:
            SET a key. Raises DataStoreError on connectivity issues or rejected writes (OOM).

        remove(key: str) -> RedisKeyValueStore:
            DEL a key. Raises DataStoreError on connectivity issues with Redis.

        set_many(items: dict[str, str]) -> RedisKeyValueStore:
            SET several keys in one MULTI/EXEC transaction. Either every key is
            written or none is (Redis discards the whole transaction on OOM).
    """

    @handle_redis_connection_error
    @beartype
    def get(self, key: str) -> str | None:
        value = self.redis.get(key)
        if isinstance(value, bytes):  # client created with decode_responses=False
            value = value.decode('utf-8')
        return value

    @handle_redis_connection_error
    @beartype
    def set(self, key: str, value: str) -> 'RedisKeyValueStore':
        self.redis.set(key, value)
        return self

    @handle_redis_connection_error
    @beartype
    def remove(self, key: str) -> 'RedisKeyValueStore':
        self.redis.delete(key)
        return self

    @handle_redis_connection_error
    @beartype
    def set_many(self, items: dict[str, str]) -> 'RedisKeyValueStore':
        # NOTE: redis-py raises ExecAbortError (a ResponseError) when a queued
        #       SET is rejected, and nothing in the transaction is applied
        with self.redis.pipeline(transaction=True) as pipe:
            for key, value in items.items():
                pipe.set(key, value)
            pipe.execute()
        return self

    def __repr__(self) -> str:
        return f'<{type(self).__name__}>'
