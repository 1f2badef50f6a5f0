"""Redis client construction shared by Redis-backed stores.

A store either receives a ready client (tests, callers sharing a connection
pool) or builds one from the `redis` section of the application
configuration. Either way the client is pinged once on construction, so a
misconfigured store fails at startup rather than on the first request.

Functions:
    connect(host, port, db, username, password, decode_responses) -> redis.Redis
        Build a Redis client from connection settings.

Classes:
    RedisClientMixin:
        Holds the client of a store; `from_config()` and `ping()`.

Example:
    >>> store = RedisKeyValueStore.from_config({'host': 'localhost', 'port': 6379, 'db': 0})
    >>> store.ping()
    True
"""

from typing import Any, Optional

import redis

from localshortener.dao.exceptions import DataStoreError
from localshortener.dao.redis.helpers import describe_connection


def connect(
    host: str = 'localhost',
    port: int | str = 6379,
    db: int | str = 0,
    username: Optional[str] = None,
    password: Optional[str] = None,
    decode_responses: bool = True,
) -> redis.Redis:
    """Build a Redis client (no connection is opened until the first command)

    `port` and `db` may be given as strings, as read from the environment.
    """
    return redis.Redis(
        host=host,
        port=int(port),
        db=int(db),
        username=username,
        password=password,
        decode_responses=decode_responses,
    )


class RedisClientMixin:
    """Redis client holder for stores

    Attributes:
        redis (redis.Redis):
            Client used by the store's commands.
    """

    def __init__(self, redis_client: Optional[redis.Redis] = None, **connection: Any):
        """
        Args:
            redis_client (redis.Redis, optional):
                Pre-built client. When None, one is built from `connection`.
            **connection:
                Keyword arguments of `connect()`.

        Raises:
            DataStoreError:
                If Redis doesn't answer the initial PING.
        """
        self.redis = redis_client if redis_client is not None else connect(**connection)
        self.ping()

    @classmethod
    def from_config(cls, redis_config: dict[str, Any], redis_client: Optional[redis.Redis] = None):
        """Build a store from the `redis` section of the configuration

        Example:
            >>> RedisKeyValueStore.from_config(load_config()['redis'])
            <RedisKeyValueStore>
        """
        return cls(redis_client=redis_client, **redis_config)

    def ping(self, raise_error: bool = True) -> bool:
        """PING Redis

        Returns:
            bool: True when Redis answered. False on connectivity failure,
                  when `raise_error` is False.

        Raises:
            DataStoreError:
                On connectivity failure, when `raise_error` is True.
        """
        try:
            self.redis.ping()
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            if not raise_error:
                return False
            raise DataStoreError(f"Can't connect to Redis at {describe_connection(self.redis)}. Check the redis configuration.") from e
        return True
