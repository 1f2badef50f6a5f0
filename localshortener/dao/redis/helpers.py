import functools
import redis
from typing import TypeVar, Any
from collections.abc import Callable

from localshortener.dao.exceptions import DataStoreError


__all__ = ['handle_redis_connection_error', 'describe_connection']

F = TypeVar('F', bound=Callable[..., Any])


def describe_connection(client: redis.Redis) -> str:
    """Return '<host>:<port>/<db>' of a Redis client's connection pool"""
    info = client.connection_pool.connection_kwargs
    return f'{info.get("host")}:{info.get("port")}/{info.get("db")}'


def handle_redis_connection_error[F](method: F) -> F:
    """Wrap Redis-interacting methods to handle connection and command errors

    Args:
        method (Callable[..., Any]):
            Method performing Redis operations which may raise redis.exceptions.ConnectionError,
            redis.exceptions.TimeoutError or redis.exceptions.ResponseError (e.g. OOM on writes).

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on any of these Redis failures.

    Example:
        >>> @handle_redis_connection_error
        ... def get(self, key):
        ...     return self.redis.get(key)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            raise DataStoreError(f"Can't connect to Redis at {describe_connection(self.redis)}.") from e
        except redis.exceptions.ResponseError as e:
            raise DataStoreError(f'Redis at {describe_connection(self.redis)} rejected the command: {e}') from e

    return wrapper
