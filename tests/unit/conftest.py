from unittest.mock import MagicMock

import pytest
import redis

from localshortener.dao.redis import RedisKeyValueStore


@pytest.fixture
def app_prefix() -> str:
    return 'testapp:test'


@pytest.fixture
def redis_data() -> dict[str, str]:
    """Backing dictionary of the mocked Redis client."""
    return {}


@pytest.fixture
def redis_client(redis_data) -> redis.Redis:
    """Mock a Redis client whose GET/SET/DEL operate on `redis_data`.

    Transactions queue their SETs and replay them through `client.set` on
    EXEC, all or nothing: a `client.set.side_effect` failure leaves
    `redis_data` untouched.
    """
    client = MagicMock(
        spec=redis.Redis,
        connection_pool=MagicMock(spec=redis.ConnectionPool, connection_kwargs={'host': 'redis.test', 'port': 6379, 'db': 0}),
    )
    client.ping.return_value = True
    client.get.side_effect = lambda key: redis_data.get(key)
    client.set.side_effect = lambda key, value: redis_data.__setitem__(key, value) or True
    client.delete.side_effect = lambda *keys: sum(1 for key in keys if redis_data.pop(key, None) is not None)

    def pipeline(transaction=True):
        queued = []

        def execute():
            snapshot = dict(redis_data)
            try:
                return [client.set(key, value) for key, value in queued]
            except redis.exceptions.ResponseError as e:
                redis_data.clear()
                redis_data.update(snapshot)
                raise redis.exceptions.ExecAbortError(f'Transaction discarded because of previous errors: {e}') from e

        pipe = MagicMock(spec=redis.client.Pipeline)
        pipe.__enter__.return_value = pipe
        pipe.__exit__.return_value = False
        pipe.set.side_effect = lambda key, value: queued.append((key, value)) or pipe
        pipe.execute.side_effect = execute
        return pipe

    client.pipeline.side_effect = pipeline
    return client


@pytest.fixture
def store(redis_client) -> RedisKeyValueStore:
    return RedisKeyValueStore(redis_client=redis_client)
