from localshortener.dao.redis.mixins import RedisClientMixin
from localshortener.dao.redis.redis_key_value_store import RedisKeyValueStore


__all__ = [
    'RedisClientMixin',
    'RedisKeyValueStore',
]
