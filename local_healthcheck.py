"""Check that the Redis configured for the local environment is reachable

Reads the same configuration as the application (config/<APP_ENV>.yml plus
REDIS_* overrides), writes a probe key and reads it back.

Expect to see "localshortener: Redis at <host>:<port>/<db> OK" printed in
your local console.
"""

from localshortener.dao.redis import RedisKeyValueStore
from localshortener.dao.redis.helpers import describe_connection
from localshortener.utils import load_config, app_prefix


PROBE_VALUE = 'localshortener'


def main(redis_client=None) -> str:
    config = load_config()
    store = RedisKeyValueStore.from_config(config['redis'], redis_client=redis_client)

    probe_key = f'{app_prefix()}:healthcheck' if app_prefix() else 'healthcheck'
    value = store.set(probe_key, PROBE_VALUE).get(probe_key)
    store.remove(probe_key)

    status = 'OK' if value == PROBE_VALUE else f'unexpected probe value {value!r}'
    report = f'localshortener: Redis at {describe_connection(store.redis)} {status}'
    print(report)
    return report


if __name__ == '__main__':
    main()
