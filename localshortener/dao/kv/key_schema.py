import functools
from collections.abc import Callable


__all__ = ['KeySchema']  # hide internal decorator prefix_key from imports


def prefix_key(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> str:
        key = func(self, *args, **kwargs)
        return f'{self.prefix}:{key}' if self.prefix is not None else key

    return wrapper


class KeySchema:
    """Provide standardized keys for the namespaces of the key-value store.

    An optional prefix can be provided to namespace all generated keys.
    It is highly encouraged to set a custom prefix for each app and environment,
    e.g. "localshortener:prod" or "localshortener:dev".
    """

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = prefix

    @prefix_key
    def users_key(self) -> str:
        return 'users'

    @prefix_key
    def passwords_key(self) -> str:
        return 'demo_passwords'

    @prefix_key
    def current_user_key(self) -> str:
        return 'current_user'

    @prefix_key
    def short_urls_key(self, owner: str) -> str:
        return f'shortened_urls_{owner}'

    @prefix_key
    def shortcode_index_key(self) -> str:
        return 'shortcode_index'

    @prefix_key
    def logs_key(self) -> str:
        return 'logs'
