"""Runtime utilities

Functions:
    running_locally() -> bool:
        True if the application runs in the local development environment, False otherwise.

Example:
    >>> from localshortener.utils.runtime import running_locally
    >>> os.environ['APP_ENV'] = 'local'
    >>> running_locally()
    True
    >>> os.environ['APP_ENV'] = 'dev'
    >>> running_locally()
    False
"""

import os

from localshortener.constants import ENV


def running_locally() -> bool:
    """Return True if APP_ENV is 'local', False otherwise."""
    return os.getenv(ENV.App.APP_ENV, '').lower() == 'local'
