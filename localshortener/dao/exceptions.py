"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    DataStoreError:
        Raised when there is an error in the key-value store (e.g., connection issues, timeouts, OOM, etc.).

    ShortURLNotFoundError:
        Raised when a ShortURLModel is not found in the data store.

    ShortURLAlreadyExistsError:
        Raised when attempting to insert a ShortURLModel whose shortcode is taken.

    UserAlreadyExistsError:
        Raised when attempting to insert a UserModel whose email is taken.

    UserDoesNotExistError:
        Raised when a user is not found in the data store.

Example:
    >>> from localshortener.dao.exceptions import ShortURLNotFoundError
    >>> raise ShortURLNotFoundError("Short URL with code 'abc123' not found.")
    Traceback (most recent call last):
        ...
    localshortener.dao.exceptions.ShortURLNotFoundError: Short URL with code 'abc123' not found.
"""

from localshortener.exceptions import LocalShortenerError


class DAOError(LocalShortenerError):
    """Generic base class for DAO-related exceptions."""

    error_code = 'dao:dao_error'


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, OOM, etc.
    """

    error_code = 'dao:data_store_error'


class ShortURLNotFoundError(DAOError):
    """Exception raised when a ShortURLModel is not found in the data store."""

    error_code = 'dao:short_url_not_found_error'


class ShortURLAlreadyExistsError(DAOError):
    """Exception raised when attempting to insert a ShortURLModel that already exists in the data store."""

    error_code = 'dao:short_url_already_exists_error'


class UserAlreadyExistsError(DAOError):
    """Exception raised when registering an email which already has an account."""

    error_code = 'dao:user_already_exists_error'

    def __init__(self, message: str = 'An account with this email already exists'):
        super().__init__(message)


class UserDoesNotExistError(DAOError):
    """Exception raised when a user is not found in the data store."""

    error_code = 'dao:user_does_not_exist_error'
