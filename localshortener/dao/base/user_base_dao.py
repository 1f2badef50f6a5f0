"""Abstract base class for user data access objects (DAOs).

This interface defines the contract for accessing user accounts, their
plaintext credentials and the current user pointer.

Responsibilities:
    - Store and look up user records by email.
    - Store and look up credentials in their own namespace.
    - Persist the pointer to the currently logged in user.

Example:
    Typical usage with a key-value backed implementation:

        >>> from localshortener.dao.kv import UserKeyValueDAO
        >>> dao = UserKeyValueDAO(store=store)

        >>> dao.insert(user).set_password(user.email, 'demo123')
        >>> dao.password('demo@example.com')
        'demo123'

        >>> dao.set_current(user)
        >>> dao.current().email
        'demo@example.com'

NOTE:
    Passwords are stored in plaintext. There is no real security boundary.
"""

from abc import ABC, abstractmethod

from localshortener.models import UserModel


class UserBaseDAO(ABC):
    """Interface for user data access objects (DAOs)

    Methods:
        all() -> list[UserModel]:
            Return every registered user, in registration order.

        get(email: str) -> UserModel:
            Raises UserDoesNotExistError if no user has this email.

        exists(email: str) -> bool

        insert(user: UserModel) -> UserBaseDAO:
            Raises UserAlreadyExistsError if the email is taken.

        password(email: str) -> str | None
        set_password(email: str, password: str) -> UserBaseDAO

        current() -> UserModel | None
        set_current(user: UserModel | None) -> UserBaseDAO

    All methods raise DataStoreError on connection, read or write failure.

    NOTE:
        - A user record and its credential are written separately, without a
          transaction.
    """

    @abstractmethod
    def all(self) -> list[UserModel]:
        pass

    @abstractmethod
    def get(self, email: str) -> UserModel:
        pass

    @abstractmethod
    def exists(self, email: str) -> bool:
        pass

    @abstractmethod
    def insert(self, user: UserModel) -> 'UserBaseDAO':
        pass

    @abstractmethod
    def password(self, email: str) -> str | None:
        pass

    @abstractmethod
    def set_password(self, email: str, password: str) -> 'UserBaseDAO':
        pass

    @abstractmethod
    def current(self) -> UserModel | None:
        """Return the logged in user, None if absent or unreadable."""
        pass

    @abstractmethod
    def set_current(self, user: UserModel | None) -> 'UserBaseDAO':
        """Point the current user to `user`, or clear the pointer when None."""
        pass
