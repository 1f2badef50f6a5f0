"""Demo authentication

Accounts, plaintext credentials and the current user pointer are kept in the
key-value store through UserBaseDAO. There is no real security boundary: the
store is readable by anyone with access to it.

Classes:
    AuthService:
        Register, log in and log out users; expose the current user.

Example:
    >>> auth = AuthService(UserKeyValueDAO(store=store), events)
    >>> auth.login('demo@example.com', 'demo123').name
    'Demo User'
    >>> auth.is_authenticated()
    True
"""

import time
import random
import string
import logging

from localshortener.constants import Delay, LogEventType, DEMO_ACCOUNTS
from localshortener.exceptions import InvalidCredentialsError
from localshortener.models import UserModel
from localshortener.dao.base import UserBaseDAO
from localshortener.dao.exceptions import UserAlreadyExistsError
from localshortener.services.events import EventLogger
from localshortener.utils.helpers import utcnow


logger = logging.getLogger(__name__)

_BASE36 = string.digits + string.ascii_lowercase


def new_user_id() -> str:
    """Return an id of the form 'user-<epoch ms>-<9 base36 chars>'"""
    suffix = ''.join(random.choices(_BASE36, k=9))  # noqa: S311
    return f'user-{time.time_ns() // 1_000_000}-{suffix}'


class AuthService:
    """Authentication over a user DAO

    Attributes:
        users (UserBaseDAO):
            Storage of accounts, credentials and the current user pointer.
        events (EventLogger):
            Domain event log.
        login_delay (float):
            Seconds to pause before a successful login completes.
        register_delay (float):
            Seconds to pause before a registration completes.
    """

    def __init__(
        self,
        users: UserBaseDAO,
        events: EventLogger,
        login_delay: float = Delay.LOGIN,
        register_delay: float = Delay.REGISTER,
    ):
        self.users = users
        self.events = events
        self.login_delay = login_delay
        self.register_delay = register_delay

    def register(self, email: str, password: str, name: str) -> UserModel:
        """Create an account, store its credential and log the new user in

        Raises:
            UserAlreadyExistsError:
                If an account with this email already exists.
        """
        if self.users.exists(email):
            logger.info('Registration rejected: email already taken.', extra={'email': email})
            raise UserAlreadyExistsError()

        self._pause(self.register_delay)

        user = UserModel(id=new_user_id(), email=email, name=name, created_at=utcnow())
        self.users.insert(user).set_password(email, password).set_current(user)

        logger.info('User registered.', extra={'user_id': user.id})
        self.events.record(LogEventType.URL_CREATED, 'User registered successfully', {'userId': user.id, 'email': user.email})
        return user

    def login(self, email: str, password: str) -> UserModel:
        """Log a user in

        Raises:
            InvalidCredentialsError:
                If the email is unknown or the password doesn't match.
                Both cases carry the same message.
        """
        if not self.users.exists(email):
            self.events.record(LogEventType.ERROR, 'Login attempt with non-existent email', {'email': email})
            raise InvalidCredentialsError()

        if self.users.password(email) != password:
            self.events.record(LogEventType.ERROR, 'Login attempt with wrong password', {'email': email})
            raise InvalidCredentialsError()

        self._pause(self.login_delay)

        user = self.users.get(email)
        self.users.set_current(user)

        logger.info('User logged in.', extra={'user_id': user.id})
        self.events.record(LogEventType.URL_CREATED, 'User logged in successfully', {'userId': user.id, 'email': user.email})
        return user

    def logout(self) -> None:
        user = self.users.current()
        if user is not None:
            logger.info('User logged out.', extra={'user_id': user.id})
            self.events.record(LogEventType.URL_CREATED, 'User logged out', {'userId': user.id, 'email': user.email})
        self.users.set_current(None)

    def current_user(self) -> UserModel | None:
        return self.users.current()

    def is_authenticated(self) -> bool:
        return self.current_user() is not None

    def seed_demo_accounts(self) -> int:
        """Create the demo accounts when no user exists yet

        Returns:
            int: number of accounts created.
        """
        if self.users.all():
            return 0

        now = utcnow()
        for email, password, user_id, name in DEMO_ACCOUNTS:
            user = UserModel(id=user_id, email=email, name=name, created_at=now)
            self.users.insert(user).set_password(email, password)

        logger.info('Seeded demo accounts.', extra={'count': len(DEMO_ACCOUNTS)})
        return len(DEMO_ACCOUNTS)

    @staticmethod
    def _pause(seconds: float) -> None:
        if seconds > 0:
            time.sleep(seconds)
