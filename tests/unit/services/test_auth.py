"""Unit tests for the AuthService.

Test coverage includes:

1. Registration
   - Ensures new users are stored, logged in and recorded.
   - Confirms duplicate emails are rejected and the first account survives.

2. Login
   - Ensures valid credentials log the user in.
   - Confirms unknown emails and wrong passwords fail with the same message.

3. Logout and current user

4. Demo accounts
   - Ensures demo accounts are seeded only into an empty store.

5. Artificial delays
"""

import re
from unittest.mock import patch

import pytest

from localshortener.constants import LogEventType
from localshortener.exceptions import InvalidCredentialsError
from localshortener.dao.kv import UserKeyValueDAO, EventLogKeyValueDAO
from localshortener.dao.exceptions import UserAlreadyExistsError
from localshortener.services import AuthService, EventLogger
from localshortener.services.auth import new_user_id


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def events(store, app_prefix) -> EventLogger:
    return EventLogger(EventLogKeyValueDAO(store=store, prefix=app_prefix))


@pytest.fixture
def users(store, app_prefix) -> UserKeyValueDAO:
    return UserKeyValueDAO(store=store, prefix=app_prefix)


@pytest.fixture
def auth(users, events) -> AuthService:
    return AuthService(users, events, login_delay=0, register_delay=0)


# -------------------------------
# 1. Registration
# -------------------------------


def test_register(auth, users, events):
    user = auth.register('jane@example.com', 'secret', 'Jane')

    assert re.fullmatch(r'user-\d+-[0-9a-z]{9}', user.id)
    assert user.name == 'Jane'
    assert users.get('jane@example.com') == user
    assert users.password('jane@example.com') == 'secret'
    assert auth.current_user() == user

    [event] = events.logs()
    assert event.type == LogEventType.URL_CREATED
    assert event.message == 'User registered successfully'
    assert event.data == {'userId': user.id, 'email': 'jane@example.com'}


def test_register_duplicate_email(auth, users):
    first = auth.register('jane@example.com', 'secret', 'Jane')
    auth.logout()

    with pytest.raises(UserAlreadyExistsError, match='An account with this email already exists'):
        auth.register('jane@example.com', 'other', 'Impostor')

    assert users.all() == [first]
    assert users.password('jane@example.com') == 'secret'
    assert auth.current_user() is None


def test_new_user_ids_are_unique():
    assert len({new_user_id() for _ in range(100)}) == 100


# -------------------------------
# 2. Login
# -------------------------------


def test_login(auth, events):
    registered = auth.register('jane@example.com', 'secret', 'Jane')
    auth.logout()

    user = auth.login('jane@example.com', 'secret')

    assert user == registered
    assert auth.current_user() == registered
    assert events.logs()[-1].message == 'User logged in successfully'


@pytest.mark.parametrize(
    'email, password, logged',
    [
        ('nobody@example.com', 'secret', 'Login attempt with non-existent email'),
        ('jane@example.com', 'wrong', 'Login attempt with wrong password'),
    ],
)
def test_login_failures_share_message(auth, events, email, password, logged):
    auth.register('jane@example.com', 'secret', 'Jane')
    auth.logout()

    with pytest.raises(InvalidCredentialsError) as excinfo:
        auth.login(email, password)

    assert str(excinfo.value) == 'Invalid email or password'
    assert not auth.is_authenticated()
    assert events.logs()[-1].type == LogEventType.ERROR
    assert events.logs()[-1].message == logged


# -------------------------------
# 3. Logout and current user
# -------------------------------


def test_logout(auth, events):
    auth.register('jane@example.com', 'secret', 'Jane')
    assert auth.is_authenticated()

    auth.logout()

    assert not auth.is_authenticated()
    assert auth.current_user() is None
    assert events.logs()[-1].message == 'User logged out'


def test_logout_without_user(auth, events):
    auth.logout()

    assert events.logs() == []


# -------------------------------
# 4. Demo accounts
# -------------------------------


def test_seed_demo_accounts(auth):
    assert auth.seed_demo_accounts() == 2

    assert auth.login('demo@example.com', 'demo123').id == 'demo-user-1'
    assert auth.login('admin@example.com', 'admin123').name == 'Admin User'


def test_seed_demo_accounts_only_once(auth, users):
    auth.register('jane@example.com', 'secret', 'Jane')

    assert auth.seed_demo_accounts() == 0
    assert [u.email for u in users.all()] == ['jane@example.com']


# -------------------------------
# 5. Artificial delays
# -------------------------------


def test_delays(users, events):
    auth = AuthService(users, events, login_delay=0.5, register_delay=0.8)

    with patch('localshortener.services.auth.time.sleep') as sleep:
        auth.register('jane@example.com', 'secret', 'Jane')
        auth.login('jane@example.com', 'secret')

    assert [c.args[0] for c in sleep.call_args_list] == [0.8, 0.5]


def test_no_delay_on_rejection(users, events):
    auth = AuthService(users, events, login_delay=0.5, register_delay=0.8)

    with patch('localshortener.services.auth.time.sleep') as sleep:
        with pytest.raises(InvalidCredentialsError):
            auth.login('nobody@example.com', 'secret')

    sleep.assert_not_called()
