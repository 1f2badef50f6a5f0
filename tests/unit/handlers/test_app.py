"""Unit tests for application wiring and routing.

Test coverage includes:

1. create_app()
   - Ensures demo accounts are seeded once and keys carry the app prefix.
   - Ensures the configuration is loaded when none is given.
   - Confirms an unreachable Redis raises DataStoreError.

2. Routing
   - Ensures each route reaches its handler; unknown routes respond 404.

3. End-to-end flow
   - Login, shorten, redirect, stats, logout.
"""

import json
from unittest.mock import patch

import pytest
import redis

from localshortener.app import create_app
from localshortener.dao.exceptions import DataStoreError


# -------------------------------
# 1. create_app()
# -------------------------------


def test_demo_accounts_are_seeded(app, redis_data):
    users = json.loads(redis_data['testapp:test:users'])

    assert [u['email'] for u in users] == ['demo@example.com', 'admin@example.com']
    assert json.loads(redis_data['testapp:test:demo_passwords']) == {'demo@example.com': 'demo123', 'admin@example.com': 'admin123'}


def test_seeding_skipped_when_users_exist(app, config, redis_client, redis_data):
    app.auth.register('jane@example.com', 'secret', 'Jane')

    with patch('localshortener.app.initialize_logging'):
        create_app(config=config, redis_client=redis_client)

    assert len(json.loads(redis_data['testapp:test:users'])) == 3


def test_seeding_disabled(monkeypatch, config, redis_client, redis_data):
    monkeypatch.setenv('APP_NAME', 'testapp')
    monkeypatch.setenv('APP_ENV', 'test')
    config['auth']['seed_demo_accounts'] = False

    with patch('localshortener.app.initialize_logging'):
        create_app(config=config, redis_client=redis_client)

    assert 'testapp:test:users' not in redis_data


def test_configuration_is_loaded(monkeypatch, config, redis_client):
    monkeypatch.delenv('APP_NAME', raising=False)
    config['redirect']['delay'] = 0

    with patch('localshortener.app.initialize_logging') as initialize_logging, patch('localshortener.app.load_config', return_value=config) as load_config:
        app = create_app(redis_client=redis_client)

    initialize_logging.assert_called_once()
    load_config.assert_called_once()
    assert app.shortener.redirect_delay == 0


def test_unreachable_redis(config, redis_client):
    redis_client.ping.side_effect = redis.exceptions.ConnectionError('Connection refused')

    with patch('localshortener.app.initialize_logging'):
        with pytest.raises(DataStoreError, match="Can't connect to Redis at redis.test:6379/0"):
            create_app(config=config, redis_client=redis_client)


# -------------------------------
# 2. Routing
# -------------------------------


@pytest.mark.parametrize(
    'method, path, status',
    [
        ('POST', '/login', 400),
        ('POST', '/register', 400),
        ('POST', '/logout', 200),
        ('POST', '/', 302),
        ('GET', '/stats', 302),
        ('GET', '/stats/', 302),
        ('GET', '/zzz999', 404),
        ('GET', '/a/b', 404),
        ('DELETE', '/login', 404),
    ],
)
def test_routes(app, make_event, method, path, status):
    assert app.handle(make_event(method, path))['statusCode'] == status


# -------------------------------
# 3. End-to-end flow
# -------------------------------


def test_end_to_end(app, make_event):
    login = app.handle(make_event('POST', '/login', {'email': 'demo@example.com', 'password': 'demo123'}))
    assert login['statusCode'] == 200

    shorten = app.handle(make_event('POST', '/', {'urls': [{'longURL': 'example.com', 'customShortcode': 'demo01'}]}))
    assert shorten['statusCode'] == 200
    assert json.loads(shorten['body'])['urls'][0]['shortURL'] == 'https://sho.rt/demo01'

    redirect = app.handle(make_event('GET', '/demo01', headers={'Referer': 'https://t.co'}))
    assert redirect['statusCode'] == 302
    assert redirect['headers']['Location'] == 'https://example.com'

    stats = json.loads(app.handle(make_event('GET', '/stats'))['body'])
    assert stats['totalClicks'] == 1
    assert stats['urls'][0]['clicks'][0]['referrer'] == 'https://t.co'

    assert app.handle(make_event('POST', '/logout'))['statusCode'] == 200
    assert app.handle(make_event('GET', '/stats'))['statusCode'] == 302

    messages = [e.message for e in app.events.logs()]
    assert 'User logged in successfully' in messages
    assert 'URL shortened: https://example.com -> demo01' in messages
    assert 'URL clicked: demo01' in messages
    assert 'User logged out' in messages
