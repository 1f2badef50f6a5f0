import copy
import json
from unittest.mock import patch

import pytest

from localshortener.app import Application, create_app
from localshortener.utils.config import DEFAULT_CONFIG


@pytest.fixture
def config() -> dict:
    _config = copy.deepcopy(DEFAULT_CONFIG)
    _config['auth']['login_delay'] = 0
    _config['auth']['register_delay'] = 0
    return _config


@pytest.fixture
def app(monkeypatch, config, redis_client) -> Application:
    """Application wired to the mocked Redis client, with demo accounts seeded."""
    monkeypatch.setenv('APP_NAME', 'testapp')
    monkeypatch.setenv('APP_ENV', 'test')
    with patch('localshortener.app.initialize_logging'):
        return create_app(config=config, redis_client=redis_client)


@pytest.fixture
def logged_in(app) -> Application:
    app.auth.login('demo@example.com', 'demo123')
    return app


@pytest.fixture
def make_event():
    """Build a request event (Host header set to sho.rt)."""

    def _make_event(method: str, path: str, body: dict | str | None = None, headers: dict | None = None) -> dict:
        event = {'httpMethod': method, 'path': path, 'headers': {'Host': 'sho.rt', **(headers or {})}}
        if body is not None:
            event['body'] = body if isinstance(body, str) else json.dumps(body)
        return event

    return _make_event
