"""Application wiring and request routing

`create_app()` builds the storage layer and the services once; the returned
Application routes request events to the handlers:

    POST /login           -> handlers.auth.app.login_handler
    POST /register        -> handlers.auth.app.register_handler
    POST /logout          -> handlers.auth.app.logout_handler
    POST /                -> handlers.shorten_url.app.handler     (protected)
    GET  /stats           -> handlers.stats.app.handler           (protected)
    GET  /{shortcode}     -> handlers.redirect_url.app.handler

Example:
    >>> app = create_app()
    >>> response = app.handle({'httpMethod': 'POST', 'path': '/login',
    ...                        'body': '{"email": "demo@example.com", "password": "demo123"}'})
    >>> response['statusCode']
    200
"""

import logging
from dataclasses import dataclass
from typing import Optional
from collections.abc import Callable

import redis

from localshortener.constants import GUEST_OWNER
from localshortener.dao.redis import RedisKeyValueStore
from localshortener.dao.redis.helpers import describe_connection
from localshortener.dao.kv import ShortURLKeyValueDAO, UserKeyValueDAO, EventLogKeyValueDAO
from localshortener.services import EventLogger, AuthService, ShortenerService
from localshortener.types import AppConfig, HandlerEvent, HandlerResponse
from localshortener.utils import load_config, app_prefix, initialize_logging
from localshortener.handlers.responses import response_404
from localshortener.handlers.auth.app import login_handler, register_handler, logout_handler
from localshortener.handlers.shorten_url.app import handler as shorten_url_handler
from localshortener.handlers.redirect_url.app import handler as redirect_url_handler
from localshortener.handlers.stats.app import handler as stats_handler


logger = logging.getLogger(__name__)

type Handler = Callable[[HandlerEvent, 'Application'], HandlerResponse]

ROUTES: dict[tuple[str, str], Handler] = {
    ('POST', '/login'): login_handler,
    ('POST', '/register'): register_handler,
    ('POST', '/logout'): logout_handler,
    ('POST', '/'): shorten_url_handler,
    ('GET', '/stats'): stats_handler,
}


@dataclass
class Application:
    """Container of the application's services

    Attributes:
        config (dict): loaded configuration
        events (EventLogger): domain event log
        auth (AuthService): authentication
        shortener (ShortenerService): short URL creation, resolution and statistics
    """

    config: AppConfig
    events: EventLogger
    auth: AuthService
    shortener: ShortenerService

    def handle(self, event: HandlerEvent) -> HandlerResponse:
        method = (event.get('httpMethod') or 'GET').upper()
        path = '/' + (event.get('path') or '/').strip('/')

        route = ROUTES.get((method, path))
        if route is not None:
            return route(event, self)

        segments = path.strip('/').split('/')
        if method == 'GET' and len(segments) == 1 and segments[0]:
            event = {**event, 'pathParameters': {**(event.get('pathParameters') or {}), 'shortcode': segments[0]}}
            return redirect_url_handler(event, self)

        logger.info('No route matches request. Responding with 404.', extra={'method': method, 'path': path})
        return response_404(message=f'No route for {method} {path}')

    def start(self) -> 'Application':
        """Seed demo accounts (first start only) and sweep expired short URLs"""
        if self.config['auth']['seed_demo_accounts']:
            self.auth.seed_demo_accounts()

        user = self.auth.current_user()
        self.shortener.refresh(user.id if user is not None else GUEST_OWNER)
        return self


def create_app(config: Optional[AppConfig] = None, redis_client: Optional[redis.Redis] = None) -> Application:
    """Build and start the application

    Args:
        config (dict, optional):
            Configuration document. Defaults to `load_config()`.
        redis_client (redis.Redis, optional):
            Pre-built Redis client, used instead of the configured connection.

    Raises:
        DataStoreError:
            If Redis can't be reached.
        BadConfigurationError:
            If the configuration document is invalid.
    """
    initialize_logging()
    config = config or load_config()

    store = RedisKeyValueStore.from_config(config['redis'], redis_client=redis_client)
    prefix = app_prefix()

    events = EventLogger(EventLogKeyValueDAO(store=store, prefix=prefix))
    auth = AuthService(
        UserKeyValueDAO(store=store, prefix=prefix),
        events,
        login_delay=config['auth']['login_delay'],
        register_delay=config['auth']['register_delay'],
    )
    shortener = ShortenerService(
        ShortURLKeyValueDAO(store=store, prefix=prefix),
        events,
        redirect_delay=config['redirect']['delay'],
    )

    logger.info('Application created.', extra={'prefix': prefix, 'redis': describe_connection(store.redis)})
    return Application(config=config, events=events, auth=auth, shortener=shortener).start()
