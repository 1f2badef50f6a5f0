from localshortener.services.events import EventLogger
from localshortener.services.auth import AuthService
from localshortener.services.shortener import (
    ShortenerService,
    ShortenRequest,
    RedirectState,
    RedirectResolution,
    URLStatistics,
)


__all__ = [
    'EventLogger',
    'AuthService',
    'ShortenerService',
    'ShortenRequest',
    'RedirectState',
    'RedirectResolution',
    'URLStatistics',
]
