"""Process logging as one JSON object per line

`initialize_logging()` is called once by `localshortener.app.create_app()`.
Modules log through `logging.getLogger(__name__)` and attach context with
`extra={...}`; every extra key becomes a top-level field:

    >>> logger.info('Short URL created.', extra={'owner': 'user-1', 'shortcode': 'abc123'})
    {"timestamp": "2025-10-15T12:00:00.000Z", "level": "INFO", "logger": "localshortener.services.shortener",
     "message": "Short URL created.", "owner": "user-1", "shortcode": "abc123"}

This is unrelated to the domain event log kept in the key-value store
(see `localshortener.services.events`).
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC
from typing import Any

from localshortener.constants import ENV
from localshortener.utils.helpers import to_iso


# Attributes every LogRecord carries; anything else came in through `extra`
_RECORD_ATTRIBUTES = frozenset(vars(logging.LogRecord('', logging.NOTSET, '', 0, '', (), None))) | {'message', 'asctime'}


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            'timestamp': to_iso(datetime.fromtimestamp(record.created, tz=UTC)),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        entry.update((k, v) for k, v in vars(record).items() if k not in _RECORD_ATTRIBUTES and k not in entry)

        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)
        if record.stack_info:
            entry['stack'] = self.formatStack(record.stack_info)

        return json.dumps(entry, default=str, ensure_ascii=False)


def logging_config(level: str) -> dict[str, Any]:
    """dictConfig document routing every logger to stdout through JsonFormatter"""
    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {'json': {'()': JsonFormatter}},
        'handlers': {
            'stdout': {
                'class': 'logging.StreamHandler',
                'formatter': 'json',
                'stream': 'ext://sys.stdout',
            },
        },
        'root': {'level': level.upper(), 'handlers': ['stdout']},
    }


def initialize_logging(level: str | None = None) -> None:
    """Install JSON logging; `level` defaults to LOG_LEVEL, then INFO"""
    logging.config.dictConfig(logging_config(level or os.environ.get(ENV.App.LOG_LEVEL, 'INFO')))
