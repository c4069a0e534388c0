"""Structured stdout logging for the shortener Lambdas.

`initialize_logging()` runs when `fastshortener.lambdas` is imported, so every
handler logs one JSON document per line, which CloudWatch indexes as fields:

{
    "timestamp": "2026-10-17T12:00:00.000Z",
    "level": "INFO",
    "logger": "fastshortener.services.shorten_service",
    "message": "Created new short URL.",
    "app": "fastshortener",
    "env": "prod",
    "shortcode": "aBcDeFgH",
    "attempt": 1
}

`app` and `env` come from APP_NAME and APP_ENV and are left out when unset.
Keyword arguments passed through `extra=` are copied next to them.
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC
from typing import Any, Optional

from fastshortener.constants import ENV


# Client libraries whose DEBUG output would drown the shortener's own events
QUIET_LOGGERS = ('botocore', 'boto3', 'urllib3', 'sqlalchemy.engine')


class JsonFormatter(logging.Formatter):
    """Render a LogRecord, its `extra` fields and any traceback as JSON.

    Args:
        static_fields (Optional[dict]):
            Fields stamped on every document, e.g. {'app': 'fastshortener'}.
            `extra` fields with the same name take precedence.
    """

    RECORD_ATTRS = frozenset(logging.LogRecord('', 0, '', 0, '', None, None).__dict__) | {'asctime', 'message', 'taskName'}

    def __init__(self, static_fields: Optional[dict[str, Any]] = None):
        super().__init__()
        self.static_fields = {k: v for k, v in (static_fields or {}).items() if v}

    def format(self, record: logging.LogRecord) -> str:
        # fmt: off
        timestamp = datetime.fromtimestamp(record.created, tz=UTC) \
                            .isoformat(timespec='milliseconds') \
                            .replace('+00:00', 'Z')
        # fmt: on

        document = {
            'timestamp': timestamp,
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            **self.static_fields,
        }
        document.update((key, value) for key, value in record.__dict__.items() if key not in self.RECORD_ATTRS)
        if record.exc_info:
            document['exception'] = self.formatException(record.exc_info)

        return json.dumps(document, default=str)


def _resolve_level(level: Optional[str]) -> str:
    level = (level or os.getenv(ENV.App.LOG_LEVEL) or 'INFO').upper()
    # Unknown names would make dictConfig raise at import time of every Lambda
    return level if level in logging.getLevelNamesMapping() else 'INFO'


def initialize_logging(level: Optional[str] = None) -> None:
    """Route all logging to stdout as JSON.

    Args:
        level (Optional[str]):
            Root level name. Defaults to LOG_LEVEL, then INFO.
    """
    static_fields = {'app': os.getenv(ENV.App.APP_NAME), 'env': os.getenv(ENV.App.APP_ENV)}
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'json': {
                    '()': JsonFormatter,
                    'static_fields': static_fields,
                }
            },
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                }
            },
            'loggers': {name: {'level': 'WARNING'} for name in QUIET_LOGGERS},
            'root': {
                'level': _resolve_level(level),
                'handlers': ['stdout'],
            },
        }
    )
