"""Build the short URL DAO for the active data store backend.

The Lambda configuration (see fastshortener.utils.config.load_config) holds
exactly one backend section, keyed by the backend name:

    {"redis": {"host": "...", "port": 6379, "db": 0}, "shortener": {...}}
    {"sql": {"url": "postgresql+psycopg://..."}, "shortener": {...}}

Backend options are forwarded to the DAO with the backend name as prefix,
e.g. {"redis": {"host": "h"}} -> ShortURLRedisDAO(redis_host="h").
"""

import logging
from typing import Any

from fastshortener.constants import Backend
from fastshortener.dao.base import ShortURLBaseDAO
from fastshortener.exceptions import BadConfigurationError


logger = logging.getLogger(__name__)


def build_short_url_dao(app_config: dict[str, Any], prefix: str | None = None, timeout: float | None = None) -> ShortURLBaseDAO:
    """Instantiate the DAO for whichever backend section the config carries

    Args:
        app_config (dict): result of load_config().
        prefix (str | None): key namespace, used by the Redis backend only.
        timeout (float | None): seconds a single data store command may take.
            Used as the Redis socket (connect) timeout unless the backend
            section sets its own.

    Returns:
        ShortURLBaseDAO: a healthchecked DAO.

    Raises:
        BadConfigurationError: If no supported backend section is present.
        DataStoreError: If the data store is unreachable.
    """
    if Backend.REDIS in app_config:
        from fastshortener.dao.redis import ShortURLRedisDAO

        redis_config = {f'redis_{k}': v for k, v in app_config[Backend.REDIS].items()}
        if timeout is not None:
            redis_config.setdefault('redis_socket_timeout', timeout)
            redis_config.setdefault('redis_socket_connect_timeout', timeout)

        logger.debug('Using Redis as the backend database for short URLs.', extra={'socketTimeout': redis_config.get('redis_socket_timeout')})
        return ShortURLRedisDAO(**redis_config, prefix=prefix)

    if Backend.SQL in app_config:
        from fastshortener.dao.sql import ShortURLSQLDAO

        logger.debug('Using SQL as the backend database for short URLs.')
        sql_config = {f'sql_{k}': v for k, v in app_config[Backend.SQL].items()}
        return ShortURLSQLDAO(**sql_config)

    raise BadConfigurationError(f'No supported data store backend configured (expected one of: {", ".join(Backend)}).')
