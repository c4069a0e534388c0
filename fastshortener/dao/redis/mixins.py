"""Redis client setup shared by Redis-backed DAOs.

The client is either injected or built from `redis_*` options (as produced by
the DAO factory from the 'redis' AppConfig section). Socket timeouts bound
every command, so a hung server surfaces as redis.exceptions.TimeoutError
instead of blocking the Lambda until it is killed.
"""

from typing import Optional

import redis

from fastshortener.dao.redis.redis_key_schema import RedisKeySchema
from fastshortener.dao.redis.helpers import redis_location
from fastshortener.dao.exceptions import DataStoreError


class RedisClientMixin:
    """Own a Redis client and the key schema for its namespace.

    Attributes:
        redis (redis.Redis):
            Client shared by every command the DAO issues.
        keys (RedisKeySchema):
            Builds '<prefix>:links:<shortcode>' key names.
    """

    def __init__(
        self,
        redis_host: Optional[str] = 'localhost',
        redis_port: Optional[int] = 6379,
        redis_db: Optional[int] = 0,
        redis_decode_responses: Optional[bool] = True,
        redis_username: Optional[str] = None,
        redis_password: Optional[str] = None,
        redis_socket_timeout: Optional[float] = None,
        redis_socket_connect_timeout: Optional[float] = None,
        redis_client: Optional[redis.Redis] = None,
        prefix: Optional[str] = None,
    ):
        """Connect to Redis and PING it once.

        Connection options are ignored when redis_client is given.
        redis_socket_timeout and redis_socket_connect_timeout are in seconds;
        None leaves the command or connect unbounded.

        Raises:
            DataStoreError: If the server does not answer the PING.
        """
        if redis_client is None:
            redis_client = redis.Redis(
                host=redis_host,
                port=int(redis_port),
                db=int(redis_db),
                decode_responses=redis_decode_responses,
                username=redis_username,
                password=redis_password,
                socket_timeout=redis_socket_timeout,
                socket_connect_timeout=redis_socket_connect_timeout,
            )

        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)

        self._healthcheck()

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """Return whether Redis answers PING; raise DataStoreError instead when raise_error is set."""
        try:
            self.redis.ping()
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            if not raise_error:
                return False
            raise DataStoreError(f"Can't connect to Redis at {redis_location(self.redis)}. Check the provided configuration parameters.") from e
        return True
