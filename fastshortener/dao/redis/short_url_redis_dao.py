"""Data Access Object (DAO) implementation for managing shortened URLs in Redis

This module provides a Redis-based implementation of ShortURLBaseDAO.

Responsibilities:
    - Insert short URLs atomically, refusing to overwrite a taken shortcode;
    - Retrieve short URLs and their metadata by shortcode;
    - Raise appropriate DAO exceptions on missing, duplicate or corrupt records.

Storage layout:
    <prefix>:links:<shortcode> -> JSON document
        {
            "target": "https://example.com/page",
            "metadata": {"agent": "curl/8.0", "referer": "https://example.org"},
            "created": "2026-10-17T12:00:00+00:00",
            "updated": "2026-10-17T12:00:00+00:00"
        }

Classes:
    ShortURLRedisDAO:
        DAO for storing and retrieving ShortURLModel in a Redis datastore.

Example:
    >>> from fastshortener.models import ShortURLModel
    >>> from fastshortener.dao.redis import ShortURLRedisDAO

    >>> dao = ShortURLRedisDAO(prefix="fastshortener:dev")

    >>> short_url = ShortURLModel(
    ...     target="https://example.com/page",
    ...     shortcode="aBcDeFgH"
    ... )
    >>> dao.insert(short_url)
    <ShortURLRedisDAO>

    >>> retrieved = dao.get("aBcDeFgH")
    >>> retrieved.target
    'https://example.com/page'
"""

import json
from datetime import datetime, UTC

from beartype import beartype

from fastshortener.models import ShortURLModel, URLMetadata
from fastshortener.dao.base import ShortURLBaseDAO
from fastshortener.dao.redis.mixins import RedisClientMixin
from fastshortener.dao.redis.helpers import handle_redis_connection_error
from fastshortener.dao.exceptions import DataStoreError, ShortURLAlreadyExistsError, ShortURLNotFoundError


class ShortURLRedisDAO(RedisClientMixin, ShortURLBaseDAO):
    """Redis-based Data Access Object (DAO) for managing short URL mappings

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    NOTE:
        The per-call `timeout` keyword is not applied to individual commands.
        Commands are bounded by the client socket timeout, which the DAO factory
        defaults to the store timeout. ShortenService discards writes that
        complete after its deadline.
    """

    @handle_redis_connection_error
    @beartype
    def insert(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLRedisDAO':
        """Insert a short URL mapping into Redis

        The record is written with a single `SET ... NX`, so checking for an
        existing shortcode and writing the new one is one atomic command.
        Two concurrent inserts of the same shortcode have exactly one winner.

        Args:
            short_url (ShortURLModel):
                ShortURLModel instance representing the shortened URL mapping.
            **kwargs:
                Optional keyword arguments (see class NOTE on `timeout`).

        Returns:
            ShortURLRedisDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If a short URL with the same shortcode already exists.
            DataStoreError:
                If a Redis connection issue or timeout occurs.
        """
        now = datetime.now(UTC).isoformat()
        document = {
            'target': short_url.target,
            'metadata': short_url.metadata.to_dict(),
            'created': now,
            'updated': now,
        }

        created = self.redis.set(self.keys.link_key(short_url.shortcode), json.dumps(document), nx=True)
        if not created:
            raise ShortURLAlreadyExistsError(f"Short URL with code '{short_url.shortcode}' already exists.")
        return self

    @handle_redis_connection_error
    @beartype
    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        """Retrieve a stored short URL mapping by shortcode

        Args:
            shortcode (str):
                The shortcode identifier for the shortened URL.
            **kwargs:
                Optional keyword arguments (see class NOTE on `timeout`).

        Returns:
            ShortURLModel:
                The retrieved ShortURLModel instance.

        Raises:
            ShortURLNotFoundError:
                If the short URL does not exist in Redis.
            DataStoreError:
                If Redis connectivity issues occur or the stored record is corrupt.

        Example:
            >>> dao.get('aBcDeFgH')
            ShortURLModel(target='https://example.com', shortcode='aBcDeFgH', ...)
        """
        raw = self.redis.get(self.keys.link_key(shortcode))
        if raw is None:
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")

        try:
            document = json.loads(raw)
            return ShortURLModel(
                target=document['target'],
                shortcode=shortcode,
                metadata=URLMetadata.from_dict(document.get('metadata')),
                created_at=_parse_timestamp(document.get('created')),
                updated_at=_parse_timestamp(document.get('updated')),
            )
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            raise DataStoreError(f"Short URL record with code '{shortcode}' is corrupt.") from e


def _parse_timestamp(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None
