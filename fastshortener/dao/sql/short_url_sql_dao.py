"""Data Access Object (DAO) implementation for managing shortened URLs in a SQL database

This module provides a SQLAlchemy Core implementation of ShortURLBaseDAO on top of
the `urls` table (see fastshortener.dao.sql.schema). Any database SQLAlchemy
supports works; PostgreSQL is the production target, SQLite is used in tests.

Classes:
    ShortURLSQLDAO:
        DAO for storing and retrieving ShortURLModel in a relational database.

Example:
    >>> from fastshortener.dao.sql import ShortURLSQLDAO
    >>> dao = ShortURLSQLDAO(sql_url='sqlite://', sql_create_schema=True)
    >>> dao.insert(ShortURLModel(target='https://example.com', shortcode='aBcDeFgH'))
    <ShortURLSQLDAO>
    >>> dao.get('aBcDeFgH').target
    'https://example.com'
"""

from datetime import datetime, UTC

from beartype import beartype
from sqlalchemy import exc, insert, select

from fastshortener.models import ShortURLModel, URLMetadata
from fastshortener.dao.base import ShortURLBaseDAO
from fastshortener.dao.sql.mixins import SQLEngineMixin
from fastshortener.dao.sql.helpers import handle_sql_error
from fastshortener.dao.sql.schema import urls
from fastshortener.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError


class ShortURLSQLDAO(SQLEngineMixin, ShortURLBaseDAO):
    """SQL-based Data Access Object (DAO) for managing short URL mappings

    Uniqueness of shortcodes is enforced by the unique index on `urls.uri`,
    so concurrent inserts of one shortcode have exactly one winner.

    Attributes (see SQLEngineMixin):
        engine (sqlalchemy.Engine):
            Engine used to communicate with the database.
    """

    @handle_sql_error
    @beartype
    def insert(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLSQLDAO':
        """Insert a short URL mapping in its own transaction

        Args:
            short_url (ShortURLModel):
                ShortURLModel instance representing the shortened URL mapping.
            **kwargs:
                timeout (float | None): statement timeout in seconds (PostgreSQL only).

        Returns:
            ShortURLSQLDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If a short URL with the same shortcode already exists.
            DataStoreError:
                On any other database error (connection loss, timeout, etc.).
        """
        now = datetime.now(UTC)
        statement = insert(urls).values(
            original_url=short_url.target,
            uri=short_url.shortcode,
            raw_json=short_url.metadata.to_dict(),
            created=now,
            updated=now,
        )

        try:
            with self.engine.begin() as conn:
                self._apply_timeout(conn, kwargs.get('timeout'))
                conn.execute(statement)
        except exc.IntegrityError as e:
            raise ShortURLAlreadyExistsError(f"Short URL with code '{short_url.shortcode}' already exists.") from e
        return self

    @handle_sql_error
    @beartype
    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        """Retrieve a stored short URL mapping by shortcode

        Args:
            shortcode (str):
                The shortcode identifier for the shortened URL.
            **kwargs:
                timeout (float | None): statement timeout in seconds (PostgreSQL only).

        Returns:
            ShortURLModel: The retrieved mapping.

        Raises:
            ShortURLNotFoundError:
                If no row exists for the shortcode.
            DataStoreError:
                On database errors.
        """
        statement = (
            select(urls.c.original_url, urls.c.raw_json, urls.c.created, urls.c.updated)
            .where(urls.c.uri == shortcode)
            .limit(1)
        )

        with self.engine.begin() as conn:
            self._apply_timeout(conn, kwargs.get('timeout'))
            row = conn.execute(statement).first()

        if row is None:
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")

        return ShortURLModel(
            target=row.original_url,
            shortcode=shortcode,
            metadata=URLMetadata.from_dict(row.raw_json),
            created_at=_as_utc(row.created),
            updated_at=_as_utc(row.updated),
        )


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite drops tzinfo on the way in; timestamps are always written in UTC
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)
