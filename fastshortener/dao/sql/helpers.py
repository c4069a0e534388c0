import functools
from typing import TypeVar
from collections.abc import Callable

from sqlalchemy import exc

from fastshortener.dao.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable)


def handle_sql_error(method: F) -> F:
    """Wrap SQL-interacting DAO methods to turn driver errors into DataStoreError

    IntegrityError is expected to be handled inside the wrapped method where
    it carries meaning (e.g. a taken shortcode). Any other SQLAlchemy error
    (connection loss, statement timeout, etc.) becomes a DataStoreError.

    Example:
        >>> @handle_sql_error
        ... def get(self, shortcode):
        ...     with self.engine.connect() as conn:
        ...         ...
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except exc.SQLAlchemyError as e:
            location = self.engine.url.render_as_string(hide_password=True)
            raise DataStoreError(f'SQL data store error at {location}: {e.__class__.__name__}.') from e

    return wrapper
