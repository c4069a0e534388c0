"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    ShortURLNotFoundError:
        Raised when a ShortURLModel is not found in the data store.

    ShortURLAlreadyExistsError:
        Raised when attempting to insert a ShortURLModel whose shortcode is taken.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, timeouts, etc.).

Example:
    >>> from fastshortener.dao.exceptions import ShortURLNotFoundError
    >>> raise ShortURLNotFoundError("Short URL with code 'aBcDeFgH' not found.")
    Traceback (most recent call last):
        ...
    fastshortener.dao.exceptions.ShortURLNotFoundError: Short URL with code 'aBcDeFgH' not found.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class ShortURLNotFoundError(DAOError):
    """Exception raised when a ShortURLModel is not found in the data store."""

    pass


class ShortURLAlreadyExistsError(DAOError):
    """Exception raised when a ShortURLModel with the same shortcode already exists in the data store."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, corrupt records, etc.
    """

    pass
