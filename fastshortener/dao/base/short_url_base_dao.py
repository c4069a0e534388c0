"""Abstract base class for ShortURL data access objects (DAOs).

This class establishes a consistent contract for all ShortURL DAO implementations,
regardless of the underlying storage mechanism (e.g., Redis, PostgreSQL, SQLite).

Responsibilities:
    - Provide an interface for inserting and retrieving ShortURLModel objects.
    - Enforce shortcode uniqueness in the data store (insert-if-absent).
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from fastshortener.models import ShortURLModel
        >>> from fastshortener.dao.redis import ShortURLRedisDAO

        >>> dao = ShortURLRedisDAO(...)

        >>> short_url = ShortURLModel(
        ...     target="https://example.com/blog/article-123",
        ...     shortcode="aBcDeFgH",
        ... )
        >>> dao.insert(short_url)

        >>> retrieved = dao.get("aBcDeFgH")
        >>> print(retrieved.target)
        https://example.com/blog/article-123
"""

from abc import ABC, abstractmethod

from fastshortener.models import ShortURLModel


class ShortURLBaseDAO(ABC):
    """Interface for ShortURL data access objects (DAOs).

    Methods:
        insert(short_url: ShortURLModel, **kwargs) -> ShortURLBaseDAO:
            Atomically insert a new ShortURLModel into the data store.
            Raises ShortURLAlreadyExistsError if the shortcode already exists.
            Raises DataStoreError on connection or write failure.

        get(shortcode: str, **kwargs) -> ShortURLModel:
            Retrieve a ShortURLModel from the data store by shortcode.
            Raises ShortURLNotFoundError if the entry does not exist.
            Raises DataStoreError on connection or read failure.

    Keyword arguments understood by all implementations:
        timeout (float | None):
            Seconds the caller is willing to wait for the operation.
            Implementations apply it where their driver supports it.

    NOTE:
        - Mappings are immutable and never deleted, so the DAO provides neither
          update nor delete operations.
    """

    @abstractmethod
    def insert(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLBaseDAO':
        """Insert a new ShortURLModel into the data store.

        The insert must be atomic: either the mapping is stored under a free
        shortcode, or nothing is written and ShortURLAlreadyExistsError is raised.

        Args:
            short_url (ShortURLModel):
                The ShortURLModel instance to be inserted.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLBaseDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If a ShortURLModel with the same shortcode already exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        """Retrieve a ShortURLModel from the data store by its shortcode.

        Args:
            shortcode (str):
                The shortcode of the ShortURLModel to be retrieved.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLModel: The stored mapping.

        Raises:
            ShortURLNotFoundError:
                If no ShortURLModel with the given shortcode exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass
