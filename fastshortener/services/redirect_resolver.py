"""Redirect resolver: look up the original URL behind a short code."""

import logging
from typing import Optional

from fastshortener.dao.base import ShortURLBaseDAO
from fastshortener.dao.exceptions import DataStoreError, ShortURLNotFoundError
from fastshortener.exceptions import NotFoundError, ReservedWordError, StorePersistenceError
from fastshortener.utils.reserved import ReservedWordFilter


logger = logging.getLogger(__name__)


class RedirectResolver:
    """Resolve short codes to original URLs.

    Reserved words are rejected before the data store is queried.
    """

    def __init__(self, dao: ShortURLBaseDAO, reserved: Optional[ReservedWordFilter] = None):
        self.dao = dao
        self.reserved = reserved if reserved is not None else ReservedWordFilter()

    def resolve(self, shortcode: str, timeout: Optional[float] = None) -> str:
        """Return the original URL for a short code, unmodified.

        Raises:
            ReservedWordError: If the code is a reserved word.
            NotFoundError: If no mapping exists for the code.
            StorePersistenceError: If the data store failed.
        """
        if self.reserved.is_reserved(shortcode):
            raise ReservedWordError('invalid key for uri')

        try:
            short_url = self.dao.get(shortcode, timeout=timeout)
        except ShortURLNotFoundError as e:
            raise NotFoundError(f"error retrieving URI: short url '{shortcode}' doesn't exist") from e
        except DataStoreError as e:
            logger.error('Failed to retrieve short URL.', extra={'shortcode': shortcode, 'reason': str(e)})
            raise StorePersistenceError(f'error retrieving URI: {e}') from e

        return short_url.target
