import threading

import pytest

from fastshortener.dao.base import ShortURLBaseDAO
from fastshortener.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError
from fastshortener.utils.config import ShortenerSettings


class InMemoryShortURLDAO(ShortURLBaseDAO):
    """Dict-backed DAO with the same uniqueness contract as the real backends."""

    def __init__(self):
        self.records = {}
        self.insert_calls = []
        self.get_calls = []
        self._lock = threading.Lock()

    def insert(self, short_url, **kwargs):
        with self._lock:
            self.insert_calls.append((short_url, kwargs))
            if short_url.shortcode in self.records:
                raise ShortURLAlreadyExistsError(f"Short URL with code '{short_url.shortcode}' already exists.")
            self.records[short_url.shortcode] = short_url
        return self

    def get(self, shortcode, **kwargs):
        self.get_calls.append((shortcode, kwargs))
        try:
            return self.records[shortcode]
        except KeyError:
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.") from None


@pytest.fixture
def dao():
    return InMemoryShortURLDAO()


@pytest.fixture
def settings():
    return ShortenerSettings(short_domain='fast.aeekay.co', long_domain='https://fast.aeekay.co', max_attempts=5, store_timeout=5.0)
