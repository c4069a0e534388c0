"""Shorten service: turn an absolute URL into a unique short code.

Responsibilities:
    - Validate the URL to shorten (absolute, with scheme and host);
    - Generate candidate codes, skipping reserved words;
    - Persist the mapping through the DAO exactly once, retrying with a new
      code when the data store reports the code is already taken;
    - Bound the whole operation by a number of attempts and an optional timeout.

Classes:
    ShortenService:
        Creates ShortenedURL values from original URLs.

Example:
    >>> from fastshortener.services import ShortenService
    >>> service = ShortenService(dao, ShortenerSettings())
    >>> shortened = service.shorten('https://example.com/article/123')
    >>> shortened.to_dict()
    {'uri': 'qWeRtYuI', 'shorten_url': 'fast.aeekay.co/qWeRtYuI', 'shorten_long_url': 'https://fast.aeekay.co/qWeRtYuI'}
"""

import time
import logging
from typing import Optional

from fastshortener.models import ShortURLModel, ShortenedURL, URLMetadata
from fastshortener.dao.base import ShortURLBaseDAO
from fastshortener.dao.exceptions import DataStoreError, ShortURLAlreadyExistsError
from fastshortener.exceptions import GenerationExhaustedError, StorePersistenceError, StoreTimeoutError
from fastshortener.utils.config import ShortenerSettings
from fastshortener.utils.helpers import get_short_url, validate_url
from fastshortener.utils.reserved import ReservedWordFilter
from fastshortener.utils.shortener import CodeGenerator


logger = logging.getLogger(__name__)


class ShortenService:
    """Create short URL mappings.

    Args:
        dao (ShortURLBaseDAO):
            Data store for mappings. It alone enforces code uniqueness.
        settings (ShortenerSettings):
            Domains, code length and attempt bound.
        generator (Optional[CodeGenerator]):
            Random code source. A fresh, unseeded generator by default.
        reserved (Optional[ReservedWordFilter]):
            Reserved words filter. Built from settings.reserved_words by default.
    """

    def __init__(
        self,
        dao: ShortURLBaseDAO,
        settings: ShortenerSettings,
        generator: Optional[CodeGenerator] = None,
        reserved: Optional[ReservedWordFilter] = None,
    ):
        self.dao = dao
        self.settings = settings
        self.generator = generator if generator is not None else CodeGenerator()
        self.reserved = reserved if reserved is not None else ReservedWordFilter(settings.reserved_words)

    def shorten(
        self,
        original_url: str,
        metadata: Optional[URLMetadata] = None,
        timeout: Optional[float] = None,
    ) -> ShortenedURL:
        """Shorten an absolute URL

        Every generated candidate counts as one attempt, whether it was
        rejected as a reserved word or as a collision in the data store.

        Args:
            original_url (str):
                Absolute URL to shorten. Stored verbatim.
            metadata (Optional[URLMetadata]):
                Request metadata (agent, referer). Not validated.
            timeout (Optional[float]):
                Seconds the whole operation may take. Falls back to
                settings.store_timeout; None means unbounded.

        Returns:
            ShortenedURL: the stored mapping with its display and canonical links.

        Raises:
            InvalidURLError:
                If original_url is not an absolute URL. The store is not contacted.
            GenerationExhaustedError:
                If settings.max_attempts candidates were all reserved or taken.
            StoreTimeoutError:
                If the timeout expired before the mapping was confirmed as stored.
            StorePersistenceError:
                If the data store failed. Nothing was written.
        """
        validate_url(original_url)
        metadata = metadata if metadata is not None else URLMetadata()
        timeout = timeout if timeout is not None else self.settings.store_timeout
        deadline = None if timeout is None else time.monotonic() + timeout

        for attempt in range(1, self.settings.max_attempts + 1):
            shortcode = self.generator.generate(self.settings.code_length)
            if self.reserved.is_reserved(shortcode):
                logger.debug('Generated code is a reserved word. Regenerating.', extra={'shortcode': shortcode, 'attempt': attempt})
                continue

            short_url = ShortURLModel(target=original_url, shortcode=shortcode, metadata=metadata)
            try:
                self.dao.insert(short_url, timeout=self._remaining(deadline))
            except ShortURLAlreadyExistsError:
                logger.info('Generated code is already taken. Regenerating.', extra={'shortcode': shortcode, 'attempt': attempt})
                continue
            except DataStoreError as e:
                logger.error('Failed to store short URL.', extra={'shortcode': shortcode, 'attempt': attempt, 'reason': str(e)})
                raise StorePersistenceError(f'error creating URL: {e}') from e

            # Past the deadline the write no longer counts as committed
            if deadline is not None and time.monotonic() >= deadline:
                logger.error('Short URL was stored after the deadline. Discarding result.', extra={'shortcode': shortcode, 'attempt': attempt})
                raise StoreTimeoutError('timed out before the short URL was stored')

            logger.info('Created new short URL.', extra={'shortcode': shortcode, 'attempt': attempt})
            return ShortenedURL(
                short_url=short_url,
                shorten_url=get_short_url(shortcode, self.settings.short_domain),
                shorten_long_url=get_short_url(shortcode, self.settings.long_domain),
            )

        logger.error(
            'Exhausted short code generation attempts.',
            extra={'maxAttempts': self.settings.max_attempts, 'codeLength': self.settings.code_length},
        )
        raise GenerationExhaustedError(f'no free short code found after {self.settings.max_attempts} attempts')

    @staticmethod
    def _remaining(deadline: float | None) -> float | None:
        """Seconds left until the deadline; raise StoreTimeoutError once it has passed."""
        if deadline is None:
            return None
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise StoreTimeoutError('timed out before the short URL was stored')
        return remaining
