from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional


@dataclass(frozen=True)
class URLMetadata:
    """Request metadata captured when a short URL is created.

    Attributes:
        agent (Optional[str]):
            User agent of the client which requested the short URL.
        referer (Optional[str]):
            Referer header of the request, if any.
    """

    agent: Optional[str] = None
    referer: Optional[str] = None

    def to_dict(self) -> dict[str, str]:
        """Serialize to a JSON-friendly dict, omitting empty values."""
        data = {'agent': self.agent, 'referer': self.referer}
        return {k: v for k, v in data.items() if v}

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> 'URLMetadata':
        data = data or {}
        return cls(agent=data.get('agent'), referer=data.get('referer'))


@dataclass(frozen=True)
class ShortURLModel:
    """Represent a shortened URL mapping.

    Attributes:
        target (str):
            The original absolute URL that the short code redirects to.
            Stored verbatim.
        shortcode (str):
            The unique short identifier representing the shortened URL.
        metadata (URLMetadata):
            Request metadata captured at creation time.
        created_at (Optional[datetime]):
            Creation timestamp, populated by the data store on read.
        updated_at (Optional[datetime]):
            Last update timestamp, populated by the data store on read.

    Example:
        >>> url = ShortURLModel(
        ...     target="https://example.com/article/123",
        ...     shortcode="aBcDeFgH",
        ...     metadata=URLMetadata(agent="curl/8.0"),
        ... )
        >>> url.target
        'https://example.com/article/123'
        >>> url.metadata.agent
        'curl/8.0'
        >>> url.created_at is None
        True
    """

    target: str
    shortcode: str
    metadata: URLMetadata = field(default_factory=URLMetadata)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class ShortenedURL:
    # fmt: off
    short_url: ShortURLModel  # Persisted mapping
    shorten_url: str          # <short domain>/<code>, for display
    shorten_long_url: str     # <long domain>/<code>, canonical link
    # fmt: on

    @property
    def uri(self) -> str:
        return self.short_url.shortcode

    def to_dict(self) -> dict[str, str]:
        return {
            'uri': self.uri,
            'shorten_url': self.shorten_url,
            'shorten_long_url': self.shorten_long_url,
        }
