from fastshortener.models.short_url_model import ShortURLModel, ShortenedURL, URLMetadata


__all__ = [
    'ShortURLModel',
    'ShortenedURL',
    'URLMetadata',
]
