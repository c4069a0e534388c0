from fastshortener.services.shorten_service import ShortenService
from fastshortener.services.redirect_resolver import RedirectResolver


__all__ = [
    'ShortenService',
    'RedirectResolver',
]
