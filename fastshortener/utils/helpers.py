"""Helper utilities for AWS lambda functions.

Functions:
    validate_url(url: str) -> str
        Ensure a URL is absolute (has a scheme and a host)
    get_short_url(shortcode: str, domain: str) -> str
        Get string representation of short URL for a given shortcode
    get_header(event: dict, name: str) -> str | None
        Case-insensitive header lookup in an API Gateway event
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present
    guarantee_500_response(handler: Callable) -> Callable
        Decorator: Turn unexpected handler exceptions into HTTP 500 responses

Example:
    >>> from fastshortener.utils.helpers import get_short_url, validate_url
    >>> get_short_url('aBcDeFgH', 'https://fast.aeekay.co/')
    'https://fast.aeekay.co/aBcDeFgH'
    >>> validate_url('https://example.com/page?id=1')
    'https://example.com/page?id=1'
"""

import os
import logging
import functools
from typing import Any
from urllib.parse import urlsplit
from collections.abc import Callable

from fastshortener.constants import UNKNOWN_INTERNAL_SERVER_ERROR
from fastshortener.exceptions import InvalidURLError, MissingEnvironmentVariableError
from fastshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from fastshortener.utils.responses import response_500
from fastshortener.utils.runtime import running_locally


logger = logging.getLogger(__name__)


def validate_url(url: Any) -> str:
    """Ensure the given value is an absolute URL

    The URL must contain a scheme and a host. It is returned verbatim;
    no normalization is applied.

    Args:
        url (Any): Candidate URL.

    Returns:
        str: The same URL.

    Raises:
        InvalidURLError: If the URL is not a string, contains whitespace,
                         or lacks a scheme or host.
    """
    if not isinstance(url, str) or not url:
        raise InvalidURLError(f"couldn't parse url: {url!r}")
    if any(c.isspace() for c in url):
        raise InvalidURLError(f"couldn't parse url: {url!r} contains whitespace")

    try:
        components = urlsplit(url)
        components.port  # noqa: B018 raises ValueError on malformed ports
    except ValueError as e:
        raise InvalidURLError(f"couldn't parse url: {url!r} ({e})") from e

    if not components.scheme or not components.hostname:
        raise InvalidURLError(f"couldn't parse url: {url!r} is not an absolute URL")
    return url


def get_short_url(shortcode: str, domain: str) -> str:
    """Get string representation of shortened URL

    Args:
        shortcode (str): shortcode
        domain (str): domain to prefix, with or without protocol

    Returns:
        str: short url string representation
    """
    return f'{domain.rstrip("/")}/{shortcode}'


def get_header(event: LambdaEvent, name: str) -> str | None:
    """Look up a request header in an API Gateway event, ignoring case."""
    headers = event.get('headers') or {}
    name = name.lower()
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return None


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: 'APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator


def guarantee_500_response(handler: Callable[[LambdaEvent, LambdaContext], LambdaResponse]) -> Callable:
    """Decorator: respond with HTTP 500 when a lambda handler raises unexpectedly

    When running locally the exception is re-raised instead, so it shows up
    in the SAM console.
    """

    @functools.wraps(handler)
    def wrapper(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
        try:
            return handler(event, context)
        except Exception:
            if running_locally():
                raise
            logger.exception(
                'Unhandled exception in lambda handler. Responding with 500.',
                extra={'event': UNKNOWN_INTERNAL_SERVER_ERROR},
            )
            return response_500(error_code=UNKNOWN_INTERNAL_SERVER_ERROR)

    return wrapper
