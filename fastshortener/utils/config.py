"""Utility functions for application configuration management.

This module provides a standardized interface for Lambda functions to access
configuration data stored in **AWS AppConfig**. Each environment (`APP_ENV`) has
a dedicated AppConfig *Environment* within the shared AppConfig *Application*
identified by `APP_NAME`. Configuration data is stored as a JSON document under
a configuration profile (typically `backend-config`).

The configuration JSON follows this structure:

    {
        "build": 7,
        "active_backend": "redis",
        "shortener": {
            "short_domain": "fast.aeekay.co",
            "long_domain": "https://fast.aeekay.co",
            "code_length": 8,
            "reserved_words": ["ping", "error", "shorten", "api"],
            "max_attempts": 10,
            "store_timeout": 5.0
        },
        "configs": {
            "shorten_url": {
                "redis": { ... },
                "sql": { ... }
            },
            "redirect_url": {
                "redis": { ... },
                "sql": { ... }
            }
        }
    }

Each Lambda loads the active backend section of its own entry under "configs"
(e.g., "shorten_url") together with the shared "shortener" section.

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`), defaulting to 'local'.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return application prefix for DAOs, or None if `APP_NAME` is not set.

    load_config(function_name: str) -> dict
        Load configuration for a given Lambda from AWS AppConfig. In SAM, load
        configuration from a local AppConfig agent.

Classes:
    ShortenerSettings
        Validated shortener settings injected into the services.

Example:
    >>> from fastshortener.utils.config import load_config, ShortenerSettings
    >>> app_config = load_config('shorten_url')
    >>> app_config['redis']['host']
    'redis.internal'
    >>> ShortenerSettings.from_config(app_config).code_length
    8
"""

import os
import json
import functools
import logging
import urllib.parse
import urllib.request
from dataclasses import dataclass
from collections.abc import Callable
from typing import Any, Optional

import boto3

from fastshortener.constants import ENV, Defaults
from fastshortener.exceptions import BadConfigurationError
from fastshortener.types import AppConfig, LambdaConfiguration
from fastshortener.utils.helpers import require_environment
from fastshortener.utils.runtime import running_locally


logger = logging.getLogger(__name__)

SHORTENER_SECTION = 'shortener'


def app_env() -> str:
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'fastshortener'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'fastshortener:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def _extract_function_config(document: AppConfig, function_name: str) -> LambdaConfiguration:
    """Pick the active backend section for one function plus the shared shortener settings."""
    try:
        backend = document['active_backend']
        backend_config = document['configs'][function_name][backend]
    except KeyError as e:
        raise BadConfigurationError(f"AppConfig document has no '{e.args[0]}' entry for function '{function_name}'.") from e

    return {
        backend: backend_config,
        SHORTENER_SECTION: document.get(SHORTENER_SECTION, {}),
    }


def _sam_load_local_appconfig(func: Callable) -> Callable:
    """Decorator: load AppConfig from a local AppConfig Agent when running under SAM.

    Behavior:
        - If the application is running locally and `APPCONFIG_AGENT_URL` is set
          to a safe local URL, fetch the configuration JSON from the local agent.
        - Else, call the wrapped function (which pulls from AWS AppConfig via boto3).

    Environment variables used:
        APPCONFIG_AGENT_URL     : Base URL of the local AppConfig Agent (e.g., http://appconfig-agent:2772).
        APPCONFIG_PROFILE_NAME  : Optional profile name (default: "backend-config").
    """

    def __validate_appconfig_url(url: str | None) -> str:
        if not url:
            return ''
        components = urllib.parse.urlparse(url)
        if components.scheme not in {'http', 'https'}:
            raise BadConfigurationError(f'Bad scheme {url}')
        if components.hostname not in {'localhost', '127.0.0.1', 'host.docker.internal', 'appconfig-agent'}:
            raise BadConfigurationError(f'Bad host {url}')
        if components.port not in {2772, None}:
            raise BadConfigurationError(f'Bad port {url}')
        return url

    @functools.wraps(func)
    def wrapper(function_name: str) -> LambdaConfiguration:
        agent_url = __validate_appconfig_url(os.getenv(ENV.AppConfig.AGENT_URL))
        if not running_locally() or not agent_url:
            return func(function_name)

        profile_name = os.getenv(ENV.AppConfig.PROFILE_NAME, 'backend-config')
        url = f'{agent_url}/applications/{app_name()}/environments/{app_env()}/configurations/{profile_name}'

        logger.debug('Trying to load AppConfig from local agent.', extra={'agentUrl': url, 'functionName': function_name})
        with urllib.request.urlopen(url, timeout=5) as r:  # noqa: S310
            document = json.load(r)

        data = _extract_function_config(document, function_name)
        logger.debug('Loaded AppConfig from local agent.', extra={'functionName': function_name, 'build': document.get('build')})
        return data

    return wrapper


@_sam_load_local_appconfig
@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_config(function_name: str) -> LambdaConfiguration:
    """Load configuration for a given Lambda from AWS AppConfig.

    Environment variables required:
        APPCONFIG_APP_ID       : AppConfig Application ID
        APPCONFIG_ENV_ID       : AppConfig Environment ID
        APPCONFIG_PROFILE_ID   : AppConfig Configuration Profile ID

    Args:
        function_name (str):
            Name of the Lambda (e.g., "shorten_url" or "redirect_url").

    Returns:
        dict: {<active backend>: {...}, "shortener": {...}}

    Raises:
        MissingEnvironmentVariableError: If an AppConfig identifier is not set.
        BadConfigurationError: If the document lacks the function's backend section.
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'functionName': function_name})

    appconfig = boto3.client('appconfigdata')

    # Start an AppConfig data session
    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
        EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
        ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
    )['InitialConfigurationToken']

    # Fetch the configuration
    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    document = json.loads(content.decode('utf-8'))

    data = _extract_function_config(document, function_name)
    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'functionName': function_name, 'build': document.get('build')})
    return data


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _is_positive_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


@dataclass(frozen=True)
class ShortenerSettings:
    """Shortener settings consumed by ShortenService and RedirectResolver.

    Attributes:
        short_domain (str):
            Domain used for the display form of short URLs, e.g. 'fast.aeekay.co'.
        long_domain (str):
            Domain with protocol used for the canonical link, e.g. 'https://fast.aeekay.co'.
        code_length (int):
            Number of characters in generated codes.
        reserved_words (frozenset[str]):
            Codes which must never be assigned or resolved.
        max_attempts (int):
            Upper bound on code generation attempts per shorten request.
        store_timeout (Optional[float]):
            Seconds a shorten/resolve request may spend on the data store.
            None disables the bound.
    """

    short_domain: str = Defaults.SHORT_DOMAIN
    long_domain: str = Defaults.LONG_DOMAIN
    code_length: int = Defaults.CODE_LENGTH
    reserved_words: frozenset[str] = Defaults.RESERVED_WORDS
    max_attempts: int = Defaults.MAX_ATTEMPTS
    store_timeout: Optional[float] = Defaults.STORE_TIMEOUT

    def __post_init__(self):
        if not _is_positive_int(self.code_length):
            raise BadConfigurationError(f'code_length must be a positive integer (given value: {self.code_length!r}).')
        if not _is_positive_int(self.max_attempts):
            raise BadConfigurationError(f'max_attempts must be a positive integer (given value: {self.max_attempts!r}).')
        if self.store_timeout is not None and not _is_positive_number(self.store_timeout):
            raise BadConfigurationError(f'store_timeout must be a positive number of seconds (given value: {self.store_timeout!r}).')
        if not isinstance(self.short_domain, str) or not self.short_domain:
            raise BadConfigurationError('short_domain must be a non-empty string.')
        if not isinstance(self.long_domain, str) or not urllib.parse.urlsplit(self.long_domain).scheme:
            raise BadConfigurationError(f'long_domain must include the protocol (given value: {self.long_domain!r}).')

        # A bare string would otherwise become a set of its letters
        if isinstance(self.reserved_words, str) or not isinstance(self.reserved_words, (list, tuple, set, frozenset)):
            raise BadConfigurationError(f'reserved_words must be a list of strings (given value: {self.reserved_words!r}).')
        if not all(isinstance(word, str) and word for word in self.reserved_words):
            raise BadConfigurationError(f'reserved_words must only hold non-empty strings (given value: {self.reserved_words!r}).')
        object.__setattr__(self, 'reserved_words', frozenset(self.reserved_words))

    @classmethod
    def from_config(cls, app_config: dict[str, Any]) -> 'ShortenerSettings':
        """Build settings from a `load_config()` result, falling back to defaults for missing keys."""
        section = app_config.get(SHORTENER_SECTION) or {}
        known = {k: v for k, v in section.items() if k in cls.__dataclass_fields__}
        unknown = set(section) - set(known)
        if unknown:
            logger.warning('Ignoring unknown shortener settings.', extra={'unknownSettings': sorted(unknown)})
        return cls(**known)
