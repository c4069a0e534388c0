from enum import StrEnum


class Defaults:
    """Default shortener settings."""

    SHORT_DOMAIN = 'fast.aeekay.co'  # Display domain (no protocol)
    LONG_DOMAIN = 'https://fast.aeekay.co'  # Canonical domain with protocol
    CODE_LENGTH = 8
    MAX_ATTEMPTS = 10  # Generation attempts per shorten request (reserved hits + collisions)
    STORE_TIMEOUT = 5.0  # Seconds
    # Names of system routes which must never be handed out as short codes
    RESERVED_WORDS = frozenset({'ping', 'error', 'shorten', 'api'})


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'
        AGENT_URL = 'APPCONFIG_AGENT_URL'
        PROFILE_NAME = 'APPCONFIG_PROFILE_NAME'


class Backend(StrEnum):
    """Supported short URL data stores."""

    REDIS = 'redis'
    SQL = 'sql'


# Log events
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
RESERVED_SHORTCODE = 'RESERVED_SHORTCODE'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
INVALID_REQUEST_BODY = 'INVALID_REQUEST_BODY'
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'

# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
