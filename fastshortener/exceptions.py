class FastShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:fastshortener_error'


class InvalidURLError(FastShortenerError):
    """Raised when the URL to shorten is not an absolute URL."""

    error_code = 'shortener:invalid_url_error'


class ReservedWordError(FastShortenerError):
    """Raised when a short code collides with a reserved route name."""

    error_code = 'shortener:reserved_word_error'


class GenerationExhaustedError(FastShortenerError):
    """Raised when no free, non-reserved short code was found within the attempt bound."""

    error_code = 'shortener:generation_exhausted_error'


class NotFoundError(FastShortenerError):
    """Raised when no mapping exists for a short code."""

    error_code = 'shortener:not_found_error'


class StorePersistenceError(FastShortenerError):
    """Raised when the data store fails to read or write a mapping.

    No partial write is left behind, so callers may safely retry.
    """

    error_code = 'store:persistence_error'


class StoreTimeoutError(StorePersistenceError):
    """Raised when a store operation outlives the caller's timeout."""

    error_code = 'store:timeout_error'


class ConfigurationError(FastShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
