from fastshortener.utils.config import app_env, app_name, app_prefix, load_config, ShortenerSettings
from fastshortener.utils.helpers import get_short_url, get_header, validate_url, require_environment, guarantee_500_response
from fastshortener.utils.shortener import CodeGenerator
from fastshortener.utils.reserved import ReservedWordFilter
from fastshortener.utils.logging import initialize_logging


__all__ = [
    'CodeGenerator',
    'ReservedWordFilter',
    'ShortenerSettings',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'get_short_url',
    'get_header',
    'validate_url',
    'require_environment',
    'guarantee_500_response',
    'initialize_logging',
]
