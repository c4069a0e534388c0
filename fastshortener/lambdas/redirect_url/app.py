import logging

from fastshortener.constants import MISSING_SHORTCODE, RESERVED_SHORTCODE, SHORT_URL_NOT_FOUND, REDIRECT_SUCCESS
from fastshortener.dao.exceptions import DataStoreError
from fastshortener.dao.factory import build_short_url_dao
from fastshortener.exceptions import ConfigurationError, NotFoundError, StorePersistenceError
from fastshortener.services import RedirectResolver
from fastshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from fastshortener.utils import ReservedWordFilter, ShortenerSettings, app_prefix, load_config
from fastshortener.utils.helpers import guarantee_500_response
from fastshortener.utils.responses import response_301, response_400, response_500


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to redirect URLs

    This Lambda handler follows this procedure to redirect URLs:
    - Step 1: Extract shortcode from request path
    - Step 2: Reject reserved words without touching the data store
    - Step 3: Resolve the original URL (via RedirectResolver)
    - Step 4: Permanently redirect client to the original URL

    HTTP responses:
        301: Successful redirect
            headers:
                Location: original URL
        400: Bad client request
            error: missing, reserved or unknown shortcode
        500: Internal server error
            error: config or data store failure

    Example:
        >>> event = {'pathParameters': {'shortcode': 'qWeRtYuI'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        301
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    # 0- Get application's config
    try:
        app_config = load_config('redirect_url')
        settings = ShortenerSettings.from_config(app_config)
    except ConfigurationError:
        logger.exception('Failed to load AppConfig for redirect URL function. Responding with 500.')
        return response_500()

    # 1- Extract shortcode from request's path
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if not shortcode:
        logger.info('Missing "shortcode" in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return response_400("missing 'shortcode' in path")

    # 2- Reserved words never reach the data store (not even its healthcheck)
    reserved = ReservedWordFilter(settings.reserved_words)
    if reserved.is_reserved(shortcode):
        logger.info('Reserved shortcode requested. Responding with 400.', extra={'shortcode': shortcode, 'event': RESERVED_SHORTCODE})
        return response_400('invalid key for uri')

    # 3- Resolve the original URL
    try:
        dao = build_short_url_dao(app_config, prefix=app_prefix(), timeout=settings.store_timeout)
    except (DataStoreError, ConfigurationError):
        logger.exception('Failed to initialize short URL data store. Responding with 500.')
        return response_500()

    resolver = RedirectResolver(dao, reserved)
    try:
        original_url = resolver.resolve(shortcode, timeout=settings.store_timeout)
    except NotFoundError as e:
        logger.info('Short URL record not found in database. Responding with 400.', extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND})
        return response_400(str(e))
    except StorePersistenceError:
        logger.exception('Failed to retrieve short URL. Responding with 500.', extra={'shortcode': shortcode})
        return response_500('error retrieving URI')

    # 4- Redirect client to original URL
    logger.info('Redirecting client to original URL. Responding with 301.', extra={'shortcode': shortcode, 'event': REDIRECT_SUCCESS})
    return response_301(location=original_url)
