import base64
import binascii
import json
import logging

from fastshortener.constants import INVALID_REQUEST_BODY, SHORTEN_SUCCESS
from fastshortener.dao.exceptions import DataStoreError
from fastshortener.dao.factory import build_short_url_dao
from fastshortener.exceptions import (
    ConfigurationError,
    GenerationExhaustedError,
    InvalidURLError,
    StorePersistenceError,
)
from fastshortener.models import URLMetadata
from fastshortener.services import ShortenService
from fastshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from fastshortener.utils import CodeGenerator, ShortenerSettings, app_prefix, load_config
from fastshortener.utils.helpers import get_header, guarantee_500_response, validate_url
from fastshortener.utils.responses import response_200, response_400, response_500


logger = logging.getLogger(__name__)


def _request_body(event: LambdaEvent) -> str:
    body = event.get('body') or '{}'
    if event.get('isBase64Encoded'):
        body = base64.b64decode(body).decode('utf-8')
    return body


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Load application config
    - Step 2: Extract and validate the original URL from the request body
    - Step 3: Capture request metadata (user agent, referer)
    - Step 4: Generate a unique code and store the mapping (via ShortenService)
    - Step 5: Respond to user with 200 success

    HTTP responses:
        200: Successful URL shortening
            data: {uri, shorten_url, shorten_long_url}
        400: Bad client request
            error: invalid JSON body, missing 'url' or invalid URL
        500: Internal server error
            error: config failure, data store failure or exhausted code generation

    Args:
        event (dict):
            API Gateway event payload in Lambda Proxy format.
        context (Any):
            AWS Lambda context object containing runtime information.

    Returns:
        dict: API Gateway-compatible response.

    Example:
        >>> event = {'body': '{"url": "https://example.com"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        200
        >>> json.loads(response['body'])['data']['shorten_long_url']
        'https://fast.aeekay.co/qWeRtYuI'
    """
    # 1- Load application config
    try:
        app_config = load_config('shorten_url')
        settings = ShortenerSettings.from_config(app_config)
    except ConfigurationError:
        logger.exception('Failed to load AppConfig for shorten URL function. Responding with 500.')
        return response_500()

    # 2- Extract original URL from request body
    try:
        request_body = json.loads(_request_body(event))
    except (json.JSONDecodeError, binascii.Error, UnicodeDecodeError):
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_REQUEST_BODY})
        return response_400('unable to retrieve data')

    original_url = request_body.get('url') if isinstance(request_body, dict) else None
    if not original_url:
        logger.info("Missing 'url' in JSON body. Responding with 400.", extra={'event': INVALID_REQUEST_BODY})
        return response_400('unable to retrieve data')

    # Reject invalid URLs before connecting to the data store
    try:
        validate_url(original_url)
    except InvalidURLError as e:
        logger.info('Invalid URL. Responding with 400.', extra={'event': INVALID_REQUEST_BODY, 'reason': str(e)})
        return response_400(f'error creating URL: {e}')

    # 3- Capture request metadata
    metadata = URLMetadata(agent=get_header(event, 'User-Agent'), referer=get_header(event, 'Referer'))

    # 4- Generate code and store mapping
    try:
        dao = build_short_url_dao(app_config, prefix=app_prefix(), timeout=settings.store_timeout)
    except (DataStoreError, ConfigurationError):
        logger.exception('Failed to initialize short URL data store. Responding with 500.')
        return response_500()

    service = ShortenService(dao, settings, generator=CodeGenerator())
    try:
        shortened = service.shorten(original_url, metadata=metadata)
    except GenerationExhaustedError:
        logger.exception('Could not generate a free short code. Responding with 500.')
        return response_500('error creating URL')
    except StorePersistenceError:
        logger.exception('Failed to store short URL. Responding with 500.')
        return response_500('error creating URL')

    # 5- Return successful response to user
    logger.info(
        'Created new short URL. Responding with 200.',
        extra={'shortcode': shortened.uri, 'shortUrl': shortened.shorten_long_url, 'event': SHORTEN_SUCCESS},
    )
    return response_200({'data': shortened.to_dict()})
