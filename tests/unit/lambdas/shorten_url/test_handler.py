"""Unit tests for the shorten_url AWS Lambda handler.

Verify that the Lambda correctly handles incoming API Gateway events,
drives the shorten service, and returns proper HTTP responses in both
success and error scenarios.

Test coverage includes:

1. Successful shortening
   - Ensures the Lambda returns the code with display and canonical links (HTTP 200).
   - Ensures request metadata (User-Agent, Referer) is stored with the mapping.

2. Bad requests
   - Malformed bodies and a missing 'url' return HTTP 400.
   - Invalid URLs return HTTP 400 without connecting to the data store.

3. Configuration and data store errors
   - Config, DAO initialization and storage failures return HTTP 500.
   - Exhausted code generation returns HTTP 500.

4. Unexpected errors
   - Unhandled exceptions become HTTP 500 (re-raised when running locally).

Fixtures:
    - `apigw_event`: valid POST /shorten event in Lambda proxy format.
    - `config`: application configuration returned by load_config.
    - `short_url_dao`: mock DAO implementing ShortURLBaseDAO.
    - `generator`: scripted CodeGenerator.
    - `_patch_lambda_dependencies`: autouse fixture that monkeypatches app dependencies
                                    (config, DAO factory and code generator).
"""

import base64
import json
from unittest.mock import ANY, MagicMock

import pytest

from fastshortener.constants import UNKNOWN_INTERNAL_SERVER_ERROR
from fastshortener.lambdas.shorten_url import app
from fastshortener.models import ShortURLModel, URLMetadata
from fastshortener.dao.base import ShortURLBaseDAO
from fastshortener.dao.exceptions import DataStoreError, ShortURLAlreadyExistsError
from fastshortener.exceptions import BadConfigurationError
from fastshortener.utils import CodeGenerator


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture()
def apigw_event():
    return {
        'body': json.dumps({'url': 'https://example.com/blog/chuck-norris-is-awesome'}),
        'resource': '/shorten',
        'headers': {'User-Agent': 'pytest', 'Referer': 'https://example.org/links'},
        'httpMethod': 'POST',
        'path': '/shorten',
        'isBase64Encoded': False,
        'requestContext': {'resourcePath': '/shorten', 'httpMethod': 'POST', 'stage': 'test'},
    }


@pytest.fixture()
def context():
    class _Context:
        function_name = 'shorten_url'

    return _Context()


@pytest.fixture()
def config():
    return {
        'redis': {'host': 'redis.test', 'port': 6379, 'db': 0},
        'shortener': {'short_domain': 'fast.aeekay.co', 'long_domain': 'https://fast.aeekay.co', 'max_attempts': 3},
    }


@pytest.fixture()
def short_url_dao():
    return MagicMock(spec=ShortURLBaseDAO)


@pytest.fixture()
def generator():
    _generator = MagicMock(spec=CodeGenerator)
    _generator.generate.side_effect = ['qWeRtYuI', 'aBcDeFgH', 'zZzZzZzZ']
    return _generator


@pytest.fixture()
def build_dao(short_url_dao):
    return MagicMock(return_value=short_url_dao)


@pytest.fixture(autouse=True)
def _patch_lambda_dependencies(monkeypatch, config, build_dao, generator):
    monkeypatch.setenv('APP_ENV', 'test')
    monkeypatch.setenv('APP_NAME', 'fastshortener')
    monkeypatch.delenv('AWS_SAM_LOCAL', raising=False)
    monkeypatch.setattr(app, 'load_config', lambda *a, **kw: config)
    monkeypatch.setattr(app, 'build_short_url_dao', build_dao)
    monkeypatch.setattr(app, 'CodeGenerator', lambda *a, **kw: generator)


# -------------------------------
# 1. Successful shortening
# -------------------------------


def test_lambda_handler(apigw_event, context, short_url_dao, build_dao, config):
    """Ensure Lambda successfully shortens URLs and stores the mapping."""
    target_url = 'https://example.com/blog/chuck-norris-is-awesome'

    response = app.lambda_handler(apigw_event, context)
    body = json.loads(response['body'])

    assert response['statusCode'] == 200
    assert body == {
        'data': {
            'uri': 'qWeRtYuI',
            'shorten_url': 'fast.aeekay.co/qWeRtYuI',
            'shorten_long_url': 'https://fast.aeekay.co/qWeRtYuI',
        }
    }

    build_dao.assert_called_once_with(config, prefix='fastshortener:test', timeout=5.0)
    short_url = ShortURLModel(
        target=target_url,
        shortcode='qWeRtYuI',
        metadata=URLMetadata(agent='pytest', referer='https://example.org/links'),
    )
    short_url_dao.insert.assert_called_once_with(short_url, timeout=ANY)


def test_lambda_handler_retries_taken_code(apigw_event, context, short_url_dao):
    short_url_dao.insert.side_effect = [ShortURLAlreadyExistsError("Short URL with code 'qWeRtYuI' already exists."), short_url_dao]

    response = app.lambda_handler(apigw_event, context)

    assert response['statusCode'] == 200
    assert json.loads(response['body'])['data']['uri'] == 'aBcDeFgH'
    assert short_url_dao.insert.call_count == 2


def test_lambda_handler_with_base64_body(apigw_event, context):
    apigw_event['body'] = base64.b64encode(apigw_event['body'].encode('utf-8')).decode('ascii')
    apigw_event['isBase64Encoded'] = True

    response = app.lambda_handler(apigw_event, context)

    assert response['statusCode'] == 200


def test_lambda_handler_without_headers(apigw_event, context, short_url_dao):
    apigw_event['headers'] = None

    response = app.lambda_handler(apigw_event, context)

    assert response['statusCode'] == 200
    assert short_url_dao.insert.call_args.args[0].metadata == URLMetadata()


# -------------------------------
# 2. Bad requests
# -------------------------------


@pytest.mark.parametrize(
    'body',
    [
        '{"invalid_json": true',
        json.dumps({'link': 'https://example.com'}),
        json.dumps({'url': ''}),
        json.dumps(['https://example.com']),
        None,
    ],
)
def test_lambda_handler_with_unreadable_body(apigw_event, context, build_dao, body):
    """Ensure bad bodies or a missing 'url' return HTTP 400."""
    apigw_event['body'] = body

    response = app.lambda_handler(apigw_event, context)

    assert response['statusCode'] == 400
    assert json.loads(response['body']) == {'error': 'unable to retrieve data'}
    build_dao.assert_not_called()


def test_lambda_handler_with_bad_base64_body(apigw_event, context):
    apigw_event['body'] = 'not base64!'
    apigw_event['isBase64Encoded'] = True

    response = app.lambda_handler(apigw_event, context)

    assert response['statusCode'] == 400


@pytest.mark.parametrize('url', ['example.com/page', '/relative', 'https://exa mple.com', 42])
def test_lambda_handler_with_invalid_url(apigw_event, context, build_dao, url):
    """Ensure invalid URLs are rejected before the data store is touched."""
    apigw_event['body'] = json.dumps({'url': url})

    response = app.lambda_handler(apigw_event, context)
    body = json.loads(response['body'])

    assert response['statusCode'] == 400
    assert body['error'].startswith("error creating URL: couldn't parse url")
    build_dao.assert_not_called()


# -------------------------------
# 3. Configuration and data store errors
# -------------------------------


def test_lambda_handler_with_configuration_error(monkeypatch, apigw_event, context):
    """Ensure config errors return HTTP 500."""
    load_config = MagicMock(side_effect=BadConfigurationError("AppConfig document has no 'configs' entry for function 'shorten_url'."))
    monkeypatch.setattr(app, 'load_config', load_config)

    response = app.lambda_handler(apigw_event, context)

    assert response['statusCode'] == 500
    assert json.loads(response['body']) == {'error': 'Internal Server Error'}


def test_lambda_handler_with_bad_shortener_settings(apigw_event, context, config):
    config['shortener']['code_length'] = 0

    response = app.lambda_handler(apigw_event, context)

    assert response['statusCode'] == 500


def test_lambda_handler_with_unreachable_data_store(apigw_event, context, build_dao):
    build_dao.side_effect = DataStoreError("Can't connect to Redis at redis.test:6379/0.")

    response = app.lambda_handler(apigw_event, context)

    assert response['statusCode'] == 500
    assert json.loads(response['body']) == {'error': 'Internal Server Error'}


def test_lambda_handler_with_storage_failure(apigw_event, context, short_url_dao):
    short_url_dao.insert.side_effect = DataStoreError('Redis at redis.test:6379/0 timed out.')

    response = app.lambda_handler(apigw_event, context)

    assert response['statusCode'] == 500
    assert json.loads(response['body']) == {'error': 'Internal Server Error (error creating URL)'}
    short_url_dao.insert.assert_called_once()


def test_lambda_handler_with_exhausted_generation(apigw_event, context, short_url_dao):
    """Ensure the Lambda gives up after max_attempts taken codes."""
    short_url_dao.insert.side_effect = ShortURLAlreadyExistsError('taken')

    response = app.lambda_handler(apigw_event, context)

    assert response['statusCode'] == 500
    assert json.loads(response['body']) == {'error': 'Internal Server Error (error creating URL)'}
    assert short_url_dao.insert.call_count == 3


# -------------------------------
# 4. Unexpected errors
# -------------------------------


def test_lambda_handler_with_unexpected_error(apigw_event, context, build_dao):
    build_dao.side_effect = RuntimeError('boom')

    response = app.lambda_handler(apigw_event, context)

    assert response['statusCode'] == 500
    assert json.loads(response['body']) == {'error': 'Internal Server Error', 'error_code': UNKNOWN_INTERNAL_SERVER_ERROR}


def test_lambda_handler_reraises_unexpected_error_locally(monkeypatch, apigw_event, context, build_dao):
    monkeypatch.setenv('APP_ENV', 'local')
    build_dao.side_effect = RuntimeError('boom')

    with pytest.raises(RuntimeError, match='boom'):
        app.lambda_handler(apigw_event, context)
