"""Unit tests for the redirect_url AWS Lambda handler.

Test coverage includes:

1. Successful redirect
   - Ensures a stored shortcode yields HTTP 301 to the original URL.

2. Bad requests
   - Missing shortcode returns HTTP 400.
   - Reserved words return HTTP 400 without building the DAO.
   - Unknown shortcodes return HTTP 400.

3. Configuration and data store errors
   - Config, DAO initialization and lookup failures return HTTP 500.
"""

import json
from unittest.mock import MagicMock

import pytest

from fastshortener.lambdas.redirect_url import app
from fastshortener.models import ShortURLModel
from fastshortener.dao.base import ShortURLBaseDAO
from fastshortener.dao.exceptions import DataStoreError, ShortURLNotFoundError
from fastshortener.exceptions import MissingEnvironmentVariableError


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture()
def apigw_event():
    return {
        'resource': '/{shortcode}',
        'path': '/qWeRtYuI',
        'httpMethod': 'GET',
        'headers': {'User-Agent': 'pytest'},
        'pathParameters': {'shortcode': 'qWeRtYuI'},
        'requestContext': {'resourcePath': '/{shortcode}', 'httpMethod': 'GET', 'stage': 'test'},
    }


@pytest.fixture()
def config():
    return {
        'sql': {'url': 'postgresql+psycopg://fast@db/fast'},
        'shortener': {'store_timeout': 2.5},
    }


@pytest.fixture()
def short_url_dao():
    _dao = MagicMock(spec=ShortURLBaseDAO)
    _dao.get.return_value = ShortURLModel(target='https://example.com/Some/Page?q=1', shortcode='qWeRtYuI')
    return _dao


@pytest.fixture()
def build_dao(short_url_dao):
    return MagicMock(return_value=short_url_dao)


@pytest.fixture(autouse=True)
def _patch_lambda_dependencies(monkeypatch, config, build_dao):
    monkeypatch.setenv('APP_ENV', 'test')
    monkeypatch.delenv('APP_NAME', raising=False)
    monkeypatch.delenv('AWS_SAM_LOCAL', raising=False)
    monkeypatch.setattr(app, 'load_config', lambda *a, **kw: config)
    monkeypatch.setattr(app, 'build_short_url_dao', build_dao)


# -------------------------------
# 1. Successful redirect
# -------------------------------


def test_lambda_handler(apigw_event, short_url_dao, build_dao, config):
    """Ensure Lambda redirects to the stored original URL."""
    response = app.lambda_handler(apigw_event, None)

    assert response['statusCode'] == 301
    assert response['headers']['Location'] == 'https://example.com/Some/Page?q=1'
    assert json.loads(response['body']) == {}

    build_dao.assert_called_once_with(config, prefix=None, timeout=2.5)
    short_url_dao.get.assert_called_once_with('qWeRtYuI', timeout=2.5)


# -------------------------------
# 2. Bad requests
# -------------------------------


@pytest.mark.parametrize('path_parameters', [None, {}, {'shortcode': ''}])
def test_lambda_handler_with_missing_shortcode(apigw_event, build_dao, path_parameters):
    apigw_event['pathParameters'] = path_parameters

    response = app.lambda_handler(apigw_event, None)

    assert response['statusCode'] == 400
    assert json.loads(response['body']) == {'error': "missing 'shortcode' in path"}
    build_dao.assert_not_called()


@pytest.mark.parametrize('shortcode', ['ping', 'error', 'shorten', 'api'])
def test_lambda_handler_with_reserved_shortcode(apigw_event, build_dao, shortcode):
    """Ensure reserved words never reach the data store."""
    apigw_event['pathParameters'] = {'shortcode': shortcode}

    response = app.lambda_handler(apigw_event, None)

    assert response['statusCode'] == 400
    assert json.loads(response['body']) == {'error': 'invalid key for uri'}
    build_dao.assert_not_called()


def test_lambda_handler_with_configured_reserved_words(apigw_event, config, short_url_dao):
    config['shortener']['reserved_words'] = ['health']

    apigw_event['pathParameters'] = {'shortcode': 'health'}
    assert app.lambda_handler(apigw_event, None)['statusCode'] == 400

    apigw_event['pathParameters'] = {'shortcode': 'ping'}
    assert app.lambda_handler(apigw_event, None)['statusCode'] == 301
    short_url_dao.get.assert_called_once_with('ping', timeout=2.5)


def test_lambda_handler_with_unknown_shortcode(apigw_event, short_url_dao):
    short_url_dao.get.side_effect = ShortURLNotFoundError("Short URL with code 'qWeRtYuI' not found.")

    response = app.lambda_handler(apigw_event, None)

    assert response['statusCode'] == 400
    assert json.loads(response['body']) == {'error': "error retrieving URI: short url 'qWeRtYuI' doesn't exist"}


# -------------------------------
# 3. Configuration and data store errors
# -------------------------------


def test_lambda_handler_with_configuration_error(monkeypatch, apigw_event, build_dao):
    load_config = MagicMock(side_effect=MissingEnvironmentVariableError("Missing required environment variables: 'APPCONFIG_APP_ID'"))
    monkeypatch.setattr(app, 'load_config', load_config)

    response = app.lambda_handler(apigw_event, None)

    assert response['statusCode'] == 500
    assert json.loads(response['body']) == {'error': 'Internal Server Error'}
    build_dao.assert_not_called()


def test_lambda_handler_with_unreachable_data_store(apigw_event, build_dao):
    build_dao.side_effect = DataStoreError("Can't connect to database at postgresql+psycopg://fast@db/fast.")

    response = app.lambda_handler(apigw_event, None)

    assert response['statusCode'] == 500


def test_lambda_handler_with_lookup_failure(apigw_event, short_url_dao):
    short_url_dao.get.side_effect = DataStoreError('SQL data store error at postgresql+psycopg://fast@db/fast: OperationalError.')

    response = app.lambda_handler(apigw_event, None)

    assert response['statusCode'] == 500
    assert json.loads(response['body']) == {'error': 'Internal Server Error (error retrieving URI)'}


def test_lambda_handler_with_single_string_reserved_words(apigw_event, config, build_dao):
    """Ensure a malformed reserved word setting fails loudly instead of letting 'ping' through."""
    config['shortener']['reserved_words'] = 'ping'
    apigw_event['pathParameters'] = {'shortcode': 'ping'}

    response = app.lambda_handler(apigw_event, None)

    assert response['statusCode'] == 500
    assert json.loads(response['body']) == {'error': 'Internal Server Error'}
    build_dao.assert_not_called()
