"""API Gateway proxy responses returned by the lambda handlers

Error bodies have the shape {"error": "<message>"}; 500 responses may also
carry an "error_code" for unexpected failures.

Functions:
    response_200(body) -> dict:
        JSON success response.
    response_301(*, location) -> dict:
        Permanent redirect to `location`.
    response_400(message) -> dict:
        Client error with a message.
    response_500(message=None, error_code=None) -> dict:
        Server error; the message is appended to 'Internal Server Error'.

Example:
    >>> response_400('invalid key for uri')
    {'statusCode': 400, 'headers': {'Content-Type': 'application/json'}, 'body': '{"error": "invalid key for uri"}'}
    >>> response_500('error creating URL')['body']
    '{"error": "Internal Server Error (error creating URL)"}'
"""

import json
from typing import Any

from fastshortener.types import LambdaResponse


JSON_HEADERS = {'Content-Type': 'application/json'}


def response_200(body: dict[str, Any]) -> LambdaResponse:
    return {
        'statusCode': 200,
        'headers': dict(JSON_HEADERS),
        'body': json.dumps(body),
    }


def response_301(*, location: str) -> LambdaResponse:
    return {
        'statusCode': 301,
        'headers': {'Location': location},
        'body': json.dumps({}),  # no body needed for redirects
    }


def response_400(message: str) -> LambdaResponse:
    return {
        'statusCode': 400,
        'headers': dict(JSON_HEADERS),
        'body': json.dumps({'error': message}),
    }


def response_500(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    base = 'Internal Server Error'
    body = {'error': base if not message else f'{base} ({message})'}
    if error_code:
        body['error_code'] = error_code
    return {
        'statusCode': 500,
        'headers': dict(JSON_HEADERS),
        'body': json.dumps(body),
    }
