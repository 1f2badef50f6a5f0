"""HTTP response builders shared by the route handlers

Every builder returns the handler response format:
    {'statusCode': int, 'headers': dict, 'body': str (JSON)}
"""

import json
from typing import Any

from localshortener.types import HandlerResponse


JSON_HEADERS = {'Content-Type': 'application/json'}


def _response(status_code: int, body: dict[str, Any], headers: dict[str, str] | None = None) -> HandlerResponse:
    return {
        'statusCode': status_code,
        'headers': {**JSON_HEADERS, **(headers or {})},
        'body': json.dumps(body),
    }


def response_200(**body: Any) -> HandlerResponse:
    return _response(200, body)


def response_302(*, location: str, **body: Any) -> HandlerResponse:
    return _response(302, body, headers={'Location': location})


def response_400(message: str | None = None, error_code: str | None = None, errors: dict[str, str] | None = None) -> HandlerResponse:
    base = 'Bad Request'
    body: dict[str, Any] = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    if errors:
        body['errors'] = errors
    return _response(400, body)


def response_401(message: str | None = None, error_code: str | None = None) -> HandlerResponse:
    body = {'message': message or 'Unauthorized'}
    if error_code:
        body['errorCode'] = error_code
    return _response(401, body)


def response_404(message: str | None = None, error_code: str | None = None) -> HandlerResponse:
    body = {'message': message or 'Not Found'}
    if error_code:
        body['errorCode'] = error_code
    return _response(404, body)


def response_409(message: str | None = None, error_code: str | None = None) -> HandlerResponse:
    body = {'message': message or 'Conflict'}
    if error_code:
        body['errorCode'] = error_code
    return _response(409, body)


def response_410(message: str | None = None, error_code: str | None = None) -> HandlerResponse:
    body = {'message': message or 'Gone'}
    if error_code:
        body['errorCode'] = error_code
    return _response(410, body)


def redirect_to_login() -> HandlerResponse:
    """Response for protected routes requested without a logged in user"""
    return response_302(location='/login', message='Authentication required')
