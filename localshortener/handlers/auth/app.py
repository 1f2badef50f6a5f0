import logging
from typing import TYPE_CHECKING

from localshortener.exceptions import InvalidCredentialsError
from localshortener.dao.exceptions import UserAlreadyExistsError
from localshortener.types import HandlerEvent, HandlerResponse
from localshortener.utils.helpers import guarantee_500_response
from localshortener.handlers.requests import parse_json_body, BadRequestBody
from localshortener.handlers.responses import response_200, response_400, response_401, response_409
from localshortener.handlers.auth.constants import (
    INVALID_BODY,
    MISSING_FIELDS,
    INVALID_CREDENTIALS,
    ACCOUNT_EXISTS,
    LOGIN_SUCCESS,
    REGISTER_SUCCESS,
    LOGOUT_SUCCESS,
)

if TYPE_CHECKING:
    from localshortener.app import Application


logger = logging.getLogger(__name__)


def _required_fields(event: HandlerEvent, *names: str) -> tuple[dict | None, HandlerResponse | None]:
    try:
        body = parse_json_body(event)
    except BadRequestBody as e:
        logger.info('Unreadable request body. Responding with 400.', extra={'event': INVALID_BODY})
        return None, response_400(message=str(e), error_code=INVALID_BODY)

    missing = [name for name in names if not isinstance(body.get(name), str) or not body[name].strip()]
    if missing:
        logger.info('Missing fields in request body. Responding with 400.', extra={'event': MISSING_FIELDS, 'missing': missing})
        return None, response_400(
            message=f"missing {', '.join(repr(m) for m in missing)} in JSON body",
            error_code=MISSING_FIELDS,
        )
    return body, None


@guarantee_500_response
def login_handler(event: HandlerEvent, app: 'Application') -> HandlerResponse:
    """Handle POST /login

    HTTP responses:
        200: Logged in
            user: the logged in user
        400: Bad client request (invalid JSON, missing email or password)
        401: Invalid email or password
        500: Internal server error
    """
    body, error = _required_fields(event, 'email', 'password')
    if error:
        return error

    try:
        user = app.auth.login(body['email'].strip(), body['password'])
    except InvalidCredentialsError as e:
        logger.info('Login rejected. Responding with 401.', extra={'event': INVALID_CREDENTIALS})
        return response_401(message=str(e), error_code=INVALID_CREDENTIALS)

    logger.info('Login succeeded. Responding with 200.', extra={'event': LOGIN_SUCCESS, 'user_id': user.id})
    return response_200(message='Logged in', user=user.to_dict())


@guarantee_500_response
def register_handler(event: HandlerEvent, app: 'Application') -> HandlerResponse:
    """Handle POST /register

    HTTP responses:
        200: Registered and logged in
            user: the new user
        400: Bad client request (invalid JSON, missing name, email or password)
        409: An account with this email already exists
        500: Internal server error
    """
    body, error = _required_fields(event, 'name', 'email', 'password')
    if error:
        return error

    try:
        user = app.auth.register(body['email'].strip(), body['password'], body['name'].strip())
    except UserAlreadyExistsError as e:
        logger.info('Registration rejected. Responding with 409.', extra={'event': ACCOUNT_EXISTS})
        return response_409(message=str(e), error_code=ACCOUNT_EXISTS)

    logger.info('Registration succeeded. Responding with 200.', extra={'event': REGISTER_SUCCESS, 'user_id': user.id})
    return response_200(message='Registered', user=user.to_dict())


@guarantee_500_response
def logout_handler(event: HandlerEvent, app: 'Application') -> HandlerResponse:
    """Handle POST /logout (always 200, also when nobody is logged in)"""
    app.auth.logout()
    logger.info('Logout done. Responding with 200.', extra={'event': LOGOUT_SUCCESS})
    return response_200(message='Logged out')
