import logging
from typing import TYPE_CHECKING

from localshortener.exceptions import BatchValidationError
from localshortener.services import ShortenRequest
from localshortener.types import HandlerEvent, HandlerResponse
from localshortener.utils.helpers import guarantee_500_response, get_short_url
from localshortener.handlers.requests import parse_json_body, BadRequestBody
from localshortener.handlers.responses import response_200, response_400, redirect_to_login
from localshortener.handlers.shorten_url.constants import INVALID_BODY, INVALID_FIELDS, SHORTEN_SUCCESS

if TYPE_CHECKING:
    from localshortener.app import Application


logger = logging.getLogger(__name__)


def _to_request(entry: dict) -> ShortenRequest:
    return ShortenRequest(
        long_url=str(entry.get('longURL') or ''),
        validity_period='' if entry.get('validityPeriod') is None else str(entry['validityPeriod']),
        custom_shortcode=str(entry.get('customShortcode') or '').strip(),
    )


@guarantee_500_response
def handler(event: HandlerEvent, app: 'Application') -> HandlerResponse:
    """Handle POST / (shorten up to 5 URLs at once)

    This handler follows this procedure to shorten URLs:
    - Step 1: Make sure a user is logged in
    - Step 2: Extract the URL entries from the request body
    - Step 3: Validate and store the batch (via ShortenerService)
    - Step 4: Respond with the created records and their short URLs

    Request body:
        {"urls": [{"longURL": "...", "validityPeriod": "30", "customShortcode": "promo1"}, ...]}

    HTTP responses:
        200: Successful URL shortening
            urls: created records, each with its `shortURL`
        302: Not logged in, redirect to /login
        400: Bad client request
            errors: field errors keyed '<field>_<index>'
        500: Internal server error

    Example:
        >>> event = {'body': '{"urls": [{"longURL": "example.com"}]}'}
        >>> response = handler(event, app)
        >>> response['statusCode']
        200
    """
    # 1- Protected route
    user = app.auth.current_user()
    if user is None:
        logger.info('Anonymous shorten request. Redirecting to login.')
        return redirect_to_login()

    # 2- Extract URL entries from request body
    try:
        body = parse_json_body(event)
    except BadRequestBody as e:
        logger.info('Unreadable request body. Responding with 400.', extra={'event': INVALID_BODY})
        return response_400(message=str(e), error_code=INVALID_BODY)

    entries = body.get('urls')
    if not isinstance(entries, list) or not all(isinstance(entry, dict) for entry in entries):
        logger.info("Missing 'urls' list in request body. Responding with 400.", extra={'event': INVALID_BODY})
        return response_400(message="missing 'urls' list in JSON body", error_code=INVALID_BODY)

    # 3- Validate and store the batch
    try:
        records = app.shortener.shorten([_to_request(entry) for entry in entries], owner=user.id)
    except BatchValidationError as e:
        logger.info('Invalid fields in shorten batch. Responding with 400.', extra={'event': INVALID_FIELDS, 'errors': e.errors})
        return response_400(message='invalid fields', error_code=INVALID_FIELDS, errors=e.errors)

    # 4- Respond with the created records
    logger.info(
        'Shortened %d URL(s). Responding with 200.',
        len(records),
        extra={'event': SHORTEN_SUCCESS, 'user_id': user.id},
    )
    return response_200(
        message=f'Successfully shortened {len(records)} URL(s)',
        urls=[{**record.to_dict(), 'shortURL': get_short_url(record.shortcode, event)} for record in records],
    )
