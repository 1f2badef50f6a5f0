import logging
from typing import TYPE_CHECKING

from localshortener.services import RedirectState
from localshortener.types import HandlerEvent, HandlerResponse
from localshortener.utils.helpers import guarantee_500_response, get_short_url
from localshortener.handlers.requests import header
from localshortener.handlers.responses import response_302, response_400, response_404, response_410
from localshortener.handlers.redirect_url.constants import (
    MISSING_SHORTCODE,
    SHORT_URL_NOT_FOUND,
    SHORT_URL_EXPIRED,
    REDIRECT_SUCCESS,
)

if TYPE_CHECKING:
    from localshortener.app import Application


logger = logging.getLogger(__name__)


@guarantee_500_response
def handler(event: HandlerEvent, app: 'Application') -> HandlerResponse:
    """Handle GET /{shortcode}

    This handler follows this procedure to redirect URLs:
    - Step 1: Extract shortcode from request path
    - Step 2: Resolve the shortcode (records a click when redirecting)
    - Step 3: Redirect client to target URL

    HTTP responses:
        302: Successful redirect
            headers:
                Location: target URL destination
            body:
                delay: seconds the client should wait before navigating
        400: Bad client request
            message: missing shortcode in path parameters
        404: Shortcode not found
        410: Short URL expired
        500: Internal server error

    Example:
        >>> event = {'pathParameters': {'shortcode': 'promo1'}, 'headers': {'Referer': 'https://news.ycombinator.com'}}
        >>> response = handler(event, app)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    # 1- Extract shortcode from request's path
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if not shortcode:
        logger.info('Missing "shortcode" in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return response_400(message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)
    logger.debug('Client requested short URL %s.', get_short_url(shortcode, event))

    # 2- Resolve the shortcode
    resolution = app.shortener.resolve(shortcode, referrer=header(event, 'Referer'))

    if resolution.state == RedirectState.NOT_FOUND:
        logger.info('Short URL not found. Responding with 404.', extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND})
        return response_404(message=resolution.message, error_code=SHORT_URL_NOT_FOUND)

    if resolution.state == RedirectState.EXPIRED:
        logger.info('Short URL expired. Responding with 410.', extra={'shortcode': shortcode, 'event': SHORT_URL_EXPIRED})
        return response_410(message=resolution.message, error_code=SHORT_URL_EXPIRED)

    # 3- Redirect client to target URL
    logger.info('Redirecting client to target URL. Responding with 302.', extra={'shortcode': shortcode, 'event': REDIRECT_SUCCESS})
    return response_302(location=resolution.record.target, message=resolution.message, delay=resolution.delay)
