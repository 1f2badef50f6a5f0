import logging
from typing import TYPE_CHECKING

from localshortener.types import HandlerEvent, HandlerResponse
from localshortener.utils.helpers import guarantee_500_response, get_short_url
from localshortener.handlers.responses import response_200, redirect_to_login
from localshortener.handlers.stats.constants import STATS_SUCCESS

if TYPE_CHECKING:
    from localshortener.app import Application


logger = logging.getLogger(__name__)


@guarantee_500_response
def handler(event: HandlerEvent, app: 'Application') -> HandlerResponse:
    """Handle GET /stats

    Expired records of the current user are swept first, then every remaining
    record is listed newest first with its click events.

    HTTP responses:
        200: Statistics
            totalURLs, totalClicks, urls (each with `shortURL` and `expired`)
        302: Not logged in, redirect to /login
        500: Internal server error
    """
    user = app.auth.current_user()
    if user is None:
        logger.info('Anonymous stats request. Redirecting to login.')
        return redirect_to_login()

    app.shortener.refresh(user.id)
    stats = app.shortener.statistics(user.id).to_dict()
    for url in stats['urls']:
        url['shortURL'] = get_short_url(url['shortcode'], event)

    logger.info('Statistics computed. Responding with 200.', extra={'event': STATS_SUCCESS, 'user_id': user.id})
    return response_200(**stats)
