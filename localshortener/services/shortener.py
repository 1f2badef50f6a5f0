"""URL shortening, redirect resolution and statistics

Classes:
    ShortenRequest:
        One entry of a shorten batch, as typed by the client.
    RedirectState:
        Terminal states of a redirect resolution.
    RedirectResolution:
        Outcome of resolving a shortcode.
    URLStatistics:
        Records of an owner with aggregated click counts.
    ShortenerService:
        Facade over ShortURLBaseDAO and EventLogger.

Example:
    >>> service = ShortenerService(ShortURLKeyValueDAO(store=store), events)
    >>> [record] = service.shorten([ShortenRequest('example.com', '60', 'promo1')])
    >>> record.target, record.validity_period
    ('https://example.com', 60)
    >>> service.resolve('promo1').state
    <RedirectState.REDIRECTING: 'redirecting'>
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import StrEnum
from typing import Any
from collections.abc import Callable, Sequence

from localshortener.constants import TTL, Limits, Delay, GUEST_OWNER, DIRECT_REFERRER
from localshortener.exceptions import BatchValidationError
from localshortener.models import ShortURLModel
from localshortener.dao.base import ShortURLBaseDAO
from localshortener.dao.exceptions import ShortURLNotFoundError, DataStoreError
from localshortener.services.events import EventLogger
from localshortener.utils.helpers import utcnow, to_iso, mock_location
from localshortener.utils.shortener import generate_shortcode
from localshortener.utils.validation import (
    validate_url,
    validate_validity_period,
    validate_shortcode,
    parse_validity_period,
    sanitize_url,
    is_reserved_shortcode,
)


logger = logging.getLogger(__name__)

type ChangeCallback = Callable[[str, list[ShortURLModel]], None]


# fmt: off
@dataclass(frozen=True)
class ShortenRequest:
    long_url: str = ''                  # Raw URL, sanitized before use
    validity_period: str | int = ''     # Minutes, blank for the default
    custom_shortcode: str = ''          # Blank for a generated shortcode
# fmt: on

    def is_blank(self) -> bool:
        return not (str(self.long_url).strip() or str(self.validity_period).strip() or str(self.custom_shortcode).strip())


class RedirectState(StrEnum):
    NOT_FOUND = 'not_found'
    EXPIRED = 'expired'
    REDIRECTING = 'redirecting'


@dataclass(frozen=True)
class RedirectResolution:
    state: RedirectState
    shortcode: str
    message: str = ''
    record: ShortURLModel | None = None
    delay: float = 0.0


@dataclass(frozen=True)
class URLStatistics:
    records: list[ShortURLModel]
    total_urls: int
    total_clicks: int
    generated_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict[str, Any]:
        return {
            'totalURLs': self.total_urls,
            'totalClicks': self.total_clicks,
            'urls': [
                {**record.to_dict(), 'expired': record.is_expired(self.generated_at)}
                for record in self.records
            ],
        }


class ShortenerService:
    """Create short URLs, resolve them and report on them

    Every mutation (shorten, click, sweep) notifies the subscribers with the
    owner's fresh list of records.

    Attributes:
        short_urls (ShortURLBaseDAO):
            Storage of short URL records.
        events (EventLogger):
            Domain event log.
        redirect_delay (float):
            Seconds the navigation layer waits before following a redirect.
    """

    def __init__(self, short_urls: ShortURLBaseDAO, events: EventLogger, redirect_delay: float = Delay.REDIRECT):
        self.short_urls = short_urls
        self.events = events
        self.redirect_delay = redirect_delay
        self._subscribers: list[ChangeCallback] = []

    def shorten(self, requests: Sequence[ShortenRequest], owner: str = GUEST_OWNER) -> list[ShortURLModel]:
        """Validate a batch of shorten requests and store one record per non-blank entry

        The batch is validated as a whole before anything is written, then
        stored in one atomic write. When that write fails (e.g. Redis out of
        memory) the failure is logged and the records are returned unsaved.

        Raises:
            BatchValidationError:
                With errors keyed '<field>_<index>' when any entry is invalid.
        """
        errors = self._validate(requests)
        if errors:
            logger.info('Rejected shorten batch.', extra={'owner': owner, 'errors': errors})
            raise BatchValidationError(errors)

        taken = {r.custom_shortcode for r in requests if r.custom_shortcode}
        created = []
        for request in requests:
            if not str(request.long_url).strip():
                continue

            validity_period = parse_validity_period(request.validity_period) or TTL.DEFAULT_VALIDITY_MINUTES
            shortcode = request.custom_shortcode or generate_shortcode(
                lambda code: code in taken or is_reserved_shortcode(code) or self.short_urls.exists(code)
            )
            taken.add(shortcode)

            created_at = utcnow()
            created.append(
                ShortURLModel(
                    shortcode=shortcode,
                    target=sanitize_url(request.long_url),
                    created_at=created_at,
                    expires_at=created_at + timedelta(minutes=validity_period),
                    validity_period=validity_period,
                )
            )

        try:
            self.short_urls.insert_many(created, owner=owner)
        except DataStoreError as e:
            # Answered but not persisted (e.g. Redis out of memory)
            logger.warning('Failed to persist short URLs.', exc_info=True, extra={'owner': owner})
            self.events.error('Failed to save shortened URLs', {'shortcodes': [r.shortcode for r in created], 'error': str(e)})
            return created

        for record in created:
            logger.info('Short URL created.', extra={'owner': owner, 'shortcode': record.shortcode})
            self.events.url_created(record.shortcode, record.target)

        self._notify(owner)
        return created

    def resolve(self, shortcode: str, referrer: str | None = None, now: datetime | None = None) -> RedirectResolution:
        """Resolve a shortcode: NOT_FOUND, EXPIRED or REDIRECTING

        A click event (referrer, mocked location) is recorded only when redirecting.
        A click that can't be stored is logged and the redirect goes ahead.
        """
        now = now or utcnow()
        try:
            record = self.short_urls.get(shortcode)
        except ShortURLNotFoundError:
            logger.info('Shortcode not found.', extra={'shortcode': shortcode})
            self.events.error(f'Shortcode not found: {shortcode}')
            return RedirectResolution(RedirectState.NOT_FOUND, shortcode, message='Shortcode not found')
        except DataStoreError as e:
            self.events.error('Failed to process redirect', {'shortcode': shortcode, 'error': str(e)})
            raise

        if record.is_expired(now):
            logger.info('Expired short URL accessed.', extra={'shortcode': shortcode, 'expires_at': to_iso(record.expires_at)})
            self.events.error(f'Expired URL accessed: {shortcode}')
            return RedirectResolution(RedirectState.EXPIRED, shortcode, message='This shortened URL has expired', record=record)

        referrer = referrer or DIRECT_REFERRER
        try:
            updated = self.short_urls.hit(shortcode, referrer=referrer, location=mock_location())
        except DataStoreError as e:
            logger.warning('Failed to record click.', exc_info=True, extra={'shortcode': shortcode})
            self.events.error('Failed to record click', {'shortcode': shortcode, 'error': str(e)})
            updated = record
        else:
            self.events.url_clicked(shortcode, updated.target, referrer)
            owner = self.short_urls.owner(shortcode)
            if owner is not None:
                self._notify(owner)

        return RedirectResolution(
            RedirectState.REDIRECTING,
            shortcode,
            message=f'Redirecting to {updated.target}',
            record=updated,
            delay=self.redirect_delay,
        )

    def statistics(self, owner: str = GUEST_OWNER) -> URLStatistics:
        records = sorted(self.short_urls.all(owner), key=lambda r: r.created_at, reverse=True)
        return URLStatistics(
            records=records,
            total_urls=len(records),
            total_clicks=sum(len(r.clicks) for r in records),
        )

    def refresh(self, owner: str = GUEST_OWNER) -> list[ShortURLModel]:
        """Sweep the owner's expired records and return the remaining ones

        When the sweep can't be written the expired records are only filtered
        out of the result; the next refresh tries again.
        """
        try:
            records = self.short_urls.sweep_expired(owner)
        except DataStoreError as e:
            logger.warning('Failed to sweep expired short URLs.', exc_info=True, extra={'owner': owner})
            self.events.error('Failed to sweep expired URLs', {'owner': owner, 'error': str(e)})
            now = utcnow()
            return [r for r in self.short_urls.all(owner) if r.expires_at > now]
        self._notify(owner, records)
        return records

    def subscribe(self, callback: ChangeCallback) -> Callable[[], None]:
        """Register `callback(owner, records)` for change notifications

        Returns:
            Callable[[], None]: function removing the subscription.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _validate(self, requests: Sequence[ShortenRequest]) -> dict[str, str]:
        if len(requests) > Limits.MAX_BATCH_SIZE:
            return {'batch': f'At most {Limits.MAX_BATCH_SIZE} URLs can be shortened at once'}

        entries = [(i, r) for i, r in enumerate(requests) if not r.is_blank()]
        if not entries:
            return {'longURL_0': 'URL is required'}

        errors = {}
        for i, request in entries:
            long_url = str(request.long_url)
            if not long_url.strip():
                errors[f'longURL_{i}'] = 'URL is required'
            elif not validate_url(sanitize_url(long_url), self.events):
                errors[f'longURL_{i}'] = 'Please enter a valid URL'

            if str(request.validity_period).strip() and not validate_validity_period(request.validity_period, self.events):
                errors[f'validityPeriod_{i}'] = 'Must be a positive number (1-43200 minutes)'

            if request.custom_shortcode:
                if not validate_shortcode(request.custom_shortcode, self.events):
                    errors[f'customShortcode_{i}'] = 'Must be 4-10 alphanumeric characters'
                elif is_reserved_shortcode(request.custom_shortcode):
                    errors[f'customShortcode_{i}'] = 'This shortcode is reserved'
                elif self.short_urls.exists(request.custom_shortcode):
                    errors[f'customShortcode_{i}'] = 'This shortcode is already taken'

        seen = set()
        for i, request in entries:
            if not request.custom_shortcode:
                continue
            if request.custom_shortcode in seen:
                errors[f'customShortcode_{i}'] = 'Duplicate shortcode in form'
            seen.add(request.custom_shortcode)

        return errors

    def _notify(self, owner: str, records: list[ShortURLModel] | None = None) -> None:
        if not self._subscribers:
            return

        records = self.short_urls.all(owner) if records is None else records
        for callback in list(self._subscribers):
            try:
                callback(owner, list(records))
            except Exception:
                logger.exception('Change subscriber failed.', extra={'owner': owner})
