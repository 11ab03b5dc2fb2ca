"""Data Access Object (DAO) implementation for managing short links in memory

This module provides the in-process registry of ephemeral short links: a
ShortLinkBaseDAO implementation backed by two dictionaries and a one-shot
expiry scheduler. Nothing survives a restart.

Responsibilities:
    - Generate unique shortcodes and store short links;
    - Count clicks atomically per link and enforce click limits;
    - Evict links on quota exhaustion and on expiry (whichever comes first);
    - Index links per owner for listing and counting;
    - Report evictions to an EvictionNotifier.

Classes:
    ShortLinkMemoryDAO:
        Thread-safe in-memory short link registry.

Example:
    >>> from tempshortener.dao.memory import ShortLinkMemoryDAO
    >>> from tempshortener.notifications import LoggingEvictionNotifier

    >>> dao = ShortLinkMemoryDAO(notifier=LoggingEvictionNotifier())
    >>> shortcode = dao.create('https://a.example', 'u1', 1)
    >>> dao.consume(shortcode, 'u1')
    'https://a.example'
    >>> dao.count()
    0
    >>> dao.shutdown()
"""

import logging
import threading
from datetime import datetime, timedelta

from beartype import beartype

from tempshortener.models import ShortLinkModel
from tempshortener.constants import (
    TTL,
    DefaultTimeout,
    LINK_CREATED,
    LINK_CONSUMED,
    LINK_NOT_FOUND,
    LINK_EXPIRED,
    LINK_QUOTA_REACHED,
    NOTIFIER_FAILURE,
)
from tempshortener.exceptions import InvalidArgumentError
from tempshortener.dao.base import ShortLinkBaseDAO
from tempshortener.dao.memory.link_record import LinkRecord
from tempshortener.dao.memory.expiry_scheduler import ExpiryScheduler
from tempshortener.dao.exceptions import (
    ShortLinkNotFoundError,
    ShortLinkExpiredError,
    LinkQuotaExceededError,
    RegistryShutdownError,
)
from tempshortener.notifications import EvictionNotifier, LoggingEvictionNotifier
from tempshortener.utils.config import RegistrySettings
from tempshortener.utils.helpers import utc_now, seconds_until
from tempshortener.utils.shortener import generate_shortcode, make_seed


logger = logging.getLogger(__name__)


class ShortLinkMemoryDAO(ShortLinkBaseDAO):
    """In-memory registry of short links with click quotas and TTLs

    Concurrency model:
        - One registry-wide lock guards both indices (`by code` and `by owner`).
        - Each LinkRecord carries its own lock for the click check-and-increment.
        - The two locks are never held at the same time in `consume()`, and no
          lock is held while notifying or scheduling.
        - Eviction is idempotent. Whichever trigger (consume or scheduled expiry
          check) removes a link first also sends the only notification for it.

    Attributes:
        lifetime (timedelta):
            Time-To-Live of every created link.
        shutdown_timeout (float):
            Default bounded wait used by `shutdown()`.
        notifier (EvictionNotifier):
            Sink receiving eviction events.
        scheduler (ExpiryScheduler):
            Runs one expiry check per created link.

    Example:
        >>> dao = ShortLinkMemoryDAO(lifetime=timedelta(minutes=5))
        >>> shortcode = dao.create('https://example.com', 'user-1', 3)
        >>> [link.shortcode for link in dao.list_by_owner('user-1')] == [shortcode]
        True
    """

    def __init__(
        self,
        notifier: EvictionNotifier | None = None,
        scheduler: ExpiryScheduler | None = None,
        lifetime: timedelta = timedelta(seconds=TTL.TWELVE_HOURS),
        shutdown_timeout: float = DefaultTimeout.SHUTDOWN,
    ):
        """Initialize an empty registry

        Args:
            notifier (EvictionNotifier | None):
                Eviction sink. Defaults to LoggingEvictionNotifier.

            scheduler (ExpiryScheduler | None):
                Scheduler for expiry checks. A private one is created when omitted.

            lifetime (timedelta):
                Time-To-Live of created links. Defaults to 12 hours.

            shutdown_timeout (float):
                Seconds `shutdown()` waits for outstanding checks. Defaults to 5.
        """
        if lifetime <= timedelta(0):
            raise InvalidArgumentError(f'Link lifetime must be positive (given value: {lifetime}).')

        self.lifetime = lifetime
        self.shutdown_timeout = shutdown_timeout
        self.notifier = notifier or LoggingEvictionNotifier()
        self.scheduler = scheduler or ExpiryScheduler()

        self._lock = threading.Lock()
        self._by_code: dict[str, LinkRecord] = {}
        self._by_owner: dict[str, list[str]] = {}
        self._exhausted: dict[str, datetime] = {}  # shortcode -> original expiry time
        self._closed = False

    @classmethod
    def from_settings(cls, settings: RegistrySettings, notifier: EvictionNotifier | None = None) -> 'ShortLinkMemoryDAO':
        """Build a registry from resolved RegistrySettings."""
        return cls(
            notifier=notifier,
            lifetime=settings.link_lifetime,
            shutdown_timeout=settings.shutdown_timeout,
        )

    @beartype
    def create(self, target: str, owner_id: str, click_limit: int, **kwargs) -> str:
        """Store a new short link and schedule its expiry check

        The shortcode is generated and inserted under the registry lock, so two
        concurrent calls can never claim the same code. On collision a fresh seed
        is drawn until the code is free.

        Args:
            target (str):
                Original long URL. Must be non-empty.
            owner_id (str):
                Identity of the link's creator. Must be non-empty.
            click_limit (int):
                Number of permitted clicks. Must be positive.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            str: the new shortcode.

        Raises:
            InvalidArgumentError:
                If click_limit isn't positive, or target/owner_id are empty.
            RegistryShutdownError:
                If `shutdown()` was already called.

        Example:
            >>> dao.create('https://example.com', 'user-1', 5)
            'Gh71WPTk'
        """
        if isinstance(click_limit, bool) or click_limit < 1:
            raise InvalidArgumentError(f'Click limit must be a positive integer (given value: {click_limit!r}).')
        if not target:
            raise InvalidArgumentError('Target URL must be a non-empty string.')
        if not owner_id:
            raise InvalidArgumentError('Owner id must be a non-empty string.')

        with self._lock:
            if self._closed:
                raise RegistryShutdownError('Registry is shut down and no longer accepts short links.')

            shortcode = generate_shortcode(make_seed(owner_id))
            while shortcode in self._by_code or shortcode in self._exhausted:
                logger.debug('Shortcode collision on %s. Retrying with a fresh seed.', shortcode)
                shortcode = generate_shortcode(make_seed(owner_id))

            record = LinkRecord.new(target, shortcode, owner_id, click_limit, lifetime=self.lifetime)
            self._by_code[shortcode] = record
            self._by_owner.setdefault(owner_id, []).append(shortcode)

        if not self.scheduler.schedule_once(self.lifetime, self._expire_if_due, shortcode, owner_id):
            # NOTE: the link still expires lazily on its next consume() call
            logger.warning('Expiry check for short link %s not scheduled.', shortcode, extra={'shortcode': shortcode})

        logger.info(
            'Short link created.',
            extra={'shortcode': shortcode, 'click_limit': click_limit, 'event': LINK_CREATED},
        )
        return shortcode

    @beartype
    def consume(self, shortcode: str, owner_id: str, **kwargs) -> str:
        """Count one click on a short link and return its target

        NOTE: `owner_id` identifies the requester and is deliberately not compared
              with the link's owner: anyone holding a shortcode may consume it.

        Args:
            shortcode (str):
                Code of the short link.
            owner_id (str):
                Identity of the requester.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            str: the target URL.

        Raises:
            ShortLinkNotFoundError:
                If no live short link has this code.
            ShortLinkExpiredError:
                If the link outlived its TTL. The link is evicted first.
            LinkQuotaExceededError:
                If the click limit was already reached. The link is evicted first.
                Exhausted codes keep raising this error (instead of ShortLinkNotFoundError)
                until the link's original expiry time.

        Example:
            >>> dao.consume('Gh71WPTk', 'user-2')
            'https://example.com'
        """
        with self._lock:
            record = self._by_code.get(shortcode)
            exhausted = record is None and self._is_exhausted(shortcode)

        if exhausted:
            logger.info('Click limit already reached.', extra={'shortcode': shortcode, 'event': LINK_QUOTA_REACHED})
            raise LinkQuotaExceededError(f"Click limit reached for short link '{shortcode}'.")
        if record is None:
            logger.info('Short link not found.', extra={'shortcode': shortcode, 'event': LINK_NOT_FOUND})
            raise ShortLinkNotFoundError(f"Short link with code '{shortcode}' not found.")

        # NOTE: hit() checks expiry and quota and increments under the record's
        #       own lock. Between the lookup above and hit() another thread may
        #       have evicted the record; hit() then still fails on the quota or
        #       expiry check, and eviction below is a no-op.
        try:
            leftover_hits = record.hit()
        except ShortLinkExpiredError:
            if self._evict(record):
                self._notify(LINK_EXPIRED, record)
            raise
        except LinkQuotaExceededError:
            if self._evict(record, exhausted=True):
                self._notify(LINK_QUOTA_REACHED, record)
            raise

        logger.debug(
            'Leftover hits: %s.',
            leftover_hits,
            extra={'shortcode': shortcode, 'leftover_hits': leftover_hits, 'event': LINK_CONSUMED},
        )

        # The click that reaches the limit succeeds; the link is gone right after it
        if leftover_hits == 0 and self._evict(record, exhausted=True):
            self._notify(LINK_QUOTA_REACHED, record)

        return record.target

    @beartype
    def list_by_owner(self, owner_id: str, **kwargs) -> list[ShortLinkModel]:
        """Return snapshots of an owner's live short links in creation order

        Codes of links evicted in the meantime are skipped.

        Args:
            owner_id (str):
                Identity of the links' creator.

        Returns:
            list[ShortLinkModel]: possibly empty.
        """
        with self._lock:
            codes = list(self._by_owner.get(owner_id, ()))
            records = [self._by_code[code] for code in codes if code in self._by_code]

        return [record.snapshot() for record in records]

    def count(self, **kwargs) -> int:
        with self._lock:
            return len(self._by_code)

    @beartype
    def count_by_owner(self, owner_id: str, **kwargs) -> int:
        with self._lock:
            return sum(1 for code in self._by_owner.get(owner_id, ()) if code in self._by_code)

    def shutdown(self, timeout: float | None = None) -> None:
        """Stop accepting short links and drain outstanding expiry checks

        Expiry checks due within `timeout` seconds still run; the rest lapse.
        Links stay readable and consumable after shutdown.

        Args:
            timeout (float | None):
                Bounded wait in seconds. Defaults to `self.shutdown_timeout`.
        """
        with self._lock:
            self._closed = True

        self.scheduler.shutdown(self.shutdown_timeout if timeout is None else timeout)
        logger.debug('Registry shut down with %d live short link(s).', self.count())

    def _expire_if_due(self, shortcode: str, owner_id: str) -> None:
        """Scheduled expiry check for one short link

        No-op if the link was already evicted. If the timer fired before the
        wall clock reached the link's expiry time, the check is scheduled again
        for the remaining time.
        """
        with self._lock:
            record = self._by_code.get(shortcode)
            if record is None:
                # Links exhausted by clicks are remembered until this check
                self._exhausted.pop(shortcode, None)

        if record is None:
            logger.debug('Expiry check skipped: short link %s already evicted.', shortcode)
            return

        if not record.is_expired():
            remaining = timedelta(seconds=seconds_until(record.expires_at))
            logger.debug('Short link %s not expired yet. Rescheduling check in %s.', shortcode, remaining)
            self.scheduler.schedule_once(remaining, self._expire_if_due, shortcode, owner_id)
            return

        if self._evict(record):
            self._notify(LINK_EXPIRED, record)

    def _evict(self, record: LinkRecord, exhausted: bool = False) -> bool:
        """Remove a short link from both indices

        Only removes the exact record given, never a newer link that reuses the
        same shortcode.

        Args:
            record (LinkRecord):
                The record to remove.
            exhausted (bool):
                If True, remember the code as exhausted until the link's original
                expiry time, so later clicks fail with LinkQuotaExceededError
                instead of ShortLinkNotFoundError.

        Returns:
            bool: True if this call removed the link, False if it was already gone.
        """
        shortcode, owner_id = record.shortcode, record.owner_id
        with self._lock:
            if self._by_code.get(shortcode) is not record:
                return False
            del self._by_code[shortcode]

            if exhausted:
                self._exhausted[shortcode] = record.expires_at

            codes = self._by_owner.get(owner_id)
            if codes is not None:
                if shortcode in codes:
                    codes.remove(shortcode)
                if not codes:
                    del self._by_owner[owner_id]
            return True

    def _is_exhausted(self, shortcode: str) -> bool:
        # NOTE: must be called with self._lock held
        expires_at = self._exhausted.get(shortcode)
        if expires_at is None:
            return False
        if utc_now() >= expires_at:
            del self._exhausted[shortcode]
            return False
        return True

    def _notify(self, event: str, record: LinkRecord) -> None:
        handler = self.notifier.on_expired if event == LINK_EXPIRED else self.notifier.on_quota_reached
        logger.debug('Short link evicted.', extra={'shortcode': record.shortcode, 'event': event})
        try:
            handler(record.owner_id, record.shortcode)
        except Exception:
            logger.exception(
                'Eviction notifier failed.',
                extra={'shortcode': record.shortcode, 'event': NOTIFIER_FAILURE},
            )
