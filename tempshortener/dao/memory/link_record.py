"""Live, mutable short link record held by the in-memory registry.

Classes:
    LinkRecord:
        One shortcode-to-target mapping with its click counter and TTL.

Example:
    >>> record = LinkRecord.new('https://example.com', 'aZ3kP9qL', 'user-1', click_limit=2)
    >>> record.hit()
    1
    >>> record.hit()
    0
    >>> record.hit()
    Traceback (most recent call last):
        ...
    tempshortener.dao.exceptions.LinkQuotaExceededError: Click limit reached for short link 'aZ3kP9qL'.
"""

import threading
from datetime import datetime, timedelta

from tempshortener.models import ShortLinkModel
from tempshortener.constants import TTL
from tempshortener.dao.exceptions import LinkQuotaExceededError, ShortLinkExpiredError
from tempshortener.utils.helpers import utc_now


class LinkRecord:
    """Short link record with an atomic click counter.

    Every attribute except `click_count` is immutable after creation.
    `click_count` is only changed by `hit()`, which checks expiry and quota
    and increments the counter under the record's own lock. Two concurrent
    hits on the same record can therefore never both pass the quota check
    for the last remaining click.

    Attributes:
        target (str): original long URL
        shortcode (str): unique short identifier
        owner_id (str): identity of the link's creator
        click_limit (int): maximum number of successful hits
        click_count (int): hits consumed so far
        created_at (datetime): creation time (UTC)
        expires_at (datetime): expiry time (UTC)
    """

    __slots__ = ('target', 'shortcode', 'owner_id', 'click_limit', 'click_count', 'created_at', 'expires_at', '_lock')

    def __init__(
        self,
        target: str,
        shortcode: str,
        owner_id: str,
        click_limit: int,
        created_at: datetime,
        expires_at: datetime,
    ):
        self.target = target
        self.shortcode = shortcode
        self.owner_id = owner_id
        self.click_limit = click_limit
        self.click_count = 0
        self.created_at = created_at
        self.expires_at = expires_at
        self._lock = threading.Lock()

    @classmethod
    def new(
        cls,
        target: str,
        shortcode: str,
        owner_id: str,
        click_limit: int,
        lifetime: timedelta = timedelta(seconds=TTL.TWELVE_HOURS),
    ) -> 'LinkRecord':
        """Create a record starting now and expiring after `lifetime`."""
        created_at = utc_now()
        return cls(target, shortcode, owner_id, click_limit, created_at, created_at + lifetime)

    def is_expired(self) -> bool:
        return utc_now() >= self.expires_at

    def hit(self) -> int:
        """Consume one click.

        Returns:
            int: leftover hits after this click (0 means this was the last permitted click).

        Raises:
            ShortLinkExpiredError: If the record is past its expiry time.
            LinkQuotaExceededError: If the click limit was already reached.
        """
        with self._lock:
            if self.is_expired():
                raise ShortLinkExpiredError(f"Short link '{self.shortcode}' expired.")
            if self.click_count >= self.click_limit:
                raise LinkQuotaExceededError(f"Click limit reached for short link '{self.shortcode}'.")
            self.click_count += 1
            return self.click_limit - self.click_count

    def snapshot(self) -> ShortLinkModel:
        with self._lock:
            click_count = self.click_count

        return ShortLinkModel(
            target=self.target,
            shortcode=self.shortcode,
            owner_id=self.owner_id,
            click_limit=self.click_limit,
            click_count=click_count,
            created_at=self.created_at,
            expires_at=self.expires_at,
        )

    def __repr__(self) -> str:
        return f'<LinkRecord {self.shortcode} {self.click_count}/{self.click_limit} expires_at={self.expires_at.isoformat()}>'
