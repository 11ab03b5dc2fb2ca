"""Abstract base class for eviction notification sinks.

The registry reports every eviction to exactly one EvictionNotifier. The
surrounding application decides what a notification means: console output,
a log line, a metric, an e-mail, etc.

Responsibilities:
    - Receive quota-reached and expired events for evicted short links.

NOTE:
    - Notifiers are called synchronously, without any registry lock held.
    - Each evicted link produces at most one notification.
    - Exceptions raised by a notifier never reach registry callers; the
      registry logs them and carries on.
"""

from abc import ABC, abstractmethod


class EvictionNotifier(ABC):
    """Interface for eviction notification sinks.

    Methods:
        on_quota_reached(owner_id: str, shortcode: str) -> None:
            A short link reached its click limit and was removed.

        on_expired(owner_id: str, shortcode: str) -> None:
            A short link outlived its TTL and was removed.
    """

    @abstractmethod
    def on_quota_reached(self, owner_id: str, shortcode: str) -> None:
        """Report that a short link reached its click limit and was evicted.

        Args:
            owner_id (str): identity of the link's creator
            shortcode (str): code of the evicted link
        """
        pass

    @abstractmethod
    def on_expired(self, owner_id: str, shortcode: str) -> None:
        """Report that a short link expired and was evicted.

        Args:
            owner_id (str): identity of the link's creator
            shortcode (str): code of the evicted link
        """
        pass
