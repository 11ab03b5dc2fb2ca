import logging

from tempshortener.notifications.base import EvictionNotifier
from tempshortener.constants import LINK_QUOTA_REACHED, LINK_EXPIRED


logger = logging.getLogger(__name__)


class LoggingEvictionNotifier(EvictionNotifier):
    """Report evictions as structured log lines."""

    def on_quota_reached(self, owner_id: str, shortcode: str) -> None:
        logger.info(
            'Click limit reached for short link. Link removed.',
            extra={'owner_id': owner_id, 'shortcode': shortcode, 'event': LINK_QUOTA_REACHED},
        )

    def on_expired(self, owner_id: str, shortcode: str) -> None:
        logger.info(
            'Short link expired. Link removed.',
            extra={'owner_id': owner_id, 'shortcode': shortcode, 'event': LINK_EXPIRED},
        )
