import sys
from typing import TextIO

from tempshortener.notifications.base import EvictionNotifier


class ConsoleEvictionNotifier(EvictionNotifier):
    """Print eviction alerts for the interactive shell user.

    Args:
        stream (TextIO | None):
            Output stream. Defaults to `sys.stdout` at the time of printing.
    """

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream

    def on_quota_reached(self, owner_id: str, shortcode: str) -> None:
        self._alert(f'Click limit reached for short link: {shortcode}', 'Link removed.')

    def on_expired(self, owner_id: str, shortcode: str) -> None:
        self._alert(f'Short link expired: {shortcode}', 'Link lifetime is over. Link removed.')

    def _alert(self, headline: str, detail: str) -> None:
        stream = self.stream or sys.stdout
        print(f'\n[ALERT] {headline}', file=stream)
        print(f'{detail}\n', file=stream, flush=True)
