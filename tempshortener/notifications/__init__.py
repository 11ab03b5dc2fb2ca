from tempshortener.notifications.base import EvictionNotifier
from tempshortener.notifications.logging_notifier import LoggingEvictionNotifier
from tempshortener.notifications.console_notifier import ConsoleEvictionNotifier


__all__ = [
    'EvictionNotifier',
    'LoggingEvictionNotifier',
    'ConsoleEvictionNotifier',
]
