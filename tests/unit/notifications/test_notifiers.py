"""Unit tests for eviction notifiers.

Test coverage includes:

1. EvictionNotifier interface
   - Ensures the abstract base class can't be instantiated.

2. LoggingEvictionNotifier
   - Ensures evictions are logged at INFO with owner, shortcode and event code.

3. ConsoleEvictionNotifier
   - Ensures alerts are printed to the given stream, or stdout by default.
"""

import io
import logging

import pytest

from tempshortener.notifications import EvictionNotifier, LoggingEvictionNotifier, ConsoleEvictionNotifier


# -------------------------------
# 1. EvictionNotifier interface
# -------------------------------


def test_base_notifier_is_abstract():
    with pytest.raises(TypeError):
        EvictionNotifier()


# -------------------------------
# 2. LoggingEvictionNotifier
# -------------------------------


@pytest.mark.parametrize(
    'method, event',
    [
        ('on_quota_reached', 'LINK_QUOTA_REACHED'),
        ('on_expired', 'LINK_EXPIRED'),
    ],
)
def test_logging_notifier(caplog, method, event):
    notifier = LoggingEvictionNotifier()

    with caplog.at_level(logging.INFO, logger='tempshortener.notifications.logging_notifier'):
        getattr(notifier, method)('user-1', 'aZ3kP9qL')

    [record] = caplog.records
    assert record.levelno == logging.INFO
    assert record.owner_id == 'user-1'
    assert record.shortcode == 'aZ3kP9qL'
    assert record.event == event


# -------------------------------
# 3. ConsoleEvictionNotifier
# -------------------------------


def test_console_notifier_quota_reached():
    stream = io.StringIO()

    ConsoleEvictionNotifier(stream).on_quota_reached('user-1', 'aZ3kP9qL')

    output = stream.getvalue()
    assert '[ALERT] Click limit reached for short link: aZ3kP9qL' in output
    assert 'Link removed.' in output


def test_console_notifier_expired():
    stream = io.StringIO()

    ConsoleEvictionNotifier(stream).on_expired('user-1', 'aZ3kP9qL')

    output = stream.getvalue()
    assert '[ALERT] Short link expired: aZ3kP9qL' in output
    assert 'Link lifetime is over. Link removed.' in output


def test_console_notifier_defaults_to_stdout(capsys):
    ConsoleEvictionNotifier().on_expired('user-1', 'aZ3kP9qL')

    assert '[ALERT] Short link expired: aZ3kP9qL' in capsys.readouterr().out
