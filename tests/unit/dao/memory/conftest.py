from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from tempshortener.dao.memory import ExpiryScheduler, ShortLinkMemoryDAO
from tempshortener.notifications import EvictionNotifier


@pytest.fixture
def notifier() -> EvictionNotifier:
    return MagicMock(spec=EvictionNotifier)


@pytest.fixture
def scheduler() -> ExpiryScheduler:
    """Mock scheduler that accepts every task without running it."""
    _scheduler = MagicMock(spec=ExpiryScheduler)
    _scheduler.schedule_once.return_value = True
    return _scheduler


@pytest.fixture
def dao(notifier, scheduler) -> ShortLinkMemoryDAO:
    """Registry with mocked notifier and scheduler (no background threads)."""
    return ShortLinkMemoryDAO(notifier=notifier, scheduler=scheduler)


@pytest.fixture
def live_dao(notifier):
    """Registry with a real ExpiryScheduler, shut down after the test."""
    _dao = ShortLinkMemoryDAO(notifier=notifier, lifetime=timedelta(hours=12), shutdown_timeout=0.5)
    yield _dao
    _dao.shutdown()
