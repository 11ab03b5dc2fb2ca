"""Concurrency tests for the ShortLinkMemoryDAO

These tests run real threads against one registry with a real
ExpiryScheduler. Threads are released together through a barrier to
maximize contention.

Test coverage includes:

1. Concurrent creation
   - Ensures concurrent create() calls by one owner yield distinct codes.

2. Concurrent consumption
   - Ensures no click is lost or double counted.
   - Ensures exactly `click_limit` clicks succeed under contention and the
     owner is notified exactly once.

3. Eviction races
   - Ensures consume() and the scheduled expiry check racing on one expired
     link evict it exactly once.

4. Scheduled expiry end-to-end
   - Ensures the background scheduler evicts links after their lifetime.
"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta

import pytest

from tempshortener.dao.memory import ShortLinkMemoryDAO
from tempshortener.dao.exceptions import (
    ShortLinkNotFoundError,
    ShortLinkExpiredError,
    LinkQuotaExceededError,
)


def run_concurrently(func, thread_count: int) -> list:
    """Run `func()` in `thread_count` threads started together; collect results or exceptions."""
    barrier = threading.Barrier(thread_count)

    def task():
        barrier.wait()
        try:
            return func()
        except Exception as e:
            return e

    with ThreadPoolExecutor(max_workers=thread_count) as executor:
        futures = [executor.submit(task) for _ in range(thread_count)]
        return [future.result(timeout=10) for future in futures]


def wait_until(predicate, timeout: float = 3.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


# -------------------------------
# 1. Concurrent creation
# -------------------------------


def test_concurrent_link_creation(live_dao):
    """10 threads, same owner, same URL: 10 distinct codes, 10 live links."""
    shortcodes = run_concurrently(lambda: live_dao.create('https://example.com', 'user-1', 5), thread_count=10)

    assert all(isinstance(shortcode, str) for shortcode in shortcodes)
    assert len(set(shortcodes)) == 10
    assert live_dao.count() == 10
    assert {link.shortcode for link in live_dao.list_by_owner('user-1')} == set(shortcodes)


# -------------------------------
# 2. Concurrent consumption
# -------------------------------


def test_concurrent_clicks_are_all_counted(live_dao):
    """5 threads clicking a link with limit 10: all succeed, 5 clicks recorded."""
    shortcode = live_dao.create('https://example.com', 'user-1', 10)

    results = run_concurrently(lambda: live_dao.consume(shortcode, 'user-1'), thread_count=5)

    assert results == ['https://example.com'] * 5
    [link] = live_dao.list_by_owner('user-1')
    assert link.click_count == 5
    assert live_dao.count() == 1


@pytest.mark.parametrize('thread_count, click_limit', [(10, 10), (20, 10), (32, 1)])
def test_concurrent_clicks_never_exceed_limit(live_dao, notifier, thread_count, click_limit):
    """Exactly `click_limit` clicks succeed; the rest fail; one notification is sent."""
    shortcode = live_dao.create('https://example.com', 'user-1', click_limit)

    results = run_concurrently(lambda: live_dao.consume(shortcode, 'user-1'), thread_count=thread_count)

    successes = [result for result in results if result == 'https://example.com']
    failures = [result for result in results if isinstance(result, Exception)]
    assert len(successes) == click_limit
    assert len(failures) == thread_count - click_limit
    assert all(isinstance(failure, (LinkQuotaExceededError, ShortLinkNotFoundError)) for failure in failures)
    assert live_dao.count() == 0
    notifier.on_quota_reached.assert_called_once_with('user-1', shortcode)


# -------------------------------
# 3. Eviction races
# -------------------------------


def test_consume_and_expiry_check_race(notifier, scheduler):
    """Consumers and the scheduled check racing on an expired link: one eviction, one notification."""
    dao = ShortLinkMemoryDAO(notifier=notifier, scheduler=scheduler, lifetime=timedelta(milliseconds=1))
    shortcode = dao.create('https://example.com', 'user-1', 100)
    _, callback, *args = scheduler.schedule_once.call_args.args
    time.sleep(0.02)

    calls = iter(range(10))

    def trigger():
        # First thread to get here plays the scheduler, the others click
        if next(calls) == 0:
            return callback(*args)
        return dao.consume(shortcode, 'user-1')

    results = run_concurrently(trigger, thread_count=10)

    assert all(result is None or isinstance(result, (ShortLinkExpiredError, ShortLinkNotFoundError)) for result in results)
    assert dao.count() == 0
    notifier.on_expired.assert_called_once_with('user-1', shortcode)


# -------------------------------
# 4. Scheduled expiry end-to-end
# -------------------------------


def test_scheduler_evicts_expired_links(notifier):
    """Links vanish on their own once the lifetime is over."""
    dao = ShortLinkMemoryDAO(notifier=notifier, lifetime=timedelta(milliseconds=100), shutdown_timeout=0.5)
    try:
        shortcode = dao.create('https://example.com', 'user-1', 5)
        assert dao.count() == 1

        assert wait_until(lambda: dao.count() == 0)
        assert dao.list_by_owner('user-1') == []
        assert wait_until(lambda: notifier.on_expired.call_count == 1)
        notifier.on_expired.assert_called_once_with('user-1', shortcode)
    finally:
        dao.shutdown()


def test_shutdown_is_bounded(notifier):
    """Shutdown with 12h checks pending returns promptly and discards them."""
    dao = ShortLinkMemoryDAO(notifier=notifier, shutdown_timeout=5.0)
    for i in range(20):
        dao.create(f'https://example.com/{i}', 'user-1', 5)

    start = time.monotonic()
    dao.shutdown()

    assert time.monotonic() - start < 1.0
    assert dao.scheduler.pending == 0
    notifier.on_expired.assert_not_called()
