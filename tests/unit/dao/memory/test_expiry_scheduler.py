"""Unit tests for ExpiryScheduler.

These tests use a real worker thread with short delays.

Test coverage includes:

1. Scheduling
   - Ensures a task runs exactly once after its delay.
   - Ensures tasks run in due-time order regardless of insertion order.
   - Ensures negative delays run as soon as possible.
   - Ensures a failing callback is logged and doesn't stop the worker.

2. Shutdown
   - Ensures tasks scheduled after shutdown are rejected.
   - Ensures far-future tasks are discarded without waiting for them.
   - Ensures tasks due within the shutdown timeout still run.
   - Ensures shutdown is idempotent and works before any task was scheduled.
"""

import logging
import threading
import time
from datetime import timedelta

from tempshortener.dao.memory import ExpiryScheduler


def wait_for(event: threading.Event, timeout: float = 3.0) -> bool:
    return event.wait(timeout)


# -------------------------------
# 1. Scheduling
# -------------------------------


def test_task_runs_once_after_delay():
    scheduler = ExpiryScheduler()
    calls = []
    done = threading.Event()

    def callback(value):
        calls.append((value, time.monotonic()))
        done.set()

    try:
        start = time.monotonic()
        assert scheduler.schedule_once(timedelta(milliseconds=50), callback, 'aZ3kP9qL') is True

        assert wait_for(done)
        time.sleep(0.05)
        assert len(calls) == 1
        value, ran_at = calls[0]
        assert value == 'aZ3kP9qL'
        assert ran_at - start >= 0.05
        assert scheduler.pending == 0
    finally:
        scheduler.shutdown(timeout=0.5)


def test_tasks_run_in_due_order():
    scheduler = ExpiryScheduler()
    order = []
    done = threading.Event()

    def callback(label):
        order.append(label)
        if len(order) == 3:
            done.set()

    try:
        scheduler.schedule_once(timedelta(milliseconds=150), callback, 'third')
        scheduler.schedule_once(timedelta(milliseconds=50), callback, 'first')
        scheduler.schedule_once(timedelta(milliseconds=100), callback, 'second')

        assert wait_for(done)
        assert order == ['first', 'second', 'third']
    finally:
        scheduler.shutdown(timeout=0.5)


def test_negative_delay_runs_immediately():
    scheduler = ExpiryScheduler()
    done = threading.Event()

    try:
        scheduler.schedule_once(timedelta(seconds=-10), done.set)

        assert wait_for(done, timeout=1.0)
    finally:
        scheduler.shutdown(timeout=0.5)


def test_failing_callback_does_not_stop_worker(caplog):
    scheduler = ExpiryScheduler()
    done = threading.Event()

    def explode():
        raise RuntimeError('boom')

    try:
        with caplog.at_level(logging.ERROR, logger='tempshortener.dao.memory.expiry_scheduler'):
            scheduler.schedule_once(timedelta(milliseconds=10), explode)
            scheduler.schedule_once(timedelta(milliseconds=50), done.set)

            assert wait_for(done)

        assert any(record.exc_info and isinstance(record.exc_info[1], RuntimeError) for record in caplog.records)
    finally:
        scheduler.shutdown(timeout=0.5)


# -------------------------------
# 2. Shutdown
# -------------------------------


def test_schedule_after_shutdown_is_rejected(caplog):
    scheduler = ExpiryScheduler()
    scheduler.shutdown(timeout=0.1)

    with caplog.at_level(logging.WARNING, logger='tempshortener.dao.memory.expiry_scheduler'):
        assert scheduler.schedule_once(timedelta(seconds=1), print) is False

    assert scheduler.accepting is False
    assert scheduler.pending == 0
    assert 'rejected' in caplog.text


def test_shutdown_discards_far_future_tasks(caplog):
    scheduler = ExpiryScheduler()
    callback_ran = threading.Event()
    for _ in range(5):
        scheduler.schedule_once(timedelta(hours=1), callback_ran.set)
    assert scheduler.pending == 5

    with caplog.at_level(logging.INFO, logger='tempshortener.dao.memory.expiry_scheduler'):
        start = time.monotonic()
        scheduler.shutdown(timeout=2.0)
        elapsed = time.monotonic() - start

    assert elapsed < 1.0
    assert scheduler.pending == 0
    assert not callback_ran.is_set()
    assert 'discarded 5 pending task(s)' in caplog.text


def test_shutdown_drains_tasks_due_within_timeout():
    scheduler = ExpiryScheduler()
    soon = threading.Event()
    late = threading.Event()
    scheduler.schedule_once(timedelta(milliseconds=100), soon.set)
    scheduler.schedule_once(timedelta(hours=1), late.set)

    scheduler.shutdown(timeout=1.0)

    assert soon.is_set()
    assert not late.is_set()
    assert scheduler.pending == 0


def test_shutdown_is_idempotent():
    scheduler = ExpiryScheduler()
    scheduler.schedule_once(timedelta(hours=1), print)

    scheduler.shutdown(timeout=0.1)
    scheduler.shutdown(timeout=0.1)

    assert scheduler.pending == 0
    assert scheduler.accepting is False


def test_shutdown_without_tasks():
    scheduler = ExpiryScheduler()

    scheduler.shutdown(timeout=0.1)

    assert scheduler.pending == 0
