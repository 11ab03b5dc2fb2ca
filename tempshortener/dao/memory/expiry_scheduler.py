"""One-shot delayed task scheduler for short link expiry checks.

A single daemon worker thread pops tasks from a heap ordered by due time
(monotonic clock) and runs them. There is no recurring poll: every created
link schedules exactly one check.

Classes:
    ExpiryScheduler:
        Delayed work queue with a bounded, non-raising shutdown.

Example:
    >>> scheduler = ExpiryScheduler()
    >>> scheduler.schedule_once(timedelta(hours=12), print, 'aZ3kP9qL')
    True
    >>> scheduler.pending
    1
    >>> scheduler.shutdown(timeout=5)
    >>> scheduler.pending
    0
"""

import heapq
import itertools
import logging
import threading
import time
from datetime import timedelta
from collections.abc import Callable
from typing import Any


logger = logging.getLogger(__name__)


class ExpiryScheduler:
    """Run callbacks once after a delay on a background worker thread.

    Attributes:
        name (str):
            Name of the worker thread.

    Methods:
        schedule_once(delay, callback, *args) -> bool:
            Arrange `callback(*args)` to run after `delay`.
            Returns False if the scheduler was shut down.

        shutdown(timeout: float = 5.0) -> None:
            Stop accepting tasks, run tasks due within `timeout`, discard the rest.

    NOTE:
        - Callbacks run on the worker thread, one at a time. A slow callback
          delays the ones queued after it.
        - Exceptions raised by callbacks are logged and swallowed so that one
          faulty check doesn't stop the remaining ones.
    """

    def __init__(self, name: str = 'expiry-scheduler', clock: Callable[[], float] = time.monotonic):
        self.name = name
        self._clock = clock
        self._condition = threading.Condition()
        self._tasks: list[tuple[float, int, Callable[..., Any], tuple[Any, ...]]] = []
        self._sequence = itertools.count()
        self._accepting = True
        self._worker: threading.Thread | None = None

    @property
    def pending(self) -> int:
        with self._condition:
            return len(self._tasks)

    @property
    def accepting(self) -> bool:
        with self._condition:
            return self._accepting

    def schedule_once(self, delay: timedelta, callback: Callable[..., Any], *args: Any) -> bool:
        """Run `callback(*args)` once, `delay` from now

        Args:
            delay (timedelta):
                Time to wait before running the callback. Negative delays run as soon as possible.
            callback (Callable):
                Function to call on the worker thread.
            *args:
                Positional arguments passed to the callback.

        Returns:
            bool: True if the task was queued, False if the scheduler was shut down.
        """
        due = self._clock() + max(delay.total_seconds(), 0.0)
        with self._condition:
            if not self._accepting:
                logger.warning('Scheduler %s is shut down. Task %r rejected.', self.name, callback)
                return False
            # NOTE: the sequence number keeps heap ordering stable for equal
            #       due times and avoids comparing callbacks.
            heapq.heappush(self._tasks, (due, next(self._sequence), callback, args))
            self._ensure_worker()
            self._condition.notify()
        return True

    def shutdown(self, timeout: float = 5.0) -> None:
        """Stop the scheduler with a bounded wait

        Tasks due within `timeout` seconds still run, later tasks are discarded.
        If the worker is still busy when the timeout elapses, it is abandoned
        (it's a daemon thread) and any remaining tasks are dropped.

        Calling shutdown() more than once is harmless.

        Args:
            timeout (float): maximum number of seconds to wait for the worker.
        """
        with self._condition:
            self._accepting = False
            # Drop everything that can't become due within the grace window
            deadline = self._clock() + timeout
            kept = [task for task in self._tasks if task[0] <= deadline]
            discarded = len(self._tasks) - len(kept)
            self._tasks = kept
            heapq.heapify(self._tasks)
            worker = self._worker
            self._condition.notify_all()

        if worker is not None and worker is not threading.current_thread():
            worker.join(timeout)

        with self._condition:
            discarded += len(self._tasks)
            self._tasks.clear()
            self._condition.notify_all()

        if discarded:
            logger.info('Scheduler %s discarded %d pending task(s) on shutdown.', self.name, discarded)

    def _ensure_worker(self) -> None:
        # NOTE: must be called with self._condition held
        if self._worker is None or not self._worker.is_alive():
            self._worker = threading.Thread(target=self._run, name=self.name, daemon=True)
            self._worker.start()

    def _next_task(self) -> tuple[Callable[..., Any], tuple[Any, ...]] | None:
        """Block until a task is due. Return None once the worker should exit."""
        with self._condition:
            while True:
                if not self._tasks:
                    if not self._accepting:
                        return None
                    self._condition.wait()
                    continue

                due, _, callback, args = self._tasks[0]
                remaining = due - self._clock()
                if remaining > 0:
                    self._condition.wait(remaining)
                    continue

                heapq.heappop(self._tasks)
                return callback, args

    def _run(self) -> None:
        while (task := self._next_task()) is not None:
            callback, args = task
            try:
                callback(*args)
            except Exception:
                logger.exception('Scheduled task %r failed.', callback, extra={'task_args': args})
