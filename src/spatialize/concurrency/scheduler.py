"""Cancellable deferred callbacks."""

import heapq
import itertools
import threading
from typing import Callable, List, Optional, Tuple

from spatialize.core.interfaces import IScheduledTask, IScheduler
from spatialize.utils.log import get_logger
from spatialize.utils.validate import validate_ramp

logger = get_logger(__name__)


class ScheduledTask(IScheduledTask):
    """A callback that runs at most once unless cancelled first."""

    def __init__(self, callback: Callable[[], None], due: float):
        self.due = due
        self._callback = callback
        self._lock = threading.Lock()
        self._cancelled = False
        self._done = False
        self._timer: Optional[threading.Timer] = None

    def attach_timer(self, timer: threading.Timer) -> None:
        """Bind the timer that will call run(), so cancel() also stops it."""
        self._timer = timer

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        return self._done

    def cancel(self) -> None:
        with self._lock:
            if self._done:
                return
            self._cancelled = True
        if self._timer is not None:
            self._timer.cancel()

    def run(self) -> None:
        """Run the callback unless cancelled or already run."""
        with self._lock:
            if self._cancelled or self._done:
                return
            self._done = True
        try:
            self._callback()
        except Exception:
            logger.exception("Error in scheduled task")


class ThreadingScheduler(IScheduler):
    """
    Scheduler backed by ``threading.Timer``.

    Callbacks run on the timer thread; callers must guard any state the
    callback shares with the calling thread.
    """

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        delay = validate_ramp(delay)
        task = ScheduledTask(callback, due=delay)
        # Daemon timers never block interpreter exit
        timer = threading.Timer(delay, task.run)
        timer.daemon = True
        task.attach_timer(timer)
        timer.start()
        logger.debug(f"Scheduled task in {delay:.3f}s")
        return task


class ManualScheduler(IScheduler):
    """
    Deterministic scheduler driven by an explicit clock.

    Nothing runs until ``advance()`` moves the clock past a task's due time.
    Used by tests and offline rendering.
    """

    def __init__(self):
        self._now = 0.0
        self._seq = itertools.count()
        self._tasks: List[Tuple[float, int, ScheduledTask]] = []

    @property
    def now(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        delay = validate_ramp(delay)
        task = ScheduledTask(callback, due=self._now + delay)
        heapq.heappush(self._tasks, (task.due, next(self._seq), task))
        return task

    def pending(self) -> int:
        """Number of tasks that are neither cancelled nor run."""
        return sum(1 for _, _, t in self._tasks if not (t.cancelled or t.done))

    def advance(self, seconds: float) -> int:
        """
        Move the clock forward and run every task that came due, in order.

        Returns:
            Number of callbacks run.
        """
        target = self._now + validate_ramp(seconds)
        ran = 0
        while self._tasks and self._tasks[0][0] <= target:
            due, _, task = heapq.heappop(self._tasks)
            self._now = due
            if task.cancelled:
                continue
            task.run()
            ran += 1
        self._now = target
        return ran
