"""Schedulers running delayed actions such as SLA deadlines."""

import heapq
import itertools
import threading
from collections.abc import Callable
from typing import Protocol


class ScheduledAction(Protocol):
    """Handle to a pending delayed action."""

    def cancel(self) -> None:
        """Prevent the action from running if it has not run yet."""
        ...


class Scheduler(Protocol):
    """Protocol for schedulers.

    Allows dependency injection of a virtual clock for testing.
    """

    def schedule(self, delay: float, action: Callable[[], None]) -> ScheduledAction:
        """Run ``action`` once after ``delay`` seconds.

        Args:
            delay: Delay in seconds.
            action: Callable to run.

        Returns:
            Cancellable handle.
        """
        ...


class ThreadingScheduler:
    """Scheduler backed by daemon ``threading.Timer`` threads."""

    def schedule(self, delay: float, action: Callable[[], None]) -> threading.Timer:
        """Start a daemon timer for ``action``."""
        timer = threading.Timer(delay, action)
        timer.daemon = True
        timer.start()
        return timer


class _ManualAction:
    def __init__(self, deadline: float, action: Callable[[], None]) -> None:
        self.deadline = deadline
        self.action = action
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Virtual-time scheduler; actions run only when the clock is advanced.

    Actions due at the same instant run in scheduling order. Actions run on
    the thread calling ``advance``, outside the scheduler's lock, so they may
    schedule further actions.
    """

    def __init__(self) -> None:
        """Initialize the clock at zero."""
        self._lock = threading.Lock()
        self._now = 0.0
        self._sequence = itertools.count()
        self._queue: list[tuple[float, int, _ManualAction]] = []

    @property
    def now(self) -> float:
        """Current virtual time in seconds."""
        with self._lock:
            return self._now

    @property
    def pending(self) -> int:
        """Number of scheduled actions that have neither run nor been cancelled."""
        with self._lock:
            return sum(1 for _, _, action in self._queue if not action.cancelled)

    def schedule(self, delay: float, action: Callable[[], None]) -> _ManualAction:
        """Queue ``action`` at ``now + delay``."""
        with self._lock:
            handle = _ManualAction(self._now + delay, action)
            heapq.heappush(self._queue, (handle.deadline, next(self._sequence), handle))
            return handle

    def advance(self, seconds: float) -> None:
        """Move the clock forward, running every action that falls due.

        Args:
            seconds: Amount of virtual time to advance.
        """
        with self._lock:
            target = self._now + seconds
        while True:
            with self._lock:
                if not self._queue or self._queue[0][0] > target:
                    self._now = target
                    return
                deadline, _, handle = heapq.heappop(self._queue)
                self._now = deadline
            if not handle.cancelled:
                handle.action()
