"""
Scheduler abstraction for timer-driven transitions

The round engine never touches wall-clock callbacks directly. It asks a
Scheduler to run a callback after a delay and cancels the returned handle
when the phase that armed it is left.

Implementations:
- SimulatedScheduler: logical clock advanced explicitly (tests, headless runs)
- TkScheduler: delegates to a Tk root's after()/after_cancel()
"""

import heapq
import itertools
import logging
import time
from collections.abc import Callable
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class Scheduler(Protocol):
    """Runs callbacks after a delay on the caller's single logical thread"""

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> Any:
        """Schedule callback; return a handle accepted by cancel()."""
        ...

    def cancel(self, handle: Any) -> None:
        """Cancel a pending callback; unknown or fired handles are ignored."""
        ...

    def now_ms(self) -> int:
        """Current time on this scheduler's clock."""
        ...


class SimulatedScheduler:
    """
    Deterministic scheduler driven by advance()

    Callbacks fire in deadline order, FIFO among equal deadlines. A callback
    may schedule further callbacks; those fire within the same advance() if
    their deadline falls inside the advanced window.

    Usage:
        scheduler = SimulatedScheduler()
        scheduler.call_later(1000, lambda: print("tick"))
        scheduler.advance(1000)   # prints "tick"
    """

    def __init__(self, start_ms: int = 0):
        self._now = start_ms
        self._queue: list[tuple[int, int, Callable[[], None]]] = []
        self._cancelled: set[int] = set()
        self._seq = itertools.count()
        self.fired_count = 0

    def now_ms(self) -> int:
        return self._now

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> int:
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be non-negative, got {delay_ms}")
        handle = next(self._seq)
        heapq.heappush(self._queue, (self._now + delay_ms, handle, callback))
        return handle

    def cancel(self, handle: int) -> None:
        if handle is None:
            return
        if any(entry[1] == handle for entry in self._queue):
            self._cancelled.add(handle)

    @property
    def pending_count(self) -> int:
        """Number of scheduled callbacks not yet fired or cancelled"""
        return sum(1 for entry in self._queue if entry[1] not in self._cancelled)

    def next_deadline(self) -> int | None:
        """Deadline of the earliest live callback, None when idle"""
        self._drop_cancelled_head()
        return self._queue[0][0] if self._queue else None

    def _drop_cancelled_head(self) -> None:
        while self._queue and self._queue[0][1] in self._cancelled:
            _, handle, _ = heapq.heappop(self._queue)
            self._cancelled.discard(handle)

    def advance(self, ms: int) -> int:
        """
        Move the clock forward, firing every callback that falls due

        Args:
            ms: Milliseconds to advance

        Returns:
            Number of callbacks fired
        """
        if ms < 0:
            raise ValueError(f"Cannot move clock backwards ({ms} ms)")

        target = self._now + ms
        fired = 0
        while True:
            self._drop_cancelled_head()
            if not self._queue or self._queue[0][0] > target:
                break
            deadline, handle, callback = heapq.heappop(self._queue)
            self._now = deadline
            callback()
            fired += 1

        self._now = target
        self.fired_count += fired
        return fired

    def run_until_idle(self, limit_ms: int) -> int:
        """Fire callbacks until none remain or limit_ms of clock time passes"""
        end = self._now + limit_ms
        fired = 0
        while True:
            deadline = self.next_deadline()
            if deadline is None or deadline > end:
                break
            fired += self.advance(deadline - self._now)
        return fired


class TkScheduler:
    """Scheduler backed by a Tk widget's event loop"""

    def __init__(self, root):
        """
        Args:
            root: Tk root (or any widget) providing after()/after_cancel()
        """
        self._root = root

    def now_ms(self) -> int:
        return int(time.monotonic() * 1000)

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> str:
        return self._root.after(int(delay_ms), callback)

    def cancel(self, handle: str) -> None:
        if handle is None:
            return
        try:
            self._root.after_cancel(handle)
        except Exception as e:
            # Root already destroyed during shutdown
            logger.debug(f"after_cancel failed for {handle}: {e}")
