"""Scheduler — a logical clock with owner-keyed repeating timers.

Every independent timeline in a session (the phase countdown, the boat
spawner, each boat's movement and the seabird's flight) registers a
repeating timer here under an owner key.  Time only moves when
:meth:`Scheduler.advance` is called, so the simulation can be stepped in
tests without any real delay, and a single ``cancel_all`` is enough to
stop everything when a session ends or restarts.
"""

from __future__ import annotations

import heapq
import itertools
from collections.abc import Callable
from dataclasses import dataclass, field


@dataclass
class Timer:
    """A repeating timer registered under ``owner``.

    Attributes:
        owner: Registry key (e.g. ``"phase"``, ``"boat:3"``).
        interval_ms: Milliseconds between firings.
        callback: Called with no arguments on every firing.
        due_ms: Logical time of the next firing.
        cancelled: Set once the timer is cancelled or replaced.
    """

    owner: str
    interval_ms: int
    callback: Callable[[], None]
    due_ms: int
    cancelled: bool = False


@dataclass
class Scheduler:
    """Cooperative timer registry driven by an explicit logical clock.

    Callbacks run to completion one at a time, in due order; timers due
    at the same instant fire in registration order.

    Attributes:
        now_ms: Current logical time in milliseconds.
    """

    now_ms: int = 0
    _timers: dict[str, Timer] = field(default_factory=dict, repr=False)
    _queue: list[tuple[int, int, Timer]] = field(default_factory=list, repr=False)
    _seq: itertools.count = field(default_factory=itertools.count, repr=False)

    @property
    def owners(self) -> list[str]:
        """Owner keys of every active timer."""
        return list(self._timers)

    def every(self, owner: str, interval_ms: int, callback: Callable[[], None]) -> Timer:
        """Register a repeating timer, replacing any timer with the same owner.

        The first firing happens ``interval_ms`` after the current time.

        Raises:
            ValueError: If ``interval_ms`` is not positive.
        """
        if interval_ms <= 0:
            msg = f"timer interval must be positive, got {interval_ms}"
            raise ValueError(msg)
        self.cancel(owner)
        timer = Timer(
            owner=owner,
            interval_ms=interval_ms,
            callback=callback,
            due_ms=self.now_ms + interval_ms,
        )
        self._timers[owner] = timer
        self._push(timer)
        return timer

    def is_active(self, owner: str) -> bool:
        return owner in self._timers

    def cancel(self, owner: str) -> bool:
        """Cancel the timer registered under ``owner``.

        Returns:
            True if a timer was active.
        """
        timer = self._timers.pop(owner, None)
        if timer is None:
            return False
        timer.cancelled = True
        return True

    def cancel_prefix(self, prefix: str) -> int:
        """Cancel every timer whose owner starts with ``prefix``."""
        owners = [owner for owner in self._timers if owner.startswith(prefix)]
        for owner in owners:
            self.cancel(owner)
        return len(owners)

    def cancel_all(self) -> None:
        """Cancel every timer and drop the pending queue."""
        for timer in self._timers.values():
            timer.cancelled = True
        self._timers.clear()
        self._queue.clear()

    def advance(self, ms: int) -> None:
        """Move the clock forward by ``ms``, firing every timer that falls due.

        Timers registered by a callback are eligible within the same call
        if they fall due before the end of the window.

        Args:
            ms: Milliseconds to advance (must be non-negative).
        """
        if ms < 0:
            msg = f"cannot advance by a negative amount ({ms})"
            raise ValueError(msg)
        end = self.now_ms + ms
        while self._queue and self._queue[0][0] <= end:
            due, _, timer = heapq.heappop(self._queue)
            if timer.cancelled or timer.due_ms != due:
                continue
            self.now_ms = due
            timer.due_ms = due + timer.interval_ms
            self._push(timer)
            timer.callback()
        self.now_ms = end

    def _push(self, timer: Timer) -> None:
        heapq.heappush(self._queue, (timer.due_ms, next(self._seq), timer))
