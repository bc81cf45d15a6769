"""
Elapsed-time ticker.

Reports whole elapsed seconds once per interval through a callback.
The clock and the one-shot timer are injectable so tests can drive
time by hand.
"""
import threading
import time
from typing import Callable, Optional


class Ticker:
    """
    Periodic elapsed-seconds reporter.

    ``start`` and ``stop`` are idempotent: starting a running ticker or
    stopping a stopped one does nothing, so no tick is ever doubled.

    Args:
        on_tick: Called with whole elapsed seconds on every tick.
        interval: Seconds between ticks.
        clock: Monotonic clock returning seconds.
        timer_factory: Builds a one-shot timer from ``(interval, function)``;
            the result needs ``start()`` and ``cancel()``.
    """

    def __init__(
        self,
        on_tick: Callable[[int], None],
        interval: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
    ) -> None:
        self.on_tick = on_tick
        self.interval = interval
        self.clock = clock
        self.timer_factory = timer_factory

        self._origin: Optional[float] = None
        self._stopped_at: Optional[float] = None
        self._timer = None
        self._running = False
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Reset the origin to now and begin ticking."""
        with self._lock:
            if self._running:
                return
            self._running = True
            self._generation += 1
            self._origin = self.clock()
            self._stopped_at = None
            self._schedule()

    def stop(self) -> None:
        """Freeze the elapsed time and cancel the pending tick."""
        with self._lock:
            if not self._running:
                return
            self._running = False
            self._generation += 1
            self._stopped_at = self.clock()
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def elapsed_seconds(self) -> int:
        """Whole seconds since ``start``; frozen after ``stop``."""
        if self._origin is None:
            return 0
        end = self._stopped_at if self._stopped_at is not None else self.clock()
        return int(end - self._origin)

    def _schedule(self) -> None:
        generation = self._generation
        self._timer = self.timer_factory(
            self.interval, lambda: self._fire(generation)
        )
        # Timer threads must not keep the interpreter alive.
        if isinstance(self._timer, threading.Thread):
            self._timer.daemon = True
        self._timer.start()

    def _fire(self, generation: int) -> None:
        with self._lock:
            # Only timers scheduled since the last start or stop may tick.
            if not self._running or generation != self._generation:
                return
            elapsed = self.elapsed_seconds()
            self._schedule()
        self.on_tick(elapsed)
