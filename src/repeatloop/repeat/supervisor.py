"""Polling supervisor driving the repeat controller's tick handler."""

from __future__ import annotations

import logging
import threading
from threading import Timer
from typing import Callable, Optional, Protocol


logger = logging.getLogger(__name__)


TickCallback = Callable[[int], None]


class Supervisor(Protocol):
    def start(self, generation: int) -> None: ...

    def cancel(self) -> None: ...

    @property
    def is_running(self) -> bool: ...


SupervisorFactory = Callable[[float, TickCallback], Supervisor]


class TimerSupervisor:
    """Repeating ``threading.Timer`` chain that reports its generation on each tick.

    ``cancel()`` stops further scheduling immediately; a tick that is already
    executing finishes, so the callback must compare the generation it
    receives with the active one.
    """

    def __init__(self, interval: float, on_tick: TickCallback) -> None:
        self.interval = max(0.001, float(interval))
        self._on_tick = on_tick
        self._lock = threading.Lock()
        self._timer: Optional[Timer] = None
        self._generation: int | None = None

    @property
    def is_running(self) -> bool:
        return self._generation is not None

    def start(self, generation: int) -> None:
        with self._lock:
            self._cancel_locked()
            self._generation = generation
            self._schedule_locked(generation)
        logger.debug("Supervisor started (generation=%s, interval=%.3fs)", generation, self.interval)

    def cancel(self) -> None:
        with self._lock:
            self._cancel_locked()

    def _cancel_locked(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._generation = None

    def _schedule_locked(self, generation: int) -> None:
        timer = Timer(self.interval, self._fire, args=(generation,))
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _fire(self, generation: int) -> None:
        with self._lock:
            if self._generation != generation:
                return
        try:
            self._on_tick(generation)
        except Exception as exc:  # pylint: disable=broad-except
            logger.error("Repeat tick failed: %s", exc, exc_info=True)
        with self._lock:
            if self._generation == generation:
                self._schedule_locked(generation)


def create_timer_supervisor(interval: float, on_tick: TickCallback) -> Supervisor:
    return TimerSupervisor(interval, on_tick)


__all__ = [
    "Supervisor",
    "SupervisorFactory",
    "TickCallback",
    "TimerSupervisor",
    "create_timer_supervisor",
]
