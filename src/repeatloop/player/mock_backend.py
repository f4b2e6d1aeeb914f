"""Mock player bridge used by tests and headless runs."""

from __future__ import annotations

import logging
import threading
from threading import Timer
from typing import Optional

from repeatloop.core.errors import PlayerUnavailable
from repeatloop.player.types import PositionCallback


logger = logging.getLogger(__name__)


class MockPlayer:
    """Zastępczy player bez realnego odtwarzania.

    Position advances by ``step_seconds`` every ``report_interval`` while
    playing and is pushed to the position callback after each advance.
    """

    def __init__(
        self,
        *,
        report_interval: float = 0.5,
        step_seconds: float | None = None,
    ) -> None:
        self.report_interval = max(0.001, float(report_interval))
        self.step_seconds = float(step_seconds) if step_seconds is not None else self.report_interval
        self._lock = threading.Lock()
        self._timer: Optional[Timer] = None
        self._on_position: Optional[PositionCallback] = None
        self._loaded = False
        self._playing = False
        self._position: float = 0.0
        self._duration: float = 0.0
        self._run_id = 0

    def load(self, duration_seconds: float) -> None:
        with self._lock:
            self._loaded = True
            self._duration = max(0.0, float(duration_seconds))
            self._position = 0.0
        logger.info("[MOCK] Załadowano medium (%.2fs)", self._duration)

    def unload(self) -> None:
        self._cancel_timer()
        with self._lock:
            self._loaded = False
            self._playing = False

    @property
    def position(self) -> float:
        return self._position

    @property
    def duration(self) -> float:
        return self._duration

    def is_playing(self) -> bool:
        return self._playing

    def set_position_callback(self, callback: Optional[PositionCallback]) -> None:
        self._on_position = callback

    def seek(self, seconds: float) -> None:
        with self._lock:
            self._require_loaded()
            self._position = min(max(0.0, float(seconds)), self._duration)
        logger.debug("[MOCK] Seek %.2f", seconds)

    def play(self) -> None:
        with self._lock:
            self._require_loaded()
            if self._playing:
                return
            self._playing = True
            self._run_id += 1
            run_id = self._run_id
        logger.info("[MOCK] Play od %.2f", self._position)
        self._schedule(run_id)

    def pause(self) -> None:
        with self._lock:
            self._require_loaded()
            was_playing = self._playing
            self._playing = False
        self._cancel_timer()
        if was_playing:
            logger.info("[MOCK] Pauza na %.2f", self._position)

    def _require_loaded(self) -> None:
        if not self._loaded:
            raise PlayerUnavailable("No media loaded")

    def _schedule(self, run_id: int) -> None:
        timer = Timer(self.report_interval, self._tick, args=(run_id,))
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _cancel_timer(self) -> None:
        timer = self._timer
        self._timer = None
        if timer:
            timer.cancel()

    def _tick(self, run_id: int) -> None:
        with self._lock:
            if not self._playing or run_id != self._run_id:
                return
            self._position = min(self._position + self.step_seconds, self._duration)
            position, duration = self._position, self._duration
            finished = position >= duration
            if finished:
                self._playing = False
        callback = self._on_position
        if callback:
            try:
                callback(position, duration)
            except Exception as exc:  # pylint: disable=broad-except
                logger.error("Błąd callbacku pozycji: %s", exc)
        if not finished:
            self._schedule(run_id)
