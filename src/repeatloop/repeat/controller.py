"""Time-range repeat loop controller.

Replays ``[start, end)`` of an external player a bounded or unbounded number
of times. Position samples are pushed in by the player bridge at its own pace;
a polling supervisor reads the most recent one on every tick and the boundary
detector decides whether the pass has ended.

All mutation (``start``, ``stop`` and tick handling) is serialized through a
single re-entrant lock. Every ``start``/``stop`` bumps a generation counter and
ticks carrying an older generation are dropped, so nothing fired by a previous
supervisor can touch the current session.
"""

from __future__ import annotations

import logging
import math
import threading
from typing import Callable, Optional

from repeatloop.core.boundary import DEFAULT_HYSTERESIS_SECONDS, BoundaryDetector
from repeatloop.core.errors import RepeatValidationError, ValidationErrorKind
from repeatloop.core.session import (
    PositionSample,
    RepeatRequest,
    RepeatSession,
    RepeatState,
    RepeatWindow,
)
from repeatloop.player.types import PlayerHandle
from repeatloop.repeat.progress import ProgressReporter, RepeatSnapshot
from repeatloop.repeat.supervisor import Supervisor, SupervisorFactory, create_timer_supervisor


logger = logging.getLogger(__name__)


DEFAULT_POLL_INTERVAL_SECONDS = 0.3


def validate_request(start_time: float, end_time: float, repeat_count: int) -> RepeatRequest:
    """Return a normalized request or raise :class:`RepeatValidationError`."""

    try:
        start = float(start_time)
        end = float(end_time)
        count = int(repeat_count)
    except (TypeError, ValueError) as exc:
        raise RepeatValidationError(ValidationErrorKind.INVALID_TIME, str(exc)) from exc
    if not (math.isfinite(start) and math.isfinite(end)):
        raise RepeatValidationError(ValidationErrorKind.INVALID_TIME)
    if end <= start:
        raise RepeatValidationError(ValidationErrorKind.END_NOT_AFTER_START)
    if end <= 0:
        raise RepeatValidationError(ValidationErrorKind.MISSING_END)
    if start < 0:
        raise RepeatValidationError(ValidationErrorKind.NEGATIVE_START)
    if count < 0:
        raise RepeatValidationError(ValidationErrorKind.NEGATIVE_REPEATS)
    return RepeatRequest(start_seconds=start, end_seconds=end, repeat_count=count)


class RepeatLoopController:
    """Drives a :class:`PlayerHandle` around a time window."""

    def __init__(
        self,
        player: PlayerHandle,
        *,
        reporter: ProgressReporter | None = None,
        supervisor_factory: SupervisorFactory | None = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
        hysteresis: float = DEFAULT_HYSTERESIS_SECONDS,
    ) -> None:
        self._player = player
        self._reporter = reporter or ProgressReporter()
        self._supervisor_factory = supervisor_factory or create_timer_supervisor
        self._poll_interval = float(poll_interval)
        self._detector = BoundaryDetector(hysteresis)
        self._lock = threading.RLock()
        self._generation = 0
        self._session: RepeatSession | None = None
        self._supervisor: Supervisor | None = None
        self._latest_sample: PositionSample | None = None
        self._last_request: RepeatRequest | None = None

    # --- observable state ---
    @property
    def reporter(self) -> ProgressReporter:
        return self._reporter

    @property
    def snapshot(self) -> RepeatSnapshot:
        return self._reporter.snapshot

    @property
    def state(self) -> RepeatState:
        session = self._session
        return session.state if session is not None else RepeatState.IDLE

    @property
    def session(self) -> RepeatSession | None:
        return self._session

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def last_request(self) -> RepeatRequest | None:
        """Parameters of the most recent accepted ``start()`` call."""

        return self._last_request

    @property
    def latest_sample(self) -> PositionSample | None:
        return self._latest_sample

    # --- public operations ---
    def start(self, start_time: float, end_time: float, repeat_count: int = 0) -> RepeatSession:
        with self._lock:
            try:
                request = validate_request(start_time, end_time, repeat_count)
            except RepeatValidationError as exc:
                logger.info("Repeat rejected: %s (start=%r end=%r count=%r)", exc.kind.value, start_time, end_time, repeat_count)
                self._reporter.rejected(exc)
                raise

            if self._session is not None:
                logger.info("Superseding repeat session %s", self._session.id)
                self._teardown_locked()

            self._generation += 1
            generation = self._generation
            session = RepeatSession(
                window=RepeatWindow(request.start_seconds, request.end_seconds),
                planned_repeats=request.repeat_count,
                state=RepeatState.ARMED,
            )
            self._session = session
            self._last_request = session.request
            # próbka sprzed seeka dotyczy starej pozycji
            self._latest_sample = None

            self._send("seek", request.start_seconds)
            self._send("play")
            supervisor = self._supervisor_factory(self._poll_interval, self._handle_tick)
            self._supervisor = supervisor
            supervisor.start(generation)
            session.state = RepeatState.LOOPING
            logger.info(
                "Repeat started: window=[%.2f, %.2f) repeats=%s session=%s",
                request.start_seconds,
                request.end_seconds,
                request.repeat_count or "infinite",
                session.id,
            )
            self._reporter.started(session)
            return session

    def stop(self) -> None:
        with self._lock:
            if self._session is None:
                return
            session_id = self._session.id
            self._teardown_locked()
            logger.info("Repeat stopped (session=%s)", session_id)
            self._reporter.stopped()

    def on_position_sample(self, current_time: float, duration: float) -> None:
        """Cache the newest sample from the player bridge; older ones are dropped."""

        self._latest_sample = PositionSample(current_time, duration)

    def tick(self) -> None:
        """Process the latest sample for the active session, if any."""

        self._handle_tick(self._generation)

    # --- internals ---
    def _handle_tick(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                logger.debug("Dropping stale tick (generation %s != %s)", generation, self._generation)
                return
            session = self._session
            if session is None or session.state is not RepeatState.LOOPING:
                return
            sample = self._latest_sample
            if sample is None or not sample.is_valid():
                return
            self._process_sample_locked(session, float(sample.current_time))

    def _process_sample_locked(self, session: RepeatSession, position: float) -> None:
        result = self._detector.classify(position, session.window, session.crossed_since_last_seek)
        if result.crossed:
            session.completed_repeats += 1
            session.crossed_since_last_seek = True
            logger.debug(
                "Boundary crossed at %.2f (%d/%s)",
                position,
                session.completed_repeats,
                session.planned_repeats or "inf",
            )
            if session.target_reached:
                self._complete_locked(session)
                return
            self._send("seek", session.window.start_seconds)
            self._reporter.progressed(session)
            return
        if result.should_reset_debounce and session.crossed_since_last_seek:
            session.crossed_since_last_seek = False

    def _complete_locked(self, session: RepeatSession) -> None:
        session.state = RepeatState.COMPLETED
        self._cancel_supervisor_locked()
        self._send("pause")
        logger.info("Repeat completed after %d passes (session=%s)", session.completed_repeats, session.id)
        self._reporter.completed(session)

    def _teardown_locked(self) -> None:
        self._generation += 1
        self._cancel_supervisor_locked()
        self._send("pause")
        session = self._session
        if session is not None:
            session.state = RepeatState.IDLE
            session.completed_repeats = 0
            session.crossed_since_last_seek = False
        self._session = None

    def _cancel_supervisor_locked(self) -> None:
        supervisor = self._supervisor
        self._supervisor = None
        if supervisor is not None:
            supervisor.cancel()

    def _send(self, command: str, *args: float) -> None:
        method: Optional[Callable[..., None]] = getattr(self._player, command, None)
        if not callable(method):
            logger.warning("Player does not support %s()", command)
            return
        try:
            method(*args)
        except Exception as exc:  # pylint: disable=broad-except
            logger.warning("Player %s%s failed: %s", command, args or "()", exc)


__all__ = ["DEFAULT_POLL_INTERVAL_SECONDS", "RepeatLoopController", "validate_request"]
