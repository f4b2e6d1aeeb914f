"""Translate repeat controller transitions into user-facing status."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, List, Optional

from repeatloop.core.errors import RepeatValidationError, ValidationErrorKind
from repeatloop.core.i18n import gettext as _, ngettext
from repeatloop.core.session import RepeatSession, RepeatState
from repeatloop.repeat.dispatch import notify_safely


logger = logging.getLogger(__name__)


class StatusSeverity(Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
    WARNING = "warning"


@dataclass(frozen=True)
class StatusMessage:
    text: str
    severity: StatusSeverity
    category: str = "repeat"


@dataclass(frozen=True)
class OverlayState:
    active: bool = False
    current_count: int = 0
    total_count: int = 0

    @property
    def label(self) -> str:
        if self.total_count > 0:
            return f"{self.current_count} / {self.total_count}"
        return str(self.current_count)


@dataclass(frozen=True)
class RepeatSnapshot:
    state: RepeatState = RepeatState.IDLE
    status_message: str = ""
    status_severity: StatusSeverity = StatusSeverity.INFO
    overlay_active: bool = False
    current_count: int = 0
    total_count: int = 0
    completion_signal: bool = False

    @property
    def overlay(self) -> OverlayState:
        return OverlayState(self.overlay_active, self.current_count, self.total_count)


SnapshotListener = Callable[[RepeatSnapshot], None]
CompletionCallback = Callable[[RepeatSession], None]
Announcer = Callable[[str, str], None]


def validation_message(kind: ValidationErrorKind) -> str:
    if kind is ValidationErrorKind.END_NOT_AFTER_START:
        return _("End time must be greater than start time")
    if kind is ValidationErrorKind.MISSING_END:
        return _("Please set an end time")
    if kind is ValidationErrorKind.NEGATIVE_START:
        return _("Start time cannot be negative")
    if kind is ValidationErrorKind.NEGATIVE_REPEATS:
        return _("Repeat count cannot be negative")
    return _("Invalid time range")


class ProgressReporter:
    """Holds the observable repeat state and notifies listeners of changes.

    The only state beyond the last snapshot is the id of the session whose
    completion was signalled last, which keeps the completion signal one-shot
    even if stray ticks report the same session again. Only the snapshot
    published by ``completed()`` carries ``completion_signal=True``.
    """

    def __init__(
        self,
        *,
        announce: Announcer | None = None,
        is_category_enabled: Callable[[str], bool] | None = None,
    ) -> None:
        self._snapshot = RepeatSnapshot(status_message=_("Ready to start"))
        self._listeners: List[SnapshotListener] = []
        self._completion_callback: Optional[CompletionCallback] = None
        self._announce = announce
        self._is_category_enabled = is_category_enabled
        self._signaled_session_id: str | None = None

    @property
    def snapshot(self) -> RepeatSnapshot:
        return self._snapshot

    @property
    def overlay(self) -> OverlayState:
        return self._snapshot.overlay

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

        return _unsubscribe

    def set_completion_callback(self, callback: Optional[CompletionCallback]) -> None:
        self._completion_callback = callback

    def set_announcer(self, announce: Announcer | None) -> None:
        self._announce = announce

    # --- transitions reported by the controller ---
    def started(self, session: RepeatSession) -> None:
        if self._signaled_session_id == session.id:
            self._signaled_session_id = None
        if session.is_bounded:
            count_text = ngettext("%d time", "%d times", session.planned_repeats) % session.planned_repeats
        else:
            count_text = _("infinite")
        self._publish(
            StatusMessage(_("Repeat started (%s)") % count_text, StatusSeverity.SUCCESS, "repeat"),
            state=RepeatState.LOOPING,
            overlay_active=True,
            current_count=0,
            total_count=session.planned_repeats,
            completion_signal=False,
        )

    def progressed(self, session: RepeatSession) -> None:
        if session.is_bounded:
            text = _("Repeat %(count)d/%(total)d") % {
                "count": session.completed_repeats,
                "total": session.planned_repeats,
            }
        else:
            text = _("Repeat %d") % session.completed_repeats
        self._publish(
            StatusMessage(text, StatusSeverity.SUCCESS, "repeat_progress"),
            state=session.state,
            overlay_active=True,
            current_count=session.completed_repeats,
            total_count=session.planned_repeats,
        )

    def completed(self, session: RepeatSession) -> None:
        if self._signaled_session_id == session.id:
            logger.debug("Completion already signalled for session %s", session.id)
            return
        self._signaled_session_id = session.id
        self._publish(
            StatusMessage(_("Repeat completed - playback paused"), StatusSeverity.SUCCESS, "repeat_completed"),
            state=RepeatState.COMPLETED,
            overlay_active=False,
            current_count=session.completed_repeats,
            total_count=session.planned_repeats,
            completion_signal=True,
        )
        callback = self._completion_callback
        if callback:
            notify_safely(callback, session)

    def stopped(self) -> None:
        self._publish(
            StatusMessage(_("Repeat stopped"), StatusSeverity.INFO, "repeat"),
            state=RepeatState.IDLE,
            overlay_active=False,
            current_count=0,
            total_count=0,
            completion_signal=False,
        )

    def rejected(self, error: RepeatValidationError) -> None:
        self.status(validation_message(error.kind), StatusSeverity.ERROR, category="validation")

    def status(self, text: str, severity: StatusSeverity, *, category: str = "repeat") -> None:
        self._publish(StatusMessage(text, severity, category))

    # --- internals ---
    def _publish(self, message: StatusMessage, **changes) -> None:
        # sygnał ukończenia trafia tylko do jednego snapshotu
        changes.setdefault("completion_signal", False)
        self._snapshot = replace(
            self._snapshot,
            status_message=message.text,
            status_severity=message.severity,
            **changes,
        )
        snapshot = self._snapshot
        for listener in list(self._listeners):
            notify_safely(listener, snapshot)
        self._emit_announcement(message)

    def _emit_announcement(self, message: StatusMessage) -> None:
        announce = self._announce
        if announce is None:
            return
        if self._is_category_enabled is not None and not self._is_category_enabled(message.category):
            return
        notify_safely(announce, message.category, message.text)


__all__ = [
    "OverlayState",
    "ProgressReporter",
    "RepeatSnapshot",
    "StatusMessage",
    "StatusSeverity",
    "validation_message",
]
