from __future__ import annotations

from repeatloop.core.errors import RepeatValidationError, ValidationErrorKind
from repeatloop.core.session import RepeatSession, RepeatState, RepeatWindow
from repeatloop.repeat.progress import OverlayState, ProgressReporter, StatusSeverity


def _session(planned: int = 2) -> RepeatSession:
    return RepeatSession(window=RepeatWindow(0.0, 10.0), planned_repeats=planned, state=RepeatState.LOOPING)


def test_initial_snapshot_is_idle():
    reporter = ProgressReporter()
    snapshot = reporter.snapshot
    assert snapshot.state is RepeatState.IDLE
    assert snapshot.status_message == "Ready to start"
    assert not snapshot.overlay_active
    assert not snapshot.completion_signal


def test_completion_signal_is_one_shot_per_session():
    reporter = ProgressReporter()
    fired: list[RepeatSession] = []
    reporter.set_completion_callback(fired.append)
    session = _session()
    reporter.started(session)
    session.completed_repeats = 2

    reporter.completed(session)
    reporter.completed(session)

    assert fired == [session]
    assert reporter.snapshot.completion_signal

    # a new run of the same session object re-arms the signal
    reporter.started(session)
    assert not reporter.snapshot.completion_signal
    reporter.completed(session)
    assert len(fired) == 2


def test_unsubscribe_stops_notifications():
    reporter = ProgressReporter()
    seen = []
    unsubscribe = reporter.subscribe(seen.append)
    reporter.started(_session())
    unsubscribe()
    unsubscribe()
    reporter.stopped()
    assert len(seen) == 1


def test_announcements_respect_category_switches():
    announced: list[tuple[str, str]] = []
    disabled = {"repeat_progress"}
    reporter = ProgressReporter(
        announce=lambda category, message: announced.append((category, message)),
        is_category_enabled=lambda category: category not in disabled,
    )
    session = _session(planned=0)
    reporter.started(session)
    session.completed_repeats = 1
    reporter.progressed(session)
    reporter.rejected(RepeatValidationError(ValidationErrorKind.MISSING_END))

    assert announced == [
        ("repeat", "Repeat started (infinite)"),
        ("validation", "Please set an end time"),
    ]
    assert reporter.snapshot.status_severity is StatusSeverity.ERROR
    assert reporter.snapshot.status_message == "Please set an end time"


def test_overlay_label():
    assert OverlayState(True, 2, 4).label == "2 / 4"
    assert OverlayState(True, 7, 0).label == "7"


def test_status_keeps_overlay():
    reporter = ProgressReporter()
    session = _session(planned=3)
    reporter.started(session)
    reporter.status("Player not ready", StatusSeverity.WARNING)
    snapshot = reporter.snapshot
    assert snapshot.overlay_active
    assert snapshot.total_count == 3
    assert snapshot.status_severity is StatusSeverity.WARNING


def test_only_latest_completed_session_is_remembered():
    reporter = ProgressReporter()
    fired: list[RepeatSession] = []
    reporter.set_completion_callback(fired.append)
    first, second = _session(planned=1), _session(planned=1)
    for session in (first, second):
        reporter.started(session)
        session.completed_repeats = 1
        reporter.completed(session)

    reporter.completed(second)

    assert fired == [first, second]
    assert reporter._signaled_session_id == second.id
