"""Boundary-crossing detection for looped playback windows.

Position samples reach the controller asynchronously and with jitter, so a
single pass past the window end can produce several samples at or beyond
``end``. The detector reports a crossing only for the first of them and
re-arms once the position has fallen back below ``end - hysteresis``.
"""

from __future__ import annotations

from dataclasses import dataclass

from repeatloop.core.session import RepeatWindow


DEFAULT_HYSTERESIS_SECONDS = 1.0


@dataclass(frozen=True)
class BoundaryClassification:
    crossed: bool
    should_reset_debounce: bool


def effective_hysteresis(window: RepeatWindow, hysteresis: float) -> float:
    """Clamp the margin to half the window so short windows can still re-arm."""

    margin = max(0.0, float(hysteresis))
    return min(margin, window.length_seconds / 2.0)


def classify(
    position: float,
    window: RepeatWindow,
    already_crossed: bool,
    *,
    hysteresis: float = DEFAULT_HYSTERESIS_SECONDS,
) -> BoundaryClassification:
    crossed = position >= window.end_seconds and not already_crossed
    reset_threshold = window.end_seconds - effective_hysteresis(window, hysteresis)
    return BoundaryClassification(
        crossed=crossed,
        should_reset_debounce=position < reset_threshold,
    )


class BoundaryDetector:
    """Stateless classifier bound to a fixed hysteresis margin."""

    def __init__(self, hysteresis: float = DEFAULT_HYSTERESIS_SECONDS) -> None:
        self.hysteresis = max(0.0, float(hysteresis))

    def classify(self, position: float, window: RepeatWindow, already_crossed: bool) -> BoundaryClassification:
        return classify(position, window, already_crossed, hysteresis=self.hysteresis)


__all__ = [
    "DEFAULT_HYSTERESIS_SECONDS",
    "BoundaryClassification",
    "BoundaryDetector",
    "classify",
    "effective_hysteresis",
]
