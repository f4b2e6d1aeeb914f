"""Repeat session data model."""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict

from repeatloop.core.time_format import format_repeat_count, seconds_to_time


class RepeatState(Enum):
    IDLE = "idle"
    ARMED = "armed"
    LOOPING = "looping"
    COMPLETED = "completed"


@dataclass(frozen=True)
class RepeatWindow:
    start_seconds: float
    end_seconds: float

    @property
    def length_seconds(self) -> float:
        return max(0.0, self.end_seconds - self.start_seconds)


@dataclass(frozen=True)
class PositionSample:
    current_time: float
    duration: float = 0.0

    def is_valid(self) -> bool:
        try:
            value = float(self.current_time)
        except (TypeError, ValueError):
            return False
        return math.isfinite(value) and value >= 0.0


@dataclass(frozen=True)
class RepeatRequest:
    """Last-used repeat configuration, as handed to the "save" action."""

    start_seconds: float
    end_seconds: float
    repeat_count: int

    @property
    def start_formatted(self) -> str:
        return seconds_to_time(self.start_seconds)

    @property
    def end_formatted(self) -> str:
        return seconds_to_time(self.end_seconds)

    @property
    def repeat_count_formatted(self) -> str:
        return format_repeat_count(self.repeat_count)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start_seconds": float(self.start_seconds),
            "end_seconds": float(self.end_seconds),
            "repeat_count": int(self.repeat_count),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "RepeatRequest | None":
        if not isinstance(data, dict):
            return None
        try:
            start = float(data["start_seconds"])
            end = float(data["end_seconds"])
            count = int(data.get("repeat_count", 0))
        except (KeyError, TypeError, ValueError):
            return None
        if not (math.isfinite(start) and math.isfinite(end)) or end <= start:
            return None
        return cls(start_seconds=start, end_seconds=end, repeat_count=max(0, count))


@dataclass
class RepeatSession:
    """Configuration and mutable progress of a single repeat run.

    ``planned_repeats == 0`` means the loop runs until stopped. Only the
    controller's tick handler mutates an active session.
    """

    window: RepeatWindow
    planned_repeats: int = 0
    completed_repeats: int = 0
    state: RepeatState = RepeatState.IDLE
    crossed_since_last_seek: bool = False
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    @property
    def is_bounded(self) -> bool:
        return self.planned_repeats > 0

    @property
    def target_reached(self) -> bool:
        return self.is_bounded and self.completed_repeats >= self.planned_repeats

    @property
    def request(self) -> RepeatRequest:
        return RepeatRequest(
            start_seconds=self.window.start_seconds,
            end_seconds=self.window.end_seconds,
            repeat_count=self.planned_repeats,
        )


__all__ = [
    "PositionSample",
    "RepeatRequest",
    "RepeatSession",
    "RepeatState",
    "RepeatWindow",
]
