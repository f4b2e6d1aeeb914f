"""Exception types shared by the repeat-loop core."""

from __future__ import annotations

from enum import Enum


class ValidationErrorKind(Enum):
    END_NOT_AFTER_START = "end_not_after_start"
    MISSING_END = "missing_end"
    INVALID_TIME = "invalid_time"
    NEGATIVE_START = "negative_start"
    NEGATIVE_REPEATS = "negative_repeats"


class RepeatLoopError(Exception):
    """Base class for errors raised by the repeat-loop core."""


class RepeatValidationError(RepeatLoopError):
    """Raised synchronously by ``start()`` when the requested window is rejected."""

    def __init__(self, kind: ValidationErrorKind, message: str | None = None) -> None:
        super().__init__(message or kind.value)
        self.kind = kind


class PlayerUnavailable(RepeatLoopError):
    """Wyrzucane przez bridge playera, gdy nie ma załadowanego medium."""


__all__ = [
    "PlayerUnavailable",
    "RepeatLoopError",
    "RepeatValidationError",
    "ValidationErrorKind",
]
