"""Conversions between seconds and the clock-style strings shown to users."""

from __future__ import annotations

import math


def seconds_to_time(seconds: float) -> str:
    """Return ``M:SS`` or ``H:MM:SS`` for a non-negative number of seconds."""

    try:
        value = float(seconds)
    except (TypeError, ValueError):
        value = 0.0
    if not math.isfinite(value) or value < 0:
        value = 0.0
    total = int(value)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours:d}:{minutes:02d}:{secs:02d}"
    return f"{minutes:d}:{secs:02d}"


def time_to_seconds(text: str) -> float:
    """Parse ``SS``, ``MM:SS`` or ``HH:MM:SS``; anything unparseable yields 0."""

    trimmed = str(text or "").strip()
    if not trimmed:
        return 0.0
    if ":" not in trimmed:
        try:
            return float(trimmed)
        except ValueError:
            return 0.0

    parts: list[float] = []
    for chunk in trimmed.split(":"):
        try:
            parts.append(float(chunk))
        except ValueError:
            # zgodnie z pierwowzorem: niepoprawne fragmenty są pomijane
            continue
    if len(parts) == 3:
        return parts[0] * 3600 + parts[1] * 60 + parts[2]
    if len(parts) == 2:
        return parts[0] * 60 + parts[1]
    if len(parts) == 1:
        return parts[0]
    return 0.0


def format_repeat_count(count: int) -> str:
    return "∞" if int(count) <= 0 else f"{int(count)}x"


__all__ = ["format_repeat_count", "seconds_to_time", "time_to_seconds"]
