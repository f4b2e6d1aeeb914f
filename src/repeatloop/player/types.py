"""Player-side interfaces consumed by the repeat controller.

Kept free of any concrete bridge so the controller can be driven by a fake
player in tests.
"""

from __future__ import annotations

from typing import Callable, Optional, Protocol

from repeatloop.core.errors import PlayerUnavailable


PositionCallback = Callable[[float, float], None]


class PlayerHandle(Protocol):
    """Fire-and-forget commands; none of them report completion."""

    def seek(self, seconds: float) -> None: ...

    def play(self) -> None: ...

    def pause(self) -> None: ...


class PositionFeed(Protocol):
    """Bridge that pushes ``(current_time, duration)`` on its own cadence."""

    def set_position_callback(self, callback: Optional[PositionCallback]) -> None: ...


__all__ = ["PlayerHandle", "PlayerUnavailable", "PositionCallback", "PositionFeed"]
