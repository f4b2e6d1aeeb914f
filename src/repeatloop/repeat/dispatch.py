"""Listener dispatch helpers.

This module is intentionally wx-free at import time so it can be used in
headless tests; ticks run on a timer thread and UI listeners must be called
on the wx main loop when one is running.
"""

from __future__ import annotations

import logging
from typing import Any, Callable


logger = logging.getLogger(__name__)


def call_after_if_app(func: Callable[..., Any], *args: Any) -> None:
    """Schedule via wx.CallAfter when wx.App exists, otherwise call directly."""

    try:  # pragma: no cover - wx availability depends on runtime environment
        import wx

        app = wx.GetApp()
        if app:
            wx.CallAfter(func, *args)
            return
    except Exception:
        pass
    func(*args)


def notify_safely(func: Callable[..., Any], *args: Any) -> None:
    """Dispatch ``func`` and log, rather than propagate, listener failures."""

    def _invoke() -> None:
        try:
            func(*args)
        except Exception as exc:  # pylint: disable=broad-except
            logger.error("Repeat listener failed: %s", exc, exc_info=True)

    call_after_if_app(_invoke)
