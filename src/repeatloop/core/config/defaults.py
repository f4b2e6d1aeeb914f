"""Default configuration values."""

from __future__ import annotations

from typing import Any, Dict

from repeatloop.core.announcement_registry import ANNOUNCEMENT_CATEGORIES
from repeatloop.core.boundary import DEFAULT_HYSTERESIS_SECONDS

MIN_POLL_INTERVAL_SECONDS = 0.05

DEFAULT_CONFIG: Dict[str, Any] = {
    "general": {
        "language": "en",
    },
    "repeat": {
        "poll_interval_seconds": 0.3,
        "hysteresis_seconds": DEFAULT_HYSTERESIS_SECONDS,
        "last_request": None,
    },
    "accessibility": {
        "announcements": {},
    },
    "diagnostics": {
        "log_level": "WARNING",
    },
}

DEFAULT_ANNOUNCEMENTS = {
    category.id: category.default_enabled for category in ANNOUNCEMENT_CATEGORIES
}
