"""Merge helpers for configuration dictionaries."""

from __future__ import annotations

import copy
from typing import Any, Dict


def merge_settings(defaults: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay user values on the defaults, recursing into nested sections.

    A section that is a dict in ``defaults`` is never replaced by a scalar or
    ``None`` from the user file (``repeat:`` left empty in YAML stays a dict).
    """

    result: Dict[str, Any] = copy.deepcopy(defaults)
    for key, value in override.items():
        current = result.get(key)
        if isinstance(current, dict):
            if isinstance(value, dict):
                result[key] = merge_settings(current, value)
            continue
        result[key] = copy.deepcopy(value)
    return result
