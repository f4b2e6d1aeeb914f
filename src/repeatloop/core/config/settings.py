"""Configuration management module."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import yaml

from .defaults import DEFAULT_ANNOUNCEMENTS, DEFAULT_CONFIG, MIN_POLL_INTERVAL_SECONDS
from .merge import merge_settings
from repeatloop.core.announcement_registry import ANNOUNCEMENT_CATEGORIES
from repeatloop.core.env import resolve_config_path
from repeatloop.core.session import RepeatRequest


_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class SettingsManager:
    """Proste zarządzanie konfiguracją YAML z domyślnymi wartościami."""

    config_path: Path = Path("config/settings.yaml")

    def __post_init__(self) -> None:
        self.config_path = resolve_config_path(Path(self.config_path))
        self._data: Dict[str, Any] = {}
        self.load()

    def load(self) -> None:
        if self.config_path.exists():
            with self.config_path.open("r", encoding="utf-8") as file:
                user_config = yaml.safe_load(file) or {}
            if not isinstance(user_config, dict):
                user_config = {}
            self._data = merge_settings(DEFAULT_CONFIG, user_config)
        else:
            self._data = copy.deepcopy(DEFAULT_CONFIG)

    def save(self) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with self.config_path.open("w", encoding="utf-8") as file:
            yaml.safe_dump(self._data, file, allow_unicode=False, sort_keys=True)

    # --- general ---
    def get_language(self) -> str:
        general = self._data.get("general", {})
        value = general.get("language") or DEFAULT_CONFIG["general"]["language"]
        return str(value)

    def set_language(self, language: str) -> None:
        general = self._data.setdefault("general", {})
        general["language"] = str(language)

    # --- repeat ---
    def get_poll_interval_seconds(self) -> float:
        repeat = self._data.get("repeat", {})
        value = repeat.get("poll_interval_seconds", DEFAULT_CONFIG["repeat"]["poll_interval_seconds"])
        try:
            return max(MIN_POLL_INTERVAL_SECONDS, float(value))
        except (TypeError, ValueError):
            return DEFAULT_CONFIG["repeat"]["poll_interval_seconds"]

    def set_poll_interval_seconds(self, value: float) -> None:
        repeat = self._data.setdefault("repeat", {})
        repeat["poll_interval_seconds"] = max(MIN_POLL_INTERVAL_SECONDS, float(value))

    def get_hysteresis_seconds(self) -> float:
        repeat = self._data.get("repeat", {})
        value = repeat.get("hysteresis_seconds", DEFAULT_CONFIG["repeat"]["hysteresis_seconds"])
        try:
            return max(0.0, float(value))
        except (TypeError, ValueError):
            return DEFAULT_CONFIG["repeat"]["hysteresis_seconds"]

    def set_hysteresis_seconds(self, value: float) -> None:
        repeat = self._data.setdefault("repeat", {})
        repeat["hysteresis_seconds"] = max(0.0, float(value))

    def get_last_request(self) -> RepeatRequest | None:
        repeat = self._data.get("repeat", {})
        return RepeatRequest.from_dict(repeat.get("last_request"))

    def set_last_request(self, request: RepeatRequest | None) -> None:
        repeat = self._data.setdefault("repeat", {})
        repeat["last_request"] = request.to_dict() if request is not None else None

    # --- announcements ---
    def _announcement_settings(self) -> dict[str, bool]:
        accessibility = self._data.setdefault("accessibility", {})
        announcements = accessibility.setdefault("announcements", {})
        return announcements  # type: ignore[return-value]

    def get_announcement_enabled(self, category: str) -> bool:
        announcements = self._announcement_settings()
        if category in announcements:
            return bool(announcements[category])
        return DEFAULT_ANNOUNCEMENTS.get(category, True)

    def set_announcement_enabled(self, category: str, enabled: bool) -> None:
        announcements = self._announcement_settings()
        announcements[category] = bool(enabled)

    def get_all_announcement_settings(self) -> dict[str, bool]:
        return {
            category.id: self.get_announcement_enabled(category.id)
            for category in ANNOUNCEMENT_CATEGORIES
        }

    # --- diagnostics ---
    def get_diagnostics_log_level(self) -> str:
        diagnostics = self._data.get("diagnostics", {})
        level = str(diagnostics.get("log_level", DEFAULT_CONFIG["diagnostics"]["log_level"])).upper()
        return level if level in _LOG_LEVELS else DEFAULT_CONFIG["diagnostics"]["log_level"]

    def set_diagnostics_log_level(self, level: str) -> None:
        diagnostics = self._data.setdefault("diagnostics", {})
        diagnostics["log_level"] = str(level).upper()
