"""Wiring helpers for embedding the repeat controller in an application."""

from __future__ import annotations

import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from repeatloop.core.config import SettingsManager
from repeatloop.core.env import resolve_log_dir
from repeatloop.core.i18n import set_language
from repeatloop.player.types import PlayerHandle
from repeatloop.repeat.controller import RepeatLoopController
from repeatloop.repeat.progress import Announcer, ProgressReporter, RepeatSnapshot, SnapshotListener


logger = logging.getLogger(__name__)


def configure_logging(level_override: Optional[str] = None) -> Optional[Path]:
    env_level = os.environ.get("LOGLEVEL")
    level_name = (env_level or level_override or "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)

    logs_dir = resolve_log_dir()
    fallback_dir = Path(tempfile.gettempdir()) / "repeatloop_logs"
    log_path: Path | None = None

    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
    except Exception:  # pylint: disable=broad-except
        logs_dir = fallback_dir
        try:
            logs_dir.mkdir(parents=True, exist_ok=True)
        except Exception:
            logging.basicConfig(level=level)
            return None

    try:
        timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
        log_path = logs_dir / f"repeatloop-{timestamp}.log"
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        file_handler.setFormatter(formatter)
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        logging.basicConfig(level=level, handlers=[file_handler, stream_handler])
    except Exception:  # pylint: disable=broad-except
        logging.basicConfig(level=level)
    if log_path:
        logger.info("Writing log to %s", log_path)
        if logs_dir == fallback_dir:
            logger.warning("Using fallback log directory %s", logs_dir)
    return log_path


def create_controller(
    player: PlayerHandle,
    settings: SettingsManager | None = None,
    *,
    announce: Announcer | None = None,
) -> RepeatLoopController:
    """Build a controller configured from ``settings`` and hook up the player's feed."""

    settings = settings or SettingsManager()
    set_language(settings.get_language())
    reporter = ProgressReporter(
        announce=announce,
        is_category_enabled=settings.get_announcement_enabled,
    )
    controller = RepeatLoopController(
        player,
        reporter=reporter,
        poll_interval=settings.get_poll_interval_seconds(),
        hysteresis=settings.get_hysteresis_seconds(),
    )
    feed: Any = getattr(player, "set_position_callback", None)
    if callable(feed):
        feed(controller.on_position_sample)
    reporter.subscribe(_last_request_saver(controller, settings))
    logger.debug(
        "Repeat controller ready: poll_interval=%.3f hysteresis=%.3f",
        settings.get_poll_interval_seconds(),
        settings.get_hysteresis_seconds(),
    )
    return controller


def remember_last_request(controller: RepeatLoopController, settings: SettingsManager) -> bool:
    """Persist the last accepted repeat range; returns False if nothing was started yet."""

    request = controller.last_request
    if request is None:
        return False
    settings.set_last_request(request)
    try:
        settings.save()
    except OSError as exc:
        logger.warning("Failed to save last repeat range: %s", exc)
        return False
    return True


def _last_request_saver(controller: RepeatLoopController, settings: SettingsManager) -> SnapshotListener:
    def _on_snapshot(_snapshot: RepeatSnapshot) -> None:
        request = controller.last_request
        if request is not None and request != settings.get_last_request():
            remember_last_request(controller, settings)

    return _on_snapshot


def bootstrap(
    player: PlayerHandle,
    settings: SettingsManager | None = None,
    *,
    announce: Announcer | None = None,
) -> RepeatLoopController:
    """Configure logging from settings, then build the controller."""

    settings = settings or SettingsManager()
    log_path = configure_logging(settings.get_diagnostics_log_level())
    logger.debug(
        "Diagnostics: log_level=%s env.LOGLEVEL=%s log_path=%s",
        settings.get_diagnostics_log_level(),
        os.environ.get("LOGLEVEL"),
        log_path,
    )
    return create_controller(player, settings, announce=announce)
