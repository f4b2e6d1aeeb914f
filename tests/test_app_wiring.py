from __future__ import annotations

import logging

import pytest

from repeatloop.app import bootstrap, configure_logging, create_controller, remember_last_request
from repeatloop.core.config import SettingsManager
from repeatloop.core.errors import RepeatValidationError
from repeatloop.core.session import RepeatRequest, RepeatState


class FeedPlayer:
    def __init__(self) -> None:
        self.callback = None
        self.calls: list[str] = []

    def set_position_callback(self, callback) -> None:
        self.callback = callback

    def seek(self, seconds: float) -> None:
        self.calls.append("seek")

    def play(self) -> None:
        self.calls.append("play")

    def pause(self) -> None:
        self.calls.append("pause")


def test_create_controller_wires_position_feed(tmp_path):
    player = FeedPlayer()
    controller = create_controller(player, SettingsManager(config_path=tmp_path / "settings.yaml"))
    assert player.callback is not None
    player.callback(4.0, 60.0)
    assert controller.latest_sample.current_time == 4.0


def test_create_controller_routes_announcements(tmp_path):
    settings = SettingsManager(config_path=tmp_path / "settings.yaml")
    settings.set_announcement_enabled("repeat", False)
    announced: list[tuple[str, str]] = []
    controller = create_controller(FeedPlayer(), settings, announce=lambda c, m: announced.append((c, m)))
    controller.start(0.0, 5.0, 1)
    controller.stop()
    assert announced == []


def test_remember_last_request_persists_range(tmp_path):
    config_path = tmp_path / "settings.yaml"
    settings = SettingsManager(config_path=config_path)
    controller = create_controller(FeedPlayer(), settings)
    assert not remember_last_request(controller, settings)

    controller.start(3.0, 8.0, 2)
    controller.stop()
    assert remember_last_request(controller, settings)

    request = SettingsManager(config_path=config_path).get_last_request()
    assert (request.start_seconds, request.end_seconds, request.repeat_count) == (3.0, 8.0, 2)


def test_accepted_start_is_saved_without_explicit_call(tmp_path):
    config_path = tmp_path / "settings.yaml"
    controller = create_controller(FeedPlayer(), SettingsManager(config_path=config_path))

    controller.start(4.0, 9.5, 0)
    controller.stop()

    assert SettingsManager(config_path=config_path).get_last_request() == RepeatRequest(4.0, 9.5, 0)


def test_rejected_start_keeps_saved_range(tmp_path):
    config_path = tmp_path / "settings.yaml"
    controller = create_controller(FeedPlayer(), SettingsManager(config_path=config_path))
    controller.start(1.0, 2.0, 3)
    controller.stop()

    with pytest.raises(RepeatValidationError):
        controller.start(5.0, 5.0, 1)

    assert SettingsManager(config_path=config_path).get_last_request() == RepeatRequest(1.0, 2.0, 3)


@pytest.fixture
def isolated_root_logger(tmp_path, monkeypatch):
    monkeypatch.setenv("REPEATLOOP_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.delenv("LOGLEVEL", raising=False)
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    for handler in saved_handlers:
        root.removeHandler(handler)
    yield root
    for handler in list(root.handlers):
        handler.close()
        root.removeHandler(handler)
    for handler in saved_handlers:
        root.addHandler(handler)
    root.setLevel(saved_level)


def test_configure_logging_writes_to_log_dir(tmp_path, isolated_root_logger):
    log_path = configure_logging("info")
    assert log_path is not None
    assert log_path.parent == tmp_path / "logs"
    assert log_path.name.startswith("repeatloop-")
    assert isolated_root_logger.level == logging.INFO


def test_bootstrap_takes_log_level_from_settings(tmp_path, isolated_root_logger):
    settings = SettingsManager(config_path=tmp_path / "settings.yaml")
    settings.set_diagnostics_log_level("debug")
    player = FeedPlayer()

    controller = bootstrap(player, settings)

    assert isolated_root_logger.level == logging.DEBUG
    assert list((tmp_path / "logs").glob("repeatloop-*.log"))
    assert player.callback is not None
    assert controller.state is RepeatState.IDLE


def test_bootstrap_env_level_wins(tmp_path, isolated_root_logger, monkeypatch):
    monkeypatch.setenv("LOGLEVEL", "error")
    settings = SettingsManager(config_path=tmp_path / "settings.yaml")
    settings.set_diagnostics_log_level("DEBUG")
    bootstrap(FeedPlayer(), settings)
    assert isolated_root_logger.level == logging.ERROR
