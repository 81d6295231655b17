"""Configuration tests."""

from __future__ import annotations

import pytest

from config import TrackerConfig


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("TRACKER_TIMEZONE", "DEFAULT_PERIOD", "PORT", "LOG_TO_FILE"):
        monkeypatch.delenv(key, raising=False)
    cfg = TrackerConfig()
    assert cfg.analysis.timezone is None
    assert cfg.analysis.default_period == "week"
    assert cfg.storage.collection == "userGrowthHistory"
    assert "file" in cfg.get_logging_config()["handlers"]


def test_invalid_values_are_collected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRACKER_TIMEZONE", "Mars/Olympus")
    monkeypatch.setenv("DEFAULT_PERIOD", "decade")
    monkeypatch.setenv("PORT", "80")
    monkeypatch.setenv("MAX_SESSIONS", "0")
    with pytest.raises(ValueError) as excinfo:
        TrackerConfig()
    message = str(excinfo.value)
    assert "Mars/Olympus" in message
    assert "DEFAULT_PERIOD" in message
    assert "80" in message
    assert "MAX_SESSIONS" in message


def test_logging_without_file(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_TO_FILE", "false")
    cfg = TrackerConfig()
    logging_config = cfg.get_logging_config()
    assert list(logging_config["handlers"]) == ["console"]
    assert logging_config["loggers"][""]["handlers"] == ["console"]
