"""
Settings tests and ``configure_logging`` wiring.
"""

from __future__ import annotations

import logging
import os
from datetime import timedelta
from pathlib import Path

import pytest
from pydantic import ValidationError

from osiris.config import LoggingSettings, Settings
from osiris.logging import AgeRule, DetailLevel, Log, configure_logging
from osiris.logging.interceptors import RedirectStdLibHandler


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path: Path):
    """Isolate from developer .env files and OSIRIS_* variables."""
    monkeypatch.chdir(tmp_path)
    for name in list(os.environ):
        if name.startswith("OSIRIS_"):
            monkeypatch.delenv(name)


class TestLoggingSettings:
    def test_defaults(self) -> None:
        s = LoggingSettings()
        assert s.folder == ""
        assert s.log_to_file is False
        assert s.max_files == -1
        assert s.max_age == timedelta(0)
        assert s.detail_level is DetailLevel.DETAILED
        assert s.cleanup_interval == timedelta(minutes=30)
        assert s.age_rule is AgeRule.FUTURE
        assert s.file_name_format == "%Y-%m-%d_%H:%M:%S.txt"
        assert s.console_color is None

    def test_environment_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("OSIRIS_LOG_FOLDER", "var/log")
        monkeypatch.setenv("OSIRIS_LOG_MAX_FILES", "10")
        monkeypatch.setenv("OSIRIS_LOG_MAX_AGE", "PT1H")
        monkeypatch.setenv("OSIRIS_LOG_DETAIL_LEVEL", "basic")
        monkeypatch.setenv("OSIRIS_LOG_AGE_RULE", "PAST")
        monkeypatch.setenv("OSIRIS_LOG_CONSOLE_COLOR", "false")
        s = LoggingSettings()
        assert s.folder == "var/log"
        assert s.log_to_file is True
        assert s.max_files == 10
        assert s.max_age == timedelta(hours=1)
        assert s.detail_level is DetailLevel.BASIC
        assert s.age_rule is AgeRule.PAST
        assert s.console_color is False

    def test_env_file(self, tmp_path: Path) -> None:
        (tmp_path / ".env").write_text("OSIRIS_LOG_DETAIL_LEVEL=0\n", encoding="utf-8")
        assert LoggingSettings().detail_level is DetailLevel.NONE

    def test_invalid_detail_level(self) -> None:
        with pytest.raises(ValidationError):
            LoggingSettings(detail_level="loud")

    def test_settings_are_frozen(self) -> None:
        s = LoggingSettings()
        with pytest.raises(ValidationError):
            s.folder = "elsewhere"  # type: ignore[misc]


class TestSettings:
    def test_environment_specific_env_file(self, monkeypatch, tmp_path: Path) -> None:
        monkeypatch.setenv("OSIRIS_ENV", "testing")
        (tmp_path / ".env").write_text("OSIRIS_LOG_MAX_FILES=3\n", encoding="utf-8")
        (tmp_path / ".env.testing").write_text("OSIRIS_LOG_MAX_FILES=5\n", encoding="utf-8")
        settings = Settings()
        assert settings.environment.env == "testing"
        assert settings.logging.max_files == 5

    def test_env_file_chain_comes_from_environment(self, monkeypatch, tmp_path: Path) -> None:
        monkeypatch.setenv("OSIRIS_ENV", "staging")
        (tmp_path / ".env.staging").write_text("OSIRIS_LOG_MAX_FILES=5\n", encoding="utf-8")
        (tmp_path / ".env.staging.local").write_text("OSIRIS_LOG_MAX_FILES=8\n", encoding="utf-8")
        settings = Settings()
        assert settings.environment.env_files == (
            ".env",
            ".env.local",
            ".env.staging",
            ".env.staging.local",
        )
        assert settings.logging.max_files == 8


class TestConfigureLogging:
    def test_applies_settings_and_initializes(self, tmp_path: Path, stream) -> None:
        target = Log(stream=stream)
        settings = LoggingSettings(
            folder=str(tmp_path / "logs"),
            max_files=4,
            detail_level="none",
            console_color=False,
            cleanup_interval=timedelta(hours=2),
        )
        try:
            assert configure_logging(settings, target) is target
            assert target.initialized
            assert target.detail_level is DetailLevel.NONE
            assert target.max_log_files == 4
            assert target.cleanup_interval == timedelta(hours=2)
            assert target.retention is not None
            assert target.retention.interval == timedelta(hours=2)
            target.info("configured")
            assert stream.getvalue() == "configured\n"
            assert target.latest_file_path.read_text(encoding="utf-8") == "configured\n"
        finally:
            target.shutdown()

    def test_intercept_stdlib(self, stream, listener) -> None:
        target = Log(stream=stream)
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            configure_logging(LoggingSettings(intercept_stdlib=True, detail_level="none"), target)
            assert any(isinstance(h, RedirectStdLibHandler) for h in root.handlers)
            target.add_logger(listener)
            logging.getLogger("x").warning("via stdlib")
            assert listener.records[-1][1] == "via stdlib"
        finally:
            root.handlers = saved_handlers
            root.setLevel(saved_level)
            target.shutdown()
