"""Tests for PulseSettings and logging setup."""

import logging
from unittest.mock import patch

import pytest

from pulse.config import PulseSettings, configure_logging


class TestDefaults:
    def test_default_log_level(self):
        s = PulseSettings()
        assert s.log_level == "INFO"

    def test_stop_on_exit_default(self):
        s = PulseSettings()
        assert s.stop_on_exit is True

    def test_explicit_values(self):
        s = PulseSettings(log_level="DEBUG", stop_on_exit=False)
        assert s.log_level == "DEBUG"
        assert s.stop_on_exit is False


class TestExtraIgnored:
    def test_unknown_field_is_ignored(self):
        s = PulseSettings(**{"nonexistent_field": "value"})
        assert not hasattr(s, "nonexistent_field")
        assert s.log_level == "INFO"


class TestConfigureLogging:
    def test_uses_explicit_level(self):
        with patch("pulse.config.logging.basicConfig") as basic:
            configure_logging("debug")
        assert basic.call_args.kwargs["level"] == logging.DEBUG

    def test_falls_back_to_settings(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr("pulse.config.settings.log_level", "WARNING")
        with patch("pulse.config.logging.basicConfig") as basic:
            configure_logging()
        assert basic.call_args.kwargs["level"] == logging.WARNING
