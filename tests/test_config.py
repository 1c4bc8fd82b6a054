"""
Environment-driven configuration tests.
"""

import logging

from argcontracts.config import Config
from argcontracts.contract import ParameterSpec


class TestFailureModeSetting:

    def test_defaults_to_return(self, monkeypatch):
        monkeypatch.delenv("ARGCONTRACTS_FAILURE_MODE", raising=False)
        assert Config.failure_mode_name() == 'return'

    def test_raise_is_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("ARGCONTRACTS_FAILURE_MODE", " RAISE ")
        assert Config.failure_mode_name() == 'raise'

    def test_unknown_value_falls_back_to_return(self, monkeypatch):
        monkeypatch.setenv("ARGCONTRACTS_FAILURE_MODE", "explode")
        assert Config.failure_mode_name() == 'return'


class TestLogLevelSetting:

    def test_defaults_to_debug(self, monkeypatch):
        monkeypatch.delenv("ARGCONTRACTS_FAILURE_LOG_LEVEL", raising=False)
        assert Config.failure_log_level() == logging.DEBUG

    def test_named_level(self, monkeypatch):
        monkeypatch.setenv("ARGCONTRACTS_FAILURE_LOG_LEVEL", "info")
        assert Config.failure_log_level() == logging.INFO

    def test_unknown_level_falls_back_to_debug(self, monkeypatch):
        monkeypatch.setenv("ARGCONTRACTS_FAILURE_LOG_LEVEL", "LOUD")
        assert Config.failure_log_level() == logging.DEBUG


class TestOptionalMarker:

    def test_default_marker(self, monkeypatch):
        monkeypatch.delenv("ARGCONTRACTS_OPTIONAL_MARKER", raising=False)
        assert Config.optional_marker() == '?'

    def test_custom_marker_used_by_name_parsing(self, monkeypatch):
        monkeypatch.setenv("ARGCONTRACTS_OPTIONAL_MARKER", "*")
        spec = ParameterSpec.declare('limit*', 'number')
        assert spec.name == 'limit'
        assert spec.optional is True

    def test_multi_character_marker_ignored(self, monkeypatch):
        monkeypatch.setenv("ARGCONTRACTS_OPTIONAL_MARKER", "??")
        assert Config.optional_marker() == '?'
