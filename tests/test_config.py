"""Config module tests.

Covers CMDKIT_LOG_LEVEL parsing and LogLevel ordering.
"""

from __future__ import annotations

import os
from unittest import mock

import pytest

from cmdkit.config import Config, LogLevel, load_config


class TestLogLevel:
    """LogLevel enum tests."""

    def test_ordering(self):
        assert LogLevel.DEBUG < LogLevel.VERBOSE < LogLevel.WARN < LogLevel.INFO < LogLevel.SILENT

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("debug", LogLevel.DEBUG),
            ("VERBOSE", LogLevel.VERBOSE),
            ("Warn", LogLevel.WARN),
            ("warning", LogLevel.WARN),
            (" info ", LogLevel.INFO),
            ("silent", LogLevel.SILENT),
        ],
    )
    def test_from_string_valid(self, value: str, expected: LogLevel):
        assert LogLevel.from_string(value) == expected

    def test_from_string_invalid(self):
        """Unknown names fall back to INFO."""
        assert LogLevel.from_string("loud") == LogLevel.INFO
        assert LogLevel.from_string("") == LogLevel.INFO


class TestLoadConfig:
    """load_config tests."""

    def test_defaults(self):
        assert load_config({}) == Config(log_level=LogLevel.INFO)

    def test_explicit_mapping(self):
        config = load_config({"CMDKIT_LOG_LEVEL": "debug"})
        assert config.log_level == LogLevel.DEBUG

    def test_reads_os_environ(self):
        with mock.patch.dict(os.environ, {"CMDKIT_LOG_LEVEL": "silent"}, clear=False):
            config = load_config()
            assert config.log_level == LogLevel.SILENT

    def test_unset_environ(self):
        env = {k: v for k, v in os.environ.items() if k != "CMDKIT_LOG_LEVEL"}
        with mock.patch.dict(os.environ, env, clear=True):
            assert load_config().log_level == LogLevel.INFO

    def test_empty_value(self):
        assert load_config({"CMDKIT_LOG_LEVEL": ""}).log_level == LogLevel.INFO
