"""Tests for environment-driven settings."""

import logging
from pathlib import Path

import pytest

from tasktrack import config


class TestDataPath:
    """Tests for default_data_path."""

    def test_default(self, monkeypatch):
        """Test the fallback file name."""
        monkeypatch.delenv("TASK_DB_PATH", raising=False)
        assert config.default_data_path() == Path("tasks.txt")

    def test_from_env(self, monkeypatch, tmp_path):
        """Test that TASK_DB_PATH overrides the default."""
        monkeypatch.setenv("TASK_DB_PATH", str(tmp_path / "mine.txt"))
        assert config.default_data_path() == tmp_path / "mine.txt"

    def test_empty_env_uses_default(self, monkeypatch):
        """Test that an empty TASK_DB_PATH is ignored."""
        monkeypatch.setenv("TASK_DB_PATH", "")
        assert config.default_data_path() == Path("tasks.txt")


class TestLogLevel:
    """Tests for log_level."""

    def test_default(self, monkeypatch):
        """Test the default log level."""
        monkeypatch.delenv("TASK_LOG_LEVEL", raising=False)
        assert config.log_level() == logging.WARNING

    def test_from_env(self, monkeypatch):
        """Test reading a level name, case-insensitively."""
        monkeypatch.setenv("TASK_LOG_LEVEL", "debug")
        assert config.log_level() == logging.DEBUG

    def test_invalid(self, monkeypatch):
        """Test that an unknown level name falls back to WARNING."""
        monkeypatch.setenv("TASK_LOG_LEVEL", "chatty")
        assert config.log_level() == logging.WARNING


class TestSkipMalformed:
    """Tests for skip_malformed."""

    @pytest.mark.parametrize("raw,expected", [
        ("1", True),
        ("yes", True),
        ("On", True),
        ("0", False),
        ("", False),
    ])
    def test_parse(self, monkeypatch, raw, expected):
        """Test parsing TASK_SKIP_MALFORMED."""
        monkeypatch.setenv("TASK_SKIP_MALFORMED", raw)
        assert config.skip_malformed() is expected

    def test_unset(self, monkeypatch):
        """Test that skipping is off by default."""
        monkeypatch.delenv("TASK_SKIP_MALFORMED", raising=False)
        assert config.skip_malformed() is False
