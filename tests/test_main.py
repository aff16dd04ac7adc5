"""Tests for the command line entry point helpers."""

from pathlib import Path

import pytest

try:
    import pulsectl  # noqa: F401
except (ImportError, OSError):
    pytest.skip("libpulse is not available", allow_module_level=True)

pytest.importorskip("PySide6.QtWidgets")

import main  # noqa: E402
from app_meta import DEFAULT_UUID  # noqa: E402
from errors import SettingsError  # noqa: E402


class TestParseArgs:
    """Test command line parsing."""

    def test_defaults(self):
        """Test the defaults with no arguments."""
        args = main.parse_args([])
        assert args.debug is False
        assert args.config is None
        assert args.uuid == DEFAULT_UUID

    def test_options(self):
        """Test explicit options."""
        args = main.parse_args(["--debug", "--config", "/tmp/x.cfg", "--uuid", "abc"])
        assert args.debug is True
        assert args.config == Path("/tmp/x.cfg")
        assert args.uuid == "abc"


class TestPollSettings:
    """Test the periodic settings reload."""

    def test_errors_are_logged_not_raised(self, caplog):
        """Test that a broken edit does not stop the poll timer."""
        class BrokenStore:
            def reload(self):
                raise SettingsError("bad step")

        main.poll_settings(BrokenStore())
        assert "bad step" in caplog.text
