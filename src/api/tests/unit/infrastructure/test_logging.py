"""Unit tests for structlog configuration."""

import io
import sys

import pytest
import structlog

from infrastructure.logging import configure_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    """Restore structlog defaults after each test."""
    yield
    structlog.reset_defaults()


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_json_renderer_without_tty(self, monkeypatch):
        """Non-interactive output is rendered as JSON."""
        monkeypatch.delenv("FORCE_COLOR", raising=False)
        monkeypatch.setattr(sys, "stdout", io.StringIO())

        configure_logging()

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_renderer_with_force_color(self, monkeypatch):
        """FORCE_COLOR switches to the colored console renderer."""
        monkeypatch.setenv("FORCE_COLOR", "1")

        configure_logging()

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_level_is_case_insensitive(self):
        """Level names are accepted in any case."""
        configure_logging("WARNING")

        assert structlog.get_config()["wrapper_class"] is not None

    def test_unknown_level_raises(self):
        """Unknown level names are rejected."""
        with pytest.raises(ValueError, match="Unknown log level"):
            configure_logging("verbose")
