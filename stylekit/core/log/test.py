"""Tests for the logging micro API."""

import io
import logging

import pytest

from .lib import LOGGER_NAME, get_logger, setup_logging


class TestGetLogger:
    """Tests for get_logger."""

    @pytest.mark.unit
    def test_default_name(self):
        """Default logger is the package logger."""
        assert get_logger().name == LOGGER_NAME

    @pytest.mark.unit
    def test_child_name_is_nested(self):
        """Short names are nested under the package logger."""
        assert get_logger("css").name == "stylekit.css"

    @pytest.mark.unit
    def test_qualified_name_kept(self):
        """Already-qualified names are not prefixed twice."""
        assert get_logger("stylekit.widgets").name == "stylekit.widgets"


class TestSetupLogging:
    """Tests for setup_logging."""

    @pytest.mark.unit
    def test_accepts_level_name(self, monkeypatch):
        """String level names are converted before configuring."""
        captured = {}

        def fake_basic_config(**kwargs):
            captured.update(kwargs)

        monkeypatch.setattr(logging, "basicConfig", fake_basic_config)
        stream = io.StringIO()
        setup_logging("debug", stream=stream)

        assert captured["level"] == logging.DEBUG
        assert captured["stream"] is stream

    @pytest.mark.unit
    def test_unknown_level_name_falls_back_to_info(self, monkeypatch):
        """Unrecognised level names fall back to INFO."""
        captured = {}
        monkeypatch.setattr(
            logging, "basicConfig", lambda **kwargs: captured.update(kwargs)
        )
        setup_logging("chatty")

        assert captured["level"] == logging.INFO
