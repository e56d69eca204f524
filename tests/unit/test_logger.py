"""
Tests for session logger setup.
"""

import sys

import pytest
from loguru import logger

from scitext import __version__
from scitext.contexts.rendering.config import CONFIG_PATH_ENV_VAR
from scitext.contexts.rendering.logger import log_pipeline_choice, setup_rendering_logger
from scitext.contexts.segmentation.logger import setup_segmentation_logger


@pytest.fixture
def restore_default_sink():
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.mark.unit
class TestSetupLoggers:
    """Tests for the context logger setup functions."""

    def test_rendering_log_file(self, tmp_path, monkeypatch, restore_default_sink):
        """Test the log file gets the provenance header and prefixed messages."""
        monkeypatch.delenv(CONFIG_PATH_ENV_VAR, raising=False)
        log_file = setup_rendering_logger(tmp_path / "session", console_level="ERROR")
        log_pipeline_choice("fast", "inline content only")
        logger.remove()

        text = log_file.read_text()
        assert log_file.name == "render.log"
        assert f"scitext: {__version__}" in text
        assert "Markdown mode: True" in text
        assert "Config override: none" in text
        assert "[render] Using fast pipeline: inline content only" in text

    def test_segmentation_log_file(self, tmp_path, restore_default_sink):
        log_file = setup_segmentation_logger(tmp_path)
        assert log_file.exists()
