"""Tests for logger configuration."""

import json
import sys

import pytest
from loguru import logger

from declaration_engine.config.settings import Settings
from declaration_engine.core.logger import setup_logger, setup_logger_from_settings


@pytest.fixture
def restore_logger():
    yield
    logger.remove()
    logger.add(sys.stderr)


class TestSetupLogger:
    """Test console and file sinks."""

    def test_file_sink_receives_messages(self, tmp_path, restore_logger):
        log_file = tmp_path / "logs" / "engine.log"
        setup_logger(level="DEBUG", log_file=str(log_file))

        logger.debug("[CALENDAR_BUILDER] built 21 day(s)")
        logger.remove()

        content = log_file.read_text()
        assert "Logger initialized with level=DEBUG" in content
        assert "[CALENDAR_BUILDER] built 21 day(s)" in content

    def test_level_filters_file_output(self, tmp_path, restore_logger):
        log_file = tmp_path / "engine.log"
        setup_logger(level="WARNING", log_file=str(log_file))

        logger.info("hidden")
        logger.warning("shown")
        logger.remove()

        content = log_file.read_text()
        assert "hidden" not in content
        assert "shown" in content

    def test_json_file_sink(self, tmp_path, restore_logger):
        log_file = tmp_path / "engine.jsonl"
        setup_logger(level="INFO", log_file=str(log_file), serialize=True)

        logger.info("[DECLARATION] finalized")
        logger.remove()

        lines = [json.loads(line) for line in log_file.read_text().splitlines()]
        assert lines[-1]["record"]["message"] == "[DECLARATION] finalized"

    def test_engine_only_drops_foreign_records(self, tmp_path, restore_logger):
        log_file = tmp_path / "engine.log"
        setup_logger(level="INFO", log_file=str(log_file), engine_only=True)

        logger.info("from the test module")
        logger.remove()

        content = log_file.read_text()
        assert "Logger initialized" in content
        assert "from the test module" not in content

    def test_setup_from_settings(self, tmp_path, restore_logger):
        config = Settings(_env_file=None, DECLARATIONS_LOG_LEVEL="WARNING", DECLARATIONS_LOG_FILE=str(tmp_path / "s.log"))
        setup_logger_from_settings(config)

        logger.warning("settings sink")
        logger.remove()

        assert "settings sink" in (tmp_path / "s.log").read_text()
