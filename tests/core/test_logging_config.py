"""
Tests for logging configuration

Logs must never reach stdout: it carries MCP protocol frames.
"""

import json
import logging
import sys

import pytest

from ado_tools.core.logging_config import JSONFormatter, get_logger, log_with_context, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    """Tests for setup_logging"""

    def test_console_handler_writes_to_stderr(self, restore_root_logger):
        setup_logging(level="DEBUG")

        handlers = restore_root_logger.handlers
        assert len(handlers) == 1
        assert handlers[0].stream is sys.stderr
        assert restore_root_logger.level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self, restore_root_logger):
        setup_logging(level="chatty")

        assert restore_root_logger.level == logging.INFO

    def test_json_output_uses_json_formatter(self, restore_root_logger):
        setup_logging(json_output=True)

        assert isinstance(restore_root_logger.handlers[0].formatter, JSONFormatter)

    def test_file_handler_added(self, restore_root_logger, tmp_path):
        log_file = tmp_path / "logs" / "ado-skill.log"

        setup_logging(log_file=log_file)

        assert log_file.parent.exists()
        assert len(restore_root_logger.handlers) == 2
        for handler in restore_root_logger.handlers[1:]:
            handler.close()

    def test_httpx_noise_reduced(self, restore_root_logger):
        setup_logging(level="DEBUG")

        assert logging.getLogger("httpx").level == logging.WARNING


class TestJSONFormatter:
    """Tests for structured output"""

    def test_format_includes_extra_fields(self):
        record = logging.LogRecord("ado", logging.INFO, __file__, 10, "Fetched %d", (3,), None)
        record.extra_fields = {"repository_count": 3}

        data = json.loads(JSONFormatter().format(record))

        assert data["message"] == "Fetched 3"
        assert data["level"] == "INFO"
        assert data["repository_count"] == 3
        assert data["timestamp"].endswith("Z")


def test_log_with_context_passes_extra_fields():
    logger = get_logger("ado_tools.tests")
    records = []

    class _Collect(logging.Handler):
        def emit(self, record):
            records.append(record)

    handler = _Collect()
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    try:
        log_with_context(logger, "info", "done", project="Fabrikam")
    finally:
        logger.removeHandler(handler)

    assert records[0].extra_fields == {"project": "Fabrikam"}
