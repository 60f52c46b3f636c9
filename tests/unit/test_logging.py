"""Unit tests for logging setup and exception logging."""

import json
import logging
import sys

import pytest
from rich.logging import RichHandler

from tdocs.common.exception_handler import log_exception
from tdocs.config.logging import ROOT_LOGGER, JSONLogFormatter, setup_logging
from tdocs.core.domain.exceptions import HttpTimeoutError

pytestmark = pytest.mark.unit


@pytest.fixture
def restore_root_logger():
    """Undo setup_logging changes so other tests see default logging."""
    logger = logging.getLogger(ROOT_LOGGER)
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


def _record(msg="Fetched %s", args=("https://docs.example.com",), exc_info=None):
    return logging.LogRecord(
        name="tdocs.core.services.smart_fetch",
        level=logging.INFO,
        pathname="/app/tdocs/core/services/smart_fetch.py",
        lineno=42,
        msg=msg,
        args=args,
        exc_info=exc_info,
    )


class TestJSONLogFormatter:
    """Tests for JSON log lines."""

    def test_basic_fields(self):
        entry = json.loads(JSONLogFormatter().format(_record()))

        assert entry["level"] == "INFO"
        assert entry["logger"] == "tdocs.core.services.smart_fetch"
        assert entry["message"] == "Fetched https://docs.example.com"
        assert entry["location"]["file"] == "smart_fetch.py"
        assert entry["location"]["line"] == 42
        assert "exception" not in entry

    def test_exception_info(self):
        try:
            raise ValueError("bad spec")
        except ValueError:
            record = _record(msg="failed", args=(), exc_info=sys.exc_info())

        entry = json.loads(JSONLogFormatter().format(record))

        assert entry["exception"]["type"] == "ValueError"
        assert entry["exception"]["message"] == "bad spec"
        assert "Traceback" in entry["exception"]["traceback"]


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_rich_handler_by_default(self, restore_root_logger):
        logger = setup_logging("debug")

        assert logger.name == ROOT_LOGGER
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], RichHandler)

    def test_json_handler(self, restore_root_logger):
        logger = setup_logging("WARNING", json_format=True)

        assert logger.level == logging.WARNING
        assert isinstance(logger.handlers[0].formatter, JSONLogFormatter)

    def test_repeated_setup_replaces_handlers(self, restore_root_logger):
        setup_logging()
        logger = setup_logging()
        assert len(logger.handlers) == 1

    def test_unknown_level_falls_back_to_info(self, restore_root_logger):
        assert setup_logging("chatty").level == logging.INFO


class TestLogException:
    """Tests for log_exception."""

    def test_summary_line(self, caplog):
        log = logging.getLogger("tests.log_exception")
        exc = HttpTimeoutError("Request timed out after 10s")

        with caplog.at_level(logging.DEBUG, logger="tests.log_exception"):
            log_exception(exc, log=log, level=logging.WARNING, extra_context={"path": "/api"})

        summary, details = caplog.records
        assert summary.levelno == logging.WARNING
        assert summary.getMessage() == (
            "HttpTimeoutError [TDOCS_NET_003]: Request timed out after 10s"
        )
        assert '"path": "/api"' in details.getMessage()
