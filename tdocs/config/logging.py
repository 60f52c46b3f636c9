"""Logging setup for TDocs.

Human-readable output goes through rich; ``json_format`` switches to one
JSON object per line for log collectors. Everything is written to stderr
so CLI output on stdout stays clean.
"""

import json
import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "tdocs"

# Libraries that log every request at INFO/DEBUG
NOISY_LOGGERS = ("urllib3", "asyncio")


class JSONLogFormatter(logging.Formatter):
    """Format records as single-line JSON with location and exception info."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": {
                "file": record.filename,
                "function": record.funcName,
                "line": record.lineno,
            },
        }

        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(entry)


def setup_logging(level: str = "INFO", json_format: bool = False) -> logging.Logger:
    """Configure the ``tdocs`` logger.

    Safe to call more than once; previous handlers are replaced.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR).
        json_format: Emit JSON lines instead of rich console output.

    Returns:
        The configured ``tdocs`` logger.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.handlers.clear()
    logger.propagate = False

    handler: logging.Handler
    if json_format:
        handler = logging.StreamHandler()
        handler.setFormatter(JSONLogFormatter())
    else:
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s", datefmt="[%X]"))
    logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logger
