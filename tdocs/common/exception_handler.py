"""Exception handling utilities for consistent error formatting.

This module formats exceptions as structured JSON, logs them consistently,
maps them to HTTP status codes, and turns documentation fetch failures into
messages a user can act on.
"""

import json
import logging
import traceback
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..core.domain.exceptions import (
    ConfigurationError,
    HttpConnectionError,
    HttpStatusError,
    HttpTimeoutError,
    RenderingError,
    TDocsError,
    TransportError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _traceback_location(exc: BaseException) -> dict[str, Any]:
    """Location of the innermost frame of a plain Python exception."""
    frames = traceback.extract_tb(exc.__traceback__) if exc.__traceback__ else []
    if not frames:
        return {"class": "<unknown>", "method": "<unknown>", "file": "<unknown>", "line": 0}

    last = frames[-1]
    return {
        "class": "<unknown>",
        "method": last.name,
        "file": Path(last.filename).name,
        "line": last.lineno or 0,
    }


def format_exception_json(
    exc: Exception,
    include_trace: bool = False,
    extra_context: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Format any exception in the TDocs error shape.

    Non-TDocs exceptions get the ``PYTHON_ERR`` code and the location of
    the innermost traceback frame.

    Args:
        exc: The exception to format.
        include_trace: If True, include the stack trace lines.
        extra_context: Merged into the ``context`` block.

    Returns:
        Dictionary with ``error``, ``location`` and optional extras.
    """
    if isinstance(exc, TDocsError):
        result = exc.to_dict(include_trace=include_trace)
        if extra_context:
            result.setdefault("context", {}).update(extra_context)
        return result

    result = {
        "error": {"type": type(exc).__name__, "code": "PYTHON_ERR", "message": str(exc)},
        "location": _traceback_location(exc),
    }
    if extra_context:
        result["context"] = dict(extra_context)
    if include_trace:
        result["stack_trace"] = [
            line.strip() for line in traceback.format_exception(exc) if line.strip()
        ]
    return result


def log_exception(
    exc: Exception,
    log: logging.Logger | None = None,
    level: int = logging.ERROR,
    extra_context: dict[str, Any] | None = None,
) -> None:
    """Log an exception as one summary line plus its JSON details.

    Args:
        exc: The exception to log.
        log: Logger to use (defaults to this module's logger).
        level: Logging level for the summary line.
        extra_context: Request or command context to include.
    """
    log = log or logger
    details = format_exception_json(exc, include_trace=True, extra_context=extra_context)
    error = details["error"]
    log.log(level, "%s [%s]: %s", error["type"], error["code"], error["message"])
    log.debug("Error details: %s", json.dumps(details, indent=2))


def get_error_code(exc: Exception) -> str:
    """Get the error code from an exception.

    Args:
        exc: The exception to get code from.

    Returns:
        Error code string (e.g., "TDOCS_NET_002" or "PYTHON_ERR").
    """
    if isinstance(exc, TDocsError):
        return exc.error_code
    return "PYTHON_ERR"


def get_http_status_code(exc: Exception) -> int:
    """Map exception type to appropriate HTTP status code.

    Args:
        exc: The exception to map.

    Returns:
        HTTP status code (400, 502, 503, 504, 500).
    """
    if isinstance(exc, ValidationError):
        return 400
    if isinstance(exc, HttpTimeoutError):
        return 504
    if isinstance(exc, TransportError):
        return 502
    if isinstance(exc, RenderingError):
        return 503
    if isinstance(exc, ConfigurationError):
        return 500
    if isinstance(exc, TDocsError):
        return 500

    if isinstance(exc, ValueError):
        return 400
    if isinstance(exc, ConnectionError | TimeoutError):
        return 503

    return 500


@dataclass
class FormattedError:
    """A fetch failure rendered for logs and for the end user.

    Attributes:
        message: Technical message of the underlying error.
        user_message: Actionable explanation for the user.
        status_code: HTTP status of the failed request, when there was one.
    """

    message: str
    user_message: str
    status_code: int | None = None


def _transport_cause(exc: Exception) -> Exception:
    """Unwrap a pipeline error down to the transport failure behind it."""
    if isinstance(exc, TDocsError) and not isinstance(exc, TransportError):
        if isinstance(exc.cause, TransportError):
            return exc.cause
    return exc


def format_http_error(exc: Exception, url: str) -> FormattedError:
    """Turn a documentation fetch failure into a user-facing message.

    Args:
        exc: The error raised while fetching the documentation.
        url: Documentation URL that was requested.

    Returns:
        FormattedError with technical and user messages.
    """
    error = _transport_cause(exc)
    message = error.message if isinstance(error, TDocsError) else str(error)

    if isinstance(error, HttpConnectionError):
        return FormattedError(
            message=message,
            user_message=(
                f"Could not connect to the documentation ({url}). "
                "Check that the URL is correct and the server is online."
            ),
        )

    if isinstance(error, HttpTimeoutError):
        return FormattedError(
            message=message,
            user_message=(
                "Timeout connecting to the documentation. "
                "Check your connection or increase TDOCS_REQUEST_TIMEOUT."
            ),
        )

    if isinstance(error, HttpStatusError):
        status = error.status_code
        if status == 401:
            user_message = "Invalid or expired JWT token. Check TDOCS_JWT_TOKEN."
        elif status == 403:
            user_message = "Access to the documentation was denied. Check the JWT token permissions."
        elif status == 404:
            user_message = f"Documentation not found at {url}. Check TDOCS_DOCS_URL."
        elif status >= 500:
            user_message = f"Documentation server error ({status}). Try again later."
        else:
            user_message = f"Error fetching documentation: {message}"
        return FormattedError(message=message, user_message=user_message, status_code=status)

    return FormattedError(message=message, user_message=f"Error fetching documentation: {message}")
