"""Base exception for TDocs.

Every TDocs exception carries a stable error code, the location it was
raised from, an optional underlying cause and free-form context. ``to_dict``
gives the JSON shape used by the API error responses and the CLI.
"""

import inspect
import traceback
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any


@dataclass
class ExceptionContext:
    """Where an exception was raised."""

    class_name: str
    method_name: str
    file_name: str
    line_number: int
    timestamp: str = field(default_factory=lambda: datetime.now(UTC).isoformat())

    def to_dict(self) -> dict[str, Any]:
        return {
            "class": self.class_name,
            "method": self.method_name,
            "file": self.file_name,
            "line": self.line_number,
            "timestamp": self.timestamp,
        }


UNKNOWN_LOCATION = ExceptionContext("<unknown>", "<unknown>", "<unknown>", 0)


class TDocsError(Exception):
    """Base exception for all TDocs errors.

    Example:
        try:
            session.get(url, timeout=10)
        except requests.ConnectionError as e:
            raise HttpConnectionError(
                "Failed to connect to documentation host",
                cause=e,
                context={"url": url},
            ) from e
    """

    error_code: str = "TDOCS_ERR_001"

    def __init__(
        self,
        message: str,
        *,
        cause: BaseException | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message.
            cause: Underlying exception, reported in ``to_dict``.
            context: Extra key-value pairs for debugging (URL, method, ...).
        """
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.extra_context = context or {}
        self.location = self._capture_location()
        self.stack_trace = "".join(traceback.format_exception(cause)) if cause else None

    def _capture_location(self) -> ExceptionContext:
        # Walk past this method and every constructor in the subclass chain
        frame = inspect.currentframe()
        while frame is not None and frame.f_locals.get("self") is self:
            frame = frame.f_back
        if frame is None:
            return UNKNOWN_LOCATION

        owner = frame.f_locals.get("self")
        return ExceptionContext(
            class_name=type(owner).__name__ if owner is not None else "<module>",
            method_name=frame.f_code.co_name,
            file_name=Path(frame.f_code.co_filename).name,
            line_number=frame.f_lineno,
        )

    def to_dict(self, include_trace: bool = False) -> dict[str, Any]:
        """Serialize the exception for JSON output.

        Args:
            include_trace: Include the cause's traceback lines (debug mode).

        Returns:
            Dict with ``error``, ``location`` and, when present, ``context``,
            ``stack_trace`` and ``cause``.
        """
        result: dict[str, Any] = {
            "error": {
                "type": type(self).__name__,
                "code": self.error_code,
                "message": self.message,
            },
            "location": self.location.to_dict(),
        }

        if self.extra_context:
            result["context"] = self.extra_context

        if include_trace and self.stack_trace:
            result["stack_trace"] = [line for line in self.stack_trace.splitlines() if line.strip()]

        if self.cause is not None:
            result["cause"] = {
                "type": type(self.cause).__name__,
                "message": str(self.cause),
            }

        return result
