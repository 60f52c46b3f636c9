"""HTTP transport exceptions for TDocs.

The fetch pipeline only needs to know that a request failed, but the
error formatting layer distinguishes the three families below.
"""

from typing import Any

from .base import TDocsError


class TransportError(TDocsError):
    """Base error for HTTP transport operations."""

    error_code = "TDOCS_NET_001"


class HttpConnectionError(TransportError):
    """Could not connect to the remote host.

    Common causes:
    - Wrong documentation URL
    - DNS failure
    - Server is offline
    """

    error_code = "TDOCS_NET_002"


class HttpTimeoutError(TransportError):
    """Request exceeded its timeout."""

    error_code = "TDOCS_NET_003"


class HttpStatusError(TransportError):
    """Remote host answered with an error status code."""

    error_code = "TDOCS_NET_004"

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        cause: Exception | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, cause=cause, context=context)
        self.status_code = status_code
