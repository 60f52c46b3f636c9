"""Common utilities and shared functionality.

This package contains helper functions used across multiple layers of the
TDocs application: exception formatting and boundary text cleaning.
"""

from .exception_handler import (
    FormattedError,
    format_exception_json,
    format_http_error,
    get_error_code,
    get_http_status_code,
    log_exception,
)
from .utils import clean_text, mask_token

__all__ = [
    # Utilities
    "clean_text",
    "mask_token",
    # Exception handlers
    "FormattedError",
    "format_exception_json",
    "format_http_error",
    "get_error_code",
    "get_http_status_code",
    "log_exception",
]
