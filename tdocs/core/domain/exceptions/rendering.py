"""Headless rendering exceptions for TDocs."""

from .base import TDocsError


class RenderingError(TDocsError):
    """Base error for headless browser rendering."""

    error_code = "TDOCS_RND_001"


class RendererUnavailableError(RenderingError):
    """No headless browser engine is installed.

    Install it with: pip install playwright && playwright install chromium
    """

    error_code = "TDOCS_RND_002"


class RenderFailedError(RenderingError):
    """The headless browser failed to load or evaluate the page."""

    error_code = "TDOCS_RND_003"
