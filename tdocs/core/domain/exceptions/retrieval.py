"""Retrieval exceptions for TDocs."""

from .base import TDocsError


class RetrievalError(TDocsError):
    """Error while obtaining documentation content."""

    error_code = "TDOCS_RET_001"


class FetchFailedError(RetrievalError):
    """Every fetch strategy failed for the documentation URL."""

    error_code = "TDOCS_RET_002"
