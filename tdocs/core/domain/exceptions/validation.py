"""Validation exceptions for TDocs."""

from .base import TDocsError


class ValidationError(TDocsError):
    """Input validation failed."""

    error_code = "TDOCS_VAL_001"


class EmptyQueryError(ValidationError):
    """Query cannot be empty or whitespace only."""

    error_code = "TDOCS_VAL_002"


class InvalidMaxResultsError(ValidationError):
    """max_results must be between 1 and 10."""

    error_code = "TDOCS_VAL_003"
