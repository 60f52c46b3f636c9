"""OpenAPI/Swagger spec exceptions for TDocs."""

from .base import TDocsError


class SpecError(TDocsError):
    """Base error for OpenAPI spec handling."""

    error_code = "TDOCS_SPC_001"


class SpecNotFoundError(SpecError):
    """No OpenAPI spec could be located for a Swagger-like page."""

    error_code = "TDOCS_SPC_002"


class InvalidSpecError(SpecError):
    """A fetched document is not a recognizable OpenAPI/Swagger spec."""

    error_code = "TDOCS_SPC_003"
