"""Pydantic models for API requests and responses."""

from pydantic import BaseModel, ConfigDict, Field


class SearchRequest(BaseModel):
    """Request model for a documentation search."""

    search: str = Field(
        ...,
        min_length=1,
        max_length=1000,
        description="Free-text query to look up in the documentation",
        json_schema_extra={"example": "bearer token authentication"},
    )
    max_results: int | None = Field(
        None,
        ge=1,
        le=10,
        description="Number of excerpts to return (defaults to TDOCS_DEFAULT_MAX_RESULTS)",
    )


class SearchResponse(BaseModel):
    """Response model for a documentation search."""

    query: str = Field(..., description="The query that was searched")
    docs_url: str = Field(..., description="Documentation URL that was searched")
    results: list[str] = Field(default_factory=list, description="Best matching excerpts")
    total_chunks: int = Field(0, description="Number of chunks the document was split into")
    matched_chunks: int = Field(0, description="Number of chunks with a positive score")
    summary: str = Field("", description="Human-readable summary of the search")
    error: str | None = Field(None, description="Fetch failure, when the search could not run")


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")
    headless: str = Field(..., description="Headless rendering status")


class ErrorDetail(BaseModel):
    """Structured error detail information."""

    type: str = Field(..., description="Exception type name")
    code: str = Field(..., description="Error code (e.g., TDOCS_NET_002)")
    message: str = Field(..., description="Human-readable error message")


class ErrorLocation(BaseModel):
    """Source location where error occurred."""

    model_config = ConfigDict(populate_by_name=True)

    class_name: str = Field(..., alias="class", description="Class name or <module>")
    method: str = Field(..., description="Method/function name")
    file: str = Field(..., description="Source file name")
    line: int = Field(..., description="Line number")
    timestamp: str | None = Field(None, description="When the error occurred")


class ErrorResponse(BaseModel):
    """Response model for structured errors.

    Example:
        {
            "error": {"type": "MissingDocsUrlError", "code": "TDOCS_CFG_002", "message": "..."},
            "location": {"class": "Settings", "method": "validate_required", ...},
            "context": {"path": "/api/v1/search"},
            "stack_trace": ["Traceback...", ...]  # Only in debug mode
        }
    """

    error: ErrorDetail = Field(..., description="Error details including type, code, and message")
    location: ErrorLocation | None = Field(None, description="Source location of the error")
    context: dict | None = Field(None, description="Additional debugging context")
    cause: dict | None = Field(None, description="Underlying exception that caused this error")
    stack_trace: list[str] | None = Field(None, description="Stack trace (debug mode only)")
