"""Domain models for TDocs.

This package contains all data models used across the application.
Models are organized by domain area:

- document: Document, Chunk, SearchResult and format detection models
- fetch: SmartFetchResult and the Swagger/rendering records of the fetch pipeline
- openapi: typed projection of OpenAPI/Swagger specs

All models are re-exported here for convenient importing:

    from tdocs.core.domain import Chunk, SearchResult, SmartFetchResult
"""

from .document import (
    Chunk,
    ChunkingOptions,
    Document,
    DocumentFormat,
    FormatDetectionResult,
    SearchOutput,
    SearchResult,
)
from .fetch import (
    ContentType,
    FetchMethod,
    HeadlessSupport,
    RenderResult,
    SmartFetchOptions,
    SmartFetchResult,
    SpecLocation,
    SpecType,
    SwaggerDetectionResult,
)
from .openapi import OpenApiSpec

__all__ = [
    # Document models
    "Chunk",
    "ChunkingOptions",
    "Document",
    "DocumentFormat",
    "FormatDetectionResult",
    "SearchOutput",
    "SearchResult",
    # Fetch models
    "ContentType",
    "FetchMethod",
    "HeadlessSupport",
    "RenderResult",
    "SmartFetchOptions",
    "SmartFetchResult",
    "SpecLocation",
    "SpecType",
    "SwaggerDetectionResult",
    # OpenAPI models
    "OpenApiSpec",
]
