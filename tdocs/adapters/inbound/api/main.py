"""FastAPI application for the TDocs search API."""

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .... import __version__
from ....common.exception_handler import (
    format_exception_json,
    get_http_status_code,
    log_exception,
)
from ....config import get_settings, setup_logging
from ....core.domain.exceptions import TDocsError
from .routers import health, search

logger = logging.getLogger(__name__)

# Determine if we're in debug mode (shows full stack traces)
DEBUG_MODE = os.getenv("DEBUG", "false").lower() == "true"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging on startup."""
    settings = get_settings()
    setup_logging(settings.log_level, json_format=settings.log_json)
    logger.info("TDocs API starting up (docs: %s)", settings.docs_url or "not configured")
    logger.info("Debug mode: %s", "ENABLED" if DEBUG_MODE else "DISABLED")
    yield
    logger.info("TDocs API shutting down...")


app = FastAPI(
    title="TDocs API",
    description="Keyword search over technical documentation, including Swagger/OpenAPI UIs.",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.include_router(health.router)
app.include_router(search.router)


# =============================================================================
# Global Exception Handlers
# =============================================================================


@app.exception_handler(TDocsError)
async def tdocs_error_handler(request: Request, exc: TDocsError) -> JSONResponse:
    """Handle all TDocsError exceptions with structured JSON response.

    Args:
        request: The incoming request.
        exc: The TDocsError exception.

    Returns:
        JSONResponse with structured error details.
    """
    log_exception(
        exc,
        level=logging.WARNING if get_http_status_code(exc) < 500 else logging.ERROR,
        extra_context={"path": str(request.url.path), "method": request.method},
    )

    return JSONResponse(
        status_code=get_http_status_code(exc),
        content=exc.to_dict(include_trace=DEBUG_MODE),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all unhandled exceptions with structured JSON response.

    Args:
        request: The incoming request.
        exc: The unhandled exception.

    Returns:
        JSONResponse with structured error details.
    """
    log_exception(exc, extra_context={"path": str(request.url.path), "method": request.method})

    return JSONResponse(
        status_code=get_http_status_code(exc),
        content=format_exception_json(exc, include_trace=DEBUG_MODE),
    )


# Export for uvicorn
__all__ = ["app"]
