"""Health check endpoints."""

from fastapi import APIRouter, Depends

from ..... import __version__
from .....core.services.smart_fetch import SmartFetchService
from ..deps import get_fetcher
from ..models import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Basic health check endpoint.

    Returns:
        HealthResponse with current status and version.
    """
    return HealthResponse(status="healthy", version=__version__, headless="not_checked")


@router.get("/ready", response_model=HealthResponse)
def readiness_check(fetcher: SmartFetchService = Depends(get_fetcher)) -> HealthResponse:
    """Readiness check reporting whether SPA rendering is possible.

    Returns:
        HealthResponse with detailed status.
    """
    support = fetcher.check_headless_support()
    headless = support.method if support.available else "unavailable"
    return HealthResponse(status="ready", version=__version__, headless=headless)
