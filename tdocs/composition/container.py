"""Composition root wiring adapters to the application services."""

from __future__ import annotations

import logging
from functools import lru_cache

from ..adapters.outbound.http.requests_adapter import RequestsHttpAdapter
from ..adapters.outbound.rendering.playwright_renderer import PlaywrightRenderer
from ..config import Settings, get_settings
from ..core.domain import SmartFetchOptions
from ..core.services.docs_search import DocsSearchService
from ..core.services.smart_fetch import SmartFetchService

logger = logging.getLogger(__name__)


def build_fetch_options(settings: Settings) -> SmartFetchOptions:
    """Translate settings into smart fetch options."""
    return SmartFetchOptions(
        http_timeout=settings.request_timeout,
        headless_timeout=settings.headless_timeout,
        use_headless_fallback=settings.use_headless_fallback,
    )


@lru_cache
def get_http_adapter() -> RequestsHttpAdapter:
    logger.info("Initializing RequestsHttpAdapter...")
    settings = get_settings()
    return RequestsHttpAdapter(jwt_token=settings.jwt_token, timeout=settings.request_timeout)


@lru_cache
def get_renderer() -> PlaywrightRenderer:
    logger.info("Initializing PlaywrightRenderer...")
    return PlaywrightRenderer()


@lru_cache
def get_smart_fetch_service() -> SmartFetchService:
    logger.info("Initializing SmartFetchService...")
    renderer = get_renderer() if get_settings().use_headless_fallback else None
    return SmartFetchService(get_http_adapter(), renderer=renderer)


@lru_cache
def get_docs_search_service() -> DocsSearchService:
    """Build the search service for the configured documentation URL.

    Raises:
        MissingDocsUrlError: If TDOCS_DOCS_URL is not set.
        MissingTokenError: If TDOCS_JWT_TOKEN is not set.
    """
    logger.info("Initializing DocsSearchService...")
    settings = get_settings()
    settings.validate_required()
    return DocsSearchService(
        get_smart_fetch_service(),
        docs_url=settings.docs_url,
        default_max_results=settings.default_max_results,
        fetch_options=build_fetch_options(settings),
    )
