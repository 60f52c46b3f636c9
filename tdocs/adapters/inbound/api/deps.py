"""FastAPI dependency providers backed by the composition root."""

from ....composition.container import get_docs_search_service, get_smart_fetch_service
from ....core.services.docs_search import DocsSearchService
from ....core.services.smart_fetch import SmartFetchService


def get_search_service() -> DocsSearchService:
    """Get the configured documentation search service."""
    return get_docs_search_service()


def get_fetcher() -> SmartFetchService:
    """Get the smart fetch pipeline."""
    return get_smart_fetch_service()
