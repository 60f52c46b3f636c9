"""Search endpoint for querying the configured documentation."""

import logging

from fastapi import APIRouter, Depends

from .....core.domain.exceptions import EmptyQueryError
from .....core.services.docs_search import DocsSearchService
from ..deps import get_search_service
from ..models import ErrorResponse, SearchRequest, SearchResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["search"])


# Sync handler: FastAPI runs it in a worker thread, which the blocking
# HTTP client and Playwright's sync API require.
@router.post(
    "/search",
    response_model=SearchResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        500: {"model": ErrorResponse, "description": "Service not configured"},
    },
)
def search_docs(
    request: SearchRequest,
    service: DocsSearchService = Depends(get_search_service),
) -> SearchResponse:
    """Search the documentation and return the best matching excerpts.

    Fetch failures do not raise; they come back in ``error`` with an
    actionable ``summary``.
    """
    query = request.search.strip()
    if not query:
        raise EmptyQueryError("Search query cannot be blank")

    output = service.search(query, request.max_results)
    if output.error:
        logger.warning("Search for '%s' returned an error: %s", query, output.error)

    return SearchResponse(
        query=output.query,
        docs_url=output.docs_url,
        results=output.results,
        total_chunks=output.total_chunks,
        matched_chunks=output.matched_chunks,
        summary=output.summary,
        error=output.error,
    )
