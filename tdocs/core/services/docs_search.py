"""Application service answering documentation search requests."""

import logging

from ...common.exception_handler import format_http_error
from ..domain import Document, SearchOutput, SmartFetchOptions
from ..domain.exceptions import FetchFailedError, InvalidMaxResultsError, TDocsError
from .search_service import search_in_docs
from .smart_fetch import SmartFetchService

logger = logging.getLogger(__name__)

NO_RESULTS_MESSAGE = "No results found for the search."
RESULT_SEPARATOR = "\n\n===\n\n"
MIN_RESULTS = 1
MAX_RESULTS = 10


class DocsSearchService:
    """Fetches the configured documentation and searches it.

    Every call re-fetches the documentation; nothing is cached between
    searches.
    """

    def __init__(
        self,
        fetcher: SmartFetchService,
        docs_url: str,
        default_max_results: int = 3,
        fetch_options: SmartFetchOptions | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            fetcher: Smart fetch pipeline used to obtain the document.
            docs_url: Documentation URL to search.
            default_max_results: Result count when the caller gives none.
            fetch_options: Timeouts and strategy switches for fetching.
        """
        self.fetcher = fetcher
        self.docs_url = docs_url
        self.default_max_results = default_max_results
        self.fetch_options = fetch_options or SmartFetchOptions()

    def fetch_document(self) -> Document:
        """Fetch the documentation through the smart fetch pipeline.

        Raises:
            FetchFailedError: If no strategy produced content.
        """
        result = self.fetcher.fetch(self.docs_url, self.fetch_options)
        if not result.success:
            raise FetchFailedError(
                result.error or "Documentation could not be fetched",
                cause=result.cause,
                context={"url": self.docs_url},
            )

        logger.info(
            "Fetched %s via %s as %s",
            self.docs_url,
            result.method.value,
            result.content_type.value,
        )
        return result.to_document()

    def search(self, query: str, max_results: int | None = None) -> SearchOutput:
        """Search the documentation for a query.

        Args:
            query: Free-text query.
            max_results: Number of excerpts to return (1-10).

        Returns:
            SearchOutput. When nothing matches, ``results`` holds a single
            sentinel message. Fetch failures are reported through ``error``
            and ``summary`` instead of being raised.

        Raises:
            InvalidMaxResultsError: If max_results is outside 1..10.
        """
        if max_results is None:
            max_results = self.default_max_results
        if not MIN_RESULTS <= max_results <= MAX_RESULTS:
            raise InvalidMaxResultsError(
                f"max_results must be between {MIN_RESULTS} and {MAX_RESULTS}",
                context={"max_results": max_results},
            )

        try:
            document = self.fetch_document()
        except TDocsError as e:
            formatted = format_http_error(e, self.docs_url)
            logger.error("Search for '%s' failed: %s", query, formatted.message)
            return SearchOutput(
                query=query,
                docs_url=self.docs_url,
                results=[],
                summary=formatted.user_message,
                error=formatted.message,
            )

        found = search_in_docs(document.content, query, max_results)

        if found.results:
            summary = (
                f'Found {found.matched_chunks} relevant excerpts for "{query}":\n\n'
                f"{RESULT_SEPARATOR.join(found.results)}"
            )
        else:
            summary = f'No results found for "{query}" in the documentation.'

        return SearchOutput(
            query=query,
            docs_url=self.docs_url,
            results=found.results or [NO_RESULTS_MESSAGE],
            total_chunks=found.total_chunks,
            matched_chunks=found.matched_chunks,
            summary=summary,
        )
