"""Keyword search over a single documentation document.

The document is chunked according to its detected format, every chunk is
scored against the query, and the best non-overlapping chunks are returned
together with their neighbouring context.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any

from ..domain import Chunk, ChunkingOptions, DocumentFormat, SearchResult
from . import patterns
from .format_detector import detect_document_format, is_html_document, is_json_document
from .html_chunker import html_to_simple_markdown, split_html_into_chunks
from .scorer import calculate_relevance_score, extract_search_terms
from .text_chunker import get_expanded_context, split_markdown_document

logger = logging.getLogger(__name__)

# Fields that usually carry prose in JSON documentation payloads, by priority
JSON_TEXT_FIELDS = (
    "content",
    "text",
    "body",
    "description",
    "summary",
    "documentation",
    "docs",
    "readme",
    "markdown",
    "html",
    "title",
    "name",
)

MAX_JSON_DEPTH = 10


def _detect_format(document: str, options: ChunkingOptions) -> DocumentFormat:
    if options.enable_html_fallback and is_html_document(document):
        return DocumentFormat.HTML
    if options.enable_json_fallback and is_json_document(document):
        return DocumentFormat.JSON

    detection = detect_document_format(document)
    logger.debug(
        "Detected %s (confidence %.2f): %s",
        detection.format.value,
        detection.confidence,
        "; ".join(detection.indicators),
    )
    if detection.format in (DocumentFormat.HTML, DocumentFormat.JSON):
        # Fallback disabled or low confidence: use the text strategy
        return DocumentFormat.TEXT
    return detection.format


def split_into_chunks(document: str, options: ChunkingOptions | None = None) -> list[str]:
    """Split a document into chunks using the strategy for its format.

    Args:
        document: Raw document text.
        options: Chunking options; format is auto-detected by default.

    Returns:
        Chunks in document order.
    """
    options = options or ChunkingOptions()
    document_format = options.force_format or _detect_format(document, options)

    if document_format is DocumentFormat.HTML:
        return _split_html_document(document)
    if document_format is DocumentFormat.JSON:
        return _split_json_document(document)
    return split_markdown_document(document)


def _split_html_document(document: str) -> list[str]:
    chunks = split_html_into_chunks(document)
    if len(chunks) <= 1 and len(document) > patterns.MAX_CHUNK_SIZE:
        # Markup without usable structure; re-chunk it as Markdown
        logger.debug("HTML chunker produced %d chunk(s), converting to Markdown", len(chunks))
        return split_markdown_document(html_to_simple_markdown(document))
    return chunks


def _split_json_document(document: str) -> list[str]:
    try:
        parsed = json.loads(document)
    except ValueError:
        logger.debug("JSON document failed to parse, chunking as text")
        return split_markdown_document(document)

    text_content = extract_json_text_content(parsed)
    if text_content:
        return split_markdown_document(text_content)
    return split_markdown_document(document)


def extract_json_text_content(value: Any, depth: int = 0) -> str:
    """Collect documentation prose from a parsed JSON value.

    Known text fields are preferred; when an object has none of them every
    value is visited instead.

    Args:
        value: Parsed JSON value.
        depth: Current recursion depth; deeper than 10 yields nothing.

    Returns:
        Extracted text, with parts separated by blank lines.
    """
    if depth > MAX_JSON_DEPTH:
        return ""

    if isinstance(value, str):
        return value

    if isinstance(value, list):
        return "\n\n".join(extract_json_text_content(item, depth + 1) for item in value)

    if isinstance(value, Mapping):
        parts = []
        for field_name in JSON_TEXT_FIELDS:
            if value.get(field_name):
                content = extract_json_text_content(value[field_name], depth + 1)
                if content:
                    parts.append(content)

        if not parts:
            for item in value.values():
                content = extract_json_text_content(item, depth + 1)
                if content:
                    parts.append(content)

        return "\n\n".join(parts)

    return ""


def search_in_docs(document: str, search_query: str, max_results: int = 3) -> SearchResult:
    """Find the excerpts of a document most relevant to a query.

    Args:
        document: Full document text.
        search_query: Free-text query.
        max_results: Maximum number of excerpts to return.

    Returns:
        SearchResult with expanded-context excerpts, best first.
    """
    chunks = split_into_chunks(document)
    search_terms = extract_search_terms(search_query)

    scored = [
        Chunk(content=content, index=index, score=calculate_relevance_score(content, search_terms))
        for index, content in enumerate(chunks)
    ]
    relevant = sorted(
        (chunk for chunk in scored if chunk.score > 0),
        key=lambda chunk: chunk.score,
        reverse=True,
    )

    results = select_best_results(chunks, relevant, max_results)
    logger.info(
        "Search '%s': %d chunks, %d matched, %d returned",
        search_query,
        len(chunks),
        len(relevant),
        len(results),
    )
    return SearchResult(results=results, total_chunks=len(chunks), matched_chunks=len(relevant))


def select_best_results(
    chunks: list[str], relevant_chunks: list[Chunk], max_results: int
) -> list[str]:
    """Pick the top chunks without returning overlapping context.

    Each selected chunk claims its own index and both neighbours, so a later
    candidate inside an already returned context is skipped.
    """
    results: list[str] = []
    used_indices: set[int] = set()

    for chunk in relevant_chunks:
        if len(results) >= max_results:
            break
        if chunk.index in used_indices:
            continue

        used_indices.add(chunk.index)
        if chunk.index > 0:
            used_indices.add(chunk.index - 1)
        if chunk.index < len(chunks) - 1:
            used_indices.add(chunk.index + 1)

        results.append(get_expanded_context(chunks, chunk.index))

    return results
