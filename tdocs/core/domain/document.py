"""Document, chunk and search result models for documentation search."""

from dataclasses import dataclass, field
from enum import Enum


class DocumentFormat(str, Enum):
    """Textual format of a fetched document.

    Attributes:
        JSON: Parsable JSON payload.
        HTML: HTML markup (static page or SPA shell).
        MARKDOWN: Markdown source.
        TEXT: Anything else, treated as plain text.
    """

    JSON = "json"
    HTML = "html"
    MARKDOWN = "markdown"
    TEXT = "text"


@dataclass(frozen=True)
class Document:
    """A fetched documentation source.

    Immutable once fetched and only kept for the duration of one search.

    Attributes:
        content: Raw text content.
        content_type: Classification assigned by the fetch pipeline.
        url: Where the content was fetched from.
    """

    content: str
    content_type: str = "unknown"
    url: str | None = None


@dataclass
class FormatDetectionResult:
    """Outcome of format detection.

    Attributes:
        format: Detected document format.
        confidence: Confidence of the detection between 0.0 and 1.0.
        indicators: Ordered, human-readable evidence for the decision.
    """

    format: DocumentFormat
    confidence: float
    indicators: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Chunk:
    """A contiguous, independently scorable slice of a document.

    Attributes:
        content: Text of the chunk.
        index: Zero-based position in the document's chunk sequence.
        score: Relevance score against the current query (never negative).
    """

    content: str
    index: int
    score: float = 0.0


@dataclass
class SearchResult:
    """Ranked excerpts for one query.

    Attributes:
        results: Expanded-context excerpts, best first.
        total_chunks: Number of chunks the document was split into.
        matched_chunks: Number of chunks with a score above zero.
    """

    results: list[str]
    total_chunks: int
    matched_chunks: int


@dataclass(frozen=True)
class ChunkingOptions:
    """Options controlling chunking strategy selection.

    Attributes:
        force_format: Skip detection and chunk as this format.
        enable_html_fallback: Use the HTML chunker when HTML is detected.
        enable_json_fallback: Use JSON text extraction when JSON is detected.
    """

    force_format: DocumentFormat | None = None
    enable_html_fallback: bool = True
    enable_json_fallback: bool = True


@dataclass
class SearchOutput:
    """Caller-facing result of a documentation search.

    Attributes:
        query: The query as received.
        docs_url: Documentation source that was searched.
        results: Excerpts, or the no-results sentinel.
        total_chunks: Number of chunks the document was split into.
        matched_chunks: Number of chunks with a score above zero.
        summary: Human-readable description of the outcome.
        error: Technical failure message, when the search failed.
    """

    query: str
    docs_url: str
    results: list[str]
    total_chunks: int = 0
    matched_chunks: int = 0
    summary: str = ""
    error: str | None = None
