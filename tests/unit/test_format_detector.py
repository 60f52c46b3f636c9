"""Unit tests for document format detection."""

import pytest

from tdocs.core.domain import DocumentFormat
from tdocs.core.services.format_detector import (
    detect_document_format,
    is_html_document,
    is_json_document,
)

pytestmark = pytest.mark.unit

HTML_PAGE = (
    "<!DOCTYPE html><html><head><title>Docs</title></head><body>"
    "<h1>Guide</h1><p>First paragraph.</p><p>Second paragraph.</p></body></html>"
)

MARKDOWN_PAGE = """# Guide

Some `inline` text with **bold** words.

```python
print("hello")
```

- one
- two
- three

See [the API](https://example.com/api).
"""


class TestDetectDocumentFormat:
    """Tests for detect_document_format."""

    def test_valid_json_object(self):
        """Parsable JSON starting with a brace is JSON with high confidence."""
        result = detect_document_format('{"title": "Docs"}')

        assert result.format is DocumentFormat.JSON
        assert result.confidence == pytest.approx(0.9)
        assert "Parsed as valid JSON" in result.indicators

    def test_json_wins_over_embedded_html(self):
        """JSON payloads carrying HTML fragments are still JSON."""
        document = '{"html": "<div><p>a</p><p>b</p><p>c</p><p>d</p><p>e</p><p>f</p></div>"}'
        assert detect_document_format(document).format is DocumentFormat.JSON

    def test_html_document(self):
        """A doctype and enough tags make a document HTML."""
        result = detect_document_format(HTML_PAGE)

        assert result.format is DocumentFormat.HTML
        assert result.confidence > 0.6
        assert "DOCTYPE or root HTML tag detected" in result.indicators

    def test_markdown_document(self):
        """Headers, fences, lists and links make a document Markdown."""
        result = detect_document_format(MARKDOWN_PAGE)

        assert result.format is DocumentFormat.MARKDOWN
        assert result.confidence > 0.5

    def test_plain_text_fallback(self):
        """Nothing recognizable falls back to text with confidence 0.5."""
        result = detect_document_format("Just a sentence about the API.")

        assert result.format is DocumentFormat.TEXT
        assert result.confidence == 0.5
        assert result.indicators == ["No specific format detected"]

    def test_malformed_json_is_not_json(self):
        """A brace-prefixed document that fails to parse is not JSON."""
        result = detect_document_format("{not json at all")
        assert result.format is not DocumentFormat.JSON

    def test_empty_document(self):
        """An empty document is plain text."""
        assert detect_document_format("").format is DocumentFormat.TEXT


class TestFormatPredicates:
    """Tests for the is_*_document helpers."""

    def test_predicates(self):
        """Each predicate should only accept its own format."""
        assert is_json_document("[1, 2, 3]")
        assert is_html_document(HTML_PAGE)

        assert not is_json_document(HTML_PAGE)
        assert not is_html_document(MARKDOWN_PAGE)


class TestDetectionIsStable:
    """Detection depends only on the document."""

    @pytest.mark.parametrize(
        "document",
        ['{"title": "Docs"}', HTML_PAGE, MARKDOWN_PAGE, "Just a sentence.", "{not json", ""],
    )
    def test_repeated_detection_agrees(self, document):
        """Detecting the same document twice gives the same result."""
        assert detect_document_format(document) == detect_document_format(document)
