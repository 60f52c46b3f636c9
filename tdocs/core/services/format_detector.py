"""Document format detection.

Classifies raw document text as JSON, HTML, Markdown or plain text. The
checks run in a fixed order (JSON, HTML, Markdown) because JSON payloads
routinely embed HTML fragments, and the first check whose confidence clears
its threshold wins.
"""

import json

from ..domain import DocumentFormat, FormatDetectionResult
from . import patterns

JSON_THRESHOLD = 0.8
HTML_THRESHOLD = 0.6
MARKDOWN_THRESHOLD = 0.5


def detect_document_format(document: str) -> FormatDetectionResult:
    """Detect the format of a document by inspecting its content.

    Args:
        document: Raw document text.

    Returns:
        FormatDetectionResult with format, confidence and indicators.
    """
    trimmed = document.strip()

    json_result = _check_json(trimmed)
    if json_result.confidence > JSON_THRESHOLD:
        return json_result

    html_result = _check_html(trimmed)
    if html_result.confidence > HTML_THRESHOLD:
        return html_result

    markdown_result = _check_markdown(trimmed)
    if markdown_result.confidence > MARKDOWN_THRESHOLD:
        return markdown_result

    return FormatDetectionResult(
        format=DocumentFormat.TEXT,
        confidence=0.5,
        indicators=["No specific format detected"],
    )


def _check_json(content: str) -> FormatDetectionResult:
    indicators: list[str] = []
    confidence = 0.0

    starts_like_json = content[:1] in ("{", "[")
    if starts_like_json:
        indicators.append("Starts with a JSON character ({ or [)")
        confidence += 0.3

    try:
        json.loads(content)
        indicators.append("Parsed as valid JSON")
        confidence += 0.6
    except ValueError:
        if starts_like_json:
            # Malformed JSON rather than "not JSON"
            indicators.append("JSON-like structure but invalid")
            confidence = 0.2

    return FormatDetectionResult(
        format=DocumentFormat.JSON,
        confidence=min(confidence, 1.0),
        indicators=indicators,
    )


def _check_html(content: str) -> FormatDetectionResult:
    indicators: list[str] = []
    confidence = 0.0

    if patterns.IS_HTML.search(content):
        indicators.append("DOCTYPE or root HTML tag detected")
        confidence += 0.5

    tag_count = len(patterns.ALL_TAGS.findall(content))
    if tag_count > 10:
        indicators.append(f"{tag_count} HTML tags found")
        confidence += 0.3
    elif tag_count > 3:
        indicators.append(f"{tag_count} HTML tags found")
        confidence += 0.15

    if patterns.HEADER_TAGS.search(content):
        indicators.append("HTML headers (h1-h6) detected")
        confidence += 0.1

    if patterns.PARAGRAPH_TAGS.search(content):
        indicators.append("HTML paragraphs detected")
        confidence += 0.1

    return FormatDetectionResult(
        format=DocumentFormat.HTML,
        confidence=min(confidence, 1.0),
        indicators=indicators,
    )


def _check_markdown(content: str) -> FormatDetectionResult:
    indicators: list[str] = []
    confidence = 0.0

    if patterns.HAS_HEADER.search(content):
        indicators.append("Markdown headers (#) detected")
        confidence += 0.3

    fenced_blocks = patterns.FENCED_CODE.findall(content)
    if fenced_blocks:
        indicators.append(f"{len(fenced_blocks)} fenced code blocks")
        confidence += 0.25

    list_items = patterns.LIST_ITEMS.findall(content)
    if len(list_items) > 2:
        indicators.append(f"{len(list_items)} list items detected")
        confidence += 0.15

    links = patterns.MARKDOWN_LINKS.findall(content)
    if links:
        indicators.append(f"{len(links)} Markdown links detected")
        confidence += 0.15

    if patterns.EMPHASIS.search(content):
        indicators.append("Emphasis formatting detected")
        confidence += 0.1

    if patterns.HORIZONTAL_RULES.search(content):
        indicators.append("Horizontal rules detected")
        confidence += 0.1

    return FormatDetectionResult(
        format=DocumentFormat.MARKDOWN,
        confidence=min(confidence, 1.0),
        indicators=indicators,
    )


def is_html_document(document: str) -> bool:
    """Return True when the document is confidently HTML."""
    result = detect_document_format(document)
    return result.format is DocumentFormat.HTML and result.confidence > 0.5


def is_json_document(document: str) -> bool:
    """Return True when the document is confidently JSON."""
    result = detect_document_format(document)
    return result.format is DocumentFormat.JSON and result.confidence > 0.7