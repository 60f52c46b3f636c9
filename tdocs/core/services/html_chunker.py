"""HTML-aware chunking and HTML to Markdown normalization.

HTML is parsed with BeautifulSoup (lxml parser). Sections are delimited by
``<h1>``..``<h6>`` boundaries; pages without headings fall back to code blocks
and paragraphs as semantic units. Units are then packed into chunks of at
most ``MAX_CHUNK_SIZE`` characters.
"""

import logging
import re

from bs4 import BeautifulSoup, Comment, NavigableString, Tag
from bs4.element import PreformattedString

from . import patterns

logger = logging.getLogger(__name__)

_STRIPPED_TAGS = ["script", "style", "noscript"]
_CODE_TAGS = ["pre", "code"]
_HEADING_LEVELS = {f"h{level}": level for level in range(1, 7)}
_HORIZONTAL_SPACE = re.compile(r"[ \t]+")


def _clean_soup(html: str) -> BeautifulSoup:
    soup = BeautifulSoup(html, "lxml")
    for element in soup.find_all(_STRIPPED_TAGS):
        element.decompose()
    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()
    return soup


def clean_html(html: str) -> str:
    """Remove scripts, styles, noscript blocks and comments from HTML."""
    return str(_clean_soup(html))


def _collect_text(node: Tag, parts: list[str]) -> None:
    for child in node.children:
        if isinstance(child, NavigableString):
            # Comments, doctypes, CDATA and processing instructions
            if not isinstance(child, PreformattedString):
                parts.append(str(child))
            continue
        if not isinstance(child, Tag):
            continue
        if child.name == "br":
            parts.append("\n")
            continue
        _collect_text(child, parts)
        if child.name in patterns.BLOCK_TAGS:
            parts.append("\n")


def _tag_text(node: Tag) -> str:
    parts: list[str] = []
    _collect_text(node, parts)
    return normalize_whitespace("".join(parts).replace("\xa0", " "))


def extract_text_content(html: str) -> str:
    """Convert an HTML fragment to plain text.

    Block-level elements and ``<br>`` end a line, every tag is dropped and
    entities are decoded by the parser.
    """
    return _tag_text(BeautifulSoup(html, "lxml"))


def normalize_whitespace(text: str) -> str:
    """Collapse runs of spaces, trim every line and allow at most one blank line."""
    text = _HORIZONTAL_SPACE.sub(" ", text)
    text = "\n".join(line.strip() for line in text.split("\n"))
    text = patterns.MULTIPLE_BREAKS.sub("\n\n", text)
    return text.strip()


def _decode_entity(match: re.Match[str]) -> str:
    entity = match.group(1).lower()
    if entity in patterns.NAMED_ENTITIES:
        return patterns.NAMED_ENTITIES[entity]

    if entity.startswith("#x"):
        code = int(entity[2:], 16)
    else:
        code = int(entity[1:])

    # Out of range or a lone surrogate
    if code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
        return match.group(0)
    return chr(code)


def decode_html_entities(text: str) -> str:
    """Decode the common named entities plus decimal and hex character references.

    Args:
        text: Text that may contain entities such as ``&amp;`` or ``&#x2F;``.

    Returns:
        Text with recognized entities replaced; unknown ones are left as-is.
    """
    return patterns.HTML_ENTITIES.sub(_decode_entity, text)


def _extract_header_sections(cleaned_html: str) -> list[str]:
    return [part for part in patterns.HEADER_TAG_SPLIT.split(cleaned_html) if part.strip()]


def _extract_semantic_units(soup: BeautifulSoup) -> list[str]:
    units: list[str] = []

    code_blocks = [
        element for element in soup.find_all(_CODE_TAGS) if element.find_parent(_CODE_TAGS) is None
    ]
    for element in code_blocks:
        code = element.get_text().replace("\xa0", " ").strip()
        if code:
            units.append(f"```\n{code}\n```")
        element.extract()

    for paragraph in soup.find_all("p"):
        text = _tag_text(paragraph)
        if text:
            units.append(text)

    if not units:
        text = _tag_text(soup)
        if text:
            units.append(text)

    return units


def _extract_sections(soup: BeautifulSoup) -> list[str]:
    header_sections = _extract_header_sections(str(soup))
    if len(header_sections) > 1:
        sections = [extract_text_content(section) for section in header_sections]
        return [section for section in sections if section.strip()]
    return _extract_semantic_units(soup)


def split_html_into_chunks(html: str) -> list[str]:
    """Split an HTML document into text chunks.

    Args:
        html: Complete HTML document or fragment.

    Returns:
        Plain-text chunks in document order, each longer than
        ``MIN_CHUNK_SIZE`` characters once stripped.
    """
    sections = _extract_sections(_clean_soup(html))
    chunks = group_sections_into_chunks(sections)
    result = [chunk for chunk in chunks if len(chunk.strip()) > patterns.MIN_CHUNK_SIZE]
    logger.debug("Split HTML document into %d chunks from %d sections", len(result), len(sections))
    return result


def group_sections_into_chunks(sections: list[str]) -> list[str]:
    """Pack sections into chunks joined by blank lines.

    A section that alone exceeds ``MAX_CHUNK_SIZE`` flushes the chunk being
    built and is subdivided on its own.
    """
    chunks: list[str] = []
    current = ""

    for content in sections:
        if len(content) > patterns.MAX_CHUNK_SIZE:
            if current.strip():
                chunks.append(current.strip())
                current = ""
            chunks.extend(subdivide_content(content))
            continue

        separator = "\n\n" if current else ""
        if len(current + separator + content) > patterns.MAX_CHUNK_SIZE and current.strip():
            chunks.append(current.strip())
            current = content
        else:
            current += separator + content

    if current.strip():
        chunks.append(current.strip())
    return chunks


def subdivide_content(content: str) -> list[str]:
    """Split oversized content by paragraphs, or by sentences when it has none."""
    paragraphs = [p for p in patterns.PARAGRAPHS.split(content) if p.strip()]
    if len(paragraphs) > 1:
        return group_text_into_chunks(paragraphs)

    sentences = [s for s in patterns.SENTENCES.split(content) if s.strip()]
    return group_text_into_chunks(sentences)


def group_text_into_chunks(texts: list[str]) -> list[str]:
    """Greedily join texts with single spaces while staying under ``MAX_CHUNK_SIZE``."""
    chunks: list[str] = []
    current = ""

    for text in texts:
        separator = " " if current else ""
        if current and len(current + separator + text) > patterns.MAX_CHUNK_SIZE:
            chunks.append(current.strip())
            current = text
        else:
            current += separator + text

    if current.strip():
        chunks.append(current.strip())
    return chunks


def _children_to_markdown(node: Tag) -> str:
    parts: list[str] = []
    for child in node.children:
        if isinstance(child, NavigableString):
            if not isinstance(child, PreformattedString):
                parts.append(str(child))
        elif isinstance(child, Tag):
            parts.append(_element_to_markdown(child))
    return "".join(parts)


def _element_to_markdown(tag: Tag) -> str:
    name = tag.name

    if name in _HEADING_LEVELS:
        return f"\n{'#' * _HEADING_LEVELS[name]} {_children_to_markdown(tag).strip()}\n"
    if name == "pre":
        return f"\n```\n{tag.get_text()}\n```\n"
    if name == "code":
        return f"`{tag.get_text()}`"
    if name == "br":
        return "\n"
    if name == "hr":
        return "\n---\n"

    inner = _children_to_markdown(tag)
    if name in ("strong", "b"):
        return f"**{inner}**"
    if name in ("em", "i"):
        return f"*{inner}*"
    if name == "li":
        return f"- {inner.strip()}\n"
    if name in ("ul", "ol"):
        return f"\n{inner}\n"
    if name == "a" and tag.get("href"):
        return f"[{inner}]({tag['href']})"
    if name == "p":
        return f"\n{inner}\n"
    return inner


def html_to_simple_markdown(html: str) -> str:
    """Convert HTML to lightweight Markdown.

    Headings, emphasis, code, preformatted blocks, lists, links, paragraphs,
    line breaks and horizontal rules are mapped; every other tag is unwrapped.

    Args:
        html: HTML document or fragment.

    Returns:
        Markdown text with normalized whitespace.
    """
    markdown = _children_to_markdown(_clean_soup(html))
    return normalize_whitespace(markdown.replace("\xa0", " "))
