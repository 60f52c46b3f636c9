"""Markdown and plain-text chunking.

Documents are split hierarchically: Markdown headers first, then horizontal
rules, then blank-line paragraphs. The first strategy that produces more than
one part wins, and oversized parts are refined down to ``MAX_CHUNK_SIZE``.
"""

import logging
import re

from . import patterns

logger = logging.getLogger(__name__)


def _split_non_blank(text: str, pattern: re.Pattern[str]) -> list[str]:
    return [part for part in pattern.split(text) if part.strip()]


def split_markdown_document(document: str) -> list[str]:
    """Split a Markdown or plain-text document into size-bounded chunks.

    Args:
        document: Raw document text.

    Returns:
        Chunks in document order. Chunks with 10 or fewer non-blank
        characters are dropped.
    """
    chunks = [document]
    for strategy in (patterns.HEADER_SPLIT, patterns.HORIZONTAL_RULES, patterns.PARAGRAPHS):
        parts = _split_non_blank(document, strategy)
        if len(parts) > 1:
            chunks = parts
            break

    refined = refine_chunks(chunks)
    result = [chunk for chunk in refined if len(chunk.strip()) > patterns.MIN_CHUNK_SIZE]
    logger.debug("Split text document into %d chunks", len(result))
    return result


def refine_chunks(chunks: list[str]) -> list[str]:
    """Break chunks longer than ``MAX_CHUNK_SIZE`` into smaller pieces.

    Oversized chunks are split on blank lines when that yields more than one
    paragraph, otherwise on sentence boundaries.
    """
    refined: list[str] = []
    for chunk in chunks:
        if len(chunk) <= patterns.MAX_CHUNK_SIZE:
            refined.append(chunk)
            continue

        paragraphs = _split_non_blank(chunk, patterns.PARAGRAPHS)
        if len(paragraphs) > 1:
            refined.extend(paragraphs)
        else:
            refined.extend(split_by_sentences(chunk))
    return refined


def split_by_sentences(text: str) -> list[str]:
    """Greedily pack sentences into chunks of at most ``MAX_CHUNK_SIZE``.

    A single sentence longer than the limit becomes its own chunk.
    """
    sentences = patterns.SENTENCES.split(text)
    chunks: list[str] = []
    current = ""

    for sentence in sentences:
        if current and len(current + sentence) > patterns.MAX_CHUNK_SIZE:
            chunks.append(current.strip())
            current = sentence
        else:
            current = f"{current} {sentence}" if current else sentence

    if current.strip():
        chunks.append(current.strip())
    return chunks


def get_expanded_context(chunks: list[str], target_index: int) -> str:
    """Return a chunk together with its neighbours.

    The previous chunk is included when the combined size stays under
    ``MAX_CONTEXT_SIZE``; the next chunk is checked against the size of the
    target plus the previous chunk.

    Args:
        chunks: All chunks of the document.
        target_index: Index of the chunk to expand.

    Returns:
        Joined context, or an empty string for an out-of-range index.
    """
    if target_index < 0 or target_index >= len(chunks):
        return ""

    target = chunks[target_index]
    context = [target]
    total = len(target)

    if target_index > 0:
        previous = chunks[target_index - 1]
        if total + len(previous) < patterns.MAX_CONTEXT_SIZE:
            context.insert(0, previous)
            total += len(previous)

    if target_index < len(chunks) - 1:
        following = chunks[target_index + 1]
        if total + len(following) < patterns.MAX_CONTEXT_SIZE:
            context.append(following)

    return patterns.CONTEXT_SEPARATOR.join(context)
