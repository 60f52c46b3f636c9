"""Shared regular expressions and size limits for documentation chunking.

Every chunking and scoring stage imports its patterns from here so the
boundaries used to split a document are the same ones used to score it.
"""

import re

# Markdown headers (# .. ######); zero-width so the header stays with its content
HEADER_SPLIT = re.compile(r"(?=^#{1,6}\s+.+$)", re.MULTILINE)

# Chunk contains a Markdown header (score bonus)
HAS_HEADER = re.compile(r"^#{1,6}\s+", re.MULTILINE)

# Horizontal rules (---, ***, ===)
HORIZONTAL_RULES = re.compile(r"(?:^---+$|^\*{3,}$|^={3,}$)", re.MULTILINE)

MULTIPLE_BREAKS = re.compile(r"\n{3,}")

PARAGRAPHS = re.compile(r"\n{2,}")

# Whitespace right after sentence punctuation
SENTENCES = re.compile(r"(?<=[.!?])\s+")

# Fenced or 4-space indented code
CODE_BLOCK = re.compile(r"```[\s\S]*?```|^ {4,}\S", re.MULTILINE)

FENCED_CODE = re.compile(r"```[\s\S]*?```")
LIST_ITEMS = re.compile(r"^[\s]*[-*+]\s+", re.MULTILINE)
MARKDOWN_LINKS = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
EMPHASIS = re.compile(r"(\*\*|__)[^*_]+\1|(\*|_)[^*_]+\2")

# --- HTML ---

# Document opens with a doctype or a common root/container tag
IS_HTML = re.compile(
    r"^\s*<!DOCTYPE\s+html|^\s*<html|^\s*<head|^\s*<body|^\s*<div|^\s*<article|^\s*<section",
    re.IGNORECASE,
)

HEADER_TAGS = re.compile(r"<h([1-6])[^>]*>([\s\S]*?)</h\1>", re.IGNORECASE)

# Zero-width boundary before every <h1>..<h6>
HEADER_TAG_SPLIT = re.compile(r"(?=<h[1-6][^>]*>)", re.IGNORECASE)

PARAGRAPH_TAGS = re.compile(r"<p[^>]*>([\s\S]*?)</p>", re.IGNORECASE)

SCRIPT_STYLE_TAGS = re.compile(r"<(script|style|noscript)[^>]*>[\s\S]*?</\1>", re.IGNORECASE)

ALL_TAGS = re.compile(r"<[^>]+>")

HTML_ENTITIES = re.compile(r"&(nbsp|amp|lt|gt|quot|apos|#\d+|#x[\da-f]+);", re.IGNORECASE)

NAMED_ENTITIES = {
    "nbsp": " ",
    "amp": "&",
    "lt": "<",
    "gt": ">",
    "quot": '"',
    "apos": "'",
}

# Elements whose end introduces a line break in extracted text
BLOCK_TAGS = frozenset(
    {
        "p",
        "div",
        "section",
        "article",
        "header",
        "footer",
        "main",
        "aside",
        "li",
        "tr",
        "br",
        "hr",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "pre",
        "ul",
        "ol",
        "table",
        "blockquote",
    }
)

# Chunks longer than this are subdivided
MAX_CHUNK_SIZE = 2000

# Chunks this short (after stripping) are dropped
MIN_CHUNK_SIZE = 10

# Upper bound for a chunk plus its neighbours in a search result
MAX_CONTEXT_SIZE = 3000

CONTEXT_SEPARATOR = "\n\n---\n\n"
