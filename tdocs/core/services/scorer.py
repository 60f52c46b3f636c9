"""Lexical relevance scoring for documentation chunks."""

import re
import unicodedata

from . import patterns

SCORE_WEIGHTS = {
    "exact_match": 10.0,  # full phrase, per word in the phrase
    "word_match": 2.0,  # whole-word occurrence
    "partial_match": 0.5,  # word-prefix occurrence
    "code_bonus": 1.2,
    "header_bonus": 1.3,
}

_NON_WORD = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Lowercase, strip accents and punctuation, collapse whitespace.

    Args:
        text: Text to normalize.

    Returns:
        Normalized text suitable for substring and word matching.
    """
    decomposed = unicodedata.normalize("NFD", text.lower())
    without_marks = "".join(char for char in decomposed if not unicodedata.combining(char))
    without_punctuation = _NON_WORD.sub(" ", without_marks)
    return _WHITESPACE.sub(" ", without_punctuation).strip()


def escape_regex(text: str) -> str:
    """Escape regex metacharacters so text can be embedded in a pattern."""
    return re.escape(text)


def _word_match_score(normalized_chunk: str, normalized_term: str) -> float:
    score = 0.0
    for word in normalized_term.split(" "):
        if len(word) < 2:
            continue
        escaped = escape_regex(word)
        exact = re.findall(rf"\b{escaped}\b", normalized_chunk, re.IGNORECASE)
        score += len(exact) * SCORE_WEIGHTS["word_match"]
        partial = re.findall(rf"\b{escaped}", normalized_chunk, re.IGNORECASE)
        score += len(partial) * SCORE_WEIGHTS["partial_match"]
    return score


def _apply_bonuses(chunk: str, score: float) -> float:
    if patterns.CODE_BLOCK.search(chunk):
        score *= SCORE_WEIGHTS["code_bonus"]
    if patterns.HAS_HEADER.search(chunk):
        score *= SCORE_WEIGHTS["header_bonus"]
    return score


def calculate_relevance_score(chunk: str, search_terms: list[str]) -> float:
    """Score a chunk against a list of search terms.

    A term found verbatim (after normalization) earns 10 points per word it
    contains. Every term word of two or more characters additionally earns
    2 points per whole-word occurrence and 0.5 per word-prefix occurrence.
    Code blocks and Markdown headers multiply the total by 1.2 and 1.3.

    Args:
        chunk: Raw chunk content.
        search_terms: Terms produced by ``extract_search_terms``.

    Returns:
        Non-negative score; 0 means no match.
    """
    normalized_chunk = normalize_text(chunk)
    score = 0.0

    for term in search_terms:
        normalized_term = normalize_text(term)
        if not normalized_term:
            continue
        if normalized_term in normalized_chunk:
            score += SCORE_WEIGHTS["exact_match"] * len(normalized_term.split(" "))
        score += _word_match_score(normalized_chunk, normalized_term)

    return _apply_bonuses(chunk, score)


def extract_search_terms(query: str) -> list[str]:
    """Return the full query followed by its words longer than two characters."""
    return [query, *(word for word in query.split() if len(word) > 2)]
