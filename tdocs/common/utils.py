"""Text helpers shared by configuration and the inbound adapters.

Values that arrive from the outside (environment variables, ``.env`` files,
HTTP request bodies) may carry byte-order marks or replacement characters
from a bad decode. They are cleaned once at the boundary; the search core
assumes clean text.
"""

import unicodedata


def clean_text(text: str | None, *, normalize: bool = True, strip: bool = False) -> str:
    """Remove BOM markers and optionally normalize text.

    Args:
        text: Input text that may contain BOM or replacement characters.
        normalize: Whether to apply NFKC normalization.
        strip: Whether to trim surrounding whitespace.

    Returns:
        Cleaned text; empty string for None.
    """
    if not text:
        return ""

    cleaned = text.replace("\ufeff", "").replace("\ufffd", "")
    if normalize:
        cleaned = unicodedata.normalize("NFKC", cleaned)
    if strip:
        cleaned = cleaned.strip()
    return cleaned


def mask_token(token: str) -> str:
    """Mask a secret for display, keeping its first 10 and last 4 characters.

    Tokens of 14 characters or fewer are fully hidden.
    """
    if len(token) <= 14:
        return "***"
    return f"{token[:10]}...{token[-4:]}"
