"""Query text canonicalization."""

import re

_WHITESPACE = re.compile(r"\s+")


def normalize_search_text(text: str | None) -> str:
    """
    Lowercase, trim and collapse runs of whitespace to a single space.

    The result is used for cache keys and prefix comparisons, so two queries
    that differ only in case or spacing map to the same string. Applying it
    twice gives the same result as applying it once.

    Args:
        text: Raw user input

    Returns:
        Canonical query string
    """
    if not text:
        return ""
    return _WHITESPACE.sub(" ", text.lower().strip())


def tokenize(text: str, min_length: int = 1) -> list[str]:
    """Split normalized text into tokens, dropping ones shorter than min_length."""
    return [token for token in normalize_search_text(text).split(" ") if len(token) >= min_length]
