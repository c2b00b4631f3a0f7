"""Text normalization and matching helpers.

Substring checks used by the matcher and the parameter extractor, plus
rapidfuzz scoring for near-miss device names.
"""

import re
import unicodedata

from rapidfuzz import fuzz

_NON_WORD_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_input(text: str) -> str:
    """Canonicalize raw user input.

    Composes combining marks (NFC), lower-cases, replaces punctuation with
    spaces and collapses whitespace. Vietnamese letters are word characters
    and are kept as-is.

    Args:
        text: raw command text

    Returns:
        normalized text, possibly empty
    """
    if not isinstance(text, str):
        return ""
    lowered = unicodedata.normalize("NFC", text).lower()
    cleaned = _NON_WORD_RE.sub(" ", lowered)
    return _WHITESPACE_RE.sub(" ", cleaned).strip()


def contains_substring(text: str, query: str) -> bool:
    """Check whether text contains a non-empty query."""
    if not text or not query:
        return False
    return query in text


def contains_any(text: str, queries) -> bool:
    """Check whether text contains any of the queries."""
    return any(contains_substring(text, q) for q in queries)


def fuzzy_word_match(target: str, text: str, min_length: int = 3) -> bool:
    """Check whether any word of target appears inside text.

    Words shorter than min_length are ignored ("the", "tv").

    Args:
        target: lower-cased device name
        text: normalized input

    Returns:
        whether some long-enough word of target is a substring of text
    """
    return any(
        len(word) >= min_length and word in text
        for word in target.split(" ")
    )


def partial_match_score(text: str, query: str) -> float:
    """Partial match score in [0, 1].

    Uses rapidfuzz partial_ratio, which scores high when the shorter string is
    (nearly) contained in the longer one.
    """
    if not text or not query:
        return 0.0
    return fuzz.partial_ratio(text, query) / 100.0
