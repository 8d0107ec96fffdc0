"""Normalization helpers for lexicon keys and query words."""
from __future__ import annotations

import re
import unicodedata

_SMART_QUOTES = {
    "‘": "'",
    "’": "'",
    "‚": "'",
    "‛": "'",
}

_WHITESPACE_RE = re.compile(r"\s+")


def _strip_accents(text: str) -> str:
    normalized = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in normalized if not unicodedata.combining(ch))


def canonical_word(text: str) -> str:
    """Upper-cased lexicon key: CAFÉ -> CAFE, ’TIS -> 'TIS."""
    if not text:
        return ""
    fixed = text
    for src, dst in _SMART_QUOTES.items():
        fixed = fixed.replace(src, dst)
    fixed = _strip_accents(fixed)
    fixed = _WHITESPACE_RE.sub(" ", fixed)
    return fixed.strip().upper()


__all__ = ["canonical_word"]
