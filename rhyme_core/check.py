"""Pairwise same-rhyme judgement used for interactive highlighting."""
from __future__ import annotations

from typing import Optional

from .models import LexiconEntry, RhymeContext
from .normalize import canonical_word
from .phonetics import first_stressed_vowel
from .scoring import score_near, score_perfect

NEAR_THRESHOLD = 0.6
G_DROP_SUFFIX = "IN"
G_DROP_RESTORED = "ING"


def resolve_fuzzy(context: RhymeContext, word: str) -> Optional[LexiconEntry]:
    """Direct lookup, then the only fuzzy rule: TESTIN -> TESTING."""
    entry = context.entry(word)
    if entry is None and word.endswith(G_DROP_SUFFIX):
        entry = context.entry(word[: -len(G_DROP_SUFFIX)] + G_DROP_RESTORED)
    return entry


def is_assonant(a: LexiconEntry, b: LexiconEntry) -> bool:
    va = first_stressed_vowel(a.phonemes)
    vb = first_stressed_vowel(b.phonemes)
    return va is not None and va == vb


def check_rhyme(context: RhymeContext, word_a: str, word_b: str) -> bool:
    a = canonical_word(word_a)
    b = canonical_word(word_b)
    if a == b:
        return True

    ea = resolve_fuzzy(context, a)
    eb = resolve_fuzzy(context, b)
    if ea is None or eb is None:
        return False

    if score_perfect(ea, eb) == 1.0:
        return True
    if score_near(ea, eb) >= NEAR_THRESHOLD:
        return True
    return is_assonant(ea, eb)


__all__ = ["NEAR_THRESHOLD", "resolve_fuzzy", "is_assonant", "check_rhyme"]
