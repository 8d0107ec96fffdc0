from __future__ import annotations
from typing import Iterable, List, Optional, Sequence, Tuple
import json
import re

STRESS_RE = re.compile(r"\d")           # captures 0/1/2
VARIANT_RE = re.compile(r"\(\d+\)$")    # WORD(2) -> WORD
TAIL_LENGTHS = (2, 3)


def is_vowel_phoneme(symbol: str) -> bool:
    """A phoneme is a vowel iff it carries a stress digit (AE1, ER0...)."""
    return bool(STRESS_RE.search(symbol))


def stress_digit(symbol: str) -> Optional[str]:
    m = STRESS_RE.search(symbol)
    return m.group(0) if m else None


def stress_pattern(phones: Sequence[str]) -> str:
    """Stress digits of the vowel phonemes, in order ("" when there are none)."""
    return "".join(d for d in (stress_digit(p) for p in phones) if d is not None)


def last_vowel_idx(phones: Sequence[str]) -> int | None:
    for i in range(len(phones) - 1, -1, -1):
        if is_vowel_phoneme(phones[i]):
            return i
    return None


def perfect_rhyme_key(phones: Sequence[str]) -> Optional[str]:
    """Last vowel → end, space-joined.

    The final vowel anchors the key whatever its stress, so WATER (W AO1 T ER0)
    and SLAUGHTER share "ER0". None when the word has no vowel at all.
    """
    i = last_vowel_idx(phones)
    if i is None:
        return None
    return " ".join(phones[i:])


def tail_key(phones: Sequence[str], n: int) -> Optional[str]:
    """Last ``n`` phonemes, space-joined; None if the word is shorter than ``n``."""
    if n <= 0 or len(phones) < n:
        return None
    return " ".join(phones[-n:])


def tail_keys(phones: Sequence[str]) -> List[str]:
    keys = []
    for n in TAIL_LENGTHS:
        k = tail_key(phones, n)
        if k is not None:
            keys.append(k)
    return keys


def first_stressed_vowel(phones: Sequence[str]) -> Optional[str]:
    """First vowel carrying primary (1) or secondary (2) stress, digit included."""
    for p in phones:
        if stress_digit(p) in ("1", "2"):
            return p
    return None


def strip_variant(raw_word: str) -> Tuple[str, bool]:
    """Remove a CMU variant marker: ("TOMATO(1)") -> ("TOMATO", True)."""
    word = raw_word.strip()
    stripped = VARIANT_RE.sub("", word)
    return stripped, stripped != word


def parse_cmu_line(line: str) -> tuple[str, List[str]] | None:
    line = line.strip()
    if not line or line.startswith(";;;"):
        return None
    # WORD  PHONEMES...
    head, *phones = line.split()
    if not phones:
        return None
    return head, phones


def parse_pron_field(pron: str | Sequence[str] | Iterable[str] | None) -> List[str]:
    """Normalize a pronunciation field into a list of ARPABET tokens."""

    if pron is None:
        return []

    if isinstance(pron, (list, tuple)):
        return [str(p) for p in pron if p]

    if not isinstance(pron, str):
        return [str(pron)]

    p = pron.strip()
    if not p:
        return []

    if p.startswith("[") and p.endswith("]"):
        try:
            arr = json.loads(p)
        except ValueError:
            arr = None
        if isinstance(arr, (list, tuple)):
            return [str(tok) for tok in arr if tok]

    return [tok for tok in p.replace(",", " ").split() if tok]
