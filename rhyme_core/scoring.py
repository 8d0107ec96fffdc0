"""Per-scheme similarity measures and their weighted combination.

Every measure takes two :class:`LexiconEntry` values (candidate, target) and
returns a float in [0, 1].  ``score_candidate`` averages each scheme over all
targets and folds the schemes into one weighted mean.
"""
from __future__ import annotations

from typing import Callable, Dict, List, Sequence

from rapidfuzz.distance import Levenshtein

from .models import Candidate, LexiconEntry, SchemeConfig, SchemeKind, scheme_name
from .phonetics import perfect_rhyme_key

NEAR_TAIL_LENGTH = 3


def score_perfect(candidate: LexiconEntry, target: LexiconEntry) -> float:
    ck = perfect_rhyme_key(candidate.phonemes)
    tk = perfect_rhyme_key(target.phonemes)
    if ck is None or tk is None:
        return 0.0
    return 1.0 if ck == tk else 0.0


def score_near(candidate: LexiconEntry, target: LexiconEntry, n: int = NEAR_TAIL_LENGTH) -> float:
    """Consecutive end-anchored phoneme matches, normalised by ``n``.

    Stops at the first mismatch: ORANGE (.. AH0 N JH) vs HINGE (.. IH1 N JH)
    scores 2/3 even though nothing further inward is compared.
    """
    cp, tp = candidate.phonemes, target.phonemes
    check_len = min(n, len(cp), len(tp))
    if check_len <= 0:
        return 0.0
    matches = 0
    for i in range(1, check_len + 1):
        if cp[-i] != tp[-i]:
            break
        matches += 1
    return matches / n


def score_stress(candidate: LexiconEntry, target: LexiconEntry) -> float:
    cs, ts = candidate.stress_pattern, target.stress_pattern
    longest = max(len(cs), len(ts))
    if longest == 0:
        return 0.0
    return max(0.0, 1.0 - Levenshtein.distance(cs, ts) / longest)


SCORERS: Dict[SchemeKind, Callable[[LexiconEntry, LexiconEntry], float]] = {
    SchemeKind.PERFECT: score_perfect,
    SchemeKind.NEAR: score_near,
    SchemeKind.STRESS: score_stress,
}


def scheme_score(kind, candidate: LexiconEntry, targets: Sequence[LexiconEntry]) -> float:
    """Mean of one scheme over all targets; unknown kinds score 0."""
    scorer = SCORERS.get(kind) if isinstance(kind, SchemeKind) else None
    if scorer is None or not targets:
        return 0.0
    return sum(scorer(candidate, t) for t in targets) / len(targets)


def score_candidate(word: str,
                    candidate: LexiconEntry,
                    targets: Sequence[LexiconEntry],
                    schemes: Sequence[SchemeConfig]) -> Candidate:
    scores: Dict[str, float] = {}
    breakdown: List[str] = []
    weighted = 0.0
    total_weight = 0.0
    for scheme in schemes:
        val = scheme_score(scheme.kind, candidate, targets)
        name = scheme_name(scheme.kind)
        scores[name] = val
        breakdown.append(f"{name}: {val:.2f} x {scheme.weight:g}")
        weighted += val * scheme.weight
        total_weight += scheme.weight
    total = weighted / total_weight if total_weight > 0 else 0.0
    return Candidate(word=word, total_score=total, scheme_scores=scores, breakdown=tuple(breakdown))


__all__ = [
    "NEAR_TAIL_LENGTH",
    "score_perfect",
    "score_near",
    "score_stress",
    "scheme_score",
    "score_candidate",
]
