# -*- coding: utf-8 -*-
"""
Compare engine — rank the lexicon against one or more target words
===================================================================

``compare(context, request)`` resolves the request's targets in the
lexicon, scores every other word with the weighted scheme mix from
``rhyme_core.scoring`` and returns the best ``limit`` candidates.

Ranking
-------
- Candidates scoring below ``NOISE_FLOOR`` (0.3) are dropped.
- Sorted by total score, descending.  Scores within ``TIE_EPSILON`` of each
  other count as tied and are ordered by frequency rank (unknown words last),
  then alphabetically.

Candidate generation
--------------------
The reference behaviour is a full scan of the lexicon.  When the scheme
weights guarantee that no word outside the targets' PerfectIndex/TailIndex
buckets can reach the noise floor, only those buckets are scored; the pool is
visited in lexicon order, so the result is identical to the full scan.

Determinism
-----------
No randomness, no shared mutable state: the same context and request always
produce the same ordered output.
"""
from __future__ import annotations

import functools
import logging
import time
from dataclasses import replace
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from .models import (
    DEFAULT_SCHEMES,
    Candidate,
    CompareRequest,
    CompareResponse,
    LexiconEntry,
    RhymeContext,
    SchemeConfig,
    SchemeKind,
)
from .normalize import canonical_word
from .phonetics import perfect_rhyme_key, tail_keys
from .scoring import NEAR_TAIL_LENGTH, score_candidate

LOGGER = logging.getLogger(__name__)

NOISE_FLOOR = 0.3
TIE_EPSILON = 0.001
_BOUND_MARGIN = 1e-9

# Highest per-target score a word can get from each scheme when it shares no
# rhyme key and no 2/3-phoneme tail with the target.
_OUT_OF_POOL_CAP = {
    SchemeKind.PERFECT: 0.0,
    SchemeKind.NEAR: 1.0 / NEAR_TAIL_LENGTH,
    SchemeKind.STRESS: 1.0,
}


# ----------------------------------------------------------------------------
# Target resolution
# ----------------------------------------------------------------------------
def resolve_targets(context: RhymeContext,
                    targets: Iterable[str]) -> Tuple[List[str], List[Tuple[str, LexiconEntry]]]:
    """Return (all canonical targets, resolved unique targets in request order).

    Out-of-vocabulary words are dropped silently.
    """
    canonical = [canonical_word(t) for t in targets]
    resolved: List[Tuple[str, LexiconEntry]] = []
    seen: Set[str] = set()
    for word in canonical:
        if word in seen:
            continue
        seen.add(word)
        entry = context.entry(word)
        if entry is not None:
            resolved.append((word, entry))
    return canonical, resolved


# ----------------------------------------------------------------------------
# Candidate generation
# ----------------------------------------------------------------------------
def out_of_pool_bound(schemes: Sequence[SchemeConfig]) -> float:
    """Upper bound on the total score of a word outside every target bucket."""
    total_weight = sum(s.weight for s in schemes)
    if total_weight <= 0:
        return 0.0
    capped = sum(s.weight * _OUT_OF_POOL_CAP.get(s.kind, 0.0) for s in schemes)
    return capped / total_weight


def can_prune(schemes: Sequence[SchemeConfig]) -> bool:
    return out_of_pool_bound(schemes) < NOISE_FLOOR - _BOUND_MARGIN


def index_pool(context: RhymeContext, entries: Iterable[LexiconEntry]) -> Set[str]:
    pool: Set[str] = set()
    for entry in entries:
        key = perfect_rhyme_key(entry.phonemes)
        if key is not None:
            pool.update(context.perfect_index.get(key, ()))
        for tk in tail_keys(entry.phonemes):
            pool.update(context.tail_index.get(tk, ()))
    return pool


def _iter_candidates(context: RhymeContext,
                     entries: Sequence[LexiconEntry],
                     schemes: Sequence[SchemeConfig],
                     prune: bool) -> Iterable[str]:
    if prune and can_prune(schemes):
        pool = index_pool(context, entries)
        positions = context.positions
        # index words missing from the lexicon cannot be scored
        return sorted((w for w in pool if w in positions), key=positions.__getitem__)
    return context.lexicon.keys()


# ----------------------------------------------------------------------------
# Ranking
# ----------------------------------------------------------------------------
def _compare_candidates(a: Candidate, b: Candidate) -> int:
    diff = b.total_score - a.total_score
    if abs(diff) > TIE_EPSILON:
        return 1 if diff > 0 else -1
    if a.sort_rank != b.sort_rank:
        return -1 if a.sort_rank < b.sort_rank else 1
    if a.word != b.word:
        return -1 if a.word < b.word else 1
    return 0


def rank_candidates(candidates: List[Candidate]) -> List[Candidate]:
    return sorted(candidates, key=functools.cmp_to_key(_compare_candidates))


# ----------------------------------------------------------------------------
# Public: compare
# ----------------------------------------------------------------------------
def compare(context: RhymeContext, request: CompareRequest, prune: bool = True) -> CompareResponse:
    start = time.perf_counter()
    canonical, resolved = resolve_targets(context, request.targets)
    if not resolved:
        LOGGER.debug("No target of %s is in the lexicon", list(request.targets))
        return CompareResponse(())

    excluded = set(canonical)
    target_entries = [entry for _, entry in resolved]
    out: List[Candidate] = []
    scanned = 0
    for word in _iter_candidates(context, target_entries, request.schemes, prune):
        if word in excluded:
            continue
        scanned += 1
        scored = score_candidate(word, context.lexicon[word], target_entries, request.schemes)
        if scored.total_score < NOISE_FLOOR:
            continue
        out.append(replace(scored, frequency_rank=context.frequency_rank(word)))

    ranked = rank_candidates(out)[: request.limit]
    LOGGER.debug("compare %s: scored %d of %d words, %d above floor, %.2fms",
                 [w for w, _ in resolved], scanned, len(context.lexicon), len(out),
                 (time.perf_counter() - start) * 1000)
    return CompareResponse(tuple(ranked))


def compare_words(context: RhymeContext,
                  targets: Sequence[str],
                  schemes: Optional[Sequence[SchemeConfig]] = None,
                  limit: Optional[int] = None,
                  prune: bool = True) -> CompareResponse:
    if schemes is None:
        schemes = DEFAULT_SCHEMES
    return compare(context, CompareRequest(tuple(targets), tuple(schemes), limit), prune=prune)


__all__ = [
    "NOISE_FLOOR",
    "TIE_EPSILON",
    "resolve_targets",
    "out_of_pool_bound",
    "can_prune",
    "index_pool",
    "rank_candidates",
    "compare",
    "compare_words",
]
