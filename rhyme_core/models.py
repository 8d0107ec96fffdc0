"""Value types shared by the builder, scoring and compare engines.

Everything here is immutable once constructed.  A :class:`RhymeContext`
bundles the lexicon, both inverted indices and the optional frequency ranks;
it is built once (from raw CMU lines or from JSON artifacts) and then passed
into the pure ``compare`` / ``check_rhyme`` functions, so any number of
callers can share it without locking.
"""
from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from .errors import InvalidRequestError, UnknownSchemeError
from .phonetics import stress_pattern

DEFAULT_LIMIT = 50
UNKNOWN_FREQUENCY_RANK = 999_999


class SchemeKind(str, enum.Enum):
    PERFECT = "perfect"
    NEAR = "near"
    STRESS = "stress"

    @classmethod
    def parse(cls, raw: Union[str, "SchemeKind"], strict: bool = False) -> Union["SchemeKind", str]:
        """Map a request's scheme id onto the closed set.

        Unrecognised ids come back as the lower-cased raw string (they score 0)
        unless ``strict`` is set, in which case UnknownSchemeError is raised.
        """
        if isinstance(raw, cls):
            return raw
        key = str(raw).strip().lower()
        try:
            return cls(key)
        except ValueError:
            if strict:
                raise UnknownSchemeError(str(raw)) from None
            return key


def scheme_name(kind: Union[SchemeKind, str]) -> str:
    return kind.value if isinstance(kind, SchemeKind) else str(kind)


@dataclass(frozen=True)
class LexiconEntry:
    phonemes: Tuple[str, ...]
    stress_pattern: str
    syllable_count: int

    @classmethod
    def from_phonemes(cls, phonemes: Sequence[str]) -> "LexiconEntry":
        pattern = stress_pattern(phonemes)
        return cls(tuple(phonemes), pattern, len(pattern))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "phonemes": list(self.phonemes),
            "stressPattern": self.stress_pattern,
            "syllableCount": self.syllable_count,
        }


@dataclass(frozen=True)
class SchemeConfig:
    kind: Union[SchemeKind, str]
    weight: float = 1.0

    def __post_init__(self):
        object.__setattr__(self, "kind", SchemeKind.parse(self.kind))
        if (isinstance(self.weight, bool) or not isinstance(self.weight, (int, float))
                or not math.isfinite(self.weight) or self.weight < 0):
            raise InvalidRequestError(f"scheme {scheme_name(self.kind)!r} needs a finite non-negative weight, got {self.weight!r}")

    @property
    def name(self) -> str:
        return scheme_name(self.kind)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], strict: bool = False) -> "SchemeConfig":
        raw = data.get("kind", data.get("id"))
        if raw is None:
            raise InvalidRequestError("scheme entry needs an 'id' or 'kind'")
        try:
            weight = float(data.get("weight", 1.0))
        except (TypeError, ValueError):
            raise InvalidRequestError(f"scheme {raw!r} has a non-numeric weight") from None
        return cls(SchemeKind.parse(raw, strict=strict), weight)


# The interactive page's mix: perfect rhymes first, tails and metre as support.
DEFAULT_SCHEMES: Tuple[SchemeConfig, ...] = (
    SchemeConfig(SchemeKind.PERFECT, 1.0),
    SchemeConfig(SchemeKind.NEAR, 0.7),
    SchemeConfig(SchemeKind.STRESS, 0.5),
)


@dataclass(frozen=True)
class CompareRequest:
    targets: Tuple[str, ...]
    schemes: Tuple[SchemeConfig, ...]
    limit: int = DEFAULT_LIMIT

    def __post_init__(self):
        object.__setattr__(self, "targets", tuple(self.targets))
        object.__setattr__(self, "schemes", tuple(self.schemes))
        if self.limit is None:
            object.__setattr__(self, "limit", DEFAULT_LIMIT)
        if isinstance(self.limit, bool) or not isinstance(self.limit, int) or self.limit <= 0:
            raise InvalidRequestError(f"limit must be a positive integer, got {self.limit!r}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], strict: bool = False) -> "CompareRequest":
        targets = data.get("targets") or []
        if isinstance(targets, str):
            targets = [targets]
        schemes = [SchemeConfig.from_dict(s, strict=strict) for s in data.get("schemes") or []]
        return cls(tuple(str(t) for t in targets), tuple(schemes), data.get("limit"))


@dataclass(frozen=True)
class Candidate:
    word: str
    total_score: float
    scheme_scores: Dict[str, float]
    breakdown: Tuple[str, ...] = ()
    frequency_rank: Optional[int] = None

    @property
    def sort_rank(self) -> int:
        return UNKNOWN_FREQUENCY_RANK if self.frequency_rank is None else self.frequency_rank

    def to_dict(self) -> Dict[str, Any]:
        return {
            "word": self.word,
            "totalScore": self.total_score,
            "schemeScores": dict(self.scheme_scores),
            "breakdown": list(self.breakdown),
            "frequencyRank": self.frequency_rank,
        }


@dataclass(frozen=True)
class CompareResponse:
    candidates: Tuple[Candidate, ...] = ()

    def words(self) -> List[str]:
        return [c.word for c in self.candidates]

    def to_dict(self) -> Dict[str, Any]:
        return {"candidates": [c.to_dict() for c in self.candidates]}


def _freeze_index(index: Mapping[str, Iterable[str]]) -> Mapping[str, Tuple[str, ...]]:
    return MappingProxyType({k: tuple(v) for k, v in index.items()})


@dataclass(frozen=True)
class RhymeContext:
    lexicon: Mapping[str, LexiconEntry]
    perfect_index: Mapping[str, Tuple[str, ...]]
    tail_index: Mapping[str, Tuple[str, ...]]
    frequency_ranks: Mapping[str, int] = field(default_factory=dict)
    # word -> position in lexicon order; lets pruned candidate pools be scored
    # in the same order as a full scan.
    positions: Mapping[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "lexicon", MappingProxyType(dict(self.lexicon)))
        object.__setattr__(self, "perfect_index", _freeze_index(self.perfect_index))
        object.__setattr__(self, "tail_index", _freeze_index(self.tail_index))
        object.__setattr__(self, "frequency_ranks", MappingProxyType(dict(self.frequency_ranks or {})))
        object.__setattr__(self, "positions", MappingProxyType({w: i for i, w in enumerate(self.lexicon)}))

    def __len__(self) -> int:
        return len(self.lexicon)

    def entry(self, word: str) -> Optional[LexiconEntry]:
        return self.lexicon.get(word)

    def frequency_rank(self, word: str) -> Optional[int]:
        return self.frequency_ranks.get(word)


__all__ = [
    "DEFAULT_LIMIT",
    "DEFAULT_SCHEMES",
    "UNKNOWN_FREQUENCY_RANK",
    "SchemeKind",
    "scheme_name",
    "LexiconEntry",
    "SchemeConfig",
    "CompareRequest",
    "Candidate",
    "CompareResponse",
    "RhymeContext",
]
