"""Loading of prebuilt lexicon/index artifacts and frequency rankings.

Artifacts are the three JSON files written by ``index_builder.write_artifacts``
plus an optional plain-text frequency list (one word per line, most common
first).  Any failure to read them raises :class:`ArtifactLoadError`; a broken
or missing artifact is never turned into an empty lexicon.
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

from wordfreq import top_n_list

from .errors import ArtifactLoadError
from .index_builder import LEXICON_FILE, PERFECT_INDEX_FILE, TAIL_INDEX_FILE
from .models import LexiconEntry, RhymeContext
from .normalize import canonical_word
from .phonetics import parse_pron_field, stress_pattern

LOGGER = logging.getLogger(__name__)

_LFS_POINTER_PREFIX = "version https://git-lfs.github.com/spec/v1"


def looks_like_lfs_pointer(path: Path) -> bool:
    if not path.is_file():
        return False
    try:
        with path.open("r", encoding="utf-8", errors="ignore") as handle:
            first_lines = [handle.readline().strip() for _ in range(3)]
    except OSError:
        return False
    return any(_LFS_POINTER_PREFIX in line for line in first_lines)


def _check_readable(path: Path) -> None:
    if not path.exists():
        raise ArtifactLoadError(path, "missing")
    if looks_like_lfs_pointer(path):
        raise ArtifactLoadError(path, "is a Git LFS pointer, not data")


def _read_json(path: Path) -> Any:
    _check_readable(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, UnicodeDecodeError) as exc:
        raise ArtifactLoadError(path, f"not readable ({exc})") from exc
    except ValueError as exc:
        raise ArtifactLoadError(path, f"invalid JSON ({exc})") from exc


def _entry_from_json(path: Path, word: str, raw: Any) -> LexiconEntry:
    if not isinstance(raw, Mapping):
        raise ArtifactLoadError(path, f"entry for {word!r} is not an object")
    # accept both the documented keys and the compact p/s/c form
    phones = parse_pron_field(raw.get("phonemes", raw.get("p")))
    if not phones:
        raise ArtifactLoadError(path, f"entry for {word!r} has no phonemes")
    pattern = raw.get("stressPattern", raw.get("s"))
    pattern = stress_pattern(phones) if pattern is None else str(pattern)
    count = raw.get("syllableCount", raw.get("c"))
    count = len(pattern) if count is None else count
    if not isinstance(count, int) or count != len(pattern):
        raise ArtifactLoadError(path, f"entry for {word!r}: syllableCount {count!r} != len({pattern!r})")
    return LexiconEntry(tuple(phones), pattern, count)


def load_lexicon(path: str | os.PathLike) -> Dict[str, LexiconEntry]:
    p = Path(path)
    data = _read_json(p)
    if not isinstance(data, Mapping):
        raise ArtifactLoadError(p, "lexicon must be a JSON object")
    out: Dict[str, LexiconEntry] = {}
    for w, raw in data.items():
        key = canonical_word(w)
        # first spelling wins, same as the builder's first pronunciation
        if key in out:
            LOGGER.debug("skipping %r: duplicates %s in %s", w, key, p)
            continue
        out[key] = _entry_from_json(p, w, raw)
    return out


def load_inverted_index(path: str | os.PathLike) -> Dict[str, List[str]]:
    p = Path(path)
    data = _read_json(p)
    if not isinstance(data, Mapping):
        raise ArtifactLoadError(p, "index must be a JSON object")
    out: Dict[str, List[str]] = {}
    for key, words in data.items():
        if not isinstance(words, list):
            raise ArtifactLoadError(p, f"index key {key!r} does not map to a list")
        out[str(key)] = [canonical_word(str(w)) for w in words]
    return out


def ranks_from_words(words: Iterable[str]) -> Dict[str, int]:
    """Rank = position in the list (0 = most common); first occurrence wins."""
    ranks: Dict[str, int] = {}
    for i, w in enumerate(words):
        key = canonical_word(w)
        if key and key not in ranks:
            ranks[key] = i
    return ranks


def load_frequency_list(path: str | os.PathLike) -> Dict[str, int]:
    """Rank = zero-based line number; blank lines keep their position."""
    p = Path(path)
    _check_readable(p)
    try:
        with p.open("r", encoding="utf-8") as f:
            lines = [line.strip() for line in f]
    except (OSError, UnicodeDecodeError) as exc:
        raise ArtifactLoadError(p, f"not readable ({exc})") from exc
    return ranks_from_words(lines)


def wordfreq_ranks(n: int = 100_000, lang: str = "en") -> Dict[str, int]:
    """Frequency ranks from wordfreq's top-N list, for setups with no list file."""
    return ranks_from_words(top_n_list(lang, n))


def load_context(artifacts_dir: str | os.PathLike,
                 frequency_path: str | os.PathLike | None = None,
                 frequency_ranks: Optional[Mapping[str, int]] = None) -> RhymeContext:
    base = Path(artifacts_dir)
    lexicon = load_lexicon(base / LEXICON_FILE)
    perfect = load_inverted_index(base / PERFECT_INDEX_FILE)
    tails = load_inverted_index(base / TAIL_INDEX_FILE)
    ranks: Dict[str, int] = dict(frequency_ranks or {})
    if frequency_path:
        ranks = load_frequency_list(frequency_path)
    LOGGER.info("Loaded %d words, %d rhyme keys, %d tail keys, %d ranked words from %s",
                len(lexicon), len(perfect), len(tails), len(ranks), base)
    return RhymeContext(lexicon, perfect, tails, ranks)


__all__ = [
    "looks_like_lfs_pointer",
    "load_lexicon",
    "load_inverted_index",
    "load_frequency_list",
    "ranks_from_words",
    "wordfreq_ranks",
    "load_context",
]
