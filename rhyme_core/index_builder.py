from __future__ import annotations
import json
import logging
import os
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from .models import LexiconEntry, RhymeContext
from .normalize import canonical_word
from .phonetics import (
    parse_cmu_line,
    perfect_rhyme_key,
    strip_variant,
    tail_keys,
)

LOGGER = logging.getLogger(__name__)

LEXICON_FILE = "lexicon.json"
PERFECT_INDEX_FILE = "index_perfect.json"
TAIL_INDEX_FILE = "index_tail.json"


def build_index(pairs: Iterable[Tuple[str, Sequence[str]]],
                frequency_ranks: Optional[Dict[str, int]] = None) -> RhymeContext:
    """Single pass over (word, phonemes) pairs → lexicon + perfect/tail indices.

    The first pronunciation seen for a word wins; later variants (``WORD(2)``)
    and later duplicates of the primary form are dropped entirely, including
    from the indices.
    """
    lexicon: Dict[str, LexiconEntry] = {}
    perfect: Dict[str, List[str]] = {}
    tails: Dict[str, List[str]] = {}
    skipped = 0
    for raw_word, phones in pairs:
        base, _ = strip_variant(raw_word)
        word = canonical_word(base)
        if not word or not phones:
            skipped += 1
            continue
        if word in lexicon:
            skipped += 1
            continue
        entry = LexiconEntry.from_phonemes(phones)
        lexicon[word] = entry

        key = perfect_rhyme_key(entry.phonemes)
        if key is not None:
            perfect.setdefault(key, []).append(word)
        for tk in tail_keys(entry.phonemes):
            tails.setdefault(tk, []).append(word)

    LOGGER.debug("Indexed %d words (%d skipped), %d rhyme keys, %d tail keys",
                 len(lexicon), skipped, len(perfect), len(tails))
    return RhymeContext(lexicon, perfect, tails, frequency_ranks or {})


def iter_cmu_pairs(lines: Iterable[str]) -> Iterator[Tuple[str, List[str]]]:
    for line in lines:
        parsed = parse_cmu_line(line)
        if not parsed:
            continue
        yield parsed


def build_from_cmu_lines(lines: Iterable[str],
                         frequency_ranks: Optional[Dict[str, int]] = None) -> RhymeContext:
    return build_index(iter_cmu_pairs(lines), frequency_ranks)


def cmu_lines(path: str | os.PathLike) -> Iterator[str]:
    """Yield lines from CMUdict handling encoding quirks (utf-8/latin-1)."""
    with open(path, "rb") as fh:
        for bline in fh:
            try:
                line = bline.decode("utf-8")
            except UnicodeDecodeError:
                line = bline.decode("latin-1", errors="ignore")
            yield line


def write_artifacts(context: RhymeContext, out_dir: str | os.PathLike) -> Dict[str, Path]:
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    payloads = {
        LEXICON_FILE: {w: e.to_dict() for w, e in context.lexicon.items()},
        PERFECT_INDEX_FILE: {k: list(v) for k, v in context.perfect_index.items()},
        TAIL_INDEX_FILE: {k: list(v) for k, v in context.tail_index.items()},
    }
    written = {}
    for name, payload in payloads.items():
        path = out / name
        with path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, separators=(",", ":"))
        written[name] = path
    return written


def build_artifacts(cmu_path: str | os.PathLike, out_dir: str | os.PathLike) -> RhymeContext:
    if not Path(cmu_path).exists():
        raise FileNotFoundError(f"CMUdict not found: {cmu_path}")
    context = build_from_cmu_lines(cmu_lines(cmu_path))
    write_artifacts(context, out_dir)
    LOGGER.info("Built %s: %d words, %d rhyme keys, %d tail keys",
                out_dir, len(context.lexicon), len(context.perfect_index), len(context.tail_index))
    return context
