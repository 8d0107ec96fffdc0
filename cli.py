"""Command-line entrypoint: compare rhymes, check a pair, build artifacts."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional, Sequence

from config import load_flags
from rhyme_core.artifacts import load_context, wordfreq_ranks
from rhyme_core.check import check_rhyme
from rhyme_core.errors import InvalidRequestError, RhymeError
from rhyme_core.index_builder import build_artifacts
from rhyme_core.logging_utils import setup_logging
from rhyme_core.models import DEFAULT_SCHEMES, CompareRequest, LexiconEntry, RhymeContext, SchemeConfig, SchemeKind
from rhyme_core.prosody import metrical_name, stress_pattern_str
from rhyme_core.search import compare

log = logging.getLogger(__name__)


def _parse_scheme(text: str, strict: bool) -> SchemeConfig:
    kind, _, weight = text.partition("=")
    try:
        w = float(weight) if weight else 1.0
    except ValueError:
        raise InvalidRequestError(f"bad weight in {text!r}") from None
    return SchemeConfig(SchemeKind.parse(kind, strict=strict), w)


def _prosody_str(entry: Optional[LexiconEntry]) -> str:
    if entry is None:
        return ""
    stress = stress_pattern_str(entry.stress_pattern)
    meter = metrical_name(stress) if stress else "—"
    return f"{entry.syllable_count} • {stress or '—'} • {meter}"


def _load(flags, artifacts: Optional[str]) -> RhymeContext:
    ranks = wordfreq_ranks(flags["WORDFREQ_TOP_N"]) if flags["USE_WORDFREQ"] else None
    return load_context(
        artifacts or flags["ARTIFACTS_DIR"],
        frequency_path=flags["FREQUENCY_LIST"] or None,
        frequency_ranks=ranks,
    )


def _cmd_compare(args, flags) -> int:
    context = _load(flags, args.artifacts)
    schemes = [_parse_scheme(s, flags["STRICT_SCHEMES"]) for s in args.scheme] or list(DEFAULT_SCHEMES)
    groups: List[Sequence[str]] = [[w] for w in args.words] if args.each else [args.words]
    results = []
    for targets in groups:
        req = CompareRequest(tuple(targets), tuple(schemes), args.limit if args.limit is not None else flags["COMPARE_LIMIT"])
        resp = compare(context, req, prune=flags["INDEX_PRUNING"])
        results.append({"targets": list(targets), **resp.to_dict()})
        if args.json:
            continue
        print(f"== {' + '.join(targets)}")
        for c in resp.candidates:
            parts = " ".join(f"{k}={v:.2f}" for k, v in c.scheme_scores.items())
            print(f"{c.word:<20} {c.total_score:.3f}  {parts:<36} {_prosody_str(context.entry(c.word))}")
    if args.json:
        print(json.dumps(results if args.each else results[0], indent=2))
    return 0


def _cmd_check(args, flags) -> int:
    context = _load(flags, args.artifacts)
    ok = check_rhyme(context, args.a, args.b)
    print("yes" if ok else "no")
    return 0 if ok else 1


def _cmd_build(args, flags) -> int:
    build_artifacts(args.cmu or flags["CMUDICT_PATH"], args.out or flags["ARTIFACTS_DIR"])
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Rank rhymes from a pronunciation lexicon")
    parser.add_argument("--artifacts", help="Directory holding lexicon.json and the index files")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("compare", help="Rank lexicon words against one or more targets")
    p.add_argument("words", nargs="+", help="Target words")
    p.add_argument("--scheme", action="append", default=[], metavar="KIND=WEIGHT",
                   help="perfect, near or stress with a weight; repeatable")
    p.add_argument("--limit", type=int, help="Number of results to show")
    p.add_argument("--each", action="store_true", help="Rank each target on its own")
    p.add_argument("--json", action="store_true", help="Emit results as JSON")
    p.set_defaults(func=_cmd_compare)

    p = sub.add_parser("check", help="Do two words rhyme? Exit status 0 if so")
    p.add_argument("a")
    p.add_argument("b")
    p.set_defaults(func=_cmd_check)

    p = sub.add_parser("build", help="Build JSON artifacts from a CMU dictionary file")
    p.add_argument("--cmu", help="Path to cmudict")
    p.add_argument("--out", help="Output directory")
    p.set_defaults(func=_cmd_build)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    flags = load_flags()
    setup_logging(flags["LOG_LEVEL"])
    args = build_parser().parse_args(argv)
    try:
        return args.func(args, flags)
    except (RhymeError, FileNotFoundError) as exc:
        log.error("%s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
