"""Runtime configuration flags for the rhyme comparison tools.

The flags rely on environment variables so deployments can switch data
locations and behaviour without code changes.  Every flag defaults to a safe
value (legacy silent-zero handling of unknown schemes, index pruning on,
no frequency data).
"""
from __future__ import annotations

import os
from typing import Any, Dict


def _env_bool(name: str, default: str = "0") -> bool:
    return os.getenv(name, default) == "1"


def _env_int(name: str, default: str) -> int:
    try:
        return int(os.getenv(name, default))
    except ValueError:
        return int(default)


class _Flags(dict):
    def __getattr__(self, name: str) -> Any:
        try:
            return self[name]
        except KeyError as exc:
            raise AttributeError(name) from exc


def load_flags() -> Dict[str, Any]:
    return _Flags({
        "COMPARE_LIMIT": _env_int("COMPARE_LIMIT", "50"),
        "LOG_LEVEL": os.getenv("LOG_LEVEL", "INFO"),
        "ARTIFACTS_DIR": os.getenv("ARTIFACTS_DIR", "data/artifacts"),
        "CMUDICT_PATH": os.getenv("CMUDICT_PATH", "data/cmudict-0.7b"),
        "FREQUENCY_LIST": os.getenv("FREQUENCY_LIST", ""),
        "USE_WORDFREQ": _env_bool("USE_WORDFREQ", "0"),
        "WORDFREQ_TOP_N": _env_int("WORDFREQ_TOP_N", "100000"),
        "STRICT_SCHEMES": _env_bool("STRICT_SCHEMES", "0"),
        "INDEX_PRUNING": _env_bool("INDEX_PRUNING", "1"),
    })


FLAGS: Dict[str, Any] = load_flags()

__all__ = ["FLAGS", "load_flags"]
