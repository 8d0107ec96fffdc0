from .models import (
    Candidate,
    CompareRequest,
    CompareResponse,
    LexiconEntry,
    RhymeContext,
    SchemeConfig,
    SchemeKind,
)
from .errors import ArtifactLoadError, InvalidRequestError, RhymeError, UnknownSchemeError
from .index_builder import build_index, build_from_cmu_lines
from .artifacts import load_context
from .search import compare
from .check import check_rhyme

__all__ = [
    "Candidate",
    "CompareRequest",
    "CompareResponse",
    "LexiconEntry",
    "RhymeContext",
    "SchemeConfig",
    "SchemeKind",
    "RhymeError",
    "ArtifactLoadError",
    "InvalidRequestError",
    "UnknownSchemeError",
    "build_index",
    "build_from_cmu_lines",
    "load_context",
    "compare",
    "check_rhyme",
]
