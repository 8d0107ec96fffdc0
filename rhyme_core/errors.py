"""Exceptions raised by rhyme_core."""
from __future__ import annotations


class RhymeError(Exception):
    """Base class for rhyme_core failures."""


class ArtifactLoadError(RhymeError):
    """A lexicon/index/frequency artifact could not be read or parsed."""

    def __init__(self, path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class InvalidRequestError(RhymeError, ValueError):
    """A compare request is malformed (negative weight, bad limit, ...)."""


class UnknownSchemeError(InvalidRequestError):
    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"unknown rhyme scheme: {kind!r}")


__all__ = ["RhymeError", "ArtifactLoadError", "InvalidRequestError", "UnknownSchemeError"]
