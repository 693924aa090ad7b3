"""Error hierarchy for modgraph analysis."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


class AnalysisError(Exception):
    """Base class for failures while analyzing a module graph."""


class FormatError(AnalysisError):
    """Raised when an edge-list line does not have the expected shape."""


class MetadataError(AnalysisError):
    """Raised when module metadata is missing or names no single main module."""


class InvariantError(AnalysisError):
    """Raised when a graph violates a structural invariant."""

    def __init__(self, message: str, candidates: Sequence[object] = ()) -> None:
        super().__init__(message)
        self.candidates = tuple(candidates)


class CommandError(AnalysisError):
    """Raised when the external module tool exits with a non-zero status."""

    def __init__(self, argv: Sequence[str], returncode: int, stderr: str) -> None:
        self.argv = tuple(argv)
        self.returncode = returncode
        self.stderr = stderr
        msg = f"Command {' '.join(self.argv)!r} failed with exit code {returncode}"
        if stderr.strip():
            msg = f"{msg}: {stderr.strip()}"
        super().__init__(msg)


__all__ = [
    "AnalysisError",
    "CommandError",
    "FormatError",
    "InvariantError",
    "MetadataError",
]
