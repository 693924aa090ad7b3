"""Determinism verification for modgraph artifacts."""

from __future__ import annotations

import logging
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from artifacts.write import generate_all_artifacts

if TYPE_CHECKING:
    from collections.abc import Callable

    from gomod.command import ModuleTool

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeterminismResult:
    ok: bool
    mismatches: tuple[str, ...] = ()
    missing: tuple[str, ...] = ()
    extra: tuple[str, ...] = ()


def _snapshot(directory: Path) -> dict[str, bytes]:
    """Map each file below ``directory`` to its content by POSIX relative path."""
    return {
        path.relative_to(directory).as_posix(): path.read_bytes()
        for path in directory.rglob("*")
        if path.is_file()
    }


def first_difference(expected: bytes, actual: bytes) -> int:
    """Return the 1-based number of the first line where two files differ."""
    expected_lines = expected.splitlines()
    actual_lines = actual.splitlines()
    for number, (left, right) in enumerate(zip(expected_lines, actual_lines), 1):
        if left != right:
            return number
    return min(len(expected_lines), len(actual_lines)) + 1


def verify_determinism(
    *,
    root: Path,
    artifacts_dir: Path,
    tool_factory: Callable[[Path], ModuleTool] | None = None,
) -> DeterminismResult:
    """Regenerate the artifacts of ``root`` and compare them with ``artifacts_dir``.

    Files are matched by their path relative to each directory and compared
    byte for byte.

    Raises:
        FileNotFoundError: If artifacts_dir does not exist.
        NotADirectoryError: If artifacts_dir is not a directory.
    """
    if not artifacts_dir.exists():
        msg = f"Artifacts directory does not exist: {artifacts_dir}"
        raise FileNotFoundError(msg)
    if not artifacts_dir.is_dir():
        msg = f"Artifacts path is not a directory: {artifacts_dir}"
        raise NotADirectoryError(msg)

    existing = _snapshot(artifacts_dir)
    with tempfile.TemporaryDirectory(prefix="modgraph-verify-") as temp_dir:
        generate_all_artifacts(
            root=root, out_dir=Path(temp_dir), tool_factory=tool_factory
        )
        regenerated = _snapshot(Path(temp_dir))

    mismatches = []
    for name in sorted(existing.keys() & regenerated.keys()):
        if existing[name] == regenerated[name]:
            continue
        logger.warning(
            "%s differs from the regenerated artifact at line %d",
            name,
            first_difference(existing[name], regenerated[name]),
        )
        mismatches.append(name)

    missing = tuple(sorted(existing.keys() - regenerated.keys()))
    extra = tuple(sorted(regenerated.keys() - existing.keys()))
    return DeterminismResult(
        ok=not (mismatches or missing or extra),
        mismatches=tuple(mismatches),
        missing=missing,
        extra=extra,
    )


__all__ = ["DeterminismResult", "first_difference", "verify_determinism"]
