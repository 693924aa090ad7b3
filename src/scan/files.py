"""Discovery of Go module definition files."""

from __future__ import annotations

import os
from fnmatch import fnmatch
from pathlib import Path
from typing import TYPE_CHECKING

from gitignore_parser import parse_gitignore  # type: ignore[import-untyped]

from gomod.analyzer import DEFINITION_FILENAME, VENDOR_DIRNAME

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

GITIGNORE_FILENAME = ".gitignore"

# Never worth descending into.
_SKIPPED_DIRNAMES = frozenset({".git"})


def map_definition_files(definition_files: Iterable[Path], root: Path) -> list[Path]:
    """Drop definition files that belong to vendored dependencies.

    A ``go.mod`` whose directory, relative to ``root``, has a ``vendor``
    segment anywhere in its path is a vendored copy of a dependency, not a
    project of its own.
    """
    return [
        definition_file
        for definition_file in definition_files
        if VENDOR_DIRNAME not in definition_file.parent.relative_to(root).parts
    ]


class _IgnoreRules:
    """The ``.gitignore`` matchers in effect while walking a tree."""

    def __init__(self) -> None:
        self._matchers: list[Callable[[str], bool]] = []

    def add(self, gitignore_file: Path) -> None:
        if gitignore_file.is_file() and not gitignore_file.is_symlink():
            self._matchers.append(parse_gitignore(gitignore_file))

    def ignores(self, path: Path) -> bool:
        for matcher in self._matchers:
            try:
                if matcher(str(path)):
                    return True
            except ValueError:
                # Matcher of a sibling tree.
                continue
        return False


def _walk_definition_files(
    root: Path, *, output_dir: str, nested_gitignore: bool
) -> Iterator[Path]:
    rules = _IgnoreRules()
    rules.add(root / GITIGNORE_FILENAME)

    for dirpath, dirnames, filenames in os.walk(root):
        current = Path(dirpath)
        if nested_gitignore and current != root and GITIGNORE_FILENAME in filenames:
            rules.add(current / GITIGNORE_FILENAME)

        # Pruned in place so os.walk does not descend.
        dirnames[:] = sorted(
            name
            for name in dirnames
            if name not in _SKIPPED_DIRNAMES
            and not (current == root and name == output_dir)
            and not (current / name).is_symlink()
            and not rules.ignores(current / name)
        )

        if DEFINITION_FILENAME not in filenames:
            continue
        definition_file = current / DEFINITION_FILENAME
        if definition_file.is_symlink() or rules.ignores(definition_file):
            continue
        yield definition_file


def _matches_any(relative_path: str, patterns: list[str] | None) -> bool:
    return any(fnmatch(relative_path, pattern) for pattern in patterns or ())


def find_definition_files(
    directory: Path,
    *,
    output_dir: str = ".modgraph",
    include_patterns: list[str] | None = None,
    exclude_patterns: list[str] | None = None,
    nested_gitignore: bool = False,
) -> list[Path]:
    """Return the ``go.mod`` files of all projects under ``directory``.

    The walk skips the output directory, ``.git``, symlinked directories and
    anything ignored by the root ``.gitignore`` (or by every ``.gitignore``
    on the way down when ``nested_gitignore`` is set). Include and exclude
    patterns are matched against the POSIX path relative to ``directory``.
    Vendored definition files are dropped by :func:`map_definition_files`.

    Returns:
        The definition files sorted by relative path.
    """
    selected = []
    for definition_file in _walk_definition_files(
        directory, output_dir=output_dir, nested_gitignore=nested_gitignore
    ):
        relative_path = definition_file.relative_to(directory).as_posix()
        if include_patterns and not _matches_any(relative_path, include_patterns):
            continue
        if _matches_any(relative_path, exclude_patterns):
            continue
        selected.append(definition_file)

    selected.sort(key=lambda path: path.relative_to(directory).as_posix())
    return map_definition_files(selected, directory)


__all__ = ["find_definition_files", "map_definition_files"]
