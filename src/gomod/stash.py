"""Temporary relocation of directories during an analysis."""

from __future__ import annotations

import logging
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)


@contextmanager
def stash_directories(*directories: Path) -> Iterator[list[Path]]:
    """Move existing ``directories`` out of the way until the block exits.

    Yields the directories that were actually stashed. Each one is restored
    on every exit path; a directory recreated inside the block is replaced by
    the stashed original.
    """
    stash_root = Path(tempfile.mkdtemp(prefix="modgraph-stash-"))
    stashed: list[tuple[Path, Path]] = []
    try:
        for index, directory in enumerate(directories):
            if not directory.is_dir():
                continue
            target = stash_root / str(index)
            logger.debug("Stashing directory %s to %s", directory, target)
            shutil.move(str(directory), str(target))
            stashed.append((directory, target))

        yield [original for original, _ in stashed]
    finally:
        for original, target in reversed(stashed):
            if original.exists():
                logger.debug("Replacing directory %s created meanwhile", original)
                shutil.rmtree(original)
            logger.debug("Restoring directory %s", original)
            shutil.move(str(target), str(original))
        shutil.rmtree(stash_root, ignore_errors=True)


__all__ = ["stash_directories"]
