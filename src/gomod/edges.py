"""Module graph construction from the tool's edge list."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from errors import FormatError, MetadataError
from gomod.metadata import ModuleInfo, main_module
from graph.model import GraphBuilder
from utils import parse_module_entry

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from graph.model import DependencyGraph

logger = logging.getLogger(__name__)


def _module_info(module_infos: Mapping[str, ModuleInfo], name: str) -> ModuleInfo:
    try:
        return module_infos[name]
    except KeyError as exc:
        msg = f"No module metadata for '{name}'."
        raise MetadataError(msg) from exc


def build_module_graph(
    lines: Iterable[str],
    module_infos: Mapping[str, ModuleInfo],
) -> DependencyGraph:
    """Build the dependency graph from ``parent@version child@version`` lines.

    Blank lines are ignored. Edges from the main module to modules flagged as
    indirect are skipped, since those modules are reachable through a direct
    dependency anyway.

    Raises:
        FormatError: If a non-blank line does not have exactly two entries.
        MetadataError: If an entry names a module without metadata.
    """
    builder = GraphBuilder(main_module(module_infos).to_id())

    for line_number, line in enumerate(lines, 1):
        if not line.strip():
            continue

        columns = line.split()
        if len(columns) != 2:
            msg = (
                f"Expected exactly two entries on line {line_number} but got "
                f"{len(columns)}: {line!r}."
            )
            raise FormatError(msg)

        parent_info = _module_info(module_infos, parse_module_entry(columns[0]))
        child_info = _module_info(module_infos, parse_module_entry(columns[1]))
        parent = parent_info.to_id()
        child = child_info.to_id()

        if parent_info.main and child_info.indirect:
            logger.debug(
                "Module '%s' is an indirect dependency of '%s'. Skip adding edge.",
                child.name,
                parent.name,
            )
            continue

        builder.add_edge(parent, child)

    return builder.build()


__all__ = ["build_module_graph"]
