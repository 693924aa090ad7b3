"""Vendor set resolution.

Modules that appear in the graph are not necessarily needed: test-only
dependencies of dependencies are listed too. The module tool's usage report
tells which modules the main module really uses.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from utils import chunked

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    from artifacts.models.artifacts.identifiers import ModuleIdentifier
    from graph.model import DependencyGraph

logger = logging.getLogger(__name__)

# Prefix of a line starting the report section of a module.
PACKAGE_SEPARATOR = "# "

# Prefix of a line explaining that a module is not used.
NOT_USED_PREFIX = "("

# Number of modules covered by a single usage query. Keeps the size of each
# report reasonable.
WHY_BATCH_SIZE = 32


def parse_why_output(output: str) -> set[str]:
    """Return the names of modules the usage report marks as used.

    >>> sorted(parse_why_output("# modA\\nsome text\\n(ignored)\\n# modB\\nusage\\n"))
    ['modA', 'modB']
    """
    used_modules: set[str] = set()
    current_module: str | None = None

    for line in output.splitlines():
        if line.startswith(PACKAGE_SEPARATOR):
            current_module = line[len(PACKAGE_SEPARATOR) :]
        elif not line.startswith(NOT_USED_PREFIX) and line.strip():
            if current_module is not None:
                used_modules.add(current_module)

    return used_modules


def resolve_vendor_modules(
    graph: DependencyGraph,
    replaced_modules: Mapping[str, str],
    why: Callable[[Sequence[str]], str],
    *,
    batch_size: int = WHY_BATCH_SIZE,
) -> set[ModuleIdentifier]:
    """Return the nodes of ``graph`` used to build and test the main module.

    Args:
        graph: The module graph; its project node must be unique
        replaced_modules: Replacement module name -> original module name;
            the usage report only answers for original names
        why: Runs one usage query for the given module names
        batch_size: Maximum number of names per query
    """
    vendor_module_names = {graph.project_id().name}

    def query_name(module_id: ModuleIdentifier) -> str:
        return replaced_modules.get(module_id.name, module_id.name)

    for batch in chunked(graph.nodes(), batch_size):
        vendor_module_names |= parse_why_output(why([query_name(m) for m in batch]))

    return {node for node in graph.nodes() if query_name(node) in vendor_module_names}


def filter_vendor_graph(
    graph: DependencyGraph,
    replaced_modules: Mapping[str, str],
    why: Callable[[Sequence[str]], str],
    *,
    batch_size: int = WHY_BATCH_SIZE,
) -> DependencyGraph:
    """Return ``graph`` restricted to its vendor modules."""
    vendor_modules = resolve_vendor_modules(
        graph, replaced_modules, why, batch_size=batch_size
    )
    if len(vendor_modules) < graph.size():
        logger.debug(
            "Removing %d non-vendor modules from the dependency graph.",
            graph.size() - len(vendor_modules),
        )
        return graph.subgraph(vendor_modules)
    return graph


__all__ = [
    "PACKAGE_SEPARATOR",
    "WHY_BATCH_SIZE",
    "filter_vendor_graph",
    "parse_why_output",
    "resolve_vendor_modules",
]
