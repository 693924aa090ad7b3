"""Partitioning of a dependency graph into named scopes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from artifacts.models.artifacts.scopes import Scope
from graph.forest import DEFAULT_MAX_TREE_DEPTH

if TYPE_CHECKING:
    from collections.abc import Collection

    from artifacts.models.artifacts.identifiers import ModuleIdentifier
    from graph.model import DependencyGraph

MAIN_SCOPE = "main"
VENDOR_SCOPE = "vendor"


def partition_scopes(
    graph: DependencyGraph,
    project_id: ModuleIdentifier,
    main_module_names: Collection[str],
    *,
    main_scope: str = MAIN_SCOPE,
    vendor_scope: str = VENDOR_SCOPE,
    max_depth: int = DEFAULT_MAX_TREE_DEPTH,
) -> list[Scope]:
    """Build the main and vendor scopes of a project, sorted by name.

    The main scope only holds modules named in ``main_module_names``, which
    are the transitive non-test dependencies of the main module. The vendor
    scope holds the whole graph. Both scopes are always returned.
    """
    main_ids = {node for node in graph.nodes() if node.name in main_module_names}
    main_ids.add(project_id)

    scopes = [
        Scope(
            name=main_scope,
            dependencies=graph.subgraph(main_ids).to_package_reference_forest(
                project_id, max_depth=max_depth
            ),
        ),
        Scope(
            name=vendor_scope,
            dependencies=graph.to_package_reference_forest(
                project_id, max_depth=max_depth
            ),
        ),
    ]
    return sorted(scopes, key=lambda scope: scope.name)


__all__ = ["MAIN_SCOPE", "VENDOR_SCOPE", "partition_scopes"]
