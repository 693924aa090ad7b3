"""Conversion of an acyclic dependency graph into package reference trees."""

from __future__ import annotations

from typing import TYPE_CHECKING

from artifacts.models.artifacts.scopes import PackageLinkage, PackageReference
from errors import InvariantError

if TYPE_CHECKING:
    from artifacts.models.artifacts.identifiers import ModuleIdentifier
    from graph.model import DependencyGraph

DEFAULT_MAX_TREE_DEPTH = 256


def _sorted_references(
    references: list[PackageReference],
) -> tuple[PackageReference, ...]:
    return tuple(sorted(references, key=lambda ref: ref.id.sort_key()))


def to_package_reference_forest(
    graph: DependencyGraph,
    root: ModuleIdentifier,
    *,
    max_depth: int = DEFAULT_MAX_TREE_DEPTH,
) -> tuple[PackageReference, ...]:
    """Return the dependency trees of the direct dependencies of ``root``.

    The root itself is not part of the forest. Children are ordered by
    identifier. The graph must be acyclic; :func:`graph.algos.break_cycles`
    establishes that.

    Raises:
        InvariantError: If a cycle is reached or a tree gets deeper than
            ``max_depth``.
    """
    path: list[ModuleIdentifier] = [root]

    def reference(module_id: ModuleIdentifier) -> PackageReference:
        if module_id in path:
            cycle = [*path[path.index(module_id) :], module_id]
            msg = "Dependency graph contains a cycle: " + " -> ".join(
                node.to_coordinates() for node in cycle
            )
            raise InvariantError(msg, cycle)
        if len(path) > max_depth:
            msg = f"Dependency tree exceeds the maximum depth of {max_depth}."
            raise InvariantError(msg, list(path))

        path.append(module_id)
        try:
            children = [reference(child) for child in graph.dependencies(module_id)]
        finally:
            path.pop()

        return PackageReference(
            id=module_id,
            linkage=PackageLinkage.PROJECT_STATIC,
            dependencies=_sorted_references(children),
        )

    return _sorted_references([reference(child) for child in graph.dependencies(root)])


__all__ = ["DEFAULT_MAX_TREE_DEPTH", "to_package_reference_forest"]
