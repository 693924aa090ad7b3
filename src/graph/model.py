"""Dependency graph value type.

A graph maps each module identifier to the identifiers it directly depends
on. Every dependency target is also a node, so sinks map to an empty tuple.
Dependency order is insertion order, which keeps every traversal over a
graph reproducible.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from errors import InvariantError

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable, Iterator, Mapping

    from artifacts.models.artifacts.identifiers import ModuleIdentifier
    from artifacts.models.artifacts.scopes import PackageReference


class DependencyGraph:
    """Immutable adjacency mapping between module identifiers.

    Transformations return new graphs and never modify the receiver.
    """

    __slots__ = ("_nodes",)

    def __init__(
        self,
        nodes: Mapping[ModuleIdentifier, Iterable[ModuleIdentifier]] | None = None,
    ) -> None:
        adjacency: dict[ModuleIdentifier, tuple[ModuleIdentifier, ...]] = {}
        for node, dependencies in (nodes or {}).items():
            adjacency[node] = tuple(dict.fromkeys(dependencies))

        for dependencies in list(adjacency.values()):
            for dependency in dependencies:
                adjacency.setdefault(dependency, ())

        self._nodes = MappingProxyType(adjacency)

    def nodes(self) -> tuple[ModuleIdentifier, ...]:
        """Return all nodes in insertion order."""
        return tuple(self._nodes)

    def size(self) -> int:
        """Return the number of nodes."""
        return len(self._nodes)

    def dependencies(self, node: ModuleIdentifier) -> tuple[ModuleIdentifier, ...]:
        """Return the direct dependencies of ``node``, empty for unknown nodes."""
        return self._nodes.get(node, ())

    def edges(self) -> Iterator[tuple[ModuleIdentifier, ModuleIdentifier]]:
        for source, targets in self._nodes.items():
            for target in targets:
                yield source, target

    def edge_count(self) -> int:
        return sum(len(targets) for targets in self._nodes.values())

    def subgraph(self, sub_nodes: Collection[ModuleIdentifier]) -> DependencyGraph:
        """Return the graph induced by the nodes in ``sub_nodes``."""
        return DependencyGraph(
            {
                node: [target for target in targets if target in sub_nodes]
                for node, targets in self._nodes.items()
                if node in sub_nodes
            }
        )

    def project_id(self) -> ModuleIdentifier:
        """Return the single node without a version.

        Raises:
            InvariantError: If there is no such node or more than one.
        """
        candidates = [node for node in self._nodes if not node.version.strip()]
        if len(candidates) != 1:
            rendered = ", ".join(node.to_coordinates() for node in candidates)
            msg = (
                "Expected exactly one unique package without version but got "
                f"{len(candidates)}: [{rendered}]."
            )
            raise InvariantError(msg, candidates)
        return candidates[0]

    def break_cycles(self) -> DependencyGraph:
        from graph.algos import break_cycles

        return break_cycles(self)

    def to_package_reference_forest(
        self, root: ModuleIdentifier, *, max_depth: int | None = None
    ) -> tuple[PackageReference, ...]:
        from graph.forest import to_package_reference_forest

        if max_depth is None:
            return to_package_reference_forest(self, root)
        return to_package_reference_forest(self, root, max_depth=max_depth)

    def to_dict(self) -> dict[ModuleIdentifier, frozenset[ModuleIdentifier]]:
        """Return an order-insensitive view, convenient for comparisons."""
        return {node: frozenset(targets) for node, targets in self._nodes.items()}

    def __contains__(self, node: object) -> bool:
        return node in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DependencyGraph):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash(frozenset(self.to_dict().items()))

    def __repr__(self) -> str:
        return f"DependencyGraph(nodes={self.size()}, edges={self.edge_count()})"


class GraphBuilder:
    """Accumulates edges into a :class:`DependencyGraph`."""

    def __init__(self, root: ModuleIdentifier | None = None) -> None:
        self._edges: dict[ModuleIdentifier, dict[ModuleIdentifier, None]] = {}
        if root is not None:
            self._edges[root] = {}

    def add_node(self, node: ModuleIdentifier) -> None:
        self._edges.setdefault(node, {})

    def add_edge(self, source: ModuleIdentifier, target: ModuleIdentifier) -> None:
        """Add an edge from ``source`` to ``target``, adding missing nodes.

        Adding the same edge again has no effect.
        """
        self._edges.setdefault(source, {})[target] = None
        self._edges.setdefault(target, {})

    def build(self) -> DependencyGraph:
        return DependencyGraph(self._edges)


__all__ = ["DependencyGraph", "GraphBuilder"]
