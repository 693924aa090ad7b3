"""Graph algorithms for modgraph."""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterator, Mapping
from enum import Enum
from typing import TYPE_CHECKING, Generic, TypeVar

from graph.model import DependencyGraph

if TYPE_CHECKING:
    from collections.abc import Iterable

    from artifacts.models.artifacts.identifiers import ModuleIdentifier

logger = logging.getLogger(__name__)

N = TypeVar("N", bound=Hashable)


class _Color(Enum):
    WHITE = "white"
    GRAY = "gray"
    BLACK = "black"


class _Frame:
    """One pending node of the depth-first search."""

    __slots__ = ("closing", "neighbors", "node")

    def __init__(
        self, node: ModuleIdentifier, neighbors: Iterator[ModuleIdentifier]
    ) -> None:
        self.node = node
        self.neighbors = neighbors
        self.closing: list[ModuleIdentifier] = []


def break_cycles(graph: DependencyGraph) -> DependencyGraph:
    """Return a copy of ``graph`` with edges removed so that no cycle remains.

    Three-color depth-first search over the nodes in insertion order. An edge
    to a node that is still in progress closes a cycle and is dropped once the
    source node's subtree is finished. Self-loops are dropped the same way.
    The result is deterministic for identical input but not necessarily
    minimal.
    """
    outgoing: dict[ModuleIdentifier, tuple[ModuleIdentifier, ...]] = {
        node: graph.dependencies(node) for node in graph.nodes()
    }
    color = dict.fromkeys(outgoing, _Color.WHITE)

    for start in outgoing:
        if color[start] is not _Color.WHITE:
            continue

        color[start] = _Color.GRAY
        stack = [_Frame(start, iter(outgoing[start]))]

        while stack:
            frame = stack[-1]
            for neighbor in frame.neighbors:
                if color[neighbor] is _Color.WHITE:
                    color[neighbor] = _Color.GRAY
                    stack.append(_Frame(neighbor, iter(outgoing[neighbor])))
                    break
                if color[neighbor] is _Color.GRAY:
                    frame.closing.append(neighbor)
            else:
                stack.pop()
                if frame.closing:
                    for target in frame.closing:
                        logger.debug(
                            "Removing edge: %s -> %s.",
                            frame.node.to_coordinates(),
                            target.to_coordinates(),
                        )
                    outgoing[frame.node] = tuple(
                        target
                        for target in outgoing[frame.node]
                        if target not in frame.closing
                    )
                color[frame.node] = _Color.BLACK

    return DependencyGraph(outgoing)


class _TarjanState(Generic[N]):
    """Mutable state container for Tarjan's SCC algorithm."""

    def __init__(self, graph: Mapping[N, Iterable[N]]) -> None:
        self.adjacency: dict[N, tuple[N, ...]] = {
            node: tuple(targets) for node, targets in graph.items()
        }
        self.indices: dict[N, int] = {}
        self.low_link: dict[N, int] = {}
        self.on_stack: set[N] = set()
        self.stack: list[N] = []
        self.sccs: list[list[N]] = []

    def neighbors(self, node: N) -> tuple[N, ...]:
        return self.adjacency.get(node, ())

    def visit(self, node: N) -> Iterator[N]:
        self.indices[node] = self.low_link[node] = len(self.indices)
        self.stack.append(node)
        self.on_stack.add(node)
        return iter(self.neighbors(node))


def _extract_scc(state: _TarjanState[N], root: N) -> list[N]:
    """Extract a strongly connected component from the stack."""
    scc: list[N] = []
    while state.stack:
        w = state.stack.pop()
        state.on_stack.remove(w)
        scc.append(w)
        if w == root:
            break
    if root not in scc:
        msg = (
            f"Tarjan algorithm invariant violated: root node {root!r} "
            "not found in stack during SCC extraction."
        )
        raise RuntimeError(msg)
    return scc


def _strongconnect(start: N, state: _TarjanState[N]) -> None:
    """Run Tarjan's search from ``start`` with an explicit work stack."""
    work: list[tuple[N, Iterator[N]]] = [(start, state.visit(start))]

    while work:
        node, neighbors = work[-1]
        for neighbor in neighbors:
            if neighbor not in state.indices:
                work.append((neighbor, state.visit(neighbor)))
                break
            if neighbor in state.on_stack:
                state.low_link[node] = min(
                    state.low_link[node], state.indices[neighbor]
                )
        else:
            work.pop()
            if work:
                parent = work[-1][0]
                state.low_link[parent] = min(
                    state.low_link[parent], state.low_link[node]
                )
            if state.low_link[node] == state.indices[node]:
                scc = _extract_scc(state, node)
                if len(scc) > 1 or node in state.neighbors(node):
                    state.sccs.append(scc)


def find_cycles(graph: Mapping[N, Iterable[N]]) -> list[list[N]]:
    """Find cycles in a directed graph using Tarjan's algorithm.

    Args:
        graph: Mapping from each node to the nodes it points at

    Returns:
        List of strongly connected components that contain a cycle
    """
    state: _TarjanState[N] = _TarjanState(graph)

    for node in state.adjacency:
        if node not in state.indices:
            _strongconnect(node, state)

    return state.sccs


__all__ = [
    "break_cycles",
    "find_cycles",
]
