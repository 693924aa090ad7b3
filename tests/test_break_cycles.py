from __future__ import annotations

from artifacts.models.artifacts.identifiers import ModuleIdentifier
from graph.algos import break_cycles, find_cycles
from graph.model import DependencyGraph


def _id(name: str) -> ModuleIdentifier:
    return ModuleIdentifier(kind="Go", name=name, version="v1.0.0")


A = _id("a")
B = _id("b")
C = _id("c")
D = _id("d")


def _as_mapping(
    graph: DependencyGraph,
) -> dict[ModuleIdentifier, list[ModuleIdentifier]]:
    return {node: list(graph.dependencies(node)) for node in graph.nodes()}


def _assert_acyclic(graph: DependencyGraph) -> None:
    assert find_cycles(_as_mapping(graph)) == []


def test_two_node_cycle_loses_exactly_one_edge() -> None:
    graph = DependencyGraph({A: [B], B: [A]})

    result = break_cycles(graph)

    assert result.nodes() == (A, B)
    assert result.edge_count() == 1
    assert result.dependencies(A) == (B,)
    assert result.dependencies(B) == ()
    _assert_acyclic(result)


def test_self_loop_is_removed() -> None:
    graph = DependencyGraph({A: [A, B]})

    result = break_cycles(graph)

    assert result.dependencies(A) == (B,)
    _assert_acyclic(result)


def test_acyclic_graph_is_unchanged() -> None:
    graph = DependencyGraph({A: [B, C], B: [D], C: [D]})

    assert break_cycles(graph) == graph


def test_removed_edge_depends_on_node_order() -> None:
    forward = break_cycles(DependencyGraph({A: [B], B: [C], C: [A]}))
    rotated = break_cycles(DependencyGraph({B: [C], C: [A], A: [B]}))

    assert set(forward.edges()) == {(A, B), (B, C)}
    assert set(rotated.edges()) == {(B, C), (C, A)}


def test_nested_cycles_keep_node_set_and_become_acyclic() -> None:
    graph = DependencyGraph(
        {
            A: [B, C],
            B: [C, A],
            C: [D, B],
            D: [A, D],
        }
    )

    result = break_cycles(graph)

    assert result.nodes() == graph.nodes()
    assert set(result.edges()) <= set(graph.edges())
    _assert_acyclic(result)


def test_break_cycles_is_deterministic() -> None:
    graph = DependencyGraph({A: [B, C], B: [C, A], C: [A]})

    assert list(break_cycles(graph).edges()) == list(break_cycles(graph).edges())


def test_break_cycles_does_not_modify_input() -> None:
    graph = DependencyGraph({A: [B], B: [A]})

    break_cycles(graph)

    assert graph.dependencies(B) == (A,)


def test_break_cycles_handles_long_chains_without_recursion() -> None:
    nodes = [_id(f"m{index:05d}") for index in range(5000)]
    edges = {node: [nodes[index + 1]] for index, node in enumerate(nodes[:-1])}
    edges[nodes[-1]] = [nodes[0]]

    result = break_cycles(DependencyGraph(edges))

    assert result.edge_count() == len(nodes) - 1
    assert result.dependencies(nodes[-1]) == ()


def test_find_cycles_reports_strongly_connected_components() -> None:
    cycles = find_cycles({"a": ["b"], "b": ["a"], "c": ["c"], "d": []})

    assert sorted(sorted(cycle) for cycle in cycles) == [["a", "b"], ["c"]]


def test_find_cycles_handles_long_chains_without_recursion() -> None:
    chain = {index: [index + 1] for index in range(5000)}
    chain[5000] = [0]
    chain[5001] = [5000]

    cycles = find_cycles(chain)

    assert len(cycles) == 1
    assert sorted(cycles[0]) == list(range(5001))


def test_find_cycles_separates_components_sharing_an_edge() -> None:
    graph = {"a": ["b"], "b": ["a", "c"], "c": ["d"], "d": ["c"], "e": ["a"]}

    cycles = find_cycles(graph)

    assert [sorted(cycle) for cycle in cycles] == [["c", "d"], ["a", "b"]]


def test_find_cycles_accepts_targets_without_entries() -> None:
    assert find_cycles({"a": ["b"], "b": ["c"]}) == []
