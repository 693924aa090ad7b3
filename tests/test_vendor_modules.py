from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from artifacts.models.artifacts.identifiers import ModuleIdentifier
from gomod.vendor import filter_vendor_graph, parse_why_output, resolve_vendor_modules
from graph.model import DependencyGraph

if TYPE_CHECKING:
    from collections.abc import Sequence

APP = ModuleIdentifier(kind="GoMod", name="example.com/app")


def _id(name: str) -> ModuleIdentifier:
    return ModuleIdentifier(kind="Go", name=name, version="v1.0.0")


class _RecordingWhy:
    def __init__(self, used: set[str]) -> None:
        self.used = used
        self.calls: list[list[str]] = []

    def __call__(self, module_names: Sequence[str]) -> str:
        self.calls.append(list(module_names))
        sections = []
        for name in module_names:
            if name in self.used:
                sections.append(f"# {name}\nexample.com/app\n{name}\n\n")
            else:
                sections.append(f"# {name}\n(main module does not need {name})\n\n")
        return "".join(sections)


def test_parse_why_output_sections() -> None:
    output = "# modA\nsome text\n(ignored)\n# modB\nusage\n"

    assert parse_why_output(output) == {"modA", "modB"}


def test_parse_why_output_skips_explanations_and_blank_lines() -> None:
    output = "# modA\n(main module does not need module modA)\n\n# modB\n\n"

    assert parse_why_output(output) == set()


def test_parse_why_output_ignores_lines_before_first_section() -> None:
    assert parse_why_output("stray line\n# modA\n") == set()


def test_parse_why_output_empty() -> None:
    assert parse_why_output("") == set()


def test_resolve_vendor_modules_batches_queries() -> None:
    deps = [_id(f"example.com/m{index}") for index in range(5)]
    graph = DependencyGraph({APP: deps})
    why = _RecordingWhy({"example.com/m1", "example.com/m3"})

    vendor = resolve_vendor_modules(graph, {}, why, batch_size=2)

    assert [len(call) for call in why.calls] == [2, 2, 2]
    assert [name for call in why.calls for name in call] == [
        node.name for node in graph.nodes()
    ]
    assert vendor == {APP, deps[1], deps[3]}


def test_resolve_vendor_modules_always_keeps_project() -> None:
    graph = DependencyGraph({APP: [_id("example.com/a")]})

    assert resolve_vendor_modules(graph, {}, _RecordingWhy(set())) == {APP}


def test_resolve_vendor_modules_queries_original_names_of_replacements() -> None:
    replacement = _id("github.com/new/name")
    graph = DependencyGraph({APP: [replacement]})
    why = _RecordingWhy({"github.com/old/name"})

    vendor = resolve_vendor_modules(
        graph, {"github.com/new/name": "github.com/old/name"}, why
    )

    assert why.calls == [["example.com/app", "github.com/old/name"]]
    assert vendor == {APP, replacement}


def test_resolve_vendor_modules_rejects_invalid_batch_size() -> None:
    graph = DependencyGraph({APP: []})

    with pytest.raises(ValueError, match="positive"):
        resolve_vendor_modules(graph, {}, _RecordingWhy(set()), batch_size=0)


def test_filter_vendor_graph_returns_subgraph() -> None:
    used, unused = _id("example.com/used"), _id("example.com/unused")
    graph = DependencyGraph({APP: [used], used: [unused]})

    filtered = filter_vendor_graph(graph, {}, _RecordingWhy({"example.com/used"}))

    assert filtered.nodes() == (APP, used)
    assert filtered.dependencies(used) == ()
    assert graph.dependencies(used) == (unused,)


def test_filter_vendor_graph_keeps_graph_when_everything_is_used() -> None:
    used = _id("example.com/used")
    graph = DependencyGraph({APP: [used]})

    assert filter_vendor_graph(graph, {}, _RecordingWhy({"example.com/used"})) is graph
