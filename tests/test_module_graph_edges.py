from __future__ import annotations

import logging

import pytest

from artifacts.models.artifacts.identifiers import ModuleIdentifier
from errors import FormatError, MetadataError
from gomod.edges import build_module_graph
from gomod.metadata import ModuleInfo, resolve_module_infos

APP = ModuleIdentifier(kind="GoMod", name="example.com/app")
LIB = ModuleIdentifier(kind="Go", name="github.com/a/lib", version="v1.2.0")
UTIL = ModuleIdentifier(kind="Go", name="github.com/b/util", version="v0.3.0")
NEW = ModuleIdentifier(kind="Go", name="github.com/new/name", version="v1.1.0")


def _module_infos() -> dict[str, ModuleInfo]:
    return resolve_module_infos(
        [
            ModuleInfo(path="example.com/app", main=True),
            ModuleInfo(path="github.com/a/lib", version="v1.2.0"),
            ModuleInfo(path="github.com/b/util", version="v0.3.0", indirect=True),
            ModuleInfo(
                path="github.com/old/name",
                version="v1.0.0",
                replace=ModuleInfo(path="github.com/new/name", version="v1.1.0"),
            ),
        ]
    )


def test_builds_edges_between_resolved_identifiers() -> None:
    lines = [
        "example.com/app github.com/a/lib@v1.2.0",
        "github.com/a/lib@v1.2.0 github.com/b/util@v0.3.0",
    ]

    graph = build_module_graph(lines, _module_infos())

    assert graph.nodes() == (APP, LIB, UTIL)
    assert graph.dependencies(APP) == (LIB,)
    assert graph.dependencies(LIB) == (UTIL,)


def test_blank_lines_are_ignored() -> None:
    lines = ["", "example.com/app github.com/a/lib@v1.2.0", "   ", ""]

    graph = build_module_graph(lines, _module_infos())

    assert graph.edge_count() == 1


def test_project_node_exists_without_edges() -> None:
    graph = build_module_graph([], _module_infos())

    assert graph.nodes() == (APP,)
    assert graph.project_id() == APP


def test_indirect_edge_from_main_module_is_skipped(
    caplog: pytest.LogCaptureFixture,
) -> None:
    lines = ["example.com/app github.com/b/util@v0.3.0"]

    with caplog.at_level(logging.DEBUG, logger="gomod.edges"):
        graph = build_module_graph(lines, _module_infos())

    assert graph.nodes() == (APP,)
    assert "indirect dependency" in caplog.text


def test_indirect_module_is_kept_below_direct_dependencies() -> None:
    lines = [
        "example.com/app github.com/b/util@v0.3.0",
        "github.com/a/lib@v1.2.0 github.com/b/util@v0.3.0",
    ]

    graph = build_module_graph(lines, _module_infos())

    assert graph.dependencies(APP) == ()
    assert graph.dependencies(LIB) == (UTIL,)


def test_replaced_module_resolves_to_replacement() -> None:
    graph = build_module_graph(
        ["example.com/app github.com/old/name@v1.0.0"], _module_infos()
    )

    assert graph.dependencies(APP) == (NEW,)


def test_repeated_lines_produce_single_edge() -> None:
    line = "example.com/app github.com/a/lib@v1.2.0"

    graph = build_module_graph([line, line], _module_infos())

    assert graph.dependencies(APP) == (LIB,)


@pytest.mark.parametrize(
    "line",
    [
        "example.com/app",
        "example.com/app github.com/a/lib@v1.2.0 github.com/b/util@v0.3.0",
    ],
)
def test_lines_without_two_entries_are_rejected(line: str) -> None:
    with pytest.raises(FormatError, match="exactly two entries"):
        build_module_graph([line], _module_infos())


def test_unknown_module_is_a_metadata_error() -> None:
    with pytest.raises(MetadataError, match="github.com/unknown/mod"):
        build_module_graph(
            ["example.com/app github.com/unknown/mod@v1.0.0"], _module_infos()
        )
