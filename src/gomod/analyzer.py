"""Dependency analysis of a single Go module definition file."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from artifacts.models.artifacts.projects import (
    PackageRecord,
    ProjectAnalysisResult,
    ProjectRecord,
)
from gomod.deps import parse_main_module_dependencies
from gomod.edges import build_module_graph
from gomod.metadata import (
    ModuleInfo,
    parse_module_infos,
    replaced_module_names,
    resolve_module_infos,
)
from gomod.stash import stash_directories
from gomod.vendor import filter_vendor_graph
from graph.algos import break_cycles
from graph.scopes import partition_scopes
from rules.config import ModGraphConfig, resolve_go_proxy

if TYPE_CHECKING:
    from pathlib import Path

    from gomod.command import ModuleTool

logger = logging.getLogger(__name__)

DEFINITION_FILENAME = "go.mod"
VENDOR_DIRNAME = "vendor"


def source_artifact_url(info: ModuleInfo, proxy: str) -> str:
    """Return the proxy download URL of a module, empty for unversioned ones.

    >>> source_artifact_url(ModuleInfo(path="example.com/a", version="v1.0.0"), "https://proxy.golang.org")
    'https://proxy.golang.org/example.com/a/@v/v1.0.0.zip'
    """
    if not info.version:
        return ""
    return f"{proxy}/{info.path}/@v/{info.version}.zip"


def analyze_project(
    definition_file: Path,
    tool: ModuleTool,
    *,
    root: Path,
    config: ModGraphConfig | None = None,
) -> ProjectAnalysisResult:
    """Analyze the module defined by ``definition_file``.

    The project's vendor directory is moved away while the tool runs, so the
    tool resolves modules from the module graph instead of vendored copies.

    Args:
        definition_file: Path of the ``go.mod`` file
        tool: Runs the module tool queries inside the project directory
        root: Analysis root; the definition file path is recorded relative to it
        config: Optional configuration; defaults apply when omitted

    Returns:
        The project with its scopes, the resolved packages and the edges of
        the final acyclic graph.
    """
    if config is None:
        config = ModGraphConfig()

    project_dir = definition_file.parent
    definition_file_path = definition_file.relative_to(root).as_posix()
    logger.info("Analyzing %s", definition_file_path)

    with stash_directories(project_dir / VENDOR_DIRNAME):
        module_infos = resolve_module_infos(parse_module_infos(tool.list_modules()))
        graph = build_module_graph(tool.mod_graph().splitlines(), module_infos)
        graph = filter_vendor_graph(
            graph,
            replaced_module_names(module_infos),
            tool.mod_why,
            batch_size=config.go.why_batch_size,
        )
        graph = break_cycles(graph)
        project_id = graph.project_id()
        main_module_names = parse_main_module_dependencies(tool.list_deps())

    proxy = resolve_go_proxy(config.go)
    packages = sorted(
        (
            PackageRecord(
                id=node,
                source_artifact_url=source_artifact_url(
                    module_infos[node.name], proxy
                ),
            )
            for node in graph.nodes()
            if node != project_id
        ),
        key=lambda package: package.id.sort_key(),
    )

    scopes = partition_scopes(
        graph,
        project_id,
        main_module_names,
        main_scope=config.scopes.main,
        vendor_scope=config.scopes.vendor,
        max_depth=config.max_tree_depth,
    )

    logger.info(
        "Analyzed %s: %d packages, %d edges, scopes %s",
        definition_file_path,
        len(packages),
        graph.edge_count(),
        ", ".join(scope.name for scope in scopes),
    )

    return ProjectAnalysisResult(
        project=ProjectRecord(
            id=project_id,
            definition_file_path=definition_file_path,
            scopes=scopes,
        ),
        packages=packages,
        edges=sorted(
            graph.edges(),
            key=lambda edge: (edge[0].sort_key(), edge[1].sort_key()),
        ),
    )


__all__ = [
    "DEFINITION_FILENAME",
    "VENDOR_DIRNAME",
    "analyze_project",
    "source_artifact_url",
]
