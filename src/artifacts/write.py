from __future__ import annotations

import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

from artifacts.generators import DepsGenerator, PackagesGenerator, ProjectsGenerator
from artifacts.utils import _get_output_dir_name
from contract.artifacts import DEPS_EDGELIST, PACKAGES_JSONL, PROJECTS_JSON
from gomod.analyzer import analyze_project
from gomod.command import GoCommand, tool_environment
from rules.config import load_config, resolve_output_dir
from scan.files import find_definition_files

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from gomod.command import ModuleTool
    from rules.config import GoConfig, ModGraphConfig


@contextmanager
def _gopath(go_config: GoConfig) -> Iterator[Path]:
    if go_config.gopath:
        yield Path(go_config.gopath).expanduser().resolve()
        return
    with tempfile.TemporaryDirectory(
        prefix="modgraph-gopath-", ignore_cleanup_errors=True
    ) as temp_dir:
        yield Path(temp_dir)


def _go_command_factory(
    go_config: GoConfig, gopath: Path
) -> Callable[[Path], ModuleTool]:
    environment = tool_environment(gopath)

    def factory(project_dir: Path) -> ModuleTool:
        return GoCommand(
            project_dir, executable=go_config.executable, environment=environment
        )

    return factory


def generate_all_artifacts(
    *,
    root: Path,
    out_dir: Path | None = None,
    config: ModGraphConfig | None = None,
    tool_factory: Callable[[Path], ModuleTool] | None = None,
) -> dict[str, object]:
    """Analyze every module definition file under a root and write artifacts.

    Args:
        root: Root directory of the repository to analyze
        out_dir: Optional output directory for generated artifacts
        config: Optional configuration; loaded from the root when omitted
        tool_factory: Optional factory returning the module tool for a
            project directory; defaults to running the go executable

    Returns:
        Dictionary with counts and list of generated artifact paths.
    """
    if config is None:
        config = load_config(root)

    if out_dir is None:
        out_dir = resolve_output_dir(root, config.output_dir)

    definition_files = find_definition_files(
        root,
        output_dir=_get_output_dir_name(out_dir, root),
        include_patterns=config.include,
        exclude_patterns=config.exclude,
        nested_gitignore=config.nested_gitignore,
    )

    with _gopath(config.go) as gopath:
        factory = tool_factory or _go_command_factory(config.go, gopath)
        results = [
            analyze_project(
                definition_file,
                factory(definition_file.parent),
                root=root,
                config=config,
            )
            for definition_file in definition_files
        ]

    _, projects_summary = ProjectsGenerator().generate(results, out_dir)
    _, packages_summary = PackagesGenerator().generate(results, out_dir)
    _, deps_summary = DepsGenerator().generate(results, out_dir)

    artifacts_list = [PROJECTS_JSON, PACKAGES_JSONL, DEPS_EDGELIST]

    return {
        "project_count": projects_summary["project_count"],
        "scope_count": projects_summary["scope_count"],
        "package_count": packages_summary["package_count"],
        "edge_count": deps_summary["edge_count"],
        "node_count": deps_summary["node_count"],
        "artifacts": [str(out_dir / name) for name in artifacts_list],
    }
