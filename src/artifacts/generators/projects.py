"""Project scopes generator for modgraph artifacts."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from artifacts.utils import _to_dict, _write_json
from contract.artifacts import PROJECTS_JSON

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from artifacts.models.artifacts.projects import ProjectAnalysisResult


class ProjectsGenerator:
    """Generator for projects.json."""

    @property
    def name(self) -> str:
        """Generator name for logging and identification."""
        return "projects"

    def generate(
        self,
        results: Sequence[ProjectAnalysisResult],
        out_dir: Path,
    ) -> tuple[list[dict[str, Any]], dict[str, Any]]:
        """Write the projects sorted by definition file path."""
        out_dir.mkdir(parents=True, exist_ok=True)

        projects = sorted(
            (result.project for result in results),
            key=lambda project: project.definition_file_path,
        )
        records: list[dict[str, Any]] = [_to_dict(p) for p in projects]  # type: ignore[misc]
        _write_json(out_dir / PROJECTS_JSON, records)

        scope_count = sum(len(project.scopes) for project in projects)
        return records, {"project_count": len(projects), "scope_count": scope_count}


__all__ = ["PROJECTS_JSON", "ProjectsGenerator"]
