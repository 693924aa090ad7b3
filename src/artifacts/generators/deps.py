"""Dependency edgelist generator for modgraph artifacts."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from contract.artifacts import DEPS_EDGELIST, EDGE_SEPARATOR

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from artifacts.models.artifacts.projects import ProjectAnalysisResult


class DepsGenerator:
    """Generator for the edgelist of all final dependency graphs."""

    @property
    def name(self) -> str:
        """Generator name for logging and identification."""
        return "deps"

    def generate(
        self,
        results: Sequence[ProjectAnalysisResult],
        out_dir: Path,
    ) -> tuple[list[dict[str, Any]], dict[str, Any]]:
        """Write deps.edgelist with one sorted, unique line per edge."""
        out_dir.mkdir(parents=True, exist_ok=True)

        unique_edges = sorted(
            {
                (source.to_coordinates(), target.to_coordinates())
                for result in results
                for source, target in result.edges
            }
        )

        edgelist_path = out_dir / DEPS_EDGELIST
        with edgelist_path.open("w", encoding="utf-8") as f:
            for source, target in unique_edges:
                f.write(f"{source}{EDGE_SEPARATOR}{target}\n")

        nodes = {node for edge in unique_edges for node in edge}
        return [], {"edge_count": len(unique_edges), "node_count": len(nodes)}


__all__ = ["DEPS_EDGELIST", "DepsGenerator"]
