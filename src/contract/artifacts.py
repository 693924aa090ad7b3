"""Artifact contract definitions.

This module defines the stable filenames and formats of written artifacts.
"""

from __future__ import annotations

from dataclasses import dataclass

# Artifact schema version.
ARTIFACT_SCHEMA_VERSION = 1

# Artifact filename constants (stable contract identifiers).
PROJECTS_JSON = "projects.json"
PACKAGES_JSONL = "packages.jsonl"
DEPS_EDGELIST = "deps.edgelist"

# Separator between source and target coordinates in the edgelist.
EDGE_SEPARATOR = " -> "


@dataclass(frozen=True)
class ArtifactSpec:
    """Specification for a contract artifact."""

    filename: str
    format: str
    required_fields_note: str


ARTIFACT_SPECS: dict[str, ArtifactSpec] = {
    "projects": ArtifactSpec(
        filename=PROJECTS_JSON,
        format="json",
        required_fields_note="List of ProjectRecord fields required by contract.",
    ),
    "packages": ArtifactSpec(
        filename=PACKAGES_JSONL,
        format="jsonl",
        required_fields_note="PackageRecord fields required by contract.",
    ),
    "deps_edgelist": ArtifactSpec(
        filename=DEPS_EDGELIST,
        format="edgelist",
        required_fields_note="Acyclic dependency edge pairs (source, target).",
    ),
}
