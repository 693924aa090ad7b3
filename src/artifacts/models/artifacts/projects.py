"""Project and package models for analysis results.

This module contains the records written for each analyzed module definition
file and for each resolved package.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from artifacts.models.artifacts.identifiers import ModuleIdentifier  # noqa: TC001
from artifacts.models.artifacts.scopes import Scope  # noqa: TC001


def _artifact_schema_version() -> int:
    from contract.artifacts import ARTIFACT_SCHEMA_VERSION

    return ARTIFACT_SCHEMA_VERSION


class PackageRecord(BaseModel):
    """A resolved dependency module."""

    schema_version: int = Field(default_factory=_artifact_schema_version)
    id: ModuleIdentifier
    source_artifact_url: str = ""


class ProjectRecord(BaseModel):
    """Dependency scopes of one main module."""

    schema_version: int = Field(default_factory=_artifact_schema_version)
    id: ModuleIdentifier
    definition_file_path: str
    scopes: list[Scope] = Field(default_factory=list)


class ProjectAnalysisResult(BaseModel):
    """Everything produced by analyzing a single definition file."""

    project: ProjectRecord
    packages: list[PackageRecord] = Field(default_factory=list)
    edges: list[tuple[ModuleIdentifier, ModuleIdentifier]] = Field(
        default_factory=list,
        description="Edges of the final acyclic graph",
    )


__all__ = ["PackageRecord", "ProjectAnalysisResult", "ProjectRecord"]
