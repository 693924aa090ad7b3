"""Dependency tree models.

This module contains models for the rooted dependency forests of a project,
grouped into named scopes.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from artifacts.models.artifacts.identifiers import ModuleIdentifier  # noqa: TC001


class PackageLinkage(str, Enum):
    """How a dependency is incorporated into the project."""

    PROJECT_STATIC = "PROJECT_STATIC"


class PackageReference(BaseModel):
    """A node of a dependency tree.

    Children are ordered by identifier and owned by this node only.
    """

    model_config = ConfigDict(frozen=True)

    id: ModuleIdentifier
    linkage: PackageLinkage = PackageLinkage.PROJECT_STATIC
    dependencies: tuple[PackageReference, ...] = Field(default_factory=tuple)

    def iter_ids(self) -> list[ModuleIdentifier]:
        """Return the identifiers of this node and all descendants, depth first."""
        ids = [self.id]
        for child in self.dependencies:
            ids.extend(child.iter_ids())
        return ids


class Scope(BaseModel):
    """A named dependency forest of a project."""

    model_config = ConfigDict(frozen=True)

    name: str
    dependencies: tuple[PackageReference, ...] = Field(default_factory=tuple)

    def module_ids(self) -> set[ModuleIdentifier]:
        """Return every identifier referenced anywhere in this scope."""
        return {
            module_id for root in self.dependencies for module_id in root.iter_ids()
        }


__all__ = ["PackageLinkage", "PackageReference", "Scope"]
