"""Artifact models exposed at the contract boundary."""

from artifacts.models.artifacts.identifiers import ModuleIdentifier
from artifacts.models.artifacts.projects import PackageRecord, ProjectRecord
from artifacts.models.artifacts.scopes import PackageReference, Scope

__all__ = [
    "ModuleIdentifier",
    "PackageRecord",
    "PackageReference",
    "ProjectRecord",
    "Scope",
]
