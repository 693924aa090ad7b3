"""Model namespace for modgraph artifact schemas."""

from artifacts.models.artifacts.identifiers import (
    DEPENDENCY_KIND,
    MAIN_MODULE_KIND,
    ModuleIdentifier,
)
from artifacts.models.artifacts.projects import (
    PackageRecord,
    ProjectAnalysisResult,
    ProjectRecord,
)
from artifacts.models.artifacts.scopes import PackageLinkage, PackageReference, Scope

__all__ = [
    "DEPENDENCY_KIND",
    "MAIN_MODULE_KIND",
    "ModuleIdentifier",
    "PackageLinkage",
    "PackageRecord",
    "PackageReference",
    "ProjectAnalysisResult",
    "ProjectRecord",
    "Scope",
]
