"""Stable artifact contract surface for modgraph.

Treat these exports as the authoritative description of what downstream
license and compliance tooling may rely on.
"""

from contract.artifacts import (
    ARTIFACT_SCHEMA_VERSION,
    ARTIFACT_SPECS,
    DEPS_EDGELIST,
    EDGE_SEPARATOR,
    PACKAGES_JSONL,
    PROJECTS_JSON,
    ArtifactSpec,
)


def __getattr__(name: str) -> object:
    if name in {
        "ModuleIdentifier",
        "PackageRecord",
        "PackageReference",
        "ProjectRecord",
        "Scope",
    }:
        from contract import models

        return getattr(models, name)

    if name in {"ValidationMessage", "ValidationResult", "validate_artifacts"}:
        from contract import validation

        return getattr(validation, name)

    msg = f"module 'contract' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "ARTIFACT_SCHEMA_VERSION",
    "ARTIFACT_SPECS",
    "DEPS_EDGELIST",
    "EDGE_SEPARATOR",
    "PACKAGES_JSONL",
    "PROJECTS_JSON",
    "ArtifactSpec",
    "ModuleIdentifier",
    "PackageRecord",
    "PackageReference",
    "ProjectRecord",
    "Scope",
    "ValidationMessage",
    "ValidationResult",
    "validate_artifacts",
]
