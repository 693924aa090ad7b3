"""Identifier models for modules in a dependency graph.

This module contains the identity of a module as it appears in graph nodes,
package references and written artifacts.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

# Kind of the main module under analysis.
MAIN_MODULE_KIND = "GoMod"

# Kind of every ordinary dependency module.
DEPENDENCY_KIND = "Go"


class ModuleIdentifier(BaseModel):
    """Identity of a single module.

    Two identifiers are equal iff all fields match. The project identifier is
    the only identifier in a graph with an empty version.
    """

    model_config = ConfigDict(frozen=True)

    kind: str
    namespace: str = ""
    name: str
    version: str = ""

    def sort_key(self) -> tuple[str, str, str, str]:
        """Ordering used for stable output: namespace, name, version, kind."""
        return (self.namespace, self.name, self.version, self.kind)

    def to_coordinates(self) -> str:
        """Render as ``kind:namespace:name:version`` coordinates.

        >>> ModuleIdentifier(kind="Go", name="example.com/a", version="v1.0.0").to_coordinates()
        'Go::example.com/a:v1.0.0'
        """
        return f"{self.kind}:{self.namespace}:{self.name}:{self.version}"


__all__ = ["DEPENDENCY_KIND", "MAIN_MODULE_KIND", "ModuleIdentifier"]
