"""Artifact generators for modgraph."""

from artifacts.generators.deps import DepsGenerator
from artifacts.generators.packages import PackagesGenerator
from artifacts.generators.projects import ProjectsGenerator

__all__ = [
    "DepsGenerator",
    "PackagesGenerator",
    "ProjectsGenerator",
]
