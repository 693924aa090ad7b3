"""Dependency graph model and algorithms."""

from graph.algos import break_cycles, find_cycles
from graph.forest import to_package_reference_forest
from graph.model import DependencyGraph, GraphBuilder
from graph.scopes import MAIN_SCOPE, VENDOR_SCOPE, partition_scopes

__all__ = [
    "MAIN_SCOPE",
    "VENDOR_SCOPE",
    "DependencyGraph",
    "GraphBuilder",
    "break_cycles",
    "find_cycles",
    "partition_scopes",
    "to_package_reference_forest",
]
