"""Go module graph ingestion."""

from gomod.command import GoCommand, ModuleTool
from gomod.deps import parse_main_module_dependencies
from gomod.edges import build_module_graph
from gomod.metadata import ModuleInfo, parse_module_infos, resolve_module_infos
from gomod.stash import stash_directories
from gomod.vendor import filter_vendor_graph, parse_why_output, resolve_vendor_modules

__all__ = [
    "GoCommand",
    "ModuleInfo",
    "ModuleTool",
    "build_module_graph",
    "filter_vendor_graph",
    "parse_main_module_dependencies",
    "parse_module_infos",
    "parse_why_output",
    "resolve_module_infos",
    "resolve_vendor_modules",
    "stash_directories",
]
