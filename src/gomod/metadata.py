"""Module metadata as listed by the module tool.

The tool prints one JSON object per module known to the build. Replacement
directives are applied here, so later stages only see resolved modules.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from artifacts.models.artifacts.identifiers import (
    DEPENDENCY_KIND,
    MAIN_MODULE_KIND,
    ModuleIdentifier,
)
from errors import MetadataError
from utils import iter_json_objects, normalize_module_version

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


class ModuleInfo(BaseModel):
    """One module record; unknown fields are ignored."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    path: str = Field(alias="Path")
    version: str = Field(default="", alias="Version")
    replace: ModuleInfo | None = Field(default=None, alias="Replace")
    indirect: bool = Field(default=False, alias="Indirect")
    main: bool = Field(default=False, alias="Main")
    go_mod: str = Field(default="", alias="GoMod")

    def to_id(self) -> ModuleIdentifier:
        return ModuleIdentifier(
            kind=MAIN_MODULE_KIND if self.main else DEPENDENCY_KIND,
            namespace="",
            name=self.path,
            version=normalize_module_version(self.version),
        )


def parse_module_infos(output: str) -> list[ModuleInfo]:
    """Parse the concatenated JSON objects of a module listing."""
    return [ModuleInfo.model_validate(record) for record in iter_json_objects(output)]


def resolve_module_infos(module_infos: Iterable[ModuleInfo]) -> dict[str, ModuleInfo]:
    """Map module paths to resolved module records.

    A replaced module is stored under both its own path and the replacement
    path. The merged record is the replacement carrying the ``indirect`` flag
    of the original, because replacement records never set it.

    Raises:
        MetadataError: If not exactly one record is flagged as main.
    """
    records = list(module_infos)
    main_modules = [info.path for info in records if info.main]
    if len(main_modules) != 1:
        msg = (
            "Expected exactly one main module but got "
            f"{len(main_modules)}: {', '.join(main_modules) or 'none'}."
        )
        raise MetadataError(msg)

    resolved: dict[str, ModuleInfo] = {}
    for info in records:
        if info.replace is not None:
            replace = info.replace.model_copy(update={"indirect": info.indirect})
            resolved[info.path] = replace
            resolved[info.replace.path] = replace
        else:
            resolved[info.path] = info
    return resolved


def main_module(module_infos: Mapping[str, ModuleInfo]) -> ModuleInfo:
    """Return the main module of a resolved mapping."""
    for info in module_infos.values():
        if info.main:
            return info
    msg = "No module is flagged as main."
    raise MetadataError(msg)


def replaced_module_names(module_infos: Mapping[str, ModuleInfo]) -> dict[str, str]:
    """Map replacement module paths back to the names they replace."""
    return {
        info.path: name for name, info in module_infos.items() if name != info.path
    }


__all__ = [
    "ModuleInfo",
    "main_module",
    "parse_module_infos",
    "replaced_module_names",
    "resolve_module_infos",
]
