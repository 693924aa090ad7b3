"""Transitive dependencies of the main module's packages."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from gomod.metadata import ModuleInfo
from utils import iter_json_objects


class DepInfo(BaseModel):
    """A package record; standard library packages carry no module."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    module: ModuleInfo | None = Field(default=None, alias="Module")


def parse_main_module_dependencies(output: str) -> set[str]:
    """Return the module paths of all packages the main module depends on.

    Test-only dependencies are not part of the listing, so the result is the
    set of modules needed to build the main module. Replaced modules
    contribute their replacement path too, since graph nodes carry that name.
    """
    names: set[str] = set()
    for record in iter_json_objects(output):
        if record is None:
            continue
        module = DepInfo.model_validate(record).module
        if module is None:
            continue
        names.add(module.path)
        if module.replace is not None:
            names.add(module.replace.path)
    return names


__all__ = ["DepInfo", "parse_main_module_dependencies"]
