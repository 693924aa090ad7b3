"""Adapter for the external module tool."""

from __future__ import annotations

import logging
import os
import subprocess
from typing import TYPE_CHECKING, Protocol

from errors import CommandError

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_EXECUTABLE = "go"


class ModuleTool(Protocol):
    """The queries the analysis needs from the module tool."""

    def list_modules(self) -> str: ...

    def mod_graph(self) -> str: ...

    def mod_why(self, module_names: Sequence[str]) -> str: ...

    def list_deps(self) -> str: ...


class GoCommand:
    """Runs ``go`` subcommands inside a project directory."""

    def __init__(
        self,
        project_dir: Path,
        *,
        executable: str = DEFAULT_EXECUTABLE,
        environment: Mapping[str, str] | None = None,
    ) -> None:
        self.project_dir = project_dir
        self.executable = executable
        self.environment = dict(environment or {})

    def run(self, *args: str) -> str:
        """Run the tool and return its standard output.

        Raises:
            CommandError: If the tool exits with a non-zero status.
        """
        argv = [self.executable, *args]
        logger.debug("Running %s in %s", " ".join(argv), self.project_dir)
        completed = subprocess.run(
            argv,
            cwd=self.project_dir,
            env={**os.environ, **self.environment},
            capture_output=True,
            text=True,
            check=False,
        )
        if completed.returncode != 0:
            raise CommandError(argv, completed.returncode, completed.stderr)
        return completed.stdout

    def list_modules(self) -> str:
        return self.run("list", "-m", "-json", "-buildvcs=false", "all")

    def mod_graph(self) -> str:
        return self.run("mod", "graph")

    def mod_why(self, module_names: Sequence[str]) -> str:
        # -m makes the tool answer for module names, which is what graph nodes use.
        return self.run("mod", "why", "-m", "-vendor", *module_names)

    def list_deps(self) -> str:
        return self.run("list", "-deps", "-json=Module", "-buildvcs=false", "./...")


def tool_environment(gopath: Path) -> dict[str, str]:
    """Environment for tool runs: direct module downloads into ``gopath``."""
    return {"GOPROXY": "direct", "GOPATH": str(gopath)}


__all__ = ["DEFAULT_EXECUTABLE", "GoCommand", "ModuleTool", "tool_environment"]
