from __future__ import annotations

import shutil
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Sequence

FIXTURES_DIR = Path(__file__).parent / "fixtures"
TOOL_OUTPUT_DIR = FIXTURES_DIR / "tool_output"
MINI_MODULE_DIR = FIXTURES_DIR / "mini_module"


def _split_why_sections(text: str) -> dict[str, str]:
    sections: dict[str, str] = {}
    current: str | None = None
    for line in text.splitlines(keepends=True):
        if line.startswith("# "):
            current = line[2:].strip()
            sections[current] = line
        elif current is not None:
            sections[current] += line
    return sections


class CannedModuleTool:
    """Module tool answering from recorded outputs of the mini module."""

    def __init__(self, output_dir: Path = TOOL_OUTPUT_DIR) -> None:
        self.output_dir = output_dir
        self.why_calls: list[list[str]] = []
        self.calls: list[str] = []

    def _read(self, name: str) -> str:
        return (self.output_dir / name).read_text(encoding="utf-8")

    def list_modules(self) -> str:
        self.calls.append("list_modules")
        return self._read("list_modules.json")

    def mod_graph(self) -> str:
        self.calls.append("mod_graph")
        return self._read("mod_graph.txt")

    def mod_why(self, module_names: Sequence[str]) -> str:
        self.calls.append("mod_why")
        self.why_calls.append(list(module_names))
        sections = _split_why_sections(self._read("mod_why.txt"))
        return "".join(
            sections.get(
                name, f"# {name}\n(main module does not need module {name})\n\n"
            )
            for name in module_names
        )

    def list_deps(self) -> str:
        self.calls.append("list_deps")
        return self._read("list_deps.json")


@pytest.fixture
def canned_tool() -> CannedModuleTool:
    return CannedModuleTool()


@pytest.fixture
def mini_module(tmp_path: Path) -> Path:
    """Copy of the mini module fixture; returns the repository root."""
    repo_root = tmp_path / "repo"
    shutil.copytree(MINI_MODULE_DIR, repo_root)
    return repo_root
