"""Resolved package set generator for modgraph artifacts."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from artifacts.utils import _to_dict, _write_jsonl
from contract.artifacts import PACKAGES_JSONL

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from artifacts.models.artifacts.projects import (
        PackageRecord,
        ProjectAnalysisResult,
    )


class PackagesGenerator:
    """Generator for packages.jsonl."""

    @property
    def name(self) -> str:
        """Generator name for logging and identification."""
        return "packages"

    def generate(
        self,
        results: Sequence[ProjectAnalysisResult],
        out_dir: Path,
    ) -> tuple[list[dict[str, Any]], dict[str, Any]]:
        """Write the packages of all projects, deduplicated by identifier."""
        out_dir.mkdir(parents=True, exist_ok=True)

        packages: dict[object, PackageRecord] = {}
        for result in results:
            for package in result.packages:
                packages.setdefault(package.id, package)

        records = sorted(packages.values(), key=lambda p: p.id.sort_key())
        _write_jsonl(out_dir / PACKAGES_JSONL, records)

        record_dicts: list[dict[str, Any]] = [
            _to_dict(record)  # type: ignore[misc]
            for record in records
        ]
        return record_dicts, {"package_count": len(records)}


__all__ = ["PACKAGES_JSONL", "PackagesGenerator"]
