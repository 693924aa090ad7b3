"""Validation helpers for modgraph artifacts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import orjson
from pydantic import ValidationError

from contract.artifacts import (
    ARTIFACT_SCHEMA_VERSION,
    ARTIFACT_SPECS,
    EDGE_SEPARATOR,
)
from contract.models import PackageRecord, ProjectRecord
from graph.algos import find_cycles

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


@dataclass(frozen=True)
class ValidationMessage:
    artifact: str
    path: Path
    message: str
    line: int | None = None

    def location(self) -> str:
        if self.line is None:
            return str(self.path)
        return f"{self.path}:{self.line}"

    def __str__(self) -> str:
        return f"{self.location()}: {self.message}"


@dataclass
class ValidationResult:
    errors: list[ValidationMessage] = field(default_factory=list)
    warnings: list[ValidationMessage] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class _ArtifactCheck:
    """Collects the findings for a single artifact file."""

    def __init__(
        self,
        artifact: str,
        path: Path,
        result: ValidationResult,
        *,
        strict_schema_version: bool,
    ) -> None:
        self.artifact = artifact
        self.path = path
        self.result = result
        self.strict_schema_version = strict_schema_version
        self._schema_issues: set[str] = set()

    def _message(self, message: str, line: int | None) -> ValidationMessage:
        return ValidationMessage(
            artifact=self.artifact, path=self.path, message=message, line=line
        )

    def error(self, message: str, line: int | None = None) -> None:
        self.result.errors.append(self._message(message, line))

    def warn(self, message: str, line: int | None = None) -> None:
        self.result.warnings.append(self._message(message, line))

    def read_text(self) -> str | None:
        try:
            return self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            self.error(f"Failed to read file: invalid UTF-8 ({exc}).")
        except OSError as exc:
            self.error(f"Failed to read file: {exc}.")
        return None

    def schema_version(
        self,
        data: object,
        record: PackageRecord | ProjectRecord,
        line: int | None = None,
    ) -> None:
        """Report a missing or foreign schema version once per file."""
        if not (isinstance(data, dict) and "schema_version" in data):
            if "missing" in self._schema_issues:
                return
            self._schema_issues.add("missing")
            message = (
                f"Missing schema_version; defaulted to {ARTIFACT_SCHEMA_VERSION}."
            )
            if self.strict_schema_version:
                self.error(message, line)
            else:
                self.warn(message, line)
        elif record.schema_version != ARTIFACT_SCHEMA_VERSION:
            if "mismatch" in self._schema_issues:
                return
            self._schema_issues.add("mismatch")
            self.error(
                "Schema version mismatch: "
                f"expected {ARTIFACT_SCHEMA_VERSION}, got {record.schema_version}.",
                line,
            )


def _check_projects(check: _ArtifactCheck) -> None:
    text = check.read_text()
    if text is None:
        return
    try:
        raw = orjson.loads(text)
    except orjson.JSONDecodeError as exc:
        check.error(f"Invalid JSON: {exc}.")
        return
    if not isinstance(raw, list):
        check.error("Expected JSON array for projects.json.")
        return

    seen_definitions: set[str] = set()
    for data in raw:
        try:
            project = ProjectRecord.model_validate(data)
        except ValidationError as exc:
            check.error(f"Schema validation failed: {exc}.")
            continue
        check.schema_version(data, project)

        if project.definition_file_path in seen_definitions:
            check.error(f"Duplicate project for '{project.definition_file_path}'.")
        seen_definitions.add(project.definition_file_path)

        scope_names = [scope.name for scope in project.scopes]
        if len(scope_names) != len(set(scope_names)):
            check.error(
                f"Duplicate scope names in project "
                f"'{project.definition_file_path}': {scope_names}."
            )
        for scope in project.scopes:
            if project.id in scope.module_ids():
                check.error(
                    f"Scope '{scope.name}' of project "
                    f"'{project.definition_file_path}' references the project itself."
                )


def _check_packages(check: _ArtifactCheck) -> None:
    text = check.read_text()
    if text is None:
        return

    first_seen: dict[str, int] = {}
    for line_number, raw_line in enumerate(text.splitlines(), 1):
        line = raw_line.strip()
        if not line:
            continue
        try:
            data = orjson.loads(line)
        except orjson.JSONDecodeError as exc:
            check.error(f"Invalid JSON: {exc}.", line_number)
            continue
        try:
            package = PackageRecord.model_validate(data)
        except ValidationError as exc:
            check.error(f"Schema validation failed: {exc}.", line_number)
            continue
        check.schema_version(data, package, line_number)

        coordinates = package.id.to_coordinates()
        if coordinates in first_seen:
            check.error(
                f"Duplicate package '{coordinates}' "
                f"(first seen on line {first_seen[coordinates]}).",
                line_number,
            )
            continue
        first_seen[coordinates] = line_number


def _check_edgelist(check: _ArtifactCheck) -> None:
    text = check.read_text()
    if text is None:
        return

    graph: dict[str, list[str]] = {}
    for line_number, raw_line in enumerate(text.splitlines(), 1):
        line = raw_line.strip()
        if not line:
            continue
        arrow = EDGE_SEPARATOR.strip()
        if arrow not in line:
            check.error(
                "Malformed edgelist line (expected 'source -> target').", line_number
            )
            continue
        source, target = (part.strip() for part in line.split(arrow, 1))
        if not source or not target:
            check.error(
                "Malformed edgelist line (empty source or target).", line_number
            )
            continue
        graph.setdefault(source, []).append(target)
        graph.setdefault(target, [])

    for cycle in find_cycles(graph):
        check.error(f"Dependency cycle: {' -> '.join(sorted(cycle))}.")


_CHECKERS: dict[str, Callable[[_ArtifactCheck], None]] = {
    "json": _check_projects,
    "jsonl": _check_packages,
    "edgelist": _check_edgelist,
}


def validate_artifacts(
    artifacts_dir: Path, *, strict_schema_version: bool = False
) -> ValidationResult:
    """Check the artifacts in a directory against the artifact contract.

    A record without ``schema_version`` is read as the current version and
    produces a warning, or an error when ``strict_schema_version`` is set.
    """
    result = ValidationResult()

    directory = _ArtifactCheck(
        "artifacts_dir", artifacts_dir, result, strict_schema_version=False
    )
    if not artifacts_dir.exists():
        directory.error("Artifacts directory does not exist.")
        return result
    if not artifacts_dir.is_dir():
        directory.error("Artifacts path is not a directory.")
        return result

    for artifact_name, spec in ARTIFACT_SPECS.items():
        check = _ArtifactCheck(
            artifact_name,
            artifacts_dir / spec.filename,
            result,
            strict_schema_version=strict_schema_version,
        )
        checker = _CHECKERS.get(spec.format)
        if checker is None:
            check.error(f"Unsupported artifact format: {spec.format}.")
        elif not check.path.exists():
            check.error("Required artifact file is missing.")
        else:
            checker(check)

    return result


__all__ = [
    "ValidationMessage",
    "ValidationResult",
    "validate_artifacts",
]
