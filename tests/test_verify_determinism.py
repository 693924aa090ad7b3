from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from artifacts.write import generate_all_artifacts
from verify.verify import DeterminismResult, first_difference, verify_determinism

if TYPE_CHECKING:
    from pathlib import Path

    from conftest import CannedModuleTool


def _regenerating(files: dict[str, str]) -> object:
    def fake_generate_all_artifacts(*, root: Path, out_dir: Path, **_: object) -> dict:
        for name, content in files.items():
            (out_dir / name).parent.mkdir(parents=True, exist_ok=True)
            (out_dir / name).write_text(content, encoding="utf-8")
        return {}

    return fake_generate_all_artifacts


def test_missing_artifacts_dir_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="Artifacts directory does not exist"):
        verify_determinism(root=tmp_path, artifacts_dir=tmp_path / "missing")


def test_file_as_artifacts_dir_is_rejected(tmp_path: Path) -> None:
    plain_file = tmp_path / "artifacts"
    plain_file.write_text("", encoding="utf-8")

    with pytest.raises(NotADirectoryError, match="not a directory"):
        verify_determinism(root=tmp_path, artifacts_dir=plain_file)


def test_differences_are_classified_by_relative_path(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    artifacts_dir = tmp_path / "artifacts"
    (artifacts_dir / "nested").mkdir(parents=True)
    (artifacts_dir / "a.txt").write_text("same\n", encoding="utf-8")
    (artifacts_dir / "nested" / "b.txt").write_text("one\ntwo\n", encoding="utf-8")
    (artifacts_dir / "c.txt").write_text("gone\n", encoding="utf-8")
    monkeypatch.setattr(
        "verify.verify.generate_all_artifacts",
        _regenerating(
            {"a.txt": "same\n", "nested/b.txt": "one\nTWO\n", "d.txt": "new\n"}
        ),
    )

    with caplog.at_level(logging.WARNING, logger="verify.verify"):
        result = verify_determinism(root=tmp_path, artifacts_dir=artifacts_dir)

    assert result == DeterminismResult(
        ok=False,
        mismatches=("nested/b.txt",),
        missing=("c.txt",),
        extra=("d.txt",),
    )
    assert "nested/b.txt differs from the regenerated artifact at line 2" in caplog.text


@pytest.mark.parametrize(
    ("expected", "actual", "line"),
    [
        (b"a\nb\nc\n", b"a\nx\nc\n", 2),
        (b"a\n", b"b\n", 1),
        (b"a\nb\n", b"a\n", 2),
        (b"", b"a\n", 1),
    ],
)
def test_first_difference(expected: bytes, actual: bytes, line: int) -> None:
    assert first_difference(expected, actual) == line


def test_regenerated_artifacts_match(
    mini_module: Path, canned_tool: CannedModuleTool, tmp_path: Path
) -> None:
    artifacts_dir = tmp_path / "artifacts"
    generate_all_artifacts(
        root=mini_module,
        out_dir=artifacts_dir,
        tool_factory=lambda _project_dir: canned_tool,
    )

    result = verify_determinism(
        root=mini_module,
        artifacts_dir=artifacts_dir,
        tool_factory=lambda _project_dir: canned_tool,
    )

    assert result == DeterminismResult(ok=True)


def test_edited_artifact_is_a_mismatch(
    mini_module: Path, canned_tool: CannedModuleTool, tmp_path: Path
) -> None:
    artifacts_dir = tmp_path / "artifacts"
    generate_all_artifacts(
        root=mini_module,
        out_dir=artifacts_dir,
        tool_factory=lambda _project_dir: canned_tool,
    )
    with (artifacts_dir / "deps.edgelist").open("a", encoding="utf-8") as handle:
        handle.write("Go::extra:v1 -> Go::other:v1\n")

    result = verify_determinism(
        root=mini_module,
        artifacts_dir=artifacts_dir,
        tool_factory=lambda _project_dir: canned_tool,
    )

    assert result.mismatches == ("deps.edgelist",)
    assert result.ok is False
