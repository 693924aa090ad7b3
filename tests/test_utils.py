from __future__ import annotations

import pytest

from utils import chunked, iter_json_objects, normalize_module_version, parse_module_entry


@pytest.mark.parametrize(
    ("entry", "expected"),
    [
        ("github.com/pkg/errors@v0.9.1", "github.com/pkg/errors"),
        ("example.com/main", "example.com/main"),
    ],
)
def test_parse_module_entry(entry: str, expected: str) -> None:
    assert parse_module_entry(entry) == expected


@pytest.mark.parametrize(
    ("version", "expected"),
    [
        ("v1.2.3", "v1.2.3"),
        ("v2.0.0+incompatible", "v2.0.0"),
        ("v0.0.0-20200409120016-cdbd56c7bb0e", "cdbd56c7bb0e"),
        ("v1.2.4-0.20191109021931-daa7c04131f5", "daa7c04131f5"),
        ("v1.2.3-pre.0.20191109021931-daa7c04131f5", "daa7c04131f5"),
        ("v1.0.0-rc.1", "v1.0.0-rc.1"),
        ("", ""),
    ],
)
def test_normalize_module_version(version: str, expected: str) -> None:
    assert normalize_module_version(version) == expected


def test_chunked() -> None:
    assert list(chunked([1, 2, 3, 4, 5], 2)) == [[1, 2], [3, 4], [5]]
    assert list(chunked([], 3)) == []


def test_chunked_rejects_non_positive_size() -> None:
    with pytest.raises(ValueError, match="positive"):
        list(chunked([1], 0))


def test_iter_json_objects_reads_concatenated_values() -> None:
    text = '{\n\t"a": 1\n}\n{"b": [2]}{}\n'

    assert list(iter_json_objects(text)) == [{"a": 1}, {"b": [2]}, {}]


def test_iter_json_objects_empty() -> None:
    assert list(iter_json_objects("  \n")) == []
