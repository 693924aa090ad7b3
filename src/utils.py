"""Shared utilities for modgraph."""

from __future__ import annotations

import json
import re
from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

T = TypeVar("T")

MODULE_VERSION_SEPARATOR = "@"
INCOMPATIBLE_SUFFIX = "+incompatible"

_PSEUDO_VERSION = re.compile(
    r"^v\d+\.\d+\.\d+-(?:[0-9A-Za-z.-]+\.)?\d{14}-(?P<revision>[0-9a-f]{12})$"
)
_JSON_WHITESPACE = re.compile(r"\s*")


def parse_module_entry(entry: str) -> str:
    """Return the module path of a ``path@version`` entry.

    Examples:
        >>> parse_module_entry("github.com/pkg/errors@v0.9.1")
        'github.com/pkg/errors'
        >>> parse_module_entry("example.com/main")
        'example.com/main'
    """
    return entry.split(MODULE_VERSION_SEPARATOR, 1)[0]


def normalize_module_version(version: str) -> str:
    """Normalize a module version for use in an identifier.

    The ``+incompatible`` marker is dropped and pseudo-versions are reduced to
    the commit hash they encode.

    Examples:
        >>> normalize_module_version("v2.0.0+incompatible")
        'v2.0.0'
        >>> normalize_module_version("v0.0.0-20200409120016-cdbd56c7bb0e")
        'cdbd56c7bb0e'
        >>> normalize_module_version("")
        ''
    """
    clean = version.removesuffix(INCOMPATIBLE_SUFFIX)
    match = _PSEUDO_VERSION.match(clean)
    if match:
        return match.group("revision")
    return clean


def chunked(items: Sequence[T], size: int) -> Iterator[list[T]]:
    """Yield consecutive slices of ``items`` holding at most ``size`` elements."""
    if size <= 0:
        msg = f"Chunk size must be positive, got {size}"
        raise ValueError(msg)
    for start in range(0, len(items), size):
        yield list(items[start : start + size])


def iter_json_objects(text: str) -> Iterator[Any]:
    """Decode a stream of concatenated JSON values.

    The module tool prints one pretty-printed object after another without a
    separator, so this is neither JSON nor JSONL.
    """
    decoder = json.JSONDecoder()
    position = _JSON_WHITESPACE.match(text, 0).end()  # type: ignore[union-attr]
    while position < len(text):
        value, position = decoder.raw_decode(text, position)
        yield value
        position = _JSON_WHITESPACE.match(text, position).end()  # type: ignore[union-attr]
