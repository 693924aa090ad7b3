from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping  # noqa: TC003
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator

from graph.forest import DEFAULT_MAX_TREE_DEPTH
from graph.scopes import MAIN_SCOPE, VENDOR_SCOPE
from gomod.command import DEFAULT_EXECUTABLE
from gomod.vendor import WHY_BATCH_SIZE

CONFIG_FILENAME = "modgraph.toml"

DEFAULT_GO_PROXY = "https://proxy.golang.org"


class GoConfig(BaseModel):
    """Settings for the module tool."""

    model_config = ConfigDict(extra="forbid")

    executable: str = Field(
        default=DEFAULT_EXECUTABLE,
        description="Name or path of the go executable",
    )
    proxy: str | None = Field(
        default=None,
        description="Proxy base URL for source artifact URLs (default: from GOPROXY)",
    )
    gopath: str | None = Field(
        default=None,
        description="GOPATH for tool runs (default: a temporary directory per run)",
    )
    why_batch_size: int = Field(
        default=WHY_BATCH_SIZE,
        gt=0,
        description="Number of modules per usage query",
    )


class ScopesConfig(BaseModel):
    """Names of the produced dependency scopes."""

    model_config = ConfigDict(extra="forbid")

    main: str = Field(
        default=MAIN_SCOPE,
        min_length=1,
        description="Scope with the build dependencies of the main module",
    )
    vendor: str = Field(
        default=VENDOR_SCOPE,
        min_length=1,
        description="Scope with all vendor modules",
    )

    @model_validator(mode="after")
    def validate_distinct_names(self) -> ScopesConfig:
        if self.main == self.vendor:
            msg = f"Scope names must differ, got '{self.main}' twice"
            raise ValueError(msg)
        return self


class ModGraphConfig(BaseModel):
    """Configuration for modgraph artifact generation."""

    model_config = ConfigDict(extra="forbid")

    output_dir: str = Field(
        default=".modgraph",
        description="Output directory for generated artifacts",
    )
    include: list[str] = Field(
        default_factory=list,
        description="Glob patterns for definition files to include (empty = all)",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns for definition files to exclude",
    )
    nested_gitignore: bool = Field(
        default=False,
        description=(
            "Enable nested .gitignore composition (default: false for root-only)"
        ),
    )
    max_tree_depth: int = Field(
        default=DEFAULT_MAX_TREE_DEPTH,
        gt=0,
        description="Maximum depth of a dependency tree before analysis fails",
    )
    go: GoConfig = Field(default_factory=GoConfig)
    scopes: ScopesConfig = Field(default_factory=ScopesConfig)


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def resolve_output_dir(root: Path, output_dir: str) -> Path:
    """Resolve a config-provided output_dir safely within the repo root.

    The config output_dir must be a non-empty relative path that remains
    within the repository root after resolution. Absolute paths and paths
    that escape the root are rejected.
    """
    if not output_dir:
        msg = "output_dir must be a non-empty relative path"
        raise ConfigError(msg)

    if output_dir.startswith("~"):
        msg = "output_dir must be a relative path within the repo root"
        raise ConfigError(msg)

    output_path = Path(output_dir)
    if output_path.is_absolute():
        msg = "output_dir must be a relative path within the repo root"
        raise ConfigError(msg)

    try:
        resolved_root = root.resolve()
        resolved_output = (resolved_root / output_path).resolve()
    except OSError as exc:
        msg = f"Failed to resolve output_dir '{output_dir}': {exc}"
        raise ConfigError(msg) from exc

    try:
        resolved_output.relative_to(resolved_root)
    except ValueError as exc:
        msg = f"output_dir '{output_dir}' escapes the repository root"
        raise ConfigError(msg) from exc

    return resolved_output


def resolve_go_proxy(
    config: GoConfig, environ: Mapping[str, str] | None = None
) -> str:
    """Return the proxy base URL used for source artifact URLs.

    An explicit ``proxy`` wins; otherwise the first ``GOPROXY`` entry that is
    neither ``direct`` nor ``off`` is used, falling back to the public proxy.
    """
    if config.proxy:
        return config.proxy.rstrip("/")

    env = os.environ if environ is None else environ
    for entry in env.get("GOPROXY", "").split(","):
        candidate = entry.strip()
        if candidate and candidate not in {"direct", "off"}:
            return candidate.rstrip("/")
    return DEFAULT_GO_PROXY


def load_config(root: Path) -> ModGraphConfig:
    """Load configuration from modgraph.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return ModGraphConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return ModGraphConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
