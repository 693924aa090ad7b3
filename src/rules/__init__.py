"""Configuration rules for modgraph."""

from rules.config import (
    ConfigError,
    GoConfig,
    ModGraphConfig,
    ScopesConfig,
    load_config,
    resolve_go_proxy,
    resolve_output_dir,
)

__all__ = [
    "ConfigError",
    "GoConfig",
    "ModGraphConfig",
    "ScopesConfig",
    "load_config",
    "resolve_go_proxy",
    "resolve_output_dir",
]
