from __future__ import annotations

"""Application config orchestration and YAML loading entrypoints."""

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

from TextQuery.config.matching import MatchConfig, check_match, load_match
from TextQuery.config.output import OutputConfig, check_output, load_output
from TextQuery.config.runtime import RuntimeConfig, check_runtime, load_runtime

DEFAULT_CONFIG_PATH = Path("config/default.yml")

BUILTIN_DEFAULTS: Mapping[str, Any] = {
    "log": {"level": "WARNING", "to_file": False, "dir": "log"},
}


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application root configuration."""

    runtime: RuntimeConfig
    match: MatchConfig
    output: OutputConfig

    def with_overrides(
        self,
        *,
        match: Mapping[str, Any] | None = None,
        output: Mapping[str, Any] | None = None,
    ) -> AppConfig:
        """Return a copy with individual match/output fields replaced.

        ``None`` values are ignored so unset CLI options keep config values.
        """
        match_fields = {k: v for k, v in (match or {}).items() if v is not None}
        output_fields = {k: v for k, v in (output or {}).items() if v is not None}
        config = replace(
            self,
            match=replace(self.match, **match_fields),
            output=replace(self.output, **output_fields),
        )
        check_match(config.match)
        check_output(config.output)
        return config


def parse_config_dict(raw: Mapping[str, Any]) -> AppConfig:
    """Parse normalized mapping into AppConfig."""
    runtime = load_runtime(raw)
    match = load_match(raw)
    output = load_output(raw)

    check_runtime(runtime)
    check_match(match)
    check_output(output)

    return AppConfig(runtime=runtime, match=match, output=output)


def default_config() -> AppConfig:
    """Return the built-in configuration used when no config file exists."""
    return parse_config_dict(BUILTIN_DEFAULTS)


def load_config_file(config_path: Path, default_path: Path = DEFAULT_CONFIG_PATH) -> AppConfig:
    """Load ``config_path`` over the defaults file, or over built-in defaults.

    The built-in defaults stand in when ``default_path`` does not exist, which
    is the case outside a source checkout.
    """
    if default_path.exists():
        return load_config_with_defaults(config_path, default_path=default_path)
    if config_path == default_path:
        return default_config()
    override = parse_yaml(config_path.read_text(encoding="utf-8"))
    return parse_config_dict(merge_config_dicts(BUILTIN_DEFAULTS, override))


def load_config_with_defaults(config_path: Path, default_path: Path = DEFAULT_CONFIG_PATH) -> AppConfig:
    """Load config by merging defaults and optional override."""
    base = parse_yaml(default_path.read_text(encoding="utf-8"))
    if config_path == default_path:
        return parse_config_dict(base)
    override = parse_yaml(config_path.read_text(encoding="utf-8"))
    return parse_config_dict(merge_config_dicts(base, override))


def parse_yaml(text: str) -> dict[str, Any]:
    """Parse raw YAML text into a mapping."""
    data = yaml.safe_load(text) or {}
    if not isinstance(data, Mapping):
        raise ValueError("Config root must be a mapping/object")
    return dict(data)


def merge_config_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge two config mappings."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], Mapping) and isinstance(value, Mapping):
            merged[key] = merge_config_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged
