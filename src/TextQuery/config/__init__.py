from __future__ import annotations

"""Public configuration API for TextQuery."""

from TextQuery.config.app import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    default_config,
    load_config_file,
    load_config_with_defaults,
    merge_config_dicts,
    parse_config_dict,
    parse_yaml,
)
from TextQuery.config.matching import MatchConfig
from TextQuery.config.output import OutputConfig
from TextQuery.config.runtime import RuntimeConfig

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "AppConfig",
    "default_config",
    "MatchConfig",
    "OutputConfig",
    "RuntimeConfig",
    "load_config_file",
    "load_config_with_defaults",
    "merge_config_dicts",
    "parse_config_dict",
    "parse_yaml",
]
