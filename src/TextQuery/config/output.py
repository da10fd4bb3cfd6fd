"""Output domain configuration for match results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from TextQuery.config.common import expect_bool, expect_choice, get_section

_ALLOWED_FORMATS = {"text", "json"}


@dataclass(frozen=True, slots=True)
class OutputConfig:
    """Output configuration.

    Attributes:
        format: ``text`` for plain lines, ``json`` for JSON lines.
        invert: Report lines that do not match instead.
        line_numbers: Prefix text output with ``<source>:<line>:``.
    """

    format: str = "text"
    invert: bool = False
    line_numbers: bool = False


def load_output(raw: Mapping[str, Any]) -> OutputConfig:
    """Load output config; the ``output`` section is optional.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If the format is unknown.
    """
    section = get_section(raw, "output", required=False)
    return OutputConfig(
        format=expect_choice(section.get("format", "text"), "output.format", _ALLOWED_FORMATS),
        invert=expect_bool(section.get("invert", False), "output.invert"),
        line_numbers=expect_bool(section.get("line_numbers", False), "output.line_numbers"),
    )


def check_output(config: OutputConfig) -> None:
    """Validate output domain constraints.

    Raises:
        ValueError: If the format is unknown.
    """
    if config.format not in _ALLOWED_FORMATS:
        raise ValueError(f"output.format must be one of {sorted(_ALLOWED_FORMATS)}")
