"""Matching domain configuration (delimiters, case, field syntax)."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping

from TextQuery.config.common import expect_bool, expect_str, expect_str_list, get_section
from TextQuery.core.options import DEFAULT_ATTRIBUTE_DELIMITER, DEFAULT_DELIMITER, QueryOptions


@dataclass(frozen=True, slots=True)
class MatchConfig:
    """Store validated matching options.

    Attributes:
        delimiters: Configured boundary markers. Entries written as
            ``/.../`` are patterns, everything else is literal text.
        ignore_case: Whether terms match regardless of case.
        attribute_delimiter: Separator of field terms; empty disables them.
        regexp: Treat every term as a pattern.
    """

    delimiters: tuple[str, ...] = (DEFAULT_DELIMITER,)
    ignore_case: bool = True
    attribute_delimiter: str = DEFAULT_ATTRIBUTE_DELIMITER
    regexp: bool = False

    def to_options(self) -> QueryOptions:
        """Convert into the options value used by queries."""
        return QueryOptions(
            delimiter=tuple(parse_delimiter(d, f"match.delimiter[{i}]") for i, d in enumerate(self.delimiters)),
            ignore_case=self.ignore_case,
            attribute_delimiter=self.attribute_delimiter,
            regexp=self.regexp,
        )


def parse_delimiter(text: str, config_key: str) -> str | re.Pattern[str]:
    """Turn one configured delimiter into a literal or a compiled pattern.

    Raises:
        ValueError: If a ``/.../`` entry is not a valid pattern.
    """
    if len(text) > 2 and text.startswith("/") and text.endswith("/"):
        try:
            return re.compile(text[1:-1])
        except re.error as e:
            raise ValueError(f"{config_key} is not a valid pattern: {e}") from e
    return text


def load_match(raw: Mapping[str, Any]) -> MatchConfig:
    """Load matching config from raw mapping.

    The ``match`` section is optional; missing keys take defaults.

    Raises:
        TypeError: If config types are invalid.
    """
    section = get_section(raw, "match", required=False)
    defaults = MatchConfig()
    return MatchConfig(
        delimiters=tuple(expect_str_list(section.get("delimiter", list(defaults.delimiters)), "match.delimiter")),
        ignore_case=expect_bool(section.get("ignore_case", defaults.ignore_case), "match.ignore_case"),
        attribute_delimiter=expect_str(
            section.get("attribute_delimiter", defaults.attribute_delimiter) or "",
            "match.attribute_delimiter",
        ),
        regexp=expect_bool(section.get("regexp", defaults.regexp), "match.regexp"),
    )


def check_match(config: MatchConfig) -> None:
    """Validate matching domain constraints.

    Raises:
        ValueError: If values violate matching constraints.
    """
    if not config.delimiters:
        raise ValueError("match.delimiter must include at least one delimiter")
    for idx, delimiter in enumerate(config.delimiters):
        if not delimiter:
            raise ValueError(f"match.delimiter[{idx}] must not be empty")
    config.to_options()
