"""Matching options and delimiter normalization.

`QueryOptions` is immutable. Every change goes through `merge_options`,
which returns a new value with a freshly normalized delimiter fragment.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields, replace
from typing import Any, Mapping, Sequence, Union

Delimiter = Union[str, "re.Pattern[str]"]
DelimiterSpec = Union[Delimiter, Sequence[Delimiter]]

DEFAULT_DELIMITER = " "
DEFAULT_ATTRIBUTE_DELIMITER = ":"


_SCOPED_FLAGS = (
    (re.ASCII, "a"),
    (re.IGNORECASE, "i"),
    (re.MULTILINE, "m"),
    (re.DOTALL, "s"),
    (re.VERBOSE, "x"),
)
_LEADING_GLOBAL_FLAGS = re.compile(r"^(?:\(\?[aiLmsux]+\))+")


def _scoped_pattern(pattern: re.Pattern[str]) -> str:
    """Return pattern source wrapped in a group carrying its compiled flags.

    Leading inline flags such as ``(?i)`` are already part of
    ``pattern.flags`` and would be rejected mid-pattern, so they are dropped
    from the source. An empty source yields an empty string.
    """
    source = _LEADING_GLOBAL_FLAGS.sub("", pattern.pattern)
    if not source:
        return ""
    on = "".join(letter for flag, letter in _SCOPED_FLAGS if pattern.flags & flag)
    off = "" if pattern.flags & re.IGNORECASE else "-i"
    return f"(?{on}{off}:{source})"


def normalize_delimiter(raw: DelimiterSpec) -> str:
    """Normalize boundary markers into one alternation fragment.

    Plain strings are escaped. Compiled patterns keep their own flags through
    a scoped group and match the same way whatever `ignore_case` a term is
    compiled with.

    Args:
        raw: A string, a compiled pattern, or a sequence of either.

    Returns:
        A non-capturing group matching exactly one boundary occurrence,
        e.g. ``(?: |,)``.

    Raises:
        TypeError: If an entry is neither a string nor a compiled pattern.
        ValueError: If no usable delimiter is given.
    """
    items = [raw] if isinstance(raw, (str, re.Pattern)) else list(raw)
    if not items:
        raise ValueError("delimiter must not be empty")

    pieces: list[str] = []
    for idx, item in enumerate(items):
        if isinstance(item, re.Pattern):
            piece = _scoped_pattern(item)
        elif isinstance(item, str):
            piece = re.escape(item)
        else:
            raise TypeError(f"delimiter[{idx}] must be a string or compiled pattern")
        if not piece:
            raise ValueError(f"delimiter[{idx}] must not be empty")
        pieces.append(piece)
    return "(?:" + "|".join(pieces) + ")"


@dataclass(frozen=True, slots=True)
class QueryOptions:
    """Options controlling tokenization and matching.

    Attributes:
        delimiter: Boundary marker(s) separating words.
        ignore_case: Whether terms match regardless of case.
        attribute_delimiter: Separator between a field name and its value.
            Empty or None disables field-qualified terms.
        regexp: Treat every term as a pattern instead of literal text.
        delimiter_fragment: Normalized pattern fragment for ``delimiter``.
    """

    delimiter: DelimiterSpec = DEFAULT_DELIMITER
    ignore_case: bool = True
    attribute_delimiter: str | None = DEFAULT_ATTRIBUTE_DELIMITER
    regexp: bool = False
    delimiter_fragment: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        delimiter = self.delimiter
        if not isinstance(delimiter, (str, re.Pattern)):
            delimiter = tuple(delimiter)
            object.__setattr__(self, "delimiter", delimiter)
        if not isinstance(self.ignore_case, bool):
            raise TypeError("ignore_case must be a boolean")
        if not isinstance(self.regexp, bool):
            raise TypeError("regexp must be a boolean")
        if self.attribute_delimiter is not None and not isinstance(self.attribute_delimiter, str):
            raise TypeError("attribute_delimiter must be a string")
        object.__setattr__(self, "delimiter_fragment", normalize_delimiter(delimiter))

    @property
    def field_separator(self) -> str | None:
        """Return the attribute delimiter, or None when field terms are disabled."""
        return self.attribute_delimiter or None


_OPTION_NAMES = frozenset(f.name for f in fields(QueryOptions) if f.init)


def merge_options(base: QueryOptions, overrides: Mapping[str, Any] | None = None) -> QueryOptions:
    """Return a new options value with ``overrides`` applied over ``base``.

    Args:
        base: Current options.
        overrides: Option names to new values. Missing names keep their value.

    Returns:
        ``base`` itself when there is nothing to merge, otherwise a new value.

    Raises:
        ValueError: If an unknown option name is given.
    """
    if not overrides:
        return base
    unknown = set(overrides) - _OPTION_NAMES
    if unknown:
        raise ValueError(f"Unknown query options: {sorted(unknown)}")
    return replace(base, **dict(overrides))
