"""Fuzzy term syntax and anchored pattern construction.

A term may carry a fuzzy marker on either side::

    [<count>]~<core>~[<count>]

A leading ``~`` allows characters before ``core``, a trailing ``~``
allows them after it. A count next to the marker fixes the number of
characters; a bare marker allows any number. Without markers the term
must sit exactly between two boundaries (or the edges of the text). The
core is grouped, so an alternation inside a pattern term stays within
those boundaries.

Wildcards match any character, delimiters included, so ``2~cat`` also
matches ``a cat``: the filler is ``"a "``.

Examples:
    ``cat``   -> only the word ``cat``
    ``~cat``  -> ``cat``, ``bobcat``
    ``cat~``  -> ``cat``, ``catalog``
    ``2~cat`` -> ``xxcat`` but not ``xcat`` or ``xxxcat``
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import cache

from TextQuery.core.errors import InvalidTermSyntax

_FUZZY_RE = re.compile(
    r"(?:(?P<startcount>\d*)(?P<startfuzz>~))?"
    r"(?P<text>[^~].*?)"
    r"(?:(?P<endfuzz>~)(?P<endcount>\d*))?",
    re.DOTALL,
)


@dataclass(frozen=True, slots=True)
class FuzzyTerm:
    """Decomposed fuzzy term.

    Attributes:
        leading_count: Exact number of characters allowed before the core,
            or None for any number.
        leading_fuzzy: Whether characters are allowed before the core.
        core_text: The text that must appear.
        trailing_fuzzy: Whether characters are allowed after the core.
        trailing_count: Exact number of characters allowed after the core,
            or None for any number.
    """

    leading_count: int | None
    leading_fuzzy: bool
    core_text: str
    trailing_fuzzy: bool
    trailing_count: int | None

    def to_pattern(self) -> str:
        """Return the unanchored pattern for this term."""
        parts: list[str] = []
        if self.leading_fuzzy:
            parts.append(_wildcard(self.leading_count))
        parts.append(f"(?:{self.core_text})")
        if self.trailing_fuzzy:
            parts.append(_wildcard(self.trailing_count))
        return "".join(parts)


def _wildcard(count: int | None) -> str:
    return ".*" if count is None else f".{{{count}}}"


@cache
def parse_fuzzy(text: str) -> FuzzyTerm:
    """Split a term into its fuzzy markers and core text.

    Results are memoized per distinct ``text``.

    Args:
        text: Term text, already escaped unless it is a pattern literal.

    Returns:
        The decomposed term.

    Raises:
        InvalidTermSyntax: If nothing remains once the markers are stripped.
    """
    m = _FUZZY_RE.fullmatch(text)
    if m is None or (m.group("endfuzz") and m.group("text").endswith("~")):
        raise InvalidTermSyntax(text, "no text left between the fuzzy markers")

    startcount = m.group("startcount")
    endcount = m.group("endcount")
    return FuzzyTerm(
        leading_count=int(startcount) if startcount else None,
        leading_fuzzy=m.group("startfuzz") is not None,
        core_text=m.group("text"),
        trailing_fuzzy=m.group("endfuzz") is not None,
        trailing_count=int(endcount) if endcount else None,
    )


def escape_term(text: str) -> str:
    """Escape literal term text, keeping ``~`` usable as a fuzzy marker."""
    return re.escape(text).replace("\\~", "~")


def anchor(pattern: str, delimiter_fragment: str) -> str:
    """Bound ``pattern`` by a delimiter or the edge of the text on both sides."""
    return f"(?:^|{delimiter_fragment}){pattern}(?:{delimiter_fragment}|$)"


def build_term_pattern(text: str, delimiter_fragment: str) -> str:
    """Build the anchored pattern for one term.

    Args:
        text: Term text, already escaped unless it is a pattern literal.
        delimiter_fragment: Normalized delimiter alternation.

    Returns:
        Pattern source ready for ``re.compile``.
    """
    return anchor(parse_fuzzy(text).to_pattern(), delimiter_fragment)
