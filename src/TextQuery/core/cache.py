"""Compiled pattern cache shared between queries.

Each distinct (term, delimiter fragment) pair is compiled once into a
case-sensitive and a case-insensitive matcher. The cache never evicts; its
size is bounded by the distinct terms actually evaluated.
"""

from __future__ import annotations

import re
import threading
from dataclasses import dataclass
from typing import Protocol

from TextQuery.core.errors import InvalidTermSyntax
from TextQuery.core.fuzzy import build_term_pattern, escape_term
from TextQuery.utils.log import log

CacheKey = tuple[str, str]


@dataclass(frozen=True, slots=True)
class CompiledTerm:
    """Matcher pair for one term under one delimiter configuration."""

    pattern: str
    case_sensitive: re.Pattern[str]
    case_insensitive: re.Pattern[str]

    def matcher(self, ignore_case: bool) -> re.Pattern[str]:
        """Return the matcher honoring ``ignore_case``."""
        return self.case_insensitive if ignore_case else self.case_sensitive


class TermCache(Protocol):
    """Interface the AST leaves need from a pattern cache."""

    def compile_or_fetch(
        self, term: str, delimiter_fragment: str, pattern_literal: bool
    ) -> CompiledTerm: ...


class PatternCache:
    """Thread-safe memo of compiled term patterns.

    Lookups of existing keys are lock-free. Misses take the lock and check
    again before compiling, so a key is compiled at most once even when
    several threads race on it.
    """

    def __init__(self) -> None:
        self._entries: dict[CacheKey, CompiledTerm] = {}
        self._lock = threading.Lock()
        self.compilations = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def compile_or_fetch(self, term: str, delimiter_fragment: str, pattern_literal: bool) -> CompiledTerm:
        """Return the matcher pair for ``term``, compiling it on first use.

        Args:
            term: Raw term text.
            delimiter_fragment: Normalized delimiter alternation.
            pattern_literal: When False, ``term`` is escaped before use.

        Returns:
            The cached matcher pair.

        Raises:
            InvalidTermSyntax: If the term is malformed or is not a valid pattern.
        """
        query = term if pattern_literal else escape_term(term)
        key = (query, delimiter_fragment)
        entry = self._entries.get(key)
        if entry is not None:
            return entry

        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                entry = _compile(term, query, delimiter_fragment)
                self._entries[key] = entry
                self.compilations += 1
                log.debug("Compiled term %r as %s", term, entry.pattern)
        return entry

    def clear(self) -> None:
        """Drop every compiled entry and reset the counter."""
        with self._lock:
            self._entries.clear()
            self.compilations = 0


def _compile(term: str, query: str, delimiter_fragment: str) -> CompiledTerm:
    pattern = build_term_pattern(query, delimiter_fragment)
    try:
        return CompiledTerm(
            pattern=pattern,
            case_sensitive=re.compile(pattern),
            case_insensitive=re.compile(pattern, re.IGNORECASE),
        )
    except re.error as e:
        raise InvalidTermSyntax(term, str(e)) from e


_DEFAULT_CACHE = PatternCache()


def default_cache() -> PatternCache:
    """Return the process-wide pattern cache."""
    return _DEFAULT_CACHE
