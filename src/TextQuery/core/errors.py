"""Exceptions raised by TextQuery.

Every failure the library raises on purpose derives from `QueryError`, so
callers can catch one type at their boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


class QueryError(RuntimeError):
    """Base class for query parsing and evaluation failures."""


@dataclass(frozen=True, slots=True)
class ParseDiagnostic:
    """Positional detail of a failed parse.

    Attributes:
        line: 1-based line number in the query text.
        column: 1-based column number in the query text.
        offset: 0-based character offset in the query text.
        expected: What the grammar expected at this position.
        message: Human-readable description.
    """

    line: int
    column: int
    offset: int
    expected: str
    message: str

    def __str__(self) -> str:
        return f"line {self.line}, col {self.column}: {self.message}"


class ParseFailure(QueryError):
    """Raised when a query string does not conform to the grammar."""

    def __init__(self, query: str, diagnostics: Sequence[ParseDiagnostic]) -> None:
        self.query = query
        self.diagnostics = tuple(diagnostics)
        detail = "; ".join(str(d) for d in self.diagnostics) or "no diagnostics"
        super().__init__(f"Could not parse query string {query!r}: {detail}")


class InvalidTermSyntax(QueryError):
    """Raised when a term cannot be compiled into a pattern."""

    def __init__(self, term: str, reason: str) -> None:
        self.term = term
        super().__init__(f"Invalid term {term!r}: {reason}")


class NoQuerySpecified(QueryError):
    """Raised when evaluating before any query was parsed."""

    def __init__(self) -> None:
        super().__init__("no query specified")
