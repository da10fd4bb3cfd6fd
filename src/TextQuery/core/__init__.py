"""Query representation and evaluation engine."""

from __future__ import annotations

from TextQuery.core.cache import CompiledTerm, PatternCache, TermCache, default_cache
from TextQuery.core.errors import (
    InvalidTermSyntax,
    NoQuerySpecified,
    ParseDiagnostic,
    ParseFailure,
    QueryError,
)
from TextQuery.core.fuzzy import FuzzyTerm, build_term_pattern, escape_term, parse_fuzzy
from TextQuery.core.nodes import And, FieldTerm, Group, Node, Not, Or, PhraseTerm, Term, WordTerm
from TextQuery.core.options import QueryOptions, merge_options, normalize_delimiter

__all__ = [
    "And",
    "CompiledTerm",
    "FieldTerm",
    "FuzzyTerm",
    "Group",
    "InvalidTermSyntax",
    "Node",
    "NoQuerySpecified",
    "Not",
    "Or",
    "ParseDiagnostic",
    "ParseFailure",
    "PatternCache",
    "PhraseTerm",
    "QueryError",
    "QueryOptions",
    "Term",
    "TermCache",
    "WordTerm",
    "build_term_pattern",
    "default_cache",
    "escape_term",
    "merge_options",
    "normalize_delimiter",
    "parse_fuzzy",
]
