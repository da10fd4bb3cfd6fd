"""TextQuery: boolean search queries over free-form text.

    >>> from TextQuery import TextQuery
    >>> TextQuery("cat AND NOT dog").match("the cat sat")
    True
"""

from __future__ import annotations

from TextQuery.core import (
    And,
    FieldTerm,
    Group,
    InvalidTermSyntax,
    Node,
    NoQuerySpecified,
    Not,
    Or,
    ParseDiagnostic,
    ParseFailure,
    PatternCache,
    PhraseTerm,
    QueryError,
    QueryOptions,
    WordTerm,
    default_cache,
    merge_options,
)
from TextQuery.grammar import parse
from TextQuery.services.query import TextQuery

__version__ = "0.3.0"

__all__ = [
    "And",
    "FieldTerm",
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
    "TextQuery",
    "WordTerm",
    "default_cache",
    "merge_options",
    "parse",
]
