"""Query string grammar front end."""

from __future__ import annotations

from TextQuery.grammar.parser import build_grammar, parse

__all__ = ["build_grammar", "parse"]
