"""Query facade.

`TextQuery` owns a parsed query and the options it is evaluated with::

    q = TextQuery("cat AND NOT dog")
    q.match("the cat sat")              # True
    q.match("The Cat", ignore_case=False)  # False

Options given to `eval`/`accept` are merged over the current ones and stay
in effect for later calls.
"""

from __future__ import annotations

from typing import Any, Mapping

from TextQuery.core.cache import TermCache, default_cache
from TextQuery.core.errors import NoQuerySpecified, ParseDiagnostic, ParseFailure
from TextQuery.core.nodes import Document, Node, Visitor
from TextQuery.core.options import QueryOptions, merge_options
from TextQuery.grammar import parse as parse_query


class TextQuery:
    """A boolean text query bound to a set of matching options."""

    def __init__(
        self,
        query: str = "",
        options: QueryOptions | Mapping[str, Any] | None = None,
        *,
        cache: TermCache | None = None,
        **overrides: Any,
    ) -> None:
        """Create a query, parsing ``query`` when it is not empty.

        Args:
            query: Query string.
            options: Base options, as a value or a mapping of overrides over
                the defaults.
            cache: Pattern cache; the process-wide cache when omitted.
            **overrides: Individual option overrides.

        Raises:
            ParseFailure: If ``query`` does not parse.
            ValueError: If an option name is unknown.
        """
        if isinstance(options, QueryOptions):
            base = options
        else:
            base = merge_options(QueryOptions(), options)
        self._options = merge_options(base, overrides)
        self._cache = cache if cache is not None else default_cache()
        self._root: Node | None = None
        self._failures: tuple[ParseDiagnostic, ...] = ()
        if query:
            self.parse(query)

    @property
    def options(self) -> QueryOptions:
        return self._options

    @property
    def root(self) -> Node | None:
        return self._root

    @property
    def is_parsed(self) -> bool:
        return self._root is not None

    def parse(self, query: str) -> TextQuery:
        """Parse ``query`` and make it the current query.

        On failure the previous query, if any, is kept.

        Raises:
            ParseFailure: If ``query`` does not parse.
        """
        try:
            root = parse_query(query, self._options)
        except ParseFailure as e:
            self._failures = e.diagnostics
            raise
        self._root = root
        self._failures = ()
        return self

    def eval(self, text: Document, options: Mapping[str, Any] | None = None, **overrides: Any) -> bool:
        """Return whether ``text`` satisfies the query.

        Args:
            text: Input string, or a mapping of field name to value.
            options: Option overrides merged over the current options.
            **overrides: Individual option overrides.

        Raises:
            NoQuerySpecified: If no query has been parsed.
            InvalidTermSyntax: If a term cannot be compiled.
        """
        root = self._prepare(options, overrides)
        return root.eval(text, self._options, self._cache)

    match = eval

    def accept(self, visitor: Visitor, options: Mapping[str, Any] | None = None, **overrides: Any) -> None:
        """Report every literal value of the query to ``visitor``.

        ``visitor`` is called as ``visitor("value", text)`` in the order the
        terms appear in the query.

        Raises:
            NoQuerySpecified: If no query has been parsed.
        """
        root = self._prepare(options, overrides)
        root.accept(visitor)

    def terms(self) -> list[str]:
        """Return the literal values of the query in document order."""
        out: list[str] = []
        self.accept(lambda kind, payload: out.append(payload))
        return out

    def terminal_failures(self) -> tuple[ParseDiagnostic, ...]:
        """Return the diagnostics of the most recent failed parse."""
        return self._failures

    def _prepare(self, options: Mapping[str, Any] | None, overrides: Mapping[str, Any]) -> Node:
        if options or overrides:
            self._options = merge_options(merge_options(self._options, options), overrides)
        if self._root is None:
            raise NoQuerySpecified()
        return self._root

    def __repr__(self) -> str:
        return f"TextQuery(root={self._root!r}, options={self._options!r})"
