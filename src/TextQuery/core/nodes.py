"""Query AST nodes.

The node set is closed: terms (`WordTerm`, `PhraseTerm`), field
qualification (`FieldTerm`), combinators (`Not`, `And`, `Or`) and
`Group`. Every node answers two questions:

- `eval(text, options)`: does the input satisfy this node?
- `accept(visitor)`: report the literal values below this node, in
  document order, as ``visitor("value", text)`` calls.

Input is either a plain string or a mapping of field name to string.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Mapping, Sequence, Union

from TextQuery.core.cache import TermCache, default_cache
from TextQuery.core.options import QueryOptions

Document = Union[str, Mapping[str, str]]
Visitor = Callable[[str, str], object]


class Node(ABC):
    """Base class of every query AST node."""

    __slots__ = ()

    @abstractmethod
    def eval(self, text: Document, options: QueryOptions, cache: TermCache | None = None) -> bool:
        """Return whether ``text`` satisfies this node.

        Args:
            text: Input string or field mapping.
            options: Active options, fixed for the whole call.
            cache: Pattern cache; the process-wide cache when omitted.
        """

    @abstractmethod
    def accept(self, visitor: Visitor) -> None:
        """Walk the subtree depth-first, reporting leaf values to ``visitor``."""


class Term(Node):
    """Leaf matching one bounded unit of text."""

    __slots__ = ()

    text: str

    @property
    def is_pattern_literal(self) -> bool:
        return False

    def eval(self, text: Document, options: QueryOptions, cache: TermCache | None = None) -> bool:
        compiled = (cache or default_cache()).compile_or_fetch(
            self.text,
            options.delimiter_fragment,
            self.is_pattern_literal or options.regexp,
        )
        matcher = compiled.matcher(options.ignore_case)
        if isinstance(text, str):
            return matcher.search(text) is not None
        return any(matcher.search(value) is not None for value in text.values())

    def accept(self, visitor: Visitor) -> None:
        visitor("value", self.text)


@dataclass(frozen=True, slots=True)
class WordTerm(Term):
    """A single word, optionally with fuzzy markers.

    Attributes:
        text: Raw term text as written in the query.
        pattern_literal: The text is a pattern and must not be escaped.
    """

    text: str
    pattern_literal: bool = False

    @property
    def is_pattern_literal(self) -> bool:
        return self.pattern_literal


@dataclass(frozen=True, slots=True)
class PhraseTerm(Term):
    """A quoted run of words matched as one unit."""

    text: str


@dataclass(frozen=True, slots=True)
class FieldTerm(Node):
    """A term restricted to the value of one named field.

    For mapping input the field's value is looked up directly. For string
    input every delimiter-separated token of the form
    ``<field><attribute_delimiter><value>`` contributes its value, and the
    term matches when any of them does.
    """

    field: str
    term: Term

    def eval(self, text: Document, options: QueryOptions, cache: TermCache | None = None) -> bool:
        return any(self.term.eval(value, options, cache) for value in self.values(text, options))

    def accept(self, visitor: Visitor) -> None:
        self.term.accept(visitor)

    def values(self, text: Document, options: QueryOptions) -> list[str]:
        """Return the values of this field found in ``text``."""
        if isinstance(text, str):
            return self._values_from_string(text, options)
        return self._values_from_mapping(text, options)

    def _values_from_mapping(self, text: Mapping[str, str], options: QueryOptions) -> list[str]:
        if self.field in text:
            return [text[self.field]]
        if options.ignore_case:
            wanted = self.field.casefold()
            return [value for key, value in text.items() if key.casefold() == wanted]
        return []

    def _values_from_string(self, text: str, options: QueryOptions) -> list[str]:
        separator = options.field_separator
        if separator is None:
            return []
        prefix = self.field + separator
        if options.ignore_case:
            prefix = prefix.casefold()

        values: list[str] = []
        for token in re.split(options.delimiter_fragment, text):
            # groups captured by a user delimiter pattern come back as None
            if not token:
                continue
            head = token[: len(prefix)]
            if options.ignore_case:
                head = head.casefold()
            if head == prefix:
                values.append(token[len(prefix):])
        return values


@dataclass(frozen=True, slots=True)
class Not(Node):
    """Negation of one child."""

    child: Node

    def eval(self, text: Document, options: QueryOptions, cache: TermCache | None = None) -> bool:
        return not self.child.eval(text, options, cache)

    def accept(self, visitor: Visitor) -> None:
        self.child.accept(visitor)


@dataclass(frozen=True, slots=True)
class And(Node):
    """Conjunction; stops at the first child that does not match."""

    children: Sequence[Node]

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(self.children))

    def eval(self, text: Document, options: QueryOptions, cache: TermCache | None = None) -> bool:
        return all(child.eval(text, options, cache) for child in self.children)

    def accept(self, visitor: Visitor) -> None:
        for child in self.children:
            child.accept(visitor)


@dataclass(frozen=True, slots=True)
class Or(Node):
    """Disjunction; stops at the first child that matches."""

    children: Sequence[Node]

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(self.children))

    def eval(self, text: Document, options: QueryOptions, cache: TermCache | None = None) -> bool:
        return any(child.eval(text, options, cache) for child in self.children)

    def accept(self, visitor: Visitor) -> None:
        for child in self.children:
            child.accept(visitor)


@dataclass(frozen=True, slots=True)
class Group(Node):
    """Parenthesized subexpression, transparent to evaluation."""

    child: Node

    def eval(self, text: Document, options: QueryOptions, cache: TermCache | None = None) -> bool:
        return self.child.eval(text, options, cache)

    def accept(self, visitor: Visitor) -> None:
        self.child.accept(visitor)
