"""Query grammar.

Syntax::

    cat dog                 both words (implicit AND)
    cat AND dog             same, explicit
    cat OR dog              either word
    NOT cat, -cat           negation
    (cat OR dog) bird       grouping
    "black cat"             phrase
    /ca[tr]s?/              pattern literal, used unescaped
    title:cat               field-qualified term
    ~cat, cat~, 2~cat       fuzzy terms (interpreted at evaluation time)

Operators are uppercase keywords. ``OR`` binds looser than ``AND``, ``NOT``
binds tightest. The attribute delimiter of field terms is configurable and
field terms are disabled when it is empty.

A field value cannot start with ``-``: ``title:-cat`` is read as the single
word ``title:-cat``. Negate the whole field term instead, as in ``-title:cat``.
"""

from __future__ import annotations

import re
from functools import cache

import pyparsing as pp

from TextQuery.core.errors import ParseDiagnostic, ParseFailure
from TextQuery.core.nodes import And, FieldTerm, Group, Node, Not, Or, PhraseTerm, WordTerm
from TextQuery.core.options import QueryOptions
from TextQuery.utils.log import log


def _fold(kind: type[And] | type[Or]):
    def action(tokens: pp.ParseResults) -> Node:
        if len(tokens) == 1:
            return tokens[0]
        return kind(list(tokens))

    return action


def _pattern_literal(tokens: pp.ParseResults) -> WordTerm:
    return WordTerm(tokens[0][1:-1].replace("\\/", "/"), pattern_literal=True)


@cache
def build_grammar(attribute_delimiter: str | None) -> pp.ParserElement:
    """Build the query grammar for one attribute delimiter.

    Args:
        attribute_delimiter: Separator of field terms; empty or None
            disables them.

    Returns:
        A parser element producing a single `Node`.
    """
    and_kw = pp.Keyword("AND")
    or_kw = pp.Keyword("OR")
    not_kw = pp.Keyword("NOT")
    keyword = and_kw | or_kw | not_kw

    phrase = pp.QuotedString('"', esc_char="\\").set_parse_action(lambda t: PhraseTerm(t[0]))
    pattern = pp.Regex(r"/(?:\\.|[^/\\])+/").set_parse_action(_pattern_literal)
    word = (~keyword + pp.Regex(r'[^\s()"\-][^\s()"]*')).set_parse_action(lambda t: WordTerm(t[0]))
    value = (phrase | pattern | word).set_name("term")

    expression = pp.Forward()
    group = (pp.Suppress("(") + expression + pp.Suppress(")")).set_parse_action(lambda t: Group(t[0]))

    if attribute_delimiter:
        delim = re.escape(attribute_delimiter)
        field_name = pp.Regex(rf'(?:(?!{delim})[^\s()"\-])(?:(?!{delim})[^\s()"])*{delim}')
        field_name.set_parse_action(lambda t: t[0][: -len(attribute_delimiter)])
        field_term = (field_name + value.copy().leave_whitespace()).set_parse_action(
            lambda t: FieldTerm(t[0], t[1])
        )
        primary = group | field_term | value
    else:
        primary = group | value

    unary = pp.Forward()
    negation = ((not_kw | pp.Literal("-")).suppress() + unary).set_parse_action(lambda t: Not(t[0]))
    unary <<= negation | primary

    and_expr = (unary + pp.ZeroOrMore(pp.Optional(and_kw).suppress() + unary)).set_parse_action(_fold(And))
    or_expr = (and_expr + pp.ZeroOrMore(or_kw.suppress() + and_expr)).set_parse_action(_fold(Or))
    expression <<= or_expr

    return expression + pp.StringEnd()


def parse(text: str, options: QueryOptions) -> Node:
    """Parse a query string into its AST root.

    Args:
        text: Query string.
        options: Active options; only ``attribute_delimiter`` is used here.

    Returns:
        The root node.

    Raises:
        ParseFailure: If the text does not conform to the grammar.
    """
    grammar = build_grammar(options.field_separator)
    try:
        result = grammar.parse_string(text, parse_all=True)
    except pp.ParseBaseException as e:
        diagnostic = ParseDiagnostic(
            line=e.lineno,
            column=e.col,
            offset=e.loc,
            expected=str(e.parser_element) if e.parser_element is not None else "",
            message=e.msg,
        )
        log.debug("Query %r failed to parse: %s", text, diagnostic)
        raise ParseFailure(text, [diagnostic]) from e

    root = result[0]
    log.debug("Parsed query %r as %r", text, root)
    return root
