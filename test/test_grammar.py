"""Tests for the query grammar."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from TextQuery.core.errors import ParseFailure
from TextQuery.core.nodes import And, FieldTerm, Group, Not, Or, PhraseTerm, WordTerm
from TextQuery.core.options import QueryOptions
from TextQuery.grammar import parse


def _parse(text: str, **options) -> object:
    return parse(text, QueryOptions(**options))


class TestGrammar(unittest.TestCase):
    def test_single_word(self) -> None:
        self.assertEqual(_parse("cat"), WordTerm("cat"))

    def test_fuzzy_word_is_kept_raw(self) -> None:
        self.assertEqual(_parse("2~cat~"), WordTerm("2~cat~"))

    def test_juxtaposition_is_and(self) -> None:
        self.assertEqual(_parse("cat dog bird"), And([WordTerm("cat"), WordTerm("dog"), WordTerm("bird")]))

    def test_explicit_and(self) -> None:
        self.assertEqual(_parse("cat AND dog"), And([WordTerm("cat"), WordTerm("dog")]))

    def test_or_binds_looser_than_and(self) -> None:
        self.assertEqual(
            _parse("cat dog OR bird"),
            Or([And([WordTerm("cat"), WordTerm("dog")]), WordTerm("bird")]),
        )

    def test_negation_forms(self) -> None:
        self.assertEqual(_parse("NOT cat"), Not(WordTerm("cat")))
        self.assertEqual(_parse("-cat"), Not(WordTerm("cat")))
        self.assertEqual(_parse("dog -cat"), And([WordTerm("dog"), Not(WordTerm("cat"))]))

    def test_inner_hyphen_is_part_of_word(self) -> None:
        self.assertEqual(_parse("e-mail"), WordTerm("e-mail"))

    def test_group_is_preserved(self) -> None:
        self.assertEqual(
            _parse("(cat OR dog) bird"),
            And([Group(Or([WordTerm("cat"), WordTerm("dog")])), WordTerm("bird")]),
        )

    def test_phrase(self) -> None:
        self.assertEqual(_parse('"big cat" OR dog'), Or([PhraseTerm("big cat"), WordTerm("dog")]))

    def test_phrase_with_escaped_quote(self) -> None:
        self.assertEqual(_parse(r'"say \"hi\""'), PhraseTerm('say "hi"'))

    def test_pattern_literal(self) -> None:
        self.assertEqual(_parse(r"/ca[tr]\d/"), WordTerm(r"ca[tr]\d", pattern_literal=True))
        self.assertEqual(_parse(r"/a\/b/"), WordTerm("a/b", pattern_literal=True))

    def test_field_term(self) -> None:
        self.assertEqual(_parse("title:cat"), FieldTerm("title", WordTerm("cat")))
        self.assertEqual(_parse('title:"big cat"'), FieldTerm("title", PhraseTerm("big cat")))

    def test_negated_field_term(self) -> None:
        self.assertEqual(_parse("-title:cat"), Not(FieldTerm("title", WordTerm("cat"))))

    def test_hyphen_after_attribute_delimiter_is_a_word(self) -> None:
        self.assertEqual(_parse("title:-cat"), WordTerm("title:-cat"))

    def test_custom_attribute_delimiter(self) -> None:
        self.assertEqual(_parse("title=cat", attribute_delimiter="="), FieldTerm("title", WordTerm("cat")))
        self.assertEqual(_parse("title:cat", attribute_delimiter="="), WordTerm("title:cat"))

    def test_disabled_attribute_delimiter(self) -> None:
        self.assertEqual(_parse("title:cat", attribute_delimiter=""), WordTerm("title:cat"))

    def test_keywords_are_case_sensitive(self) -> None:
        self.assertEqual(_parse("cat or dog"), And([WordTerm("cat"), WordTerm("or"), WordTerm("dog")]))

    def test_keyword_prefix_is_a_word(self) -> None:
        self.assertEqual(_parse("ANDROID"), WordTerm("ANDROID"))


class TestGrammarFailures(unittest.TestCase):
    def test_malformed_queries(self) -> None:
        for text in ("", "   ", "(cat", "cat)", "cat AND", "OR dog", "NOT", '"open'):
            with self.subTest(text=text):
                with self.assertRaises(ParseFailure) as ctx:
                    _parse(text)
                self.assertEqual(ctx.exception.query, text)
                self.assertTrue(ctx.exception.diagnostics)

    def test_diagnostic_position(self) -> None:
        with self.assertRaises(ParseFailure) as ctx:
            _parse("cat )")
        diagnostic = ctx.exception.diagnostics[0]
        self.assertEqual(diagnostic.line, 1)
        self.assertEqual(diagnostic.offset, 4)
        self.assertEqual(diagnostic.column, 5)
        self.assertIn("cat )", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
