"""Tests for the click command-line interface."""

import json
import sys
import unittest
from pathlib import Path

from click.testing import CliRunner

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from TextQuery.cli import cli

NOTES = "the cat sat\na dog barked\nconcatenate\nbobcat here\n"


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self.runner = CliRunner()

    def _invoke(self, *args: str, stdin: str | None = None):
        with self.runner.isolated_filesystem():
            Path("notes.txt").write_text(NOTES, encoding="utf-8")
            return self.runner.invoke(cli, list(args), input=stdin, catch_exceptions=False)

    def test_match_file(self) -> None:
        result = self._invoke("match", "cat", "notes.txt")
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.output, "the cat sat\n")

    def test_match_stdin(self) -> None:
        result = self._invoke("match", "~cat OR dog", stdin=NOTES)
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.output.splitlines(), ["the cat sat", "a dog barked", "bobcat here"])

    def test_no_match_exits_with_one(self) -> None:
        result = self._invoke("match", "bird", "notes.txt")
        self.assertEqual(result.exit_code, 1)
        self.assertEqual(result.output, "")

    def test_invert_and_line_numbers(self) -> None:
        result = self._invoke("match", "-v", "-n", "cat OR dog", "notes.txt")
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.output.splitlines(), ["notes.txt:3:concatenate", "notes.txt:4:bobcat here"])

    def test_json_output(self) -> None:
        result = self._invoke("match", "--format", "json", "dog", "notes.txt")
        self.assertEqual(result.exit_code, 0)
        record = json.loads(result.output)
        self.assertEqual(record, {"source": "notes.txt", "line": 2, "text": "a dog barked", "matched": True})

    def test_case_sensitive_flag(self) -> None:
        result = self._invoke("match", "--case-sensitive", "CAT", stdin="the cat\nthe CAT\n")
        self.assertEqual(result.output, "the CAT\n")

    def test_delimiter_option(self) -> None:
        result = self._invoke("match", "-d", ",", "cat", stdin="dog,cat\ndog cat\n")
        self.assertEqual(result.output, "dog,cat\n")

    def test_config_file_is_merged(self) -> None:
        with self.runner.isolated_filesystem():
            Path("custom.yml").write_text("output:\n  line_numbers: true\n", encoding="utf-8")
            Path("notes.txt").write_text(NOTES, encoding="utf-8")
            result = self.runner.invoke(cli, ["--config", "custom.yml", "match", "dog", "notes.txt"])
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.output, "notes.txt:2:a dog barked\n")

    def test_bad_query_is_usage_error(self) -> None:
        result = self._invoke("match", "(cat", stdin="cat\n")
        self.assertEqual(result.exit_code, 2)
        self.assertIn("Could not parse", result.output)

    def test_invalid_term_is_usage_error(self) -> None:
        result = self._invoke("match", "~~", stdin="cat\n")
        self.assertEqual(result.exit_code, 2)
        self.assertIn("Invalid term", result.output)

    def test_terms(self) -> None:
        result = self._invoke("terms", 'cat ("big dog" OR title:bird)')
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.output.splitlines(), ["cat", "big dog", "bird"])

    def test_check_ok(self) -> None:
        result = self._invoke("check", "cat OR dog")
        self.assertEqual(result.exit_code, 0)
        self.assertIn("Or(", result.output)

    def test_check_reports_diagnostics(self) -> None:
        result = self._invoke("check", "cat AND")
        self.assertEqual(result.exit_code, 2)
        self.assertIn("error: line 1", result.output)


if __name__ == "__main__":
    unittest.main()
