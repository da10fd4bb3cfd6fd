"""Tests for layered config parsing and validation."""

import re
import sys
import tempfile
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from TextQuery.config import (
    default_config,
    load_config_file,
    load_config_with_defaults,
    merge_config_dicts,
    parse_config_dict,
)


def _base_raw_config() -> dict:
    return {
        "log": {"level": "INFO", "to_file": False, "dir": "log"},
        "match": {
            "delimiter": [" ", "/[,;]/"],
            "ignore_case": True,
            "attribute_delimiter": ":",
            "regexp": False,
        },
        "output": {"format": "text", "invert": False, "line_numbers": False},
    }


class TestConfigLayering(unittest.TestCase):
    def test_parse_success_nested_access(self) -> None:
        cfg = parse_config_dict(_base_raw_config())
        self.assertEqual(cfg.runtime.level, "INFO")
        self.assertEqual(cfg.match.delimiters, (" ", "/[,;]/"))
        self.assertEqual(cfg.output.format, "text")

    def test_optional_sections_take_defaults(self) -> None:
        cfg = parse_config_dict({"log": {"level": "debug", "to_file": False, "dir": "log"}})
        self.assertEqual(cfg.runtime.level, "DEBUG")
        self.assertEqual(cfg.match.delimiters, (" ",))
        self.assertTrue(cfg.match.ignore_case)
        self.assertEqual(cfg.output.format, "text")
        self.assertEqual(cfg.match, default_config().match)

    def test_to_options_compiles_pattern_delimiters(self) -> None:
        options = parse_config_dict(_base_raw_config()).match.to_options()
        self.assertEqual(options.delimiter, (" ", re.compile("[,;]")))
        self.assertEqual(options.delimiter_fragment, r"(?:\ |(?-i:[,;]))")

    def test_single_string_delimiter(self) -> None:
        raw = _base_raw_config()
        raw["match"]["delimiter"] = ","
        self.assertEqual(parse_config_dict(raw).match.delimiters, (",",))

    def test_null_attribute_delimiter_disables_fields(self) -> None:
        raw = _base_raw_config()
        raw["match"]["attribute_delimiter"] = None
        options = parse_config_dict(raw).match.to_options()
        self.assertIsNone(options.field_separator)

    def test_missing_log_section(self) -> None:
        raw = _base_raw_config()
        del raw["log"]
        with self.assertRaisesRegex(ValueError, "log"):
            parse_config_dict(raw)

    def test_unknown_log_level(self) -> None:
        raw = _base_raw_config()
        raw["log"]["level"] = "LOUD"
        with self.assertRaisesRegex(ValueError, "log\\.level"):
            parse_config_dict(raw)

    def test_unknown_output_format_error_contains_key(self) -> None:
        raw = _base_raw_config()
        raw["output"]["format"] = "xml"
        with self.assertRaisesRegex(ValueError, "output\\.format"):
            parse_config_dict(raw)

    def test_wrong_type_error_contains_key(self) -> None:
        raw = _base_raw_config()
        raw["match"]["ignore_case"] = "yes"
        with self.assertRaisesRegex(TypeError, "match\\.ignore_case"):
            parse_config_dict(raw)

    def test_invalid_delimiter_pattern(self) -> None:
        raw = _base_raw_config()
        raw["match"]["delimiter"] = ["/[/"]
        with self.assertRaisesRegex(ValueError, "match\\.delimiter\\[0\\]"):
            parse_config_dict(raw)

    def test_empty_delimiter(self) -> None:
        raw = _base_raw_config()
        raw["match"]["delimiter"] = []
        with self.assertRaisesRegex(ValueError, "match\\.delimiter"):
            parse_config_dict(raw)

    def test_with_overrides_ignores_none(self) -> None:
        cfg = parse_config_dict(_base_raw_config())
        updated = cfg.with_overrides(
            match={"ignore_case": False, "delimiters": None},
            output={"format": "json", "invert": None},
        )
        self.assertFalse(updated.match.ignore_case)
        self.assertEqual(updated.match.delimiters, cfg.match.delimiters)
        self.assertEqual(updated.output.format, "json")
        self.assertFalse(updated.output.invert)
        self.assertTrue(cfg.match.ignore_case)

    def test_merge_config_dicts_is_deep(self) -> None:
        merged = merge_config_dicts(_base_raw_config(), {"match": {"ignore_case": False}})
        self.assertFalse(merged["match"]["ignore_case"])
        self.assertEqual(merged["match"]["attribute_delimiter"], ":")


class TestConfigFiles(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _write(self, name: str, text: str) -> Path:
        path = self.tmp / name
        path.write_text(text, encoding="utf-8")
        return path

    def test_repository_default_config(self) -> None:
        default_path = REPO_ROOT / "config" / "default.yml"
        cfg = load_config_file(default_path, default_path=default_path)
        self.assertEqual(cfg.runtime.level, "WARNING")
        options = cfg.match.to_options()
        self.assertIsNotNone(re.search(options.delimiter_fragment, "a\tb"))

    def test_override_is_merged_over_defaults(self) -> None:
        defaults = self._write("default.yml", "log: {level: INFO, to_file: false, dir: log}\n")
        override = self._write("custom.yml", "match:\n  ignore_case: false\n")
        cfg = load_config_with_defaults(override, default_path=defaults)
        self.assertEqual(cfg.runtime.level, "INFO")
        self.assertFalse(cfg.match.ignore_case)

    def test_missing_defaults_fall_back_to_builtin(self) -> None:
        override = self._write("custom.yml", "output:\n  format: json\n")
        cfg = load_config_file(override, default_path=self.tmp / "missing.yml")
        self.assertEqual(cfg.output.format, "json")
        self.assertEqual(cfg.runtime.level, "WARNING")

    def test_non_mapping_root(self) -> None:
        path = self._write("bad.yml", "- a\n- b\n")
        with self.assertRaisesRegex(ValueError, "mapping"):
            load_config_file(path, default_path=path)


if __name__ == "__main__":
    unittest.main()
