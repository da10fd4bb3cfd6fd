"""Output renderers for match results.

Exports the OutputWriter base class and a factory that picks the writer
configured in ``output.format``.
"""

from __future__ import annotations

from TextQuery.config import AppConfig
from TextQuery.renderers.base import LineMatch, OutputWriter
from TextQuery.renderers.console import ConsoleOutputWriter, render_text
from TextQuery.renderers.json import JsonLinesWriter, render_json


def create_output_writer(config: AppConfig) -> OutputWriter:
    """Create the output writer for the configured format.

    Raises:
        ValueError: If the format is unknown.
    """
    if config.output.format == "text":
        return ConsoleOutputWriter(line_numbers=config.output.line_numbers)
    if config.output.format == "json":
        return JsonLinesWriter()
    raise ValueError(f"Unsupported output format: {config.output.format}")


__all__ = [
    "ConsoleOutputWriter",
    "JsonLinesWriter",
    "LineMatch",
    "OutputWriter",
    "create_output_writer",
    "render_json",
    "render_text",
]
