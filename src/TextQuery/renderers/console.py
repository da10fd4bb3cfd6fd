"""Plain text output, one reported line per output line."""

from __future__ import annotations

from typing import Callable

import click

from TextQuery.renderers.base import LineMatch, OutputWriter


def render_text(match: LineMatch, *, line_numbers: bool = False) -> str:
    """Render a reported line, optionally prefixed with ``source:line:``."""
    if line_numbers:
        return f"{match.source}:{match.line_number}:{match.text}"
    return match.text


class ConsoleOutputWriter(OutputWriter):
    """Write reported lines to stdout."""

    def __init__(self, *, line_numbers: bool = False, echo: Callable[[str], None] = click.echo) -> None:
        self.line_numbers = line_numbers
        self._echo = echo

    def write_match(self, match: LineMatch) -> None:
        self._echo(render_text(match, line_numbers=self.line_numbers))

    def finalize(self) -> None:
        pass
