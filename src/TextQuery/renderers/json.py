"""JSON lines output.

Each reported line becomes one JSON object::

    {"source": "notes.txt", "line": 3, "text": "the cat sat", "matched": true}
"""

from __future__ import annotations

import json
from typing import Callable

import click

from TextQuery.renderers.base import LineMatch, OutputWriter


def render_json(match: LineMatch) -> dict:
    """Render a reported line into a JSON-serializable dict."""
    return {
        "source": match.source,
        "line": match.line_number,
        "text": match.text,
        "matched": match.matched,
    }


class JsonLinesWriter(OutputWriter):
    """Write one JSON object per reported line to stdout."""

    def __init__(self, *, echo: Callable[[str], None] = click.echo) -> None:
        self._echo = echo

    def write_match(self, match: LineMatch) -> None:
        self._echo(json.dumps(render_json(match), ensure_ascii=False))

    def finalize(self) -> None:
        pass
