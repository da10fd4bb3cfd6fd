"""Command implementations for the TextQuery CLI.

Encapsulates what each command does, separated from CLI parameter
handling and output formatting.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, TextIO

from TextQuery.renderers import LineMatch, OutputWriter
from TextQuery.services.query import TextQuery
from TextQuery.utils.log import log


@dataclass(slots=True)
class MatchCommand:
    """Evaluate a query against every line of the given inputs.

    Attributes:
        query: Parsed query.
        inputs: Open text streams; each line is one document.
        output_writer: Receives the reported lines.
        invert: Report lines that do not match instead.
    """

    query: TextQuery
    inputs: Iterable[TextIO]
    output_writer: OutputWriter
    invert: bool = False

    def execute(self) -> int:
        """Run the query over all inputs.

        Returns:
            Number of reported lines.
        """
        reported = 0
        for stream in self.inputs:
            source = _source_name(stream)
            scanned = 0
            for line_number, line in enumerate(stream, start=1):
                scanned += 1
                text = line.rstrip("\r\n")
                matched = self.query.eval(text)
                if matched == self.invert:
                    continue
                self.output_writer.write_match(
                    LineMatch(source=source, line_number=line_number, text=text, matched=matched)
                )
                reported += 1
            log.info("Scanned %d lines from %s", scanned, source)
        self.output_writer.finalize()
        log.info("Reported %d lines", reported)
        return reported


@dataclass(slots=True)
class TermsCommand:
    """List the literal values of a query, one per call to ``echo``."""

    query: TextQuery
    echo: Callable[[str], None]

    def execute(self) -> int:
        terms = self.query.terms()
        for term in terms:
            self.echo(term)
        return len(terms)


def _source_name(stream: TextIO) -> str:
    name = getattr(stream, "name", None)
    if not isinstance(name, str) or name.startswith("<"):
        return "-"
    return name
