"""Command runner for coordinating CLI execution.

Manages logging configuration, component creation and error handling for
command execution.
"""

from __future__ import annotations

from typing import Callable, Iterable, TextIO

import click

from TextQuery.cli.commands import MatchCommand, TermsCommand
from TextQuery.config import AppConfig
from TextQuery.core.errors import ParseFailure, QueryError
from TextQuery.renderers import create_output_writer
from TextQuery.services import create_text_query
from TextQuery.services.query import TextQuery
from TextQuery.utils.log import configure_logging, log


class CommandRunner:
    """Orchestrates command execution.

    Query errors become ``click.BadParameter`` (exit code 2); anything else
    is logged and turned into ``click.Abort``.
    """

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def run_match(self, action: str, query_text: str, inputs: Iterable[TextIO]) -> int:
        """Execute the match command.

        Args:
            action: The CLI command name (e.g., 'match').
            query_text: Query string.
            inputs: Open text streams to scan.

        Returns:
            Number of reported lines.
        """
        self._configure_logging(action)
        query = self._parse(query_text)
        try:
            command = MatchCommand(
                query=query,
                inputs=inputs,
                output_writer=create_output_writer(self.config),
                invert=self.config.output.invert,
            )
            return command.execute()
        except QueryError as e:
            raise click.BadParameter(str(e), param_hint="QUERY") from e
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Match failed: %s", e)
            raise click.Abort from e

    def run_terms(self, action: str, query_text: str, echo: Callable[[str], None] = click.echo) -> int:
        """Execute the terms command; returns the number of terms."""
        self._configure_logging(action)
        return TermsCommand(query=self._parse(query_text), echo=echo).execute()

    def run_check(self, action: str, query_text: str, echo: Callable[[str], None] = click.echo) -> bool:
        """Parse the query and report the outcome; returns whether it parsed."""
        self._configure_logging(action)
        query = TextQuery(options=self.config.match.to_options())
        try:
            query.parse(query_text)
        except ParseFailure:
            for diagnostic in query.terminal_failures():
                echo(f"error: {diagnostic}")
            return False
        echo(repr(query.root))
        return True

    def _parse(self, query_text: str) -> TextQuery:
        try:
            return create_text_query(self.config, query_text)
        except ParseFailure as e:
            log.debug("Diagnostics: %s", e.diagnostics)
            raise click.BadParameter(str(e), param_hint="QUERY") from e

    def _configure_logging(self, action: str) -> None:
        log_path = configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )
        if log_path is not None:
            log.debug("Logging to %s", log_path)
