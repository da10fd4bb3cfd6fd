"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to their respective runners.
"""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

import click

from TextQuery.cli.runner import CommandRunner
from TextQuery.config import DEFAULT_CONFIG_PATH, AppConfig, load_config_file


@click.group(help="TextQuery: match text against boolean search queries.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    envvar="TEXTQUERY_CONFIG",
    help="Path to YAML config file, merged over the defaults.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    Loads the config file once for all commands.

    Args:
        ctx: Click context.
        config_path: Path to YAML config file.
    """
    try:
        ctx.obj = load_config_file(config_path)
    except (OSError, TypeError, ValueError) as e:
        raise click.UsageError(f"Invalid config {config_path}: {e}") from e


def _matching_options(func):
    func = click.option(
        "--regexp/--no-regexp",
        default=None,
        help="Treat every term as a regular expression.",
    )(func)
    func = click.option(
        "--attribute-delimiter",
        default=None,
        help="Separator of field terms (empty disables them).",
    )(func)
    func = click.option(
        "--ignore-case/--case-sensitive",
        "ignore_case",
        default=None,
        help="Match regardless of case.",
    )(func)
    func = click.option(
        "-d",
        "--delimiter",
        "delimiters",
        multiple=True,
        help="Word delimiter; repeatable. Wrap in /.../ for a pattern.",
    )(func)
    return func


def _apply_matching(
    cfg: AppConfig,
    delimiters: tuple[str, ...],
    ignore_case: bool | None,
    attribute_delimiter: str | None,
    regexp: bool | None,
    **output: object,
) -> AppConfig:
    try:
        return cfg.with_overrides(
            match={
                "delimiters": delimiters or None,
                "ignore_case": ignore_case,
                "attribute_delimiter": attribute_delimiter,
                "regexp": regexp,
            },
            output=output,
        )
    except (TypeError, ValueError) as e:
        raise click.UsageError(str(e)) from e


@cli.command("match")
@click.argument("query")
@click.argument("files", nargs=-1, type=click.File("r", encoding="utf-8"))
@_matching_options
@click.option("--format", "output_format", type=click.Choice(["text", "json"]), default=None, help="Output format.")
@click.option("-v", "--invert/--no-invert", default=None, help="Report lines that do not match.")
@click.option("-n", "--line-numbers/--no-line-numbers", default=None, help="Prefix lines with source and number.")
@click.pass_context
def match_cmd(
    ctx: click.Context,
    query: str,
    files: tuple[TextIO, ...],
    delimiters: tuple[str, ...],
    ignore_case: bool | None,
    attribute_delimiter: str | None,
    regexp: bool | None,
    output_format: str | None,
    invert: bool | None,
    line_numbers: bool | None,
) -> None:
    """Print the lines of FILES (or stdin) that satisfy QUERY.

    Exits with status 1 when no line was reported, like grep.
    """
    cfg = _apply_matching(
        ctx.obj,
        delimiters,
        ignore_case,
        attribute_delimiter,
        regexp,
        format=output_format,
        invert=invert,
        line_numbers=line_numbers,
    )
    inputs = files or (click.get_text_stream("stdin"),)
    reported = CommandRunner(cfg).run_match(ctx.command.name, query, inputs)
    if reported == 0:
        ctx.exit(1)


@cli.command("terms")
@click.argument("query")
@_matching_options
@click.pass_context
def terms_cmd(
    ctx: click.Context,
    query: str,
    delimiters: tuple[str, ...],
    ignore_case: bool | None,
    attribute_delimiter: str | None,
    regexp: bool | None,
) -> None:
    """Print the literal terms of QUERY, one per line."""
    cfg = _apply_matching(ctx.obj, delimiters, ignore_case, attribute_delimiter, regexp)
    CommandRunner(cfg).run_terms(ctx.command.name, query)


@cli.command("check")
@click.argument("query")
@_matching_options
@click.pass_context
def check_cmd(
    ctx: click.Context,
    query: str,
    delimiters: tuple[str, ...],
    ignore_case: bool | None,
    attribute_delimiter: str | None,
    regexp: bool | None,
) -> None:
    """Parse QUERY and print its syntax tree or the parse errors."""
    cfg = _apply_matching(ctx.obj, delimiters, ignore_case, attribute_delimiter, regexp)
    if not CommandRunner(cfg).run_check(ctx.command.name, query):
        ctx.exit(2)
