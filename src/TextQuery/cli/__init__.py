"""CLI package for TextQuery command orchestration.

Click definitions live in `ui`, command orchestration in `runner` and the
command logic in `commands`.
"""

from __future__ import annotations

__all__ = ["CommandRunner", "cli", "main"]

from dotenv import load_dotenv

from TextQuery.cli.runner import CommandRunner
from TextQuery.cli.ui import cli


def main() -> None:
    """Run TextQuery CLI.

    Entry point referenced by the console script in pyproject.toml. Variables
    from a .env file (such as TEXTQUERY_CONFIG) are loaded first.
    """
    load_dotenv()
    cli()
