"""Query service layer for TextQuery.

Provides the `TextQuery` facade and a factory building one from
application configuration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from TextQuery.core.cache import TermCache
from TextQuery.services.query import TextQuery

if TYPE_CHECKING:
    from TextQuery.config import AppConfig


def create_text_query(config: AppConfig, query: str, *, cache: TermCache | None = None) -> TextQuery:
    """Parse ``query`` with the matching options of ``config``.

    Args:
        config: Application configuration.
        query: Query string.
        cache: Optional pattern cache; the process-wide cache by default.

    Returns:
        Parsed query.

    Raises:
        ParseFailure: If the query does not parse.
    """
    return TextQuery(query, config.match.to_options(), cache=cache)


__all__ = [
    "TextQuery",
    "create_text_query",
]
