"""Base classes for match output writers.

Separates the matching loop from how results are printed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LineMatch:
    """One reported input line.

    Attributes:
        source: Input name (file path, or ``-`` for stdin).
        line_number: 1-based line number within the source.
        text: Line content without the trailing newline.
        matched: Whether the line satisfied the query.
    """

    source: str
    line_number: int
    text: str
    matched: bool


class OutputWriter(ABC):
    """Abstract base class for match output writers."""

    @abstractmethod
    def write_match(self, match: LineMatch) -> None:
        """Write one reported line."""

    @abstractmethod
    def finalize(self) -> None:
        """Flush anything accumulated by the writer."""
