"""
Document backends.

A backend receives rows from composition one at a time. The protocol is a single
method so that any layout target (PDF writer, test double, preview) can be
plugged in without composition knowing about it.
"""

from typing import List, Protocol, Sequence

from folio.contexts.composition.render_commands import Column, Row


class DocumentBackend(Protocol):
    def add_row(self, height: float, columns: Sequence[Column]) -> None:
        ...


class RecordingBackend:
    """Keeps every row in memory. Used for dry runs and tests."""

    def __init__(self):
        self.rows: List[Row] = []

    def add_row(self, height: float, columns: Sequence[Column]) -> None:
        self.rows.append(Row(height, list(columns)))

    def texts(self) -> List[str]:
        """Text of every text column, in document order."""
        return [text for row in self.rows for text in row.texts]
