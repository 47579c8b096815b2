# hecto/core/Position.py
"""Caret coordinates and search direction shared by the buffer and the editor."""

from dataclasses import dataclass
from enum import Enum


@dataclass
class Position:
    """A caret location in grapheme columns (x) and row indices (y).

    ``x`` may equal the row length (end of row) and ``y`` may equal the
    row count (the append point after the last row).
    """

    x: int = 0
    y: int = 0

    def copy(self) -> "Position":
        return Position(self.x, self.y)


class SearchDirection(Enum):
    FORWARD = "forward"
    BACKWARD = "backward"
