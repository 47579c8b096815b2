# src/hecto/core/__init__.py
"""Public facade for hecto.core: re-export main classes from CamelCase modules.

Keeps one class per file (Row.py, Buffer.py, ...),
but provides flat imports for convenience and stability.
"""

# Re-export classes/symbols from CamelCase modules
from .Buffer import Buffer  # noqa: F401
from .Editor import Editor, StatusMessage  # noqa: F401
from .Highlighter import Highlight, Highlighter  # noqa: F401
from .HighlightOptions import FileType, HighlightOptions  # noqa: F401
from .Position import Position, SearchDirection  # noqa: F401
from .Row import Row  # noqa: F401


__all__ = [
    "Buffer",
    "Editor",
    "StatusMessage",
    "FileType",
    "Highlight",
    "Highlighter",
    "HighlightOptions",
    "Position",
    "SearchDirection",
    "Row",
]
