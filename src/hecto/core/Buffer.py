# hecto/core/Buffer.py
"""Buffer Module
===============
The ordered sequence of rows that makes up one file being edited.

The buffer owns every ``Row``, the optional filename, the dirty flag and the
``HighlightOptions`` derived from the filename. It exposes position-addressed
editing (``insert``/``delete``), buffer-wide bidirectional search (``find``)
and drives the highlighter over the rows that are about to be rendered
(``highlight``).

Rows are created on load, when typing on the append line past the last row,
and by splitting a row on newline; they are destroyed only when deleting at
the end of a row merges the following row into it.

Highlighting is recomputed from row 0 on every call, threading the
multiline-comment carry from row to row and starting from ``False``.
``Row.is_highlighted`` is maintained but never used to skip work.
"""

import logging
from typing import Iterator, Optional

from hecto.core.HighlightOptions import FileType, HighlightOptions
from hecto.core.Position import Position, SearchDirection
from hecto.core.Row import Row
from hecto.utils.fileio import load_lines, save_lines


class Buffer:
    """Class Buffer
    ===============
    Rows of text plus the file metadata the editor needs.

    Attributes:
        rows (list[Row]): The lines, in order. Empty for a new unnamed buffer.
        filename (Optional[str]): Path used by ``save()``.
        dirty (bool): True once an edit happened since load or save.
        auto_indent (bool): Carry the leading indentation of a row onto the
            row created by splitting it.
        highlight_options (HighlightOptions): Active highlighting profile.
    """

    INDENT_GRAPHEMES: tuple[str, ...] = (" ", "\t")

    def __init__(
        self,
        lines: Optional[list[str]] = None,
        filename: Optional[str] = None,
        auto_indent: bool = True,
    ) -> None:
        self.rows: list[Row] = [Row(line) for line in lines or []]
        self.filename: Optional[str] = filename
        self.dirty: bool = False
        self.auto_indent: bool = auto_indent
        self.highlight_options: HighlightOptions = HighlightOptions.from_filename(filename)

    @classmethod
    def open(cls, filename: str, auto_indent: bool = True) -> "Buffer":
        """Loads ``filename`` into a new buffer.

        Raises:
            OSError: If the file cannot be read.
        """
        lines = load_lines(filename)
        logging.info(f"Buffer: opened '{filename}' ({len(lines)} rows)")
        return cls(lines, filename=filename, auto_indent=auto_indent)

    def save(self) -> int:
        """Writes all rows to ``filename`` and returns the number of bytes written.

        An unnamed buffer writes nothing and returns 0. The highlighting
        profile is rebuilt since the filename may have changed.

        Raises:
            OSError: If the file cannot be written; the buffer stays dirty.
        """
        if not self.filename:
            return 0
        written = save_lines(self.filename, (row.string for row in self.rows))
        self.highlight_options = HighlightOptions.from_filename(self.filename)
        self.dirty = False
        return written

    # --- Queries ---
    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def is_empty(self) -> bool:
        return not self.rows

    def row(self, index: int) -> Optional[Row]:
        if 0 <= index < len(self.rows):
            return self.rows[index]
        return None

    @property
    def file_type(self) -> Optional[FileType]:
        return self.highlight_options.file_type

    def lines(self) -> list[str]:
        return [row.string for row in self.rows]

    def indentation_at(self, at: Position) -> int:
        """Number of indentation graphemes a newline at ``at`` carries over."""
        row = self.row(at.y)
        if not self.auto_indent or row is None:
            return 0
        for pattern in self.INDENT_GRAPHEMES:
            run = row.get_leading_run_length(pattern)
            if run:
                return min(run, at.x)
        return 0

    # --- Editing ---
    def insert(self, at: Position, ch: str) -> None:
        """Inserts ``ch`` at ``at``; a newline splits the row.

        A row index past the append point is ignored.
        """
        if at.y > len(self.rows):
            return

        self.dirty = True
        if ch == "\n":
            self._insert_newline(at)
        elif at.y == len(self.rows):
            row = Row()
            row.insert(0, ch)
            self.rows.append(row)
        else:
            self.rows[at.y].insert(at.x, ch)
        self._unhighlight_rows(at.y)

    def _insert_newline(self, at: Position) -> None:
        if at.y == len(self.rows):
            self.rows.append(Row())
            return

        indent = self.indentation_at(at)
        current = self.rows[at.y]
        new_row = current.split(at.x)
        if indent:
            new_row.insert(0, "".join(current.graphemes()[:indent]))
        self.rows.insert(at.y + 1, new_row)
        logging.debug(f"Buffer: split row {at.y} at column {at.x} (indent {indent})")

    def delete(self, at: Position) -> None:
        """Deletes the grapheme at ``at``, merging the next row at end of row."""
        if at.y >= len(self.rows):
            return

        self.dirty = True
        row = self.rows[at.y]
        if at.x >= row.length and at.y + 1 < len(self.rows):
            next_row = self.rows.pop(at.y + 1)
            row.append(next_row)
            logging.debug(f"Buffer: merged row {at.y + 1} into row {at.y}")
        else:
            row.delete(at.x)
        self._unhighlight_rows(at.y)

    def _unhighlight_rows(self, start: int) -> None:
        for row in self.rows[max(0, start - 1):]:
            row.is_highlighted = False

    # --- Searching ---
    def find(
        self,
        query: str,
        at: Position,
        direction: SearchDirection = SearchDirection.FORWARD,
    ) -> Optional[Position]:
        """Searches the buffer from ``at`` without wrapping around.

        Forward scans ``at.y`` to the last row, starting at ``at.x`` on the
        first row and at column 0 after that. Backward scans ``at.y`` down to
        row 0, starting at ``at.x`` on the first row and at the end of every
        earlier row.

        Returns:
            Optional[Position]: Position of the first match, or ``None``.
        """
        if not query or at.y >= len(self.rows):
            return None

        if direction is SearchDirection.FORWARD:
            row_indices = range(at.y, len(self.rows))
        else:
            row_indices = range(at.y, -1, -1)

        for y in row_indices:
            row = self.rows[y]
            if y == at.y:
                x = at.x
            elif direction is SearchDirection.FORWARD:
                x = 0
            else:
                x = row.length
            index = row.find(query, x, direction)
            if index is not None:
                logging.debug(f"Buffer: found {query!r} at ({index}, {y}) searching {direction.value}")
                return Position(index, y)
        return None

    # --- Highlighting ---
    def highlight(self, word: Optional[str] = None, until: Optional[int] = None) -> None:
        """Re-highlights rows ``0 .. min(until + 1, len(rows))``.

        Args:
            word: Search word overlaid as ``Highlight.MATCH``.
            until: Last row index needed by the renderer; ``None`` means all
                rows.
        """
        end = len(self.rows) if until is None else min(until + 1, len(self.rows))
        start_with_comment = False
        for row in self.rows[:end]:
            start_with_comment = row.highlight(self.highlight_options, word, start_with_comment)
