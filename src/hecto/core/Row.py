# hecto/core/Row.py
"""Row Module
============
A single line of text addressed by grapheme cluster, plus its highlight cache.

All column arguments are grapheme offsets, never code point or byte offsets.
The content is kept as a plain ``str`` and segmented with the ``grapheme``
package whenever a column has to be resolved; ``length`` caches the cluster
count and is refreshed after every mutation.

Out-of-range columns never raise: inserting past the end appends, deleting
past the end does nothing, and searching from past the end finds nothing.
"""

from typing import Optional

import grapheme

from hecto.core.Highlighter import Highlight, Highlighter
from hecto.core.HighlightOptions import HighlightOptions
from hecto.core.Position import SearchDirection


class Row:
    """Class Row
    ============
    One line of the buffer.

    Attributes:
        string (str): The line content without its line terminator.
        length (int): Number of grapheme clusters in ``string``.
        highlighting (list[Highlight]): One class per grapheme, valid right
            after ``highlight()``; edits do not update it.
        is_highlighted (bool): Set by ``highlight()`` and cleared by edits.
            The render path re-highlights every frame and does not consult it.
    """

    def __init__(self, string: str = "") -> None:
        self.string: str = string
        self.length: int = grapheme.length(string)
        self.highlighting: list[Highlight] = []
        self.is_highlighted: bool = False

    def __len__(self) -> int:
        return self.length

    def __repr__(self) -> str:
        return f"Row({self.string!r})"

    def graphemes(self) -> list[str]:
        return list(grapheme.graphemes(self.string))

    def _set_string(self, string: str) -> None:
        self.string = string
        self.length = grapheme.length(string)
        self.is_highlighted = False

    # --- Editing ---
    def insert(self, at: int, text: str) -> None:
        """Inserts ``text`` before the grapheme at ``at`` (appends past the end)."""
        if at >= self.length:
            self._set_string(self.string + text)
            return
        clusters = self.graphemes()
        clusters.insert(max(0, at), text)
        self._set_string("".join(clusters))

    def delete(self, at: int) -> None:
        """Removes the grapheme at ``at``; a no-op past the end."""
        if at < 0 or at >= self.length:
            return
        clusters = self.graphemes()
        del clusters[at]
        self._set_string("".join(clusters))

    def split(self, at: int) -> "Row":
        """Truncates this row before ``at`` and returns the remainder as a new row."""
        clusters = self.graphemes()
        at = max(0, at)
        remainder = Row("".join(clusters[at:]))
        self._set_string("".join(clusters[:at]))
        self.highlighting = []
        return remainder

    def append(self, other: "Row") -> None:
        """Concatenates ``other`` onto this row."""
        self._set_string(self.string + other.string)

    def get_leading_run_length(self, pattern: str) -> int:
        """Counts the leading graphemes equal to the single-grapheme ``pattern``."""
        count = 0
        for cluster in grapheme.graphemes(self.string):
            if cluster != pattern:
                break
            count += 1
        return count

    # --- Searching ---
    def find(
        self,
        query: str,
        at: int,
        direction: SearchDirection = SearchDirection.FORWARD,
    ) -> Optional[int]:
        """Finds ``query`` in this row and returns the grapheme column of the match.

        Forward searches ``[at, length)`` and returns the leftmost match;
        backward searches ``[0, at)`` and returns the rightmost match. Only
        matches that start and end on grapheme boundaries count, so a query
        never matches half of a cluster.

        Returns:
            Optional[int]: Column of the match, or ``None`` for an empty
            query, an out-of-range ``at``, or no match.
        """
        if not query or at < 0 or at > self.length:
            return None

        clusters = self.graphemes()
        if direction is SearchDirection.FORWARD:
            start, end = at, self.length
        else:
            start, end = 0, at
        window = clusters[start:end]

        # Code point offset of every cluster boundary -> grapheme index.
        boundaries: dict[int, int] = {}
        offset = 0
        for index, cluster in enumerate(window):
            boundaries[offset] = index
            offset += len(cluster)
        boundaries[offset] = len(window)

        haystack = "".join(window)
        candidates = []
        found = haystack.find(query)
        while found != -1:
            if found in boundaries and found + len(query) in boundaries:
                if direction is SearchDirection.FORWARD:
                    return start + boundaries[found]
                candidates.append(boundaries[found])
            found = haystack.find(query, found + 1)

        if candidates:
            return start + candidates[-1]
        return None

    # --- Highlighting ---
    def highlight(
        self,
        options: HighlightOptions,
        word: Optional[str] = None,
        start_with_comment: bool = False,
    ) -> bool:
        """Recomputes ``highlighting`` and returns the multiline-comment carry.

        Args:
            options: Enabled classes and keyword lists.
            word: Search word to overlay with ``Highlight.MATCH``, if any.
            start_with_comment: Whether the previous row ended inside an
                unterminated multiline comment.

        Returns:
            bool: True if this row ends inside an unterminated multiline comment.
        """
        clusters = self.graphemes()
        self.highlighting, ends_in_comment = Highlighter(options).highlight(
            clusters, start_with_comment
        )
        self._highlight_match(word)
        self.is_highlighted = True
        return ends_in_comment

    def _highlight_match(self, word: Optional[str]) -> None:
        """Overwrites every occurrence of ``word`` with ``Highlight.MATCH``."""
        if not word:
            return
        word_length = grapheme.length(word)
        index = 0
        while True:
            match = self.find(word, index, SearchDirection.FORWARD)
            if match is None:
                break
            next_index = match + word_length
            for position in range(match, min(next_index, len(self.highlighting))):
                self.highlighting[position] = Highlight.MATCH
            index = next_index

    # --- Rendering ---
    def render(self, start: int, end: int, tab: str = " ") -> list[tuple[Highlight, str]]:
        """Returns the ``(class, grapheme)`` pairs of columns ``[start, end)``.

        Tabs are replaced by ``tab``. Positions without a highlight entry
        render as ``Highlight.NORMAL``.
        """
        end = min(end, self.length)
        start = min(start, end)
        spans: list[tuple[Highlight, str]] = []
        for index, cluster in enumerate(self.graphemes()[start:end], start):
            kind = self.highlighting[index] if index < len(self.highlighting) else Highlight.NORMAL
            spans.append((kind, tab if cluster == "\t" else cluster))
        return spans
