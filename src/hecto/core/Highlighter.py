# hecto/core/Highlighter.py
"""Highlighter Module
===================
A regex-free, single-pass token scanner that classifies every grapheme of a
row into a ``Highlight`` class.

The scanner is stateless between rows: the only lexical state that crosses
a row boundary is the boolean "inside an unterminated multiline comment"
flag. It is passed into ``Highlighter.highlight`` and returned from it, so
the caller threads it from one row into the next.

At every scan position the following rules are tried in order:

1. Continuation of a multiline comment carried in from a previous row.
2. Opening ``/*`` of a multiline comment.
3. ``//`` line comment (rest of the row).
4. Closed ``"..."`` string literal.
5. Closed ``'...'`` character literal.
6. A separator, optionally followed by a number run or a keyword run.
7. Anything else is classified ``NONE``.

Unterminated quotes are not highlighted at all: the quote itself falls
through to rule 7 and scanning resumes at the next grapheme. Numbers and
keywords are only recognised right after a separator or at the start of
the row.

The search-match overlay is not part of the scan; ``Row.highlight`` applies
it afterwards.
"""

import unicodedata
from enum import Enum
from typing import TYPE_CHECKING, Optional, Sequence


if TYPE_CHECKING:
    from hecto.core.HighlightOptions import HighlightOptions


class Highlight(Enum):
    """Highlight class of a single grapheme position."""

    NONE = "none"
    NORMAL = "normal"
    STRING = "string"
    CHARACTER = "character"
    COMMENT = "comment"
    MULTILINE_COMMENT = "multiline_comment"
    KEYWORD1 = "keyword1"
    KEYWORD2 = "keyword2"
    NUMBER = "number"
    MATCH = "match"

    def to_hex(self, overrides: Optional[dict[str, str]] = None) -> str:
        """Returns the display colour of this class as ``#RRGGBB``.

        ``overrides`` maps class names (``"number"``, ``"keyword1"``, ...) to
        user colours, typically the ``[colors]`` config section.
        """
        if overrides and self.value in overrides:
            return str(overrides[self.value])
        return HIGHLIGHT_COLORS.get(self, DEFAULT_TEXT_COLOR)


# Konsole "Breeze" palette.
DEFAULT_TEXT_COLOR = "#17A88B"
HIGHLIGHT_COLORS: dict[Highlight, str] = {
    Highlight.NUMBER: "#ED1515",
    Highlight.MATCH: "#44853A",
    Highlight.STRING: "#F67400",
    Highlight.CHARACTER: "#1D99F3",
    Highlight.COMMENT: "#3DAEE9",
    Highlight.MULTILINE_COMMENT: "#3DAEE9",
    Highlight.KEYWORD1: "#9B59B6",
    Highlight.KEYWORD2: "#FDBC4B",
}

SEPARATOR_CHARS = frozenset(";{} <>()[],.+-/*=-%")


def is_separator(grapheme: str) -> bool:
    """True for whitespace, control characters and the fixed punctuation set."""
    if not grapheme:
        return False
    ch = grapheme[0]
    return ch.isspace() or unicodedata.category(ch) == "Cc" or ch in SEPARATOR_CHARS


def is_ascii_digit(grapheme: str) -> bool:
    return len(grapheme) == 1 and "0" <= grapheme <= "9"


class Highlighter:
    """Classifies the graphemes of one row according to a ``HighlightOptions``.

    Attributes:
        options (HighlightOptions): Enabled classes and keyword lists.
    """

    MULTILINE_COMMENT_START: tuple[str, ...] = ("/", "*")
    MULTILINE_COMMENT_END: tuple[str, ...] = ("*", "/")
    LINE_COMMENT_START: tuple[str, ...] = ("/", "/")
    STRING_QUOTE = '"'
    CHARACTER_QUOTE = "'"

    def __init__(self, options: "HighlightOptions") -> None:
        self.options = options

    def highlight(
        self, graphemes: Sequence[str], in_multiline_comment: bool = False
    ) -> tuple[list[Highlight], bool]:
        """Scans ``graphemes`` left to right and classifies every position.

        Args:
            graphemes: The row content, one grapheme cluster per item.
            in_multiline_comment: Whether the previous row ended inside an
                unterminated multiline comment.

        Returns:
            tuple[list[Highlight], bool]: One class per grapheme, and whether
            the row ends inside an unterminated multiline comment.
        """
        opts = self.options
        classes: list[Highlight] = []
        length = len(graphemes)
        index = 0

        while index < length:
            # 1. Continuation of a comment opened on an earlier row.
            if opts.multiline_comments and in_multiline_comment:
                end = self._comment_end(graphemes, index)
                if end is None:
                    classes.extend([Highlight.MULTILINE_COMMENT] * (length - index))
                    return classes, True
                classes.extend([Highlight.MULTILINE_COMMENT] * (end - index))
                index = end
                in_multiline_comment = False
                continue

            # 2. A new multiline comment.
            if opts.multiline_comments and self._starts_with(
                graphemes, index, self.MULTILINE_COMMENT_START
            ):
                end = self._comment_end(graphemes, index + len(self.MULTILINE_COMMENT_START))
                if end is None:
                    classes.extend([Highlight.MULTILINE_COMMENT] * (length - index))
                    return classes, True
                classes.extend([Highlight.MULTILINE_COMMENT] * (end - index))
                index = end
                continue

            # 3. Line comment swallows the rest of the row.
            if opts.comments and self._starts_with(graphemes, index, self.LINE_COMMENT_START):
                classes.extend([Highlight.COMMENT] * (length - index))
                return classes, False

            # 4./5. Closed literals only.
            if opts.strings and graphemes[index] == self.STRING_QUOTE:
                end = self._literal_end(graphemes, index, self.STRING_QUOTE)
                if end is not None:
                    classes.extend([Highlight.STRING] * (end - index))
                    index = end
                    continue

            if opts.characters and graphemes[index] == self.CHARACTER_QUOTE:
                end = self._literal_end(graphemes, index, self.CHARACTER_QUOTE)
                if end is not None:
                    classes.extend([Highlight.CHARACTER] * (end - index))
                    index = end
                    continue

            # 6. Numbers and keywords, anchored on a separator or the row start.
            grapheme = graphemes[index]
            if is_separator(grapheme):
                classes.append(Highlight.NONE)
                end = self._token_after(graphemes, index + 1, classes)
                index = end if end is not None else index + 1
                continue
            if index == 0:
                end = self._token_after(graphemes, 0, classes)
                if end is not None:
                    index = end
                    continue

            # 7. Default.
            classes.append(Highlight.NONE)
            index += 1

        return classes, opts.multiline_comments and in_multiline_comment

    def _token_after(
        self, graphemes: Sequence[str], start: int, classes: list[Highlight]
    ) -> Optional[int]:
        """Classifies a number or keyword run beginning at ``start``.

        Appends the run's classes and returns the index after it, or returns
        ``None`` (appending nothing) when no run matches.
        """
        opts = self.options
        length = len(graphemes)

        if opts.numbers:
            end = start
            while end < length and is_ascii_digit(graphemes[end]):
                end += 1
            if end > start and (end == length or is_separator(graphemes[end])):
                classes.extend([Highlight.NUMBER] * (end - start))
                return end

        if not (opts.primary_keywords or opts.secondary_keywords):
            return None

        end = start
        while end < length and not is_separator(graphemes[end]):
            end += 1
        if end == start:
            return None

        word = "".join(graphemes[start:end])
        if word in opts.primary_keywords:
            classes.extend([Highlight.KEYWORD1] * (end - start))
            return end
        if word in opts.secondary_keywords:
            classes.extend([Highlight.KEYWORD2] * (end - start))
            return end
        return None

    def _comment_end(self, graphemes: Sequence[str], start: int) -> Optional[int]:
        """Index just past the first ``*/`` at or after ``start``."""
        delimiter = self.MULTILINE_COMMENT_END
        for index in range(start, len(graphemes) - len(delimiter) + 1):
            if self._starts_with(graphemes, index, delimiter):
                return index + len(delimiter)
        return None

    @staticmethod
    def _literal_end(graphemes: Sequence[str], start: int, quote: str) -> Optional[int]:
        for index in range(start + 1, len(graphemes)):
            if graphemes[index] == quote:
                return index + 1
        return None

    @staticmethod
    def _starts_with(graphemes: Sequence[str], index: int, delimiter: tuple[str, ...]) -> bool:
        return tuple(graphemes[index:index + len(delimiter)]) == delimiter
