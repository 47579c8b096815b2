# hecto/ui/DrawScreen.py
"""DrawScreen.py
========================
DrawScreen is the viewport and render sink of the hecto editor.

It is responsible for:
- reporting the size of the text area,
- drawing highlighted rows as ``(Highlight, grapheme)`` spans,
- drawing the inverted status bar and the message bar below it,
- placing, hiding and showing the caret,
- mapping highlight classes to curses colour pairs.

The text area is the whole window except the two bottom lines. Wide
graphemes (wcwidth == 2) are never split at the right edge, and every frame
is pushed to the terminal in one ``doupdate()``.
"""

import curses
import logging
from typing import Any, Optional, Sequence

from wcwidth import wcswidth, wcwidth

from hecto.core.Highlighter import Highlight
from hecto.utils.utils import hex_to_xterm

logger = logging.getLogger("hecto")

Span = tuple[Highlight, str]


## ================= class DrawScreen ==============================
class DrawScreen:
    """DrawScreen Class
    =========================
    Thin curses wrapper used by the editor loop for everything it shows.

    Attributes:
        STATUS_LINES (int): Lines reserved below the text area (status bar
            and message bar).
        stdscr (curses.window): The main curses window object.
        config (dict[str, Any]): Editor configuration dictionary.
        colors (dict[Highlight, int]): Curses attribute for every highlight
            class, filled by ``init_colors()``.
        status_attr (int): Attribute of the status bar.

    Methods:
        size(): Width and height of the text area, in cells.
        init_colors(): Allocates colour pairs for the highlight classes.
        get_char_width(ch): Display width of one grapheme.
        get_string_width(text): Display width of a string.
        draw_row(screen_y, spans): Draws one highlighted row.
        draw_tilde(screen_y): Marks a screen line past the end of the buffer.
        draw_centered(screen_y, text): Draws the centred welcome line.
        draw_status_bar(left, right): Draws the inverted status bar.
        draw_message_bar(text): Draws the message bar.
        position_cursor(screen_y, screen_x): Moves the caret.
        hide_cursor() / show_cursor(): Toggles caret visibility.
        clear(): Erases the whole window.
        flush(): Pushes the frame to the terminal.
    """

    STATUS_LINES = 2

    # Fallback colours for terminals with fewer than 256 colours.
    BASIC_COLORS: dict[Highlight, int] = {
        Highlight.NUMBER: curses.COLOR_RED,
        Highlight.MATCH: curses.COLOR_GREEN,
        Highlight.STRING: curses.COLOR_YELLOW,
        Highlight.CHARACTER: curses.COLOR_BLUE,
        Highlight.COMMENT: curses.COLOR_CYAN,
        Highlight.MULTILINE_COMMENT: curses.COLOR_CYAN,
        Highlight.KEYWORD1: curses.COLOR_MAGENTA,
        Highlight.KEYWORD2: curses.COLOR_YELLOW,
    }

    # Attributes for terminals without colour support.
    MONOCHROME_ATTRS: dict[Highlight, int] = {
        Highlight.MATCH: curses.A_REVERSE,
        Highlight.COMMENT: curses.A_DIM,
        Highlight.MULTILINE_COMMENT: curses.A_DIM,
        Highlight.KEYWORD1: curses.A_BOLD,
        Highlight.KEYWORD2: curses.A_BOLD,
    }

    def __init__(self, stdscr: "curses.window", config: Optional[dict[str, Any]] = None) -> None:
        self.stdscr = stdscr
        self.config = config or {}
        self.colors: dict[Highlight, int] = {}
        self.status_attr: int = curses.A_REVERSE

    # --- Viewport ---
    def size(self) -> tuple[int, int]:
        """Returns ``(width, height)`` of the text area in cells."""
        height, width = self.stdscr.getmaxyx()
        return width, max(0, height - self.STATUS_LINES)

    def init_colors(self) -> None:
        """Initializes one curses colour pair per highlight class.

        Degrades to plain attributes when the terminal has fewer than eight
        colours, and to the basic eight colours below 256.
        """
        self.colors = {}
        if not curses.has_colors() or curses.COLORS < 8:
            logger.warning("Terminal has no or limited color support (< 8). Using monochrome attributes.")
            self.colors = {kind: self.MONOCHROME_ATTRS.get(kind, curses.A_NORMAL) for kind in Highlight}
            return

        curses.start_color()
        try:
            curses.use_default_colors()
            background = -1
        except curses.error:
            background = curses.COLOR_BLACK

        user_colors = self.config.get("colors", {})
        can_use_256_colors = curses.COLORS >= 256

        for pair_id, kind in enumerate(Highlight, start=1):
            if pair_id >= curses.COLOR_PAIRS:
                logger.warning(f"Ran out of color pairs at '{kind.value}'.")
                self.colors[kind] = curses.A_NORMAL
                continue

            if can_use_256_colors:
                fg = hex_to_xterm(kind.to_hex(user_colors))
            else:
                fg = self.BASIC_COLORS.get(kind, curses.COLOR_WHITE)

            try:
                curses.init_pair(pair_id, fg, background)
                self.colors[kind] = curses.color_pair(pair_id)
            except curses.error as e:
                logger.warning(f"Failed to init color pair {pair_id} for '{kind.value}': {e}")
                self.colors[kind] = curses.A_NORMAL

        logger.debug(f"Initialized {len(self.colors)} highlight colors (256 colors: {can_use_256_colors}).")

    # --- Width helpers ---
    def get_char_width(self, ch: str) -> int:
        """Display width of one grapheme; control characters count as one cell."""
        width = wcswidth(ch)
        if width < 0:
            width = wcwidth(ch[0]) if ch else 0
        return max(1, width) if ch else 0

    def get_string_width(self, text: str) -> int:
        width = wcswidth(text)
        if width >= 0:
            return width
        return sum(self.get_char_width(ch) for ch in text)

    def truncate_string(self, s: str, max_width: int) -> str:
        """Clips ``s`` to ``max_width`` cells without splitting a wide glyph."""
        result = ""
        used = 0
        for ch in s:
            w = self.get_char_width(ch)
            if used + w > max_width:
                break
            result += ch
            used += w
        return result

    # --- Drawing ---
    def draw_row(self, screen_y: int, spans: Sequence[Span]) -> None:
        """Draws ``spans`` on ``screen_y`` from column 0, clipped to the width."""
        width, _height = self.size()
        self._clear_line(screen_y)
        x = 0
        for kind, text in spans:
            w = self.get_string_width(text)
            if x + w > width:
                break
            try:
                self.stdscr.addstr(screen_y, x, text, self.colors.get(kind, curses.A_NORMAL))
            except curses.error as e:
                logger.debug(f"addstr failed at ({screen_y},{x}): {e}")
                break
            x += w

    def draw_tilde(self, screen_y: int) -> None:
        self._draw_line(screen_y, "~")

    def draw_centered(self, screen_y: int, text: str) -> None:
        """Draws ``~`` followed by ``text`` centred on the text area width."""
        width, _height = self.size()
        text = self.truncate_string(text, width)
        padding = max(0, (width - self.get_string_width(text)) // 2)
        line = ("~" + " " * (padding - 1) if padding else "") + text
        self._draw_line(screen_y, self.truncate_string(line, width))

    def draw_status_bar(self, left: str, right: str) -> None:
        """Inverted bar below the text area: ``left`` flush left, ``right`` flush right."""
        height, width = self.stdscr.getmaxyx()
        if height < self.STATUS_LINES or width <= 0:
            return
        y = height - self.STATUS_LINES
        left = self.truncate_string(left, width)
        spacing = width - self.get_string_width(left) - self.get_string_width(right)
        if spacing >= 0:
            line = left + " " * spacing + right
        else:
            line = left + " " * (width - self.get_string_width(left))
        try:
            self.stdscr.addstr(y, 0, self.truncate_string(line, width), self.status_attr)
        except curses.error:
            pass  # drawing outside screen

    def draw_message_bar(self, text: str) -> None:
        height, width = self.stdscr.getmaxyx()
        if height < 1:
            return
        y = height - 1
        self._clear_line(y)
        if text:
            try:
                self.stdscr.addstr(y, 0, self.truncate_string(text, max(0, width - 1)))
            except curses.error:
                pass  # drawing outside screen

    def position_cursor(self, screen_y: int, screen_x: int) -> None:
        width, height = self.size()
        screen_y = max(0, min(screen_y, max(0, height - 1)))
        screen_x = max(0, min(screen_x, max(0, width - 1)))
        try:
            self.stdscr.move(screen_y, screen_x)
        except curses.error as e:
            logger.warning(f"Curses error positioning cursor at ({screen_y}, {screen_x}): {e}")

    def hide_cursor(self) -> None:
        self._set_cursor_visibility(0)

    def show_cursor(self) -> None:
        self._set_cursor_visibility(1)

    def clear(self) -> None:
        try:
            self.stdscr.erase()
        except curses.error as e:
            logger.error(f"Curses erase error: {e}")

    def flush(self) -> None:
        """Physically updates the terminal with everything drawn since the last flush."""
        try:
            self.stdscr.noutrefresh()
            curses.doupdate()
        except curses.error as e:
            logger.error(f"Curses doupdate error: {e}")

    # --- Internal helpers ---
    def _set_cursor_visibility(self, visibility: int) -> None:
        try:
            curses.curs_set(visibility)
        except curses.error:
            pass  # terminal cannot change caret visibility

    def _clear_line(self, screen_y: int) -> None:
        try:
            self.stdscr.move(screen_y, 0)
            self.stdscr.clrtoeol()
        except curses.error as e:
            logger.error(f"Curses error while clearing line {screen_y}: {e}")

    def _draw_line(self, screen_y: int, text: str) -> None:
        self._clear_line(screen_y)
        try:
            self.stdscr.addstr(screen_y, 0, text)
        except curses.error:
            pass  # drawing outside screen
