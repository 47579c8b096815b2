# hecto/core/Editor.py
"""Editor Module
===============
The event loop of the hecto editor.

``Editor`` owns the ``Buffer`` for the whole session and wires it to the
three terminal collaborators: a ``KeyBinder`` (input source), a
``DrawScreen`` (viewport and render sink) and the wall clock used to expire
status messages. One key event is handled to completion, the cursor and
scroll offset are recomputed, and the frame is redrawn with a fresh
highlight pass before the next key is read.

Key map:
    Ctrl-Q          quit (confirmation required while the buffer is dirty)
    Ctrl-S          save, prompting for a name when the buffer has none
    Ctrl-F          incremental search
    Enter           split the row, keeping its indentation
    Backspace/Del   delete before/at the cursor
    arrows, Home, End, PageUp, PageDown   cursor movement
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

import grapheme

from hecto.core.Buffer import Buffer
from hecto.core.Position import Position, SearchDirection
from hecto.ui.KeyBinder import KeyEvent, KeyKind
from hecto.utils.utils import APP_VERSION, DEFAULT_CONFIG

logger = logging.getLogger("hecto")

HELP_MESSAGE = "HELP: Ctrl-S = save | Ctrl-Q = quit | Ctrl-F = search"
SEARCH_PROMPT = "Search (Use ESC/Arrows/Enter): "
SAVE_PROMPT = "Save as: "

NAVIGATION_KEYS = frozenset(
    {
        KeyKind.LEFT,
        KeyKind.RIGHT,
        KeyKind.UP,
        KeyKind.DOWN,
        KeyKind.HOME,
        KeyKind.END,
        KeyKind.PAGE_UP,
        KeyKind.PAGE_DOWN,
    }
)

PromptCallback = Callable[[KeyEvent, str], None]


@dataclass
class StatusMessage:
    """Message bar text and the monotonic time it was set."""

    text: str
    time: float = field(default_factory=time.monotonic)

    def is_visible(self, timeout: float, now: Optional[float] = None) -> bool:
        now = time.monotonic() if now is None else now
        return now - self.time <= timeout


class Editor:
    """Class Editor
    ===============
    Cursor, scrolling, prompts and commands on top of a ``Buffer``.

    Attributes:
        buffer (Buffer): The text being edited.
        screen: Viewport and render sink (``DrawScreen`` or compatible).
        keybinder: Input source with a blocking ``read_key()``.
        cursor (Position): Caret position in buffer coordinates (graphemes).
        offset (Position): First buffer column and row shown on screen.
        status_message (StatusMessage): Text of the message bar.
        quit_times (int): Ctrl-Q presses still needed to leave a dirty buffer.
        should_quit (bool): Set once the loop has to stop.
        highlighted_word (Optional[str]): Search query overlaid as matches
            while the search prompt is open.
    """

    def __init__(
        self,
        buffer: Buffer,
        screen: Any,
        keybinder: Any,
        config: Optional[dict[str, Any]] = None,
    ) -> None:
        editor_config = {**DEFAULT_CONFIG["editor"], **(config or {}).get("editor", {})}
        self.buffer = buffer
        self.screen = screen
        self.keybinder = keybinder

        self.tab_stop: int = max(1, int(editor_config["tab_stop"]))
        self.quit_times_default: int = max(0, int(editor_config["quit_times"]))
        self.message_timeout: float = float(editor_config["message_timeout"])

        self.cursor = Position()
        self.offset = Position()
        self.status_message = StatusMessage(HELP_MESSAGE)
        self.quit_times: int = self.quit_times_default
        self.should_quit: bool = False
        self.highlighted_word: Optional[str] = None

    def set_status_message(self, text: str) -> None:
        self.status_message = StatusMessage(text)

    # --- Main loop ---
    def run(self) -> None:
        """Redraws and handles keys until quit is requested."""
        logger.info("Editor main loop started.")
        while True:
            try:
                self.refresh_screen()
                if self.should_quit:
                    break
                self.process_keypress()
            except KeyboardInterrupt:
                logger.info("Main loop interrupted by KeyboardInterrupt.")
                self.should_quit = True
                break
            except Exception as e:
                logger.critical("Unhandled exception in main loop: %s", e, exc_info=True)
                self.should_quit = True
                break
        logger.info("Editor main loop finished.")

    def process_keypress(self, event: Optional[KeyEvent] = None) -> None:
        """Handles one key event, reading it from the key binder when not given."""
        if event is None:
            event = self.keybinder.read_key()

        if event.kind is KeyKind.CHAR:
            row = self.buffer.row(self.cursor.y)
            length_before = row.length if row is not None else 0
            self.buffer.insert(self.cursor, event.char)
            # A combining mark joins the previous cluster and adds no column.
            row = self.buffer.row(self.cursor.y)
            grown = row.length - length_before if row is not None else 0
            self.cursor = Position(self.cursor.x + grown, self.cursor.y)
        elif event.kind is KeyKind.ENTER:
            indent = self.buffer.indentation_at(self.cursor)
            self.buffer.insert(self.cursor, "\n")
            self.cursor = Position(indent, self.cursor.y + 1)
        elif event.is_ctrl("q"):
            if self.buffer.dirty and self.quit_times > 0:
                self.set_status_message(
                    f"Warning! File has unsaved changes. Press Ctrl-Q {self.quit_times} more times to exit."
                )
                self.quit_times -= 1
                return
            logger.info("Quit requested.")
            self.should_quit = True
        elif event.is_ctrl("s"):
            self.save()
        elif event.is_ctrl("f"):
            self.search()
        elif event.kind is KeyKind.BACKSPACE:
            if self.cursor.x > 0 or self.cursor.y > 0:
                self.move_cursor(KeyKind.LEFT)
                self.buffer.delete(self.cursor)
        elif event.kind is KeyKind.DELETE:
            self.buffer.delete(self.cursor)
        elif event.kind in NAVIGATION_KEYS:
            self.move_cursor(event.kind)
        elif event.kind is KeyKind.RESIZE:
            width, height = self.screen.size()
            logger.debug(f"Terminal resized to {width}x{height}.")
            self.screen.clear()

        self.scroll()
        self.quit_times = self.quit_times_default

    # --- Cursor and scrolling ---
    def move_cursor(self, kind: KeyKind) -> None:
        x, y = self.cursor.x, self.cursor.y
        row_count = len(self.buffer)
        _width, terminal_height = self.screen.size()
        row = self.buffer.row(y)
        row_length = row.length if row else 0

        if kind is KeyKind.LEFT:
            if x > 0:
                x -= 1
            elif y > 0:
                y -= 1
                previous = self.buffer.row(y)
                x = previous.length if previous else 0
        elif kind is KeyKind.RIGHT:
            if x < row_length:
                x += 1
            elif y < row_count:
                x = 0
                y += 1
        elif kind is KeyKind.UP:
            y = max(0, y - 1)
        elif kind is KeyKind.DOWN:
            if y < row_count:
                y += 1
        elif kind is KeyKind.HOME:
            x = 0
        elif kind is KeyKind.END:
            x = row_length
        elif kind is KeyKind.PAGE_DOWN:
            y = min(y + terminal_height, row_count)
        elif kind is KeyKind.PAGE_UP:
            y = max(0, y - terminal_height)

        if kind in (KeyKind.UP, KeyKind.DOWN, KeyKind.PAGE_UP, KeyKind.PAGE_DOWN):
            target = self.buffer.row(y)
            x = min(x, target.length if target else 0)

        self.cursor = Position(x, y)

    def scroll(self) -> None:
        """Moves the offset so the cursor stays inside the viewport.

        Rows scroll by buffer row. Columns scroll by grapheme, but the fit is
        measured in rendered cells so tabs and wide glyphs stay on screen.
        """
        width, height = self.screen.size()
        width, height = max(1, width), max(1, height)

        if self.cursor.y < self.offset.y:
            self.offset.y = self.cursor.y
        elif self.cursor.y >= self.offset.y + height:
            self.offset.y = self.cursor.y - height + 1

        if self.cursor.x < self.offset.x:
            self.offset.x = self.cursor.x
            return

        row = self.buffer.row(self.cursor.y)
        if row is None:
            self.offset.x = max(self.offset.x, self.cursor.x - width + 1)
            return
        caret_cells = max(1, self._cells(row.render(self.cursor.x, self.cursor.x + 1, self._tab())))
        while (
            self.offset.x < self.cursor.x
            and self._cells(row.render(self.offset.x, self.cursor.x, self._tab())) + caret_cells > width
        ):
            self.offset.x += 1

    # --- Commands ---
    def save(self) -> None:
        if not self.buffer.filename:
            new_name = self.prompt(SAVE_PROMPT)
            if new_name is None:
                self.set_status_message("Save aborted.")
                return
            self.buffer.filename = new_name

        try:
            written = self.buffer.save()
        except OSError as e:
            logger.warning(f"Error writing to file '{self.buffer.filename}': {e}")
            self.set_status_message(f"Error writing to file: {e}")
            return
        self.set_status_message(f"{written} bytes written to disk")

    def search(self) -> None:
        """Incremental search; Escape restores the cursor and offset."""
        saved_cursor = self.cursor.copy()
        saved_offset = self.offset.copy()

        def on_key(event: KeyEvent, query: str) -> None:
            moved = False
            if event.kind in (KeyKind.RIGHT, KeyKind.DOWN):
                direction = SearchDirection.FORWARD
                self.move_cursor(KeyKind.RIGHT)
                moved = True
            elif event.kind in (KeyKind.LEFT, KeyKind.UP):
                direction = SearchDirection.BACKWARD
            else:
                direction = SearchDirection.FORWARD

            position = self.buffer.find(query, self.cursor, direction)
            if position is not None:
                self.cursor = position
                self.scroll()
            elif moved:
                self.move_cursor(KeyKind.LEFT)
            self.highlighted_word = query

        query = self.prompt(SEARCH_PROMPT, on_key)
        if query is None:
            self.cursor = saved_cursor
            self.offset = saved_offset
            self.scroll()
        self.highlighted_word = None

    def prompt(self, text: str, callback: Optional[PromptCallback] = None) -> Optional[str]:
        """Reads a line of input in the message bar.

        Enter accepts, Escape clears the input and accepts. ``callback`` runs
        with the key and the current input after every key that keeps the
        prompt open.

        Returns:
            Optional[str]: The entered text, or ``None`` when it is empty.
        """
        entered = ""
        while True:
            self.set_status_message(f"{text}{entered}")
            self.refresh_screen()
            event = self.keybinder.read_key()
            if event.kind is KeyKind.ENTER:
                break
            if event.kind is KeyKind.ESCAPE:
                entered = ""
                break
            if event.kind is KeyKind.BACKSPACE:
                entered = grapheme.slice(entered, 0, max(0, grapheme.length(entered) - 1))
            elif event.kind is KeyKind.CHAR and event.char.isprintable():
                entered += event.char
            if callback is not None:
                callback(event, entered)

        self.set_status_message("")
        return entered or None

    # --- Rendering ---
    def refresh_screen(self) -> None:
        self.screen.hide_cursor()
        if self.should_quit:
            self.screen.clear()
        else:
            width, height = self.screen.size()
            self.buffer.highlight(self.highlighted_word, self.offset.y + height)
            self.draw_rows(width, height)
            self.draw_status_bar()
            self.draw_message_bar()
            self.screen.position_cursor(self.cursor.y - self.offset.y, self._cursor_screen_x())
        self.screen.show_cursor()
        self.screen.flush()

    def draw_rows(self, width: int, height: int) -> None:
        tab = self._tab()
        for terminal_row in range(height):
            row = self.buffer.row(self.offset.y + terminal_row)
            if row is not None:
                self.screen.draw_row(
                    terminal_row, row.render(self.offset.x, self.offset.x + width, tab)
                )
            elif self.buffer.is_empty() and terminal_row == height // 3:
                self.screen.draw_centered(terminal_row, f"Hecto editor -- version {APP_VERSION}")
            else:
                self.screen.draw_tilde(terminal_row)

    def status_bar_text(self) -> tuple[str, str]:
        """Returns the left and right halves of the status bar."""
        name = self.buffer.filename or "[No Name]"
        modified = " (modified)" if self.buffer.dirty else ""
        left = f"{name} - {len(self.buffer)} lines{modified}"
        file_type = self.buffer.file_type
        right = f"{str(file_type) if file_type else 'no ft'} | {self.cursor.y + 1}/{len(self.buffer)}"
        return left, right

    def draw_status_bar(self) -> None:
        left, right = self.status_bar_text()
        self.screen.draw_status_bar(left, right)

    def draw_message_bar(self) -> None:
        if self.status_message.is_visible(self.message_timeout):
            self.screen.draw_message_bar(self.status_message.text)
        else:
            self.screen.draw_message_bar("")

    def _tab(self) -> str:
        return " " * self.tab_stop

    def _cells(self, spans: list) -> int:
        return sum(self.screen.get_string_width(text) for _kind, text in spans)

    def _cursor_screen_x(self) -> int:
        row = self.buffer.row(self.cursor.y)
        if row is None:
            return self.cursor.x - self.offset.x
        return self._cells(row.render(self.offset.x, self.cursor.x, self._tab()))
