# hecto/ui/KeyBinder.py
"""KeyBinder.py
==================
Description:
-----------------------
The KeyBinder class is the editor's input source. It pulls one key at a time
from a curses window and decodes it into a ``KeyEvent`` drawn from a small
enumerated set: printable characters, Ctrl+letter chords, navigation keys,
Backspace, Delete, Escape, Enter and terminal resize.

Terminals disagree on how they report navigation keys. With ``keypad(True)``
curses already translates most of them into ``KEY_*`` codes; the remaining
raw escape sequences (CSI / SS3 forms) are collected after a lone ESC and
resolved through ``ESCAPE_SEQUENCE_MAP``.

Main Methods:
1. read_key: Blocking pull of the next decoded event.
2. get_key_input: Reads a raw key or key sequence from the terminal.
3. decode: Maps a raw key (``str`` or ``int``) to a ``KeyEvent``.
"""

import curses
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from hecto.utils.logging_config import KEY_LOGGER


class KeyKind(Enum):
    CHAR = "char"
    CTRL = "ctrl"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    HOME = "home"
    END = "end"
    PAGE_UP = "pageup"
    PAGE_DOWN = "pagedown"
    BACKSPACE = "backspace"
    DELETE = "delete"
    ESCAPE = "escape"
    ENTER = "enter"
    RESIZE = "resize"
    NONE = "none"


@dataclass(frozen=True)
class KeyEvent:
    """One decoded key press.

    ``char`` carries the grapheme for ``CHAR`` and the lowercase letter for
    ``CTRL`` (``KeyEvent(KeyKind.CTRL, "q")`` is Ctrl-Q); it is empty otherwise.
    """

    kind: KeyKind
    char: str = ""

    def is_ctrl(self, letter: str) -> bool:
        return self.kind is KeyKind.CTRL and self.char == letter


ESC = 27
RawKey = Union[int, str]


# ==================== KeyBinder Class ====================
class KeyBinder:
    """Class KeyBinder
    ====================
    Decodes terminal input into ``KeyEvent`` values.

    Attributes:
        stdscr: The curses window keys are read from.
    """

    # Keys do NOT include the leading ESC, get_key_input() reads after it.
    ESCAPE_SEQUENCE_MAP: dict[str, KeyKind] = {
        # Arrows (CSI and SS3)
        "[A": KeyKind.UP, "[B": KeyKind.DOWN, "[C": KeyKind.RIGHT, "[D": KeyKind.LEFT,
        "OA": KeyKind.UP, "OB": KeyKind.DOWN, "OC": KeyKind.RIGHT, "OD": KeyKind.LEFT,

        # Home/End (CSI/SS3 and tilde variants)
        "[H": KeyKind.HOME, "[F": KeyKind.END, "OH": KeyKind.HOME, "OF": KeyKind.END,
        "[1~": KeyKind.HOME, "[4~": KeyKind.END, "[7~": KeyKind.HOME, "[8~": KeyKind.END,

        # Delete/PageUp/PageDown (~ style)
        "[3~": KeyKind.DELETE, "[5~": KeyKind.PAGE_UP, "[6~": KeyKind.PAGE_DOWN,
    }

    KEY_CODE_MAP: dict[int, KeyKind] = {
        curses.KEY_LEFT: KeyKind.LEFT,
        curses.KEY_RIGHT: KeyKind.RIGHT,
        curses.KEY_UP: KeyKind.UP,
        curses.KEY_DOWN: KeyKind.DOWN,
        curses.KEY_HOME: KeyKind.HOME,
        curses.KEY_END: KeyKind.END,
        curses.KEY_PPAGE: KeyKind.PAGE_UP,
        curses.KEY_NPAGE: KeyKind.PAGE_DOWN,
        curses.KEY_BACKSPACE: KeyKind.BACKSPACE,
        curses.KEY_DC: KeyKind.DELETE,
        curses.KEY_ENTER: KeyKind.ENTER,
        curses.KEY_RESIZE: KeyKind.RESIZE,
    }

    def __init__(self, stdscr: "curses.window") -> None:
        self.stdscr = stdscr

    def read_key(self) -> KeyEvent:
        """Blocks until a key arrives and returns it decoded.

        Input that decodes to ``KeyKind.NONE`` (curses errors, unknown
        function keys) is skipped.
        """
        while True:
            raw = self.get_key_input()
            event = self.decode(raw)
            KEY_LOGGER.debug(f"raw={raw!r} -> {event.kind.value} {event.char!r}")
            if event.kind is not KeyKind.NONE:
                return event

    def get_key_input(self, window: Optional["curses.window"] = None) -> RawKey:
        """Reads a single key or key sequence from the terminal.

        Returns:
            int | str:
            - ``str`` for a character delivered by ``get_wch``,
            - curses key code (int) for function keys,
            - a ``KeyKind`` value string (e.g. ``"up"``) for a recognised
              escape sequence,
            - 27 for a lone ESC or an unknown sequence,
            - ``curses.ERR`` for curses-related errors.
        """
        target = window or self.stdscr

        try:
            ch = target.get_wch()
            if ch not in ("\x1b", ESC):
                return ch  # fast path

            # ESC received: lone ESC or an escape sequence
            seq = ""
            target.nodelay(True)
            try:
                while True:
                    try:
                        nx = target.get_wch()
                    except curses.error:
                        break
                    seq += nx if isinstance(nx, str) else f"<{nx}>"
            finally:
                target.nodelay(False)

            if not seq:
                return ESC

            if seq[0] == "\x1b":
                seq = seq[1:]

            mapped = self.ESCAPE_SEQUENCE_MAP.get(seq)
            if not mapped:
                # Tolerant cleanup: keep only tokens relevant to term sequences.
                cleaned = "".join(re.findall(r"[\[O0-9;~A-Za-z]", seq))
                mapped = self.ESCAPE_SEQUENCE_MAP.get(cleaned)

            if mapped:
                logging.debug("get_key_input: ESC %r -> %s", seq, mapped.value)
                return mapped.value

            logging.warning("get_key_input: unknown escape sequence: ESC + %r", seq)
            return ESC

        except curses.error:
            return curses.ERR

    @classmethod
    def decode(cls, raw: RawKey) -> KeyEvent:
        """Maps a raw key from ``get_key_input`` to a ``KeyEvent``."""
        if isinstance(raw, int):
            if raw == ESC:
                return KeyEvent(KeyKind.ESCAPE)
            if raw in cls.KEY_CODE_MAP:
                return KeyEvent(cls.KEY_CODE_MAP[raw])
            if 0 <= raw < 256 and raw != curses.ERR:
                return cls.decode(chr(raw))
            return KeyEvent(KeyKind.NONE)

        if not raw:
            return KeyEvent(KeyKind.NONE)
        if len(raw) > 1:
            try:
                return KeyEvent(KeyKind(raw))
            except ValueError:
                return KeyEvent(KeyKind.CHAR, raw)

        if raw in ("\n", "\r"):
            return KeyEvent(KeyKind.ENTER)
        if raw in ("\x7f", "\x08"):
            return KeyEvent(KeyKind.BACKSPACE)
        if raw == "\x1b":
            return KeyEvent(KeyKind.ESCAPE)
        if raw == "\t":
            return KeyEvent(KeyKind.CHAR, raw)
        code = ord(raw)
        if code < 32:
            return KeyEvent(KeyKind.CTRL, chr(code + 96))
        return KeyEvent(KeyKind.CHAR, raw)
