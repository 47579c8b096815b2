# hecto/ui/TerminalAppMode.py
from __future__ import annotations

import curses
import logging
from typing import Optional

logger = logging.getLogger("hecto")


class TerminalAppMode:
    """
    Raw-mode session for the editor:

    - Alternate screen buffer (smcup/rmcup) so the shell scrollback survives.
    - raw + noecho so Ctrl-Q, Ctrl-S and Ctrl-F reach the editor instead of
      the tty driver (cbreak when raw is unavailable).
    - keypad(True) so curses decodes navigation keys into KEY_* codes.
    - Short ESC delay so Escape in the prompt feels immediate.

    Usable as a context manager; `exit()` is idempotent.
    """

    ESC_DELAY_MS = 25

    def __init__(self) -> None:
        self._entered: bool = False
        self._stdscr: Optional[curses.window] = None

    def __enter__(self) -> "TerminalAppMode":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.exit()

    def enter(self, stdscr: curses.window) -> None:
        """Switches the terminal into raw application mode.

        Raises:
            curses.error: If the terminal cannot enter the required input mode.
        """
        self._stdscr = stdscr
        self._tputs("smcup")

        try:
            curses.raw()
        except curses.error:
            curses.cbreak()
        curses.noecho()
        stdscr.keypad(True)

        try:
            curses.set_escdelay(self.ESC_DELAY_MS)
        except (AttributeError, curses.error):
            logger.debug("set_escdelay is unavailable; using the terminal default.")

        stdscr.scrollok(False)
        stdscr.erase()
        stdscr.refresh()

        self._entered = True
        logger.debug("TerminalAppMode: entered raw mode on the alternate screen.")

    def exit(self) -> None:
        if not self._entered:
            return

        try:
            if self._stdscr is not None:
                self._stdscr.keypad(False)
            curses.noraw()
            curses.echo()
        except curses.error as e:
            logger.debug("TerminalAppMode: restoring input modes failed: %r", e)

        self._tputs("rmcup")
        self._entered = False
        logger.debug("TerminalAppMode: restored terminal modes.")

    @property
    def entered(self) -> bool:
        return self._entered

    def _tputs(self, capname: str) -> None:
        try:
            s = curses.tigetstr(capname)
            if s:
                curses.putp(s)
        except curses.error as e:
            # Capability missing on this terminal.
            logger.debug("tputs(%s) skipped: %r", capname, e)
