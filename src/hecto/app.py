# src/hecto/app.py
"""
hecto Entry Point
=================

Launches the hecto editor. In order:
1) Environment Loading: reads ~/.config/hecto/.env so switches such as
   HECTO_KEYTRACE can be set persistently.
2) Configuration & Logging: loads config and initializes logging.
3) Buffer Loading: opens the file named on the command line, if any.
4) Curses Wrapper: enters raw mode, runs the editor, restores the terminal.
"""

from __future__ import annotations

import curses
import locale
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from hecto.core.Buffer import Buffer
from hecto.core.Editor import Editor
from hecto.ui.DrawScreen import DrawScreen
from hecto.ui.KeyBinder import KeyBinder
from hecto.ui.TerminalAppMode import TerminalAppMode
from hecto.utils.logging_config import setup_logging
from hecto.utils.utils import get_config_dir, load_config

logger = logging.getLogger("hecto")


def _resolve_cli_path(argv: list[str]) -> Optional[str]:
    """
    Resolve an optional CLI path from argv[1], expanded to a user path.
    The file does NOT need to exist on disk; a missing file becomes the
    name of a new, empty buffer.
    """
    if len(argv) <= 1:
        return None
    raw = argv[1].strip()
    if not raw:
        return None
    return str(Path(raw).expanduser())


def load_buffer(filename: Optional[str], auto_indent: bool = True) -> tuple[Buffer, Optional[str]]:
    """Builds the start-up buffer and the status message to show with it.

    Returns:
        tuple[Buffer, Optional[str]]: The buffer, and a status text or
        ``None`` when the default help message should stay.
    """
    if not filename:
        return Buffer(auto_indent=auto_indent), None
    try:
        return Buffer.open(filename, auto_indent=auto_indent), None
    except FileNotFoundError:
        logger.info(f"'{filename}' does not exist yet; starting a new file.")
        return Buffer(filename=filename, auto_indent=auto_indent), f"New file: {filename}"
    except OSError as e:
        logger.warning(f"Could not open '{filename}': {e}")
        return Buffer(auto_indent=auto_indent), f"Error opening file: {e}"


def main_app_runner(stdscr: "curses.window", config: dict[str, Any], file_to_open: Optional[str]) -> None:
    """
    Target for `curses.wrapper`. Puts the terminal in raw mode and runs the editor.

    Raises:
        curses.error: If the terminal cannot enter raw mode or report its size.
    """
    terminal_mode = TerminalAppMode()
    terminal_mode.enter(stdscr)
    try:
        screen = DrawScreen(stdscr, config)
        width, height = screen.size()
        logger.debug(f"Viewport: {width}x{height}")
        screen.init_colors()

        auto_indent = bool(config.get("editor", {}).get("auto_indent", True))
        buffer, status = load_buffer(file_to_open, auto_indent=auto_indent)
        editor = Editor(buffer, screen, KeyBinder(stdscr), config)
        if status:
            editor.set_status_message(status)
        editor.run()
    finally:
        terminal_mode.exit()


def start() -> None:
    """
    Loads environment, config and logging, then runs the editor via
    `curses.wrapper`. Terminal initialisation failures exit with status 1.
    """
    try:
        load_dotenv(dotenv_path=get_config_dir() / ".env")
    except Exception as e:
        print(f"Could not load .env: {e}", file=sys.stderr)

    config = load_config()
    setup_logging(config)
    logger.info("hecto editor starting up...")

    # Locale is important for proper character width/encoding behavior in curses.
    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error:
        logger.warning("Could not set system locale. Character rendering may be affected.")

    file_to_open = _resolve_cli_path(sys.argv)

    try:
        curses.wrapper(main_app_runner, config, file_to_open)
    except curses.error as e:
        logger.critical(f"Failed to initialize the terminal: {e}", exc_info=True)
        print(f"hecto: cannot initialize the terminal: {e}", file=sys.stderr)
        sys.exit(1)

    logger.info("hecto editor shut down gracefully.")


if __name__ == "__main__":
    start()
