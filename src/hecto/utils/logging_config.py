# hecto/utils/logging_config.py
"""hecto.utils.logging_config
============================

Logging setup for the hecto editor.

`setup_logging` wires the root logger from the ``[logging]`` table of the
configuration:

    - ``editor.log``: rotating file, everything from ``file_level`` up.
    - stderr: only when ``log_to_console`` is true, since curses owns the
      terminal while the editor runs.
    - ``error.log``: rotating, ERROR and above, when ``separate_error_log``
      is true.
    - ``keytrace.log``: decoded key events on ``hecto.keyevents`` when the
      HECTO_KEYTRACE environment variable is ``1``, ``true`` or ``yes``.

A log directory that cannot be created is replaced by the system temp
directory. Calling `setup_logging` again replaces the previous handlers.
Setup problems are printed to stderr and never raised.

Globals:
    logger: Main application logger ("hecto").
    KEY_LOGGER: Logger for decoded key events ("hecto.keyevents").
"""

import logging
import logging.handlers
import os
import sys
import tempfile
from typing import Any, Optional


logger = logging.getLogger("hecto")
KEY_LOGGER = logging.getLogger("hecto.keyevents")

DEFAULT_LOG_FILE = "editor.log"
KEYTRACE_ENV_VAR = "HECTO_KEYTRACE"

FILE_FORMAT = "%(asctime)s - %(levelname)-8s - %(name)-15s - %(message)s (%(filename)s:%(lineno)d)"
CONSOLE_FORMAT = "%(levelname)-8s - %(name)-12s - %(message)s"
KEYTRACE_FORMAT = "%(asctime)s - %(message)s"
MiB = 1024 * 1024


def _level(name: Any, default: int) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else default


def _prepare_log_path(log_filename: str, fallback_name: str) -> str:
    """Creates the directory of ``log_filename``, or returns a temp-dir fallback."""
    log_filename = os.path.expanduser(log_filename)
    log_dir = os.path.dirname(log_filename)
    if not log_dir or os.path.isdir(log_dir):
        return log_filename
    try:
        os.makedirs(log_dir, exist_ok=True)
    except OSError as e:
        fallback = os.path.join(tempfile.gettempdir(), fallback_name)
        print(f"hecto: cannot create log directory '{log_dir}' ({e}); using '{fallback}'", file=sys.stderr)
        return fallback
    return log_filename


def _rotating_handler(
    path: str, level: int, max_bytes: int, backups: int, fmt: str
) -> Optional[logging.Handler]:
    try:
        handler = logging.handlers.RotatingFileHandler(
            path, maxBytes=max_bytes, backupCount=backups, encoding="utf-8"
        )
    except OSError as e:
        print(f"hecto: cannot open log file '{path}': {e}", file=sys.stderr)
        return None
    handler.setFormatter(logging.Formatter(fmt))
    handler.setLevel(level)
    return handler


def _configure_key_logger(log_dir: str) -> None:
    KEY_LOGGER.propagate = False
    KEY_LOGGER.setLevel(logging.DEBUG)
    KEY_LOGGER.handlers = []
    KEY_LOGGER.disabled = False

    if os.environ.get(KEYTRACE_ENV_VAR, "").lower() not in {"1", "true", "yes"}:
        KEY_LOGGER.addHandler(logging.NullHandler())
        KEY_LOGGER.disabled = True
        logger.debug("Key event tracing is off.")
        return

    trace_path = os.path.join(log_dir, "keytrace.log")
    handler = _rotating_handler(trace_path, logging.DEBUG, MiB, 3, KEYTRACE_FORMAT)
    if handler is None:
        KEY_LOGGER.disabled = True
        return
    KEY_LOGGER.addHandler(handler)
    logger.info("Key event tracing to '%s'.", trace_path)


def setup_logging(config: Optional[dict[str, Any]] = None) -> None:
    """Replaces the root logger's handlers according to ``config["logging"]``.

    Recognised keys are ``log_file``, ``file_level`` (default DEBUG),
    ``console_level`` (default WARNING), ``log_to_console`` and
    ``separate_error_log``; anything else is ignored.
    """
    options = (config or {}).get("logging", {})

    file_level = _level(options.get("file_level", "DEBUG"), logging.DEBUG)
    log_filename = _prepare_log_path(options.get("log_file", DEFAULT_LOG_FILE), "hecto.log")
    log_dir = os.path.dirname(log_filename)

    handlers = [_rotating_handler(log_filename, file_level, 2 * MiB, 5, FILE_FORMAT)]

    if options.get("log_to_console", False):
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        console.setLevel(_level(options.get("console_level", "WARNING"), logging.WARNING))
        handlers.append(console)

    if options.get("separate_error_log", False):
        error_path = os.path.join(log_dir, "error.log")
        handlers.append(_rotating_handler(error_path, logging.ERROR, MiB, 3, FILE_FORMAT))

    root = logging.getLogger()
    root.handlers = [h for h in handlers if h is not None]
    root.setLevel(file_level)

    _configure_key_logger(log_dir)

    for handler in root.handlers:
        target = getattr(handler, "baseFilename", "stderr")
        logger.info("Logging to %s at %s.", target, logging.getLevelName(handler.level))
