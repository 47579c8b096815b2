# hecto/utils/utils.py
"""
hecto.utils.utils
=================

Configuration and colour helpers for the hecto editor.

- `DEFAULT_CONFIG` is the embedded configuration. It is complete on its own,
  so the editor starts even without a user file.
- `load_config()` overlays `~/.config/hecto/config.toml` on the defaults,
  creating the file (and a `.env` template) on first run. A file that does
  not parse is reported and ignored.
- `hex_to_xterm()` maps the `#RRGGBB` highlight palette onto the xterm-256
  colour cube and grey ramp.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import toml

logger = logging.getLogger("hecto")

# --- Constants ---
APP_NAME = "hecto"
APP_VERSION = "0.1.0"
WHITE_FG_IDX = 255
CONFIG_FILENAME = "config.toml"
ENV_FILENAME = ".env"

ENV_TEMPLATE = """# Environment switches for hecto
# Set to 1 to trace every decoded key event into keytrace.log.
HECTO_KEYTRACE=
"""

DEFAULT_CONFIG: Dict[str, Any] = {
    "editor": {
        "tab_stop": 4,
        "quit_times": 3,
        "message_timeout": 5,
        "auto_indent": True,
    },
    "colors": {
        "none": "#17A88B",
        "normal": "#17A88B",
        "number": "#ED1515",
        "match": "#44853A",
        "string": "#F67400",
        "character": "#1D99F3",
        "comment": "#3DAEE9",
        "multiline_comment": "#3DAEE9",
        "keyword1": "#9B59B6",
        "keyword2": "#FDBC4B",
    },
    "logging": {
        "log_file": "~/.config/hecto/logs/editor.log",
        "file_level": "DEBUG",
        "console_level": "WARNING",
        "log_to_console": False,
        "separate_error_log": False,
    },
}


# --- Configuration ---

def get_config_dir() -> Path:
    return Path.home() / ".config" / APP_NAME


def ensure_user_config_exists(config_dir: Optional[Path] = None) -> None:
    """Writes `config.toml` and `.env` templates into `config_dir` if absent.

    Failures are logged; the editor then simply runs on the defaults.
    """
    config_dir = config_dir or get_config_dir()
    templates = {
        CONFIG_FILENAME: toml.dumps(DEFAULT_CONFIG),
        ENV_FILENAME: ENV_TEMPLATE,
    }
    try:
        config_dir.mkdir(parents=True, exist_ok=True)
        for name, content in templates.items():
            target = config_dir / name
            if target.exists():
                continue
            target.write_text(content, encoding="utf-8")
            logger.info(f"Wrote default {name} to {target}")
    except OSError as e:
        logger.critical(f"Cannot prepare config directory '{config_dir}': {e}", exc_info=True)


def load_config() -> Dict[str, Any]:
    """Returns the defaults with the user's `config.toml` merged over them."""
    config_dir = get_config_dir()
    ensure_user_config_exists(config_dir)

    config = deep_merge({}, DEFAULT_CONFIG)
    config_path = config_dir / CONFIG_FILENAME
    if not config_path.is_file():
        logger.debug("No user config found; using built-in defaults.")
        return config

    try:
        overrides = toml.load(config_path)
    except (toml.TomlDecodeError, OSError) as e:
        logger.error(f"Ignoring unreadable config '{config_path}': {e}")
        return config

    logger.info(f"Merged user config from {config_path}")
    return deep_merge(config, overrides)


def deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Returns a new dict: `base` with `override` applied, nested tables merged key by key.
    Neither argument is modified.
    """
    merged = {key: (deep_merge(value, {}) if isinstance(value, dict) else value) for key, value in base.items()}
    for key, value in override.items():
        if isinstance(value, dict):
            current = merged.get(key)
            merged[key] = deep_merge(current if isinstance(current, dict) else {}, value)
        else:
            merged[key] = value
    return merged


# --- Colours ---

def _cube_level(channel: int) -> int:
    """Nearest of the six xterm cube levels for an 8-bit channel."""
    return round(channel / 255 * 5)


def hex_to_xterm(hex_color: str) -> int:
    """
    Maps `#RRGGBB` (leading `#` optional) to the closest xterm-256 index.
    Greys use the 24-step ramp (232-255) with black and white taken from the cube.
    Malformed input yields `WHITE_FG_IDX`.
    """
    digits = hex_color.lstrip("#")
    if len(digits) != 6:
        return WHITE_FG_IDX
    try:
        red, green, blue = int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)
    except ValueError:
        return WHITE_FG_IDX

    if red == green == blue:
        if red < 8:
            return 16
        if red > 248:
            return 231
        return 232 + round((red - 8) / 247 * 24)

    return 16 + 36 * _cube_level(red) + 6 * _cube_level(green) + _cube_level(blue)
