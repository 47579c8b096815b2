# tests/conftest.py
"""Pytest configuration with shared fixtures for the hecto editor tests."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Generator

import pytest

from hecto.core.Buffer import Buffer
from hecto.core.Editor import Editor
from hecto.core.HighlightOptions import HighlightOptions
from hecto.utils.utils import DEFAULT_CONFIG, deep_merge
from tests.stubs import ScriptedKeyBinder, StubScreen


# --- Highlighting profiles ---
@pytest.fixture
def rust_options() -> HighlightOptions:
    """Options for a `.rs` file: every class enabled, Rust keyword lists."""
    return HighlightOptions.from_filename("main.rs")


@pytest.fixture
def c_options() -> HighlightOptions:
    return HighlightOptions.from_filename("main.c")


@pytest.fixture
def text_options() -> HighlightOptions:
    """Options with numbers, strings and both comment styles but no keywords."""
    return HighlightOptions(
        numbers=True,
        strings=True,
        comments=True,
        multiline_comments=True,
    )


# --- Configuration ---
@pytest.fixture
def mock_config() -> dict[str, Any]:
    """A full configuration dictionary, as returned by `load_config()`."""
    return deep_merge({}, DEFAULT_CONFIG)


@pytest.fixture
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Points `Path.home()` at a temporary directory."""
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path


# --- Editor harness ---
@pytest.fixture
def make_editor(mock_config: dict[str, Any]) -> Callable[..., Editor]:
    """Factory building an `Editor` over stub terminal collaborators.

    Args (of the returned factory):
        lines: Initial buffer rows.
        filename: Buffer filename, or None for an unnamed buffer.
        width/height: Size of the stub text area.
    """

    def _make(
        lines: list[str] | None = None,
        filename: str | None = None,
        width: int = 40,
        height: int = 10,
    ) -> Editor:
        buffer = Buffer(lines, filename=filename)
        return Editor(buffer, StubScreen(width, height), ScriptedKeyBinder(), mock_config)

    return _make


@pytest.fixture
def restore_logging() -> Generator[None, None, None]:
    """Restores root and key-event logger state changed by `setup_logging`."""
    root = logging.getLogger()
    key_logger = logging.getLogger("hecto.keyevents")
    saved_root = (root.handlers[:], root.level)
    saved_key = (key_logger.handlers[:], key_logger.disabled, key_logger.propagate)
    yield
    for handler in root.handlers:
        if handler not in saved_root[0]:
            handler.close()
    for handler in key_logger.handlers:
        if handler not in saved_key[0]:
            handler.close()
    root.handlers = saved_root[0]
    root.setLevel(saved_root[1])
    key_logger.handlers, key_logger.disabled, key_logger.propagate = saved_key
