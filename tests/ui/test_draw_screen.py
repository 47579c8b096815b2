# tests/ui/test_draw_screen.py
"""Unit tests for the `DrawScreen` viewport and render sink.
=============================================================

This module validates:

- Text-area size and display-width helpers (wide and combining glyphs).
- Row drawing clipped to the window width.
- Welcome line, status bar and message bar composition.
- Colour pair allocation, user colour overrides and monochrome fallback.
- Cursor placement and frame flushing.

The `curses` module as imported by `hecto.ui.DrawScreen` is replaced by a
`MagicMock` with a real exception type for `curses.error`, so the tests do
not need a terminal.
"""

from typing import Generator
from unittest.mock import MagicMock, call, patch

import pytest

from hecto.core.Highlighter import Highlight
from hecto.ui.DrawScreen import DrawScreen
from hecto.utils.utils import hex_to_xterm


class CursesError(Exception):
    """Minimal replacement for `curses.error` used in tests."""


@pytest.fixture
def curses_mock() -> Generator[MagicMock, None, None]:
    """Patch `curses` inside `hecto.ui.DrawScreen`."""
    mock = MagicMock()
    mock.error = CursesError
    mock.A_NORMAL = 0
    mock.A_REVERSE = 1
    mock.COLOR_WHITE = 7
    mock.COLOR_BLACK = 0
    mock.COLORS = 256
    mock.COLOR_PAIRS = 256
    mock.has_colors.return_value = True
    mock.color_pair.side_effect = lambda n: n << 8
    with patch("hecto.ui.DrawScreen.curses", mock):
        yield mock


@pytest.fixture
def stdscr() -> MagicMock:
    window = MagicMock()
    window.getmaxyx.return_value = (12, 40)
    return window


@pytest.fixture
def screen(curses_mock: MagicMock, stdscr: MagicMock) -> DrawScreen:
    return DrawScreen(stdscr, {"colors": {}})


def drawn_text(stdscr: MagicMock) -> list[str]:
    return [c.args[2] for c in stdscr.addstr.call_args_list]


class TestViewport:
    def test_size_excludes_status_lines(self, screen: DrawScreen) -> None:
        assert screen.size() == (40, 10)

    def test_size_never_negative(self, screen: DrawScreen, stdscr: MagicMock) -> None:
        stdscr.getmaxyx.return_value = (1, 5)
        assert screen.size() == (5, 0)

    @pytest.mark.parametrize(
        "text, width",
        [("a", 1), ("中", 2), ("é", 1), ("\x01", 1), ("", 0)],
    )
    def test_char_width(self, screen: DrawScreen, text: str, width: int) -> None:
        assert screen.get_char_width(text) == width

    def test_truncate_never_splits_wide_glyph(self, screen: DrawScreen) -> None:
        assert screen.truncate_string("a中b", 2) == "a"
        assert screen.truncate_string("a中b", 3) == "a中"


class TestDrawing:
    def test_draw_row_clips_to_width(self, screen: DrawScreen, stdscr: MagicMock) -> None:
        stdscr.getmaxyx.return_value = (12, 5)
        spans = [(Highlight.NONE, ch) for ch in "abcdefg"]
        screen.draw_row(0, spans)
        assert drawn_text(stdscr) == ["a", "b", "c", "d", "e"]
        stdscr.clrtoeol.assert_called_once()

    def test_draw_row_stops_before_split_wide_glyph(self, screen: DrawScreen, stdscr: MagicMock) -> None:
        stdscr.getmaxyx.return_value = (12, 4)
        spans = [(Highlight.NONE, "a"), (Highlight.NONE, "中"), (Highlight.NONE, "中")]
        screen.draw_row(1, spans)
        assert drawn_text(stdscr) == ["a", "中"]
        assert stdscr.addstr.call_args_list[1] == call(1, 1, "中", 0)

    def test_draw_row_uses_class_attribute(self, screen: DrawScreen, stdscr: MagicMock) -> None:
        screen.colors = {Highlight.NUMBER: 99}
        screen.draw_row(2, [(Highlight.NUMBER, "7"), (Highlight.NORMAL, "x")])
        assert stdscr.addstr.call_args_list == [call(2, 0, "7", 99), call(2, 1, "x", 0)]

    def test_draw_centered(self, screen: DrawScreen, stdscr: MagicMock) -> None:
        stdscr.getmaxyx.return_value = (12, 20)
        screen.draw_centered(3, "Hecto")
        line = drawn_text(stdscr)[0]
        assert line.startswith("~")
        assert line.endswith("Hecto")
        assert line.index("Hecto") == (20 - 5) // 2

    def test_status_bar_pads_between_halves(self, screen: DrawScreen, stdscr: MagicMock) -> None:
        stdscr.getmaxyx.return_value = (12, 30)
        screen.draw_status_bar("a.rs - 1 lines", "Rust | 1/1")
        y, x, line, attr = stdscr.addstr.call_args.args
        assert (y, x, attr) == (10, 0, 1)
        assert len(line) == 30
        assert line.startswith("a.rs - 1 lines")
        assert line.endswith("Rust | 1/1")

    def test_status_bar_drops_right_half_when_too_narrow(self, screen: DrawScreen, stdscr: MagicMock) -> None:
        stdscr.getmaxyx.return_value = (12, 12)
        screen.draw_status_bar("long-file-name.rs", "Rust | 1/1")
        line = stdscr.addstr.call_args.args[2]
        assert line == "long-file-na"

    def test_message_bar_truncated_on_last_line(self, screen: DrawScreen, stdscr: MagicMock) -> None:
        stdscr.getmaxyx.return_value = (12, 10)
        screen.draw_message_bar("0123456789abc")
        stdscr.addstr.assert_called_once_with(11, 0, "012345678")

    def test_empty_message_only_clears(self, screen: DrawScreen, stdscr: MagicMock) -> None:
        screen.draw_message_bar("")
        stdscr.addstr.assert_not_called()
        stdscr.clrtoeol.assert_called_once()

    def test_curses_errors_are_swallowed(self, screen: DrawScreen, stdscr: MagicMock) -> None:
        stdscr.addstr.side_effect = CursesError("outside")
        screen.draw_tilde(0)
        screen.draw_status_bar("x", "y")
        screen.draw_row(0, [(Highlight.NONE, "a")])


class TestColors:
    def test_init_colors_256(self, screen: DrawScreen, curses_mock: MagicMock) -> None:
        screen.init_colors()
        number_pair = list(Highlight).index(Highlight.NUMBER) + 1
        curses_mock.init_pair.assert_any_call(number_pair, hex_to_xterm("#ED1515"), -1)
        assert screen.colors[Highlight.NUMBER] == number_pair << 8
        assert set(screen.colors) == set(Highlight)

    def test_user_colour_override(self, curses_mock: MagicMock, stdscr: MagicMock) -> None:
        screen = DrawScreen(stdscr, {"colors": {"number": "#ffffff"}})
        screen.init_colors()
        number_pair = list(Highlight).index(Highlight.NUMBER) + 1
        curses_mock.init_pair.assert_any_call(number_pair, 231, -1)

    def test_eight_colour_fallback(self, screen: DrawScreen, curses_mock: MagicMock) -> None:
        curses_mock.COLORS = 8
        screen.init_colors()
        match_pair = list(Highlight).index(Highlight.MATCH) + 1
        curses_mock.init_pair.assert_any_call(
            match_pair, DrawScreen.BASIC_COLORS[Highlight.MATCH], -1
        )

    def test_monochrome_fallback(self, screen: DrawScreen, curses_mock: MagicMock) -> None:
        curses_mock.has_colors.return_value = False
        screen.init_colors()
        curses_mock.start_color.assert_not_called()
        assert screen.colors[Highlight.MATCH] == DrawScreen.MONOCHROME_ATTRS[Highlight.MATCH]
        assert screen.colors[Highlight.STRING] == 0

    def test_failed_pair_falls_back_to_normal(self, screen: DrawScreen, curses_mock: MagicMock) -> None:
        curses_mock.init_pair.side_effect = CursesError("no pair")
        screen.init_colors()
        assert set(screen.colors.values()) == {0}


class TestCursorAndFlush:
    def test_position_cursor_clamps(self, screen: DrawScreen, stdscr: MagicMock) -> None:
        screen.position_cursor(50, 99)
        stdscr.move.assert_called_with(9, 39)
        screen.position_cursor(-1, -1)
        stdscr.move.assert_called_with(0, 0)

    def test_cursor_visibility(self, screen: DrawScreen, curses_mock: MagicMock) -> None:
        screen.hide_cursor()
        screen.show_cursor()
        assert curses_mock.curs_set.call_args_list == [call(0), call(1)]

    def test_flush_uses_double_buffering(self, screen: DrawScreen, stdscr: MagicMock, curses_mock: MagicMock) -> None:
        screen.flush()
        stdscr.noutrefresh.assert_called_once()
        curses_mock.doupdate.assert_called_once()

    def test_clear_erases_window(self, screen: DrawScreen, stdscr: MagicMock) -> None:
        screen.clear()
        stdscr.erase.assert_called_once()
