# tests/test_core/test_highlight_options.py
"""Tests for the file-type table in `hecto.core.HighlightOptions`."""

import pytest

from hecto.core.HighlightOptions import (
    C_TYPES,
    RUST_KEYWORDS,
    FileType,
    HighlightOptions,
)


@pytest.mark.parametrize(
    "filename, expected",
    [
        ("main.rs", FileType.RUST),
        ("src/lib.rs", FileType.RUST),
        ("hello.c", FileType.C),
        ("stdio.h", FileType.C),
        ("notes.txt", FileType.TEXT),
        ("README", None),
        ("script.py", None),
        ("", None),
        (None, None),
    ],
)
def test_file_type_for(filename, expected) -> None:
    assert HighlightOptions.file_type_for(filename) == expected


def test_rust_enables_everything() -> None:
    options = HighlightOptions.from_filename("main.rs")
    assert options.file_type is FileType.RUST
    assert all(
        (options.numbers, options.strings, options.characters, options.comments, options.multiline_comments)
    )
    assert options.primary_keywords == RUST_KEYWORDS
    assert "fn" in options.primary_keywords
    assert "u32" in options.secondary_keywords


def test_c_uses_c_keywords() -> None:
    options = HighlightOptions.from_filename("main.c")
    assert options.file_type is FileType.C
    assert options.multiline_comments
    assert options.secondary_keywords == C_TYPES
    assert "return" in options.primary_keywords


@pytest.mark.parametrize("filename", ["notes.txt", "Makefile", "data.csv"])
def test_other_named_files_get_numbers_and_strings(filename: str) -> None:
    options = HighlightOptions.from_filename(filename)
    assert options.numbers and options.strings
    assert not (options.characters or options.comments or options.multiline_comments)
    assert options.primary_keywords == () and options.secondary_keywords == ()


def test_unnamed_buffer_disables_everything() -> None:
    assert HighlightOptions.from_filename(None) == HighlightOptions()
    options = HighlightOptions()
    assert options.file_type is None
    assert not any(
        (options.numbers, options.strings, options.characters, options.comments, options.multiline_comments)
    )


def test_file_type_displays_its_name() -> None:
    assert str(FileType.RUST) == "Rust"
    assert f"{FileType.C}" == "C"
