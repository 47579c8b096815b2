# tests/utils/test_fileio.py
"""Tests for line-oriented loading and saving in `hecto.utils.fileio`."""

from pathlib import Path
from unittest.mock import patch

import pytest

from hecto.utils.fileio import decode_content, load_lines, save_lines, split_lines


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", []),
        ("\n", [""]),
        ("a", ["a"]),
        ("a\n", ["a"]),
        ("a\nb", ["a", "b"]),
        ("a\n\nb\n", ["a", "", "b"]),
        ("a\r\nb\r\n", ["a", "b"]),
        ("a\rb\n", ["a\rb"]),
    ],
)
def test_split_lines(text: str, expected: list[str]) -> None:
    assert split_lines(text) == expected


def test_utf8_is_decoded_directly() -> None:
    with patch("hecto.utils.fileio.chardet.detect") as detect:
        assert decode_content("中文 é".encode("utf-8")) == "中文 é"
    detect.assert_not_called()


def test_undetectable_bytes_fall_back_to_replacement() -> None:
    with patch("hecto.utils.fileio.chardet.detect", return_value={"encoding": None}):
        assert decode_content(b"ok\xff") == "ok\ufffd"


def test_bogus_detected_encoding_falls_back() -> None:
    with patch(
        "hecto.utils.fileio.chardet.detect",
        return_value={"encoding": "no-such-codec", "confidence": 0.9},
    ):
        assert decode_content(b"\xff") == "\ufffd"


def test_load_latin1_file(tmp_path: Path) -> None:
    text = "Le caf\xe9 est tr\xe8s chaud ce matin.\nLa cr\xe8me br\xfbl\xe9e aussi.\n" * 10
    path = tmp_path / "latin.txt"
    path.write_bytes(text.encode("latin-1"))

    lines = load_lines(str(path))

    assert len(lines) == 20
    assert lines[0].startswith("Le caf")
    assert lines[1].startswith("La cr")


def test_load_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_lines(str(tmp_path / "missing.txt"))


def test_save_terminates_every_line(tmp_path: Path) -> None:
    path = tmp_path / "out.rs"
    written = save_lines(str(path), ["fn main() {", "    中", "}"])

    data = path.read_bytes()
    assert data == "fn main() {\n    中\n}\n".encode("utf-8")
    assert written == len(data)


def test_save_empty_buffer_writes_nothing(tmp_path: Path) -> None:
    path = tmp_path / "empty.txt"
    assert save_lines(str(path), []) == 0
    assert path.read_bytes() == b""


def test_save_then_load_keeps_lines(tmp_path: Path) -> None:
    path = tmp_path / "keep.txt"
    save_lines(str(path), ["a", "", "b\tc"])
    assert load_lines(str(path)) == ["a", "", "b\tc"]
