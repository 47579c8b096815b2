# hecto/utils/fileio.py
"""
hecto.utils.fileio
==================

Loading and saving buffer contents as newline-delimited text.

Files are decoded as UTF-8. When a file is not valid UTF-8 the encoding is
guessed with ``chardet`` from a leading sample; if that fails as well the
content is decoded as UTF-8 with replacement characters so that a file can
always be opened. Files are always written back as UTF-8, one ``\\n`` after
every line.

Both functions raise ``OSError`` (``FileNotFoundError``, ``PermissionError``,
``IsADirectoryError``, ...) and leave the reporting to the caller.
"""

import logging
from typing import Iterable

import chardet

logger = logging.getLogger("hecto")

CHARDET_SAMPLE_SIZE = 1024 * 20


def decode_content(raw: bytes) -> str:
    """Decodes file bytes, preferring UTF-8 and falling back to chardet."""
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        logger.debug("Content is not valid UTF-8, detecting encoding with chardet.")

    detected = chardet.detect(raw[:CHARDET_SAMPLE_SIZE])
    encoding = detected.get("encoding")
    if encoding:
        try:
            text = raw.decode(encoding)
            logger.info(
                f"Decoded content as {encoding} (confidence {detected.get('confidence', 0):.2f})"
            )
            return text
        except (UnicodeDecodeError, LookupError) as e:
            logger.warning(f"Decoding as detected encoding {encoding!r} failed: {e}")

    logger.warning("Falling back to UTF-8 with replacement characters.")
    return raw.decode("utf-8", errors="replace")


def split_lines(text: str) -> list[str]:
    """Splits text on ``\\n``, stripping a trailing ``\\r`` from every line.

    A final empty segment after the last newline is not a line.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def load_lines(path: str) -> list[str]:
    """Reads ``path`` and returns its lines without terminators.

    Raises:
        OSError: If the file cannot be read.
    """
    with open(path, "rb") as f:
        raw = f.read()
    lines = split_lines(decode_content(raw))
    logger.info(f"Loaded {len(lines)} lines from '{path}'")
    return lines


def save_lines(path: str, lines: Iterable[str]) -> int:
    """Writes every line followed by ``\\n`` to ``path`` as UTF-8.

    Returns:
        int: Number of bytes written.

    Raises:
        OSError: If the file cannot be written.
    """
    payload = "".join(f"{line}\n" for line in lines).encode("utf-8")
    with open(path, "wb") as f:
        f.write(payload)
    logger.info(f"Wrote {len(payload)} bytes to '{path}'")
    return len(payload)
