# hecto/core/HighlightOptions.py
"""HighlightOptions Module
========================
Per-file-type syntax highlighting configuration.

A ``HighlightOptions`` instance tells the highlighter which classes of
tokens it may classify (numbers, strings, characters, line comments and
multiline comments) and which keywords belong to the primary and secondary
keyword lists. Instances are derived from a filename extension through a
fixed table and are rebuilt by the buffer whenever it is saved, because the
filename may have changed.

An options object built with no arguments disables every class, which is
what a brand-new unnamed buffer uses.
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class FileType(Enum):
    RUST = "Rust"
    C = "C"
    TEXT = "Text"

    def __str__(self) -> str:
        return self.value


EXTENSION_FILE_TYPES: dict[str, FileType] = {
    "rs": FileType.RUST,
    "c": FileType.C,
    "h": FileType.C,
    "txt": FileType.TEXT,
}

RUST_KEYWORDS: tuple[str, ...] = (
    "as", "break", "const", "continue", "crate", "else", "enum", "extern",
    "false", "fn", "for", "if", "impl", "in", "let", "loop", "match", "mod",
    "move", "mut", "pub", "ref", "return", "self", "Self", "static", "struct",
    "super", "trait", "true", "type", "unsafe", "use", "where", "while",
    "async", "await", "dyn",
)

RUST_TYPES: tuple[str, ...] = (
    "bool", "char", "i8", "i16", "i32", "i64", "i128", "isize", "u8", "u16",
    "u32", "u64", "u128", "usize", "f32", "f64", "str", "String", "Vec",
    "Option", "Result", "Some", "None", "Ok", "Err", "Box",
)

C_KEYWORDS: tuple[str, ...] = (
    "auto", "break", "case", "const", "continue", "default", "do", "else",
    "enum", "extern", "for", "goto", "if", "inline", "register", "restrict",
    "return", "sizeof", "static", "struct", "switch", "typedef", "union",
    "volatile", "while", "NULL",
)

C_TYPES: tuple[str, ...] = (
    "char", "double", "float", "int", "long", "short", "signed", "unsigned",
    "void", "size_t", "ssize_t", "int8_t", "int16_t", "int32_t", "int64_t",
    "uint8_t", "uint16_t", "uint32_t", "uint64_t", "bool",
)


@dataclass(frozen=True)
class HighlightOptions:
    """Which token classes are highlighted and with which keyword lists.

    Attributes:
        file_type (Optional[FileType]): Language profile, ``None`` when the
            extension is unknown or the buffer is unnamed.
        numbers (bool): Highlight separator-bounded runs of ASCII digits.
        strings (bool): Highlight closed ``"..."`` literals.
        characters (bool): Highlight closed ``'...'`` literals.
        comments (bool): Highlight ``//`` line comments.
        multiline_comments (bool): Highlight ``/* ... */`` comments, which
            may span rows.
        primary_keywords (tuple[str, ...]): Classified as Keyword1.
        secondary_keywords (tuple[str, ...]): Classified as Keyword2.
    """

    file_type: Optional[FileType] = None
    numbers: bool = False
    strings: bool = False
    characters: bool = False
    comments: bool = False
    multiline_comments: bool = False
    primary_keywords: tuple[str, ...] = field(default_factory=tuple)
    secondary_keywords: tuple[str, ...] = field(default_factory=tuple)

    @staticmethod
    def file_type_for(filename: Optional[str]) -> Optional[FileType]:
        """Maps a filename to its file type by extension (case-sensitive)."""
        if not filename:
            return None
        _, extension = os.path.splitext(filename)
        return EXTENSION_FILE_TYPES.get(extension[1:]) if extension else None

    @classmethod
    def from_filename(cls, filename: Optional[str]) -> "HighlightOptions":
        """Builds the options for ``filename`` from the fixed file-type table.

        Any named file gets number and string highlighting; Rust and C
        additionally get characters, both comment styles and keywords. An
        empty or missing filename yields options with everything disabled.
        """
        if not filename:
            return cls()

        file_type = cls.file_type_for(filename)
        logging.debug(f"HighlightOptions: '{filename}' resolved to file type {file_type}")

        if file_type is FileType.RUST:
            return cls(
                file_type=file_type,
                numbers=True,
                strings=True,
                characters=True,
                comments=True,
                multiline_comments=True,
                primary_keywords=RUST_KEYWORDS,
                secondary_keywords=RUST_TYPES,
            )
        if file_type is FileType.C:
            return cls(
                file_type=file_type,
                numbers=True,
                strings=True,
                characters=True,
                comments=True,
                multiline_comments=True,
                primary_keywords=C_KEYWORDS,
                secondary_keywords=C_TYPES,
            )
        return cls(file_type=file_type, numbers=True, strings=True)
