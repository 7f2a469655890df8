"""
File helpers for reading Markdown and writing HTML.

Markdown is read as UTF-8 with POSIX line endings; HTML is written as UTF-8
with the platform's native line endings.
"""

import os
from pathlib import Path


def normalize_line_endings(text: str) -> str:
    """Convert CRLF and lone CR line endings to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def read_text_file(path) -> str:
    """
    Read a UTF-8 text file, returning its contents with ``\\n`` line endings.

    OSError and UnicodeDecodeError propagate to the caller unchanged.
    """
    with open(Path(path), "r", encoding="utf-8", newline="") as handle:
        return normalize_line_endings(handle.read())


def write_text_file(path, text: str, line_ending: str = os.linesep) -> None:
    """
    Write ``text`` as UTF-8, converting every line ending to ``line_ending``.

    Args:
        path: Destination file
        text: Content to write
        line_ending: Line terminator to use (default: the platform's native one)
    """
    content = normalize_line_endings(text)
    if line_ending != "\n":
        content = content.replace("\n", line_ending)
    with open(Path(path), "w", encoding="utf-8", newline="") as handle:
        handle.write(content)
