"""
Parser for linecfg files.

Turns raw file bytes into a Document. Handles the subset of syntax that
linecfg files use:
- key: value, key = value and key value (any whitespace run)
- # comments, whole-line or inline after whitespace
- blank lines
- backslash escapes in keys and values (see escapes.py)
- \\n, \\r\\n and \\r line endings, mixed within one file

Anything that does not look like an entry (a line starting with a
separator, for instance) is kept as an unparsed line and written back
untouched.
"""

import re
from collections import Counter
from pathlib import Path
from typing import List, Optional, Tuple

from .document import BOM, Document, LineKind, LineRecord
from .escapes import SEPARATORS, WHITESPACE, unescape

_LINE_BREAK = re.compile(r"(\r\n|\r|\n)")


def read_document(path, comment_marker: str = "#",
                  default_newline: str = "\n") -> Tuple[Document, bool]:
    """Read and parse the file at path.

    Returns (document, existed). A missing file yields an empty document
    and existed=False; other OSErrors propagate.
    """
    try:
        data = Path(path).read_bytes()
    except FileNotFoundError:
        return Document(newline=default_newline), False
    return parse(data, comment_marker, default_newline), True


def parse(data: bytes, comment_marker: str = "#",
          default_newline: str = "\n") -> Document:
    """Parse UTF-8 bytes into a Document."""
    # surrogateescape lets undecodable bytes survive a load/save cycle
    text = data.decode("utf-8", errors="surrogateescape")
    bom = text.startswith(BOM)
    if bom:
        text = text[len(BOM):]

    lines = split_lines(text)
    newline, mixed = _dominant_newline(lines, default_newline)

    records = [parse_line(line, terminator, comment_marker)
               for line, terminator in lines]
    return Document(records, newline=newline, mixed_newlines=mixed, bom=bom)


def split_lines(text: str) -> List[Tuple[str, str]]:
    """Split text into (line, terminator) pairs.

    The last line has an empty terminator when the text does not end with
    a line break. Text ending in a line break has no trailing empty line.
    """
    parts = _LINE_BREAK.split(text)
    lines = list(zip(parts[0::2], parts[1::2] + [""]))
    if lines and lines[-1] == ("", ""):
        lines.pop()
    return lines


def _dominant_newline(lines, default: str) -> Tuple[str, bool]:
    """Return (newline, mixed). Ties go to the style seen first."""
    counts = Counter(term for _, term in lines if term)
    if not counts:
        return default, False
    return counts.most_common(1)[0][0], len(counts) > 1


def parse_line(line: str, terminator: str = "",
               comment_marker: str = "#") -> LineRecord:
    """Classify a single line and split it into its parts."""
    stripped = line.lstrip(WHITESPACE)
    prefix = line[:len(line) - len(stripped)]

    if not stripped:
        return LineRecord(LineKind.BLANK, prefix=prefix, terminator=terminator)

    if stripped.startswith(comment_marker):
        return LineRecord(LineKind.COMMENT, prefix=prefix, text=stripped,
                          terminator=terminator)

    parts = _split_entry(stripped, comment_marker)
    if parts is None:
        return LineRecord(LineKind.UNPARSED, prefix=prefix, text=stripped,
                          terminator=terminator)

    raw_key, separator, raw_value, suffix = parts
    return LineRecord(
        LineKind.ENTRY,
        prefix=prefix,
        raw_key=raw_key,
        key=unescape(raw_key).strip(),
        separator=separator,
        raw_value=raw_value,
        value=unescape(raw_value),
        suffix=suffix,
        terminator=terminator,
    )


def _split_entry(text: str, comment_marker: str) -> Optional[Tuple[str, str, str, str]]:
    """Split an entry line body into (raw_key, separator, raw_value, suffix)."""
    n = len(text)
    i = 0
    while i < n:
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch in WHITESPACE or ch in SEPARATORS:
            break
        i += 1
    i = min(i, n)

    raw_key = text[:i]
    if not unescape(raw_key).strip():
        return None

    j = i
    while j < n and text[j] in WHITESPACE:
        j += 1
    if j < n and text[j] in SEPARATORS:
        j += 1
        while j < n and text[j] in WHITESPACE:
            j += 1

    raw_value, suffix = _split_value(text[j:], comment_marker)
    return raw_key, text[i:j], raw_value, suffix


def _split_value(text: str, comment_marker: str) -> Tuple[str, str]:
    """Split the text after the separator into (raw_value, suffix).

    The suffix holds trailing unescaped whitespace and any inline comment.
    A comment marker only starts a comment at the beginning of the value
    or right after unescaped whitespace.
    """
    n = len(text)
    end = 0
    after_space = True
    i = 0
    while i < n:
        ch = text[i]
        if ch == "\\":
            i = min(i + 2, n)
            end = i
            after_space = False
            continue
        if after_space and text.startswith(comment_marker, i):
            break
        after_space = ch in WHITESPACE
        if not after_space:
            end = i + 1
        i += 1
    return text[:end], text[end:]
