"""
Line-oriented document model.

A Document is an ordered list of LineRecord objects, one per physical line
of the source file. Entry lines keep every piece of their original text
(prefix, raw key, separator, raw value, suffix) so that a line nobody wrote
to renders back exactly as it was read. Records are addressed by their
position in the list; the key index maps each key to those positions.
"""

import enum
from typing import Dict, Iterator, List, Optional, Tuple

from .escapes import escape_key, escape_value

BOM = "\ufeff"


class LineKind(enum.Enum):
    BLANK = "blank"
    COMMENT = "comment"
    ENTRY = "entry"
    UNPARSED = "unparsed"


class LineRecord:
    """A single physical line."""

    __slots__ = ("kind", "prefix", "text", "raw_key", "key", "separator",
                 "raw_value", "value", "suffix", "terminator")

    def __init__(self, kind: LineKind, prefix: str = "", text: str = "",
                 raw_key: str = "", key: Optional[str] = None,
                 separator: str = "", raw_value: str = "",
                 value: Optional[str] = None, suffix: str = "",
                 terminator: str = ""):
        self.kind = kind
        self.prefix = prefix
        self.text = text
        self.raw_key = raw_key
        self.key = key
        self.separator = separator
        self.raw_value = raw_value
        self.value = value
        self.suffix = suffix
        self.terminator = terminator

    @classmethod
    def entry(cls, key: str, value: str, prefix: str = "",
              separator: str = ": ", comment_marker: str = "#") -> "LineRecord":
        """Build a new entry line with key and value escaped for the file."""
        return cls(
            LineKind.ENTRY,
            prefix=prefix,
            raw_key=escape_key(key, comment_marker),
            key=key,
            separator=separator,
            raw_value=escape_value(value, comment_marker),
            value=value,
        )

    @property
    def is_entry(self) -> bool:
        return self.kind is LineKind.ENTRY

    def set_value(self, value: str, separator: str = ": ",
                  comment_marker: str = "#") -> None:
        """Replace the value, keeping prefix, key, separator and suffix.

        separator is only used when the line had none (a bare key).
        """
        if value == self.value:
            return
        self.value = value
        self.raw_value = escape_value(value, comment_marker)
        if self.raw_value and not self.separator:
            self.separator = separator
        # an inline comment glued to an empty value needs a space once
        # the value is no longer empty
        if self.raw_value and self.suffix.startswith(comment_marker):
            self.suffix = " " + self.suffix

    def body(self) -> str:
        """Render the line without its terminator."""
        if self.kind is LineKind.ENTRY:
            return (self.prefix + self.raw_key + self.separator
                    + self.raw_value + self.suffix)
        return self.prefix + self.text

    def __repr__(self) -> str:
        return f"LineRecord({self.kind.value}, {self.body()!r}, {self.terminator!r})"


class Document:
    """Ordered sequence of line records plus file-wide formatting facts."""

    def __init__(self, records: Optional[List[LineRecord]] = None,
                 newline: str = "\n", mixed_newlines: bool = False,
                 bom: bool = False):
        self.records: List[LineRecord] = list(records or [])
        self.newline = newline
        self.mixed_newlines = mixed_newlines
        self.bom = bom
        self._index: Optional[Dict[str, List[int]]] = None

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[LineRecord]:
        return iter(self.records)

    def __getitem__(self, pos: int) -> LineRecord:
        return self.records[pos]

    # ── Key index ─────────────────────────────────────────────────────

    def _ensure_index(self) -> Dict[str, List[int]]:
        if self._index is None:
            index: Dict[str, List[int]] = {}
            for pos, record in enumerate(self.records):
                if record.kind is LineKind.ENTRY:
                    index.setdefault(record.key, []).append(pos)
            self._index = index
        return self._index

    def positions(self, key: str) -> List[int]:
        """Return the positions of every entry line for key, in file order."""
        return list(self._ensure_index().get(key, ()))

    def values(self, key: str) -> List[str]:
        """Return every value of key, in file order."""
        return [self.records[pos].value for pos in self.positions(key)]

    def keys(self) -> List[str]:
        """Return distinct keys in order of first appearance."""
        return list(self._ensure_index())

    def __contains__(self, key: str) -> bool:
        return key in self._ensure_index()

    # ── Structural edits ──────────────────────────────────────────────

    def insert(self, pos: int, record: LineRecord) -> None:
        """Insert a new record at pos; it is terminated with self.newline."""
        if pos > 0 and not self.records[pos - 1].terminator:
            self.records[pos - 1].terminator = self.newline
        record.terminator = self.newline
        self.records.insert(pos, record)
        self._index = None

    def append(self, record: LineRecord) -> None:
        self.insert(len(self.records), record)

    def remove(self, pos: int) -> LineRecord:
        """Remove the record at pos and return it."""
        record = self.records.pop(pos)
        if pos == len(self.records) and self.records and not record.terminator:
            # keep a file without a final newline that way
            self.records[-1].terminator = ""
        self._index = None
        return record

    # ── Layout conventions ────────────────────────────────────────────

    def entry_style(self) -> Optional[Tuple[str, str]]:
        """Return (prefix, separator) of the last entry line with a separator."""
        for record in reversed(self.records):
            if record.kind is LineKind.ENTRY and record.separator:
                return record.prefix, record.separator
        return None

    def groups_separated(self) -> bool:
        """True if blank lines sit between every pair of different-key runs."""
        runs = 0
        last_key = None
        blank_since = False
        for record in self.records:
            if record.kind is LineKind.BLANK:
                blank_since = True
            elif record.kind is LineKind.ENTRY:
                if runs == 0:
                    runs = 1
                elif record.key != last_key:
                    if not blank_since:
                        return False
                    runs += 1
                last_key = record.key
                blank_since = False
        return runs >= 2
