"""
Format-preserving key/value store.

A ConfigStore owns a primary document (read/write) and an optional
override document (read-only). Reads look in the override first; writes
and deletes only ever touch the primary document. Nothing reaches the
disk until save(), unless immediate_save is on.

Keys are case-sensitive; surrounding whitespace is ignored when looking
them up. A key may appear on several lines: single-value reads and writes
use the last occurrence, read_all() returns every occurrence in file order.
"""

import sys
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Iterator, List, Optional

from ._paths import get_config_path
from .config import Settings
from .convert import from_text, to_text
from .document import Document, LineKind, LineRecord
from .escapes import escape_value
from .parser import read_document
from .serializer import render, write_atomic


class InvalidKeyError(ValueError):
    """Raised when a key is None, empty or only whitespace."""

    def __init__(self, message: str, argument: str = "key"):
        self.argument = argument
        super().__init__(f"{message} (argument: {argument})")


class NullKeyError(InvalidKeyError, TypeError):
    """Raised when the key is None."""


class EmptyKeyError(InvalidKeyError):
    """Raised when the key is empty or only whitespace."""


def _validate_key(key) -> str:
    """Return the lookup form of key, or raise InvalidKeyError."""
    if key is None:
        raise NullKeyError("Key cannot be null.")
    if not isinstance(key, str):
        raise TypeError(f"Key must be a string, not {type(key).__name__}.")
    stripped = key.strip()
    if not stripped:
        raise EmptyKeyError("Key cannot be empty.")
    return stripped


class ValueView:
    """Every value of one key, in file order.

    Lazy and restartable: each iteration looks at the store as it is at
    that moment, so a view taken before a write reflects the write.
    """

    __slots__ = ("_store", "_key")

    def __init__(self, store: "ConfigStore", key: str):
        self._store = store
        self._key = key

    def __iter__(self) -> Iterator[str]:
        return iter(self._store._values(self._key))

    def __len__(self) -> int:
        return len(self._store._values(self._key))

    def __bool__(self) -> bool:
        return len(self) > 0

    def __repr__(self) -> str:
        return f"ValueView({self._key!r}, {self._store._values(self._key)!r})"


class ConfigStore:
    """Key/value store over a line-oriented text file."""

    def __init__(self, path=None, override_path=None,
                 settings: Optional[Settings] = None,
                 immediate_save: Optional[bool] = None):
        self._settings = (settings or Settings()).with_overrides(
            immediate_save=immediate_save,
        )
        self._path = Path(path) if path is not None else get_config_path()
        self._document: Optional[Document] = None
        self._override_path: Optional[Path] = None
        self._override: Optional[Document] = None
        if override_path is not None:
            self.override_path = override_path

    # ── Paths ─────────────────────────────────────────────────────────

    @property
    def path(self) -> Path:
        return self._path

    @path.setter
    def path(self, value) -> None:
        """Point the store at another file; it is read on next access."""
        self._path = Path(value)
        self._document = None

    @property
    def override_path(self) -> Optional[Path]:
        return self._override_path

    @override_path.setter
    def override_path(self, value) -> None:
        """Set (and immediately load) or clear the override file."""
        if value is None:
            self._override_path = None
            self._override = None
            return
        self._override_path = Path(value)
        self._override = self._read(self._override_path)[0]

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def immediate_save(self) -> bool:
        return self._settings.immediate_save

    @immediate_save.setter
    def immediate_save(self, value: bool) -> None:
        self._settings = self._settings.with_overrides(immediate_save=bool(value))

    @property
    def document(self) -> Document:
        """The primary document, loading it first if needed."""
        return self._ensure_document()

    # ── Load / save ───────────────────────────────────────────────────

    def load(self) -> bool:
        """(Re)read the primary file, and the override file if one is set.

        Returns True if the primary file existed. A missing file is not an
        error: the store simply starts out empty.
        """
        self._document, existed = self._read(self._path)
        if self._override_path is not None:
            self._override = self._read(self._override_path)[0]
        return existed

    def save(self) -> bool:
        """Write the primary document to disk.

        Missing parent directories are created. Returns False (after a
        warning) instead of raising when the file cannot be written.
        """
        document = self._ensure_document()
        try:
            write_atomic(self._path, render(document))
        except OSError as e:
            self._warn(f"Could not save {self._path}: {e}")
            return False
        return True

    def _read(self, path: Path):
        """Read path into a Document. Returns (document, existed)."""
        try:
            return read_document(
                path,
                comment_marker=self._settings.comment_marker,
                default_newline=self._settings.default_newline,
            )
        except OSError as e:
            self._warn(f"Could not read {path}: {e}")
            return self._new_document(), False

    def _new_document(self) -> Document:
        return Document(newline=self._settings.default_newline)

    def _ensure_document(self) -> Document:
        if self._document is None:
            self.load()
        return self._document

    # ── Reads ─────────────────────────────────────────────────────────

    def _source(self, key: str) -> Document:
        """Return the document that answers reads for key."""
        if self._override is not None and key in self._override:
            return self._override
        return self._ensure_document()

    def _values(self, key: str) -> List[str]:
        return self._source(key).values(key)

    def read(self, key: str, default=None):
        """Return the last value of key converted to the type of default.

        Returns default itself when the key is absent. Raises
        ConversionError when the value does not parse as that type.
        """
        key = _validate_key(key)
        values = self._values(key)
        if not values:
            return default
        return from_text(values[-1], default, key)

    def read_all(self, key: str) -> ValueView:
        """Return every value of key, in file order (empty if absent)."""
        return ValueView(self, _validate_key(key))

    def keys(self) -> List[str]:
        """Return every visible key: primary keys first, then override-only."""
        keys = self._ensure_document().keys()
        if self._override is not None:
            keys += [k for k in self._override.keys() if k not in keys]
        return keys

    def __contains__(self, key) -> bool:
        try:
            key = _validate_key(key)
        except (InvalidKeyError, TypeError):
            return False
        if self._override is not None and key in self._override:
            return True
        return key in self._ensure_document()

    # ── Writes ────────────────────────────────────────────────────────

    def write(self, key: str, value) -> None:
        """Write a value (str, bool, int, float) or a sequence of values.

        A single value replaces the last occurrence of key in place, or
        adds a new line at the end. A sequence makes the key hold exactly
        those values: the last occurrence takes the first one, the rest
        follow it, earlier occurrences go away. None or an empty sequence
        deletes the key. The override file is never written.
        """
        key = _validate_key(key)
        if value is None:
            self._delete(key)
        elif isinstance(value, (str, bool, int, float)):
            self._write_one(key, to_text(value))
        elif (isinstance(value, Iterable)
              and not isinstance(value, (bytes, bytearray, Mapping))):
            self._write_many(key, [to_text(v) for v in value])
        else:
            raise TypeError(f"Unsupported value type: {type(value).__name__}")
        self._changed()

    def delete(self, key: str) -> None:
        """Remove every line holding key. Surrounding lines are kept."""
        self._delete(_validate_key(key))
        self._changed()

    def _write_one(self, key: str, text: str) -> None:
        document = self._ensure_document()
        positions = document.positions(key)
        if positions:
            document[positions[-1]].set_value(
                text, self._settings.default_separator,
                self._settings.comment_marker,
            )
        else:
            self._append(document, key, [text])

    def _write_many(self, key: str, texts: List[str]) -> None:
        if not texts:
            self._delete(key)
            return

        document = self._ensure_document()
        positions = document.positions(key)
        if not positions:
            self._append(document, key, texts)
            return

        marker = self._settings.comment_marker
        last = document[positions[-1]]
        last.set_value(texts[0], self._settings.default_separator, marker)
        pos = positions[-1] + 1
        for text in texts[1:]:
            document.insert(pos, LineRecord(
                LineKind.ENTRY,
                prefix=last.prefix,
                raw_key=last.raw_key,
                key=key,
                separator=last.separator or self._settings.default_separator,
                raw_value=escape_value(text, marker),
                value=text,
            ))
            pos += 1

        # earlier occurrences sit before the inserted lines
        for earlier in reversed(positions[:-1]):
            document.remove(earlier)

    def _append(self, document: Document, key: str, texts: List[str]) -> None:
        """Add new lines for key at the end, styled like the last entry."""
        style = document.entry_style()
        prefix, separator = style or ("", self._settings.default_separator)

        if (document.groups_separated()
                and document[len(document) - 1].kind is not LineKind.BLANK):
            document.append(LineRecord(LineKind.BLANK))

        for text in texts:
            document.append(LineRecord.entry(
                key, text, prefix, separator, self._settings.comment_marker,
            ))

    def _delete(self, key: str) -> None:
        document = self._ensure_document()
        for pos in reversed(document.positions(key)):
            document.remove(pos)

    def _changed(self) -> None:
        if self._settings.immediate_save:
            self.save()

    # ── Misc ──────────────────────────────────────────────────────────

    def _warn(self, msg: str) -> None:
        """Print a warning to stderr unless quiet."""
        if not self._settings.quiet:
            print(f"linecfg: store: {msg}", file=sys.stderr)

    def __repr__(self) -> str:
        return f"ConfigStore({str(self._path)!r}, override={self._override_path})"
