"""
Textual encodings for typed values.

Integers are base-10 with an optional sign. Booleans are written as
true/false. Floats are written with the shortest text that reads back to
the same bits, and as NaN, Infinity and -Infinity for the special values.

Reads pick a conversion from the type of the default value passed in:
    str / None  -> the text itself
    bool        -> parse_bool
    Int32       -> parse_int, 32-bit range
    int / Int64 -> parse_int, 64-bit range
    float       -> parse_float
"""

import math
import re
from typing import Optional

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")

_TRUE = ("true", "yes", "on", "1")
_FALSE = ("false", "no", "off", "0")

_FLOAT_SPECIAL = {
    "nan": math.nan,
    "+nan": math.nan,
    "-nan": math.nan,
    "infinity": math.inf,
    "+infinity": math.inf,
    "-infinity": -math.inf,
    "inf": math.inf,
    "+inf": math.inf,
    "-inf": -math.inf,
    "∞": math.inf,
    "+∞": math.inf,
    "-∞": -math.inf,
}


class ConversionError(ValueError):
    """Raised when a stored value cannot be read as the requested type."""

    def __init__(self, text: str, target: str, key: Optional[str] = None):
        self.text = text
        self.target = target
        self.key = key
        where = f" (key {key!r})" if key is not None else ""
        super().__init__(f"Cannot convert {text!r} to {target}{where}.")


class Int32(int):
    """Marks a default value as a 32-bit integer: read(key, Int32(0))."""
    bits = 32


class Int64(int):
    """Marks a default value as a 64-bit integer (same as a plain int)."""
    bits = 64


# ── Integers ─────────────────────────────────────────────────────────


def format_int(value: int) -> str:
    return str(int(value))


def parse_int(text: str, bits: int = 64, key: Optional[str] = None) -> int:
    """Parse a base-10 integer and check it fits in a signed bits-wide int."""
    stripped = text.strip()
    if not _INT_RE.fullmatch(stripped):
        raise ConversionError(text, f"int{bits}", key)
    value = int(stripped)
    limit = 1 << (bits - 1)
    if not -limit <= value < limit:
        raise ConversionError(text, f"int{bits}", key)
    return value


# ── Booleans ─────────────────────────────────────────────────────────


def format_bool(value: bool) -> str:
    return "true" if value else "false"


def parse_bool(text: str, key: Optional[str] = None) -> bool:
    """Parse true/false (also yes/no, on/off, 1/0), case-insensitive."""
    lowered = text.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ConversionError(text, "bool", key)


# ── Floats ───────────────────────────────────────────────────────────


def format_float(value: float) -> str:
    """Format a float so that parse_float returns the identical value."""
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return repr(value)


def parse_float(text: str, key: Optional[str] = None) -> float:
    stripped = text.strip()
    special = _FLOAT_SPECIAL.get(stripped.lower())
    if special is not None:
        return special
    if not _FLOAT_RE.fullmatch(stripped):
        raise ConversionError(text, "float", key)
    return float(stripped)


# ── Dispatch ─────────────────────────────────────────────────────────


def to_text(value) -> str:
    """Convert a str, bool, int or float to its stored text."""
    # bool first: it is a subclass of int
    if isinstance(value, bool):
        return format_bool(value)
    if isinstance(value, int):
        return format_int(value)
    if isinstance(value, float):
        return format_float(value)
    if isinstance(value, str):
        return value
    raise TypeError(f"Unsupported value type: {type(value).__name__}")


def from_text(text: str, like, key: Optional[str] = None):
    """Convert stored text to the type of like (a default value)."""
    if like is None or isinstance(like, str):
        return text
    if isinstance(like, bool):
        return parse_bool(text, key)
    if isinstance(like, int):
        return parse_int(text, getattr(like, "bits", 64), key)
    if isinstance(like, float):
        return parse_float(text, key)
    raise TypeError(f"Unsupported default type: {type(like).__name__}")
