"""
Settings for linecfg itself.

Loads store settings from ~/.linecfg/settings.toml (or
LINECFG_HOME/settings.toml), falls back to defaults when the file doesn't
exist, and supports per-call overrides via Settings.with_overrides().

settings.toml example:

    [format]
    separator = ": "     # used for new keys in files without entries
    newline = "lf"       # lf, crlf or cr; used for new and empty files
    comment = "#"

    [store]
    immediate_save = false

    [output]
    quiet = false
"""

import dataclasses
import sys
import tomllib
from pathlib import Path
from typing import Optional

from ._paths import get_settings_path

_NEWLINES = {"lf": "\n", "crlf": "\r\n", "cr": "\r"}

# Default settings values, as spelled in settings.toml
_DEFAULTS = {
    "format": {
        "separator": ": ",
        "newline": "lf",
        "comment": "#",
    },
    "store": {
        "immediate_save": False,
    },
    "output": {
        "quiet": False,
    },
}


@dataclasses.dataclass(frozen=True)
class Settings:
    """Immutable settings object."""

    default_separator: str = ": "
    default_newline: str = "\n"
    comment_marker: str = "#"
    immediate_save: bool = False
    quiet: bool = False

    def with_overrides(self, **kwargs) -> "Settings":
        """Return new Settings with specified fields overridden.

        Only applies overrides for non-None values, so options that
        weren't specified don't clobber settings file values.
        """
        updates = {k: v for k, v in kwargs.items() if v is not None}
        return dataclasses.replace(self, **updates) if updates else self


def load_settings(settings_path: Optional[Path] = None) -> Settings:
    """Load settings from TOML file, falling back to defaults.

    Args:
        settings_path: Explicit path to settings file. If None, uses
                       LINECFG_HOME/settings.toml or ~/.linecfg/settings.toml.

    Returns:
        Settings dataclass with merged values.
    """
    path = settings_path or get_settings_path()

    if not path.is_file():
        return Settings()

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        _warn(f"Could not read settings file {path}: {e}")
        return Settings()

    try:
        parsed = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        _warn(f"Could not parse settings file {path}: {e}")
        return Settings()

    return _build_settings(parsed)


def _build_settings(parsed: dict) -> Settings:
    """Build Settings from a parsed TOML dict, using defaults for missing keys."""
    def _get(section: str, key: str):
        default = _DEFAULTS[section][key]
        val = parsed.get(section, {}).get(key, default)
        # Type coercion for safety
        if isinstance(default, bool):
            if isinstance(val, str):
                return val.lower() in ("true", "1", "yes")
            return bool(val)
        if not isinstance(val, str):
            _warn(f"[{section}] {key} must be a string, using default")
            return default
        return val

    separator = _get("format", "separator")
    if not separator or separator.strip(" \t") not in ("", ":", "="):
        _warn(f"[format] separator {separator!r} is not valid, using default")
        separator = _DEFAULTS["format"]["separator"]

    newline_name = _get("format", "newline").lower()
    if newline_name not in _NEWLINES:
        _warn(f"[format] newline {newline_name!r} is not one of lf, crlf, cr")
        newline_name = _DEFAULTS["format"]["newline"]

    comment = _get("format", "comment")
    if not comment or any(ch in comment for ch in " \t\\:="):
        _warn(f"[format] comment {comment!r} is not valid, using default")
        comment = _DEFAULTS["format"]["comment"]

    return Settings(
        default_separator=separator,
        default_newline=_NEWLINES[newline_name],
        comment_marker=comment,
        immediate_save=_get("store", "immediate_save"),
        quiet=_get("output", "quiet"),
    )


def format_settings(settings: Settings, settings_path: Optional[Path] = None) -> str:
    """Format settings for display (used by --config flag)."""
    path = settings_path or get_settings_path()
    newline_name = next(
        (name for name, seq in _NEWLINES.items() if seq == settings.default_newline),
        repr(settings.default_newline),
    )
    lines = [
        f"Settings file: {path}",
        f"  exists: {'yes' if path.is_file() else 'no'}",
        "",
        "[format]",
        f"  separator = {settings.default_separator!r}",
        f"  newline = {newline_name}",
        f"  comment = {settings.comment_marker}",
        "",
        "[store]",
        f"  immediate_save = {str(settings.immediate_save).lower()}",
        "",
        "[output]",
        f"  quiet = {str(settings.quiet).lower()}",
    ]
    return "\n".join(lines)


def _warn(msg: str) -> None:
    """Print a warning to stderr."""
    print(f"linecfg: settings: {msg}", file=sys.stderr)
