"""
linecfg - Format-preserving key/value configuration files.

Reads, edits and rewrites line-oriented config files while keeping every
line you didn't touch byte-for-byte: comments, blank lines, separators,
spacing and line endings all survive a load/modify/save cycle.

Usage:
    from linecfg import ConfigStore

    cfg = ConfigStore("app.cfg", override_path="/etc/app.cfg")
    cfg.load()
    width = cfg.read("Width", 640)
    cfg.write("Recent", ["a.txt", "b.txt"])
    cfg.save()
"""

from ._version import __version__, get_version, get_base_version, VERSION, BASE_VERSION
from .config import Settings, load_settings
from .convert import ConversionError, Int32, Int64
from .document import Document, LineKind, LineRecord
from .parser import parse, read_document
from .serializer import render
from .store import (
    ConfigStore, EmptyKeyError, InvalidKeyError, NullKeyError, ValueView,
)

__all__ = [
    "__version__",
    "get_version",
    "get_base_version",
    "VERSION",
    "BASE_VERSION",
    "ConfigStore",
    "ValueView",
    "InvalidKeyError",
    "NullKeyError",
    "EmptyKeyError",
    "ConversionError",
    "Int32",
    "Int64",
    "Settings",
    "load_settings",
    "Document",
    "LineKind",
    "LineRecord",
    "parse",
    "read_document",
    "render",
]
