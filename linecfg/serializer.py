"""
Render a Document back to bytes and put those bytes on disk.

Every terminated line is written with the document's newline. For a file
that used one line ending throughout this reproduces it exactly; a file
that mixed styles comes out normalized to its dominant one.
"""

import os
import stat
import tempfile
from pathlib import Path

from ._paths import ensure_parent_dir
from .document import BOM, Document


def render_text(document: Document) -> str:
    """Render a Document to a string."""
    parts = [BOM] if document.bom else []
    for record in document:
        parts.append(record.body())
        if record.terminator:
            parts.append(document.newline)
    return "".join(parts)


def render(document: Document) -> bytes:
    """Render a Document to UTF-8 bytes."""
    return render_text(document).encode("utf-8", errors="surrogateescape")


def write_atomic(path, data: bytes) -> None:
    """Write data to path, creating missing parent directories.

    Bytes go to a temporary file next to the target which then replaces
    it, so readers never see a half-written file. An existing file keeps
    its permissions; a new one gets the mode open() would give it under the
    current umask. Raises OSError.
    """
    path = Path(path)
    parent = ensure_parent_dir(path)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp",
                                    dir=str(parent))
    try:
        with os.fdopen(fd, "wb") as fp:
            fp.write(data)
            fp.flush()
            os.fsync(fp.fileno())
        if path.exists():
            mode = stat.S_IMODE(path.stat().st_mode)
        else:
            mode = 0o666 & ~_current_umask()
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except OSError:
            pass  # already gone
        raise


def _current_umask() -> int:
    # os.umask can only be read by setting it
    mask = os.umask(0)
    os.umask(mask)
    return mask
