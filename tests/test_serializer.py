"""Tests for rendering documents and writing them to disk."""

import os
import stat
import sys

import pytest

from linecfg.parser import parse
from linecfg.serializer import render, render_text, write_atomic


@pytest.mark.parametrize("data", [
    b"",
    b"# one\n# two\n\n# three\n",
    b"# one\r\n\r\n# two\r\n",
    b"# one\r\r# two\r",
    b"# no final newline\n# here",
    b"  # indented\n\t\n",
])
def test_comment_only_round_trip(data):
    assert render(parse(data)) == data


def test_entries_with_comments_round_trip():
    data = (
        b"# header\r\n"
        b"Key1: Value 1  # first\r\n"
        b"\r\n"
        b"  Key2 =\tValue 2\t\r\n"
        b"Key3 Value 3\r\n"
        b"Key\\_4: \\_Value 4\\_\r\n"
        b": not an entry\r\n"
    )
    assert render(parse(data)) == data


def test_mixed_newlines_normalized_to_dominant():
    data = b"# a\r\n# b\n# c\r\n"
    assert render(parse(data)) == b"# a\r\n# b\r\n# c\r\n"


def test_mixed_newlines_keep_missing_final_newline():
    data = b"# a\n# b\r# c"
    assert render(parse(data)) == b"# a\n# b\n# c"


def test_bom_round_trip():
    data = b"\xef\xbb\xbf# with bom\nKey: v\n"
    assert render(parse(data)) == data


def test_undecodable_bytes_round_trip():
    data = b"Key: caf\xe9\n"
    assert render(parse(data)) == data


def test_render_text():
    assert render_text(parse(b"A: 1\nB: 2\n")) == "A: 1\nB: 2\n"


# ── write_atomic ─────────────────────────────────────────────────────


def test_write_atomic_creates_file(tmp_path):
    target = tmp_path / "out.cfg"
    write_atomic(target, b"Key: v\n")
    assert target.read_bytes() == b"Key: v\n"


def test_write_atomic_replaces_existing(tmp_path):
    target = tmp_path / "out.cfg"
    target.write_bytes(b"old\n")
    write_atomic(target, b"new\n")
    assert target.read_bytes() == b"new\n"


@pytest.mark.parametrize("depth", [1, 2, 3])
def test_write_atomic_creates_directories(tmp_path, depth):
    parent = tmp_path
    for level in range(depth):
        parent = parent / f"level{level}"
    target = parent / "Test.cfg"
    write_atomic(target, b"")
    assert target.is_file()


def test_write_atomic_leaves_no_temp_files(tmp_path):
    target = tmp_path / "out.cfg"
    write_atomic(target, b"x\n")
    assert [p.name for p in tmp_path.iterdir()] == ["out.cfg"]


def test_write_atomic_raises_oserror(tmp_path):
    blocker = tmp_path / "file.txt"
    blocker.write_text("not a directory")
    with pytest.raises(OSError):
        write_atomic(blocker / "sub" / "out.cfg", b"x\n")


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
def test_write_atomic_new_file_honors_umask(tmp_path):
    target = tmp_path / "out.cfg"
    old = os.umask(0o022)
    try:
        write_atomic(target, b"x\n")
    finally:
        os.umask(old)
    assert stat.S_IMODE(target.stat().st_mode) == 0o644


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
def test_write_atomic_keeps_existing_mode(tmp_path):
    target = tmp_path / "out.cfg"
    target.write_bytes(b"old\n")
    target.chmod(0o640)
    write_atomic(target, b"new\n")
    assert stat.S_IMODE(target.stat().st_mode) == 0o640
