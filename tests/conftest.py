"""Shared test fixtures for linecfg."""

import os
import subprocess
import sys

import pytest


@pytest.fixture
def linecfg_home(tmp_path, monkeypatch):
    """Provide an isolated ~/.linecfg/ directory for testing.

    Sets LINECFG_HOME env var so all linecfg modules use tmp_path.
    Does NOT create the directory.
    """
    home = tmp_path / ".linecfg"
    monkeypatch.setenv("LINECFG_HOME", str(home))
    return home


@pytest.fixture
def cfg_file(tmp_path):
    """Write raw content to a config file in tmp_path.

    Returns a helper function. Call it with bytes or str (str is encoded
    as UTF-8 with no newline translation) and an optional file name.
    """
    def _write(content, name="test.cfg"):
        path = tmp_path / name
        if isinstance(content, str):
            content = content.encode("utf-8")
        path.write_bytes(content)
        return path
    return _write


@pytest.fixture
def load_store(tmp_path, cfg_file):
    """Build and load a ConfigStore over the given content.

    Returns a helper: load_store(content=None, override=None, **kwargs).
    content=None means the primary file does not exist yet.
    """
    from linecfg.store import ConfigStore

    def _load(content=None, override=None, **kwargs):
        if content is None:
            path = tmp_path / "fresh.cfg"
        else:
            path = cfg_file(content)
        override_path = None
        if override is not None:
            override_path = cfg_file(override, name="override.cfg")
        store = ConfigStore(path, override_path=override_path, **kwargs)
        store.load()
        return store
    return _load


@pytest.fixture
def settings_file(linecfg_home):
    """Write arbitrary TOML content to the test settings file.

    Returns a helper function. Call it with a TOML string.
    """
    def _write(content: str):
        linecfg_home.mkdir(parents=True, exist_ok=True)
        settings_path = linecfg_home / "settings.toml"
        settings_path.write_text(content, encoding="utf-8")
        return settings_path
    return _write


@pytest.fixture
def run_linecfg(tmp_path):
    """Run linecfg as a subprocess with isolated LINECFG_HOME.

    Returns a callable: run_linecfg(args)
    The callable has a .home attribute pointing to the linecfg data dir.
    """
    linecfg_home = tmp_path / ".linecfg"

    def _run(args):
        env = os.environ.copy()
        env["LINECFG_HOME"] = str(linecfg_home)
        cmd = [sys.executable, "-m", "linecfg"] + args
        return subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            env=env,
            timeout=30,
        )

    _run.home = linecfg_home
    return _run
