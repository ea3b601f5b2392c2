"""
Centralized path resolution for linecfg.

The data directory (~/.linecfg/) holds the default configuration file and
the settings.toml that tunes the store. Supports LINECFG_HOME env var
override for testing and custom installs.
"""

import os
from pathlib import Path


def get_data_dir() -> Path:
    """Return the linecfg data directory path.

    Checks LINECFG_HOME env var first (for testing and custom installs),
    then falls back to ~/.linecfg/.
    """
    env_dir = os.environ.get("LINECFG_HOME")
    if env_dir:
        return Path(env_dir)
    return Path.home() / ".linecfg"


def get_config_path() -> Path:
    """Return the path of the default configuration file."""
    return get_data_dir() / "linecfg.cfg"


def get_settings_path() -> Path:
    """Return the path to the settings TOML file."""
    return get_data_dir() / "settings.toml"


def ensure_parent_dir(path: Path) -> Path:
    """Create every missing directory above path. Returns the parent."""
    parent = Path(path).parent
    parent.mkdir(parents=True, exist_ok=True)
    return parent
