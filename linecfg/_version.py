"""
Version information for linecfg.

This file is the canonical source for version numbers.

Format: MAJOR.MINOR.PATCH[-PHASE]
Example: 0.3.0-beta

To bump version: edit MAJOR, MINOR, PATCH below

Version levels:
  PROJECT_PHASE: Global project maturity (prealpha -> alpha -> beta -> stable).
  PHASE:         Per-MINOR feature set maturity (alpha -> beta -> None).
"""

# Version components - edit these for version bumps
MAJOR = 0
MINOR = 3
PATCH = 0
PHASE = None  # Per-MINOR feature set: None, "alpha", "beta", "rc1", etc.
PROJECT_PHASE = "alpha"  # Project-wide: "prealpha", "alpha", "beta", "stable"

__app_name__ = "linecfg"


def get_base_version():
    """Return the semantic version string (MAJOR.MINOR.PATCH[-PHASE])."""
    base = f"{MAJOR}.{MINOR}.{PATCH}"
    if PHASE:
        base = f"{base}-{PHASE}"
    return base


def get_version():
    """Return the full version string."""
    return __version__


def get_display_version():
    """Return a human-friendly version string with project phase.

    Example: 'ALPHA 0.3.0' or '1.0.0'
    """
    base = get_base_version()
    if PROJECT_PHASE and PROJECT_PHASE != "stable":
        return f"{PROJECT_PHASE.upper()} {base}"
    return base


__version__ = get_base_version()

# For convenience in imports
VERSION = get_version()
BASE_VERSION = get_base_version()
DISPLAY_VERSION = get_display_version()
