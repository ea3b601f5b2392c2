"""
Command-line interface for linecfg.

Usage:
    linecfg app.cfg --list                  # show every key and value
    linecfg app.cfg --get Width             # print the last value of Width
    linecfg app.cfg --get Recent --all      # print every value of Recent
    linecfg app.cfg --set Width 800         # write one value and save
    linecfg app.cfg --set Recent a b c      # write several values and save
    linecfg app.cfg --delete Width          # remove every Width line
    linecfg --config                        # show effective settings
"""

import argparse
import sys

from ._version import __version__, get_display_version


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    p = argparse.ArgumentParser(
        prog="linecfg",
        description=(
            "Read and edit key/value config files "
            "without disturbing comments, spacing or line endings."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "examples:\n"
            "  linecfg app.cfg --get Width             # last value of Width\n"
            "  linecfg app.cfg --get Recent --all      # every value of Recent\n"
            "  linecfg app.cfg --set Width 800         # write and save\n"
            "  linecfg app.cfg --set Recent a b c      # multi-value write\n"
            "  linecfg app.cfg --delete Width          # remove all Width lines\n"
        ),
    )

    p.add_argument(
        "file",
        nargs="?",
        metavar="FILE",
        help="config file (default: LINECFG_HOME/linecfg.cfg)",
    )

    p.add_argument(
        "--override", "-o",
        metavar="PATH",
        help="read-only file whose values win over FILE on reads",
    )

    p.add_argument(
        "--get", "-g",
        metavar="KEY",
        dest="get_key",
        help="print the value of KEY",
    )

    p.add_argument(
        "--all", "-a",
        action="store_true",
        dest="get_all",
        help="with --get, print every value of KEY in file order",
    )

    p.add_argument(
        "--default", "-d",
        metavar="VALUE",
        help="with --get, print VALUE when KEY is absent",
    )

    p.add_argument(
        "--set", "-s",
        nargs="+",
        metavar="KEY VALUE",
        dest="set_args",
        help="write one or more values for KEY and save",
    )

    p.add_argument(
        "--delete",
        metavar="KEY",
        dest="delete_key",
        help="remove every line holding KEY and save",
    )

    p.add_argument(
        "--list", "-l",
        action="store_true",
        dest="list_keys",
        help="show every key and value (default action)",
    )

    p.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="suppress warning messages",
    )

    p.add_argument(
        "--config",
        action="store_true",
        dest="show_config",
        help="show current settings",
    )

    p.add_argument(
        "--version", "-V",
        action="version",
        version=f"linecfg {get_display_version()} ({__version__})",
    )

    return p


def main(argv=None):
    """Main entry point.

    Dispatch priority: config → delete → set → get → list.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.set_args is not None and len(args.set_args) < 2:
        parser.error("--set needs a KEY and at least one VALUE")

    # Load settings and apply CLI overrides
    from .config import load_settings
    settings = load_settings().with_overrides(quiet=args.quiet or None)

    # --config: show effective settings
    if args.show_config:
        _cmd_config(settings)
        return

    from .store import ConfigStore, InvalidKeyError
    store = ConfigStore(args.file, override_path=args.override, settings=settings)
    store.load()

    try:
        if args.delete_key is not None:
            _cmd_delete(store, args.delete_key)
            return

        if args.set_args is not None:
            _cmd_set(store, args.set_args[0], args.set_args[1:])
            return

        if args.get_key is not None:
            _cmd_get(store, args.get_key, args.get_all, args.default)
            return
    except InvalidKeyError as e:
        print(f"linecfg: {e}", file=sys.stderr)
        sys.exit(1)

    _cmd_list(store)


def _cmd_config(settings):
    """Show effective settings."""
    from .config import format_settings
    print(format_settings(settings))


def _cmd_get(store, key, get_all=False, default=None):
    """Print the value(s) of key."""
    if get_all:
        values = list(store.read_all(key))
    else:
        value = store.read(key)
        values = [] if value is None else [value]

    if not values:
        if default is None:
            print(f"linecfg: {key.strip()}: not found", file=sys.stderr)
            sys.exit(1)
        values = [default]

    for value in values:
        print(value)


def _cmd_set(store, key, values):
    """Write one or more values and save."""
    store.write(key, values[0] if len(values) == 1 else values)
    _save_or_exit(store)


def _cmd_delete(store, key):
    """Delete every occurrence of key and save."""
    store.delete(key)
    _save_or_exit(store)


def _cmd_list(store):
    """Show every visible key and value."""
    keys = store.keys()
    if not keys:
        print("(no entries)")
        return
    for key in keys:
        for value in store.read_all(key):
            print(f"{key}: {value}")


def _save_or_exit(store):
    if not store.save():
        print(f"linecfg: could not write {store.path}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
