"""Command line access to stores kept in a storage backend.

Usage:
    typedstore sqlite:///prefs.db keys
    typedstore sqlite:///prefs.db get prefs font.size
    typedstore sqlite:///prefs.db set prefs font.size 14
"""

import argparse
import json
import logging
import sys
from typing import Any, List, Optional

from .exceptions import StoreError
from .store import Store, connect

logger = logging.getLogger(__name__)

_NOT_FOUND = object()


def _parse_value(text: str) -> Any:
    """Read a JSON literal, falling back to the raw text as a string."""
    try:
        return json.loads(text)
    except ValueError:
        return text


def cmd_keys(storage, args) -> int:
    for key in storage.keys():
        print(key)
    return 0


def cmd_get(storage, args) -> int:
    if storage.get_item(args.name) is None:
        logger.error("No store named %r", args.name)
        return 1
    store = Store(args.name, storage, auto_fix=False)
    value = store.get(args.path, default=_NOT_FOUND)
    if value is _NOT_FOUND:
        logger.error("Path %r not found in %r", args.path, args.name)
        return 1
    print(json.dumps(value, indent=2, ensure_ascii=False))
    return 0


def cmd_set(storage, args) -> int:
    store = Store(args.name, storage, auto_fix=False)
    if not store.set(args.path, _parse_value(args.value)):
        logger.error("Cannot set %r in %r", args.path, args.name)
        return 1
    logger.info("Updated %s in %s", args.path, args.name)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the typedstore command."""
    parser = argparse.ArgumentParser(
        description="Inspect and edit typedstore values",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("url", help="Storage URL (memory://, sqlite:///file.db)")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    keys_parser = commands.add_parser("keys", help="List stored names")
    keys_parser.set_defaults(handler=cmd_keys)

    get_parser = commands.add_parser("get", help="Print a value as JSON")
    get_parser.add_argument("name", help="Store name")
    get_parser.add_argument("path", nargs="?", default="", help="Dotted path")
    get_parser.set_defaults(handler=cmd_get)

    set_parser = commands.add_parser("set", help="Change a value")
    set_parser.add_argument("name", help="Store name")
    set_parser.add_argument("path", help="Dotted path ('' for the whole value)")
    set_parser.add_argument("value", help="JSON literal (bare text is a string)")
    set_parser.set_defaults(handler=cmd_set)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    storage = connect(args.url)
    try:
        return args.handler(storage, args)
    except StoreError as e:
        logger.error("%s", e)
        return 1
    finally:
        storage.close()


if __name__ == "__main__":
    sys.exit(main())
