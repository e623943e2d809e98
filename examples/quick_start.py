#!/usr/bin/env python3
"""
Quick Start - Typed preferences persisted in SQLite.

Usage:
    python examples/quick_start.py
"""

import logging

from typedstore import Store, connect
from typedstore.schema import boolean, dictionary, list_of, number, string


PREFS = dictionary({
    "theme": string(pattern=r"^(light|dark)$", default_value="light"),
    "volume": number(minimum=0, maximum=100, integer=True, default_value=50),
    "muted": boolean(),
    "recent": list_of(string()),
})


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(message)s")

    storage = connect("sqlite:///prefs.db")
    prefs = Store("prefs", storage, type=PREFS)

    print(f"Loaded: {prefs.value}")

    prefs.set("theme", "dark")
    prefs.update("volume", lambda v: min(v + 10, 100))
    prefs.update("recent", lambda items: (items + ["quick_start.py"])[-5:])

    # Invalid values are replaced by the field's default
    prefs.set("volume", 250)
    print(f"Volume after invalid set: {prefs.get('volume')}")

    prefs.reset("theme")
    print(f"Saved: {storage.get_item('prefs')}")

    storage.close()


if __name__ == "__main__":
    main()
