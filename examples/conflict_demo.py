#!/usr/bin/env python3
"""
Conflict Demo - Two stores writing the same key.

The second store's write is noticed by the first one, which reloads
instead of overwriting it.

Usage:
    python examples/conflict_demo.py
"""

from typedstore import MemoryBackend, Store


def main():
    storage = MemoryBackend()

    def on_conflict(new_source, old_source):
        print(f"Conflict: wanted {new_source}, storage has {old_source}; reloading")
        window_a.load()

    window_a = Store("counter", storage, default_value={"clicks": 0}, on_conflict=on_conflict)
    window_b = Store("counter", storage, default_value={"clicks": 0})

    window_a.update("clicks", lambda n: n + 1)
    window_b.load()
    window_b.update("clicks", lambda n: n + 1)

    # window_a still believes clicks == 1
    window_a.update("clicks", lambda n: n + 1)
    print(f"window_a after reload: {window_a.value}")

    window_a.update("clicks", lambda n: n + 1)
    print(f"Stored: {storage.get_item('counter')}")


if __name__ == "__main__":
    main()
