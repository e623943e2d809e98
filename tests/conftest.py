"""Shared fixtures for typedstore tests."""

import pytest

from typedstore.schema import boolean, dictionary, list_of, number, string
from typedstore.store import MemoryBackend


class FakeTimer:
    """Stand-in for threading.Timer that only fires when told to."""

    def __init__(self, interval, function):
        self.interval = interval
        self.function = function
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        if not self.cancelled:
            self.function()


class CountingBackend(MemoryBackend):
    """MemoryBackend that records every write."""

    def __init__(self):
        super().__init__()
        self.writes = []

    def set_item(self, key, value):
        self.writes.append((key, value))
        super().set_item(key, value)


@pytest.fixture
def timers():
    """List of FakeTimers created through ``timers.factory``."""

    class Timers(list):
        def factory(self, interval, function):
            timer = FakeTimer(interval, function)
            self.append(timer)
            return timer

        def live(self):
            return [t for t in self if t.started and not t.cancelled]

    return Timers()


@pytest.fixture
def storage():
    return CountingBackend()


@pytest.fixture
def settings_type():
    """Descriptor for a small settings document."""
    return dictionary({
        "theme": string(default_value="light"),
        "font": dictionary({
            "size": number(minimum=6, maximum=72, default_value=12),
            "bold": boolean(),
        }),
        "recent": list_of(string()),
    })
