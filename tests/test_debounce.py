"""Tests for DebouncedWriter."""

from typedstore.store import DebouncedWriter


class TestDebouncedWriter:
    """Tests for DebouncedWriter with fake timers."""

    def make(self, timers):
        written = []
        writer = DebouncedWriter(0.5, written.append, timer_factory=timers.factory)
        return writer, written

    def test_schedule_starts_daemon_timer(self, timers):
        writer, written = self.make(timers)
        writer.schedule("a")

        assert len(timers) == 1
        assert timers[0].started is True
        assert timers[0].daemon is True
        assert timers[0].interval == 0.5
        assert writer.pending is True
        assert written == []

    def test_reschedule_replaces_payload(self, timers):
        """Only one timer is live and it carries the last payload."""
        writer, written = self.make(timers)
        writer.schedule("a")
        writer.schedule("b")
        writer.schedule("c")

        assert [t.cancelled for t in timers] == [True, True, False]
        timers[-1].fire()
        assert written == ["c"]
        assert writer.pending is False

    def test_stale_timer_is_ignored(self, timers):
        """A cancelled timer that fires anyway writes nothing."""
        writer, written = self.make(timers)
        writer.schedule("a")
        writer.schedule("b")
        timers[0].function()
        assert written == []
        timers[1].fire()
        assert written == ["b"]

    def test_fires_once(self, timers):
        writer, written = self.make(timers)
        writer.schedule("a")
        timers[0].fire()
        timers[0].function()
        assert written == ["a"]

    def test_flush(self, timers):
        writer, written = self.make(timers)
        assert writer.flush() is False
        writer.schedule("a")
        assert writer.flush() is True
        assert written == ["a"]
        assert timers[0].cancelled is True
        timers[0].function()
        assert written == ["a"]

    def test_cancel(self, timers):
        writer, written = self.make(timers)
        writer.schedule("a")
        assert writer.cancel() is True
        assert writer.cancel() is False
        timers[0].function()
        assert written == []

    def test_schedule_after_write(self, timers):
        writer, written = self.make(timers)
        writer.schedule("a")
        timers[0].fire()
        writer.schedule("b")
        timers[1].fire()
        assert written == ["a", "b"]
