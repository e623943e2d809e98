"""Debounced delivery of serialized values to storage."""

import itertools
import logging
import threading
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

TimerFactory = Callable[[float, Callable[[], None]], Any]


class DebouncedWriter:
    """Coalesce repeated writes into one delayed write of the latest payload.

    At most one timer is pending. Each ``schedule`` replaces the payload and
    restarts the timer, so a burst of saves produces a single write carrying
    the last value, ``delay`` seconds after the last save.

    Example:
        writer = DebouncedWriter(0.1, lambda source: storage.set_item("k", source))
        writer.schedule('{"a":1}')
        writer.schedule('{"a":2}')  # replaces the first payload
        # ~0.1s later: one set_item("k", '{"a":2}')
    """

    def __init__(
        self,
        delay: float,
        write: Callable[[Any], Any],
        timer_factory: Optional[TimerFactory] = None,
    ):
        """Create a writer.

        Args:
            delay: Seconds between the last schedule() and the write
            write: Called with the payload when the timer fires
            timer_factory: Builds a started-later timer from (delay, callback);
                defaults to threading.Timer
        """
        self.delay = delay
        self._write = write
        self._timer_factory = timer_factory or threading.Timer
        self._lock = threading.Lock()
        self._timer: Any = None
        self._payload: Any = None
        self._generation = itertools.count()
        self._current = -1

    @property
    def pending(self) -> bool:
        """Whether a write is waiting for its timer."""
        with self._lock:
            return self._payload is not None

    def schedule(self, payload: Any) -> None:
        """Queue ``payload``, replacing any payload already waiting."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            generation = next(self._generation)
            self._current = generation
            self._payload = payload
            self._timer = self._timer_factory(
                self.delay, lambda: self._fire(generation)
            )
            self._timer.daemon = True
            self._timer.start()
        logger.debug("Write scheduled in %.3fs", self.delay)

    def _fire(self, generation: int) -> None:
        with self._lock:
            # A timer cancelled too late to stop its thread
            if generation != self._current or self._payload is None:
                return
            payload = self._payload
            self._payload = None
            self._timer = None
        self._write(payload)

    def flush(self) -> bool:
        """Write the pending payload now. Returns whether one was pending."""
        payload = self._take()
        if payload is None:
            return False
        self._write(payload)
        return True

    def cancel(self) -> bool:
        """Drop the pending payload. Returns whether one was pending."""
        payload = self._take()
        if payload is not None:
            logger.debug("Pending write cancelled")
        return payload is not None

    def _take(self) -> Any:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            payload = self._payload
            self._payload = None
            self._current = -1
            return payload
