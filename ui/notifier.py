"""Cross-thread wake-up channel from producer threads to the UI loop.

Producers hold a ``CallbackSink`` and push callbacks; the UI thread owns the
single ``CallbackReceiver`` and runs them between frames. A no-op callback
is the "something changed, redraw" signal.
"""

from __future__ import annotations

import queue
import threading
from typing import Any, Callable

from config import NOTIFY_QUEUE_SIZE

Callback = Callable[[Any], None]

# how often a blocked send() rechecks whether the UI loop is gone
_SEND_POLL = 0.1


class SinkClosedError(BrokenPipeError):
    """The UI loop has shut down; nothing will receive callbacks anymore."""

    def __init__(self) -> None:
        super().__init__("UI callback sink is closed")


def _noop(_app: Any) -> None:
    pass


class CallbackSink:
    """Cloneable send end of the UI callback queue."""

    def __init__(self, q: queue.Queue, closed: threading.Event) -> None:
        self._queue = q
        self._closed = closed

    def clone(self) -> "CallbackSink":
        return CallbackSink(self._queue, self._closed)

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def send(self, callback: Callback) -> None:
        """Queue *callback* to run on the UI thread. Blocks only if the queue is full."""
        while True:
            if self._closed.is_set():
                raise SinkClosedError()
            try:
                self._queue.put(callback, timeout=_SEND_POLL)
                return
            except queue.Full:
                continue

    def notify(self) -> None:
        """Ask the UI loop to redraw. Never blocks."""
        if self._closed.is_set():
            raise SinkClosedError()
        try:
            self._queue.put_nowait(_noop)
        except queue.Full:
            # a queued item already guarantees another redraw
            pass


class CallbackReceiver:
    """Receiving end, owned by the UI thread."""

    def __init__(self, maxsize: int = NOTIFY_QUEUE_SIZE) -> None:
        self._queue: queue.Queue[Callback] = queue.Queue(maxsize=maxsize)
        self._closed = threading.Event()
        # taken off the queue by wait(), run first by drain()
        self._head: Callback | None = None

    def sink(self) -> CallbackSink:
        return CallbackSink(self._queue, self._closed)

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def close(self) -> None:
        self._closed.set()

    def pending(self) -> int:
        return self._queue.qsize()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until a callback is queued or *timeout* passes.

        Returns True when something is waiting to be drained.
        """
        if self._head is not None:
            return True
        try:
            callback = self._queue.get(timeout=timeout)
        except queue.Empty:
            return False
        self._head = callback
        return True

    def drain(self, app: Any) -> int:
        """Run every queued callback with *app*; return how many ran."""
        ran = 0
        head, self._head = self._head, None
        if head is not None:
            head(app)
            ran += 1
        while True:
            try:
                callback = self._queue.get_nowait()
            except queue.Empty:
                return ran
            callback(app)
            ran += 1
