"""Bounded, thread-safe store of formatted log lines shared by writers and views."""

from __future__ import annotations

import collections
import threading
from contextlib import contextmanager
from typing import Iterator, Sequence

from ui.log_line import LogLine

LOG_CAPACITY = 2048


class LogStore:
    """Ring buffer of the most recent log lines, oldest first.

    Any thread may append; the UI thread reads while holding the same lock.
    When full, appending drops the oldest line. Lines are never modified
    after insertion.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._buf: collections.deque[LogLine] = collections.deque(maxlen=LOG_CAPACITY)

    @property
    def capacity(self) -> int:
        return LOG_CAPACITY

    def __len__(self) -> int:
        with self._lock:
            return len(self._buf)

    def append(self, line: LogLine) -> None:
        with self._lock:
            self._buf.append(line)

    @contextmanager
    def locked(self) -> Iterator[Sequence[LogLine]]:
        """Hold the lock and yield the live buffer. Do not append inside."""
        with self._lock:
            yield self._buf

    def lines(self) -> list[LogLine]:
        with self._lock:
            return list(self._buf)

    def snapshot_for_render(self, viewport_height: int) -> list[LogLine]:
        """Return the newest lines that fill *viewport_height* rows, oldest first.

        The oldest returned line may be taller than the rows left for it;
        the caller clips its top.
        """
        tail: list[LogLine] = []
        rows = 0
        with self._lock:
            for line in reversed(self._buf):
                if rows >= viewport_height:
                    break
                tail.append(line)
                rows += line.row_count
        tail.reverse()
        return tail
