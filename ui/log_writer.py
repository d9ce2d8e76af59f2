from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from ui.log_line import format_record
from ui.log_store import LogStore
from ui.notifier import CallbackSink
from utils.logger import Level, LogRecord

if TYPE_CHECKING:
    from ui.app import ConsoleApp


class LogViewWriter:
    """Log writer that feeds a ``LogStore`` and wakes the UI loop.

    Registering more than one writer for the same store duplicates every
    message in the view.
    """

    # level filtering is the frontend's job
    min_level = Level.TRACE

    def __init__(self, store: LogStore, sink: CallbackSink) -> None:
        self.store = store
        self.sink = sink

    def write(self, record: LogRecord, now: datetime | None = None) -> None:
        """Store the formatted record, then ask for a redraw.

        Raises ``SinkClosedError`` when the UI loop is gone; the line is
        stored regardless.
        """
        self.store.append(format_record(record, now))
        self.sink.notify()

    def flush(self) -> None:
        # nothing is buffered
        pass


def log_view_writer(app: ConsoleApp) -> LogViewWriter:
    return LogViewWriter(app.store, app.cb_sink())
