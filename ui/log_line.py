"""Styled, display-ready log lines and the record formatter that builds them."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from rich.cells import cell_len
from rich.segment import Segment
from rich.style import Style

from utils.logger import Level, LogRecord

LEVEL_STYLES = {
    Level.TRACE: Style(color="green"),
    Level.DEBUG: Style(color="cyan"),
    Level.INFO: Style(color="blue"),
    Level.WARN: Style(color="yellow"),
    Level.ERROR: Style(color="red"),
}

UNNAMED = "(unnamed)"


@dataclass(frozen=True)
class LogLine:
    """One log entry as ordered segments; the last segment is the message body.

    Only the body may contain newlines. Each newline-separated part of the
    body is its own physical row on screen.
    """

    segments: tuple[Segment, ...]

    def __post_init__(self) -> None:
        if not self.segments:
            raise ValueError("a log line needs at least one segment")

    @property
    def prefix(self) -> tuple[Segment, ...]:
        return self.segments[:-1]

    @property
    def body(self) -> Segment:
        return self.segments[-1]

    @property
    def body_parts(self) -> list[str]:
        return self.body.text.split("\n")

    @property
    def row_count(self) -> int:
        # prefix segments are single-line, so only the body adds rows
        return self.body.text.count("\n") + 1

    @property
    def width(self) -> int:
        """Sum over segments of each segment's widest newline-split part."""
        return sum(
            max(cell_len(part) for part in segment.text.split("\n"))
            for segment in self.segments
        )

    @property
    def plain(self) -> str:
        return "".join(segment.text for segment in self.segments)


def format_timestamp(now: datetime) -> str:
    return f"{now:%H:%M:%S}.{now.microsecond // 1000:03d}"


def format_record(record: LogRecord, now: datetime | None = None) -> LogLine:
    """Turn a log record into a styled line.

    Layout: ``<time> [<thread>] <LEVEL> <<file>:<line>> <message>``; the
    time, level and message carry the level colour. Missing fields fall
    back to ``(unnamed)`` and ``0``.
    """
    style = LEVEL_STYLES[record.level]
    stamp = now or record.timestamp
    return LogLine((
        Segment(format_timestamp(stamp), style),
        Segment(f" [{record.thread_name or UNNAMED}] "),
        Segment(record.level.name, style),
        Segment(f" <{record.file or UNNAMED}:{record.line or 0}> "),
        Segment(record.message, style),
    ))
