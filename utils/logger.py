"""Structured logging frontend: builds records and hands them to writers."""

from __future__ import annotations

import enum
import os
import sys
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Protocol

from colorama import Fore, Style, init

from config import LOG_ECHO, LOG_LEVEL

init()


class Level(enum.IntEnum):
    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4

    @classmethod
    def parse(cls, name: str) -> "Level":
        """Parse a level name such as ``"warn"`` or ``"WARNING"``."""
        key = name.strip().upper()
        if key == "WARNING":
            key = "WARN"
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"unknown log level: {name!r}") from None


@dataclass(frozen=True)
class LogRecord:
    level: Level
    message: str
    file: Optional[str] = None
    line: Optional[int] = None
    thread_name: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)


class LogWriter(Protocol):
    min_level: Level

    def write(self, record: LogRecord, now: Optional[datetime] = None) -> None: ...

    def flush(self) -> None: ...


_LEVEL_COLORS = {
    Level.TRACE: Fore.GREEN,
    Level.DEBUG: Fore.CYAN,
    Level.INFO: Fore.BLUE,
    Level.WARN: Fore.YELLOW,
    Level.ERROR: Fore.RED,
}

_lock = threading.Lock()
_writers: list[LogWriter] = []
_failed: set[int] = set()
_min_level = Level.parse(LOG_LEVEL)
_echo = LOG_ECHO


def add_writer(writer: LogWriter) -> None:
    with _lock:
        _writers.append(writer)


def remove_writer(writer: LogWriter) -> None:
    with _lock:
        if writer in _writers:
            _writers.remove(writer)
        _failed.discard(id(writer))


def clear_writers() -> None:
    with _lock:
        _writers.clear()
        _failed.clear()


def set_level(level: Level | str) -> None:
    global _min_level
    _min_level = Level.parse(level) if isinstance(level, str) else level


def get_level() -> Level:
    return _min_level


def set_echo(enabled: bool) -> None:
    global _echo
    _echo = enabled


def _echo_record(record: LogRecord) -> None:
    color = _LEVEL_COLORS[record.level]
    ts = record.timestamp.strftime("%H:%M:%S")
    print(
        f"{Fore.WHITE}{ts} {color}[{record.level.name}]{Style.RESET_ALL} {record.message}",
        file=sys.stderr,
    )
    sys.stderr.flush()


def _report_failure(writer: LogWriter, exc: OSError) -> None:
    # once per writer; a closed UI stays closed
    with _lock:
        if id(writer) in _failed:
            return
        _failed.add(id(writer))
    print(
        f"{Fore.RED}log writer {type(writer).__name__} failed: {exc}{Style.RESET_ALL}",
        file=sys.stderr,
    )


def dispatch(record: LogRecord) -> None:
    """Send an already built record to every writer that accepts its level."""
    if record.level < _min_level:
        return
    if _echo:
        _echo_record(record)
    with _lock:
        writers = list(_writers)
    for writer in writers:
        if record.level < writer.min_level:
            continue
        try:
            writer.write(record)
        except OSError as exc:
            _report_failure(writer, exc)


def log(level: Level, msg: str, *, _depth: int = 1) -> None:
    if level < _min_level:
        return
    frame = sys._getframe(_depth)
    dispatch(LogRecord(
        level=level,
        message=str(msg),
        file=os.path.basename(frame.f_code.co_filename),
        line=frame.f_lineno,
        thread_name=threading.current_thread().name,
    ))


def trace(msg: str) -> None:
    log(Level.TRACE, msg, _depth=2)


def debug(msg: str) -> None:
    log(Level.DEBUG, msg, _depth=2)


def info(msg: str) -> None:
    log(Level.INFO, msg, _depth=2)


def warn(msg: str) -> None:
    log(Level.WARN, msg, _depth=2)


def error(msg: str) -> None:
    log(Level.ERROR, msg, _depth=2)
