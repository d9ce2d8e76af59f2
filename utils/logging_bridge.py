"""Route records from the standard ``logging`` module into ``utils.logger``."""

from __future__ import annotations

import logging
from datetime import datetime

from utils import logger
from utils.logger import Level, LogRecord


def level_from_logging(levelno: int) -> Level:
    if levelno < logging.DEBUG:
        return Level.TRACE
    if levelno < logging.INFO:
        return Level.DEBUG
    if levelno < logging.WARNING:
        return Level.INFO
    if levelno < logging.ERROR:
        return Level.WARN
    return Level.ERROR


def convert_record(record: logging.LogRecord, message: str) -> LogRecord:
    return LogRecord(
        level=level_from_logging(record.levelno),
        message=message,
        file=record.filename or None,
        line=record.lineno or None,
        thread_name=record.threadName,
        timestamp=datetime.fromtimestamp(record.created),
    )


class LoggerBridgeHandler(logging.Handler):
    """``logging.Handler`` that forwards every record to the log writers."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            logger.dispatch(convert_record(record, self.format(record)))
        except Exception:
            self.handleError(record)


def attach_bridge(target: logging.Logger | None = None, level: int = logging.NOTSET) -> LoggerBridgeHandler:
    """Add a bridge handler to *target* (the root logger by default)."""
    handler = LoggerBridgeHandler(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    (target or logging.getLogger()).addHandler(handler)
    return handler
