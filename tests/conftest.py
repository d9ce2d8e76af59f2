import os
import sys
from datetime import datetime

import pytest
from rich.segment import Segment

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from ui.log_line import LogLine  # noqa: E402
from ui.log_store import LogStore  # noqa: E402
from utils import logger  # noqa: E402
from utils.logger import Level, LogRecord  # noqa: E402


@pytest.fixture
def store():
    return LogStore()


@pytest.fixture
def fixed_time():
    return datetime(2024, 1, 2, 3, 4, 5, 678000)


@pytest.fixture
def make_record(fixed_time):
    def _make(message="hello", level=Level.INFO, **kw):
        kw.setdefault("timestamp", fixed_time)
        return LogRecord(level=level, message=message, **kw)
    return _make


@pytest.fixture
def plain_line():
    """Factory for a line with a fixed-width prefix and the given body."""
    def _make(body, prefix="0123456789"):
        segments = (Segment(prefix), Segment(body)) if prefix else (Segment(body),)
        return LogLine(segments)
    return _make


@pytest.fixture
def frontend():
    """Reset the logging frontend around a test."""
    logger.clear_writers()
    logger.set_level(Level.TRACE)
    logger.set_echo(False)
    yield logger
    logger.clear_writers()
    logger.set_level(Level.TRACE)


class CollectingWriter:
    min_level = Level.TRACE

    def __init__(self):
        self.records = []

    def write(self, record, now=None):
        self.records.append(record)

    def flush(self):
        pass


@pytest.fixture
def collector():
    return CollectingWriter()
