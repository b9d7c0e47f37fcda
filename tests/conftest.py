import io
import sys
import threading

import pytest

from osiris.logging import DetailLevel, Log, LogLevel


class RecordingListener:
    """Listener collecting every (level, message) pair it receives."""

    def __init__(self):
        self.records: list[tuple[LogLevel, str]] = []

    def log(self, level: LogLevel, message: str) -> None:
        self.records.append((level, message))


@pytest.fixture
def stream():
    return io.StringIO()


@pytest.fixture(scope="function")
def log(stream):
    """
    Function-scoped Log writing to an in-memory stream.
    Shut down afterwards so no retention thread or exception hook leaks between tests.
    """
    handle = Log(stream=stream, use_color=False)
    handle.detail_level = DetailLevel.NONE
    yield handle
    handle.shutdown()


@pytest.fixture
def make_listener():
    return RecordingListener


@pytest.fixture
def listener():
    return RecordingListener()


@pytest.fixture(autouse=True)
def restore_excepthooks():
    """Guard against a failing test leaving our hooks installed."""
    original_sys, original_threading = sys.excepthook, threading.excepthook
    yield
    sys.excepthook = original_sys
    threading.excepthook = original_threading
