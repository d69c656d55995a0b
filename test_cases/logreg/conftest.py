import threading

import pytest

from logreg.log_level import LogLevel
from logreg.logger_manager import LoggerManager


class RecordingSink:
    """Test double: records every entry and counts close() calls."""

    def __init__(self, name: str = ""):
        self.name = name
        self.entries = []
        self.close_calls = 0
        self._lock = threading.Lock()

    def emit(self, entry) -> None:
        with self._lock:
            self.entries.append(entry)

    def close(self) -> None:
        with self._lock:
            self.close_calls += 1


class RecordingFactory:
    """SinkFactory handing out one RecordingSink per logger."""

    def __init__(self):
        self.sinks = []
        self._lock = threading.Lock()

    def __call__(self, context, name):
        sink = RecordingSink(name)
        with self._lock:
            self.sinks.append(sink)
        return sink


@pytest.fixture
def factory() -> RecordingFactory:
    return RecordingFactory()


@pytest.fixture
def messages():
    return []


@pytest.fixture
def manager(factory, messages):
    mgr = LoggerManager(factory, LogLevel.ERROR, diagnostics=messages.append)
    yield mgr
    mgr.shutdown()
