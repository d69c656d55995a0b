import threading
from typing import Callable, Protocol

from logreg.log_context import LogContext
from logreg.log_entry import LogEntry


class LogSink(Protocol):
    """
    Destination for log entries.

    A LogSink may write to a console, a file, a queue, or a network
    socket. LoggerManager constructs one per Logger through a SinkFactory
    and closes it when the Logger is released.
    """

    def emit(self, entry: LogEntry) -> None:
        """
        Receive a log entry for processing.

        Must not block the caller for long.
        Must not raise exceptions outward.
        """

    def close(self) -> None:
        """
        Release the sink's resources. Called exactly once per Logger.
        """


# Called with the logger's context and full name (e.g. "WORKER.job-7").
SinkFactory = Callable[[LogContext, str], LogSink]


class SharedSink:
    """
    Reference-counted sink shared by many loggers.

    The underlying sink is opened by the first acquire() and closed when
    the last holder calls close(). A later acquire() opens a fresh one.
    """

    def __init__(self, opener: Callable[[], LogSink]):
        self._opener = opener
        self._lock = threading.Lock()
        self._sink = None
        self._refs = 0

    def acquire(self) -> "SharedSink":
        with self._lock:
            if self._sink is None:
                self._sink = self._opener()
            self._refs += 1
        return self

    def factory(self) -> SinkFactory:
        """SinkFactory handing out this shared sink to every new logger."""
        return lambda context, name: self.acquire()

    @property
    def refs(self) -> int:
        return self._refs

    def emit(self, entry: LogEntry) -> None:
        sink = self._sink
        if sink is not None:
            sink.emit(entry)

    def close(self) -> None:
        with self._lock:
            if self._refs == 0:
                return
            self._refs -= 1
            if self._refs > 0:
                return
            sink, self._sink = self._sink, None
        sink.close()
