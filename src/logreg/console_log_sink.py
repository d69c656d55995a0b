import sys
import threading
from typing import Optional, TextIO

from logreg.log_entry import LogEntry


class ConsoleLogSink:
    """
    Writes one formatted text line per entry to a stream (stderr by default).
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream if stream is not None else sys.stderr
        self._lock = threading.Lock()

    def emit(self, entry: LogEntry) -> None:
        try:
            line = entry.format_line()
            with self._lock:
                print(line, file=self._stream, flush=True)
        except Exception:
            pass

    def close(self) -> None:
        # The stream is not ours (stderr / caller supplied); leave it open.
        try:
            with self._lock:
                self._stream.flush()
        except Exception:
            pass
