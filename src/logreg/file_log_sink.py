import json
from pathlib import Path
import threading

from logreg.log_entry import LogEntry


class FileLogSink:
    """
    Appends one JSON object per entry to a JSONL file.

    Several loggers may point at the same path; each holds its own
    handle and writes whole lines, so records do not interleave.
    """

    def __init__(self, logfile_path: str):
        self._path = Path(logfile_path)
        self._lock = threading.Lock()

        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self._path, "a", encoding="utf-8")

    @property
    def path(self) -> Path:
        return self._path

    def emit(self, entry: LogEntry) -> None:
        try:
            line = json.dumps(entry.to_record(), default=str)
            with self._lock:
                if self._file.closed:
                    return
                self._file.write(line + "\n")
                self._file.flush()
        except Exception:
            # A full disk must not take a worker thread down with it
            pass

    def close(self) -> None:
        try:
            with self._lock:
                self._file.close()
        except Exception:
            pass
