from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict
import threading
import time

from logreg.log_context import LogContext
from logreg.log_level import LogLevel


@dataclass(frozen=True)
class LogEntry:
    """
    One line handed from a Logger to its sink.
    """

    context: LogContext
    # Subsystem that produced the line.

    logger_name: str
    # Context label, optionally followed by the logger's own name
    # (e.g. WORKER or WORKER.job-7).

    level: LogLevel
    # The single level the caller logged at.

    message: str

    payload: Dict[str, Any] = field(default_factory=dict)
    # Structured details. Must be JSON-serializable for file / zmq sinks.

    timestamp: float = field(default_factory=time.time)

    thread_name: str = field(
        default_factory=lambda: threading.current_thread().name
    )

    def format_line(self) -> str:
        when = datetime.fromtimestamp(self.timestamp).isoformat(timespec="milliseconds")
        level = "|".join(self.level.names()) or "NONE"
        return f"{when} [{self.logger_name}] {level} {self.message}"

    def to_record(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "context": self.context.label,
            "logger": self.logger_name,
            "level": "|".join(self.level.names()),
            "thread": self.thread_name,
            "message": self.message,
            "payload": self.payload,
        }
