from enum import Enum, auto
from typing import Any, Optional

from logreg.log_context import LogContext
from logreg.log_entry import LogEntry
from logreg.log_level import LogLevel
from logreg.log_sink import LogSink
from logreg.verbosity_table import VerbosityTable

HEXDUMP_WIDTH = 16


class LoggerState(Enum):
    LIVE = auto()
    RELEASED = auto()


class Logger:
    """
    Logging handle bound to one context.

    Loggers are created and released by LoggerManager only. Every call
    reads the shared VerbosityTable, so level changes made through the
    manager apply to loggers that already exist.

    Usage::

        log = manager.create_logger(LogContext.WORKER, "job-7")
        log.info("Job started", job_id=7)
        log.log_bytes(LogLevel.RAW, "inbound packet", packet)
    """

    def __init__(
        self,
        context: LogContext,
        name: Optional[str],
        table: VerbosityTable,
        sink: LogSink,
    ):
        self.context = context
        self.name = name or ""
        self.logger_name = (
            f"{context.label}.{self.name}" if self.name else context.label
        )
        self._table = table
        self._sink = sink
        self.state = LoggerState.LIVE

    def __repr__(self) -> str:
        return f"Logger({self.logger_name!r}, {self.state.name})"

    # -------------------------------------------------
    # Decision
    # -------------------------------------------------
    def is_enabled(self, level: LogLevel) -> bool:
        return self._table.is_enabled(self.context, level)

    @property
    def level(self) -> LogLevel:
        """Current enabled flags of this logger's context."""
        return self._table.get(self.context)

    # -------------------------------------------------
    # Emit
    # -------------------------------------------------
    def log(self, level: LogLevel, message: str, /, **payload: Any) -> None:
        if self.state is LoggerState.RELEASED:
            return
        if not self._table.is_enabled(self.context, level):
            return

        entry = LogEntry(
            context=self.context,
            logger_name=self.logger_name,
            level=LogLevel(level),
            message=message,
            payload=payload,
        )
        try:
            self._sink.emit(entry)
        except Exception:
            # Logging must never destabilize the calling subsystem.
            pass

    def control(self, message: str, /, **payload: Any) -> None:
        self.log(LogLevel.CONTROL, message, **payload)

    def error(self, message: str, /, **payload: Any) -> None:
        self.log(LogLevel.ERROR, message, **payload)

    def warning(self, message: str, /, **payload: Any) -> None:
        self.log(LogLevel.WARNING, message, **payload)

    def audit(self, message: str, /, **payload: Any) -> None:
        self.log(LogLevel.AUDIT, message, **payload)

    def info(self, message: str, /, **payload: Any) -> None:
        self.log(LogLevel.INFO, message, **payload)

    def debug(self, message: str, /, **payload: Any) -> None:
        self.log(LogLevel.DEBUG, message, **payload)

    def log_bytes(self, level: LogLevel, label: str, data: bytes) -> None:
        """
        Log a hex dump of data as a single multi-line entry.

        The dump is only built when the level is enabled.
        """
        if self.state is LoggerState.RELEASED or not self.is_enabled(level):
            return
        message = f"{label} ({len(data)} bytes)\n" + format_hexdump(data)
        self.log(level, message, length=len(data))

    # -------------------------------------------------
    # Lifecycle (LoggerManager only)
    # -------------------------------------------------
    def _release(self) -> None:
        self.state = LoggerState.RELEASED
        self._sink.close()


def format_hexdump(data: bytes, width: int = HEXDUMP_WIDTH) -> str:
    """
    Render bytes as "offset: hex  ascii" rows.

    The hex column is padded so the ASCII column lines up on a short
    last row; non-printable bytes show as ".".
    """
    rows = []
    for offset in range(0, len(data), width):
        chunk = data[offset:offset + width]
        hex_part = " ".join(f"{b:02x}" for b in chunk)
        text = "".join(chr(b) if 32 <= b < 127 else "." for b in chunk)
        rows.append(f"{offset:04x}: {hex_part:<{width * 3 - 1}}  {text}")
    return "\n".join(rows)
