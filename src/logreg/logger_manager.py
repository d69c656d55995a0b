"""
Module: logger_manager.py
Location: src/logreg/
Version: 0.1.0

LoggerManager: owner of all Logger handles and of the per-context
VerbosityTable.

Thread ownership model:
  - any thread may create / destroy loggers and change levels
  - _lock guards the tracked-logger set only
  - level changes use the table's per-context locks, never _lock
  - sink construction and close run outside _lock

A Logger is released exactly once: either by destroy_logger() or by
shutdown(). Removal from the tracked set under _lock decides which.
"""

from __future__ import annotations

import threading
from typing import Callable, Dict, Optional, Set

from logreg.log_context import LogContext
from logreg.log_level import LogLevel
from logreg.log_sink import SinkFactory
from logreg.logger import Logger, LoggerState
from logreg.logger_config import LoggerManagerConfig, build_sink_factory
from logreg.logger_exceptions import (
    AllocationFailure,
    InvalidHandle,
    LoggerManagerError,
)
from logreg.verbosity_table import VerbosityTable


class LoggerManager:
    """
    Factory and bookkeeper of Logger handles.

    Usage::

        with LoggerManager(sink_factory, default_level=LogLevel.ERROR) as manager:
            log = manager.create_logger(LogContext.WORKER, "job-7")
            manager.enable_logger_level(LogContext.WORKER, LogLevel.DEBUG)
            log.debug("now visible")
    """

    def __init__(
        self,
        sink_factory: SinkFactory,
        default_level: LogLevel = LogLevel.CONTROL | LogLevel.ERROR,
        *,
        context_levels: Optional[Dict[LogContext, LogLevel]] = None,
        diagnostics: Optional[Callable[[str], None]] = None,
    ):
        self._sink_factory = sink_factory
        self._log = diagnostics or (lambda s: None)

        self._table: Optional[VerbosityTable] = VerbosityTable(
            default_level, overrides=context_levels
        )

        self._lock = threading.Lock()
        self._loggers: Set[Logger] = set()
        self._shut_down = False

    @classmethod
    def from_config(
        cls,
        config: LoggerManagerConfig,
        *,
        diagnostics: Optional[Callable[[str], None]] = None,
        **sink_options,
    ) -> "LoggerManager":
        """
        Build a manager from a LoggerManagerConfig.

        sink_options are passed to build_sink_factory (stream,
        viewer_queue, zmq_context).
        """
        return cls(
            build_sink_factory(config, **sink_options),
            config.default_level,
            context_levels=config.context_levels,
            diagnostics=diagnostics,
        )

    def __enter__(self) -> "LoggerManager":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

    # -------------------------------------------------
    # Logger lifecycle
    # -------------------------------------------------
    def create_logger(self, context: LogContext, name: Optional[str] = None) -> Logger:
        """
        Create a Logger for context and track it.

        name is optional; the context label is always part of the
        logger name. Raises AllocationFailure if the sink cannot be built.
        """
        table = self._require_table()
        full_name = f"{context.label}.{name}" if name else context.label

        try:
            sink = self._sink_factory(context, full_name)
        except Exception as e:
            self._log(f"[LoggerManager] Sink allocation failed for {full_name}: {e}")
            raise AllocationFailure(context, full_name, details=e) from e
        if sink is None:
            raise AllocationFailure(context, full_name, details="factory returned None")

        logger = Logger(context, name, table, sink)

        with self._lock:
            registered = not self._shut_down
            if registered:
                self._loggers.add(logger)

        if not registered:
            # shutdown() ran while the sink was being built
            try:
                logger._release()
            except Exception as e:
                self._log(f"[LoggerManager] Releasing {full_name} failed: {e}")
            raise LoggerManagerError("LoggerManager is shut down")

        return logger

    def destroy_logger(self, logger: Logger) -> None:
        """
        Release a Logger before shutdown.

        Raises InvalidHandle if the logger was never created here or has
        already been released.
        """
        if not isinstance(logger, Logger):
            raise InvalidHandle(repr(logger), details=type(logger).__name__)

        with self._lock:
            if logger not in self._loggers:
                raise InvalidHandle(
                    getattr(logger, "logger_name", repr(logger)),
                    details=getattr(logger, "state", None),
                )
            self._loggers.discard(logger)

        logger._release()

    # -------------------------------------------------
    # Levels
    # -------------------------------------------------
    def get_logger_level(self, context: LogContext) -> LogLevel:
        return self._require_table().get(context)

    def enable_logger_level(self, context: LogContext, levels: LogLevel) -> LogLevel:
        """
        Enable levels for every current and future logger of context.
        """
        return self._require_table().enable(context, levels)

    def disable_logger_level(self, context: LogContext, levels: LogLevel) -> LogLevel:
        return self._require_table().disable(context, levels)

    # -------------------------------------------------
    # Teardown
    # -------------------------------------------------
    def shutdown(self) -> None:
        """
        Release every tracked Logger, then the table.

        Never raises because of a sink; failures are reported through the
        diagnostics callback and the remaining loggers are still released.
        """
        with self._lock:
            if self._shut_down:
                return
            self._shut_down = True
            remaining = list(self._loggers)
            self._loggers.clear()

        failures = 0
        for logger in remaining:
            try:
                logger._release()
            except Exception as e:
                failures += 1
                self._log(f"[LoggerManager] Releasing {logger.logger_name} failed: {e}")

        self._table = None
        self._log(
            f"[LoggerManager] Shutdown released {len(remaining)} logger(s), "
            f"{failures} failure(s)"
        )

    # -------------------------------------------------
    # Introspection
    # -------------------------------------------------
    @property
    def live_loggers(self) -> int:
        with self._lock:
            return len(self._loggers)

    @property
    def is_shut_down(self) -> bool:
        return self._shut_down

    def snapshot(self) -> dict:
        """
        Levels per context and live logger names (for GUI / debugging).
        """
        table = self._require_table()
        with self._lock:
            names = sorted(
                logger.logger_name
                for logger in self._loggers
                if logger.state is LoggerState.LIVE
            )
        return {"levels": table.snapshot(), "loggers": names}

    def _require_table(self) -> VerbosityTable:
        table = self._table
        if table is None:
            raise LoggerManagerError("LoggerManager is shut down")
        return table
