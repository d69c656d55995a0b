"""
Module: verbosity_table.py
Location: src/logreg/
Version: 0.1.0

Per-context verbosity flags shared by every logger of a context.

Readers never lock: each entry holds an immutable LogLevel that is replaced
by a single dict store, so a reader sees either the old or the new value.
Writers take the lock of their own context only, so an update to WORKER
never waits on an update to SOCKET.
"""

import threading
from typing import Dict, Iterable, Optional

from logreg.log_context import LogContext
from logreg.log_level import LogLevel


class VerbosityTable:
    """
    Fixed table of LogContext -> enabled LogLevel flags.
    """

    def __init__(
        self,
        default_level: LogLevel = LogLevel.NONE,
        *,
        contexts: Iterable[LogContext] = LogContext,
        overrides: Optional[Dict[LogContext, LogLevel]] = None,
    ):
        self._levels: Dict[LogContext, LogLevel] = {}
        self._locks: Dict[LogContext, threading.Lock] = {}

        for context in contexts:
            self._levels[context] = LogLevel(default_level)
            self._locks[context] = threading.Lock()

        for context, level in (overrides or {}).items():
            if context not in self._levels:
                raise KeyError(f"Context {context} not part of this table")
            self._levels[context] = LogLevel(level)

    # -------------------------------------------------
    # Reads (lock-free)
    # -------------------------------------------------
    def get(self, context: LogContext) -> LogLevel:
        return self._levels.get(context, LogLevel.NONE)

    def is_enabled(self, context: LogContext, level: LogLevel) -> bool:
        """
        True when every bit of level is enabled for context.

        Called on every log line; must stay a plain dict lookup.
        """
        level = LogLevel(level)
        if not level:
            return False
        return self._levels.get(context, LogLevel.NONE) & level == level

    # -------------------------------------------------
    # Updates (per-context exclusion)
    # -------------------------------------------------
    def enable(self, context: LogContext, levels: LogLevel) -> LogLevel:
        with self._lock_for(context):
            updated = LogLevel(int(self._levels[context]) | int(levels))
            self._levels[context] = updated
            return updated

    def disable(self, context: LogContext, levels: LogLevel) -> LogLevel:
        with self._lock_for(context):
            updated = LogLevel(int(self._levels[context]) & ~int(levels))
            self._levels[context] = updated
            return updated

    def _lock_for(self, context: LogContext) -> threading.Lock:
        try:
            return self._locks[context]
        except KeyError:
            raise KeyError(f"Unknown log context: {context}") from None

    # -------------------------------------------------
    # Introspection
    # -------------------------------------------------
    def contexts(self) -> list[LogContext]:
        return list(self._levels.keys())

    def snapshot(self) -> Dict[str, list[str]]:
        """
        Label -> enabled level names (for GUI / debugging).
        """
        return {
            context.label: self.get(context).names()
            for context in self._levels
        }
