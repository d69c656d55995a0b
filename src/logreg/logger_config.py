"""
Module: logger_config.py
Location: src/logreg/
Version: 0.1.0

Construction-time configuration for a LoggerManager.

A config is usually loaded from a JSON file shipped with the daemon:

    {
        "default_level": "CONTROL|ERROR",
        "context_levels": {"WORKER": "ERROR|DEBUG", "SOCKET": "ALL"},
        "sink": "file",
        "log_path": "logs/daemon.jsonl"
    }
"""

from __future__ import annotations

import json
import queue
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, TextIO

from logreg.console_log_sink import ConsoleLogSink
from logreg.file_log_sink import FileLogSink
from logreg.log_context import LogContext
from logreg.log_level import LogLevel
from logreg.log_sink import SharedSink, SinkFactory
from logreg.logger_exceptions import LoggerConfigError
from logreg.queue_log_sink import QueueLogSink

SINK_KINDS = ("console", "file", "queue", "zmq")

DEFAULT_LOG_PATH = "logs/daemon.jsonl"
DEFAULT_ZMQ_ENDPOINT = "tcp://localhost:6200"

_CONFIG_KEYS = {"default_level", "context_levels", "sink", "log_path", "zmq_endpoint"}


@dataclass(frozen=True)
class LoggerManagerConfig:
    """
    Declarative configuration for a LoggerManager.
    """

    default_level: LogLevel = LogLevel.CONTROL | LogLevel.ERROR

    # Starting levels that differ from default_level
    context_levels: Dict[LogContext, LogLevel] = field(default_factory=dict)

    # Destination
    sink: str = "console"
    log_path: str = DEFAULT_LOG_PATH
    zmq_endpoint: str = DEFAULT_ZMQ_ENDPOINT

    def __post_init__(self):
        if self.sink not in SINK_KINDS:
            raise LoggerConfigError(
                f"Unknown sink '{self.sink}', expected one of {SINK_KINDS}"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoggerManagerConfig":
        """
        Build a config from plain values, validating names and levels.
        """
        unknown = sorted(set(data) - _CONFIG_KEYS)
        if unknown:
            raise LoggerConfigError(f"Unknown config keys: {unknown}")

        kwargs: Dict[str, Any] = {}
        if "default_level" in data:
            kwargs["default_level"] = _parse_level(data["default_level"])

        overrides = data.get("context_levels") or {}
        if not isinstance(overrides, dict):
            raise LoggerConfigError("context_levels must be a mapping")
        context_levels: Dict[LogContext, LogLevel] = {}
        for key, value in overrides.items():
            try:
                context = LogContext.parse(str(key))
            except ValueError as e:
                raise LoggerConfigError(str(e)) from e
            context_levels[context] = _parse_level(value)
        kwargs["context_levels"] = context_levels

        for key in ("sink", "log_path", "zmq_endpoint"):
            if key in data:
                kwargs[key] = str(data[key])

        return cls(**kwargs)


def load_config(path: str | Path) -> LoggerManagerConfig:
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise LoggerConfigError(f"Invalid logging config {path}: {e}") from e
    except OSError as e:
        raise LoggerConfigError(f"Cannot read logging config {path}: {e}") from e
    if not isinstance(data, dict):
        raise LoggerConfigError(f"Logging config {path} must hold a JSON object")
    return LoggerManagerConfig.from_dict(data)


def build_sink_factory(
    config: LoggerManagerConfig,
    *,
    stream: Optional[TextIO] = None,
    viewer_queue: Optional[queue.Queue] = None,
    zmq_context=None,
) -> SinkFactory:
    """
    Factory for the configured destination.

    All loggers share one underlying sink; it is opened with the first
    logger and closed with the last.
    """
    if config.sink == "console":
        return SharedSink(lambda: ConsoleLogSink(stream)).factory()

    if config.sink == "file":
        return SharedSink(lambda: FileLogSink(config.log_path)).factory()

    if config.sink == "queue":
        if viewer_queue is None:
            raise LoggerConfigError("Queue sink requires a viewer_queue")
        return SharedSink(lambda: QueueLogSink(viewer_queue)).factory()

    # zmq is only imported when a network sink is configured
    from logreg.zmq_log_sink import ZmqLogSink

    return SharedSink(
        lambda: ZmqLogSink(config.zmq_endpoint, context=zmq_context)
    ).factory()


def _parse_level(value: Any) -> LogLevel:
    if isinstance(value, bool):
        raise LoggerConfigError(f"Invalid log level: {value!r}")
    if isinstance(value, int):
        value = str(value)
    if isinstance(value, (list, tuple)):
        value = "|".join(str(v) for v in value) or "NONE"
    try:
        return LogLevel.parse(str(value))
    except ValueError as e:
        raise LoggerConfigError(str(e)) from e
