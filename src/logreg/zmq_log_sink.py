"""
Module: zmq_log_sink.py
Location: src/logreg/
Version: 0.1.0

Network log sink publishing entries over ZeroMQ.

Each entry goes out as a two-frame message: [topic, json]. The topic is
the context label, so a SUB socket can filter per subsystem with
setsockopt(zmq.SUBSCRIBE, b"WORKER").

ZMQ sockets are not thread-safe; the sink serialises sends with a lock so
loggers used from many threads can share it.
"""

import json
import threading
from typing import Optional

import zmq

from logreg.log_entry import LogEntry


class ZmqLogSink:
    def __init__(
        self,
        endpoint: str,
        *,
        socket_type: int = zmq.PUB,
        context: Optional[zmq.Context] = None,
        bind: bool = False,
        linger_ms: int = 0,
    ):
        self.endpoint = endpoint
        self._lock = threading.Lock()

        # Share the process-wide context unless the caller owns one
        self._ctx = context or zmq.Context.instance()
        self._sock = self._ctx.socket(socket_type)
        self._sock.setsockopt(zmq.LINGER, linger_ms)
        try:
            if bind:
                self._sock.bind(endpoint)
            else:
                self._sock.connect(endpoint)
        except zmq.ZMQError:
            self._sock.close()
            raise

        self._closed = False

    def emit(self, entry: LogEntry) -> None:
        try:
            topic = entry.context.label.encode("utf-8")
            body = json.dumps(entry.to_record(), default=str).encode("utf-8")
            with self._lock:
                if self._closed:
                    return
                self._sock.send_multipart([topic, body], flags=zmq.NOBLOCK)
        except zmq.Again:
            # HWM reached / no peer: drop rather than stall the caller
            pass
        except Exception:
            pass

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            try:
                self._sock.close()
            except zmq.ZMQError:
                pass
