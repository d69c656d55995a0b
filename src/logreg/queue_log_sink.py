import queue

from logreg.log_entry import LogEntry


class QueueLogSink:
    """
    Log sink that forwards log entries to a viewer via a thread-safe queue.

    This sink performs no UI operations and is safe to use
    from any thread. Entries are dropped when the queue is full.
    """

    def __init__(self, viewer_queue: queue.Queue):
        self._queue = viewer_queue
        self._closed = False

    def emit(self, entry: LogEntry) -> None:
        """
        Forward a log entry to the queue.

        This method must not block or raise exceptions.
        """
        if self._closed:
            return
        try:
            self._queue.put_nowait(entry)
        except queue.Full:
            pass

    def close(self) -> None:
        # The queue belongs to the viewer; just stop forwarding.
        self._closed = True
