import threading

import pytest

from logreg.log_context import LogContext
from logreg.log_level import LogLevel
from logreg.verbosity_table import VerbosityTable


def test_all_contexts_start_at_default() -> None:
    table = VerbosityTable(LogLevel.ERROR)
    for context in LogContext:
        assert table.get(context) == LogLevel.ERROR


def test_overrides_apply_to_named_context_only() -> None:
    table = VerbosityTable(LogLevel.ERROR, overrides={LogContext.SOCKET: LogLevel.ALL})
    assert table.get(LogContext.SOCKET) == LogLevel.ALL
    assert table.get(LogContext.WORKER) == LogLevel.ERROR


def test_unknown_key_reads_as_empty() -> None:
    table = VerbosityTable(LogLevel.ERROR, contexts=[LogContext.WORKER])
    assert table.get(LogContext.SOCKET) == LogLevel.NONE
    with pytest.raises(KeyError):
        table.enable(LogContext.SOCKET, LogLevel.DEBUG)


def test_enable_is_union_and_idempotent() -> None:
    table = VerbosityTable(LogLevel.ERROR)
    table.enable(LogContext.WORKER, LogLevel.DEBUG | LogLevel.RAW)
    table.enable(LogContext.WORKER, LogLevel.DEBUG)
    assert table.get(LogContext.WORKER) == LogLevel.ERROR | LogLevel.DEBUG | LogLevel.RAW


def test_disable_clears_bits_and_is_idempotent() -> None:
    table = VerbosityTable(LogLevel.ERROR | LogLevel.DEBUG)
    assert table.disable(LogContext.WORKER, LogLevel.ERROR) == LogLevel.DEBUG
    assert table.disable(LogContext.WORKER, LogLevel.ERROR) == LogLevel.DEBUG
    assert table.disable(LogContext.WORKER, LogLevel.ALL) == LogLevel.NONE


def test_update_does_not_leak_into_other_contexts() -> None:
    table = VerbosityTable(LogLevel.ERROR)
    table.enable(LogContext.WORKER, LogLevel.ALL)
    table.disable(LogContext.PARSER, LogLevel.ERROR)
    for context in LogContext:
        if context in (LogContext.WORKER, LogContext.PARSER):
            continue
        assert table.get(context) == LogLevel.ERROR


def test_is_enabled_requires_every_bit() -> None:
    table = VerbosityTable(LogLevel.ERROR)
    assert table.is_enabled(LogContext.WORKER, LogLevel.ERROR)
    assert not table.is_enabled(LogContext.WORKER, LogLevel.ERROR | LogLevel.DEBUG)
    assert not table.is_enabled(LogContext.WORKER, LogLevel.NONE)


def test_concurrent_updates_only_produce_written_values() -> None:
    # Writers toggle between two values; readers must never see a mixture.
    a = LogLevel.ERROR | LogLevel.WARNING
    b = LogLevel.DEBUG | LogLevel.RAW
    table = VerbosityTable(a)
    stop = threading.Event()
    seen = set()

    def writer(start_with_a: bool) -> None:
        for i in range(2000):
            if (i % 2 == 0) == start_with_a:
                table.disable(LogContext.WORKER, b)
                table.enable(LogContext.WORKER, a)
            else:
                table.enable(LogContext.WORKER, b)
                table.disable(LogContext.WORKER, a)

    def reader() -> None:
        while not stop.is_set():
            seen.add(table.get(LogContext.WORKER))

    readers = [threading.Thread(target=reader) for _ in range(2)]
    for t in readers:
        t.start()
    writers = [threading.Thread(target=writer, args=(flag,)) for flag in (True, False)]
    for t in writers:
        t.start()
    for t in writers:
        t.join()
    stop.set()
    for t in readers:
        t.join()

    # Each stored value is a union/subtraction of a and b only
    assert all(int(v) & ~int(a | b) == 0 for v in seen)
    assert table.get(LogContext.SOCKET) == a


def test_snapshot_lists_level_names_by_label() -> None:
    table = VerbosityTable(LogLevel.ERROR | LogLevel.DEBUG)
    snap = table.snapshot()
    assert snap["WORKER"] == ["ERROR", "DEBUG"]
    assert set(snap) == {c.label for c in LogContext}


def run_with_timeout(fn, timeout: float = 2.0) -> bool:
    finished = threading.Event()

    def target() -> None:
        fn()
        finished.set()

    threading.Thread(target=target, daemon=True).start()
    return finished.wait(timeout)


def test_held_context_lock_blocks_neither_reads_nor_other_contexts() -> None:
    table = VerbosityTable(LogLevel.ERROR)
    held = threading.Event()
    release = threading.Event()

    def hold_worker_lock() -> None:
        with table._locks[LogContext.WORKER]:
            held.set()
            release.wait(5)

    holder = threading.Thread(target=hold_worker_lock)
    holder.start()
    held.wait(2)
    try:
        assert run_with_timeout(lambda: table.enable(LogContext.SOCKET, LogLevel.DEBUG))
        assert run_with_timeout(lambda: table.get(LogContext.WORKER))
        assert run_with_timeout(lambda: table.is_enabled(LogContext.WORKER, LogLevel.ERROR))
    finally:
        release.set()
        holder.join()

    assert table.get(LogContext.SOCKET) == LogLevel.ERROR | LogLevel.DEBUG
