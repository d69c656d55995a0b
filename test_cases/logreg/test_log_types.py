import pytest

from logreg.log_context import LogContext
from logreg.log_entry import LogEntry
from logreg.log_level import LogLevel


def test_context_parse_accepts_name_or_label() -> None:
    assert LogContext.parse("worker") is LogContext.WORKER
    assert LogContext.parse("SA_MANAGER") is LogContext.SECURITY_ASSOCIATION_MANAGER
    assert LogContext.parse("child_security_association") is LogContext.CHILD_SECURITY_ASSOCIATION


def test_context_parse_rejects_unknown() -> None:
    with pytest.raises(ValueError):
        LogContext.parse("kernel")


def test_sixteen_contexts_with_unique_labels() -> None:
    assert len(LogContext) == 16
    assert len({c.label for c in LogContext}) == 16


def test_level_parse_forms() -> None:
    assert LogLevel.parse("ERROR|debug") == LogLevel.ERROR | LogLevel.DEBUG
    assert LogLevel.parse("ALL") == LogLevel.ALL
    assert LogLevel.parse("NONE") == LogLevel.NONE
    assert LogLevel.parse("34") == LogLevel.ERROR | LogLevel.DEBUG


@pytest.mark.parametrize("text", ["", "LOUD", "ERROR|", "-1", "256", "4096"])
def test_level_parse_rejects_bad_input(text) -> None:
    with pytest.raises(ValueError):
        LogLevel.parse(text)


def test_level_names() -> None:
    assert (LogLevel.RAW | LogLevel.CONTROL).names() == ["CONTROL", "RAW"]
    assert LogLevel.NONE.names() == []
    assert len(LogLevel.ALL.names()) == 8


def test_entry_record_is_json_friendly() -> None:
    entry = LogEntry(
        context=LogContext.SOCKET,
        logger_name="SOCKET.udp",
        level=LogLevel.WARNING,
        message="short read",
        payload={"bytes": 3},
        timestamp=0.0,
        thread_name="receiver-1",
    )
    record = entry.to_record()
    assert record["context"] == "SOCKET"
    assert record["level"] == "WARNING"
    assert record["thread"] == "receiver-1"
    assert record["payload"] == {"bytes": 3}
