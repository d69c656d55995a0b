from enum import Enum


class LogContext(Enum):
    """
    Subsystem a logger speaks for.

    The value is the label embedded in every emitted line.
    """

    PARSER = "PARSER"
    GENERATOR = "GENERATOR"
    SECURITY_ASSOCIATION = "SA"
    SECURITY_ASSOCIATION_MANAGER = "SA_MANAGER"
    CHILD_SECURITY_ASSOCIATION = "CHILD_SA"
    MESSAGE = "MESSAGE"
    THREAD_POOL = "THREAD_POOL"
    WORKER = "WORKER"
    SCHEDULER = "SCHEDULER"
    SENDER = "SENDER"
    RECEIVER = "RECEIVER"
    SOCKET = "SOCKET"
    TESTER = "TESTER"
    DAEMON = "DAEMON"
    CONFIGURATION_MANAGER = "CONFIG"
    ENCRYPTION_PAYLOAD = "ENCRYPTION_PAYLOAD"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: str) -> "LogContext":
        """Resolve a member name or label, case-insensitively."""
        key = text.strip().upper()
        for context in cls:
            if key in (context.name, context.value):
                return context
        raise ValueError(f"Unknown log context: {text!r}")
