from enum import IntFlag


class LogLevel(IntFlag):
    """
    Independent verbosity bits.

    A context's enabled set is any combination of these. The registry only
    unions and subtracts them; meaning belongs to sinks and callers.
    """

    NONE = 0
    CONTROL = 1      # Daemon control flow, start/stop
    ERROR = 2        # Operation failed, system continued
    WARNING = 4      # Unexpected but recoverable condition
    AUDIT = 8        # Security relevant events
    INFO = 16        # Normal operation
    DEBUG = 32       # Developer diagnostics
    RAW = 64         # Raw packet / byte dumps
    PRIVATE = 128    # Key material, never enable in production

    ALL = CONTROL | ERROR | WARNING | AUDIT | INFO | DEBUG | RAW | PRIVATE

    @classmethod
    def parse(cls, text: str) -> "LogLevel":
        """
        Parse "ERROR|DEBUG", "ALL", "NONE" or an integer into a LogLevel.
        """
        text = text.strip()
        if not text:
            raise ValueError("Empty log level")
        if text.lstrip("-").isdigit():
            value = int(text)
            if value < 0 or value & ~int(cls.ALL):
                raise ValueError(f"Log level out of range: {value}")
            return cls(value)

        levels = cls.NONE
        for part in text.split("|"):
            name = part.strip().upper()
            if name not in cls.__members__:
                raise ValueError(f"Unknown log level: {part!r}")
            levels |= cls.__members__[name]
        return levels

    def names(self) -> list[str]:
        """Names of the single bits set in this value, lowest bit first."""
        return [
            member.name
            for member in LogLevel
            if member not in (LogLevel.NONE, LogLevel.ALL) and member & self
        ]
