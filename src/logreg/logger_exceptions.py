class LoggerManagerError(Exception):
    def __init__(self, reason, details=None):
        self.reason = reason
        self.details = details
        super().__init__(reason)


class AllocationFailure(LoggerManagerError):
    """The sink for a new logger could not be constructed."""

    def __init__(self, context, name, details=None):
        self.context = context
        self.name = name
        super().__init__(
            f"Could not allocate sink for logger '{name}' ({context.name})",
            details,
        )


class InvalidHandle(LoggerManagerError):
    """Release of a logger this manager does not track (any more)."""

    def __init__(self, logger_name, details=None):
        self.logger_name = logger_name
        super().__init__(
            f"Logger '{logger_name}' is not tracked by this manager",
            details,
        )


class LoggerConfigError(ValueError):
    pass
