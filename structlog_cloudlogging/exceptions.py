# ─────────────────────────────────────────────────────────────────────────────
# Custom Exceptions
# ─────────────────────────────────────────────────────────────────────────────


class CloudLoggingError(Exception):
    """Base exception for all structlog-cloudlogging errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidLevelError(CloudLoggingError, ValueError):
    """Raised when a level name does not denote a known level."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown log level {name!r}")


class SinkError(CloudLoggingError):
    """Raised when an output path cannot be opened for writing."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Cannot open log output '{path}': {reason}")
