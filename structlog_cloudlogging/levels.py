# ─────────────────────────────────────────────────────────────────────────────
# Levels — native log levels and the Cloud Logging severity table
# ─────────────────────────────────────────────────────────────────────────────
# https://cloud.google.com/logging/docs/reference/v2/rest/v2/LogEntry#logseverity
#
# The first five levels share their numeric values with the stdlib
# logging module, so a LogRecord.levelno maps onto Level directly.
# ─────────────────────────────────────────────────────────────────────────────

from __future__ import annotations

from enum import IntEnum
from types import MappingProxyType

from structlog_cloudlogging.exceptions import InvalidLevelError

# Cloud Logging's "no assigned severity" value.
DEFAULT_SEVERITY = "DEFAULT"


class Level(IntEnum):
    """Ordered native log levels."""

    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40
    DPANIC = 50
    PANIC = 60
    FATAL = 70

    @classmethod
    def parse(cls, name: str) -> Level:
        """Resolve a level name, as used by structlog method names or stdlib.

        "fatal" names Level.FATAL. structlog's BoundLogger.fatal() is an alias
        of critical(): its records carry levelno 50 and render as "CRITICAL".
        To emit FATAL ("EMERGENCY"), log at the number directly, e.g.
        logging.getLogger(name).log(Level.FATAL, ...).

        Raises InvalidLevelError for names that do not denote a level.
        """
        try:
            return _LEVEL_NAMES[name.strip().lower()]
        except KeyError:
            raise InvalidLevelError(name) from None

    @classmethod
    def coerce(cls, value: Level | int | str | None) -> Level | None:
        """Best-effort conversion; None when the value is not a known level."""
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, str):
            try:
                return cls.parse(value)
            except InvalidLevelError:
                return None
        try:
            return cls(value)
        except ValueError:
            return None


_LEVEL_NAMES: MappingProxyType[str, Level] = MappingProxyType(
    {
        "debug": Level.DEBUG,
        "info": Level.INFO,
        "warn": Level.WARN,
        "warning": Level.WARN,
        "error": Level.ERROR,
        "exception": Level.ERROR,
        "dpanic": Level.DPANIC,
        "critical": Level.DPANIC,
        "panic": Level.PANIC,
        "fatal": Level.FATAL,
    }
)


def encode_severity(level: Level | int | str) -> str:
    """Map a native level (or its number / name) to a Cloud Logging severity.

    Anything outside the seven known levels becomes DEFAULT_SEVERITY.
    """
    match Level.coerce(level):
        case Level.DEBUG:
            return "DEBUG"
        case Level.INFO:
            return "INFO"
        case Level.WARN:
            return "WARNING"
        case Level.ERROR:
            return "ERROR"
        case Level.DPANIC:
            return "CRITICAL"
        case Level.PANIC:
            return "ALERT"
        case Level.FATAL:
            return "EMERGENCY"
        case _:
            return DEFAULT_SEVERITY


SEVERITY: MappingProxyType[Level, str] = MappingProxyType({level: encode_severity(level) for level in Level})
