# ─────────────────────────────────────────────────────────────────────────────
# structlog Processors — Cloud Logging field layout
# ─────────────────────────────────────────────────────────────────────────────
# TimestampStamper and StacktraceAdder run in the shared chain (structlog
# and foreign stdlib records alike). CloudLoggingFields runs last, inside
# ProcessorFormatter, where the LogRecord is available as `_record`.
# ─────────────────────────────────────────────────────────────────────────────

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime, timedelta
from typing import Any

from structlog.typing import EventDict, WrappedLogger

from structlog_cloudlogging.encoder_config import EncoderConfig
from structlog_cloudlogging.fields import STRUCTURED, FieldEncoder, SourceLocation, Timestamp
from structlog_cloudlogging.levels import Level

# Keys written by structlog.processors.CallsiteParameterAdder.
_CALLSITE_KEYS = ("pathname", "lineno", "func_name")

# Bound fields whose key clashes with a layout key are moved under this prefix.
SHADOWED_PREFIX = "fields."


def _level_of(method_name: str, event_dict: EventDict) -> Level | None:
    record = event_dict.get("_record")
    if record is not None:
        return Level.coerce(record.levelno)
    return Level.coerce(event_dict.get("level", method_name))


class TimestampStamper:
    """Stamp the event with a nanosecond-precision Timestamp."""

    def __init__(self, key: str = "timestamp", clock: Callable[[], int] | None = None):
        self._key = key
        self._clock = clock

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        if self._clock is None:
            event_dict[self._key] = Timestamp.now()
        else:
            event_dict[self._key] = Timestamp.from_ns(self._clock())
        return event_dict


class StacktraceAdder:
    """Ask StackInfoRenderer for a stack on records at or above `threshold`."""

    def __init__(self, threshold: Level):
        self._threshold = threshold

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        if event_dict.get("exc_info") or event_dict.get("stack_info"):
            return event_dict
        level = _level_of(method_name, event_dict)
        if level is not None and level >= self._threshold:
            event_dict["stack_info"] = True
        return event_dict


class InitialFields:
    """Add fixed fields to every event unless the call site overrides them."""

    def __init__(self, fields: Mapping[str, Any]):
        self._fields = dict(fields)

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        for key, value in self._fields.items():
            event_dict.setdefault(key, value)
        return event_dict


class CloudLoggingFields:
    """Rewrite a structlog event dict into the Cloud Logging layout.

    Key order of the result: severity, timestamp, message, logger,
    source location, function, bound fields, stacktrace. A bound field named
    like one of the layout keys is kept as `fields.<key>` instead of
    replacing it.
    """

    def __init__(self, encoder_config: EncoderConfig, field_encoder: FieldEncoder = STRUCTURED):
        self._config = encoder_config
        self._encoder = field_encoder
        self._reserved = frozenset(
            key
            for key in (
                encoder_config.level_key,
                encoder_config.time_key,
                encoder_config.message_key,
                encoder_config.name_key,
                encoder_config.caller_key,
                encoder_config.function_key,
                encoder_config.stacktrace_key,
            )
            if key is not None
        )

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        cfg = self._config
        record = event_dict.get("_record")
        level: Any = record.levelno if record is not None else event_dict.get("level", method_name)
        event_dict.pop("level", None)

        out: EventDict = {cfg.level_key: cfg.encode_level(level)}

        if cfg.time_key is not None:
            timestamp = event_dict.pop(cfg.time_key, None)
            if timestamp is not None:
                out[cfg.time_key] = self._encode_time(timestamp)

        out[cfg.message_key] = event_dict.pop("event", None)

        name = event_dict.pop("logger", None)
        if cfg.name_key is not None and name is not None:
            out[cfg.name_key] = name

        pathname, lineno, func_name = (event_dict.pop(key, None) for key in _CALLSITE_KEYS)
        if cfg.caller_key is not None and pathname is not None and lineno is not None:
            location = SourceLocation(file=pathname, line=lineno, function=func_name or "")
            out[cfg.caller_key] = cfg.encode_caller(location, self._encoder)
        if cfg.function_key is not None and func_name is not None:
            out[cfg.function_key] = func_name

        stack = "\n".join(
            text for text in (event_dict.pop("exception", None), event_dict.pop("stack", None)) if text
        )

        for key, value in event_dict.items():
            if key in self._reserved:
                key = SHADOWED_PREFIX + key
            out[key] = cfg.encode_duration(value) if isinstance(value, timedelta) else value

        if cfg.stacktrace_key is not None and stack:
            out[cfg.stacktrace_key] = stack
        return out

    def _encode_time(self, value: Any) -> Any:
        if isinstance(value, datetime):
            value = Timestamp.from_datetime(value)
        if isinstance(value, Timestamp):
            return self._config.encode_time(value, self._encoder)
        # Already rendered by something else (e.g. structlog's TimeStamper).
        return value


class LevelColumn:
    """Move the severity under `level`, where ConsoleRenderer draws its level column."""

    def __init__(self, level_key: str):
        self._level_key = level_key

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        if self._level_key in event_dict:
            event_dict["level"] = event_dict.pop(self._level_key)
        return event_dict
