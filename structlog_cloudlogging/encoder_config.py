# ─────────────────────────────────────────────────────────────────────────────
# Encoder Config — Cloud Logging field names and value encoders
# ─────────────────────────────────────────────────────────────────────────────
# https://cloud.google.com/logging/docs/structured-logging
# ─────────────────────────────────────────────────────────────────────────────

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from structlog_cloudlogging.fields import (
    FieldEncoder,
    SourceLocation,
    Timestamp,
    encode_duration,
    encode_source_location,
    encode_timestamp,
)
from structlog_cloudlogging.levels import Level, encode_severity

SOURCE_LOCATION_KEY = "logging.googleapis.com/sourceLocation"


@dataclass(frozen=True)
class EncoderConfig:
    """Which output key holds what, and how special values are encoded.

    A key set to None is omitted from the output.
    """

    message_key: str = "message"
    level_key: str = "severity"
    time_key: str | None = "timestamp"
    name_key: str | None = "logger"
    caller_key: str | None = SOURCE_LOCATION_KEY
    function_key: str | None = None
    stacktrace_key: str | None = "stacktrace"
    line_ending: str = "\n"
    encode_level: Callable[[Level | int | str], str] = encode_severity
    encode_time: Callable[[Timestamp, FieldEncoder], Any] = encode_timestamp
    encode_duration: Callable[[timedelta | float], float] = encode_duration
    encode_caller: Callable[[SourceLocation, FieldEncoder], Any] = encode_source_location


_ENCODER_CONFIG = EncoderConfig()


def new_production_encoder_config() -> EncoderConfig:
    return _ENCODER_CONFIG


def new_development_encoder_config() -> EncoderConfig:
    return _ENCODER_CONFIG
