# ─────────────────────────────────────────────────────────────────────────────
# Field Encoders — source location, timestamp and duration shapes
# ─────────────────────────────────────────────────────────────────────────────
# Values that have both a nested and a flat representation implement
# LogMarshaler. A FieldEncoder decides which one the destination gets:
#
#   StructuredFieldEncoder → nested object   (JSON output)
#   ScalarFieldEncoder     → single string   (console output)
#
# The choice is made by the encoder object, never by inspecting the value.
# ─────────────────────────────────────────────────────────────────────────────

from __future__ import annotations

import os
import time
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import StrEnum
from typing import Any, Protocol, runtime_checkable

_NANOS_PER_SECOND = 1_000_000_000


@runtime_checkable
class LogMarshaler(Protocol):
    """A value that can render itself either nested or as one scalar."""

    def to_object(self) -> dict[str, Any]: ...

    def to_scalar(self) -> str: ...


@runtime_checkable
class FieldEncoder(Protocol):
    """Output capability: does the destination accept nested objects?"""

    @property
    def nested(self) -> bool: ...

    def encode(self, value: LogMarshaler) -> Any: ...


class StructuredFieldEncoder:
    """Destination supports nested objects (e.g. JSON)."""

    nested = True

    def encode(self, value: LogMarshaler) -> dict[str, Any]:
        return value.to_object()

    def __repr__(self) -> str:
        return "StructuredFieldEncoder()"


class ScalarFieldEncoder:
    """Destination only takes flat scalars (e.g. console key=value)."""

    nested = False

    def encode(self, value: LogMarshaler) -> str:
        return value.to_scalar()

    def __repr__(self) -> str:
        return "ScalarFieldEncoder()"


STRUCTURED = StructuredFieldEncoder()
SCALAR = ScalarFieldEncoder()


class Encoding(StrEnum):
    """Output encoding of a configured logger."""

    json = "json"
    console = "console"

    def field_encoder(self) -> FieldEncoder:
        match self:
            case Encoding.json:
                return STRUCTURED
            case Encoding.console:
                return SCALAR


# ── Source location ──────────────────────────────────────────────────────────
# https://cloud.google.com/logging/docs/reference/v2/rest/v2/LogEntry#logentrysourcelocation


@dataclass(frozen=True)
class SourceLocation:
    """Call site of a log statement."""

    file: str
    line: int
    function: str

    def to_object(self) -> dict[str, Any]:
        # Cloud Logging declares line as an int64, which travels as a JSON string.
        return {"file": self.file, "line": str(self.line), "function": self.function}

    def to_scalar(self) -> str:
        return f"{self.trimmed_path()}:{self.line}"

    def trimmed_path(self) -> str:
        """Last directory plus file name, e.g. ``pkg/module.py``."""
        path = self.file.replace(os.sep, "/")
        return "/".join(path.rsplit("/", 2)[-2:])


def encode_source_location(location: SourceLocation, encoder: FieldEncoder) -> Any:
    return encoder.encode(location)


# ── Timestamp ────────────────────────────────────────────────────────────────
# https://cloud.google.com/logging/docs/agent/logging/configuration#timestamp-processing


@dataclass(frozen=True)
class Timestamp:
    """Point in time as whole seconds since the epoch plus a nanosecond remainder."""

    seconds: int
    nanos: int

    def __post_init__(self) -> None:
        if not 0 <= self.nanos < _NANOS_PER_SECOND:
            raise ValueError(f"nanos must be in [0, 1e9), got {self.nanos}")

    @classmethod
    def from_ns(cls, ns: int) -> Timestamp:
        seconds, nanos = divmod(ns, _NANOS_PER_SECOND)
        return cls(seconds=seconds, nanos=nanos)

    @classmethod
    def from_datetime(cls, value: datetime) -> Timestamp:
        """Naive datetimes are taken to be UTC."""
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        delta = value - datetime(1970, 1, 1, tzinfo=UTC)
        ns = (delta.days * 86_400 + delta.seconds) * _NANOS_PER_SECOND + delta.microseconds * 1_000
        return cls.from_ns(ns)

    @classmethod
    def now(cls) -> Timestamp:
        return cls.from_ns(time.time_ns())

    def to_object(self) -> dict[str, Any]:
        return {"seconds": self.seconds, "nanos": self.nanos}

    def to_scalar(self) -> str:
        """RFC 3339 in UTC with up to nine fractional digits, trailing zeros dropped."""
        base = datetime.fromtimestamp(self.seconds, tz=UTC).strftime("%Y-%m-%dT%H:%M:%S")
        fraction = f"{self.nanos:09d}".rstrip("0")
        return f"{base}.{fraction}Z" if fraction else f"{base}Z"


def encode_timestamp(timestamp: Timestamp, encoder: FieldEncoder) -> Any:
    return encoder.encode(timestamp)


# ── Duration ─────────────────────────────────────────────────────────────────


def encode_duration(value: timedelta | float) -> float:
    """Duration as floating-point milliseconds; bare numbers are seconds."""
    if isinstance(value, timedelta):
        return value / timedelta(milliseconds=1)
    return float(value) * 1000.0
