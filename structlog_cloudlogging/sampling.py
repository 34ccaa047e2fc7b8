# ─────────────────────────────────────────────────────────────────────────────
# Sampler — per-second log volume cap as a logging.Filter
# ─────────────────────────────────────────────────────────────────────────────
# Within each tick, records are counted per (level, message). The first
# `initial` of each pass; after that only every `thereafter`-th does.
# Counters reset when the tick rolls over.
#
# Thread-safe: handlers may be called from any thread, so the counters
# are guarded by a threading.Lock.
# ─────────────────────────────────────────────────────────────────────────────

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

from structlog_cloudlogging.config import SamplingConfig


def _message_of(record: logging.LogRecord) -> str:
    # Records from structlog carry the event dict as msg (wrap_for_formatter).
    if isinstance(record.msg, dict):
        return str(record.msg.get("event", ""))
    return str(record.msg)


class Sampler(logging.Filter):
    """Drop repetitive records once a burst has been logged."""

    def __init__(
        self,
        initial: int,
        thereafter: int,
        tick: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        super().__init__()
        self._initial = initial
        self._thereafter = thereafter
        self._tick = tick
        self._clock = clock
        self._lock = threading.Lock()
        self._window_start: float | None = None
        self._counts: dict[tuple[int, str], int] = {}
        self.dropped = 0

    @classmethod
    def from_config(cls, sampling: SamplingConfig) -> Sampler:
        return cls(initial=sampling.initial, thereafter=sampling.thereafter)

    def filter(self, record: logging.LogRecord) -> bool:
        key = (record.levelno, _message_of(record))
        now = self._clock()
        with self._lock:
            if self._window_start is None or now - self._window_start >= self._tick:
                self._window_start = now
                self._counts.clear()
            n = self._counts.get(key, 0) + 1
            self._counts[key] = n

            keep = n <= self._initial or (self._thereafter > 0 and (n - self._initial) % self._thereafter == 0)
            if not keep:
                self.dropped += 1
        return keep
