# ─────────────────────────────────────────────────────────────────────────────
# Sinks — output paths and the handler that writes to them
# ─────────────────────────────────────────────────────────────────────────────

from __future__ import annotations

import logging
import sys
import traceback
from collections.abc import Iterable
from typing import TextIO

from structlog_cloudlogging.exceptions import SinkError

_FILE_SCHEME = "file://"


def _resolve(path: str) -> tuple[TextIO, bool]:
    """Return (stream, owned). Owned streams are closed with the handler."""
    match path:
        case "stderr":
            return sys.stderr, False
        case "stdout":
            return sys.stdout, False
    if "://" in path and not path.startswith(_FILE_SCHEME):
        raise SinkError(path, "unsupported scheme")
    try:
        return open(path.removeprefix(_FILE_SCHEME), "a", encoding="utf-8"), True  # noqa: SIM115
    except OSError as exc:
        raise SinkError(path, exc.strerror or str(exc)) from exc


class SinkHandler(logging.Handler):
    """Write each formatted record to every output stream.

    Failures while formatting or writing are reported to the error
    streams instead of stdlib's default of sys.stderr.
    """

    def __init__(self, output_paths: Iterable[str], error_output_paths: Iterable[str], terminator: str = "\n"):
        super().__init__()
        self.terminator = terminator
        self._owned: list[TextIO] = []
        try:
            self.streams = [self._open(path) for path in output_paths]
            self.error_streams = [self._open(path) for path in error_output_paths]
        except SinkError:
            self._close_owned()
            raise

    def _open(self, path: str) -> TextIO:
        stream, owned = _resolve(path)
        if owned:
            self._owned.append(stream)
        return stream

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = self.format(record) + self.terminator
            for stream in self.streams:
                stream.write(line)
                stream.flush()
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)

    def handleError(self, record: logging.LogRecord) -> None:
        if not logging.raiseExceptions:
            return
        message = f"--- Logging error ---\n{traceback.format_exc()}Record: {record.name} {record.msg!r}\n"
        for stream in self.error_streams:
            try:
                stream.write(message)
                stream.flush()
            except OSError:
                continue

    def close(self) -> None:
        self.acquire()
        try:
            self._close_owned()
        finally:
            self.release()
        super().close()

    def _close_owned(self) -> None:
        for stream in self._owned:
            if not stream.closed:
                stream.close()
        self._owned.clear()
