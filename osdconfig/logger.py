"""Compact single-line log formatting for the console."""

from __future__ import annotations

import logging
import sys
import time
from typing import IO

_RESERVED = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}

_LEVEL_NAMES = {logging.WARNING: "WARN"}


def format_record(record: logging.LogRecord) -> str:
    """Render ``record`` as 'date time LEVEL: message k=v ...' with a trailing newline."""
    stamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(record.created))
    level = _LEVEL_NAMES.get(record.levelno, record.levelname)
    parts = [f"{stamp} {level}: {record.getMessage()}"]

    extras = {
        key: value for key, value in vars(record).items() if key not in _RESERVED
    }
    parts.extend(f" {key}={extras[key]}" for key in sorted(extras))
    parts.append("\n")
    return "".join(parts)


class CompactHandler(logging.Handler):
    """A handler writing compact lines to a stream, hiding debug messages."""

    def __init__(self, stream: IO[str] | None = None, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.stream = stream if stream is not None else sys.stdout

    def filter(self, record: logging.LogRecord):  # type: ignore[override]
        if record.levelno == logging.DEBUG:
            return False
        return super().filter(record)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.stream.write(format_record(record))
            self.stream.flush()
        except Exception:
            self.handleError(record)