"""A line-oriented logger writing formatted records to a pluggable output."""

from __future__ import annotations

import enum
import os
import sys
from dataclasses import dataclass, field
from typing import Callable

from . import currentthread
from .logstream import LogStream
from .timestamp import MICROSECONDS_PER_SECOND, Timestamp
from .timezone import TimeZone


class LogLevel(enum.IntEnum):
    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4
    FATAL = 5


_LEVEL_NAMES = {
    LogLevel.TRACE: "TRACE ",
    LogLevel.DEBUG: "DEBUG ",
    LogLevel.INFO: "INFO  ",
    LogLevel.WARN: "WARN  ",
    LogLevel.ERROR: "ERROR ",
    LogLevel.FATAL: "FATAL ",
}


class FatalLogError(RuntimeError):
    """Raised after a FATAL record has been written and flushed."""


def init_log_level() -> LogLevel:
    """Level chosen by the environment: COMMON_LOG_TRACE, COMMON_LOG_DEBUG, else INFO."""
    if os.environ.get("COMMON_LOG_TRACE") is not None:
        return LogLevel.TRACE
    if os.environ.get("COMMON_LOG_DEBUG") is not None:
        return LogLevel.DEBUG
    return LogLevel.INFO


def default_output(msg: bytes) -> None:
    """Write a record to standard output."""
    out = sys.stdout
    raw = getattr(out, "buffer", None)
    if raw is not None:
        raw.write(msg)
    else:
        out.write(msg.decode("utf-8", errors="replace"))


def default_flush() -> None:
    sys.stdout.flush()


@dataclass
class _Config:
    level: LogLevel = field(default_factory=init_log_level)
    output: Callable[[bytes], None] = default_output
    flush: Callable[[], None] = default_flush
    time_zone: TimeZone = field(default_factory=TimeZone)


_config = _Config()


def log_level() -> LogLevel:
    return _config.level


def set_log_level(level) -> None:
    _config.level = LogLevel(level)


def set_output(func: Callable[[bytes], None]) -> None:
    """Send every finished record, as bytes, to ``func``."""
    _config.output = func


def set_flush(func: Callable[[], None]) -> None:
    """Use ``func`` to flush the output before a FATAL error is raised."""
    _config.flush = func


def set_time_zone(tz: TimeZone) -> None:
    """Stamp records in ``tz``; an invalid zone means UTC."""
    _config.time_zone = tz


def strerror_tl(saved_errno: int) -> str:
    return os.strerror(saved_errno)


def source_basename(filename: str) -> str:
    """The part of a path after its last ``/``."""
    return filename.rsplit("/", 1)[-1]


class Logger:
    """One log record; finished on ``finish()`` or on leaving a ``with`` block."""

    def __init__(
        self,
        file: str,
        line: int,
        level=LogLevel.INFO,
        func: str | None = None,
        saved_errno: int = 0,
        when: Timestamp | None = None,
    ) -> None:
        self.level = LogLevel(level)
        self.line = line
        self.basename = source_basename(file)
        self._stream = LogStream()
        self._finished = False
        self._format_time(when if when is not None else Timestamp.now())
        self._stream << currentthread.tid_string() << _LEVEL_NAMES[self.level]
        if saved_errno != 0:
            self._stream << strerror_tl(saved_errno) << " (errno=" << saved_errno << ") "
        if func is not None:
            self._stream << func << " "

    def _format_time(self, when: Timestamp) -> None:
        seconds, micros = divmod(when.micro_seconds_since_epoch, MICROSECONDS_PER_SECOND)
        tz = _config.time_zone
        if tz.valid():
            dt = tz.to_local_time(seconds)
            suffix = ".%06d " % micros
        else:
            dt = TimeZone.to_utc_time(seconds)
            suffix = ".%06dZ " % micros
        self._stream << "%4d%02d%02d %02d:%02d:%02d" % (
            dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second,
        ) << suffix

    def stream(self) -> LogStream:
        return self._stream

    def finish(self) -> None:
        """Complete the record and write it; raise FatalLogError for FATAL records."""
        if self._finished:
            return
        self._finished = True
        self._stream << " - " << self.basename << ":" << self.line << "\n"
        data = self._stream.buffer().data()
        _config.output(data)
        if self.level == LogLevel.FATAL:
            _config.flush()
            raise FatalLogError(data.decode("utf-8", errors="replace").rstrip("\n"))

    def __enter__(self) -> LogStream:
        return self._stream

    def __exit__(self, *exc) -> None:
        self.finish()


def log(level, message) -> None:
    """Write ``message`` at ``level``, naming the caller's file and line.

    TRACE, DEBUG and INFO records are dropped below the current level;
    TRACE and DEBUG records also name the calling function.
    """
    level = LogLevel(level)
    if level <= LogLevel.INFO and _config.level > level:
        return
    frame = sys._getframe(1)
    code = frame.f_code
    func = code.co_name if level <= LogLevel.DEBUG else None
    with Logger(code.co_filename, frame.f_lineno, level, func) as stream:
        stream << message


def check_not_null(file: str, line: int, names: str, value):
    """Return ``value``; log ``names`` as FATAL (raising FatalLogError) if it is None."""
    if value is None:
        with Logger(file, line, LogLevel.FATAL) as stream:
            stream << names
    return value