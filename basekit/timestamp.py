"""Microsecond-resolution UTC timestamps."""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime, timedelta

MICROSECONDS_PER_SECOND = 1_000_000

_EPOCH = datetime(1970, 1, 1)


def _trunc_divmod(a: int, b: int) -> tuple[int, int]:
    """Divide rounding toward zero; the remainder takes the sign of ``a``."""
    quotient = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        quotient = -quotient
    return quotient, a - quotient * b


@dataclass(frozen=True, order=True)
class Timestamp:
    """A point in time, in microseconds since the Unix epoch (UTC)."""

    micro_seconds_since_epoch: int = 0

    @classmethod
    def now(cls) -> Timestamp:
        """The current time."""
        return cls(time.time_ns() // 1000)

    @classmethod
    def invalid(cls) -> Timestamp:
        """A timestamp for which ``valid()`` is false."""
        return cls()

    @classmethod
    def from_unix_time(cls, t: int, microseconds: int = 0) -> Timestamp:
        """Build a timestamp from Unix seconds plus extra microseconds."""
        return cls(int(t) * MICROSECONDS_PER_SECOND + microseconds)

    def to_string(self) -> str:
        """Seconds and microseconds, as ``"<seconds>.<micro:06>"``."""
        seconds, micros = _trunc_divmod(
            self.micro_seconds_since_epoch, MICROSECONDS_PER_SECOND
        )
        return "%d.%06d" % (seconds, micros)

    def to_formatted_string(self, show_microseconds: bool = True) -> str:
        """UTC time as ``YYYYMMDD HH:MM:SS[.uuuuuu]``."""
        seconds, micros = _trunc_divmod(
            self.micro_seconds_since_epoch, MICROSECONDS_PER_SECOND
        )
        tm = _EPOCH + timedelta(seconds=seconds)
        text = "%4d%02d%02d %02d:%02d:%02d" % (
            tm.year, tm.month, tm.day, tm.hour, tm.minute, tm.second,
        )
        if show_microseconds:
            text += ".%06d" % micros
        return text

    def valid(self) -> bool:
        return self.micro_seconds_since_epoch > 0

    def seconds_since_epoch(self) -> int:
        return _trunc_divmod(self.micro_seconds_since_epoch, MICROSECONDS_PER_SECOND)[0]


def time_difference(high: Timestamp, low: Timestamp) -> float:
    """``high - low`` in seconds."""
    diff = high.micro_seconds_since_epoch - low.micro_seconds_since_epoch
    return diff / MICROSECONDS_PER_SECOND


def add_time(timestamp: Timestamp, seconds: float) -> Timestamp:
    """The timestamp moved by ``seconds`` (truncated to whole microseconds)."""
    delta = int(seconds * MICROSECONDS_PER_SECOND)
    return Timestamp(timestamp.micro_seconds_since_epoch + delta)