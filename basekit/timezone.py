"""Time zones read from TZif data, and UTC calendar conversions."""

from __future__ import annotations

import struct
import sys
from bisect import bisect_right
from dataclasses import dataclass, field

from .date import JULIAN_DAY_OF_1970_01_01, Date

SECONDS_PER_DAY = 24 * 60 * 60


class TimeZoneError(ValueError):
    """Raised for malformed zone data or use of an invalid time zone."""


@dataclass
class DateTime:
    """Wall-clock time in an unspecified zone; no leap seconds."""

    year: int = 0
    month: int = 0
    day: int = 0
    hour: int = 0
    minute: int = 0
    second: int = 0

    @classmethod
    def from_tm(cls, t) -> DateTime:
        """Build from a ``time.struct_time`` (full year, month 1..12)."""
        return cls(t.tm_year, t.tm_mon, t.tm_mday, t.tm_hour, t.tm_min, t.tm_sec)

    def to_iso_string(self) -> str:
        return "%04d-%02d-%02d %02d:%02d:%02d" % (
            self.year, self.month, self.day, self.hour, self.minute, self.second,
        )


def break_time(t: int) -> DateTime:
    """Split seconds since the epoch into calendar fields (no offset)."""
    days, seconds = divmod(t, SECONDS_PER_DAY)
    minutes, second = divmod(seconds, 60)
    hour, minute = divmod(minutes, 60)
    ymd = Date(days + JULIAN_DAY_OF_1970_01_01).year_month_day()
    return DateTime(ymd.year, ymd.month, ymd.day, hour, minute, second)


@dataclass(frozen=True)
class _Transition:
    utctime: int
    localtime: int
    localtime_idx: int


@dataclass(frozen=True)
class _LocalTime:
    utc_offset: int
    is_dst: bool
    desig_idx: int


@dataclass
class _ZoneData:
    transitions: list[_Transition] = field(default_factory=list)
    localtimes: list[_LocalTime] = field(default_factory=list)
    abbreviation: str = ""
    tzstring: str = ""

    def add_local_time(self, utc_offset: int, is_dst: bool, desig_idx: int) -> None:
        self.localtimes.append(_LocalTime(utc_offset, is_dst, desig_idx))

    def add_transition(self, utc_time: int, localtime_idx: int) -> None:
        if not 0 <= localtime_idx < len(self.localtimes):
            raise TimeZoneError("local time index out of range")
        offset = self.localtimes[localtime_idx].utc_offset
        self.transitions.append(_Transition(utc_time, utc_time + offset, localtime_idx))

    def find_by_utc(self, utc_time: int) -> _LocalTime:
        transitions = self.transitions
        if not transitions or utc_time < transitions[0].utctime:
            return self.localtimes[0]
        idx = bisect_right([t.utctime for t in transitions], utc_time)
        if idx != len(transitions):
            return self.localtimes[transitions[idx - 1].localtime_idx]
        return self.localtimes[transitions[-1].localtime_idx]

    def find_by_local(self, local: DateTime, post_transition: bool) -> _LocalTime:
        localtime = TimeZone.from_utc_time(local)
        transitions = self.transitions
        if not transitions or localtime < transitions[0].localtime:
            return self.localtimes[0]

        idx = bisect_right([t.localtime for t in transitions], localtime)
        if idx == len(transitions):
            return self.localtimes[transitions[-1].localtime_idx]

        prior = transitions[idx - 1]
        prior_second = (
            transitions[idx].utctime - 1 + self.localtimes[prior.localtime_idx].utc_offset
        )
        if prior_second < localtime:
            # The local time falls in a gap skipped by the transition.
            chosen = transitions[idx] if post_transition else prior
            return self.localtimes[chosen.localtime_idx]

        idx -= 1
        if idx != 0:
            prior = transitions[idx - 1]
            prior_second = (
                transitions[idx].utctime - 1 + self.localtimes[prior.localtime_idx].utc_offset
            )
        if localtime <= prior_second:
            # The local time occurs twice.
            chosen = transitions[idx] if post_transition else prior
            return self.localtimes[chosen.localtime_idx]

        return self.localtimes[transitions[idx].localtime_idx]


class _Reader:
    def __init__(self, data: bytes) -> None:
        self._data = data
        self._pos = 0

    def read_bytes(self, n: int) -> bytes:
        if n < 0 or self._pos < 0 or self._pos + n > len(self._data):
            raise TimeZoneError("not enough data")
        chunk = self._data[self._pos:self._pos + n]
        self._pos += n
        return chunk

    def _unpack(self, fmt: str, what: str) -> int:
        size = struct.calcsize(fmt)
        if self._pos < 0 or self._pos + size > len(self._data):
            raise TimeZoneError(f"bad {what} data")
        (value,) = struct.unpack_from(fmt, self._data, self._pos)
        self._pos += size
        return value

    def read_int64(self) -> int:
        return self._unpack(">q", "int64")

    def read_int32(self) -> int:
        return self._unpack(">i", "int32")

    def read_uint8(self) -> int:
        return self._unpack(">B", "uint8")

    def skip(self, n: int) -> None:
        self._pos += n

    def read_to_end(self) -> bytes:
        rest = self._data[max(self._pos, 0):]
        self._pos = len(self._data)
        return rest


def _read_data_block(reader: _Reader, data: _ZoneData, v1: bool) -> None:
    time_size = 4 if v1 else 8
    isutccnt = reader.read_int32()
    isstdcnt = reader.read_int32()
    leapcnt = reader.read_int32()
    timecnt = reader.read_int32()
    typecnt = reader.read_int32()
    charcnt = reader.read_int32()

    if leapcnt != 0:
        raise TimeZoneError("leap second records are not supported")
    if isutccnt != 0 and isutccnt != typecnt:
        raise TimeZoneError("UT indicator count does not match type count")
    if isstdcnt != 0 and isstdcnt != typecnt:
        raise TimeZoneError("standard indicator count does not match type count")
    if timecnt < 0 or typecnt <= 0 or charcnt < 0:
        raise TimeZoneError("bad counts")

    read_time = reader.read_int32 if v1 else reader.read_int64
    times = [read_time() for _ in range(timecnt)]
    indices = [reader.read_uint8() for _ in range(timecnt)]

    for _ in range(typecnt):
        gmtoff = reader.read_int32()
        isdst = reader.read_uint8()
        abbrind = reader.read_uint8()
        data.add_local_time(gmtoff, bool(isdst), abbrind)

    for utc_time, local_idx in zip(times, indices):
        data.add_transition(utc_time, local_idx)

    data.abbreviation = reader.read_bytes(charcnt).decode("latin-1")
    reader.skip(leapcnt * (time_size + 4))
    reader.skip(isstdcnt)
    reader.skip(isutccnt)

    if not v1:
        data.tzstring = reader.read_to_end().decode("latin-1")


class TimeZone:
    """A time zone; ``TimeZone()`` is an invalid one."""

    def __init__(self, data: _ZoneData | None = None) -> None:
        self._data = data

    @classmethod
    def fixed(cls, east_of_utc: int, name: str) -> TimeZone:
        """A zone at a fixed offset east of UTC, with no transitions."""
        data = _ZoneData()
        data.add_local_time(east_of_utc, False, 0)
        data.abbreviation = name
        return cls(data)

    @classmethod
    def utc(cls) -> TimeZone:
        return cls.fixed(0, "UTC")

    @classmethod
    def parse_zone_data(cls, data: bytes) -> TimeZone:
        """Parse TZif bytes; raise TimeZoneError if they are malformed."""
        reader = _Reader(bytes(data))
        if reader.read_bytes(4) != b"TZif":
            raise TimeZoneError("bad head")
        version = reader.read_bytes(1)
        reader.read_bytes(15)

        isgmtcnt = reader.read_int32()
        isstdcnt = reader.read_int32()
        leapcnt = reader.read_int32()
        timecnt = reader.read_int32()
        typecnt = reader.read_int32()
        charcnt = reader.read_int32()

        zone = _ZoneData()
        if version == b"2":
            reader.skip(
                4 * timecnt + timecnt + 6 * typecnt + charcnt
                + 8 * leapcnt + isstdcnt + isgmtcnt
            )
            if reader.read_bytes(4) != b"TZif":
                raise TimeZoneError("bad head")
            reader.skip(16)
            _read_data_block(reader, zone, v1=False)
        else:
            reader.skip(-4 * 6)
            _read_data_block(reader, zone, v1=True)
        return cls(zone)

    @classmethod
    def load_zone_file(cls, zonefile) -> TimeZone:
        """Load a TZif file; an unreadable or malformed file gives an invalid zone."""
        try:
            with open(zonefile, "rb") as fh:
                content = fh.read()
        except OSError:
            return cls()
        try:
            return cls.parse_zone_data(content)
        except TimeZoneError as exc:
            print(exc, file=sys.stderr)
            return cls()

    def valid(self) -> bool:
        return self._data is not None

    def _require_data(self) -> _ZoneData:
        if self._data is None:
            raise TimeZoneError("invalid time zone")
        return self._data

    def to_local_time(self, seconds_since_epoch: int) -> DateTime:
        local = self._require_data().find_by_utc(seconds_since_epoch)
        return break_time(seconds_since_epoch + local.utc_offset)

    def utc_offset(self, seconds_since_epoch: int) -> int:
        """Seconds east of UTC in effect at the given instant."""
        return self._require_data().find_by_utc(seconds_since_epoch).utc_offset

    def from_local_time(self, local: DateTime, post_transition: bool = False) -> int:
        """Seconds since the epoch of a local wall-clock time.

        For skipped or repeated local times, ``post_transition`` picks the
        offset after the transition instead of the one before it.
        """
        found = self._require_data().find_by_local(local, post_transition)
        return self.from_utc_time(local) - found.utc_offset

    @staticmethod
    def to_utc_time(seconds_since_epoch: int) -> DateTime:
        return break_time(seconds_since_epoch)

    @staticmethod
    def from_utc_time(dt: DateTime) -> int:
        date = Date.from_ymd(dt.year, dt.month, dt.day)
        seconds_in_day = dt.hour * 3600 + dt.minute * 60 + dt.second
        days = date.julian_day_number - JULIAN_DAY_OF_1970_01_01
        return days * SECONDS_PER_DAY + seconds_in_day