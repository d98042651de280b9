"""A log file that rolls over by size and at the start of each UTC day."""

from __future__ import annotations

import contextlib
import threading
import time
from typing import Callable

from . import processinfo
from .fileutil import AppendFile

ROLL_PER_SECONDS = 60 * 60 * 24


def get_log_file_name(basename: str, now: int) -> str:
    """``<basename>.<YYYYmmdd-HHMMSS>.<host>.<pid>.log`` for UTC time ``now``."""
    stamp = time.strftime(".%Y%m%d-%H%M%S.", time.gmtime(now))
    return "%s%s%s.%d.log" % (basename, stamp, processinfo.hostname(), processinfo.pid())


class LogFile:
    """Appends log data to files in the current directory, rolling them over.

    A new file is started when the current one exceeds ``roll_size`` bytes,
    or (checked every ``check_every_n`` appends) when a new day begins.
    """

    def __init__(
        self,
        basename: str,
        roll_size: int,
        thread_safe: bool = True,
        flush_interval: int = 3,
        check_every_n: int = 1024,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if "/" in basename:
            raise ValueError("basename must not contain '/'")
        self._basename = basename
        self._roll_size = roll_size
        self._flush_interval = flush_interval
        self._check_every_n = check_every_n
        self._clock = clock
        self._count = 0
        self._lock = threading.Lock() if thread_safe else contextlib.nullcontext()
        self._start_of_period = 0
        self._last_roll = 0
        self._last_flush = 0
        self._file: AppendFile | None = None
        self.roll_file()

    def _require_file(self) -> AppendFile:
        if self._file is None:
            raise ValueError("log file is closed")
        return self._file

    def append(self, data) -> None:
        with self._lock:
            self._append_unlocked(data)

    def flush(self) -> None:
        with self._lock:
            self._require_file().flush()

    def _append_unlocked(self, data) -> None:
        file = self._require_file()
        file.append(data)
        if file.written_bytes() > self._roll_size:
            self.roll_file()
            return
        self._count += 1
        if self._count >= self._check_every_n:
            self._count = 0
            now = int(self._clock())
            this_period = now // ROLL_PER_SECONDS * ROLL_PER_SECONDS
            if this_period != self._start_of_period:
                self.roll_file()
            elif now - self._last_flush > self._flush_interval:
                self._last_flush = now
                file.flush()

    def roll_file(self) -> bool:
        """Start a new file unless one was already started this second."""
        now = int(self._clock())
        filename = get_log_file_name(self._basename, now)
        start = now // ROLL_PER_SECONDS * ROLL_PER_SECONDS
        if now > self._last_roll:
            self._last_roll = now
            self._last_flush = now
            self._start_of_period = start
            new_file = AppendFile(filename)
            if self._file is not None:
                self._file.close()
            self._file = new_file
            return True
        return False

    def close(self) -> None:
        with self._lock:
            if self._file is not None:
                self._file.close()
                self._file = None

    def __enter__(self) -> LogFile:
        return self

    def __exit__(self, *exc) -> None:
        self.close()