"""Information about the running process, mostly read from ``/proc``."""

from __future__ import annotations

import mmap
import os
import re
import socket
from dataclasses import dataclass

from . import currentthread
from .fileutil import read_file
from .timestamp import Timestamp

try:
    import pwd as _pwd
except ImportError:  # pragma: no cover - platforms without a password database
    _pwd = None

try:
    import resource as _resource
except ImportError:  # pragma: no cover - platforms without rlimits
    _resource = None

_PROC_READ_LIMIT = 65536
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _sysconf(name: str, default: int) -> int:
    try:
        return int(os.sysconf(name))
    except (AttributeError, ValueError, OSError):
        return default


_START_TIME = Timestamp.now()
# Assumed not to change during the life of the process.
_CLOCK_TICKS = _sysconf("SC_CLK_TCK", 100)
_PAGE_SIZE = _sysconf("SC_PAGE_SIZE", mmap.PAGESIZE)


def _atoi(text: str) -> int:
    """Leading integer of ``text``, or 0 when there is none."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _read_proc(path: str) -> str:
    try:
        return read_file(path, _PROC_READ_LIMIT).content.decode("utf-8", errors="replace")
    except OSError:
        return ""


def pid() -> int:
    return os.getpid()


def pid_string() -> str:
    return "%d" % pid()


def uid() -> int:
    return os.getuid()


def username() -> str:
    """Login name of the real user, or ``"unknownuser"``."""
    if _pwd is None:
        return "unknownuser"
    try:
        return _pwd.getpwuid(uid()).pw_name
    except (KeyError, AttributeError):
        return "unknownuser"


def euid() -> int:
    return os.geteuid()


def start_time() -> Timestamp:
    """When this module was first loaded."""
    return _START_TIME


def clock_ticks_per_second() -> int:
    return _CLOCK_TICKS


def page_size() -> int:
    return _PAGE_SIZE


def is_debug_build() -> bool:
    """True unless Python runs with optimisations that strip assertions."""
    return __debug__


def hostname() -> str:
    try:
        return socket.gethostname()
    except OSError:
        return "unknownhost"


def procname(stat: str | None = None) -> str:
    """Process name: the text between the first ``(`` and the last ``)`` of a stat line.

    With no argument, the calling process's own stat line is used.
    """
    if stat is None:
        stat = proc_stat()
    lp = stat.find("(")
    rp = stat.rfind(")")
    if lp != -1 and rp != -1 and lp < rp:
        return stat[lp + 1:rp]
    return ""


def proc_status() -> str:
    """Contents of ``/proc/self/status``, or an empty string."""
    return _read_proc("/proc/self/status")


def proc_stat() -> str:
    """Contents of ``/proc/self/stat``, or an empty string."""
    return _read_proc("/proc/self/stat")


def thread_stat() -> str:
    """Contents of the calling thread's ``/proc/self/task/<tid>/stat``."""
    return _read_proc("/proc/self/task/%d/stat" % currentthread.tid())


def exe_path() -> str:
    """Target of ``/proc/self/exe``, or an empty string."""
    try:
        return os.readlink("/proc/self/exe")
    except OSError:
        return ""


def _numeric_entries(path: str) -> list[str]:
    try:
        return [entry for entry in os.listdir(path) if entry[:1].isdigit()]
    except OSError:
        return []


def opened_files() -> int:
    """Number of open file descriptors listed in ``/proc/self/fd``."""
    return len(_numeric_entries("/proc/self/fd"))


def max_open_files() -> int:
    """Soft limit on open files; the open count when the limit is unavailable."""
    if _resource is None:
        return opened_files()
    try:
        soft, _hard = _resource.getrlimit(_resource.RLIMIT_NOFILE)
    except (OSError, ValueError):
        return opened_files()
    return int(soft)


@dataclass(frozen=True)
class CpuTime:
    user_seconds: float = 0.0
    system_seconds: float = 0.0

    def total(self) -> float:
        return self.user_seconds + self.system_seconds


def cpu_time() -> CpuTime:
    """User and system CPU seconds used by this process."""
    try:
        times = os.times()
    except OSError:
        return CpuTime()
    return CpuTime(times.user, times.system)


def _parse_threads(status: str) -> int:
    pos = status.find("Threads:")
    if pos == -1:
        return 0
    return _atoi(status[pos + len("Threads:"):])


def num_threads() -> int:
    """Thread count from the ``Threads:`` line of ``/proc/self/status``."""
    return _parse_threads(proc_status())


def threads() -> list[int]:
    """Sorted ids of this process's threads, from ``/proc/self/task``."""
    return sorted(_atoi(entry) for entry in _numeric_entries("/proc/self/task"))