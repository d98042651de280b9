"""Facts about the calling thread: id, name, and stack trace."""

from __future__ import annotations

import threading
import time
import traceback

_local = threading.local()


def tid() -> int:
    """The operating-system id of the calling thread (cached per thread)."""
    cached = getattr(_local, "tid", None)
    if cached is None:
        cached = threading.get_native_id()
        _local.tid = cached
        _local.tid_string = "%5d " % cached
    return cached


def tid_string() -> str:
    """The thread id right-aligned in five columns plus a space, for log lines."""
    tid()
    return _local.tid_string


def name() -> str:
    """The name set for this thread; ``"main"`` or ``"unknown"`` when none was set."""
    explicit = getattr(_local, "name", None)
    if explicit is not None:
        return explicit
    return "main" if is_main_thread() else "unknown"


def set_name(name: str) -> None:
    """Set the name reported by ``name()`` for the calling thread."""
    _local.name = name


def is_main_thread() -> bool:
    return threading.current_thread() is threading.main_thread()


def sleep_usec(usec: int) -> None:
    """Sleep for ``usec`` microseconds."""
    time.sleep(usec / 1_000_000)


def stack_trace(demangle: bool = False) -> str:
    """The caller's stack, innermost frame first, one frame per line.

    With ``demangle``, each frame also shows its source line.
    """
    lines = []
    for frame in reversed(traceback.extract_stack()[:-1]):
        entry = f'File "{frame.filename}", line {frame.lineno}, in {frame.name}'
        if demangle and frame.line:
            entry += f": {frame.line.strip()}"
        lines.append(entry + "\n")
    return "".join(lines)