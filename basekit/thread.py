"""Named threads that report their operating-system thread id once started."""

from __future__ import annotations

import sys
import threading
from typing import Callable

from . import currentthread
from .exception import TracedError
from .sync import AtomicInteger, CountDownLatch


class Thread:
    """A thread that runs ``func`` under ``name``; ``start`` waits until its id is known.

    An exception escaping ``func`` is reported on standard error and raised
    again from ``join``.
    """

    _created = AtomicInteger(bits=32)

    def __init__(self, func: Callable[[], object], name: str = "") -> None:
        self._func = func
        self._started = False
        self._joined = False
        self._tid = 0
        self._latch = CountDownLatch(1)
        self._thread: threading.Thread | None = None
        self._error: BaseException | None = None
        number = Thread._created.increment_and_get()
        self._name = name or "Thread%d" % number

    def _run(self) -> None:
        self._tid = currentthread.tid()
        self._latch.count_down()
        currentthread.set_name(self._name or "commonThread")
        try:
            self._func()
        except BaseException as exc:
            currentthread.set_name("crashed")
            print(f"exception caught in Thread {self._name}", file=sys.stderr)
            print(f"reason: {exc}", file=sys.stderr)
            if isinstance(exc, TracedError):
                print(f"stack trace: {exc.stack_trace()}", file=sys.stderr)
            self._error = exc
        else:
            currentthread.set_name("finished")

    def start(self) -> None:
        """Start the thread and wait until it has recorded its id."""
        if self._started:
            raise RuntimeError("thread already started")
        self._started = True
        self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
        try:
            self._thread.start()
        except RuntimeError:
            self._started = False
            self._thread = None
            raise
        self._latch.wait()

    def join(self) -> None:
        """Wait for the thread to end; re-raise what its function raised."""
        if not self._started or self._thread is None:
            raise RuntimeError("thread not started")
        if self._joined:
            raise RuntimeError("thread already joined")
        self._joined = True
        self._thread.join()
        if self._error is not None:
            error, self._error = self._error, None
            raise error

    def started(self) -> bool:
        return self._started

    def tid(self) -> int:
        """Operating-system id of the thread; 0 before it has started."""
        return self._tid

    def name(self) -> str:
        return self._name

    @classmethod
    def num_created(cls) -> int:
        """How many Thread objects have been constructed."""
        return cls._created.get()