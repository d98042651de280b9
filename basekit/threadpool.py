"""A fixed pool of worker threads consuming a task queue."""

from __future__ import annotations

import sys
import threading
from collections import deque
from typing import Callable, Deque

from .exception import TracedError
from .thread import Thread

Task = Callable[[], object]


class ThreadPool:
    """Runs tasks on a fixed set of threads; with no threads, runs them inline."""

    def __init__(self, name: str = "ThreadPool") -> None:
        self._lock = threading.Lock()
        self._not_empty = threading.Condition(self._lock)
        self._not_full = threading.Condition(self._lock)
        self._name = name
        self._init_callback: Task | None = None
        self._threads: list[Thread] = []
        self._queue: Deque[Task] = deque()
        self._max_queue_size = 0
        self._running = False

    def set_max_queue_size(self, max_size: int) -> None:
        """Bound the queue (0 means unbounded); call before ``start``."""
        self._max_queue_size = max_size

    def set_thread_init_callback(self, callback: Task) -> None:
        """Run ``callback`` in each worker before it takes tasks; call before ``start``."""
        self._init_callback = callback

    def start(self, num_threads: int) -> None:
        if self._threads:
            raise RuntimeError("thread pool already started")
        self._running = True
        for i in range(num_threads):
            thread = Thread(self._run_in_thread, "%s%d" % (self._name, i + 1))
            self._threads.append(thread)
            thread.start()
        if num_threads == 0 and self._init_callback is not None:
            self._init_callback()

    def stop(self) -> None:
        """Stop taking tasks and join every worker; queued tasks are dropped."""
        with self._lock:
            self._running = False
            self._not_empty.notify_all()
            self._not_full.notify_all()
        first_error: BaseException | None = None
        for thread in self._threads:
            try:
                thread.join()
            except BaseException as exc:
                if first_error is None:
                    first_error = exc
        if first_error is not None:
            raise first_error

    def name(self) -> str:
        return self._name

    def queue_size(self) -> int:
        with self._lock:
            return len(self._queue)

    def run(self, task: Task) -> None:
        """Queue ``task``; blocks while the queue is full, and does nothing once stopped."""
        if not self._threads:
            task()
            return
        with self._lock:
            while self._is_full() and self._running:
                self._not_full.wait()
            if not self._running:
                return
            self._queue.append(task)
            self._not_empty.notify()

    def _is_full(self) -> bool:
        return self._max_queue_size > 0 and len(self._queue) >= self._max_queue_size

    def _take(self) -> Task | None:
        with self._lock:
            while not self._queue and self._running:
                self._not_empty.wait()
            if not self._queue:
                return None
            task = self._queue.popleft()
            if self._max_queue_size > 0:
                self._not_full.notify()
            return task

    def _run_in_thread(self) -> None:
        try:
            if self._init_callback is not None:
                self._init_callback()
            while self._running:
                task = self._take()
                if task is not None:
                    task()
        except BaseException as exc:
            print(f"exception caught in ThreadPool {self._name}", file=sys.stderr)
            print(f"reason: {exc}", file=sys.stderr)
            if isinstance(exc, TracedError):
                print(f"stack trace: {exc.stack_trace()}", file=sys.stderr)
            raise

    def __enter__(self) -> ThreadPool:
        return self

    def __exit__(self, *exc) -> None:
        if self._running:
            self.stop()