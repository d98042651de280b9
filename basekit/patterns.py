"""Process-wide and per-thread single instances, and callbacks held by weak reference."""

from __future__ import annotations

import inspect
import threading
import weakref
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")

_singletons: dict[type, Any] = {}
_singleton_lock = threading.Lock()


def singleton_instance(cls: type[T]) -> T:
    """The one process-wide instance of ``cls``, created on first use with ``cls()``."""
    try:
        return _singletons[cls]
    except KeyError:
        pass
    with _singleton_lock:
        if cls not in _singletons:
            _singletons[cls] = cls()
        return _singletons[cls]


class ThreadLocal(Generic[T]):
    """A value per thread, created by ``factory`` the first time a thread asks."""

    def __init__(self, factory: Callable[[], T]) -> None:
        self._factory = factory
        self._local = threading.local()

    def value(self) -> T:
        try:
            return self._local.value
        except AttributeError:
            created = self._factory()
            self._local.value = created
            return created


_per_thread = threading.local()


def _thread_instances() -> dict[type, Any]:
    instances = getattr(_per_thread, "instances", None)
    if instances is None:
        instances = {}
        _per_thread.instances = instances
    return instances


def thread_local_instance(cls: type[T]) -> T:
    """The calling thread's own instance of ``cls``, created on first use."""
    instances = _thread_instances()
    if cls not in instances:
        instances[cls] = cls()
    return instances[cls]


def thread_local_pointer(cls: type[T]) -> T | None:
    """The calling thread's instance of ``cls`` if one was created, else None."""
    return _thread_instances().get(cls)


class WeakCallback:
    """Calls ``function(obj, *args)`` only while ``obj`` is still alive."""

    def __init__(self, obj, function: Callable[..., Any]) -> None:
        self._ref = weakref.ref(obj)
        self._function = function

    def __call__(self, *args):
        obj = self._ref()
        if obj is None:
            return None
        return self._function(obj, *args)


def make_weak_callback(obj, method) -> WeakCallback:
    """A WeakCallback for ``method`` (plain or bound) of ``obj``."""
    if inspect.ismethod(method):
        method = method.__func__
    return WeakCallback(obj, method)