import gc
import threading

from basekit.patterns import (
    ThreadLocal,
    WeakCallback,
    make_weak_callback,
    singleton_instance,
    thread_local_instance,
    thread_local_pointer,
)


def _run_in_thread(func):
    result = []
    worker = threading.Thread(target=lambda: result.append(func()))
    worker.start()
    worker.join()
    return result[0]


class _Counted:
    created = 0

    def __init__(self):
        type(self).created += 1


def test_singleton_same_instance_across_threads():
    first = singleton_instance(_Counted)
    others = [_run_in_thread(lambda: singleton_instance(_Counted)) for _ in range(3)]
    assert all(other is first for other in others)
    assert _Counted.created == 1


def test_thread_local_value_per_thread():
    counter = iter(range(100))
    local = ThreadLocal(lambda: next(counter))
    mine = local.value()
    assert local.value() == mine
    theirs = _run_in_thread(local.value)
    assert theirs != mine
    assert local.value() == mine


class _PerThread:
    pass


def test_thread_local_instance_distinct_per_thread():
    mine = thread_local_instance(_PerThread)
    assert thread_local_instance(_PerThread) is mine
    theirs = _run_in_thread(lambda: thread_local_instance(_PerThread))
    assert theirs is not mine


class _Fresh:
    pass


def test_thread_local_pointer_before_and_after():
    def probe():
        before = thread_local_pointer(_Fresh)
        made = thread_local_instance(_Fresh)
        return before, made, thread_local_pointer(_Fresh)

    before, made, after = _run_in_thread(probe)
    assert before is None
    assert after is made


class _Target:
    def __init__(self):
        self.calls = []

    def record(self, value):
        self.calls.append(value)
        return value * 2


def test_weak_callback_calls_live_object():
    target = _Target()
    callback = make_weak_callback(target, _Target.record)
    assert callback(21) == 42
    assert target.calls == [21]


def test_weak_callback_accepts_bound_method_without_keeping_alive():
    target = _Target()
    callback = make_weak_callback(target, target.record)
    assert callback(1) == 2
    del target
    gc.collect()
    assert callback(1) is None


def test_weak_callback_skips_dead_object():
    seen = []
    target = _Target()
    callback = WeakCallback(target, lambda obj, x: seen.append(x))
    del target
    gc.collect()
    assert callback(5) is None
    assert seen == []