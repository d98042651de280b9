import threading

import pytest

from basekit import currentthread
from basekit.thread import Thread


def test_runs_function_and_joins():
    seen = []
    t = Thread(lambda: seen.append(42), "worker")
    t.start()
    t.join()
    assert seen == [42]


def test_default_name_uses_creation_count():
    t = Thread(lambda: None)
    assert t.name() == "Thread%d" % Thread.num_created()


def test_num_created_increments():
    before = Thread.num_created()
    Thread(lambda: None, "a")
    Thread(lambda: None, "b")
    assert Thread.num_created() == before + 2


def test_explicit_name_is_kept():
    assert Thread(lambda: None, "reader").name() == "reader"


def test_tid_known_after_start_and_matches_inside():
    inside = []
    t = Thread(lambda: inside.append(currentthread.tid()), "tidcheck")
    assert t.tid() == 0
    t.start()
    assert t.tid() > 0
    t.join()
    assert inside == [t.tid()]


def test_current_thread_name_inside():
    names = []
    t = Thread(lambda: names.append(currentthread.name()), "namedone")
    t.start()
    t.join()
    assert names == ["namedone"]


def test_underlying_thread_name():
    names = []
    t = Thread(lambda: names.append(threading.current_thread().name), "pyname")
    t.start()
    t.join()
    assert names == ["pyname"]


def test_started_flag():
    t = Thread(lambda: None, "flag")
    assert t.started() is False
    t.start()
    assert t.started() is True
    t.join()


def test_start_twice_raises():
    t = Thread(lambda: None, "twice")
    t.start()
    with pytest.raises(RuntimeError):
        t.start()
    t.join()


def test_join_before_start_raises():
    with pytest.raises(RuntimeError):
        Thread(lambda: None, "nojoin").join()


def test_join_twice_raises():
    t = Thread(lambda: None, "jj")
    t.start()
    t.join()
    with pytest.raises(RuntimeError):
        t.join()


def test_exception_reported_and_reraised(capsys):
    def boom():
        raise ValueError("bad thing")

    t = Thread(boom, "boomer")
    t.start()
    with pytest.raises(ValueError, match="bad thing"):
        t.join()
    err = capsys.readouterr().err
    assert "exception caught in Thread boomer" in err
    assert "reason: bad thing" in err