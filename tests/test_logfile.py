import itertools
import threading

import pytest

from basekit import processinfo
from basekit.logfile import LogFile, get_log_file_name


def _logs(directory, basename):
    return sorted(directory.glob(basename + ".*.log"))


def test_log_file_name_format():
    expected = "app.19700101-000000.%s.%d.log" % (processinfo.hostname(), processinfo.pid())
    assert get_log_file_name("app", 0) == expected


def test_log_file_name_time_part():
    name = get_log_file_name("x", 86400 + 3661)
    assert name.startswith("x.19700102-010101.")
    assert name.endswith(".log")


def test_basename_with_slash_rejected(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(ValueError):
        LogFile("dir/app", 1000)


def test_append_writes_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with LogFile("app", 10**9, clock=lambda: 1000) as log:
        log.append("hello\n")
        log.append(b"world\n")
    files = _logs(tmp_path, "app")
    assert [f.name for f in files] == [get_log_file_name("app", 1000)]
    assert files[0].read_bytes() == b"hello\nworld\n"


def test_roll_on_size(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    clock = itertools.count(1000).__next__
    with LogFile("app", 10, clock=clock) as log:
        log.append(b"a" * 20)
        log.append(b"b" * 20)
    files = _logs(tmp_path, "app")
    candidates = {get_log_file_name("app", t) for t in range(1000, 1010)}
    assert {f.name for f in files} <= candidates
    assert files[0].name == get_log_file_name("app", 1000)
    contents = [f.read_bytes() for f in files]
    assert contents == [b"a" * 20, b"b" * 20, b""]


def test_no_roll_within_same_second(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with LogFile("app", 10, clock=lambda: 1000) as log:
        log.append(b"a" * 20)
        log.append(b"b" * 20)
        assert log.roll_file() is False
    files = _logs(tmp_path, "app")
    assert [f.read_bytes() for f in files] == [b"a" * 20 + b"b" * 20]


def test_roll_file_returns_true_when_time_advances(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    clock = itertools.count(5000).__next__
    with LogFile("app", 10**9, clock=clock) as log:
        assert log.roll_file() is True
    assert len(_logs(tmp_path, "app")) == 2


def test_roll_at_new_day(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    times = iter([100, 86405, 86405])
    with LogFile("day", 10**9, check_every_n=1, clock=lambda: next(times)) as log:
        log.append(b"first")
    files = _logs(tmp_path, "day")
    assert [f.name for f in files] == [
        get_log_file_name("day", 100),
        get_log_file_name("day", 86405),
    ]
    assert [f.read_bytes() for f in files] == [b"first", b""]


def test_append_after_close_raises(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    log = LogFile("app", 10**9)
    log.close()
    with pytest.raises(ValueError):
        log.append(b"late")


def test_thread_safe_appends(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    log = LogFile("mt", 10**9, clock=lambda: 2000)

    def writer():
        for _ in range(100):
            log.append(b"line\n")

    workers = [threading.Thread(target=writer) for _ in range(4)]
    for w in workers:
        w.start()
    for w in workers:
        w.join()
    log.close()
    files = _logs(tmp_path, "mt")
    assert [f.name for f in files] == [get_log_file_name("mt", 2000)]
    lines = files[0].read_bytes().splitlines()
    assert lines == [b"line"] * 400