import os
import socket
import sys

from basekit import processinfo
from basekit.processinfo import CpuTime, _parse_threads
from basekit.timestamp import Timestamp


def test_pid_matches_os():
    assert processinfo.pid() == os.getpid()
    assert processinfo.pid_string() == str(os.getpid())


def test_uid_and_euid_match_os():
    assert processinfo.uid() == os.getuid()
    assert processinfo.euid() == os.geteuid()


def test_procname_from_stat_line():
    assert processinfo.procname("123 (bash) S 1 2 3") == "bash"


def test_procname_uses_last_closing_paren():
    assert processinfo.procname("9 (a (b) c) R 0") == "a (b) c"


def test_procname_without_parens_is_empty():
    assert processinfo.procname("no name here") == ""
    assert processinfo.procname(") backwards (") == ""


def test_start_time_is_stable_and_in_the_past():
    first = processinfo.start_time()
    assert first == processinfo.start_time()
    assert first.valid()
    assert first <= Timestamp.now()


def test_cpu_time_total_is_sum():
    t = CpuTime(1.5, 0.25)
    assert t.total() == 1.75
    measured = processinfo.cpu_time()
    assert measured.total() == measured.user_seconds + measured.system_seconds


def test_default_cpu_time_is_zero():
    assert CpuTime().total() == 0.0


def test_is_debug_build_follows_interpreter():
    assert processinfo.is_debug_build() is __debug__


def test_hostname_matches_socket():
    assert processinfo.hostname() == socket.gethostname()


def test_parse_threads_reads_count():
    status = "Name:\tpython\nThreads:\t7\nSigQ:\t0/1\n"
    assert _parse_threads(status) == 7


def test_parse_threads_missing_line_is_zero():
    assert _parse_threads("Name:\tpython\n") == 0


def test_threads_sorted_and_consistent_with_count():
    ids = processinfo.threads()
    assert ids == sorted(ids)
    assert processinfo.num_threads() == len(ids)


def test_opened_files_within_limit():
    assert processinfo.opened_files() <= processinfo.max_open_files()


def test_exe_path_is_interpreter_or_empty():
    assert processinfo.exe_path() in ("", os.path.realpath(sys.executable))


def test_page_size_and_clock_ticks_positive():
    assert processinfo.page_size() > 0
    assert processinfo.clock_ticks_per_second() > 0