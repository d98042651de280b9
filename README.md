# basekit

Building blocks for multithreaded server programs, using only the standard library:

- `basekit.timestamp` – microsecond `Timestamp` values, `time_difference` and `add_time`.
- `basekit.date` – Gregorian `Date` backed by a Julian day number.
- `basekit.timezone` – `DateTime` and `TimeZone`, including a reader for TZif zone data
  (`TimeZone.parse_zone_data`, `TimeZone.load_zone_file`).
- `basekit.sync` – `AtomicInteger`, `CountDownLatch`, `BlockingQueue`, `BoundedBlockingQueue`
  and `wait_for_seconds`.
- `basekit.currentthread` – per-thread id, name and stack traces.
- `basekit.exception` – `TracedError`, an exception that keeps the stack at the point it was created.
- `basekit.logstream` – `LogStream`, `FixedBuffer`, `Fmt`, `format_si` and `format_iec`.
- `basekit.fileutil` – `read_file`, `ReadSmallFile` and `AppendFile`.
- `basekit.gzipfile` – `GzipFile`, a gzip handle that is invalid instead of raising when opening fails.
- `basekit.processinfo` – facts about the running process (pid, hostname, threads, CPU time),
  mostly read from `/proc`, so several of them need Linux.
- `basekit.logger` – leveled `Logger` records with a pluggable output and time zone.
- `basekit.patterns` – `singleton_instance`, `ThreadLocal`, `thread_local_instance` and `WeakCallback`.
- `basekit.thread`, `basekit.threadpool` – named threads and a fixed-size pool.
- `basekit.logfile` – `LogFile`, which rolls over by size and at the start of each UTC day.

## Install

```
pip install .
```

## Examples

```python
from basekit.timestamp import Timestamp, add_time, time_difference

start = Timestamp.now()
later = add_time(start, 1.5)
print(time_difference(later, start))    # 1.5
print(start.to_formatted_string(True))  # e.g. 20240101 12:00:00.123456
```

```python
from basekit.timezone import TimeZone

tz = TimeZone.fixed(8 * 3600, "CST")
print(tz.to_local_time(0).to_iso_string())  # 1970-01-01 08:00:00
```

```python
from basekit.threadpool import ThreadPool

pool = ThreadPool("Worker")
pool.set_max_queue_size(10)
pool.start(4)
pool.run(lambda: print("hello from the pool"))
pool.stop()
```

```python
from basekit.logger import LogLevel, log, set_output

records = []
set_output(records.append)          # each finished record arrives as bytes
log(LogLevel.WARN, "disk almost full")
print(records[0])  # e.g. b'20240101 12:00:00.123456Z  4242 WARN  disk almost full - example.py:6\n'
```

A `FATAL` record is written and flushed, then `FatalLogError` is raised.

```python
from basekit.logfile import LogFile

with LogFile("server", 500 * 1000 * 1000) as logfile:
    logfile.append(b"something happened\n")
    logfile.flush()
# writes server.<YYYYmmdd-HHMMSS>.<host>.<pid>.log in the current directory
```

## What it does not do

Logging is synchronous: `Logger` hands each record to its output at once, and
`LogFile.append` writes in the calling thread. There is no background thread
that batches log records and writes them to a `LogFile`; to get that, run a
`Thread` that takes records from a `BlockingQueue` and appends them yourself.

## Tests

```
pip install .[test]
pytest
```