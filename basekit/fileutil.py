"""Reading small files whole and appending to files through a large buffer."""

from __future__ import annotations

import errno
import os
import stat
from dataclasses import dataclass

BUFFER_SIZE = 64 * 1024


@dataclass(frozen=True)
class FileContent:
    """What was read from a file, with its size and times when known."""

    content: bytes
    file_size: int | None
    modify_time: int
    create_time: int


class ReadSmallFile:
    """An open file read by ``read_to_string`` or ``read_to_buffer``."""

    BUFFER_SIZE = BUFFER_SIZE

    def __init__(self, filename) -> None:
        flags = os.O_RDONLY | getattr(os, "O_CLOEXEC", 0) | getattr(os, "O_BINARY", 0)
        self._fd: int | None = os.open(filename, flags)

    def _require_fd(self) -> int:
        if self._fd is None:
            raise ValueError("file is closed")
        return self._fd

    def read_to_string(self, max_size: int) -> FileContent:
        """Read up to ``max_size`` bytes from the current position."""
        fd = self._require_fd()
        info = os.fstat(fd)
        if stat.S_ISDIR(info.st_mode):
            raise IsADirectoryError(errno.EISDIR, os.strerror(errno.EISDIR))
        file_size = info.st_size if stat.S_ISREG(info.st_mode) else None

        chunks = []
        total = 0
        while total < max_size:
            chunk = os.read(fd, min(max_size - total, BUFFER_SIZE))
            if not chunk:
                break
            chunks.append(chunk)
            total += len(chunk)
        return FileContent(
            b"".join(chunks), file_size, int(info.st_mtime), int(info.st_ctime)
        )

    def read_to_buffer(self) -> bytes:
        """Read at most ``BUFFER_SIZE - 1`` bytes from the start of the file."""
        fd = self._require_fd()
        limit = BUFFER_SIZE - 1
        if hasattr(os, "pread"):
            return os.pread(fd, limit, 0)
        position = os.lseek(fd, 0, os.SEEK_CUR)
        try:
            os.lseek(fd, 0, os.SEEK_SET)
            return os.read(fd, limit)
        finally:
            os.lseek(fd, position, os.SEEK_SET)

    def close(self) -> None:
        if self._fd is not None:
            os.close(self._fd)
            self._fd = None

    def __enter__(self) -> ReadSmallFile:
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def read_file(filename, max_size: int) -> FileContent:
    """Read up to ``max_size`` bytes of a file; raises OSError on failure."""
    with ReadSmallFile(filename) as f:
        return f.read_to_string(max_size)


class AppendFile:
    """A file opened for appending, with a 64 KiB write buffer. Not thread safe."""

    def __init__(self, filename) -> None:
        self._file = open(filename, "ab", buffering=BUFFER_SIZE)
        self._written = 0

    def append(self, data) -> None:
        chunk = data.encode("utf-8") if isinstance(data, str) else bytes(data)
        self._file.write(chunk)
        self._written += len(chunk)

    def flush(self) -> None:
        self._file.flush()

    def written_bytes(self) -> int:
        """Bytes appended through this object."""
        return self._written

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()

    def __enter__(self) -> AppendFile:
        return self

    def __exit__(self, *exc) -> None:
        self.close()