"""A gzip file handle that is invalid rather than raising when opening fails."""

from __future__ import annotations

import gzip


class GzipFile:
    """A gzip-compressed file; ``valid()`` is false if it could not be opened."""

    def __init__(self, fileobj: gzip.GzipFile | None = None) -> None:
        self._file = fileobj

    @classmethod
    def _open(cls, filename, mode: str) -> GzipFile:
        try:
            return cls(gzip.open(filename, mode))
        except OSError:
            return cls()

    @classmethod
    def open_for_read(cls, filename) -> GzipFile:
        return cls._open(filename, "rb")

    @classmethod
    def open_for_append(cls, filename) -> GzipFile:
        return cls._open(filename, "ab")

    @classmethod
    def open_for_write_exclusive(cls, filename) -> GzipFile:
        """Create a new file; invalid if it already exists."""
        return cls._open(filename, "xb")

    @classmethod
    def open_for_write_truncate(cls, filename) -> GzipFile:
        return cls._open(filename, "wb")

    def valid(self) -> bool:
        return self._file is not None

    def _require_file(self) -> gzip.GzipFile:
        if self._file is None:
            raise ValueError("gzip file is not open")
        return self._file

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` uncompressed bytes; empty at end of file."""
        return self._require_file().read(size)

    def write(self, data) -> int:
        """Write ``data``; return the number of uncompressed bytes written."""
        chunk = data.encode("utf-8") if isinstance(data, str) else data
        return self._require_file().write(chunk)

    def tell(self) -> int:
        """Position in the uncompressed data."""
        return self._require_file().tell()

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> GzipFile:
        return self

    def __exit__(self, *exc) -> None:
        self.close()