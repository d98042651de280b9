"""Fixed-capacity log buffers, a stream that formats values into them, and size formatting."""

from __future__ import annotations

SMALL_BUFFER = 4000
LARGE_BUFFER = 4000 * 1000
MAX_NUMERIC_SIZE = 48
FMT_CAPACITY = 32


def _to_bytes(data) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


class FixedBuffer:
    """A byte buffer of fixed capacity; an append that does not fit is dropped whole."""

    def __init__(self, size: int = SMALL_BUFFER) -> None:
        if size < 1:
            raise ValueError("size must be positive")
        self._size = size
        self._data = bytearray()

    @property
    def size(self) -> int:
        """Total capacity in bytes."""
        return self._size

    def append(self, data) -> None:
        """Append ``data`` (str or bytes-like) if it fits strictly within the free space."""
        chunk = _to_bytes(data)
        if self.avail() > len(chunk):
            self._data += chunk

    def data(self) -> bytes:
        return bytes(self._data)

    def length(self) -> int:
        return len(self._data)

    def avail(self) -> int:
        return self._size - len(self._data)

    def reset(self) -> None:
        """Empty the buffer."""
        self._data.clear()

    def bzero(self) -> None:
        """Overwrite the stored bytes with zeros, keeping the length."""
        self._data[:] = bytes(len(self._data))

    def to_string(self) -> str:
        return self._data.decode("utf-8", errors="replace")

    def __len__(self) -> int:
        return len(self._data)


class Fmt:
    """A single number formatted with a printf-style format, at most 31 bytes long."""

    def __init__(self, fmt: str, val) -> None:
        if isinstance(val, bool) or not isinstance(val, (int, float)):
            raise TypeError("Fmt needs an int or float value")
        encoded = (fmt % val).encode("utf-8")
        if len(encoded) >= FMT_CAPACITY:
            raise ValueError("formatted value is too long")
        self._data = encoded

    def data(self) -> bytes:
        return self._data

    def length(self) -> int:
        return len(self._data)


class LogStream:
    """Formats values into a small fixed buffer with ``<<``."""

    def __init__(self) -> None:
        self._buffer = FixedBuffer(SMALL_BUFFER)

    def _append_number(self, text: str) -> None:
        if self._buffer.avail() >= MAX_NUMERIC_SIZE:
            self._buffer.append(text)

    def __lshift__(self, value) -> LogStream:
        if isinstance(value, bool):
            self._buffer.append(b"1" if value else b"0")
        elif isinstance(value, int):
            self._append_number(str(value))
        elif isinstance(value, float):
            self._append_number("%.12g" % value)
        elif value is None:
            self._buffer.append(b"(null)")
        elif isinstance(value, (str, bytes, bytearray, memoryview)):
            self._buffer.append(value)
        elif isinstance(value, (FixedBuffer, Fmt)):
            self._buffer.append(value.data())
        else:
            raise TypeError(f"cannot log value of type {type(value).__name__}")
        return self

    def append(self, data) -> None:
        self._buffer.append(data)

    def buffer(self) -> FixedBuffer:
        return self._buffer

    def reset_buffer(self) -> None:
        self._buffer.reset()


_SI_PREFIXES = ("k", "M", "G", "T", "P")


def format_si(n: int) -> str:
    """Format a non-negative quantity in SI units, at most 5 characters."""
    if n < 1000:
        return "%d" % n
    value = float(n)
    for power, prefix in enumerate(_SI_PREFIXES, start=1):
        base = 1000 ** power
        scale = float(base)
        if n < base * 9995 // 1000:
            return "%.2f%s" % (value / scale, prefix)
        if n < base * 99950 // 1000:
            return "%.1f%s" % (value / scale, prefix)
        if n < base * 999500 // 1000:
            return "%.0f%s" % (value / scale, prefix)
    return "%.2fE" % (value / 1e18)


_IEC_PREFIXES = ("Ki", "Mi", "Gi", "Ti", "Pi")


def format_iec(n: int) -> str:
    """Format a non-negative quantity in binary (IEC) units, at most 6 characters."""
    value = float(n)
    if value < 1024.0:
        return "%d" % n
    for power, prefix in enumerate(_IEC_PREFIXES, start=1):
        scale = 1024.0 ** power
        if value < scale * 9.995:
            return "%.2f%s" % (value / scale, prefix)
        if value < scale * 99.95:
            return "%.1f%s" % (value / scale, prefix)
        if value < scale * 1023.5:
            return "%.0f%s" % (value / scale, prefix)
    exbi = 1024.0 ** 6
    if value < exbi * 9.995:
        return "%.2fEi" % (value / exbi)
    return "%.1fEi" % (value / exbi)