"""A writer that counts the bytes written to it."""

from __future__ import annotations


class ByteCounter:
    """A file-like sink that counts the bytes written to it."""

    def __init__(self) -> None:
        self._count = 0

    def write(self, data: bytes | bytearray | memoryview | str) -> int:
        """Count data, encoding text as UTF-8; return the length of data."""
        if isinstance(data, str):
            self._count += len(data.encode("utf-8"))
            return len(data)
        size = memoryview(data).nbytes
        self._count += size
        return size

    def __int__(self) -> int:
        return self._count

    def __repr__(self) -> str:
        return f"ByteCounter({self._count})"