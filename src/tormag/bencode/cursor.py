"""Forward-only read cursor over an immutable byte buffer."""

from __future__ import annotations


class ByteCursor:
    """
    Read position over a byte buffer.

    The position only moves forward and never goes past the end of the
    buffer, so any span computed from two positions is a valid slice.
    """

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    @property
    def position(self) -> int:
        return self._pos

    def peek(self) -> int | None:
        """Return the current byte without advancing, or None at end of buffer."""
        if self._pos >= len(self._data):
            return None
        return self._data[self._pos]

    def advance(self, n: int = 1) -> None:
        """Move forward by ``n`` bytes, stopping at the end of the buffer."""
        if n < 0:
            raise ValueError(f"Cursor cannot move backwards (n={n})")
        self._pos = min(self._pos + n, len(self._data))

    def remaining(self) -> int:
        return len(self._data) - self._pos

    def at_end(self) -> bool:
        return self._pos >= len(self._data)

    def read(self, n: int) -> bytes:
        """Read up to ``n`` bytes and advance past them."""
        chunk = self._data[self._pos : self._pos + n]
        self.advance(len(chunk))
        return chunk

    def read_until(self, delimiter: int) -> bytes:
        """
        Read bytes up to ``delimiter`` and consume the delimiter itself.

        If the delimiter never appears, everything that remains is returned
        and the cursor ends up at the end of the buffer.
        """
        end = self._data.find(bytes((delimiter,)), self._pos)
        if end == -1:
            chunk = self._data[self._pos :]
            self._pos = len(self._data)
            return chunk
        chunk = self._data[self._pos : end]
        self._pos = end + 1
        return chunk

    def __repr__(self) -> str:
        return f"ByteCursor(position={self._pos}, size={len(self._data)})"
