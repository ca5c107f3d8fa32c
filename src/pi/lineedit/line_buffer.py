"""Fixed-capacity byte buffer with a cursor, for single-line editing."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class LineBuffer:
    """Editable line of bytes with a zero-based cursor.

    ``capacity`` counts the terminator slot of a C string plus one spare
    slot, so at most ``capacity - 2`` bytes are stored.  Each byte is one
    terminal column.

    ``pad`` is the number of blank columns the renderer must print after
    the content to wipe glyphs left over from the last shrink.  It grows by
    one on every erase and is reset when text is inserted or replaced.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 3:
            raise ValueError(f"capacity must be at least 3, got {capacity}")
        self._capacity = capacity
        self._data = bytearray()
        self._cursor = 0
        self.pad = 0

    # -- state ---------------------------------------------------------------

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def max_length(self) -> int:
        return self._capacity - 2

    @property
    def length(self) -> int:
        return len(self._data)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def offset(self) -> int:
        """Distance of the cursor from the end of the content."""
        return len(self._data) - self._cursor

    @property
    def is_full(self) -> bool:
        return len(self._data) >= self.max_length

    @property
    def value(self) -> bytes:
        return bytes(self._data)

    @property
    def text(self) -> str:
        return self._data.decode("utf-8", errors="replace")

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return (
            f"LineBuffer({self.value!r}, cursor={self._cursor}, "
            f"pad={self.pad}, capacity={self._capacity})"
        )

    # -- editing -------------------------------------------------------------

    def insert(self, b: int) -> bool:
        """Insert one byte at the cursor; rejected when the buffer is full."""
        if self.is_full:
            logger.debug("buffer full (%d bytes), dropping %#04x", self.length, b)
            return False
        self._data[self._cursor : self._cursor] = bytes([b])
        self._cursor += 1
        self.pad = 0
        return True

    def erase_backward(self) -> bool:
        """Remove the byte before the cursor."""
        if self._cursor == 0:
            return False
        del self._data[self._cursor - 1]
        self._cursor -= 1
        self.pad += 1
        return True

    def erase_forward(self) -> bool:
        """Remove the byte under the cursor."""
        if self._cursor >= len(self._data):
            return False
        del self._data[self._cursor]
        self.pad += 1
        return True

    def move_left(self) -> bool:
        if self._cursor == 0:
            return False
        self._cursor -= 1
        return True

    def move_right(self) -> bool:
        if self._cursor >= len(self._data):
            return False
        self._cursor += 1
        return True

    def move_home(self) -> bool:
        moved = self._cursor != 0
        self._cursor = 0
        return moved

    def move_end(self) -> bool:
        moved = self._cursor != len(self._data)
        self._cursor = len(self._data)
        return moved

    def replace(self, data: bytes) -> None:
        """Replace the whole content, leaving the cursor at the end."""
        if len(data) > self.max_length:
            logger.debug("truncating replacement of %d bytes to %d", len(data), self.max_length)
            data = data[: self.max_length]
        self._data[:] = data
        self._cursor = len(self._data)
        self.pad = 0

    def clear(self) -> None:
        self._data.clear()
        self._cursor = 0
        self.pad = 0
