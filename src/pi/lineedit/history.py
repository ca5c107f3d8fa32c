"""Line history providers and up/down navigation."""

from __future__ import annotations

import logging
from typing import Callable, Literal, Protocol, runtime_checkable

from pi.lineedit.line_buffer import LineBuffer

logger = logging.getLogger(__name__)

HistoryDirection = Literal["older", "newer"]

# recall(direction, buffer, capacity): overwrite buffer in place, or leave it
# untouched when there is no entry in that direction.
RecallCallback = Callable[[HistoryDirection, bytearray, int], None]


@runtime_checkable
class HistorySource(Protocol):
    """Supplies previously entered lines on request.

    Both methods return ``None`` when there is no entry in that direction,
    in which case the line being edited is left alone.
    """

    def older(self) -> bytes | str | None: ...

    def newer(self) -> bytes | str | None: ...


class InMemoryHistory:
    """Newest-first list of lines with a browsing index.

    Index ``-1`` means "not browsing": the user is on a fresh line.
    """

    def __init__(self, limit: int = 100) -> None:
        self._limit = limit
        self._entries: list[str] = []
        self._index: int = -1

    def add(self, line: str) -> None:
        """Record a submitted line and stop browsing."""
        self._index = -1
        trimmed = line.strip()
        if not trimmed:
            return
        # Don't add consecutive duplicates
        if self._entries and self._entries[0] == line:
            return
        self._entries.insert(0, line)
        if len(self._entries) > self._limit:
            self._entries.pop()

    def older(self) -> str | None:
        if self._index + 1 >= len(self._entries):
            return None
        self._index += 1
        return self._entries[self._index]

    def newer(self) -> str | None:
        if self._index < 0:
            return None
        self._index -= 1
        if self._index == -1:
            return ""
        return self._entries[self._index]

    def reset(self) -> None:
        self._index = -1

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    @property
    def length(self) -> int:
        return len(self._entries)


class CallbackHistory:
    """Adapts a ``recall(direction, buffer, capacity)`` callback.

    The callback receives a zero-filled ``bytearray`` of ``capacity`` bytes
    that starts with the current line, and may overwrite it in place.  Content after the first NUL byte is
    ignored, as with a C string.  The (possibly untouched) buffer always
    becomes the new line, so the cursor returns to the end either way.
    """

    def __init__(self, recall: RecallCallback, capacity: int | None = None) -> None:
        self._recall = recall
        self._capacity = capacity
        self._current: Callable[[], bytes] | None = None

    def bind(self, current: Callable[[], bytes], capacity: int) -> None:
        """Attach the accessor for the line being edited and its capacity."""
        self._current = current
        if self._capacity is None:
            self._capacity = capacity

    def older(self) -> bytes:
        return self._call("older")

    def newer(self) -> bytes:
        return self._call("newer")

    def _call(self, direction: HistoryDirection) -> bytes:
        if self._capacity is None:
            raise RuntimeError("CallbackHistory used before bind()")
        current = self._current() if self._current is not None else b""
        current = current[: self._capacity - 1]
        buf = bytearray(self._capacity)
        buf[: len(current)] = current
        self._recall(direction, buf, self._capacity)

        nul = buf.find(0)
        if nul != -1:
            del buf[nul:]
        if len(buf) >= self._capacity:
            logger.warning(
                "history callback wrote %d bytes into capacity %d", len(buf), self._capacity
            )
        return bytes(buf)


def navigate_history(
    buffer: LineBuffer,
    source: HistorySource | None,
    direction: HistoryDirection,
) -> bool:
    """Replace *buffer* with the neighbouring history entry, if there is one."""
    if source is None:
        return False
    if direction == "older":
        entry = source.older()
    elif direction == "newer":
        entry = source.newer()
    else:
        raise ValueError(f"unknown history direction: {direction!r}")

    if entry is None:
        return False
    if isinstance(entry, str):
        entry = entry.encode("utf-8")
    buffer.replace(entry)
    return True
