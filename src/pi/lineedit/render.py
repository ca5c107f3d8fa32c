"""Byte-exact rendering of the prompt line.

The whole line is reprinted after every keystroke and the visual cursor is
then moved back to the edit position with ``ESC [ N D``.
"""

from __future__ import annotations

from pi.lineedit.line_buffer import LineBuffer

DEFAULT_SEPARATOR = " > "

_CR = b"\r"
_NEWLINE = b"\n"
_CURSOR_LEFT_FMT = "\x1b[{}D"


def _encode(text: str | bytes) -> bytes:
    if isinstance(text, bytes):
        return text
    return text.encode("utf-8")


def cursor_left(columns: int) -> bytes:
    """``ESC [ N D``, or nothing when *columns* is not positive."""
    if columns <= 0:
        return b""
    return _CURSOR_LEFT_FMT.format(columns).encode("ascii")


def render_prompt(prompt: str | bytes, separator: str | bytes = DEFAULT_SEPARATOR) -> bytes:
    return _CR + _encode(prompt) + _encode(separator)


def render_line(
    prompt: str | bytes,
    buffer: LineBuffer,
    separator: str | bytes = DEFAULT_SEPARATOR,
) -> bytes:
    """Repaint the line and place the visual cursor at the edit position."""
    back = buffer.offset + buffer.pad
    return (
        render_prompt(prompt, separator)
        + buffer.value
        + b" " * buffer.pad
        + cursor_left(back)
    )


def render_final_line(
    prompt: str | bytes,
    buffer: LineBuffer,
    separator: str | bytes = DEFAULT_SEPARATOR,
) -> bytes:
    return render_prompt(prompt, separator) + buffer.value + _NEWLINE
