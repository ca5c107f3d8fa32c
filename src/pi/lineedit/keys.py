"""Keyboard input decoding for byte-at-a-time terminal reads.

Turns the raw bytes of a terminal in raw mode into ``KeyEvent`` values.
Control bytes and the small set of legacy CSI sequences understood by the
line editor get a key identifier such as ``"left"`` or ``"ctrl+c"``;
every other byte is a literal.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Type alias
# ---------------------------------------------------------------------------

KeyId = str

ReadByte = Callable[[], "int | None"]

# ---------------------------------------------------------------------------
# Key helper object
# ---------------------------------------------------------------------------


class Key:
    """Named key constants and modifier combinators."""

    enter = "enter"
    tab = "tab"
    backspace = "backspace"
    delete = "delete"
    home = "home"
    end = "end"
    up = "up"
    down = "down"
    left = "left"
    right = "right"
    unknown = "unknown"

    @staticmethod
    def ctrl(key: str) -> str:
        return f"ctrl+{key}"


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

ESC = 0x1B
CSI_BRACKET = 0x5B
CR = 0x0D
DEL = 0x7F
CTRL_C = 0x03
CTRL_Z = 0x1A

# Final byte of ``ESC [ <final>`` -> key name
CSI_KEYS: dict[int, KeyId] = {
    0x41: Key.up,
    0x42: Key.down,
    0x43: Key.right,
    0x44: Key.left,
}

# Parameter byte of ``ESC [ <param> ~`` -> key name
CSI_TILDE_KEYS: dict[int, KeyId] = {
    0x31: Key.home,
    0x33: Key.delete,
    0x34: Key.end,
}

# Single control bytes with a dedicated name (others become ctrl+<letter>)
CONTROL_KEYS: dict[int, KeyId] = {
    0x09: Key.tab,
    CR: Key.enter,
    DEL: Key.backspace,
}


# ---------------------------------------------------------------------------
# KeyEvent
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class KeyEvent:
    """One decoded keystroke.

    ``key`` is ``None`` for plain bytes that have no name; those are
    inserted into the buffer as they are.
    """

    data: bytes
    key: KeyId | None = None

    @property
    def is_literal(self) -> bool:
        return self.key is None

    @property
    def is_escape_sequence(self) -> bool:
        return self.data[:1] == bytes([ESC])


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def key_name_for_byte(b: int) -> KeyId | None:
    """Name a single byte, or return ``None`` if it is a literal."""
    name = CONTROL_KEYS.get(b)
    if name is not None:
        return name
    if 0x01 <= b <= 0x1A:
        return Key.ctrl(chr(ord("a") + b - 1))
    return None


def read_key(read_byte: ReadByte) -> KeyEvent | None:
    """Read one keystroke using *read_byte*.

    An escape introducer is always followed by exactly two more reads; the
    ``ESC [ <digit>`` forms read one further trailing byte, which is
    discarded.  Returns ``None`` when the input ends, including in the middle
    of an escape sequence.
    """
    b = read_byte()
    if b is None:
        return None

    if b != ESC:
        return KeyEvent(bytes([b]), key_name_for_byte(b))

    b2 = read_byte()
    if b2 is None:
        return None
    b3 = read_byte()
    if b3 is None:
        return None
    seq = bytes([b, b2, b3])

    if b2 != CSI_BRACKET:
        logger.debug("ignoring unsupported escape sequence %r", seq)
        return KeyEvent(seq, Key.unknown)

    name = CSI_KEYS.get(b3)
    if name is not None:
        return KeyEvent(seq, name)

    if 0x30 <= b3 <= 0x39:
        trailer = read_byte()
        if trailer is None:
            return None
        seq += bytes([trailer])
        name = CSI_TILDE_KEYS.get(b3)
        if name is not None:
            return KeyEvent(seq, name)

    logger.debug("ignoring unsupported escape sequence %r", seq)
    return KeyEvent(seq, Key.unknown)


def iter_keys(read_byte: ReadByte):
    """Yield key events until the input ends."""
    while True:
        event = read_key(read_byte)
        if event is None:
            return
        yield event
