"""Terminal abstraction for raw-mode, byte-at-a-time line editing.

Provides a ``Terminal`` protocol and a concrete ``ProcessTerminal``
implementation that switches a file descriptor into raw mode, reads single
bytes from it and writes rendered output to a binary stream.
"""

from __future__ import annotations

import logging
import os
import sys
import termios
import tty
from typing import BinaryIO, Protocol

logger = logging.getLogger(__name__)

WRITE_LOG_ENV = "PI_LINEEDIT_WRITE_LOG"


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for the terminal operations the line editor needs."""

    def enter_raw_mode(self) -> None: ...

    def restore_mode(self) -> None: ...

    def read_byte(self) -> int | None: ...

    def write(self, data: bytes) -> None: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Terminal backed by a process file descriptor and a binary stream.

    Raw mode is applied with :func:`tty.setraw`, which disables canonical
    line buffering, local echo and signal generation.  The attributes seen on
    entry are restored by :meth:`restore_mode`.
    """

    def __init__(
        self,
        input_fd: int | None = None,
        output: BinaryIO | None = None,
    ) -> None:
        self._input_fd = input_fd
        self._output = output
        self._original_termios: list | None = None
        self._write_log_path: str = os.environ.get(WRITE_LOG_ENV, "")

    @property
    def input_fd(self) -> int:
        if self._input_fd is None:
            return sys.stdin.fileno()
        return self._input_fd

    @property
    def output(self) -> BinaryIO:
        if self._output is None:
            return sys.stdout.buffer
        return self._output

    @property
    def in_raw_mode(self) -> bool:
        return self._original_termios is not None

    # -- mode control -------------------------------------------------------

    def enter_raw_mode(self) -> None:
        """Save the current attributes and switch the input to raw mode."""
        fd = self.input_fd
        try:
            self._original_termios = termios.tcgetattr(fd)
        except termios.error:
            # Not a terminal (pipe, file): there is no mode to change.
            logger.debug("fd %d is not a terminal, skipping raw mode", fd)
            self._original_termios = None
            return

        tty.setraw(fd, termios.TCSANOW)

    def restore_mode(self) -> None:
        """Restore the attributes saved by :meth:`enter_raw_mode`."""
        if self._original_termios is None:
            return
        termios.tcsetattr(self.input_fd, termios.TCSANOW, self._original_termios)
        self._original_termios = None

    # -- I/O -----------------------------------------------------------------

    def read_byte(self) -> int | None:
        """Block until one byte is available; ``None`` at end of input."""
        data = os.read(self.input_fd, 1)
        if not data:
            return None
        return data[0]

    def write(self, data: bytes) -> None:
        """Write data to the output stream and optionally to the write log."""
        out = self.output
        out.write(data)
        out.flush()

        if self._write_log_path:
            try:
                with open(self._write_log_path, "ab") as f:
                    f.write(data)
            except OSError:
                logger.warning("cannot append to write log %s", self._write_log_path)
