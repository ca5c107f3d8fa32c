"""Interactive line editing session.

Drives the read -> decode -> edit -> render cycle over a :class:`Terminal`
until the line is submitted or the operator cancels, restoring the
terminal mode on every exit path.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Literal

from pi.lineedit.history import CallbackHistory, HistorySource, RecallCallback, navigate_history
from pi.lineedit.keybindings import EditorAction, KeybindingsManager
from pi.lineedit.keys import CR, iter_keys
from pi.lineedit.line_buffer import LineBuffer
from pi.lineedit.render import DEFAULT_SEPARATOR, render_final_line, render_line, render_prompt
from pi.lineedit.settings import DEFAULT_CAPACITY, SettingsManager
from pi.lineedit.terminal import ProcessTerminal, Terminal

logger = logging.getLogger(__name__)

EditStatus = Literal["submitted", "cancelled", "suspended"]

_EXIT_CODES: dict[EditStatus, int] = {
    "cancelled": 0,
    "suspended": 1,
}


@dataclass(frozen=True)
class EditResult:
    """Outcome of one editing session."""

    status: EditStatus
    data: bytes = b""

    @property
    def line(self) -> str:
        return self.data.decode("utf-8", errors="replace")

    @property
    def terminated(self) -> bool:
        """True when the operator pressed cancel or suspend."""
        return self.status != "submitted"

    @property
    def exit_code(self) -> int | None:
        """Process exit status requested by cancel (0) or suspend (1)."""
        return _EXIT_CODES.get(self.status)


class LineEditSession:
    """Edits one line on *terminal* and returns an :class:`EditResult`."""

    def __init__(
        self,
        terminal: Terminal,
        prompt: str | bytes,
        *,
        capacity: int = DEFAULT_CAPACITY,
        history: HistorySource | None = None,
        keybindings: KeybindingsManager | None = None,
        separator: str | bytes = DEFAULT_SEPARATOR,
    ) -> None:
        self._terminal = terminal
        self._prompt = prompt
        self._separator = separator
        self._buffer = LineBuffer(capacity)
        self._history = history
        self._keybindings = keybindings or KeybindingsManager()

        if isinstance(history, CallbackHistory):
            history.bind(lambda: self._buffer.value, capacity)

        self._actions: dict[EditorAction, Callable[[], object]] = {
            "cursorLeft": self._buffer.move_left,
            "cursorRight": self._buffer.move_right,
            "cursorLineStart": self._buffer.move_home,
            "cursorLineEnd": self._buffer.move_end,
            "deleteCharBackward": self._buffer.erase_backward,
            "deleteCharForward": self._buffer.erase_forward,
            "historyPrevious": lambda: navigate_history(self._buffer, self._history, "older"),
            "historyNext": lambda: navigate_history(self._buffer, self._history, "newer"),
        }

    @property
    def buffer(self) -> LineBuffer:
        return self._buffer

    def run(self) -> EditResult:
        """Edit until submit, cancel or suspend.

        Raises ``EOFError`` if the input ends first.
        """
        terminal = self._terminal
        terminal.write(render_prompt(self._prompt, self._separator))

        terminal.enter_raw_mode()
        try:
            status = self._read_loop()
            if status == "overflow":
                self._drain()
        finally:
            terminal.restore_mode()

        if status is None:
            terminal.write(b"\n")
            raise EOFError("input ended before the line was submitted")

        if status in ("cancelled", "suspended"):
            logger.debug("line editing %s", status)
            terminal.write(b"\n")
            return EditResult(status)

        terminal.write(render_final_line(self._prompt, self._buffer, self._separator))
        return EditResult("submitted", self._buffer.value)

    # -- internals -----------------------------------------------------------

    def _read_loop(self) -> str | None:
        """Returns the loop exit reason, or ``None`` at end of input."""
        terminal = self._terminal
        buffer = self._buffer

        for event in iter_keys(terminal.read_byte):
            action = self._keybindings.action_for(event.key)

            if action == "submit":
                return "submitted"
            if action == "cancel":
                return "cancelled"
            if action == "suspend":
                return "suspended"

            if action is not None:
                self._actions[action]()
            elif event.is_escape_sequence:
                logger.debug("no action bound to %s", event.key)
            elif not buffer.insert(event.data[0]):
                # Typing past the end finishes the line.
                return "overflow"

            terminal.write(render_line(self._prompt, buffer, self._separator))

        return None

    def _drain(self) -> None:
        """Discard input up to and including the next carriage return."""
        discarded = 0
        while True:
            b = self._terminal.read_byte()
            if b is None or b == CR:
                break
            discarded += 1
        if discarded:
            logger.debug("line full, discarded %d bytes of input", discarded)


def edit_line(
    prompt: str | bytes,
    *,
    capacity: int | None = None,
    history: HistorySource | RecallCallback | None = None,
    terminal: Terminal | None = None,
    keybindings: KeybindingsManager | None = None,
    separator: str | bytes | None = None,
    settings: SettingsManager | None = None,
) -> EditResult:
    """Read one line with in-place editing.

    *history* may be a :class:`HistorySource` or a plain
    ``recall(direction, buffer, capacity)`` callable.  Values not given
    explicitly come from *settings*, which defaults to the built-in values.
    """
    settings = settings or SettingsManager.in_memory()
    if history is not None and not isinstance(history, HistorySource):
        history = CallbackHistory(history)

    session = LineEditSession(
        terminal or ProcessTerminal(),
        prompt,
        capacity=capacity if capacity is not None else settings.get_capacity(),
        history=history,
        keybindings=keybindings or settings.create_keybindings(),
        separator=separator if separator is not None else settings.get_separator(),
    )
    return session.run()


def read_line(prompt: str | bytes, **kwargs) -> str:
    """Like :func:`edit_line`, but exit the process on cancel or suspend.

    Cancel exits with status 0 and suspend with status 1, after the
    terminal mode has been restored.
    """
    result = edit_line(prompt, **kwargs)
    if result.terminated:
        raise SystemExit(result.exit_code)
    return result.line
