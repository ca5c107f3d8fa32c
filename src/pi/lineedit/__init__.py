"""pi-lineedit: in-place line editing for character-mode terminals."""

# History
from pi.lineedit.history import (
    CallbackHistory,
    HistoryDirection,
    HistorySource,
    InMemoryHistory,
    RecallCallback,
    navigate_history,
)

# Keybindings
from pi.lineedit.keybindings import (
    DEFAULT_KEYBINDINGS,
    EditorAction,
    KeybindingsManager,
)

# Keyboard input decoding
from pi.lineedit.keys import Key, KeyEvent, KeyId, read_key

# Buffer
from pi.lineedit.line_buffer import LineBuffer

# Rendering
from pi.lineedit.render import render_final_line, render_line, render_prompt

# Sessions
from pi.lineedit.session import EditResult, EditStatus, LineEditSession, edit_line, read_line

# Settings
from pi.lineedit.settings import SettingsManager, deep_merge_settings

# Terminal
from pi.lineedit.terminal import ProcessTerminal, Terminal

__all__ = [
    # History
    "CallbackHistory",
    "HistoryDirection",
    "HistorySource",
    "InMemoryHistory",
    "RecallCallback",
    "navigate_history",
    # Keybindings
    "DEFAULT_KEYBINDINGS",
    "EditorAction",
    "KeybindingsManager",
    # Keys
    "Key",
    "KeyEvent",
    "KeyId",
    "read_key",
    # Buffer
    "LineBuffer",
    # Rendering
    "render_final_line",
    "render_line",
    "render_prompt",
    # Sessions
    "EditResult",
    "EditStatus",
    "LineEditSession",
    "edit_line",
    "read_line",
    # Settings
    "SettingsManager",
    "deep_merge_settings",
    # Terminal
    "ProcessTerminal",
    "Terminal",
]
