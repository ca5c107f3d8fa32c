"""Line editor keybindings manager."""

from __future__ import annotations

import logging
from typing import Literal, get_args

from pi.lineedit.keys import KeyId

logger = logging.getLogger(__name__)

EditorAction = Literal[
    # Cursor movement
    "cursorLeft",
    "cursorRight",
    "cursorLineStart",
    "cursorLineEnd",
    # History
    "historyPrevious",
    "historyNext",
    # Deletion
    "deleteCharBackward",
    "deleteCharForward",
    # Session
    "submit",
    "cancel",
    "suspend",
]

EDITOR_ACTIONS: tuple[EditorAction, ...] = get_args(EditorAction)

KeybindingsConfig = dict[EditorAction, KeyId | list[KeyId]]

DEFAULT_KEYBINDINGS: dict[EditorAction, KeyId | list[KeyId]] = {
    # Cursor movement
    "cursorLeft": "left",
    "cursorRight": "right",
    "cursorLineStart": "home",
    "cursorLineEnd": "end",
    # History
    "historyPrevious": "up",
    "historyNext": "down",
    # Deletion
    "deleteCharBackward": "backspace",
    "deleteCharForward": "delete",
    # Session
    "submit": "enter",
    "cancel": "ctrl+c",
    "suspend": "ctrl+z",
}


class KeybindingsManager:
    """Maps decoded key ids to editor actions."""

    def __init__(self, config: KeybindingsConfig | None = None) -> None:
        self._action_to_keys: dict[EditorAction, list[KeyId]] = {}
        self._key_to_action: dict[KeyId, EditorAction] = {}
        self._build_maps(config or {})

    def _build_maps(self, config: KeybindingsConfig) -> None:
        self._action_to_keys.clear()
        self._key_to_action.clear()

        # Start with defaults
        for action, keys in DEFAULT_KEYBINDINGS.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

        # Override with user config
        for action, keys in config.items():
            if action not in EDITOR_ACTIONS:
                logger.warning("ignoring keybinding for unknown action %r", action)
                continue
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

        for action, key_array in self._action_to_keys.items():
            for key in key_array:
                if key in self._key_to_action:
                    logger.warning(
                        "key %r bound to both %s and %s",
                        key,
                        self._key_to_action[key],
                        action,
                    )
                    continue
                self._key_to_action[key] = action

    def action_for(self, key: KeyId | None) -> EditorAction | None:
        """Return the action bound to *key*, if any."""
        if key is None:
            return None
        return self._key_to_action.get(key)

    def matches(self, key: KeyId | None, action: EditorAction) -> bool:
        """Check if a key id triggers a specific action."""
        return key is not None and key in self._action_to_keys.get(action, [])

    def get_keys(self, action: EditorAction) -> list[KeyId]:
        """Get keys bound to an action."""
        return self._action_to_keys.get(action, [])

    def set_config(self, config: KeybindingsConfig) -> None:
        """Update configuration."""
        self._build_maps(config)
