"""Tests for pi.lineedit.keybindings -- editor keybindings manager."""

from __future__ import annotations

import logging

import pytest

from pi.lineedit.keybindings import DEFAULT_KEYBINDINGS, EDITOR_ACTIONS, KeybindingsManager


class TestDefaultKeybindings:
    def test_every_action_has_a_default(self) -> None:
        assert set(DEFAULT_KEYBINDINGS) == set(EDITOR_ACTIONS)

    @pytest.mark.parametrize(
        "key, action",
        [
            ("left", "cursorLeft"),
            ("right", "cursorRight"),
            ("home", "cursorLineStart"),
            ("end", "cursorLineEnd"),
            ("up", "historyPrevious"),
            ("down", "historyNext"),
            ("backspace", "deleteCharBackward"),
            ("delete", "deleteCharForward"),
            ("enter", "submit"),
            ("ctrl+c", "cancel"),
            ("ctrl+z", "suspend"),
        ],
    )
    def test_default_action_for(self, key: str, action: str) -> None:
        assert KeybindingsManager().action_for(key) == action

    def test_unbound_keys(self) -> None:
        kb = KeybindingsManager()
        assert kb.action_for("ctrl+a") is None
        assert kb.action_for(None) is None


class TestKeybindingsConfig:
    def test_override_replaces_default(self) -> None:
        kb = KeybindingsManager({"cursorLineStart": ["home", "ctrl+a"]})
        assert kb.action_for("ctrl+a") == "cursorLineStart"
        assert kb.action_for("home") == "cursorLineStart"
        assert kb.get_keys("cursorLineStart") == ["home", "ctrl+a"]

    def test_string_override(self) -> None:
        kb = KeybindingsManager({"submit": "ctrl+j"})
        assert kb.matches("ctrl+j", "submit")
        assert not kb.matches("enter", "submit")

    def test_unknown_action_is_ignored(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            kb = KeybindingsManager({"teleport": "ctrl+t"})  # type: ignore[dict-item]
        assert kb.action_for("ctrl+t") is None
        assert "unknown action" in caplog.text

    def test_conflicting_key_keeps_first_binding(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            kb = KeybindingsManager({"cursorLineEnd": ["end", "left"]})
        assert kb.action_for("left") == "cursorLeft"
        assert "bound to both" in caplog.text

    def test_set_config_rebuilds(self) -> None:
        kb = KeybindingsManager({"cancel": "ctrl+d"})
        kb.set_config({})
        assert kb.action_for("ctrl+c") == "cancel"
        assert kb.action_for("ctrl+d") is None
