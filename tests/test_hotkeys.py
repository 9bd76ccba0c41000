"""Tests for hotkey parsing, matching and the global listener."""

from unittest.mock import MagicMock, patch

import pytest

from palettekit.exceptions import HotkeyParseError, PaletteError
from palettekit.keybindings import HotkeyListener, KeyEvent, normalize_key, parse_hotkey


class TestNormalizeKey:
    def test_aliases(self):
        assert normalize_key("ArrowDown") == "down"
        assert normalize_key("Return") == "enter"
        assert normalize_key("Esc") == "escape"
        assert normalize_key(" ") == "space"

    def test_plain_keys_are_lowercased(self):
        assert normalize_key("K") == "k"


class TestKeyEventParse:
    """KeyEvent.parse builds events from combination strings."""

    def test_modifiers(self):
        event = KeyEvent.parse("ctrl+shift+p")
        assert event == KeyEvent("p", shift=True, ctrl=True)

    def test_plain_key(self):
        assert KeyEvent.parse("escape") == KeyEvent("escape")

    def test_backtab_is_shift_tab(self):
        assert KeyEvent.parse("backtab") == KeyEvent("tab", shift=True)


class TestParseHotkey:
    def test_mod_k(self):
        hotkey = parse_hotkey("mod+k")
        assert hotkey.key == "k"
        assert hotkey.mod is True
        assert hotkey.source == "mod+k"

    def test_case_and_whitespace_insensitive(self):
        hotkey = parse_hotkey(" Ctrl + Shift + P ")
        assert (hotkey.key, hotkey.ctrl, hotkey.shift) == ("p", True, True)

    def test_modifier_aliases(self):
        assert parse_hotkey("cmd+k").meta is True
        assert parse_hotkey("option+k").alt is True
        assert parse_hotkey("control+k").ctrl is True

    @pytest.mark.parametrize("descriptor", ["", "   ", "ctrl+", "+k", "ctrl++k", "ctrl+shift", "hyper+k"])
    def test_invalid_descriptors(self, descriptor):
        with pytest.raises(HotkeyParseError):
            parse_hotkey(descriptor)

    def test_error_carries_descriptor(self):
        with pytest.raises(PaletteError) as exc_info:
            parse_hotkey("hyper+k")
        assert exc_info.value.context["hotkey"] == "hyper+k"
        assert "hyper" in str(exc_info.value)


class TestHotkeyMatches:
    """Platform-aware matching of ``mod``."""

    def test_mod_is_ctrl_off_mac(self):
        hotkey = parse_hotkey("mod+k")
        assert hotkey.matches(KeyEvent("k", ctrl=True), is_mac=False) is True
        assert hotkey.matches(KeyEvent("k", meta=True), is_mac=False) is False

    def test_mod_is_meta_on_mac(self):
        hotkey = parse_hotkey("mod+k")
        assert hotkey.matches(KeyEvent("k", meta=True), is_mac=True) is True
        assert hotkey.matches(KeyEvent("k", ctrl=True), is_mac=True) is False

    def test_platform_detected_when_not_given(self):
        hotkey = parse_hotkey("mod+k")
        with patch("palettekit.keybindings.hotkeys.IS_MAC", True):
            assert hotkey.matches(KeyEvent("k", meta=True)) is True
        with patch("palettekit.keybindings.hotkeys.IS_MAC", False):
            assert hotkey.matches(KeyEvent("k", ctrl=True)) is True

    def test_key_must_match(self):
        assert parse_hotkey("ctrl+k").matches(KeyEvent("j", ctrl=True)) is False

    def test_shift_must_match_exactly(self):
        hotkey = parse_hotkey("ctrl+k")
        assert hotkey.matches(KeyEvent("k", ctrl=True, shift=True)) is False
        assert parse_hotkey("ctrl+shift+k").matches(KeyEvent("k", ctrl=True, shift=True)) is True

    def test_bare_key_hotkey(self):
        assert parse_hotkey("f1").matches(KeyEvent("F1")) is True


class TestHotkeyListener:
    def test_triggers_on_match(self):
        on_trigger = MagicMock()
        listener = HotkeyListener("mod+k", on_trigger, is_mac=False)
        assert listener.handle(KeyEvent("k", ctrl=True)) is True
        on_trigger.assert_called_once_with()

    def test_ignores_other_keys(self):
        on_trigger = MagicMock()
        listener = HotkeyListener("mod+k", on_trigger, is_mac=False)
        assert listener.handle(KeyEvent("k")) is False
        assert listener.handle(KeyEvent("p", ctrl=True)) is False
        on_trigger.assert_not_called()

    def test_multiple_hotkeys(self):
        on_trigger = MagicMock()
        listener = HotkeyListener(["mod+k", "ctrl+shift+p"], on_trigger, is_mac=True)
        assert listener.handle(KeyEvent("k", meta=True)) is True
        assert listener.handle(KeyEvent("p", ctrl=True, shift=True)) is True
        assert on_trigger.call_count == 2

    def test_invalid_descriptor_fails_at_construction(self):
        with pytest.raises(HotkeyParseError):
            HotkeyListener(["mod+k", "ctrl+"], MagicMock())
