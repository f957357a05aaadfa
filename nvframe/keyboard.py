"""Turning key events into the editor's keybinding notation."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from nvframe.config import KeyboardSettings

_CONTROL_KEYS = {
    "Backspace": "BS",
    "Escape": "Esc",
    "Delete": "Del",
    "ArrowUp": "Up",
    "ArrowDown": "Down",
    "ArrowLeft": "Left",
    "ArrowRight": "Right",
    "F1": "F1",
    "F2": "F2",
    "F3": "F3",
    "F4": "F4",
    "F5": "F5",
    "F6": "F6",
    "F7": "F7",
    "F8": "F8",
    "F9": "F9",
    "F10": "F10",
    "F11": "F11",
    "F12": "F12",
    "Insert": "Insert",
    "Home": "Home",
    "End": "End",
    "PageUp": "PageUp",
    "PageDown": "PageDown",
    "Tab": "Tab",
}

_SPECIAL_TEXT = {
    " ": "Space",
    "<": "lt",
    "\\": "Bslash",
    "|": "Bar",
    "\t": "Tab",
    "\n": "CR",
}


def control_key_name(key: Optional[str]) -> Optional[str]:
    """The keybinding name of a key that never produces text, if it is one."""
    if key is None:
        return None
    return _CONTROL_KEYS.get(key)


def special_key_name(text: str) -> Optional[str]:
    """The escaped name of text that must be written in angle brackets."""
    return _SPECIAL_TEXT.get(text)


class KeyState(Enum):
    PRESSED = "pressed"
    RELEASED = "released"


@dataclass(frozen=True)
class KeyEvent:
    """A keyboard event: its logical key name and the text it produces."""

    state: KeyState = KeyState.PRESSED
    logical_key: Optional[str] = None
    text: Optional[str] = None
    text_with_all_modifiers: Optional[str] = None


class KeyboardManager:
    """Tracks modifier state and turns queued key presses into keybindings."""

    def __init__(
        self,
        command_sender: Optional[Callable[[str], None]] = None,
        *,
        macos: Optional[bool] = None,
    ) -> None:
        self._send = command_sender
        self.macos = sys.platform == "darwin" if macos is None else macos
        self.shift = False
        self.ctrl = False
        self.alt = False
        self.logo = False
        self._ignore_input_this_frame = False
        self._queued: List[KeyEvent] = []

    def set_modifiers(self, shift: bool, ctrl: bool, alt: bool, logo: bool) -> None:
        self.shift = shift
        self.ctrl = ctrl
        self.alt = alt
        self.logo = logo

    def handle_focus_change(self) -> None:
        """Ignore key events from the frame in which focus was gained or lost."""
        self._ignore_input_this_frame = True

    def queue_key_event(self, event: KeyEvent) -> None:
        self._queued.append(event)

    def flush(self, settings: KeyboardSettings) -> List[str]:
        """Send and return the keybindings of this frame's pressed keys."""
        sent: List[str] = []
        if not self._should_ignore_input(settings):
            for event in self._queued:
                if event.state is not KeyState.PRESSED:
                    continue
                keybinding = self.keybinding(event)
                if keybinding is None:
                    continue
                sent.append(keybinding)
                if self._send is not None:
                    self._send(keybinding)
        self._ignore_input_this_frame = False
        self._queued.clear()
        return sent

    def _should_ignore_input(self, settings: KeyboardSettings) -> bool:
        return self._ignore_input_this_frame or (self.logo and not settings.use_logo)

    def _use_alt(self) -> bool:
        # On macOS the option key selects characters rather than acting as a modifier.
        return self.alt and not self.macos

    def keybinding(self, event: KeyEvent) -> Optional[str]:
        """The keybinding string for an event, or None if it produces nothing."""
        control = control_key_name(event.logical_key)
        if control is not None:
            return self.format_keybinding_string(True, True, control)

        is_dead_key = event.text_with_all_modifiers is not None and event.text is None
        if (self.alt or is_dead_key) and self.macos:
            key_text = event.text_with_all_modifiers
        else:
            key_text = event.text
        if key_text is None:
            return None

        escaped = special_key_name(key_text)
        if escaped is not None:
            return self.format_keybinding_string(True, False, escaped)
        return self.format_keybinding_string(False, False, key_text)

    def format_keybinding_string(self, special: bool, use_shift: bool, text: str) -> str:
        special = special or self.ctrl or self._use_alt() or self.logo
        modifiers = self.format_modifier_string(use_shift)
        if special:
            return f"<{modifiers}{text}>"
        return modifiers + text

    def format_modifier_string(self, use_shift: bool) -> str:
        parts = [
            "S-" if self.shift and use_shift else "",
            "C-" if self.ctrl else "",
            "M-" if self._use_alt() else "",
            "D-" if self.logo else "",
        ]
        return "".join(parts)