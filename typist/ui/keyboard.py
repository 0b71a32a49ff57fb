"""Translation of raw curses input into key events."""

from __future__ import annotations

import curses
from typing import Union

from typist.core.errors import InputReadFailure, TerminalResized, UnsupportedKey
from typist.core.keys import KeyEvent
from typist.ui.terminal import TerminalDisplay

CTRL_C = "\x03"
BACKSPACE_CHARS = ("\x7f", "\b")

_KEY_NAMES = {
    getattr(curses, name): name
    for name in dir(curses)
    if name.startswith("KEY_") and isinstance(getattr(curses, name), int)
}


def key_name(raw: Union[str, int]) -> str:
    """Human-readable name of a raw key for messages."""
    if isinstance(raw, int):
        return _KEY_NAMES.get(raw, f"key code {raw}")
    if raw == "\x1b":
        return "Escape"
    if raw in ("\n", "\r"):
        return "Enter"
    if len(raw) == 1 and ord(raw) < 32:
        return f"Ctrl+{chr(ord(raw) + 64)}"
    return repr(raw)


def translate_key(raw: Union[str, int]) -> KeyEvent:
    """Map a value returned by ``get_wch`` to a KeyEvent.

    Raises TerminalResized when the window changed size and UnsupportedKey
    for keys with no meaning in a practice session.
    """
    if isinstance(raw, int):
        if raw == curses.KEY_BACKSPACE:
            return KeyEvent.backspace()
        if raw == curses.KEY_RESIZE:
            raise TerminalResized("terminal was resized")
        raise UnsupportedKey(key_name(raw))

    if raw == CTRL_C:
        return KeyEvent.kill()
    if raw in BACKSPACE_CHARS:
        return KeyEvent.backspace()
    if raw == "\t":
        return KeyEvent.tab()
    if len(raw) == 1 and raw.isprintable():
        return KeyEvent.character(raw)
    raise UnsupportedKey(key_name(raw))


class TerminalKeys:
    """Blocking key source reading from an active TerminalDisplay."""

    def __init__(self, display: TerminalDisplay) -> None:
        self._display = display

    def read_key(self) -> KeyEvent:
        try:
            raw = self._display.window.get_wch()
        except curses.error as e:
            raise InputReadFailure(f"could not read from terminal: {e}") from e
        return translate_key(raw)
