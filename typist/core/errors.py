"""Exceptions raised by the typing core and its terminal collaborators."""

from __future__ import annotations


class TypistError(Exception):
    """Base class for typist errors."""


class InputReadFailure(TypistError):
    """The key source did not produce a usable key event (e.g. a resize)."""


class UnsupportedKey(TypistError):
    """A key was read that has no defined handling, such as a function key."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Unsupported key: {key}")
        self.key = key


class TerminalResized(TypistError):
    """The terminal changed size; the screen needs redrawing, nothing was typed."""
