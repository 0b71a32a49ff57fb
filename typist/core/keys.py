from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class KeyKind(Enum):
    CHAR = "char"
    BACKSPACE = "backspace"
    TAB = "tab"
    KILL = "kill"


@dataclass(frozen=True)
class KeyEvent:
    """One keystroke as seen by the match engine."""

    kind: KeyKind
    char: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind is KeyKind.CHAR:
            if self.char is None or len(self.char) != 1:
                raise ValueError(f"character key needs exactly one character, got {self.char!r}")
        elif self.char is not None:
            raise ValueError(f"{self.kind.value} key cannot carry a character")

    @classmethod
    def character(cls, char: str) -> KeyEvent:
        return cls(KeyKind.CHAR, char)

    @classmethod
    def backspace(cls) -> KeyEvent:
        return cls(KeyKind.BACKSPACE)

    @classmethod
    def tab(cls) -> KeyEvent:
        return cls(KeyKind.TAB)

    @classmethod
    def kill(cls) -> KeyEvent:
        return cls(KeyKind.KILL)
