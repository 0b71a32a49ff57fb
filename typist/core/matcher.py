"""Character matching between a target word and what the user has typed.

The engine keeps two independent cursors: one into the target word that only
advances on a correct keystroke, and one into the user's buffer that moves on
every insertion or deletion. A character only counts as correct when it equals
the expected character *and* both cursors were aligned before it was typed, so
a right letter at the wrong offset (after an earlier mistake) is still wrong.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from typist.core.keys import KeyEvent, KeyKind


class Outcome(Enum):
    CONTINUE = "continue"
    MISMATCH = "mismatch"
    WORD_COMPLETE = "word-complete"
    KILLED = "killed"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class TargetCursor:
    """Progress through the target word; ``cur`` counts correctly typed characters."""

    word: str
    cur: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.cur <= len(self.word):
            raise ValueError(f"cursor {self.cur} outside word {self.word!r}")

    def expected(self) -> Optional[str]:
        """Return the next character to type, or None once the word is done."""
        if self.cur >= len(self.word):
            return None
        return self.word[self.cur]

    def is_complete(self) -> bool:
        return self.cur == len(self.word)


@dataclass(frozen=True)
class UserBuffer:
    """What the user has typed for the current word, right or wrong."""

    text: str = ""
    cur: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.cur <= len(self.text):
            raise ValueError(f"cursor {self.cur} outside buffer {self.text!r}")

    def push(self, char: str) -> UserBuffer:
        return UserBuffer(self.text + char, self.cur + 1)

    def pop(self) -> UserBuffer:
        return UserBuffer(self.text[:-1], max(0, self.cur - 1))


@dataclass(frozen=True)
class StepResult:
    target: TargetCursor
    buffer: UserBuffer
    outcome: Outcome


def step(target: TargetCursor, buffer: UserBuffer, key: KeyEvent) -> StepResult:
    """Apply one key event and return the new cursors with the outcome."""
    if key.kind is KeyKind.KILL:
        return StepResult(target, buffer, Outcome.KILLED)
    if key.kind is KeyKind.TAB:
        # Skipping words is not implemented yet.
        return StepResult(target, buffer, Outcome.UNSUPPORTED)
    if key.kind is KeyKind.BACKSPACE:
        return _backspace(target, buffer)
    return _type_char(target, buffer, key.char)


def _type_char(target: TargetCursor, buffer: UserBuffer, char: str) -> StepResult:
    expected = target.expected()
    if expected is None:
        return StepResult(target, buffer, Outcome.WORD_COMPLETE)

    aligned = target.cur == buffer.cur
    buffer = buffer.push(char)
    if char != expected or not aligned:
        return StepResult(target, buffer, Outcome.MISMATCH)

    target = replace(target, cur=target.cur + 1)
    outcome = Outcome.WORD_COMPLETE if target.is_complete() else Outcome.CONTINUE
    return StepResult(target, buffer, outcome)


def _backspace(target: TargetCursor, buffer: UserBuffer) -> StepResult:
    buffer = buffer.pop()
    # Deleting a correct character gives back its progress; deleting a wrong
    # one leaves the target where it was.
    if target.cur > buffer.cur:
        target = replace(target, cur=buffer.cur)
    return StepResult(target, buffer, Outcome.CONTINUE)
