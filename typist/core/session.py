from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol

from typist.core.errors import InputReadFailure, TerminalResized, UnsupportedKey
from typist.core.keys import KeyEvent, KeyKind
from typist.core.matcher import Outcome, TargetCursor, UserBuffer, step

logger = logging.getLogger(__name__)

MAX_WORDS = 20

COMPLETE_MESSAGE = "You wrote the complete word!"
MISMATCH_MESSAGE = "Wrong. Try again."
TAB_MESSAGE = "Skipping words is not supported yet."


class KeySource(Protocol):
    def read_key(self) -> KeyEvent: ...


class Display(Protocol):
    def render(self, word: str, buffer: UserBuffer) -> None: ...

    def message(self, text: str) -> None: ...


@dataclass
class SessionResult:
    """How a session ended."""

    completed: int = 0
    mismatches: int = 0
    killed: bool = False


class SessionState:
    """The bounded word list of one practice run and the position within it."""

    def __init__(self, words: List[str], max_words: int = MAX_WORDS) -> None:
        """Keep at most ``max_words`` words; every word must be longer than one character."""
        if max_words < 1:
            raise ValueError(f"max_words must be at least 1, got {max_words}")
        for word in words:
            if len(word) <= 1:
                raise ValueError(f"words must be longer than one character: {word!r}")
        self._words = list(words[:max_words])
        self._index = 0

    @property
    def index(self) -> int:
        """Index of the next word to hand out (0-based)."""
        return self._index

    @property
    def total_words(self) -> int:
        return len(self._words)

    @property
    def remaining(self) -> int:
        return max(0, len(self._words) - self._index)

    def current_word(self) -> str:
        """Return the word that ``next_word`` will hand out next."""
        return self._words[self._index]

    def is_complete(self) -> bool:
        return self._index >= len(self._words)

    def next_word(self) -> Optional[str]:
        """Return the next word and advance, or None when the list is exhausted."""
        if self.is_complete():
            return None
        word = self._words[self._index]
        self._index += 1
        return word


def run_session(
    state: SessionState,
    keys: KeySource,
    display: Display,
    max_read_failures: int = 5,
) -> SessionResult:
    """Drive the user through every remaining word of ``state``.

    Returns as soon as a kill key is read; no further words are drawn.
    """
    result = SessionResult()
    logger.info("Session started with %d words", state.remaining)
    while True:
        word = state.next_word()
        if word is None:
            break
        if not _play_word(word, keys, display, result, max_read_failures):
            result.killed = True
            logger.info("Session killed after %d words", result.completed)
            return result
        result.completed += 1
    logger.info("Session finished: %d words, %d mismatches", result.completed, result.mismatches)
    return result


def _play_word(
    word: str,
    keys: KeySource,
    display: Display,
    result: SessionResult,
    max_read_failures: int,
) -> bool:
    """Run one round; return False if the session was killed."""
    target = TargetCursor(word)
    buffer = UserBuffer()
    while True:
        display.render(word, buffer)
        if target.is_complete():
            display.message(COMPLETE_MESSAGE)
            return True

        key = _read_key(keys, display, max_read_failures)
        if key is None:
            continue
        outcome = step(target, buffer, key)
        target, buffer = outcome.target, outcome.buffer

        if outcome.outcome is Outcome.KILLED:
            return False
        if outcome.outcome is Outcome.MISMATCH:
            result.mismatches += 1
            display.message(MISMATCH_MESSAGE)
        elif outcome.outcome is Outcome.UNSUPPORTED:
            display.message(unsupported_message(key))


def unsupported_message(key: KeyEvent) -> str:
    if key.kind is KeyKind.TAB:
        return TAB_MESSAGE
    return f"Unsupported key: {key.kind.value}"


def _read_key(keys: KeySource, display: Display, max_read_failures: int) -> Optional[KeyEvent]:
    """Read one key; return None when the screen must be redrawn first."""
    failures = 0
    while True:
        try:
            return keys.read_key()
        except TerminalResized:
            logger.debug("Terminal resized")
            return None
        except UnsupportedKey as e:
            logger.info("Ignoring unsupported key %s", e.key)
            display.message(str(e))
        except InputReadFailure as e:
            failures += 1
            logger.warning("Could not read key (%d/%d): %s", failures, max_read_failures, e)
            if failures >= max_read_failures:
                raise
