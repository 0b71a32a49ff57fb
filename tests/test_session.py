"""Tests for typist.core.session – session state and driver loop."""

from __future__ import annotations

from typing import List, Tuple, Union

import pytest

from typist.core.errors import InputReadFailure, TerminalResized, UnsupportedKey
from typist.core.keys import KeyEvent, KeyKind
from typist.core.matcher import UserBuffer
from typist.core.session import (
    COMPLETE_MESSAGE,
    MAX_WORDS,
    MISMATCH_MESSAGE,
    TAB_MESSAGE,
    SessionResult,
    SessionState,
    run_session,
    unsupported_message,
)


class FakeKeys:
    """Key source that replays events and raises queued exceptions."""

    def __init__(self, events: List[Union[KeyEvent, Exception]]) -> None:
        self._events = list(events)
        self.reads = 0

    def read_key(self) -> KeyEvent:
        self.reads += 1
        if not self._events:
            raise AssertionError("no more keys queued")
        event = self._events.pop(0)
        if isinstance(event, Exception):
            raise event
        return event


class FakeDisplay:
    def __init__(self) -> None:
        self.frames: List[Tuple[str, str]] = []
        self.messages: List[str] = []

    def render(self, word: str, buffer: UserBuffer) -> None:
        self.frames.append((word, buffer.text))

    def message(self, text: str) -> None:
        self.messages.append(text)


def _chars(text: str) -> List[KeyEvent]:
    return [KeyEvent.character(c) for c in text]


# ---------------------------------------------------------------------------
# SessionState
# ---------------------------------------------------------------------------

class TestSessionState:
    def test_hands_out_words_in_order(self):
        s = SessionState(["ab", "cd"])
        assert s.next_word() == "ab"
        assert s.next_word() == "cd"
        assert s.next_word() is None

    def test_index_and_remaining(self):
        s = SessionState(["ab", "cd", "ef"])
        assert s.index == 0
        assert s.remaining == 3
        s.next_word()
        assert s.index == 1
        assert s.remaining == 2

    def test_current_word(self):
        s = SessionState(["ab", "cd"])
        assert s.current_word() == "ab"
        s.next_word()
        assert s.current_word() == "cd"

    def test_current_word_when_complete(self):
        s = SessionState(["ab"])
        s.next_word()
        assert s.is_complete()
        with pytest.raises(IndexError):
            s.current_word()

    def test_bounded_to_max_words(self):
        s = SessionState([f"w{i}" for i in range(50)])
        assert s.total_words == MAX_WORDS

    def test_custom_bound(self):
        s = SessionState(["ab", "cd", "ef"], max_words=2)
        assert s.total_words == 2

    def test_rejects_short_words(self):
        with pytest.raises(ValueError, match="longer than one character"):
            SessionState(["ab", "c"])

    def test_rejects_zero_bound(self):
        with pytest.raises(ValueError):
            SessionState(["ab"], max_words=0)

    def test_empty_list_is_complete(self):
        assert SessionState([]).is_complete()


# ---------------------------------------------------------------------------
# run_session – normal flow
# ---------------------------------------------------------------------------

class TestRunSession:
    def test_exhausts_word_list(self):
        keys = FakeKeys(_chars("hello") + _chars("cat"))
        display = FakeDisplay()
        result = run_session(SessionState(["hello", "cat"]), keys, display)
        assert result == SessionResult(completed=2, mismatches=0, killed=False)
        assert display.messages == [COMPLETE_MESSAGE, COMPLETE_MESSAGE]
        assert keys.reads == 8

    def test_renders_before_each_key_and_at_completion(self):
        display = FakeDisplay()
        run_session(SessionState(["ab"]), FakeKeys(_chars("ab")), display)
        assert display.frames == [("ab", ""), ("ab", "a"), ("ab", "ab")]

    def test_mismatch_reported_and_recovered(self):
        keys = FakeKeys(_chars("cx") + [KeyEvent.backspace()] + _chars("at"))
        display = FakeDisplay()
        result = run_session(SessionState(["cat"]), keys, display)
        assert result.completed == 1
        assert result.mismatches == 1
        assert display.messages == [MISMATCH_MESSAGE, COMPLETE_MESSAGE]
        assert ("cat", "cx") in display.frames

    def test_tab_reports_unsupported(self):
        keys = FakeKeys([KeyEvent.tab()] + _chars("ab"))
        display = FakeDisplay()
        result = run_session(SessionState(["ab"]), keys, display)
        assert result.completed == 1
        assert display.messages[0] == TAB_MESSAGE

    def test_empty_session(self):
        keys = FakeKeys([])
        result = run_session(SessionState([]), keys, FakeDisplay())
        assert result == SessionResult()
        assert keys.reads == 0


# ---------------------------------------------------------------------------
# run_session – kill
# ---------------------------------------------------------------------------

class TestKill:
    def test_kill_mid_word(self):
        state = SessionState(["hello", "world"])
        keys = FakeKeys(_chars("he") + [KeyEvent.kill()])
        display = FakeDisplay()
        result = run_session(state, keys, display)
        assert result.killed is True
        assert result.completed == 0
        assert all(word == "hello" for word, _ in display.frames)
        assert state.remaining == 1

    def test_kill_at_word_boundary(self):
        state = SessionState(["ab", "cd", "ef"])
        keys = FakeKeys(_chars("ab") + [KeyEvent.kill()])
        display = FakeDisplay()
        result = run_session(state, keys, display)
        assert result.killed is True
        assert result.completed == 1
        assert {word for word, _ in display.frames} == {"ab", "cd"}
        assert state.next_word() == "ef"


# ---------------------------------------------------------------------------
# run_session – input errors
# ---------------------------------------------------------------------------

class TestInputErrors:
    def test_unsupported_key_is_reported(self):
        keys = FakeKeys([UnsupportedKey("KEY_F1")] + _chars("ab"))
        display = FakeDisplay()
        result = run_session(SessionState(["ab"]), keys, display)
        assert result.completed == 1
        assert display.messages[0] == "Unsupported key: KEY_F1"

    def test_read_failure_is_retried(self):
        keys = FakeKeys([InputReadFailure("no input")] + _chars("ab"))
        result = run_session(SessionState(["ab"]), keys, FakeDisplay())
        assert result.completed == 1
        assert keys.reads == 3

    def test_gives_up_after_repeated_failures(self):
        keys = FakeKeys([InputReadFailure("gone")] * 3)
        with pytest.raises(InputReadFailure):
            run_session(SessionState(["ab"]), keys, FakeDisplay(), max_read_failures=3)
        assert keys.reads == 3

    def test_failure_count_resets_per_read(self):
        events = [InputReadFailure("x"), KeyEvent.character("a"), InputReadFailure("y"), KeyEvent.character("b")]
        result = run_session(SessionState(["ab"]), FakeKeys(events), FakeDisplay(), max_read_failures=2)
        assert result.completed == 1

    def test_resize_burst_does_not_count_as_failure(self):
        events = [TerminalResized("resized")] * 6 + _chars("ab")
        result = run_session(SessionState(["ab"]), FakeKeys(events), FakeDisplay(), max_read_failures=5)
        assert result == SessionResult(completed=1)

    def test_resize_redraws_current_state(self):
        keys = FakeKeys(_chars("a") + [TerminalResized("resized")] + _chars("b"))
        display = FakeDisplay()
        run_session(SessionState(["ab"]), keys, display)
        assert display.frames == [("ab", ""), ("ab", "a"), ("ab", "a"), ("ab", "ab")]


# ---------------------------------------------------------------------------
# unsupported_message
# ---------------------------------------------------------------------------

class TestUnsupportedMessage:
    def test_tab(self):
        assert unsupported_message(KeyEvent.tab()) == TAB_MESSAGE

    def test_other_keys_named(self):
        assert unsupported_message(KeyEvent(KeyKind.BACKSPACE)) == "Unsupported key: backspace"
