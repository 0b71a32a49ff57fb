"""Curses screen used as the display for a practice session."""

from __future__ import annotations

import curses
import logging
from typing import Any, Optional

from typist.core.matcher import UserBuffer
from typist.ui.colors import ColorScheme

logger = logging.getLogger(__name__)

TEXT_PAIR = 1
WORD_ROW = 0
BUFFER_ROW = 1
MESSAGE_ROW = 3


class TerminalDisplay:
    """Full-screen curses display.

    Entering the context switches to the alternate screen and puts the
    terminal in raw mode for the whole session; leaving it restores the
    terminal exactly once, however the session ended.
    """

    def __init__(self, colors: Optional[ColorScheme] = None) -> None:
        self._colors = colors or ColorScheme()
        self._screen: Any = None
        self._attr = curses.A_NORMAL
        self._notice: Optional[str] = None

    @property
    def window(self) -> Any:
        if self._screen is None:
            raise RuntimeError("display is not active")
        return self._screen

    @property
    def active(self) -> bool:
        return self._screen is not None

    def __enter__(self) -> TerminalDisplay:
        self._screen = curses.initscr()
        try:
            curses.noecho()
            curses.raw()
            self._screen.keypad(True)
            self._setup_colors()
        except Exception:
            self.close()
            raise
        logger.info("Entered terminal display")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Restore the terminal; calling it again is a no-op."""
        if self._screen is None:
            return
        screen, self._screen = self._screen, None
        try:
            screen.keypad(False)
            curses.noraw()
            curses.echo()
        finally:
            curses.endwin()
            logger.info("Left terminal display")

    def _setup_colors(self) -> None:
        if not curses.has_colors():
            return
        curses.start_color()
        fg, bg = self._colors.numbers()
        if -1 in (fg, bg):
            curses.use_default_colors()
        curses.init_pair(TEXT_PAIR, fg, bg)
        self._attr = curses.color_pair(TEXT_PAIR)

    def render(self, word: str, buffer: UserBuffer) -> None:
        """Redraw the target word and the user's buffer.

        A pending message is shown once more and then dropped.
        """
        screen = self.window
        screen.erase()
        self._put(WORD_ROW, word, self._attr)
        self._put(BUFFER_ROW, buffer.text, self._attr)
        if self._notice is not None:
            self._put(MESSAGE_ROW, self._notice, curses.A_BOLD)
            self._notice = None
        self._move(BUFFER_ROW, buffer.cur)
        screen.refresh()

    def message(self, text: str) -> None:
        screen = self.window
        self._notice = text
        if self._move(MESSAGE_ROW, 0):
            screen.clrtoeol()
        self._put(MESSAGE_ROW, text, curses.A_BOLD)
        screen.refresh()

    def _move(self, row: int, col: int) -> bool:
        """Move the cursor if the cell exists; return whether it moved."""
        height, width = self.window.getmaxyx()
        if row >= height or width <= 0:
            return False
        try:
            self.window.move(row, min(col, width - 1))
        except curses.error:
            return False
        return True

    def _put(self, row: int, text: str, attr: int) -> None:
        height, width = self.window.getmaxyx()
        if row >= height or width <= 0:
            return
        try:
            self.window.addstr(row, 0, text[:width], attr)
        except curses.error:
            # writing the bottom-right cell raises after the text is drawn
            pass
