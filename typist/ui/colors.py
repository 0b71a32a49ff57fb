"""Terminal color scheme and color-name lookup."""

from __future__ import annotations

import curses
from dataclasses import dataclass

COLOR_NAMES = {
    "black": curses.COLOR_BLACK,
    "red": curses.COLOR_RED,
    "green": curses.COLOR_GREEN,
    "yellow": curses.COLOR_YELLOW,
    "blue": curses.COLOR_BLUE,
    "magenta": curses.COLOR_MAGENTA,
    "cyan": curses.COLOR_CYAN,
    "white": curses.COLOR_WHITE,
    # terminal default, needs use_default_colors()
    "default": -1,
}


def color_number(name: str) -> int:
    """Map a color name (case-insensitive) to its curses color number."""
    key = name.strip().lower()
    if key not in COLOR_NAMES:
        raise ValueError(f"Unknown color {name!r}; expected one of {', '.join(COLOR_NAMES)}")
    return COLOR_NAMES[key]


@dataclass(frozen=True)
class ColorScheme:
    """Foreground/background pair used for the practice text."""

    foreground: str = "blue"
    background: str = "red"

    def __post_init__(self) -> None:
        color_number(self.foreground)
        color_number(self.background)

    def numbers(self) -> tuple[int, int]:
        return color_number(self.foreground), color_number(self.background)
