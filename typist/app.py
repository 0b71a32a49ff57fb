"""Application entry point and setup for the typist typing trainer."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from typist.core.config import load_settings
from typist.core.errors import TypistError
from typist.core.session import Display, KeySource, SessionResult, SessionState, run_session
from typist.core.words import load_words
from typist.ui.colors import ColorScheme
from typist.ui.keyboard import TerminalKeys
from typist.ui.terminal import TerminalDisplay

logger = logging.getLogger(__name__)


def configure_logging(log_file: Path) -> None:
    """Send application logs to a file; the terminal belongs to curses."""
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=logging.INFO,
        filename=str(log_file),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="typist", description="Practice typing one word at a time.")
    parser.add_argument("--config", type=Path, help="YAML settings file (default: ~/.typist/config.yaml)")
    parser.add_argument("--words", type=Path, help="line-delimited word file")
    parser.add_argument("--count", type=int, help="number of words to practice")
    parser.add_argument("--shuffle", action="store_true", default=None, help="draw words in random order")
    parser.add_argument("--seed", type=int, help="random seed used with --shuffle")
    parser.add_argument("--log-file", type=Path, help="where to write the log")
    return parser


def play(
    words: List[str],
    display: Display,
    keys: KeySource,
    max_read_failures: int = 5,
) -> SessionResult:
    """Run a session inside the display context so it is always torn down."""
    state = SessionState(words, max_words=max(1, len(words)))
    with display:
        try:
            return run_session(state, keys, display, max_read_failures)
        except KeyboardInterrupt:
            logger.info("Interrupted")
            return SessionResult(completed=max(0, state.index - 1), killed=True)


def run(argv: Optional[Sequence[str]] = None) -> int:
    """Parse arguments, load words and run one practice session."""
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings(args.config).override(
            word_file=args.words,
            max_words=args.count,
            shuffle=args.shuffle,
            seed=args.seed,
            log_file=args.log_file,
        )
        configure_logging(settings.log_file)
        words = load_words(
            settings.word_file,
            max_words=settings.max_words,
            min_length=settings.min_length,
            shuffle=settings.shuffle,
            seed=settings.seed,
        )
        colors = ColorScheme(settings.foreground, settings.background)
    except (OSError, ValueError) as e:
        logger.error("Could not start session: %s", e)
        print(f"typist: {e}", file=sys.stderr)
        return 2

    display = TerminalDisplay(colors)
    try:
        result = play(words, display, TerminalKeys(display), settings.max_read_failures)
    except TypistError as e:
        logger.error("Session aborted: %s", e)
        print(f"typist: {e}", file=sys.stderr)
        return 1
    print(summary(result))
    return 0


def summary(result: SessionResult) -> str:
    if result.killed:
        return "Session ended."
    return f"Well done! You typed {result.completed} words."


def main() -> None:
    sys.exit(run())
