from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import List, Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORDS = 20
DEFAULT_MIN_LENGTH = 2


def default_word_file() -> Path:
    """Path of the bundled list of common English words."""
    return Path(__file__).resolve().parent.parent / "data" / "words" / "common_en.txt"


def load_words(
    path: Union[str, Path],
    max_words: int = DEFAULT_MAX_WORDS,
    min_length: int = DEFAULT_MIN_LENGTH,
    shuffle: bool = False,
    seed: Optional[int] = None,
) -> List[str]:
    """Read a line-delimited word file and return at most ``max_words`` words.

    Blank lines and words shorter than ``min_length`` are dropped. With
    ``shuffle`` the eligible words are drawn in random order before the list
    is truncated, so every word in the file can come up.
    """
    if max_words < 1:
        raise ValueError(f"max_words must be at least 1, got {max_words}")
    if min_length < DEFAULT_MIN_LENGTH:
        raise ValueError(f"min_length must be at least {DEFAULT_MIN_LENGTH}, got {min_length}")

    word_path = Path(path)
    if not word_path.exists():
        raise FileNotFoundError(f"Word file not found: {word_path}")

    text = word_path.read_text(encoding="utf-8")
    words = [line.strip() for line in text.splitlines()]
    words = [w for w in words if len(w) >= min_length]
    if not words:
        raise ValueError(f"{word_path.name}: no words of length {min_length} or more")

    if shuffle:
        random.Random(seed).shuffle(words)
    selected = words[:max_words]
    logger.info("Loaded %d of %d words from %s", len(selected), len(words), word_path)
    return selected
