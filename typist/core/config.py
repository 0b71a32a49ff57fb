from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from typist.core.words import DEFAULT_MAX_WORDS, DEFAULT_MIN_LENGTH, default_word_file

logger = logging.getLogger(__name__)


def user_config_dir() -> Path:
    return Path.home() / ".typist"


@dataclass(frozen=True)
class Settings:
    word_file: Path = field(default_factory=default_word_file)
    max_words: int = DEFAULT_MAX_WORDS
    min_length: int = DEFAULT_MIN_LENGTH
    shuffle: bool = False
    seed: Optional[int] = None
    foreground: str = "blue"
    background: str = "red"
    max_read_failures: int = 5
    log_file: Path = field(default_factory=lambda: user_config_dir() / "typist.log")

    def override(self, **changes: Any) -> Settings:
        """Return a copy with every change that is not None applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


_FIELD_TYPES = {
    "word_file": (str,),
    "max_words": (int,),
    "min_length": (int,),
    "shuffle": (bool,),
    "seed": (int, type(None)),
    "foreground": (str,),
    "background": (str,),
    "max_read_failures": (int,),
    "log_file": (str,),
}


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """Load settings from a YAML file.

    An explicit ``path`` must exist. Without one, ``~/.typist/config.yaml`` is
    used when present and the defaults otherwise.
    """
    if path is None:
        config_path = user_config_dir() / "config.yaml"
        if not config_path.exists():
            return Settings()
    else:
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"{config_path.name}: invalid YAML: {e}") from e
    if raw is None:
        return Settings()
    if not isinstance(raw, dict):
        raise ValueError(f"{config_path.name}: expected a mapping of settings")

    values = _validate(config_path.name, raw)
    logger.info("Loaded settings from %s", config_path)
    return Settings(**values)


def _validate(name: str, raw: Dict[Any, Any]) -> Dict[str, Any]:
    known = {f.name for f in fields(Settings)}
    values: Dict[str, Any] = {}
    for key, value in raw.items():
        if key not in known:
            raise ValueError(f"{name}: unknown setting {key!r}")
        allowed = _FIELD_TYPES[key]
        # bool is an int subclass; only accept it where a bool is expected
        if isinstance(value, bool) and bool not in allowed:
            raise ValueError(f"{name}: invalid value for {key!r}: {value!r}")
        if not isinstance(value, allowed):
            raise ValueError(f"{name}: invalid value for {key!r}: {value!r}")
        if key in ("word_file", "log_file"):
            value = Path(value).expanduser()
        values[key] = value
    for key in ("max_words", "max_read_failures"):
        if key in values and values[key] < 1:
            raise ValueError(f"{name}: {key!r} must be at least 1")
    if values.get("min_length", DEFAULT_MIN_LENGTH) < DEFAULT_MIN_LENGTH:
        raise ValueError(f"{name}: 'min_length' must be at least {DEFAULT_MIN_LENGTH}")
    return values
