"""
VarPretty settings, read from the environment.

- VARPRETTY_FULL_TYPES=1: show full import paths in type names
- VARPRETTY_SIMPLE_MODE=1: plain input() loop instead of prompt_toolkit
- VARPRETTY_HISTORY_FILE: REPL history (default ~/.cache/varpretty/repl_history)
- VARPRETTY_LOG_LEVEL: logging level name (default WARNING)
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_HISTORY_FILE = os.path.join("~", ".cache", "varpretty", "repl_history")

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    full_types: bool = False
    simple_mode: bool = False
    history_file: str = DEFAULT_HISTORY_FILE
    log_level: str = "WARNING"


def _flag(environ: Mapping[str, str], name: str) -> bool:
    return environ.get(name, "").strip().lower() in _TRUE_VALUES


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from `environ` (os.environ by default)."""
    if environ is None:
        environ = os.environ
    return Settings(
        full_types=_flag(environ, "VARPRETTY_FULL_TYPES"),
        simple_mode=_flag(environ, "VARPRETTY_SIMPLE_MODE"),
        history_file=environ.get("VARPRETTY_HISTORY_FILE") or DEFAULT_HISTORY_FILE,
        log_level=(environ.get("VARPRETTY_LOG_LEVEL") or "WARNING").upper(),
    )
