from __future__ import annotations
import logging
import os
from typing import Optional


DEFAULT_PROMPT = ">> "
DEFAULT_LOG_LEVEL = "WARNING"


def get_prompt() -> str:
    return os.environ.get("MONKEY_PROMPT", DEFAULT_PROMPT)


def get_log_level() -> int:
    raw = os.environ.get("MONKEY_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(raw)
    # getLevelName maps unknown names to "Level X" strings
    return level if isinstance(level, int) else logging.WARNING


def get_recursion_limit() -> Optional[int]:
    """Host recursion limit for deeply recursive programs, None keeps the default."""
    raw = os.environ.get("MONKEY_RECURSION_LIMIT")
    if not raw or not raw.strip().isdigit():
        return None
    return int(raw)
