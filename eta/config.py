from __future__ import annotations
import os
import sys
from pathlib import Path
from typing import Optional


# Defaults
_DEFAULT_HISTORY_FILE = Path('.lisp-history')
_DEFAULT_LOG_LEVEL = 'WARNING'
# Each Lisp call costs about a dozen Python frames
_DEFAULT_RECURSION_LIMIT = 10000


def path_from_env(var: str, default: Optional[Path]) -> Optional[Path]:
    raw = os.environ.get(var)
    if not raw or not raw.strip():
        return default
    return Path(raw.strip())


def get_history_file() -> Path:
    return path_from_env('ETA_HISTORY_FILE', _DEFAULT_HISTORY_FILE)


def get_bootstrap_file() -> Optional[Path]:
    return path_from_env('ETA_BOOTSTRAP', None)


def get_log_level() -> str:
    return os.environ.get('ETA_LOG_LEVEL', '').strip().upper() or _DEFAULT_LOG_LEVEL


def get_recursion_limit() -> int:
    raw = os.environ.get('ETA_RECURSION_LIMIT', '').strip()
    if not raw:
        return _DEFAULT_RECURSION_LIMIT
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"ETA_RECURSION_LIMIT must be an integer, got {raw!r}") from None


def raise_recursion_limit(limit: int) -> None:
    """Raise the interpreter's recursion limit to `limit`; never lowers it."""
    if sys.getrecursionlimit() < limit:
        sys.setrecursionlimit(limit)
