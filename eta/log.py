"""Logging setup for the command line. Library modules only create loggers."""

from __future__ import annotations

import logging
import sys

FORMAT = "%(levelname)s %(message)s"


def resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    return value


def configure(level: int | str = logging.WARNING) -> None:
    """Route records from the `eta` logger hierarchy to stderr at `level`."""
    level = resolve_level(level)
    root = logging.getLogger("eta")
    for handler in list(root.handlers):
        root.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(FORMAT))
    root.addHandler(handler)
    root.setLevel(level)
