"""Interactive read-eval-print loop with persistent line-edit history."""

from __future__ import annotations

import logging
import readline
import sys
from pathlib import Path
from typing import Optional, TextIO

from eta import config
from eta.interpreter import Interpreter

logger = logging.getLogger(__name__)

HISTORY_LENGTH = 1000


def load_history(path: Path) -> None:
    try:
        readline.read_history_file(path)
    except FileNotFoundError:
        pass
    except OSError as ex:
        logger.warning("Failed to read history file %s: %s", path, ex)
    readline.set_history_length(HISTORY_LENGTH)


def save_history(path: Path) -> None:
    try:
        readline.write_history_file(path)
    except OSError as ex:
        logger.warning("Failed to write history file %s: %s", path, ex)


def read_line(prompt: str) -> Optional[str]:
    """`input` with end of input (Ctrl-D) reported as None."""
    try:
        return input(prompt)
    except EOFError:
        print()
        return None


def run(interpreter: Interpreter, out: TextIO = sys.stdout, verbose: bool = False,
        history_file: Path | None = None) -> None:
    history = history_file if history_file is not None else config.get_history_file()
    load_history(history)
    try:
        interpreter.run_loop(read_line, out, verbose)
    except KeyboardInterrupt:
        print()
    finally:
        save_history(history)
