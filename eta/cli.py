"""Command line entry point: run program files, then optionally the REPL."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from eta import __version__, config
from eta.interpreter import Interpreter
from eta.log import configure

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="eta", description="Eta Lisp interpreter")
    parser.add_argument("program", nargs="*", help="program files to run (if empty, starts the REPL)")
    parser.add_argument("-b", "--bootstrap", metavar="FILE", help="file evaluated before any program")
    parser.add_argument("-i", "--interactive", action="store_true",
                        help="enter the REPL after running the programs")
    parser.add_argument("-v", "--verbose", action="store_true", help="print the result of every expression")
    parser.add_argument("--log-level", default=None, help="logging level (default from ETA_LOG_LEVEL)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run_file(interpreter: Interpreter, path: Path, verbose: bool) -> bool:
    """Run one program file; False when it is missing, unreadable or malformed."""
    try:
        return interpreter.interpret_program(path, sys.stdout, verbose)
    except OSError as ex:
        logger.error("[%s]: Could not read program: %s", path, ex.strerror or ex)
        return False


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        configure(args.log_level or config.get_log_level())
        limit = config.get_recursion_limit()
    except ValueError as ex:
        print(f"eta: {ex}", file=sys.stderr)
        return 2
    sys.setrecursionlimit(limit)

    bootstrap = Path(args.bootstrap) if args.bootstrap else config.get_bootstrap_file()
    files = ([bootstrap] if bootstrap else []) + [Path(p) for p in args.program]

    status = 0
    with Interpreter() as interpreter:
        try:
            for path in files:
                if not run_file(interpreter, path, args.verbose):
                    status = 1
            if args.interactive or not args.program:
                # Deferred so that running programs does not need line editing
                from eta import repl
                repl.run(interpreter, sys.stdout, args.verbose)
        except RecursionError:
            logger.critical("Maximum recursion depth exceeded, aborting")
            return 1
    return status


if __name__ == "__main__":
    sys.exit(main())
