from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional, TextIO

from eta import LispValue, SExpression, config
from eta.errors import EtaSyntaxError
from eta.evaluation.evaluator import evaluate
from eta.memory import MemoryManager
from eta.reader.parser import is_balanced, is_valid, lex, net_balance, TokenStream
from eta.reader.printer import unparse
from eta.types.environment import Environment

logger = logging.getLogger(__name__)

PROMPT = "> "
REPROMPT = ">>"
NO_RESULT = "NULL"


def continuation_prompt(text: str) -> str:
    """Re-prompt indented by the number of parentheses still open."""
    return REPROMPT + " " * max(net_balance(text), 0)


def collect_expressions(next_line: Callable[[str], Optional[str]]) -> Iterator[tuple[str, bool]]:
    """Group input lines into complete expressions.

    `next_line(prompt)` returns the next line, or None at end of input. Yields
    `(text, valid)`; `valid` is False when the text closes a parenthesis that
    was never opened. Blank lines are skipped and an expression left open at
    end of input is dropped.
    """
    while (line := next_line(PROMPT)) is not None:
        if not line.strip():
            continue
        text = line
        while is_valid(text) and not is_balanced(text):
            more = next_line(continuation_prompt(text))
            if more is None:
                return
            text = f"{text} {more}"
        yield text, is_valid(text)


class Interpreter:
    """
    Drives the parse -> eval -> print -> release turn for Eta.
    Maintains one Environment and one MemoryManager across calls.
    """

    def __init__(
        self,
        env: Environment | None = None,
        memory: MemoryManager | None = None,
        recursion_limit: int | None = None,
    ):
        config.raise_recursion_limit(recursion_limit if recursion_limit is not None else config.get_recursion_limit())
        self.env: Environment = env if env is not None else Environment.default()
        self.memory: MemoryManager = memory if memory is not None else MemoryManager()

    # -------------------------------
    # Single turns
    # -------------------------------
    def eval(self, expr: SExpression) -> Optional[LispValue]:
        """Evaluate an already parsed expression. The caller releases the turn."""
        return evaluate(expr, self.env, self.memory)

    def _turn(self, expr: SExpression) -> Optional[str]:
        # The parsed tree belongs to this turn as well
        self.memory.track_recursive(expr)
        try:
            return unparse(self.eval(expr))
        finally:
            self.memory.release_all()

    def interpret_expression(self, text: str) -> Optional[str]:
        """Run the first expression in `text`; returns its printed result or None on failure."""
        if text is None:
            return None
        try:
            expr = TokenStream(lex(text)).parse_expr()
        except EtaSyntaxError as ex:
            logger.error("%s", ex)
            return None
        if expr is None:
            return None
        return self._turn(expr)

    def interpret(self, text: str) -> list[Optional[str]]:
        """Run every expression in `text`, returning one printed result per expression.

        A syntax error stops reading; expressions already run keep their effects.
        """
        results: list[Optional[str]] = []
        stream = TokenStream(lex(text))
        try:
            while (expr := stream.parse_expr()) is not None:
                results.append(self._turn(expr))
        except EtaSyntaxError as ex:
            logger.error("%s", ex)
        return results

    # -------------------------------
    # Programs and streams
    # -------------------------------
    def interpret_program(self, path: str | Path, out: TextIO | None = None, verbose: bool = False) -> bool:
        """Run a program file. Returns False if it stopped on a syntax error.

        Evaluation errors are logged and the program continues with the next
        expression; with `verbose`, each result (or the no-result marker) is
        written to `out`.
        """
        source = Path(path).read_text()
        stream = TokenStream(lex(source))
        while True:
            try:
                expr = stream.parse_expr()
            except EtaSyntaxError as ex:
                logger.error("[%s]: Syntax error. %s", path, ex)
                return False
            if expr is None:
                return True
            # A failed expression only skips itself, later expressions still run
            result = self._turn(expr)
            if verbose and out is not None:
                out.write(f"{result if result is not None else NO_RESULT}\n")

    def interpret_stream(self, lines: Iterable[str], out: TextIO, verbose: bool = False) -> None:
        """REPL-style loop over `lines`, printing each result to `out`."""
        it = iter(lines)
        self.run_loop(lambda prompt: next(it, None), out, verbose)

    def run_loop(self, next_line: Callable[[str], Optional[str]], out: TextIO, verbose: bool = False) -> None:
        for text, valid in collect_expressions(next_line):
            if not valid:
                logger.error("%s", EtaSyntaxError("Invalid expression", "repl"))
                continue
            for result in self.interpret(text):
                if result is not None:
                    out.write(f"{result}\n")
                elif verbose:
                    out.write(f"{NO_RESULT}\n")

    # -------------------------------
    # Lifetime
    # -------------------------------
    def close(self) -> None:
        self.memory.dispose()
        self.env = None

    def __enter__(self) -> Interpreter:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
