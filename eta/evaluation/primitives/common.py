"""Argument checking and result helpers shared by the primitive library."""

from __future__ import annotations

from typing import Optional

from eta import EvaluatorFn, LispValue, SExpression
from eta.errors import EtaArityError
from eta.memory import MemoryManager
from eta.types.environment import Environment
from eta.types.values import TRUTH, Atom, Pair, list_length, nth


def check_nargs(args: Optional[SExpression], expected: int, context: str) -> None:
    nargs = list_length(args)
    if nargs != expected:
        raise EtaArityError(f"Expected {expected} arguments, got {nargs}", context)


def evaluate_arg(
    args: Optional[SExpression],
    index: int,
    env: Environment,
    memory: MemoryManager,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    return evaluate_fn(nth(args, index), env, memory)


def truth(memory: MemoryManager) -> Atom:
    return memory.track(Atom(TRUTH))


def nil(memory: MemoryManager) -> Pair:
    return memory.track(Pair.nil())


def boolean(memory: MemoryManager, flag: bool) -> LispValue:
    return truth(memory) if flag else nil(memory)
