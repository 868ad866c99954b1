"""Primitives over atoms and pairs: atom, eq, car, cdr, cons."""

from __future__ import annotations

from eta import EvaluatorFn, LispValue, SExpression
from eta.errors import EtaTypeError
from eta.evaluation.primitives.common import boolean, check_nargs, evaluate_arg, nil
from eta.memory import MemoryManager
from eta.types.environment import Environment
from eta.types.values import Atom, Pair, compare, is_list, is_nil, is_number


def atom_form(
    args: SExpression, env: Environment, memory: MemoryManager, evaluate_fn: EvaluatorFn
) -> LispValue:
    """t if the argument's value is an atom, a number or nil."""
    check_nargs(args, 1, "atom")
    value = evaluate_arg(args, 0, env, memory, evaluate_fn)
    return boolean(memory, isinstance(value, Atom) or is_number(value) or is_nil(value))


def eq_form(
    args: SExpression, env: Environment, memory: MemoryManager, evaluate_fn: EvaluatorFn
) -> LispValue:
    # Lists compare by cell identity, not by contents
    check_nargs(args, 2, "eq")
    first = evaluate_arg(args, 0, env, memory, evaluate_fn)
    second = evaluate_arg(args, 1, env, memory, evaluate_fn)
    return boolean(memory, compare(first, second))


def _list_arg(args: SExpression, env, memory, evaluate_fn, context: str) -> Pair:
    check_nargs(args, 1, context)
    value = evaluate_arg(args, 0, env, memory, evaluate_fn)
    if not is_list(value):
        raise EtaTypeError("Argument did not evaluate to a list", context)
    return value


def car_form(
    args: SExpression, env: Environment, memory: MemoryManager, evaluate_fn: EvaluatorFn
) -> LispValue:
    lst = _list_arg(args, env, memory, evaluate_fn, "car")
    return lst.car if lst.car is not None else nil(memory)


def cdr_form(
    args: SExpression, env: Environment, memory: MemoryManager, evaluate_fn: EvaluatorFn
) -> LispValue:
    lst = _list_arg(args, env, memory, evaluate_fn, "cdr")
    return lst.cdr if lst.cdr is not None else nil(memory)


def cons_form(
    args: SExpression, env: Environment, memory: MemoryManager, evaluate_fn: EvaluatorFn
) -> LispValue:
    check_nargs(args, 2, "cons")
    head = evaluate_arg(args, 0, env, memory, evaluate_fn)
    tail = evaluate_arg(args, 1, env, memory, evaluate_fn)
    if not is_list(tail):
        raise EtaTypeError("Second argument did not evaluate to a list", "cons")
    return memory.track(Pair(head, None if is_nil(tail) else tail))
