"""Core evaluator for the Eta interpreter.

`evaluate0` is the recursive eval/apply state machine; it raises typed
EtaError exceptions that unwind the whole top-level expression. `evaluate` is
the boundary the driver calls: it logs the error and returns None instead.
Unbounded recursion is not caught here (RecursionError is fatal).
"""

from __future__ import annotations

import logging
from typing import Optional

from eta import LispValue, SExpression
from eta.errors import EtaError, EtaTypeError, EtaVariableNotFound
from eta.evaluation.apply import apply
from eta.memory import MemoryManager
from eta.types.closure import Closure
from eta.types.environment import Environment, binding_value
from eta.types.values import Atom, Float, Integer, Pair, Primitive, is_nil, is_truth

logger = logging.getLogger(__name__)


def evaluate(
    expr: Optional[SExpression], env: Environment, memory: MemoryManager
) -> Optional[LispValue]:
    """Evaluate `expr`; on any evaluation error, log it and return None."""
    try:
        return evaluate0(expr, env, memory)
    except EtaError as ex:
        logger.error("%s", ex)
        return None


def evaluate0(
    expr: Optional[SExpression], env: Environment, memory: MemoryManager
) -> LispValue:
    match expr:
        # Numbers, primitives and closures evaluate to themselves
        case Integer() | Float() | Primitive() | Closure():
            return expr

        case Atom():
            if is_truth(expr):
                return expr
            binding = env.lookup_pair(expr)
            if binding is None:
                raise EtaVariableNotFound(f"Atom: {expr.name} not found in environment", "eval")
            return binding_value(binding)

        case Pair():
            # Empty application: nil is its own value
            if is_nil(expr):
                return expr
            operator = evaluate0(expr.car, env, memory)
            return apply(operator, expr.cdr, env, memory, evaluate0)

    raise EtaTypeError("Cannot evaluate an absent value", "eval")
