"""Application engine for Eta.

This module centralizes procedure application for the interpreter:
- Primitives receive their argument list unevaluated.
- Closures evaluate their arguments in the caller's environment and run the
  body in a temporary environment: captured bindings, then the parameter
  frame, then the caller's chain.
- Applying a closure to fewer arguments than it has parameters returns a new
  closure awaiting the rest (partial application).
- Closure creation (`lambda`) validates the parameter list, copies the
  parameters and body, and captures the free variables of the body.

Everything built here is registered with the memory manager before it is
spliced onto any longer-lived chain, so that a bulk release never reaches
into the caller's environment.
"""

from __future__ import annotations

import logging
from typing import Optional

from eta import EvaluatorFn, LispValue, SExpression
from eta.errors import EtaArityError, EtaNotApplicable
from eta.memory import MemoryManager
from eta.types.closure import Closure, capture_variables, validate_parameters
from eta.types.environment import Environment, bind, join, make_frame
from eta.types.values import Atom, Primitive, deep_copy, iter_list, list_length, make_list, nth
from eta.reader.printer import unparse

logger = logging.getLogger(__name__)


def make_closure(args: SExpression, env: Environment, memory: MemoryManager) -> Closure:
    """Promote a (params body) argument list to a closure over `env`."""
    nargs = list_length(args)
    if nargs != 2:
        raise EtaArityError(f"Expected 2 arguments, got {nargs}", "lambda")

    params = nth(args, 0)
    validate_parameters(params)

    # Parameters are well-formed, make copies for saving.
    params = deep_copy(params)
    body = deep_copy(nth(args, 1))
    captured = capture_variables(params, body, env.bindings)

    closure = Closure(params, body, captured)
    logger.debug(
        "Closure created: params=(%s), captured=%d",
        " ".join(closure.parameter_names()),
        list_length(captured),
    )
    return memory.track_recursive(closure)


def partial_application(
    closure: Closure, values: list[LispValue], memory: MemoryManager
) -> Closure:
    """Bind `values` to the leading parameters and return a closure over the rest."""
    names = list(iter_list(closure.parameters))
    consumed, remaining = names[: len(values)], names[len(values):]

    new_bindings = make_frame(make_list(consumed), values)
    captured = join(new_bindings, deep_copy(closure.captured))
    params = make_list(deep_copy(p) for p in remaining)

    partial = Closure(params, deep_copy(closure.body), captured)
    return memory.track_recursive(partial)


def apply_closure(
    closure: Closure,
    args: Optional[SExpression],
    caller_env: Environment,
    memory: MemoryManager,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    provided = list_length(args)
    arity = closure.nargs
    if provided > arity:
        raise EtaArityError(f"Expected {arity} arguments, got {provided}", "apply")

    values = [evaluate_fn(arg, caller_env, memory) for arg in iter_list(args)]
    if provided < arity:
        return partial_application(closure, values, memory)

    # The join below mutates the front list, so splice a tracked copy of the
    # captured bindings rather than the closure's own.
    frame = bind(closure.parameters, values, caller_env.bindings, memory)
    captured = memory.track_recursive(deep_copy(closure.captured))
    body_env = Environment(join(captured, frame))
    return evaluate_fn(closure.body, body_env, memory)


def apply(
    operator: LispValue,
    args: Optional[SExpression],
    env: Environment,
    memory: MemoryManager,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """Apply either a primitive or a closure.

    - Primitives are invoked with the unevaluated argument list.
    - Closures defer to apply_closure.
    - Anything else cannot be applied.
    """
    match operator:
        case Primitive():
            return operator.fn(args, env, memory, evaluate_fn)
        case Closure():
            return apply_closure(operator, args, env, memory, evaluate_fn)
        case Atom():
            raise EtaNotApplicable(f'Cannot apply atom: "{operator.name}" as function', "apply")
    raise EtaNotApplicable(f"Cannot apply {unparse(operator)} as function", "apply")
