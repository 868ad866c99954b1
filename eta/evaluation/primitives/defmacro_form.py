"""Primitive: defmacro.

Reserved so that macro definitions fail loudly instead of reading as an
unbound atom. Macros are not part of the language.
"""

from eta import EvaluatorFn, LispValue, SExpression
from eta.errors import EtaUnsupported
from eta.memory import MemoryManager
from eta.types.environment import Environment


def defmacro_form(
    args: SExpression, env: Environment, memory: MemoryManager, evaluate_fn: EvaluatorFn
) -> LispValue:
    raise EtaUnsupported("defmacro is not implemented", "defmacro")
