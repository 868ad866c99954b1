"""Math library: binary arithmetic and numeric comparison.

Every operator takes exactly two arguments, both evaluated and both numeric.
Two integers give an integer (wrapping in 32 bits); if either side is a float
both are coerced and the result is a float.
"""

from __future__ import annotations

import operator
from typing import Callable

from eta import EvaluatorFn, LispValue, SExpression
from eta.errors import EtaArithmeticError, EtaTypeError
from eta.evaluation.primitives.common import boolean, check_nargs, evaluate_arg
from eta.memory import MemoryManager
from eta.types.environment import Environment
from eta.types.values import Float, Integer, Value, is_number, to_float32

IntOp = Callable[[int, int], int]
FloatOp = Callable[[float, float], float]


def _numeric_args(args: SExpression, env, memory, evaluate_fn, context: str) -> tuple[Value, Value]:
    check_nargs(args, 2, context)
    first = evaluate_arg(args, 0, env, memory, evaluate_fn)
    if not is_number(first):
        raise EtaTypeError("First argument did not evaluate to a number.", context)
    second = evaluate_arg(args, 1, env, memory, evaluate_fn)
    if not is_number(second):
        raise EtaTypeError("Second argument did not evaluate to a number.", context)
    return first, second


# -------------------------------
# Integer and float operations
# -------------------------------
def div_ints(x: int, y: int) -> int:
    if y == 0:
        raise EtaArithmeticError("Division by zero", "/")
    quotient = abs(x) // abs(y)
    return quotient if (x < 0) == (y < 0) else -quotient


def div_floats(x: float, y: float) -> float:
    if y == 0:
        raise EtaArithmeticError("Division by zero", "/")
    return x / y


def mod_ints(x: int, y: int) -> int:
    if y == 0:
        raise EtaArithmeticError("Modulus by zero", "%")
    return abs(x) % abs(y)


def mod_floats(x: float, y: float) -> float:
    if y == 0:
        raise EtaArithmeticError("Modulus by zero", "%")
    return abs(x) % abs(y)


def _arithmetic(name: str, int_op: IntOp, float_op: FloatOp):
    def primitive(
        args: SExpression, env: Environment, memory: MemoryManager, evaluate_fn: EvaluatorFn
    ) -> LispValue:
        first, second = _numeric_args(args, env, memory, evaluate_fn, name)
        if isinstance(first, Float) or isinstance(second, Float):
            return memory.track(Float(float_op(to_float32(first.value), to_float32(second.value))))
        return memory.track(Integer(int_op(first.value, second.value)))

    primitive.__name__ = f"math_{int_op.__name__}"
    return primitive


def _comparison(name: str, op: Callable[[float, float], bool]):
    def primitive(
        args: SExpression, env: Environment, memory: MemoryManager, evaluate_fn: EvaluatorFn
    ) -> LispValue:
        first, second = _numeric_args(args, env, memory, evaluate_fn, name)
        if isinstance(first, Integer) and isinstance(second, Integer):
            return boolean(memory, op(first.value, second.value))
        return boolean(memory, op(to_float32(first.value), to_float32(second.value)))

    primitive.__name__ = f"math_{op.__name__}"
    return primitive


add = _arithmetic("+", operator.add, operator.add)
sub = _arithmetic("-", operator.sub, operator.sub)
mul = _arithmetic("*", operator.mul, operator.mul)
divide = _arithmetic("/", div_ints, div_floats)
mod = _arithmetic("%", mod_ints, mod_floats)

equal = _comparison("=", operator.eq)
gt = _comparison(">", operator.gt)
gte = _comparison(">=", operator.ge)
lt = _comparison("<", operator.lt)
lte = _comparison("<=", operator.le)
