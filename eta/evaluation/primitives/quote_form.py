from eta import EvaluatorFn, LispValue, SExpression
from eta.evaluation.primitives.common import check_nargs
from eta.memory import MemoryManager
from eta.types.environment import Environment


def quote_form(
    args: SExpression, env: Environment, memory: MemoryManager, evaluate_fn: EvaluatorFn
) -> LispValue:
    check_nargs(args, 1, "quote")
    return args.car
