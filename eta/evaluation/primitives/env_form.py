from eta import EvaluatorFn, LispValue, SExpression
from eta.evaluation.primitives.common import check_nargs, nil
from eta.memory import MemoryManager
from eta.types.environment import Environment


def env_form(
    args: SExpression, env: Environment, memory: MemoryManager, evaluate_fn: EvaluatorFn
) -> LispValue:
    check_nargs(args, 0, "env")
    return env.bindings if env.bindings is not None else nil(memory)
