from eta import EvaluatorFn, LispValue, SExpression
from eta.evaluation.apply import make_closure
from eta.memory import MemoryManager
from eta.types.environment import Environment


def lambda_form(
    args: SExpression, env: Environment, memory: MemoryManager, evaluate_fn: EvaluatorFn
) -> LispValue:
    # (lambda (params) body): exactly one body expression
    return make_closure(args, env, memory)
