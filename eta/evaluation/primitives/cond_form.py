from eta import EvaluatorFn, LispValue, SExpression
from eta.errors import EtaTypeError
from eta.evaluation.primitives.common import nil
from eta.memory import MemoryManager
from eta.types.environment import Environment
from eta.types.values import Pair, is_nil, iter_list, list_length, nth


def cond_form(
    args: SExpression, env: Environment, memory: MemoryManager, evaluate_fn: EvaluatorFn
) -> LispValue:
    """(cond (p1 e1) ... (pn en))

    Predicates are evaluated left to right; the first one whose value is not
    nil selects its expression. Clauses after the match are not looked at.
    With no match the result is nil.
    """
    for position, clause in enumerate(iter_list(args)):
        if not isinstance(clause, Pair) or list_length(clause) != 2:
            raise EtaTypeError(f"Clause {position} is not a (predicate value) pair", "cond")
        predicate = evaluate_fn(clause.car, env, memory)
        if not is_nil(predicate):
            return evaluate_fn(nth(clause, 1), env, memory)
    return nil(memory)
