from eta import EvaluatorFn, LispValue, SExpression
from eta.errors import EtaTypeError
from eta.evaluation.primitives.common import check_nargs, evaluate_arg
from eta.memory import MemoryManager
from eta.types.environment import Environment
from eta.types.values import Atom, Pair, deep_copy, is_truth


def set_form(
    args: SExpression, env: Environment, memory: MemoryManager, evaluate_fn: EvaluatorFn
) -> LispValue:
    """(set name value) binds the value of `name` to a copy of the value of `value`.

    An existing binding is overwritten in place. The old value is released
    with the rest of this evaluation, so `(set 'x (cdr x))` can still read it.
    Returns the newly bound copy.
    """
    check_nargs(args, 2, "set")
    name = evaluate_arg(args, 0, env, memory, evaluate_fn)
    if not isinstance(name, Atom):
        raise EtaTypeError("First argument did not evaluate to an atom", "set")
    if is_truth(name):
        raise EtaTypeError("Cannot rebind the truth atom", "set")
    value = evaluate_arg(args, 1, env, memory, evaluate_fn)

    bound = deep_copy(value)
    binding = env.lookup_pair(name)
    if binding is None:
        env.bindings = Pair(Pair(deep_copy(name), Pair(bound)), env.bindings)
    else:
        slot = binding.cdr
        old = slot.car
        slot.car = bound
        memory.track_recursive(old)
    return bound
