import pytest

from eta.errors import EtaArityError, EtaInvalidParameter
from eta.evaluation.apply import make_closure
from eta.reader.parser import parse_expression
from eta.reader.printer import unparse
from eta.types.closure import Closure, capture_variables, validate_parameters
from eta.types.environment import Environment
from eta.types.values import Atom, Integer, make_list


def captured_names(closure):
    return [binding.car.name for binding in _bindings(closure.captured)]


def _bindings(captured):
    node = captured
    while node is not None:
        yield node.car
        node = node.cdr


@pytest.mark.parametrize(
    "params,message",
    [
        ("(t)", "Truth atom can't be parameter 0"),
        ("(x ())", "Empty list can't be parameter 1"),
        ("(x y 3)", "Parameter 2 was not an atom"),
        ("(x (y))", "Parameter 1 was not an atom"),
        ("x", "Lambda parameters are not a list"),
    ],
)
def test_validate_parameters(params, message):
    with pytest.raises(EtaInvalidParameter) as ex:
        validate_parameters(parse_expression(params))
    assert ex.value.message == message
    assert ex.value.context == "lambda"


def test_validate_parameters_accepts_atoms():
    validate_parameters(parse_expression("(x y z)"))
    validate_parameters(parse_expression("()"))


def test_capture_skips_parameters_and_unbound():
    env = Environment()
    env.define("x", Integer(1))
    env.define("y", Integer(2))
    body = parse_expression("(+ x (f y unbound))")
    captured = capture_variables(parse_expression("(x)"), body, env.bindings)
    # Depth first, each new capture is prepended
    assert [b.car.name for b in _bindings(captured)] == ["y"]


def test_capture_is_a_deep_copy():
    env = Environment()
    env.define("y", parse_expression("(a b)"))
    captured = capture_variables(parse_expression("()"), Atom("y"), env.bindings)
    original = env.lookup_pair(Atom("y"))
    assert captured.car is not original
    assert captured.car.cdr.car is not original.cdr.car
    assert unparse(captured.car) == "(y (a b))"


def test_capture_each_name_once():
    env = Environment()
    env.define("y", Integer(2))
    captured = capture_variables(parse_expression("()"), parse_expression("(y y (y))"), env.bindings)
    assert len(list(_bindings(captured))) == 1


def test_make_closure(env, memory):
    env.define("n", Integer(10))
    closure = make_closure(parse_expression("((x) (+ x n))"), env, memory)
    assert isinstance(closure, Closure)
    assert closure.parameter_names() == ["x"]
    assert closure.nargs == 1
    assert captured_names(closure) == ["n", "+"]
    assert closure in memory


def test_make_closure_copies_parameters_and_body(env, memory):
    args = parse_expression("((x) (car x))")
    closure = make_closure(args, env, memory)
    assert closure.parameters is not args.car
    assert closure.body is not args.cdr.car


def test_make_closure_arity(env, memory):
    with pytest.raises(EtaArityError):
        make_closure(parse_expression("((x))"), env, memory)


def test_closure_copy_is_independent():
    closure = Closure(make_list([Atom("x")]), parse_expression("(car x)"))
    clone = closure.copy()
    closure.release()
    assert unparse(clone) == "<closure (x) (car x)>"
