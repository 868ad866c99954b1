import pytest

from eta.errors import EtaArityError
from eta.reader.parser import parse_expression
from eta.types.environment import (
    Environment, bind, binding_value, join, lookup, lookup_pair, make_binding, make_frame,
)
from eta.types.values import Atom, Integer, Pair, Primitive, iter_list, make_list


def atoms(*names):
    return make_list(Atom(n) for n in names)


def test_lookup_first_binding_wins():
    env = Environment()
    env.define("x", Integer(1))
    env.define("x", Integer(2))
    assert env.lookup(Atom("x")).value == 2
    assert env.names() == ["x", "x"]


def test_lookup_unbound():
    env = Environment()
    assert env.lookup(Atom("missing")) is None
    assert env.lookup_pair(Atom("missing")) is None


def test_lookup_pair_returns_binding_for_in_place_update():
    env = Environment()
    env.define("x", Integer(1))
    binding = env.lookup_pair(Atom("x"))
    binding.cdr.car = Integer(5)
    assert env.lookup(Atom("x")).value == 5


def test_make_binding_copies():
    name, value = Atom("x"), make_list([Integer(1)])
    binding = make_binding(name, value)
    assert binding.car is not name
    assert binding_value(binding) is not value
    assert binding_value(binding).car.value == 1


def test_make_frame_length_mismatch():
    with pytest.raises(EtaArityError):
        make_frame(atoms("a", "b"), [Integer(1)])


def test_bind_prepends_frame():
    base = make_frame(atoms("z"), [Integer(26)])
    env = bind(atoms("a", "b"), [Integer(1), Integer(2)], base)
    assert [b.car.name for b in iter_list(env)] == ["a", "b", "z"]
    assert lookup(Atom("b"), env).value == 2
    assert lookup(Atom("z"), env).value == 26


def test_bind_tracks_frame_only(memory):
    base = make_frame(atoms("z"), [Integer(26)])
    bind(atoms("a"), [Integer(1)], base, memory)
    memory.release_all()
    # The base chain is still intact
    assert lookup(Atom("z"), base).value == 26


def test_join():
    front = make_frame(atoms("a"), [Integer(1)])
    back = make_frame(atoms("b"), [Integer(2)])
    joined = join(front, back)
    assert joined is front
    assert lookup_pair(Atom("b"), joined) is back.car
    assert join(None, back) is back


def test_default_environment_holds_libraries():
    env = Environment.default()
    names = env.names()
    for name in ["quote", "atom", "eq", "car", "cdr", "cons", "cond", "set", "env", "lambda", "defmacro"]:
        assert name in names
    for name in ["+", "-", "*", "/", "%", "=", ">", ">=", "<", "<="]:
        assert name in names
    # The math library is installed last, so it comes first
    assert names[0] == "<="
    assert isinstance(env.lookup(Atom("car")), Primitive)
    assert len(env) == 21


def test_environment_str():
    env = Environment()
    env.define("x", parse_expression("(1 2)"))
    env.define("y", Integer(3))
    assert str(env) == "{y: 3, x: (1 2)}"
    assert repr(env) == "<Environment 2 bindings>"


def test_environment_is_a_lisp_value():
    env = Environment()
    env.define("x", Integer(3))
    assert isinstance(env.bindings, Pair)
    assert env.bindings.car.car.name == "x"
