"""Closure representation and free-variable capture for Eta."""

from __future__ import annotations

from typing import Optional

from eta.errors import EtaInvalidParameter
from eta.types.environment import Bindings, lookup_pair
from eta.types.values import Atom, Pair, Value, deep_copy, is_nil, is_truth, iter_list, list_length


class Closure(Value):
    """A procedure value: parameters, body and the bindings captured at creation.

    `parameters` is a Lisp list of atoms, `captured` an association list in the
    same shape as the environment. All three are owned by the closure.
    """

    __slots__ = ("_parameters", "_body", "_captured")

    def __init__(self, parameters: Optional[Value], body: Optional[Value], captured: Bindings = None):
        super().__init__()
        self._parameters = parameters
        self._body = body
        self._captured = captured

    @property
    def parameters(self) -> Optional[Value]:
        self._check()
        return self._parameters

    @property
    def body(self) -> Optional[Value]:
        self._check()
        return self._body

    @property
    def captured(self) -> Bindings:
        self._check()
        return self._captured

    @property
    def nargs(self) -> int:
        return list_length(self.parameters)

    def parameter_names(self) -> list[str]:
        return [p.name for p in iter_list(self.parameters)]

    def children(self) -> tuple[Optional[Value], ...]:
        self._check()
        return self._parameters, self._body, self._captured

    def release(self) -> None:
        self._parameters = None
        self._body = None
        self._captured = None
        super().release()

    def copy(self) -> Closure:
        return Closure(deep_copy(self.parameters), deep_copy(self.body), deep_copy(self.captured))

    def __repr__(self):
        if self._released:
            return "Closure(<released>)"
        return f"Closure({self.parameter_names()})"


def validate_parameters(parameters: Optional[Value]) -> None:
    """A parameter list must be a list of plain atoms (not t, not nil, not numbers)."""
    if not isinstance(parameters, Pair):
        raise EtaInvalidParameter("Lambda parameters are not a list", "lambda")
    for position, var in enumerate(iter_list(parameters)):
        if var is None:
            continue
        if is_truth(var):
            raise EtaInvalidParameter(f"Truth atom can't be parameter {position}", "lambda")
        if is_nil(var):
            raise EtaInvalidParameter(f"Empty list can't be parameter {position}", "lambda")
        if not isinstance(var, Atom):
            raise EtaInvalidParameter(f"Parameter {position} was not an atom", "lambda")


def capture_variables(parameters: Optional[Value], body: Optional[Value], env: Bindings) -> Bindings:
    """Copy the bindings of every free variable of `body` that `env` defines.

    Depth-first over the body (car before cdr). Parameters are never captured;
    they get bound at apply time. Each new capture is prepended.
    """
    names = {p.name for p in iter_list(parameters) if isinstance(p, Atom)}
    captured: Bindings = None
    stack: list[Optional[Value]] = [body]
    while stack:
        node = stack.pop()
        match node:
            case Pair():
                stack.append(node.cdr)
                stack.append(node.car)
            case Atom():
                if node.name in names or lookup_pair(node, captured) is not None:
                    continue
                binding = lookup_pair(node, env)
                if binding is None:
                    continue
                captured = Pair(deep_copy(binding), captured)
    return captured
