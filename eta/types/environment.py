"""Runtime environment for Eta.

The environment is an ordinary Lisp value: an association list whose
elements are two-element bindings ``(name value)``. Lookup is a linear scan
and the first match wins, so prepending a frame shadows older bindings and
`set` can rebind a name by overwriting its binding in place.

The module functions work on raw association lists (``None`` is the empty
list). `Environment` wraps the head reference so that prepending a frame is
visible to whoever holds the Environment object.
"""

from __future__ import annotations

from io import StringIO
from typing import Iterable, Iterator, Optional

from eta.errors import EtaArityError, EtaTypeError
from eta.types.values import Atom, Pair, Primitive, PrimitiveFn, Value, deep_copy, iter_list, list_length

Bindings = Optional[Pair]


def binding_name(binding: Pair) -> Atom:
    return binding.car


def binding_value(binding: Pair) -> Optional[Value]:
    return binding.cdr.car


def make_binding(name: Atom, value: Optional[Value]) -> Pair:
    """Build a ``(name value)`` binding from owned clones of both parts."""
    return Pair(deep_copy(name), Pair(deep_copy(value)))


def iter_bindings(env: Bindings) -> Iterator[Pair]:
    node = env
    while isinstance(node, Pair):
        if node.car is not None:
            yield node.car
        node = node.cdr


def lookup_pair(key: Atom, env: Bindings) -> Optional[Pair]:
    """Return the first binding for `key`, or None when it is unbound."""
    if not isinstance(key, Atom):
        return None
    name = key.name
    for binding in iter_bindings(env):
        if binding_name(binding).name == name:
            return binding
    return None


def lookup(key: Atom, env: Bindings) -> Optional[Value]:
    binding = lookup_pair(key, env)
    return binding_value(binding) if binding is not None else None


def make_frame(names: Optional[Value], values: Iterable[Optional[Value]]) -> Bindings:
    """Zip `names` 1:1 with `values` into a fresh frame of owned bindings."""
    names = list(iter_list(names))
    values = list(values)
    if len(names) != len(values):
        raise EtaArityError(f"Expected {len(names)} arguments, got {len(values)}", "bind")
    frame: Bindings = None
    for name, value in reversed(list(zip(names, values))):
        if not isinstance(name, Atom):
            raise EtaTypeError(f"Cannot bind non-atom {name!r}", "bind")
        frame = Pair(make_binding(name, value), frame)
    return frame


def join(front: Bindings, back: Bindings) -> Bindings:
    """Splice `back` onto the last cell of `front`.

    This mutates `front`, which must be exclusively owned by the caller.
    """
    if front is None:
        return back
    node = front
    while isinstance(node.cdr, Pair):
        node = node.cdr
    node.cdr = back
    return front


def bind(names: Optional[Value], values: Iterable[Optional[Value]], base_env: Bindings, memory=None) -> Bindings:
    """Prepend a frame binding `names` to `values` onto `base_env`.

    When a memory manager is given the frame is registered with it before it
    is joined, so that only the frame (never `base_env`) is tracked.
    """
    frame = make_frame(names, values)
    if memory is not None:
        memory.track_recursive(frame)
    return join(frame, base_env)


class Environment:
    """Holds the head of an association list of bindings."""

    __slots__ = ("bindings",)

    def __init__(self, bindings: Bindings = None):
        self.bindings: Bindings = bindings

    @classmethod
    def default(cls) -> Environment:
        """Environment holding the primitive and math libraries."""
        from eta.builtin.env_builtin import register
        env = cls()
        register(env)
        return env

    def define(self, name: str | Atom, value: Value) -> None:
        """Prepend a new binding for `name`, shadowing any older one."""
        if isinstance(name, str):
            name = Atom(name)
        self.bindings = Pair(make_binding(name, value), self.bindings)

    def define_primitive(self, name: str, fn: PrimitiveFn) -> None:
        self.define(name, Primitive(fn, name))

    def lookup(self, key: Atom) -> Optional[Value]:
        return lookup(key, self.bindings)

    def lookup_pair(self, key: Atom) -> Optional[Pair]:
        return lookup_pair(key, self.bindings)

    def names(self) -> list[str]:
        return [binding_name(b).name for b in iter_bindings(self.bindings)]

    def __len__(self) -> int:
        return list_length(self.bindings)

    def __str__(self) -> str:
        from eta.reader.printer import unparse
        with StringIO() as buffer:
            buffer.write("{")
            first = True
            for b in iter_bindings(self.bindings):
                if not first:
                    buffer.write(", ")
                buffer.write(f"{binding_name(b).name}: {unparse(binding_value(b))}")
                first = False
            buffer.write("}")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"<Environment {len(self)} bindings>"
