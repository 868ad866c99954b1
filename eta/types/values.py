"""Tagged value model for Eta.

Every Lisp datum is one node of a tree: Atom, Pair, Primitive, Closure,
Integer or Float. "Absent" is Python ``None``; nil is a Pair whose car and
cdr are both absent, and a proper list is a chain of Pairs whose last cdr is
absent (or nil).

Nodes are never shared between storage locations with independent lifetimes.
Anything that must outlive the current evaluation is deep-copied first, which
is what lets the memory manager release a whole evaluation's allocations in
bulk. A released node keeps no fields; reading one raises
DanglingReferenceError.
"""

from __future__ import annotations

import struct
import sys
import math
from typing import Callable, Iterable, Iterator, Optional

from eta.errors import DanglingReferenceError

TRUTH = "t"

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
_INT32_SPAN = 2**32


def wrap_int32(value: int) -> int:
    """Two's complement wrap-around into the signed 32-bit range."""
    return (value - INT32_MIN) % _INT32_SPAN + INT32_MIN


def to_float32(value: float) -> float:
    """Round a Python float to the nearest IEEE-754 binary32 value."""
    if math.isnan(value) or math.isinf(value):
        return value
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


class Value:
    """Base class of every node in a value tree."""

    __slots__ = ("_released",)

    def __init__(self):
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    def _check(self) -> None:
        if self._released:
            raise DanglingReferenceError(f"Read of released {type(self).__name__} node")

    def release(self) -> None:
        """Shallow structural free: drop this node's own fields only."""
        self._released = True

    def children(self) -> tuple[Optional[Value], ...]:
        return ()

    def copy(self) -> Value:
        raise NotImplementedError


class Atom(Value):
    __slots__ = ("_name",)

    def __init__(self, name: str):
        super().__init__()
        # Intern so that name comparison is cheap
        self._name = sys.intern(name)

    @property
    def name(self) -> str:
        self._check()
        return self._name

    def release(self) -> None:
        self._name = None
        super().release()

    def copy(self) -> Atom:
        return Atom(self.name)

    def __repr__(self):
        return f"Atom({self._name!r})"


class Pair(Value):
    __slots__ = ("_car", "_cdr")

    def __init__(self, car: Optional[Value] = None, cdr: Optional[Value] = None):
        super().__init__()
        self._car = car
        self._cdr = cdr

    @classmethod
    def nil(cls) -> Pair:
        return cls(None, None)

    @property
    def car(self) -> Optional[Value]:
        self._check()
        return self._car

    @car.setter
    def car(self, value: Optional[Value]) -> None:
        self._check()
        self._car = value

    @property
    def cdr(self) -> Optional[Value]:
        self._check()
        return self._cdr

    @cdr.setter
    def cdr(self, value: Optional[Value]) -> None:
        self._check()
        self._cdr = value

    def release(self) -> None:
        self._car = None
        self._cdr = None
        super().release()

    def children(self) -> tuple[Optional[Value], ...]:
        self._check()
        return self._car, self._cdr

    def copy(self) -> Pair:
        # Walk the cdr spine iteratively so long lists do not exhaust the stack
        head = Pair(deep_copy(self.car))
        tail, node = head, self.cdr
        while isinstance(node, Pair):
            nxt = Pair(deep_copy(node.car))
            tail.cdr = nxt
            tail, node = nxt, node.cdr
        tail.cdr = deep_copy(node)
        return head

    def __repr__(self):
        if self._released:
            return "Pair(<released>)"
        return f"Pair({self._car!r}, {self._cdr!r})"


PrimitiveFn = Callable[..., Optional[Value]]


class Primitive(Value):
    """A built-in operation. Copies share the function, so they compare equal."""

    __slots__ = ("_fn", "_name")

    def __init__(self, fn: PrimitiveFn, name: str | None = None):
        super().__init__()
        self._fn = fn
        self._name = name or getattr(fn, "__name__", "primitive")

    @property
    def fn(self) -> PrimitiveFn:
        self._check()
        return self._fn

    @property
    def name(self) -> str:
        self._check()
        return self._name

    def release(self) -> None:
        self._fn = None
        super().release()

    def copy(self) -> Primitive:
        return Primitive(self.fn, self.name)

    def __repr__(self):
        return f"Primitive({self._name!r})"


class Integer(Value):
    __slots__ = ("_value",)

    def __init__(self, value: int):
        super().__init__()
        self._value = wrap_int32(int(value))

    @property
    def value(self) -> int:
        self._check()
        return self._value

    def copy(self) -> Integer:
        return Integer(self.value)

    def __repr__(self):
        return f"Integer({self._value})"


class Float(Value):
    __slots__ = ("_value",)

    def __init__(self, value: float):
        super().__init__()
        self._value = to_float32(float(value))

    @property
    def value(self) -> float:
        self._check()
        return self._value

    def copy(self) -> Float:
        return Float(self.value)

    def __repr__(self):
        return f"Float({self._value})"


# -------------------------------
# Copying
# -------------------------------
def deep_copy(value: Optional[Value]) -> Optional[Value]:
    """Clone a whole value tree into fresh, independently owned nodes."""
    if value is None:
        return None
    return value.copy()


# -------------------------------
# Predicates
# -------------------------------
def is_nil(value: Optional[Value]) -> bool:
    return isinstance(value, Pair) and value.car is None and value.cdr is None


def is_truth(value: Optional[Value]) -> bool:
    return isinstance(value, Atom) and value.name == TRUTH


def is_number(value: Optional[Value]) -> bool:
    return isinstance(value, (Integer, Float))


def is_list(value: Optional[Value]) -> bool:
    return isinstance(value, Pair)


# -------------------------------
# Lists
# -------------------------------
def iter_list(lst: Optional[Value]) -> Iterator[Optional[Value]]:
    """Yield the elements of a proper list; nil and absent are both empty."""
    node = lst
    while isinstance(node, Pair) and not is_nil(node):
        yield node.car
        node = node.cdr


def list_length(lst: Optional[Value]) -> int:
    return sum(1 for _ in iter_list(lst))


def nth(lst: Optional[Value], index: int) -> Optional[Value]:
    for i, item in enumerate(iter_list(lst)):
        if i == index:
            return item
    return None


def make_list(items: Iterable[Optional[Value]], tail: Optional[Value] = None) -> Optional[Value]:
    """Chain `items` into Pairs ending in `tail`. An empty iterable gives `tail`."""
    items = list(items)
    result = tail
    for item in reversed(items):
        result = Pair(item, result)
    return result


# -------------------------------
# Comparison
# -------------------------------
def compare(a: Optional[Value], b: Optional[Value]) -> bool:
    """Shallow equality used by `eq`.

    Numbers compare by value (mixed int/float through float coercion), atoms by
    name, primitives by function identity and pairs by the identity of their car
    and cdr references. Closures are never equal.
    """
    if a is None or b is None:
        return a is b
    if is_number(a) and is_number(b):
        if isinstance(a, Integer) and isinstance(b, Integer):
            return a.value == b.value
        return to_float32(a.value) == to_float32(b.value)
    if type(a) is not type(b):
        return False
    match a:
        case Atom():
            return a.name == b.name
        case Pair():
            return a.car is b.car and a.cdr is b.cdr
        case Primitive():
            return a.fn is b.fn
    return False
