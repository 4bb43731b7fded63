"""Flyweight type dispatch for plain values.

Rather than special-casing built-in types all over the runtime, each value
category gets one flyweight object implementing the same small interface::

    is_instance(o) -> bool     # does o belong to this category?
    clone(o)                   # deep copy where the category supports it
    equals(a, b) -> bool
    compare(a, b) -> int       # -1, 0 or 1
    hash_code(a) -> int        # 32-bit signed hash

``type_of(value)`` picks the flyweight for any value, including ``None``.
The module-level ``clone``/``equals``/``compare``/``hash_code`` helpers
dispatch on their first argument. Modeled objects (anything whose type
carries a ``cls_``) delegate to their own methods.
"""

from __future__ import annotations

import datetime as _dt
from decimal import Decimal
from typing import Any

from .context import Context


_INF = float("inf")


def _int32(n: int) -> int:
    n &= 0xFFFFFFFF
    return n - 0x100000000 if n & 0x80000000 else n


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


class NullType:
    def is_instance(self, o: Any) -> bool:
        return o is None

    def clone(self, o: Any) -> Any:
        return o

    def equals(self, a: Any, b: Any) -> bool:
        return b is None

    def compare(self, a: Any, b: Any) -> int:
        return 0 if b is None else -1

    def hash_code(self, o: Any) -> int:
        return -2


class BooleanType:
    def is_instance(self, o: Any) -> bool:
        return isinstance(o, bool)

    def clone(self, o: Any) -> Any:
        return o

    def equals(self, a: Any, b: Any) -> bool:
        return a is b

    def compare(self, a: Any, b: Any) -> int:
        if a:
            return 0 if b else 1
        return -1 if b else 0

    def hash_code(self, o: Any) -> int:
        return 1 if o else 0


class NumberType:
    def is_instance(self, o: Any) -> bool:
        return isinstance(o, (int, float, Decimal)) and not isinstance(o, bool)

    def clone(self, o: Any) -> Any:
        return o

    def equals(self, a: Any, b: Any) -> bool:
        return self.is_instance(b) and a == b

    def compare(self, a: Any, b: Any) -> int:
        if b is None:
            return 1
        return _cmp(a, b)

    def hash_code(self, o: Any) -> int:
        if isinstance(o, int):
            return _int32(o)
        if o != o:
            # NaN
            return 0
        if o in (_INF, -_INF):
            return _int32(hash(float(o)))
        return _int32(int(o))


class StringType:
    def is_instance(self, o: Any) -> bool:
        return isinstance(o, str)

    def clone(self, o: Any) -> Any:
        return o

    def equals(self, a: Any, b: Any) -> bool:
        return a == b

    def compare(self, a: Any, b: Any) -> int:
        if b is None:
            return 1
        return _cmp(a, str(b))

    def hash_code(self, s: str) -> int:
        h = 0
        for ch in s:
            h = _int32(31 * h + ord(ch))
        return h


class FunctionType:
    def is_instance(self, o: Any) -> bool:
        return callable(o) and not isinstance(o, type)

    def clone(self, o: Any) -> Any:
        return o

    def equals(self, a: Any, b: Any) -> bool:
        if a is b:
            return True
        code_a = getattr(a, "__code__", None)
        return code_a is not None and code_a == getattr(b, "__code__", None)

    def compare(self, a: Any, b: Any) -> int:
        if b is None:
            return 1
        return STRING.compare(_qualname(a), _qualname(b))

    def hash_code(self, o: Any) -> int:
        return STRING.hash_code(_qualname(o))


def _qualname(f: Any) -> str:
    return getattr(f, "__qualname__", None) or repr(f)


class ArrayType:
    """Lists and tuples. Clones keep the concrete sequence type."""

    def is_instance(self, o: Any) -> bool:
        return isinstance(o, (list, tuple))

    def clone(self, o: Any) -> Any:
        items = [clone(item) for item in o]
        kind = type(o)
        if hasattr(kind, "_make"):
            # namedtuples take their fields positionally
            return kind._make(items)
        try:
            return kind(items)
        except TypeError:
            return tuple(items) if isinstance(o, tuple) else items

    def equals(self, a: Any, b: Any) -> bool:
        if not isinstance(b, (list, tuple)) or len(a) != len(b):
            return False
        return all(equals(x, y) for x, y in zip(a, b))

    def compare(self, a: Any, b: Any) -> int:
        if not isinstance(b, (list, tuple)):
            return 1
        for x, y in zip(a, b):
            c = compare(x, y)
            if c:
                return c
        return _cmp(len(a), len(b))

    def hash_code(self, a: Any) -> int:
        h = 0
        for item in a:
            h = _int32(31 * h + hash_code(item))
        return h


class MapType:
    """Dicts, cloned and compared by value."""

    def is_instance(self, o: Any) -> bool:
        return isinstance(o, dict)

    def clone(self, o: Any) -> Any:
        return {key: clone(value) for key, value in o.items()}

    def equals(self, a: Any, b: Any) -> bool:
        if not isinstance(b, dict) or a.keys() != b.keys():
            return False
        return all(equals(value, b[key]) for key, value in a.items())

    def compare(self, a: Any, b: Any) -> int:
        if not isinstance(b, dict):
            return 1
        return ARRAY.compare(sorted(a.items(), key=repr), sorted(b.items(), key=repr))

    def hash_code(self, o: Any) -> int:
        h = 0
        for key, value in o.items():
            h = _int32(h + (hash_code(key) ^ hash_code(value)))
        return h


class DateType:
    """``datetime``, ``date`` and ``time`` values."""

    def is_instance(self, o: Any) -> bool:
        return isinstance(o, (_dt.datetime, _dt.date, _dt.time))

    def clone(self, o: Any) -> Any:
        # Dates are immutable; replace() still hands back a distinct object.
        return o.replace()

    def equals(self, a: Any, b: Any) -> bool:
        return type(a) is type(b) and a == b

    def compare(self, a: Any, b: Any) -> int:
        if b is None:
            return 1
        return _cmp(a, b)

    def hash_code(self, o: Any) -> int:
        return _int32(hash(o))


class ContextType:
    def is_instance(self, o: Any) -> bool:
        return isinstance(o, Context)

    def clone(self, o: Any) -> Any:
        return o

    def equals(self, a: Any, b: Any) -> bool:
        return a is b

    def compare(self, a: Any, b: Any) -> int:
        if not isinstance(b, Context):
            return 1
        return _cmp(a.uid, b.uid)

    def hash_code(self, o: Any) -> int:
        return _int32(o.uid)


class FObjectType:
    """Modeled objects answer for themselves."""

    def is_instance(self, o: Any) -> bool:
        return getattr(type(o), "cls_", None) is not None

    def clone(self, o: Any) -> Any:
        return o.clone()

    def equals(self, a: Any, b: Any) -> bool:
        return a.equals(b)

    def compare(self, a: Any, b: Any) -> int:
        return a.compare_to(b)

    def hash_code(self, o: Any) -> int:
        return o.hash_code()


class ObjectType:
    """Anything else: shared on clone, compared with the object's own ``==``."""

    def is_instance(self, o: Any) -> bool:
        return o is not None

    def clone(self, o: Any) -> Any:
        return o

    def equals(self, a: Any, b: Any) -> bool:
        return a is b or bool(a == b)

    def compare(self, a: Any, b: Any) -> int:
        if b is None:
            return 1
        return _cmp(id(a), id(b))

    def hash_code(self, o: Any) -> int:
        try:
            return _int32(hash(o))
        except TypeError:
            return 0


NULL = NullType()
BOOLEAN = BooleanType()
NUMBER = NumberType()
STRING = StringType()
FUNCTION = FunctionType()
ARRAY = ArrayType()
MAP = MapType()
DATE = DateType()
CONTEXT = ContextType()
FOBJECT = FObjectType()
OBJECT = ObjectType()

# Order matters: bool before number, modeled objects before callables.
_DISPATCH_ORDER = (NULL, BOOLEAN, NUMBER, STRING, ARRAY, MAP, DATE, CONTEXT, FOBJECT, FUNCTION)


def type_of(o: Any) -> Any:
    """Return the flyweight type object for *o*."""
    for t in _DISPATCH_ORDER:
        if t.is_instance(o):
            return t
    return OBJECT


def clone(o: Any) -> Any:
    return type_of(o).clone(o)


def equals(a: Any, b: Any) -> bool:
    return type_of(a).equals(a, b)


def compare(a: Any, b: Any) -> int:
    return type_of(a).compare(a, b)


def hash_code(o: Any) -> int:
    return type_of(o).hash_code(o)


def coerce_text(o: Any) -> str:
    """Convert a topic segment to the text used for matching."""
    if isinstance(o, str):
        return o
    if o is None:
        return ""
    return str(o)
