"""Slots: observable single-value cells.

Every Slot answers ``get()``, ``set(value)``, ``is_defined()``, ``clear()``
and ``subscribe(listener)``. Two kinds ship with the runtime:

- ``PropertySlot`` wraps one property of one object. ``obj.slot("x")`` (or
  ``obj.x_slot``) returns the same PropertySlot every time.
- ``SimpleSlot`` is a free-standing cell holding its own ``value``.

The binding methods on ``Slot`` keep two slots in step. They all return a
handle whose ``destroy()`` cancels the binding.
"""

from __future__ import annotations

from axiomatic.bus.topic_tree import SubscriptionGroup
from axiomatic.core import types
from axiomatic.core.errors import DivergentRelation

SLOT_ID = "axiomatic.core.Slot"


def _require_slot(slot, other, method):
    if not slot.cls_.context.lookup(SLOT_ID).is_instance(other):
        raise TypeError(f"Slot.{method}: argument is not a Slot: {other!r}")


def _require_callable(f, method, position):
    if not callable(f):
        raise TypeError(f"Slot.{method}: {position} argument is not a function")


# ---------------------------------------------------------------------------
# Slot
# ---------------------------------------------------------------------------

def link_from(self, other):
    """Link two slots together, first setting this one to *other*'s value.

    After copying a value across, the other side is checked once more and
    copied back if the target rejected or adapted the value.
    """
    _require_slot(self, other, "link_from")

    s1, s2 = self, other
    feedback1 = False
    feedback2 = False

    def l1(*_):
        nonlocal feedback1
        if feedback1 or types.equals(s1.get(), s2.get()):
            return
        feedback1 = True
        try:
            s2.set(s1.get())
            if not types.equals(s1.get(), s2.get()):
                s1.set(s2.get())
        finally:
            feedback1 = False

    def l2(*_):
        nonlocal feedback2
        if feedback2 or types.equals(s1.get(), s2.get()):
            return
        feedback2 = True
        try:
            s1.set(s2.get())
            if not types.equals(s1.get(), s2.get()):
                s2.set(s1.get())
        finally:
            feedback2 = False

    group = SubscriptionGroup(s1.subscribe(l1), s2.subscribe(l2))
    l2()
    return group


def link_to(self, other):
    """See ``link_from``; the arguments are reversed."""
    return other.link_from(self)


def follow(self, other):
    """Have this slot track *other*'s value from now on."""
    _require_slot(self, other, "follow")

    def l(*_):
        if not types.equals(self.get(), other.get()):
            self.set(other.get())

    l()
    return other.subscribe(l)


def map_from(self, other, f):
    """Keep this slot equal to ``f(other.get())``."""
    _require_slot(self, other, "map_from")
    _require_callable(f, "map_from", "second")

    def l(*_):
        self.set(f(other.get()))

    l()
    return other.subscribe(l)


def map_to(self, other, f):
    return other.map_from(self, f)


def relate_to(self, other, f, f_prime, expect_unstable=False):
    """Relate this slot to *other* in both directions.

    *f* maps this slot's value to *other*'s and *f_prime* maps back. Unless
    *expect_unstable* is set, a pair that never settles (``f_prime(f(x))``
    drifting away from ``x``) raises ``DivergentRelation``.
    """
    _require_slot(self, other, "relate_to")
    _require_callable(f, "relate_to", "second")
    _require_callable(f_prime, "relate_to", "third")

    from axiomatic.kernel.boot import current_settings

    limit = current_settings().bindings.divergence_limit
    feedback = False
    counter = 0

    def l1(*_):
        nonlocal feedback, counter
        if feedback:
            return
        if not expect_unstable and counter > limit:
            raise DivergentRelation(counter)
        feedback = expect_unstable
        counter += 1
        try:
            other.set(f(self.get()))
        finally:
            feedback = False
            counter -= 1

    def l2(*_):
        nonlocal feedback, counter
        if feedback:
            return
        feedback = expect_unstable
        counter += 1
        try:
            self.set(f_prime(other.get()))
        finally:
            feedback = False
            counter -= 1

    group = SubscriptionGroup(self.subscribe(l1), other.subscribe(l2))
    l1()
    return group


def relate_from(self, other, f, f_prime):
    return other.relate_to(self, f_prime, f)


# ---------------------------------------------------------------------------
# PropertySlot
# ---------------------------------------------------------------------------

def _property_get(self):
    return self.prop.get(self.obj)


def _property_set(self, value):
    self.prop.set(self.obj, value)


def _property_subscribe(self, listener):
    s = self.obj.sub("propertyChange", self.prop.name, listener)
    s.src = self
    return s


def _property_is_defined(self):
    return self.obj.has_own_property(self.prop.name)


def _property_clear(self):
    self.obj.clear_property(self.prop.name)


def _property_str(self):
    return f"PropertySlot({self.obj.cls_.id}.{self.prop.name})"


# ---------------------------------------------------------------------------
# SimpleSlot
# ---------------------------------------------------------------------------

def _simple_get(self):
    return self.value


def _simple_set(self, value):
    self.value = value


def _simple_subscribe(self, listener):
    s = self.sub("propertyChange", "value", listener)
    s.src = self
    return s


def _simple_is_defined(self):
    return self.has_own_property("value")


def _simple_clear(self):
    self.clear_property("value")


SLOT_MODELS = (
    {
        "package": "axiomatic.core",
        "name": "Slot",
        "documentation": "An observable value that can change over time.",
        "methods": [
            link_from,
            link_to,
            follow,
            map_from,
            map_to,
            relate_to,
            relate_from,
        ],
    },
    {
        "package": "axiomatic.core.internal",
        "name": "PropertySlot",
        "extends": SLOT_ID,
        "documentation": "One property of one object, seen as a Slot.",
        "properties": ["obj", "prop"],
        "methods": [
            {"name": "get", "code": _property_get},
            {"name": "set", "code": _property_set},
            {"name": "subscribe", "code": _property_subscribe},
            {"name": "is_defined", "code": _property_is_defined},
            {"name": "clear", "code": _property_clear},
            {"name": "__str__", "code": _property_str},
        ],
    },
    {
        "package": "axiomatic.core",
        "name": "SimpleSlot",
        "extends": SLOT_ID,
        "documentation": "A free-standing Slot holding its own value.",
        "properties": ["value"],
        "methods": [
            {"name": "get", "code": _simple_get},
            {"name": "set", "code": _simple_set},
            {"name": "subscribe", "code": _simple_subscribe},
            {"name": "is_defined", "code": _simple_is_defined},
            {"name": "clear", "code": _simple_clear},
        ],
    },
)
