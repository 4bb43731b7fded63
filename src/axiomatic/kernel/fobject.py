"""FObject: the root of every modeled class.

Provides argument binding, the private store, pub/sub, property slots,
cloning and identity. The functions below are copied onto the FObject
prototype during bootstrap; ``raw_init_args`` is the phase-one stand-in for
``init_args`` used before Property axioms exist.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from axiomatic.bus.topic_tree import TopicTree
from axiomatic.core import types
from axiomatic.core.errors import UnknownAxiom

PROPERTY_SLOT_ID = "axiomatic.core.internal.PropertySlot"


def raw_init_args(self, args=None):
    """Bootstrap version: every key becomes a plain attribute."""
    if args is None:
        return
    items = args.items() if isinstance(args, Mapping) else vars(args).items()
    for key, value in items:
        if not key.startswith("_"):
            setattr(self, key, value)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

def init_args(self, args=None):
    """Apply *args* to this object's properties, in declaration order.

    *args* is a mapping of property name to value, or another modeled
    object whose explicitly set properties are copied. An unknown key
    raises ``UnknownAxiom``.
    """
    if args is None:
        return

    props = self.cls_.get_axioms_by_class(self.cls_.context.lookup("Property"))

    if types.FOBJECT.is_instance(args):
        for p in props:
            if args.has_own_property(p.name):
                setattr(self, p.name, getattr(args, p.name))
        return

    known = {p.name for p in props}
    for key in args:
        if key not in known:
            raise UnknownAxiom(self.cls_.id, key)

    for p in props:
        if p.name in args:
            setattr(self, p.name, args[p.name])


def has_own_property(self, name):
    """True if *name* was explicitly set rather than defaulted."""
    return name in self.__dict__


def clear_property(self, name):
    """Reset a property to its default (or factory) value."""
    axiom = self.cls_.get_axiom_by_name(name)
    if axiom is None or not self.cls_.context.lookup("Property").is_instance(axiom):
        raise UnknownAxiom(self.cls_.id, name)
    getattr(type(self), name).clear(self)


# ---------------------------------------------------------------------------
# Private store
# ---------------------------------------------------------------------------

def get_private(self, name):
    return self.__dict__["_private"].get(name)


def set_private(self, name, value):
    self.__dict__["_private"][name] = value
    return value


def has_own_private(self, name):
    return name in self.__dict__["_private"]


def clear_private(self, name):
    self.__dict__["_private"].pop(name, None)


def _listeners(self, create):
    tree = self.get_private("listeners")
    if tree is None and create:
        tree = self.set_private("listeners", TopicTree())
    return tree


# ---------------------------------------------------------------------------
# Pub/sub
# ---------------------------------------------------------------------------

def pub(self, *args):
    """Publish *args* as a topic; return the number of listeners notified."""
    tree = _listeners(self, create=False)
    return tree.publish(*args) if tree is not None else 0


def sub(self, *args):
    """Subscribe ``args[-1]`` to the topic ``args[:-1]``.

    With no topic the listener receives every publish. The listener is
    called as ``listener(subscription, *published_args)``.
    """
    if not args:
        raise TypeError("sub() requires a listener")
    *topic, listener = args
    return _listeners(self, create=True).subscribe(tuple(topic), listener)


def unsub(self, *args):
    """Remove the first subscription of ``args[-1]`` to ``args[:-1]``."""
    if not args:
        raise TypeError("unsub() requires a listener")
    *topic, listener = args
    tree = _listeners(self, create=False)
    return tree.unsubscribe(tuple(topic), listener) if tree is not None else False


def has_listeners(self, *topic):
    tree = _listeners(self, create=False)
    return tree is not None and tree.has_listeners(topic)


def pub_property_change(self, prop, old_value, new_value):
    # Skip building the slot when nobody would hear about it.
    if not self.has_listeners("propertyChange", prop.name):
        return 0
    return self.pub("propertyChange", prop.name, self.slot(prop.name), old_value)


# ---------------------------------------------------------------------------
# Slots
# ---------------------------------------------------------------------------

def slot(self, name):
    """The (cached) PropertySlot for property *name*."""
    slots = self.get_private("slots")
    if slots is None:
        slots = self.set_private("slots", {})

    s = slots.get(name)
    if s is None:
        axiom = self.cls_.get_axiom_by_name(name)
        if axiom is None:
            raise UnknownAxiom(self.cls_.id, name)
        slot_cls = self.cls_.context.lookup(PROPERTY_SLOT_ID)
        s = slots[name] = slot_cls.create({"obj": self, "prop": axiom})
    return s


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------

def clone(self):
    """New instance with every explicitly set property deep-cloned."""
    values = {
        p.name: types.clone(getattr(self, p.name))
        for p in self.cls_.get_axioms_by_class(self.cls_.context.lookup("Property"))
        if self.has_own_property(p.name)
    }
    return self.cls_.create(values, self.get_private("context"))


def equals(self, other):
    return self is other


def compare_to(self, other):
    if self is other:
        return 0
    if not types.FOBJECT.is_instance(other):
        return 1
    a, b = self.get_private("uid"), other.get_private("uid")
    return (a > b) - (a < b)


def hash_code(self):
    return types.NUMBER.hash_code(self.get_private("uid"))


def __str__(self):
    return self.cls_.name


def __repr__(self):
    return f"<{self.cls_.id} #{self.get_private('uid')}>"


def _context(self):
    return self.get_private("context")


FOBJECT_MODEL = {
    "package": "axiomatic.core",
    "name": "FObject",
    "extends": None,
    "documentation": "Root of every modeled class.",
    "methods": [
        init_args,
        has_own_property,
        clear_property,
        get_private,
        set_private,
        has_own_private,
        clear_private,
        pub,
        sub,
        unsub,
        has_listeners,
        pub_property_change,
        slot,
        clone,
        equals,
        compare_to,
        hash_code,
        __str__,
        __repr__,
        {"name": "context", "code": property(_context)},
    ],
}
