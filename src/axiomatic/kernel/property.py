"""The Property axiom.

A Property adds a named, observable value to a class:

- ``install_in_class`` publishes the Property itself as a class constant
  (``first_name`` becomes ``Person.FIRST_NAME``);
- ``install_in_proto`` puts a data descriptor on the prototype, plus a
  read-only ``<name>_slot`` accessor.

Values are stored in the instance's own ``__dict__`` under the property
name. Phase-one classes keep their values in exactly the same place as
plain attributes, so upgrading a field to a Property never moves data.
"""

from __future__ import annotations

import re
from typing import Any

from axiomatic.core import types

# Matches a lower-case letter followed by anything that starts a new word.
_WORD_BOUNDARY = re.compile(r"([a-z])([^0-9a-z_])")


def constantize(name: str) -> str:
    """``firstName`` / ``first_name`` -> ``FIRST_NAME``."""
    return _WORD_BOUNDARY.sub(r"\1_\2", name).upper()


def _private(obj: Any) -> dict[str, Any]:
    return obj.__dict__.setdefault("_private", {})


class PropertyDescriptor:
    """Prototype-level accessor installed by a Property axiom.

    The Property's options are captured when the descriptor is built. The
    Property class's own fields are themselves PropertyDescriptors, so
    reading them on every access would recurse.
    """

    def __init__(self, prop: Any) -> None:
        self.prop = prop
        self.name: str = prop.name
        self.default = prop.value
        self.factory = prop.factory
        self.adapt = prop.adapt
        self.pre_set = prop.pre_set
        self.post_set = prop.post_set
        self.__doc__ = prop.documentation

    def __get__(self, obj: Any, owner: type | None = None) -> Any:
        if obj is None:
            return self

        values = obj.__dict__
        if self.name in values:
            return values[self.name]

        if self.factory is not None:
            cache = _private(obj).setdefault("factory_values", {})
            if self.name not in cache:
                cache[self.name] = self.factory(obj)
            return cache[self.name]

        return self.default

    def __set__(self, obj: Any, value: Any) -> None:
        old = self.peek(obj)
        # An unread factory value is unknown, so any set counts as a change.
        unknown = self.factory is not None and not self._materialized(obj)

        if self.adapt is not None:
            value = self.adapt(obj, old, value)
        if self.pre_set is not None:
            value = self.pre_set(obj, old, value)

        obj.__dict__[self.name] = value
        _private(obj).get("factory_values", {}).pop(self.name, None)

        if self.post_set is not None:
            self.post_set(obj, old, value)

        if unknown or not types.equals(old, value):
            obj.pub_property_change(self.prop, old, value)

    def __delete__(self, obj: Any) -> None:
        obj.clear_property(self.name)

    def peek(self, obj: Any) -> Any:
        """Current value without running a factory."""
        values = obj.__dict__
        if self.name in values:
            return values[self.name]
        cache = _private(obj).get("factory_values", {})
        if self.name in cache:
            return cache[self.name]
        return None if self.factory is not None else self.default

    def clear(self, obj: Any) -> None:
        """Reset to the default or factory; publish if anything may have changed."""
        old = self.peek(obj)

        obj.__dict__.pop(self.name, None)
        _private(obj).get("factory_values", {}).pop(self.name, None)

        if self.factory is not None:
            # The factory reruns lazily on the next read.
            obj.pub_property_change(self.prop, old, None)
        elif not types.equals(old, self.default):
            obj.pub_property_change(self.prop, old, self.default)

    def _materialized(self, obj: Any) -> bool:
        return self.name in obj.__dict__ or self.name in _private(obj).get("factory_values", {})


class SlotAccessor:
    """Read-only ``<name>_slot`` attribute."""

    def __init__(self, name: str) -> None:
        self.name = name

    def __get__(self, obj: Any, owner: type | None = None) -> Any:
        if obj is None:
            return self
        return obj.slot(self.name)

    def __set__(self, obj: Any, value: Any) -> None:
        raise AttributeError(f"{self.name}_slot is read-only")


# ---------------------------------------------------------------------------
# Methods copied onto the Property prototype
# ---------------------------------------------------------------------------

def install_in_class(self, cls):
    setattr(cls, constantize(self.name), self)


def install_in_proto(self, proto):
    setattr(proto, self.name, PropertyDescriptor(self))
    setattr(proto, f"{self.name}_slot", SlotAccessor(self.name))


def get(self, obj):
    """Value of this property on *obj*."""
    return getattr(obj, self.name)


def set_(self, obj, value):
    setattr(obj, self.name, value)


def clear(self, obj):
    obj.clear_property(self.name)


def to_slot(self, obj):
    return obj.slot(self.name)


def __str__(self):
    return f"Property({self.name})"


PROPERTY_MODEL = {
    "package": "axiomatic.core",
    "name": "Property",
    "extends": "axiomatic.core.FObject",
    "documentation": "Named, observable value installed on a class.",
    "properties": [
        "name",
        "value",
        "factory",
        "adapt",
        "pre_set",
        "post_set",
        "documentation",
    ],
    "methods": [
        install_in_class,
        install_in_proto,
        get,
        {"name": "set", "code": set_},
        clear,
        to_slot,
        __str__,
    ],
}
