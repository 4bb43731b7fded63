"""Short-form property and method declarations.

Properties may be declared three ways::

    "first_name"                                  # name only
    ("sex", "Male")                               # name and default
    {"name": "sex", "value": "Male", "class": "demo.EnumProperty"}

Methods may be a plain function (its ``__name__`` is used), a dict with
``name`` and ``code``, or an object with those attributes (a Method).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from axiomatic.core.errors import InvalidAxiom


def normalize_property(p: Any) -> dict[str, Any]:
    """Return a fresh dict description for a property declaration."""
    if isinstance(p, str):
        return {"name": p}
    if isinstance(p, (tuple, list)):
        if len(p) != 2:
            raise InvalidAxiom(f"Property shorthand must be (name, default), got {p!r}")
        return {"name": p[0], "value": p[1]}
    if isinstance(p, Mapping):
        if "name" not in p:
            raise InvalidAxiom(f"Property description has no name: {dict(p)!r}")
        return dict(p)
    raise InvalidAxiom(f"Unrecognised property declaration {p!r}")


def method_parts(m: Any) -> tuple[str, Any]:
    """Return ``(name, code)`` for a method declaration."""
    if isinstance(m, Mapping):
        return m["name"], m["code"]
    if hasattr(m, "code") and hasattr(m, "name"):
        return m.name, m.code
    if callable(m):
        return m.__name__, m
    raise InvalidAxiom(f"Unrecognised method declaration {m!r}")
