"""The Method axiom: a named callable installed on the prototype."""

from __future__ import annotations

import inspect


def install_in_proto(self, proto):
    code = self.code

    from .boot import current_settings

    if current_settings().debug and inspect.isfunction(code):
        from axiomatic.debug.reflection import type_check

        code = type_check(code, proto.cls_.context)

    setattr(proto, self.name, code)


def __str__(self):
    return f"Method({self.name})"


METHOD_MODEL = {
    "package": "axiomatic.core",
    "name": "Method",
    "extends": "axiomatic.core.FObject",
    "documentation": "Named callable copied onto a class's prototype.",
    "properties": ["name", "code", "documentation"],
    "methods": [install_in_proto, __str__],
}
