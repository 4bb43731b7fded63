"""Model: the declarative description a class is built from.

A Model is itself a modeled class, so its own description below is run
through the same machinery it describes once the bootstrap reaches phase
two.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from axiomatic.core.errors import MissingIdentity

from .abstract_class import AbstractClass
from .axiom import as_axiom
from .shorthand import method_parts, normalize_property

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Property adapters
# ---------------------------------------------------------------------------

def _default_id(model):
    if model.package:
        return f"{model.package}.{model.name}"
    return model.name


def _adapt_axioms(model, old, axioms):
    return [as_axiom(a) for a in axioms or []]


def _adapt_properties(model, old, properties):
    context = model.context
    property_cls = context.lookup("Property")

    adapted = []
    for p in properties or []:
        if not property_cls.is_instance(p):
            desc = normalize_property(p)
            type_id = desc.pop("class", None)
            type_ = context.lookup(type_id) if type_id else property_cls
            p = type_.create(desc, context)
        adapted.append(p)
    return adapted


def _adapt_methods(model, old, methods):
    context = model.context
    method_cls = context.lookup("Method")

    adapted = []
    for m in methods or []:
        if not method_cls.is_instance(m):
            name, code = method_parts(m)
            doc = m.get("documentation") if isinstance(m, Mapping) else getattr(code, "__doc__", None)
            m = method_cls.create({"name": name, "code": code, "documentation": doc}, context)
        adapted.append(m)
    return adapted


# ---------------------------------------------------------------------------
# Methods copied onto the Model prototype
# ---------------------------------------------------------------------------

def build_class(self, context=None):
    """Create the class this model describes, or refine an existing one.

    Refinements look the target class up by id and mutate it in place;
    anything else allocates a new class whose parent is ``extends``.
    """
    context = context if context is not None else self.context

    if self.refines:
        cls = context.lookup(self.refines)
        logger.debug("Refining %s", cls.id)
    else:
        if not self.name:
            raise MissingIdentity("Missing class name")
        if not self.id:
            raise MissingIdentity(f"Missing id for class {self.name}")

        parent = context.lookup(self.extends) if self.extends else None
        cls = AbstractClass(self, parent, context)
        logger.debug("Building %s extends %s", self.id, parent.id if parent else None)

    cls.install_model(self)
    return cls


def validate(self):
    if self.refines:
        return
    if not self.name:
        raise MissingIdentity("Model has no name")
    if not self.id:
        raise MissingIdentity(f"Model {self.name} has no id")


def all_axioms(self):
    """Explicit axioms, then properties, then methods."""
    return [*(self.axioms or []), *(self.properties or []), *(self.methods or [])]


MODEL_MODEL = {
    "package": "axiomatic.core",
    "name": "Model",
    "extends": "axiomatic.core.FObject",
    "documentation": "Declarative description of a class.",
    "properties": [
        {"name": "id", "factory": _default_id},
        "package",
        "name",
        ("extends", "FObject"),
        "refines",
        "documentation",
        {"name": "axioms", "factory": lambda _: [], "adapt": _adapt_axioms},
        {"name": "properties", "factory": lambda _: [], "adapt": _adapt_properties},
        {"name": "methods", "factory": lambda _: [], "adapt": _adapt_methods},
    ],
    "methods": [build_class, validate, all_axioms],
}
