"""axiomatic: a self-describing object runtime.

Classes are declared as data (Models) built from reusable units (Axioms),
with observable properties, per-object publish/subscribe, Slots that bind
values together, and immutable Contexts for class lookup::

    from axiomatic import define_class

    Person = define_class({
        "package": "demo",
        "name": "Person",
        "properties": ["first_name", ("age", 0)],
    })
    alice = Person.create({"first_name": "Alice"})

Importing the package boots the core classes.
"""

from axiomatic.core.config import Settings, load_settings
from axiomatic.core.context import ROOT_CONTEXT, Context
from axiomatic.core.errors import (
    ArgumentTypeError,
    AxiomaticError,
    AxiomError,
    BindingError,
    BootstrapError,
    ClassBuildError,
    ContextError,
    DivergentRelation,
    DuplicateRegistration,
    InvalidAxiom,
    MissingIdentity,
    ReflectionError,
    UnknownAxiom,
    UnresolvedReference,
)
from axiomatic.kernel.abstract_class import AbstractClass
from axiomatic.kernel.axiom import AnonymousAxiom, Axiom
from axiomatic.kernel.boot import boot, configure, current_settings, define_class

boot()


def lookup(id: str, suppress_errors: bool = False):
    """Look a class up in the root context."""
    return ROOT_CONTEXT.lookup(id, suppress_errors)


def register(cls) -> None:
    """Register a class in the root context."""
    ROOT_CONTEXT.register(cls)


def create_sub_context(bindings=None, name=None) -> Context:
    """New context delegating to the root context."""
    return ROOT_CONTEXT.create_sub_context(bindings, name)


__all__ = [
    "AbstractClass",
    "AnonymousAxiom",
    "ArgumentTypeError",
    "Axiom",
    "AxiomError",
    "AxiomaticError",
    "BindingError",
    "BootstrapError",
    "ClassBuildError",
    "Context",
    "ContextError",
    "DivergentRelation",
    "DuplicateRegistration",
    "InvalidAxiom",
    "MissingIdentity",
    "ROOT_CONTEXT",
    "ReflectionError",
    "Settings",
    "UnknownAxiom",
    "UnresolvedReference",
    "boot",
    "configure",
    "create_sub_context",
    "current_settings",
    "define_class",
    "load_settings",
    "lookup",
    "register",
]
