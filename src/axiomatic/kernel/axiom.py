"""The axiom contract.

An axiom is a named unit of class-construction behaviour. It installs itself
onto a class, onto the class's prototype, or both::

    class Axiom(Protocol):
        name: str
        def install_in_class(self, cls): ...   # optional
        def install_in_proto(self, proto): ... # optional

At least one hook is required. Modeled axioms (Property, Method, Singleton,
...) are ordinary objects that happen to carry the hooks; one-off axioms
can be written as ``AnonymousAxiom`` or as a plain dict in a Model's
``axioms`` list.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from axiomatic.core.errors import InvalidAxiom


@runtime_checkable
class Axiom(Protocol):
    """Anything with a name and at least one install hook."""

    name: str


@dataclass
class AnonymousAxiom:
    """An axiom assembled from loose hook functions."""

    name: str
    install_in_class: Callable[[Any], None] | None = None
    install_in_proto: Callable[[type], None] | None = None

    def __post_init__(self) -> None:
        check_axiom(self)


def _hooks(a: Any) -> tuple[Callable | None, Callable | None]:
    in_class = getattr(a, "install_in_class", None)
    in_proto = getattr(a, "install_in_proto", None)
    return (
        in_class if callable(in_class) else None,
        in_proto if callable(in_proto) else None,
    )


def check_axiom(a: Any) -> None:
    """Raise ``InvalidAxiom`` unless *a* is a usable axiom."""
    if a is None:
        raise InvalidAxiom("Axiom is not an object")

    in_class, in_proto = _hooks(a)
    if in_class is None and in_proto is None:
        raise InvalidAxiom(
            f"Axiom {getattr(a, 'name', a)!r} must define one of "
            "install_in_class or install_in_proto"
        )
    if not isinstance(getattr(a, "name", None), str):
        raise InvalidAxiom(f"Axiom {a!r} has no name")


def as_axiom(a: Any) -> Any:
    """Accept dict shorthand for anonymous axioms, validate everything else."""
    if isinstance(a, Mapping):
        try:
            return AnonymousAxiom(**a)
        except TypeError as exc:
            raise InvalidAxiom(f"Malformed axiom description {dict(a)!r}: {exc}") from exc
    check_axiom(a)
    return a


def run_installers(a: Any, cls: Any) -> None:
    """Invoke whichever hooks *a* provides against *cls*."""
    in_class, in_proto = _hooks(a)
    if in_class is not None:
        in_class(cls)
    if in_proto is not None:
        in_proto(cls.prototype)
