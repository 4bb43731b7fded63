"""AbstractClass: the type of every modeled class.

Building a Model produces an ``AbstractClass`` instance (a "class"). Each
class owns:

- a ``prototype``: a real Python type that instances are created from. A
  subclass's prototype derives from its parent's, so methods installed later
  on an ancestor reach existing instances of every descendant.
- an ``axiom_map`` holding only the axioms installed on this class. Queries
  for inherited axioms walk the ``parent`` chain explicitly.
- two caches: axiom lists by capability (cleared whenever an axiom is
  installed here) and sub-class answers (never cleared; parentage is fixed
  at construction).

Class-level attributes an axiom installs with ``install_in_class`` (for
example a Property's ``FIRST_NAME`` constant) are visible on subclasses
because attribute lookup falls back to the parent class.

``install_model`` below is the temporary, bootstrap-era installer. Once the
core classes are self-describing, ``axiomatic.kernel.boot`` replaces it
with the axiom-only version.
"""

from __future__ import annotations

import logging
from typing import Any

from axiomatic.core.context import Context
from axiomatic.core.errors import ClassBuildError
from axiomatic.core.ids import next_uid

from .axiom import as_axiom, run_installers
from .shorthand import method_parts, normalize_property

logger = logging.getLogger(__name__)


class AbstractClass:
    """Root of every modeled class."""

    def __init__(self, model: Any, parent: AbstractClass | None, context: Context) -> None:
        self.parent = parent
        self.id: str = model.id
        self.name: str = model.name
        self.package: str | None = getattr(model, "package", None)
        self.model_ = model
        self.context = context
        self.uid = next_uid()
        self.axiom_map: dict[str, Any] = {}
        self.private_: dict[str, Any] = {
            "axiom_cache": {},
            "is_sub_class_cache": {},
        }

        base = parent.prototype if parent is not None else object
        self.prototype: type = type(
            model.name,
            (base,),
            {
                "cls_": self,
                "model_": model,
                "__module__": self.package or "axiomatic",
                "__qualname__": model.name,
            },
        )

    def __getattr__(self, name: str) -> Any:
        # Class-level attributes fall back to the parent class.
        parent = self.__dict__.get("parent")
        if parent is None or name.startswith("__"):
            raise AttributeError(
                f"{self.__dict__.get('name')!r} class has no attribute {name!r}"
            )
        return getattr(parent, name)

    # ------------------------------------------------------------------
    # Instances
    # ------------------------------------------------------------------

    def create(self, args: Any = None, context: Context | None = None) -> Any:
        """Create a new instance of this class.

        Configured from values taken from *args*, if supplied. ``init()``,
        if defined, runs once after the arguments have been applied.
        """
        obj = self.prototype.__new__(self.prototype)

        # Property values live in the instance's own __dict__ under the
        # property name; everything else the runtime tracks goes here.
        obj.__dict__["_private"] = {
            "uid": next_uid(),
            "context": context if context is not None else self.context,
        }

        obj.init_args(args)

        init = getattr(obj, "init", None)
        if init is not None:
            init()

        return obj

    def is_instance(self, o: Any) -> bool:
        """Determine if *o* is an instance of this class or a sub-class."""
        return self.is_sub_class(getattr(o, "cls_", None))

    # ------------------------------------------------------------------
    # Hierarchy
    # ------------------------------------------------------------------

    def is_sub_class(self, c: AbstractClass | None) -> bool:
        """Determine if *c* is either this class or a sub-class of it."""
        if not isinstance(c, AbstractClass):
            return False

        cache = self.private_["is_sub_class_cache"]
        if c not in cache:
            cache[c] = c is self or self.is_sub_class(c.parent)
        return cache[c]

    def is_sub_class_of(self, other: AbstractClass | None) -> bool:
        """Determine if this class is *other* or descends from it."""
        return isinstance(other, AbstractClass) and other.is_sub_class(self)

    # ------------------------------------------------------------------
    # Axioms
    # ------------------------------------------------------------------

    def install_axiom(self, a: Any) -> None:
        """Install an axiom into the class and prototype.

        Overwrites any axiom of the same name on this class (ancestors keep
        theirs) and invalidates the axiom cache.
        """
        a = as_axiom(a)

        self.axiom_map[a.name] = a
        self.private_["axiom_cache"] = {}

        run_installers(a, self)

    def get_axiom_by_name(self, name: str) -> Any:
        """Find an axiom by name on this class or an ancestor."""
        cls: AbstractClass | None = self
        while cls is not None:
            a = cls.axiom_map.get(name)
            if a is not None:
                return a
            cls = cls.parent
        return None

    def has_own_axiom(self, name: str) -> bool:
        """True if *name* is installed on this class itself."""
        return name in self.axiom_map

    def get_axioms(self) -> list[Any]:
        """All axioms of this class and its ancestors, ancestors first."""
        cache = self.private_["axiom_cache"]
        axioms = cache.get("")
        if axioms is None:
            chain: list[AbstractClass] = []
            cls: AbstractClass | None = self
            while cls is not None:
                chain.append(cls)
                cls = cls.parent

            merged: dict[str, Any] = {}
            for cls in reversed(chain):
                merged.update(cls.axiom_map)
            axioms = cache[""] = list(merged.values())
        return axioms

    def get_axioms_by_class(self, capability: AbstractClass) -> list[Any]:
        """All axioms that are instances of *capability*.

        The returned list is cached and handed back unchanged until another
        axiom is installed on this class.
        """
        cache = self.private_["axiom_cache"]
        axioms = cache.get(capability.id)
        if axioms is None:
            axioms = cache[capability.id] = [
                a for a in self.get_axioms() if capability.is_instance(a)
            ]
        return axioms

    # ------------------------------------------------------------------
    # Bootstrap installer
    # ------------------------------------------------------------------

    def install_model(self, m: Any) -> None:
        """Temporary bootstrap installer.

        Methods are copied onto the prototype as-is. Properties are upgraded
        to Property axioms, which is what turns phase-one plain fields into
        observable properties. Replaced by the axiom-only installer once the
        bootstrap reaches phase three.
        """
        for method in m.methods or []:
            name, code = method_parts(method)
            setattr(self.prototype, name, code)

        property_cls = self.context.lookup("Property")
        for p in m.properties or []:
            if not property_cls.is_instance(p):
                desc = normalize_property(p)
                type_id = desc.pop("class", None)
                type_ = self.context.lookup(type_id) if type_id else property_cls
                p = type_.create(desc)
            self.install_axiom(p)

    def validate(self) -> None:
        """Sanity checks, only active in debug mode."""
        from .boot import current_settings

        if not current_settings().debug:
            return
        for name, a in self.axiom_map.items():
            if not name or name != a.name:
                raise ClassBuildError(f"{self.id}: axiom registered as {name!r} is named {a.name!r}")
        logger.debug("Validated %s (%d own axioms)", self.id, len(self.axiom_map))

    def __str__(self) -> str:
        return f"{self.name}Class"

    def __repr__(self) -> str:
        return f"<AbstractClass {self.id}>"
