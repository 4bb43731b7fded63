"""Contexts: immutable, parent-delegating lookup scopes.

Contexts (also known as frames, scopes or environments) store named
resources and registered classes. They replace global variables with an
object that can be passed around explicitly. A context is frozen the moment
it is constructed; new bindings are added by creating a sub-context, which
sees everything its ancestors see::

    ctx = ROOT_CONTEXT.create_sub_context({"clock": clock}, name="request")
    ctx.register(MyClass)
    ctx.lookup("demo.MyClass")          # found here
    ROOT_CONTEXT.lookup("demo.MyClass", suppress_errors=True)  # None

Every class registered in a context is cached in that context only. Lookups
walk the parent chain, so a sub-context may shadow an ancestor's class but
may not register the same id twice itself.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import Any

from .errors import DuplicateRegistration, UnresolvedReference
from .ids import next_uid

logger = logging.getLogger(__name__)

# Classes in this package are also registered under their short name.
CORE_PACKAGE = "axiomatic.core"

_MISSING = object()


class Context:
    """Immutable scope holding registered classes and named bindings.

    Parameters
    ----------
    parent:
        Context to delegate lookups to, ``None`` for the root.
    bindings:
        Extra named values visible through ``ctx[key]``, ``ctx.get(key)``
        and attribute access.
    name:
        Optional label, useful in logs and ``repr``.
    """

    def __init__(
        self,
        parent: Context | None = None,
        bindings: Mapping[str, Any] | None = None,
        name: str | None = None,
    ) -> None:
        if name is not None and not isinstance(name, str):
            raise TypeError("Context name must be left unset or be a string")

        init = object.__setattr__
        init(self, "_parent", parent)
        init(self, "_bindings", dict(bindings or {}))
        # The cache is the one mutable part: classes get registered after
        # the context itself is frozen.
        init(self, "_cache", {})
        init(self, "_name", name)
        init(self, "_uid", next_uid())

    # ------------------------------------------------------------------
    # Immutability
    # ------------------------------------------------------------------

    def __setattr__(self, key: str, value: Any) -> None:
        raise AttributeError(f"Context is frozen; cannot set {key!r}")

    def __delattr__(self, key: str) -> None:
        raise AttributeError(f"Context is frozen; cannot delete {key!r}")

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def parent(self) -> Context | None:
        return self._parent

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def uid(self) -> int:
        return self._uid

    # ------------------------------------------------------------------
    # Class registry
    # ------------------------------------------------------------------

    def lookup(self, id: str, suppress_errors: bool = False) -> Any:
        """Find the class registered as *id* here or in an ancestor.

        Raises ``UnresolvedReference`` when nothing is found, unless
        *suppress_errors* is set, in which case ``None`` is returned.
        """
        if not isinstance(id, str):
            raise TypeError(f"Class id must be a string, got {id!r}")

        ctx: Context | None = self
        while ctx is not None:
            cls = ctx._cache.get(id)
            if cls is not None:
                return cls
            ctx = ctx._parent

        if suppress_errors:
            return None
        raise UnresolvedReference(id)

    def register(self, cls: Any) -> None:
        """Register *cls* in this context's own cache.

        Raises ``DuplicateRegistration`` if the id is already registered
        directly in this context. Ancestors may hold the same id.
        """
        cls_id = getattr(cls, "id", None)
        if not isinstance(cls_id, str):
            raise TypeError("Must have a string id to be registered in a context")

        self._register_as(cls_id, cls)
        if getattr(cls, "package", None) == CORE_PACKAGE:
            self._register_as(cls.name, cls)

        logger.debug("Registered %s in context %s", cls_id, self)

    def _register_as(self, key: str, cls: Any) -> None:
        if key in self._cache:
            raise DuplicateRegistration(key)
        self._cache[key] = cls

    def own_ids(self) -> list[str]:
        """Ids registered directly in this context, in registration order."""
        return list(self._cache)

    def visible_ids(self) -> list[str]:
        """Every id reachable from this context, ancestors first."""
        chain: list[Context] = []
        ctx: Context | None = self
        while ctx is not None:
            chain.append(ctx)
            ctx = ctx._parent

        seen: dict[str, None] = {}
        for ctx in reversed(chain):
            seen.update(dict.fromkeys(ctx._cache))
        return list(seen)

    # ------------------------------------------------------------------
    # Sub-contexts and bindings
    # ------------------------------------------------------------------

    def create_sub_context(
        self,
        bindings: Mapping[str, Any] | None = None,
        name: str | None = None,
    ) -> Context:
        """Return a new frozen context that delegates to this one."""
        return Context(parent=self, bindings=bindings, name=name)

    def get(self, key: str, default: Any = None) -> Any:
        value = self._find_binding(key)
        return default if value is _MISSING else value

    def _find_binding(self, key: str) -> Any:
        ctx: Context | None = self
        while ctx is not None:
            if key in ctx._bindings:
                return ctx._bindings[key]
            ctx = ctx._parent
        return _MISSING

    def __getitem__(self, key: str) -> Any:
        value = self._find_binding(key)
        if value is _MISSING:
            raise KeyError(key)
        return value

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._find_binding(key) is not _MISSING

    def __getattr__(self, key: str) -> Any:
        # Only reached when normal lookup fails; never resolve private names
        # here or a half-built context would recurse.
        if key.startswith("_"):
            raise AttributeError(key)
        value = self._find_binding(key)
        if value is _MISSING:
            raise AttributeError(f"Context has no binding {key!r}")
        return value

    def bindings(self) -> Iterator[str]:
        """Names bound in this context and its ancestors."""
        seen: set[str] = set()
        ctx: Context | None = self
        while ctx is not None:
            for key in ctx._bindings:
                if key not in seen:
                    seen.add(key)
                    yield key
            ctx = ctx._parent

    def __repr__(self) -> str:
        label = f" {self._name!r}" if self._name else ""
        return f"<Context{label} uid={self._uid}>"


# The root of every other scope. Created once at import, never torn down.
ROOT_CONTEXT = Context(name="root")
