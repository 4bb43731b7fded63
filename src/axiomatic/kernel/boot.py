"""Bootstrap: a class system that defines itself with itself.

Models describe classes, and Model is itself a modeled class, so the core
classes (FObject, Property, Method, Model) have to be built in steps, each
assuming less machinery than the last:

Phase 1 (raw)
    ``_raw_define`` builds classes straight from their description dicts:
    methods are copied onto the prototype verbatim, properties become plain
    fields holding their defaults. Nothing is observable or validated.

Phase 2 (self-describing)
    ``define_class`` now goes through ``Model.create(...).build_class()``.
    Every phase-one class is rebuilt in place (``refines`` set to its own
    id), which upgrades its plain fields into Property axioms. Model goes
    first so later descriptions are adapted by real Model properties;
    FObject goes last because its final ``init_args`` rejects unknown keys.

Phase 3 (axiom-driven)
    ``AbstractClass.install_model`` is replaced with the two-pass axiom
    installer. The core classes are refined once more so their methods
    appear as Method axioms, and their stand-in models are swapped for
    real Model instances.

The library classes (slots, Singleton) are defined with the public
``define_class`` once all three phases are done.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from axiomatic.core.config import Settings, load_settings
from axiomatic.core.context import ROOT_CONTEXT, Context
from axiomatic.core.errors import BootstrapError

from .abstract_class import AbstractClass
from .axiom import check_axiom, run_installers
from .fobject import FOBJECT_MODEL, raw_init_args
from .method import METHOD_MODEL
from .model import MODEL_MODEL
from .property import PROPERTY_MODEL
from .shorthand import method_parts, normalize_property

logger = logging.getLogger(__name__)

# Phase-one definition order: each class may only extend one defined earlier.
CORE_MODELS: tuple[dict[str, Any], ...] = (
    FOBJECT_MODEL,
    PROPERTY_MODEL,
    METHOD_MODEL,
    MODEL_MODEL,
)

# Phase-two upgrade order.
UPGRADE_ORDER = ("Model", "Property", "Method", "FObject")


class _BootState:
    def __init__(self) -> None:
        self.phase = 0
        self.booted = False
        self.boot_time_ms: float | None = None
        self.settings: Settings | None = None


_state = _BootState()


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

def configure(settings: Settings | None = None, **overrides: Any) -> Settings:
    """Replace the active runtime settings.

    Args:
        settings: A ready-made ``Settings``; loaded from the environment if
            omitted.
        **overrides: Top-level fields applied on top.
    """
    if settings is None:
        settings = load_settings(overrides=overrides)
    elif overrides:
        settings = settings.model_copy(update=overrides)
    _state.settings = settings
    return settings


def current_settings() -> Settings:
    if _state.settings is None:
        _state.settings = load_settings()
    return _state.settings


def boot_time_ms() -> float | None:
    """Milliseconds the last boot took, ``None`` before boot."""
    return _state.boot_time_ms


# ---------------------------------------------------------------------------
# Phase 1
# ---------------------------------------------------------------------------

class RawModel:
    """Bare attribute bag standing in for a Model until Model exists."""

    def __init__(self, description: dict[str, Any]) -> None:
        self.package = None
        self.name = None
        self.extends = None
        self.refines = None
        self.documentation = None
        self.axioms: list[Any] = []
        self.properties: list[Any] = []
        self.methods: list[Any] = []
        self.__dict__.update(description)

    def __repr__(self) -> str:
        return f"<RawModel {getattr(self, 'id', self.name)}>"


def _phase_one_description(description: dict[str, Any]) -> dict[str, Any]:
    methods = [
        {"name": "init_args", "code": raw_init_args}
        if method_parts(m)[0] == "init_args" else m
        for m in description.get("methods", [])
    ]
    return {**description, "methods": methods}


def _raw_define(description: dict[str, Any]) -> AbstractClass:
    m = RawModel(_phase_one_description(description))
    if m.refines:
        raise BootstrapError(f"Refines is not supported in early bootstrap: {m.refines}")
    m.id = f"{m.package}.{m.name}"

    parent = ROOT_CONTEXT.lookup(m.extends) if m.extends else None
    cls = AbstractClass(m, parent, ROOT_CONTEXT)

    for method in m.methods:
        name, code = method_parts(method)
        setattr(cls.prototype, name, code)

    for p in m.properties:
        desc = normalize_property(p)
        setattr(cls.prototype, desc["name"], desc.get("value"))

    ROOT_CONTEXT.register(cls)
    logger.debug("Phase 1: defined %s", m.id)
    return cls


# ---------------------------------------------------------------------------
# Phase 2
# ---------------------------------------------------------------------------

def define_class(description: dict[str, Any], context: Context | None = None) -> AbstractClass:
    """Build (or refine) a class from a Model description.

    New classes are registered in *context* (the root context by default);
    refinements mutate the existing class in place and register nothing.

    Args:
        description: Model fields: ``name``, ``package``, ``extends`` or
            ``refines``, ``axioms``, ``properties``, ``methods``,
            ``documentation``.
        context: Where ``extends``/``refines``/property classes are resolved
            and where the new class is registered.
    """
    if _state.phase < 2:
        raise BootstrapError("define_class() is not available before the Model class is built")

    context = context if context is not None else ROOT_CONTEXT
    model = context.lookup("Model").create(description, context)
    model.validate()
    cls = model.build_class(context)
    cls.validate()

    if not model.refines:
        context.register(cls)

    return cls


def _refine_core(name: str, description: dict[str, Any]) -> AbstractClass:
    cls = ROOT_CONTEXT.lookup(name)
    return define_class({**description, "refines": cls.id})


# ---------------------------------------------------------------------------
# Phase 3
# ---------------------------------------------------------------------------

def install_axioms(self: AbstractClass, m: Any) -> None:
    """Final ``install_model``: register every axiom, then run them in order."""
    axioms = m.all_axioms()
    self.private_["axiom_cache"] = {}

    # Pass 1: every axiom is visible by name before any installer runs.
    for a in axioms:
        check_axiom(a)
        self.axiom_map[a.name] = a

    for a in axioms:
        run_installers(a, self)


def _end() -> None:
    Model = ROOT_CONTEXT.lookup("Model")
    by_name = {d["name"]: d for d in CORE_MODELS}

    for name in UPGRADE_ORDER:
        description = by_name[name]
        # Methods only: the Property axioms from phase 2 are already final.
        _refine_core(name, {"methods": description.get("methods", [])})

    for name, description in by_name.items():
        cls = ROOT_CONTEXT.lookup(name)
        cls.model_ = cls.prototype.model_ = Model.create(description)

    # Subclasses cached their inherited axioms before FObject's Method
    # axioms existed.
    for name in by_name:
        ROOT_CONTEXT.lookup(name).private_["axiom_cache"] = {}


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def boot(settings: Settings | None = None) -> None:
    """Bootstrap the core and library classes. Safe to call repeatedly."""
    if settings is not None:
        configure(settings)
    if _state.booted:
        return

    start = time.perf_counter()

    _state.phase = 1
    for description in CORE_MODELS:
        _raw_define(description)

    _state.phase = 2
    by_name = {d["name"]: d for d in CORE_MODELS}
    for name in UPGRADE_ORDER:
        _refine_core(name, by_name[name])
        logger.debug("Phase 2: upgraded %s", name)

    _state.phase = 3
    AbstractClass.install_model = install_axioms
    _end()

    _define_library()

    _state.booted = True
    _state.boot_time_ms = (time.perf_counter() - start) * 1000
    logger.info("Core boot time: %.2f ms", _state.boot_time_ms)


def _define_library() -> None:
    from axiomatic.pattern.singleton import SINGLETON_MODELS
    from axiomatic.slot.slot import SLOT_MODELS

    for description in (*SLOT_MODELS, *SINGLETON_MODELS):
        define_class(description)
