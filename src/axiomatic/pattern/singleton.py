"""Singleton axiom: a class whose ``create`` always returns one instance.

Add it to a Model's axioms::

    define_class({
        "name": "Clock",
        "axioms": [ROOT_CONTEXT.lookup("axiomatic.pattern.Singleton").create()],
    })

Clones of the instance are the instance itself, and ``equals`` is
identity.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def install_in_class(self, cls):
    create = cls.create
    instance = None

    def create_singleton(args=None, context=None):
        nonlocal instance
        if instance is None:
            instance = create(args, context)
            logger.debug("Created singleton %s", cls.id)
        return instance

    cls.create = create_singleton


def install_in_proto(self, proto):
    def clone(obj):
        return obj

    def equals(obj, other):
        return obj is other

    proto.clone = clone
    proto.equals = equals


SINGLETON_MODELS = (
    {
        "package": "axiomatic.pattern",
        "name": "Singleton",
        "documentation": "Axiom making a class hand out one shared instance.",
        "properties": [("name", "axiomatic.pattern.Singleton")],
        "methods": [install_in_class, install_in_proto],
    },
    # Singleton is itself a singleton.
    {
        "refines": "axiomatic.pattern.Singleton",
        "axioms": [
            {
                "name": "singleton",
                "install_in_class": lambda cls: install_in_class(None, cls),
                "install_in_proto": lambda proto: install_in_proto(None, proto),
            },
        ],
    },
)
