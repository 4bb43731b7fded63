"""Shared fixtures for the axiomatic test suite."""

from __future__ import annotations

import pytest

from axiomatic import ROOT_CONTEXT, configure, current_settings, define_class


# ---------------------------------------------------------------------------
# Contexts
# ---------------------------------------------------------------------------

@pytest.fixture
def ctx():
    """A fresh scope per test so test classes never collide."""
    return ROOT_CONTEXT.create_sub_context(name="test")


@pytest.fixture
def define(ctx):
    """Define a class in the per-test context, in package ``test``."""

    def _define(description):
        return define_class({"package": "test", **description}, ctx)

    return _define


# ---------------------------------------------------------------------------
# Sample classes
# ---------------------------------------------------------------------------

@pytest.fixture
def Person(define):
    def full_name(self):
        return f"{self.first_name} {self.last_name}"

    return define({
        "name": "Person",
        "properties": ["first_name", "last_name", ("age", 0)],
        "methods": [full_name],
    })


@pytest.fixture
def Counter(define):
    """Class with a factory-backed property that counts its factory calls."""
    calls = []

    def make_items(obj):
        calls.append(obj)
        return ["default"]

    cls = define({
        "name": "Counter",
        "properties": [{"name": "items", "factory": make_items}, ("total", 0)],
    })
    cls.factory_calls = calls
    return cls


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

@pytest.fixture
def restore_settings():
    """Put the active settings back after a test that reconfigures them."""
    saved = current_settings()
    yield
    configure(saved)
