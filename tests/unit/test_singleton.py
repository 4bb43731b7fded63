"""Test the Singleton axiom."""

import pytest

from axiomatic import ROOT_CONTEXT


@pytest.fixture
def Singleton():
    return ROOT_CONTEXT.lookup("axiomatic.pattern.Singleton")


@pytest.fixture
def Clock(define, Singleton):
    return define({
        "name": "Clock",
        "properties": [("ticks", 0)],
        "axioms": [Singleton.create()],
    })


class TestSingleton:
    def test_create_returns_one_instance(self, Clock):
        first = Clock.create()
        assert Clock.create() is first
        assert Clock.create({"ticks": 5}) is first

    def test_first_create_applies_args(self, Clock):
        clock = Clock.create({"ticks": 3})
        assert clock.ticks == 3

    def test_clone_and_equals(self, Clock):
        clock = Clock.create()
        assert clock.clone() is clock
        assert clock.equals(clock)
        assert not clock.equals(None)

    def test_axiom_is_registered_by_name(self, Clock, Singleton):
        axiom = Clock.get_axiom_by_name("axiomatic.pattern.Singleton")
        assert Singleton.is_instance(axiom)

    def test_singleton_class_is_itself_a_singleton(self, Singleton):
        assert Singleton.create() is Singleton.create()
        assert Singleton.has_own_axiom("singleton")

    def test_separate_classes_get_separate_instances(self, define, Singleton):
        A = define({"name": "A", "axioms": [Singleton.create()]})
        B = define({"name": "B", "axioms": [Singleton.create()]})
        assert A.create() is not B.create()
        assert A.create().cls_ is A
