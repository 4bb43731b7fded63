"""Test the flyweight value-type dispatch."""

from collections import namedtuple
from datetime import date, datetime
from decimal import Decimal

import pytest

from axiomatic import ROOT_CONTEXT
from axiomatic.core import types


class TestTypeOf:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, types.NULL),
            (True, types.BOOLEAN),
            (0, types.NUMBER),
            (1.5, types.NUMBER),
            (Decimal("2.5"), types.NUMBER),
            ("s", types.STRING),
            ([1], types.ARRAY),
            ((1,), types.ARRAY),
            ({"a": 1}, types.MAP),
            (date(2020, 1, 1), types.DATE),
            (ROOT_CONTEXT, types.CONTEXT),
            (len, types.FUNCTION),
            (object(), types.OBJECT),
        ],
    )
    def test_dispatch(self, value, expected):
        assert types.type_of(value) is expected

    def test_bool_is_not_a_number(self):
        assert types.type_of(False) is types.BOOLEAN
        assert not types.NUMBER.is_instance(True)

    def test_modeled_objects(self, Person):
        p = Person.create()
        assert types.type_of(p) is types.FOBJECT
        assert types.type_of(Person) is types.OBJECT


class TestEquals:
    def test_scalars(self):
        assert types.equals(None, None)
        assert not types.equals(None, 0)
        assert types.equals(1, 1.0)
        assert not types.equals(1, "1")
        assert not types.equals(True, 1)
        assert types.equals("a", "a")

    def test_nested_sequences_and_maps(self):
        assert types.equals([1, [2, {"x": 3}]], [1, [2, {"x": 3}]])
        assert not types.equals([1, 2], [1, 2, 3])
        assert types.equals((1, 2), [1, 2])
        assert not types.equals({"a": 1}, {"a": 1, "b": 2})

    def test_dates_compare_by_type_and_value(self):
        assert types.equals(date(2020, 1, 1), date(2020, 1, 1))
        assert not types.equals(datetime(2020, 1, 1), date(2020, 1, 1))

    def test_functions(self):
        def f():
            return 1

        assert types.equals(f, f)
        assert not types.equals(f, len)

    def test_modeled_objects_use_identity(self, Person):
        a, b = Person.create(), Person.create()
        assert types.equals(a, a)
        assert not types.equals(a, b)


class TestCompare:
    def test_numbers_and_strings(self):
        assert types.compare(1, 2) == -1
        assert types.compare(2, 2) == 0
        assert types.compare("b", "a") == 1

    def test_none_sorts_first(self):
        assert types.compare(None, 1) == -1
        assert types.compare(None, None) == 0
        assert types.compare(1, None) == 1

    def test_booleans(self):
        assert types.compare(False, True) == -1
        assert types.compare(True, True) == 0

    def test_arrays_lexicographic(self):
        assert types.compare([1, 2], [1, 3]) == -1
        assert types.compare([1, 2], [1]) == 1
        assert types.compare([], []) == 0


class TestHashAndClone:
    def test_string_hash_is_stable(self):
        assert types.hash_code("") == 0
        assert types.hash_code("a") == 97
        assert types.hash_code("ab") == 31 * 97 + 98

    def test_hashes_fit_in_32_bits(self):
        h = types.hash_code("x" * 200)
        assert -(2 ** 31) <= h < 2 ** 31
        assert -(2 ** 31) <= types.hash_code(2 ** 40) < 2 ** 31

    @pytest.mark.parametrize(
        "value",
        [float("nan"), float("inf"), float("-inf"), Decimal("NaN"), Decimal("-Infinity"), [1.0, float("nan")]],
    )
    def test_non_finite_numbers_hash(self, value):
        assert -(2 ** 31) <= types.hash_code(value) < 2 ** 31

    def test_infinities_hash_apart(self):
        assert types.hash_code(float("inf")) != types.hash_code(float("-inf"))

    def test_equal_values_hash_equally(self):
        assert types.hash_code([1, "a"]) == types.hash_code([1, "a"])
        assert types.hash_code({"a": 1, "b": 2}) == types.hash_code({"b": 2, "a": 1})

    def test_unhashable_object(self):
        class Unhashable:
            __hash__ = None

        assert types.hash_code(Unhashable()) == 0

    def test_clone_containers(self):
        original = {"a": [1, {"b": 2}], "t": (1, 2)}
        copy = types.clone(original)
        assert copy == original
        assert copy["a"] is not original["a"]
        assert copy["a"][1] is not original["a"][1]
        assert isinstance(copy["t"], tuple)

    def test_clone_named_tuple_keeps_type(self):
        Point = namedtuple("Point", "x y")
        p = Point([1], 2)
        copy = types.clone(p)
        assert type(copy) is Point
        assert copy == p
        assert copy.x is not p.x

    def test_clone_shares_plain_objects(self):
        o = object()
        assert types.clone(o) is o


class TestCoerceText:
    def test_segments(self):
        assert types.coerce_text("a") == "a"
        assert types.coerce_text(3) == "3"
        assert types.coerce_text(None) == ""
