"""Test argument reflection and debug-mode type checks."""

from typing import Optional

import pytest

from axiomatic import ArgumentTypeError, ReflectionError
from axiomatic.debug import get_function_args, type_check


class TestGetFunctionArgs:
    def test_annotations(self):
        def f(a: int, b: str = "x", c: Optional[float] = None) -> bool:
            return True

        args = get_function_args(f)
        assert [a.name for a in args] == ["a", "b", "c"]
        assert args[0].type_name == "int"
        assert not args[0].optional
        assert args[1].optional
        assert args[2].type_name == "float"
        assert args[2].optional
        assert args.return_type.type_name == "bool"

    def test_self_is_skipped(self):
        def method(self, x):
            return x

        assert [a.name for a in get_function_args(method)] == ["x"]

    def test_union_with_none(self):
        def f(a: int | None):
            pass

        arg = get_function_args(f).by_name("a")
        assert (arg.type_name, arg.optional) == ("int", True)

    def test_google_docstring(self):
        def f(person, times=1):
            """Greet someone.

            Args:
                person (str): Who to greet,
                    spelled out in full.
                times (int): How often.

            Returns:
                str: The greeting.
            """

        args = get_function_args(f)
        assert args[0].type_name == "str"
        assert args[0].documentation == "Who to greet, spelled out in full."
        assert args[1].type_name == "int"
        assert args.return_type.type_name == "str"
        assert args.return_type.documentation == "The greeting."

    def test_numpy_docstring(self):
        def f(count, label=None):
            """Do a thing.

            Parameters
            ----------
            count : int
                How many.
            label : str, optional
                Shown to the user.

            Returns
            -------
            list
                The results.
            """

        args = get_function_args(f)
        assert args[0].type_name == "int"
        assert args[0].documentation == "How many."
        assert args[1].type_name == "str"
        assert args[1].optional
        assert args.return_type.type_name == "list"

    def test_returns_prose_without_type(self):
        def f():
            """Nothing much.

            Returns:
                Whatever the caller expects.
            """

        ret = get_function_args(f).return_type
        assert ret.type_name is None
        assert ret.documentation == "Whatever the caller expects."

    def test_documented_argument_must_exist(self):
        def f(a):
            """Do it.

            Args:
                b: Not a parameter.
            """

        with pytest.raises(ReflectionError, match="'b'"):
            get_function_args(f)

    def test_documented_type_must_match_annotation(self):
        def f(a: int):
            """Do it.

            Args:
                a (str): Wrong.
            """

        with pytest.raises(ReflectionError, match="annotated int"):
            get_function_args(f)

    def test_not_callable(self):
        with pytest.raises(ReflectionError):
            get_function_args(42)

    def test_no_docstring(self):
        args = get_function_args(lambda a, b: None)
        assert len(args) == 2
        assert args.return_type is None


class TestTypeCheck:
    def test_builtin_types(self):
        def add(a: int, b: float) -> float:
            return a + b

        checked = type_check(add)
        assert checked(1, 2.5) == 3.5
        assert checked(1, 2) == 3
        with pytest.raises(ArgumentTypeError, match="'a' expected int"):
            checked("1", 2.0)

    def test_return_value_checked(self):
        def bad() -> int:
            return "nope"

        with pytest.raises(ArgumentTypeError):
            type_check(bad)()

    def test_required_and_optional(self):
        def f(a: str, b: str | None = None):
            return a

        checked = type_check(f)
        assert checked("x") == "x"
        assert checked("x", None) == "x"
        with pytest.raises(ArgumentTypeError, match="required"):
            checked(None)

    def test_modeled_class_arguments(self, Person, ctx):
        def greet(person: "test.Person") -> str:
            return person.first_name

        checked = type_check(greet, ctx)
        assert checked(Person.create({"first_name": "Ada"})) == "Ada"
        with pytest.raises(ArgumentTypeError):
            checked("Ada")

    def test_unknown_type_names_are_not_checked(self):
        def f(a: "somewhere.Unknown"):
            return a

        assert type_check(f)(1) == 1

    def test_argument_type_error_is_a_type_error(self):
        def f(a: int):
            return a

        with pytest.raises(TypeError):
            type_check(f)("x")

    def test_wrapper_keeps_metadata(self):
        def documented(a: int):
            """Docs."""

        checked = type_check(documented)
        assert checked.__name__ == "documented"
        assert checked.__wrapped_args__[0].name == "a"
