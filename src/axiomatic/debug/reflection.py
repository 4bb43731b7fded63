"""Function argument reflection and optional runtime type checks.

``get_function_args(fn)`` reads a callable's parameters, their declared
types and their documentation. Types come from annotations, or failing
that from the docstring; documentation comes from a Google-style ``Args:``
section or a numpy-style ``Parameters`` section::

    def greet(person: "demo.Person", times: int | None = None) -> str:
        \"\"\"Say hello.

        Args:
            person: Who to greet.
            times: How often.
        \"\"\"

Type names that are not Python builtins are looked up as class ids in a
Context, so modeled classes can be checked too. ``type_check`` wraps a
callable so every call is validated. Debug mode applies it to Method
axioms automatically.
"""

from __future__ import annotations

import functools
import inspect
import logging
import re
from collections.abc import Callable, Iterator
from typing import Any, Union, get_args, get_origin

from pydantic import BaseModel, Field

from axiomatic.core.context import ROOT_CONTEXT, Context
from axiomatic.core.errors import ArgumentTypeError, ReflectionError

logger = logging.getLogger(__name__)

_BUILTIN_TYPES: dict[str, Any] = {
    "str": str,
    "int": int,
    "float": (int, float),
    "bool": bool,
    "bytes": bytes,
    "list": list,
    "tuple": tuple,
    "dict": dict,
    "set": set,
    "object": object,
    "None": type(None),
}

# Names that accept anything.
_UNCHECKED = {"Any", "typing.Any"}

_OPTIONAL_SUFFIX = re.compile(r"^(.+?)\s*\|\s*None$|^None\s*\|\s*(.+)$")
_OPTIONAL_WRAPPER = re.compile(r"^(?:typing\.)?Optional\[(.+)\]$")

_GOOGLE_ARG = re.compile(r"^(\*{0,2}\w+)\s*(?:\(([^)]*)\))?\s*:\s*(.*)$")
_NUMPY_ARG = re.compile(r"^(\*{0,2}\w+)\s*(?::\s*(.*))?$")
_TYPE_LIKE = re.compile(r"^(?:Optional\[)?[\w.]+\]?(?:\s*\|\s*None)?$")


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class Argument(BaseModel):
    """One parameter (or the return value) of a reflected callable."""

    name: str
    type_name: str | None = None
    optional: bool = False
    documentation: str | None = None

    def check(self, value: Any, context: Context | None = None) -> None:
        """Raise ``ArgumentTypeError`` if *value* does not fit this argument."""
        if self.type_name is None or self.type_name in _UNCHECKED:
            return

        if value is None:
            if self.optional or self.type_name == "None":
                return
            raise ArgumentTypeError(f"Argument {self.name!r} is required ({self.type_name})")

        expected = _BUILTIN_TYPES.get(self.type_name)
        if expected is not None:
            if not isinstance(value, expected):
                raise ArgumentTypeError(
                    f"Argument {self.name!r} expected {self.type_name}, "
                    f"got {type(value).__name__}"
                )
            return

        cls = (context or ROOT_CONTEXT).lookup(self.type_name, suppress_errors=True)
        if cls is None:
            # Types the context doesn't know about are not checked.
            return
        if not cls.is_instance(value):
            raise ArgumentTypeError(
                f"Argument {self.name!r} expected {self.type_name}, got {value!r}"
            )


class FunctionArgs(BaseModel):
    """Parameters of a callable, in declaration order, plus its return."""

    arguments: list[Argument] = Field(default_factory=list)
    return_type: Argument | None = None

    def __getitem__(self, index: int) -> Argument:
        return self.arguments[index]

    def __len__(self) -> int:
        return len(self.arguments)

    def __iter__(self) -> Iterator[Argument]:  # type: ignore[override]
        return iter(self.arguments)

    def by_name(self, name: str) -> Argument | None:
        for arg in self.arguments:
            if arg.name == name:
                return arg
        return None


# ---------------------------------------------------------------------------
# Type names
# ---------------------------------------------------------------------------

def _type_name(annotation: Any) -> tuple[str | None, bool]:
    """Return ``(type_name, optional)`` for an annotation."""
    if annotation is inspect.Parameter.empty:
        return None, False

    if isinstance(annotation, str):
        text = annotation.strip().strip("'\"")
        if text.endswith(", optional"):
            name, _ = _type_name(text[: -len(", optional")])
            return name, True
        m = _OPTIONAL_WRAPPER.match(text)
        if m:
            return m.group(1).strip().strip("'\""), True
        m = _OPTIONAL_SUFFIX.match(text)
        if m:
            return (m.group(1) or m.group(2)).strip().strip("'\""), True
        return text, False

    if annotation is None or annotation is type(None):
        return "None", False

    origin = get_origin(annotation)
    if origin is Union or (origin is not None and type(None) in get_args(annotation)):
        members = [a for a in get_args(annotation) if a is not type(None)]
        optional = len(members) < len(get_args(annotation))
        if len(members) == 1:
            name, _ = _type_name(members[0])
            return name, optional
        return None, optional

    # Modeled classes are named by id.
    cls_id = getattr(annotation, "id", None)
    if isinstance(cls_id, str) and hasattr(annotation, "prototype"):
        return cls_id, False

    if origin is not None:
        return getattr(origin, "__name__", str(origin)), False
    return getattr(annotation, "__name__", str(annotation)), False


# ---------------------------------------------------------------------------
# Docstrings
# ---------------------------------------------------------------------------

def _doc_sections(doc: str) -> dict[str, tuple[list[str], bool]]:
    """Split a cleaned docstring into ``header -> (lines, is_numpy)``."""
    sections: dict[str, tuple[list[str], bool]] = {}
    current: list[str] | None = None
    numpy = False
    lines = doc.splitlines()

    i = 0
    while i < len(lines):
        line = lines[i]
        stripped = line.strip()
        header = stripped.rstrip(":").lower()

        # numpy: header followed by a dashed underline
        if (
            i + 1 < len(lines)
            and stripped
            and set(lines[i + 1].strip()) == {"-"}
            and not line.startswith(" ")
        ):
            current, numpy = [], True
            sections[header] = (current, numpy)
            i += 2
            continue

        # google: "Args:" style header at column zero
        if stripped.endswith(":") and not line.startswith(" ") and " " not in stripped:
            current, numpy = [], False
            sections[header] = (current, numpy)
            i += 1
            continue

        if current is not None:
            # numpy entries sit at column zero; google ones are indented.
            if stripped and not line.startswith(" ") and not numpy:
                current = None
            else:
                current.append(line)
        i += 1

    return sections


def _parse_entries(lines: list[str], numpy: bool) -> list[tuple[str, str | None, str]]:
    """``(name, type, doc)`` triples from an argument section."""
    entries: list[tuple[str, str | None, str]] = []
    indent: int | None = None

    for line in lines:
        if not line.strip():
            continue
        depth = len(line) - len(line.lstrip())
        if indent is None:
            indent = depth

        if depth == indent:
            text = line.strip()
            if numpy:
                m = _NUMPY_ARG.match(text)
                if m is None:
                    raise ReflectionError(f"Could not parse parameter line {text!r}")
                entries.append((m.group(1), m.group(2), ""))
            else:
                m = _GOOGLE_ARG.match(text)
                if m is None:
                    raise ReflectionError(f"Could not parse argument line {text!r}")
                entries.append((m.group(1), m.group(2), m.group(3)))
        elif entries:
            name, type_, doc = entries[-1]
            entries[-1] = (name, type_, f"{doc} {line.strip()}".strip())

    return [(name.lstrip("*"), type_, doc) for name, type_, doc in entries]


def _parse_returns(lines: list[str], numpy: bool) -> tuple[str | None, str]:
    content = [line.strip() for line in lines if line.strip()]
    if not content:
        return None, ""

    if numpy:
        # First line is the type (optionally "name : type"), the rest is prose.
        type_ = content[0].rpartition(":")[2].strip()
        return type_ or None, " ".join(content[1:])

    text = " ".join(content)
    type_, sep, doc = text.partition(":")
    if not sep or not _TYPE_LIKE.match(type_.strip()):
        return None, text
    return type_.strip(), doc.strip()


def _parse_doc(fn: Callable) -> tuple[dict[str, tuple[str | None, str]], tuple[str | None, str]]:
    doc = inspect.getdoc(fn)
    if not doc:
        return {}, (None, "")

    sections = _doc_sections(doc)
    params: dict[str, tuple[str | None, str]] = {}

    for header in ("args", "arguments", "parameters"):
        if header not in sections:
            continue
        lines, numpy = sections[header]
        for name, type_, text in _parse_entries(lines, numpy):
            if name in params:
                raise ReflectionError(f"{fn.__qualname__}: argument {name!r} documented twice")
            params[name] = (type_.strip() if type_ else None, text)

    if "returns" not in sections:
        return params, (None, "")
    return params, _parse_returns(*sections["returns"])


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def get_function_args(fn: Callable) -> FunctionArgs:
    """Reflect on *fn*'s parameters, types and documentation.

    Raises:
        ReflectionError: *fn* is not introspectable, its docstring documents
            a parameter it doesn't have, or a documented type contradicts
            the annotation.
    """
    if not callable(fn):
        raise ReflectionError(f"{fn!r} is not callable")
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError) as exc:
        raise ReflectionError(f"Could not read signature of {fn!r}: {exc}") from exc

    doc_params, (doc_return_type, doc_return) = _parse_doc(fn)
    params = [p for p in sig.parameters.values() if p.name != "self"]
    names = {p.name for p in params}

    for name in doc_params:
        if name not in names:
            raise ReflectionError(
                f"{getattr(fn, '__qualname__', fn)}: documented argument {name!r} "
                "is not a parameter"
            )

    arguments = []
    for p in params:
        type_name, optional = _type_name(p.annotation)
        doc_type, doc = doc_params.get(p.name, (None, None))
        if doc_type is not None:
            doc_type, doc_optional = _type_name(doc_type)
            if type_name is not None and doc_type != type_name:
                raise ReflectionError(
                    f"Argument {p.name!r} annotated {type_name} but documented {doc_type}"
                )
            type_name = type_name or doc_type
            optional = optional or doc_optional

        arguments.append(
            Argument(
                name=p.name,
                type_name=type_name,
                optional=optional or p.default is not inspect.Parameter.empty
                or p.kind in (p.VAR_POSITIONAL, p.VAR_KEYWORD),
                documentation=doc or None,
            )
        )

    return_type = None
    ret_name, ret_optional = _type_name(sig.return_annotation)
    if doc_return_type is not None:
        doc_name, doc_optional = _type_name(doc_return_type)
        if ret_name is not None and doc_name != ret_name:
            raise ReflectionError(f"Return annotated {ret_name} but documented {doc_name}")
        ret_name = ret_name or doc_name
        ret_optional = ret_optional or doc_optional
    if ret_name is not None or doc_return:
        return_type = Argument(
            name="return",
            type_name=ret_name,
            optional=ret_optional,
            documentation=doc_return or None,
        )

    return FunctionArgs(arguments=arguments, return_type=return_type)


def type_check(fn: Callable, context: Context | None = None) -> Callable:
    """Wrap *fn* so its arguments and return value are checked on every call."""
    args = get_function_args(fn)
    sig = inspect.signature(fn)

    @functools.wraps(fn)
    def checked(*a: Any, **kw: Any) -> Any:
        bound = sig.bind(*a, **kw)
        for arg in args:
            if arg.name in bound.arguments:
                value = bound.arguments[arg.name]
                param = sig.parameters[arg.name]
                if param.kind == param.VAR_POSITIONAL:
                    continue
                if param.kind == param.VAR_KEYWORD:
                    continue
                arg.check(value, context)
            elif not arg.optional:
                arg.check(None, context)

        result = fn(*a, **kw)
        if args.return_type is not None:
            args.return_type.check(result, context)
        return result

    checked.__wrapped_args__ = args  # type: ignore[attr-defined]
    logger.debug("Type checking enabled for %s", getattr(fn, "__qualname__", fn))
    return checked
