"""Debug-time reflection and argument type checking."""

from axiomatic.debug.reflection import (
    Argument,
    FunctionArgs,
    get_function_args,
    type_check,
)

__all__ = ["Argument", "FunctionArgs", "get_function_args", "type_check"]
