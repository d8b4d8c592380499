"""
Runtime values produced by the Monkey evaluator.

Classes:
    Object: Base class; every value reports a `type_name()` and an `inspect()` rendering.
    Integer, Float, Boolean, Null: Primitive values.
    ReturnValue: Wraps the value of a `return` while it travels up through blocks.
    Error: A failure that short-circuits evaluation; carries a message, never raised.
    Function: A closure (parameters, body and the environment it was defined in).

`TRUE`, `FALSE` and `NULL` are shared singletons; the evaluator never builds
other Boolean or Null instances.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from monkey.monkey_ast import BlockStatement, Identifier

if TYPE_CHECKING:  # pragma: no cover
    from monkey.monkey_environment import Environment

INTEGER_OBJ = "INTEGER"
FLOAT_OBJ = "FLOAT"
BOOLEAN_OBJ = "BOOLEAN"
NULL_OBJ = "NULL"
RETURN_VALUE_OBJ = "RETURN_VALUE"
ERROR_OBJ = "ERROR"
FUNCTION_OBJ = "FUNCTION"


class Object:
    def type_name(self) -> str:
        raise NotImplementedError  # pragma: no cover

    def inspect(self) -> str:
        raise NotImplementedError  # pragma: no cover

    def __str__(self) -> str:
        return self.inspect()


@dataclass(frozen=True)
class Integer(Object):
    value: int

    def type_name(self) -> str:
        return INTEGER_OBJ

    def inspect(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Float(Object):
    value: float

    def type_name(self) -> str:
        return FLOAT_OBJ

    def inspect(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Boolean(Object):
    value: bool

    def type_name(self) -> str:
        return BOOLEAN_OBJ

    def inspect(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class Null(Object):
    def type_name(self) -> str:
        return NULL_OBJ

    def inspect(self) -> str:
        return "null"


@dataclass(frozen=True)
class ReturnValue(Object):
    value: Object

    def type_name(self) -> str:
        return RETURN_VALUE_OBJ

    def inspect(self) -> str:
        return self.value.inspect()


@dataclass(frozen=True)
class Error(Object):
    message: str

    def type_name(self) -> str:
        return ERROR_OBJ

    def inspect(self) -> str:
        return self.message


@dataclass(frozen=True, eq=False)
class Function(Object):
    """A function value. Identity equality: two closures are never interchangeable."""

    parameters: list[Identifier]
    body: BlockStatement
    env: Environment = field(repr=False)

    def type_name(self) -> str:
        return FUNCTION_OBJ

    def inspect(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"fn({params}) {self.body}"


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def native_bool_to_boolean(value: bool) -> Boolean:
    return TRUE if value else FALSE


def is_truthy(obj: Object) -> bool:
    """Only `null` and `false` are falsy; numeric zero is truthy."""
    if isinstance(obj, Null):
        return False
    if isinstance(obj, Boolean):
        return obj.value
    return True


def is_error(obj: Object | None) -> bool:
    return isinstance(obj, Error)


__all__ = [
    "BOOLEAN_OBJ",
    "ERROR_OBJ",
    "FALSE",
    "FLOAT_OBJ",
    "FUNCTION_OBJ",
    "INTEGER_OBJ",
    "NULL",
    "NULL_OBJ",
    "RETURN_VALUE_OBJ",
    "TRUE",
    "Boolean",
    "Error",
    "Float",
    "Function",
    "Integer",
    "Null",
    "Object",
    "ReturnValue",
    "is_error",
    "is_truthy",
    "native_bool_to_boolean",
]
