"""Runtime values for Monkey.

This module defines the value types produced by the evaluator. Every value
exposes a `type()` name, used in error messages, and an `inspect()` rendering,
used for display. Booleans and null are canonical singletons (`TRUE`, `FALSE`
and `NULL`) so that `==` and `!=` on non-integer values can compare identity.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List

from .ast import BlockStatement, Identifier, join_statements

if TYPE_CHECKING:
    from .environment import Environment


INTEGER_OBJ = 'INTEGER'
BOOLEAN_OBJ = 'BOOLEAN'
NULL_OBJ = 'NULL'
RETURN_VALUE_OBJ = 'RETURN_VALUE'
ERROR_OBJ = 'ERROR'
FUNCTION_OBJ = 'FUNCTION'


class Object:
    """Base class for all runtime values."""

    def type(self) -> str:
        raise NotImplementedError

    def inspect(self) -> str:
        raise NotImplementedError

    def describe(self) -> str:
        return self.inspect()

    def __str__(self) -> str:
        return self.inspect()


@dataclass
class Integer(Object):
    value: int

    def type(self) -> str:
        return INTEGER_OBJ

    def inspect(self) -> str:
        return str(self.value)


class Boolean(Object):
    def __init__(self, value: bool):
        self.value = value

    def type(self) -> str:
        return BOOLEAN_OBJ

    def inspect(self) -> str:
        return 'true' if self.value else 'false'

    def __repr__(self) -> str:
        return f"Boolean({self.value})"


class Null(Object):
    def type(self) -> str:
        return NULL_OBJ

    def inspect(self) -> str:
        return 'null'

    def __repr__(self) -> str:
        return 'Null'


@dataclass
class ReturnValue(Object):
    """Carries a returned value up through enclosing blocks to the call boundary."""
    value: Object

    def type(self) -> str:
        return RETURN_VALUE_OBJ

    def inspect(self) -> str:
        return self.value.inspect()


@dataclass
class Error(Object):
    """Runtime error value.

    Errors are first-class values. They short-circuit evaluation like a
    return value but are never unwrapped, so they reach the top-level caller
    unchanged.
    """
    message: str

    def type(self) -> str:
        return ERROR_OBJ

    def inspect(self) -> str:
        return f"ERROR: {self.message}"


class Function(Object):
    """Represents a user-defined Monkey function (a closure)."""
    def __init__(self, parameters: List[Identifier], body: BlockStatement, env: Environment):
        self.parameters = parameters
        self.body = body
        self.env = env  # environment active where the function literal was evaluated

    def type(self) -> str:
        return FUNCTION_OBJ

    def inspect(self) -> str:
        params = ', '.join(str(p) for p in self.parameters)
        return f"fn({params}) {{\n{join_statements(self.body.statements)}\n}}"

    def __repr__(self) -> str:
        params = ', '.join(str(p) for p in self.parameters)
        return f"<function fn({params})>"


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def native_bool_to_boolean(value: bool) -> Boolean:
    return TRUE if value else FALSE


def is_truthy(value: Object) -> bool:
    # Only false and null are falsy; every integer, zero included, is truthy
    if value is NULL or value is FALSE:
        return False
    return True


def is_error(value) -> bool:
    return isinstance(value, Error)
