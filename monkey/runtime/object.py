"""Runtime value model. The evaluator produces and consumes only these types.

Integer, Boolean, String and Null are plain values compared by value: any two `Boolean(True)` are interchangeable.
Function and Builtin compare by identity. ReturnValue is an evaluator-internal marker that never escapes a function
call or the top-level program. Error is a normal value that represents a runtime failure and flows upward through the
same channel as every other result.
"""

import enum
from abc import abstractmethod, ABC
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Tuple

from monkey.syntax.ast import BlockStatement, Identifier


class ObjectType(enum.Enum):
    INTEGER = "INTEGER"
    BOOLEAN = "BOOLEAN"
    STRING = "STRING"
    NULL = "NULL"
    RETURN_VALUE = "RETURN_VALUE"
    FUNCTION = "FUNCTION"
    BUILTIN = "BUILTIN"
    ERROR = "ERROR"

    def __str__(self):
        return self.value


class Object(ABC):
    """Superclass of every runtime value."""
    type: ClassVar[ObjectType]

    @abstractmethod
    def inspect(self):
        """Human-readable rendering, as printed by the shell."""

    def __str__(self):
        return self.inspect()


@dataclass(frozen=True)
class Integer(Object):
    type: ClassVar[ObjectType] = ObjectType.INTEGER
    value: int

    def inspect(self):
        return str(self.value)


@dataclass(frozen=True)
class Boolean(Object):
    type: ClassVar[ObjectType] = ObjectType.BOOLEAN
    value: bool

    def inspect(self):
        return "true" if self.value else "false"


@dataclass(frozen=True)
class String(Object):
    type: ClassVar[ObjectType] = ObjectType.STRING
    value: str

    def inspect(self):
        return self.value


@dataclass(frozen=True)
class Null(Object):
    type: ClassVar[ObjectType] = ObjectType.NULL

    def inspect(self):
        return "null"


@dataclass(frozen=True)
class ReturnValue(Object):
    """Wraps the value of a `return` while it unwinds through enclosing blocks."""
    type: ClassVar[ObjectType] = ObjectType.RETURN_VALUE
    value: Object

    def inspect(self):
        return self.value.inspect()


@dataclass(frozen=True)
class Error(Object):
    type: ClassVar[ObjectType] = ObjectType.ERROR
    message: str

    def inspect(self):
        return f"ERROR: {self.message}"


@dataclass(frozen=True, eq=False)
class Function(Object):
    """A closure: parameters and body from a FunctionLiteral plus the Environment that was current when the literal was
    evaluated. env is shared with its creator, never copied.
    """
    type: ClassVar[ObjectType] = ObjectType.FUNCTION
    parameters: Tuple[Identifier, ...]
    body: BlockStatement
    env: Any  # Environment

    def inspect(self):
        params = ", ".join(param.value for param in self.parameters)
        return f"fn({params}) {{\n{self.body}\n}}"

    def __repr__(self):
        params = ", ".join(param.value for param in self.parameters)
        return f"Function(params=({params}), env={self.env!r})"


@dataclass(frozen=True, eq=False)
class Builtin(Object):
    """A native callable taking a list of Objects and returning an Object."""
    type: ClassVar[ObjectType] = ObjectType.BUILTIN
    fn: Callable
    name: str = ""

    def inspect(self):
        return "builtin function"


NULL = Null()


def is_error(obj):
    return obj is not None and obj.type is ObjectType.ERROR


def is_interrupt(obj):
    """Error or ReturnValue: values that stop evaluation at the point they are produced."""
    return obj is not None and obj.type in (ObjectType.ERROR, ObjectType.RETURN_VALUE)


def is_truthy(obj):
    """Null and false are falsy, everything else (integer zero included) is truthy."""
    match obj:
        case Null():
            return False
        case Boolean(value=value):
            return value
        case _:
            return True
