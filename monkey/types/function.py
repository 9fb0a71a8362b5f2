"""Callable runtime values: user functions (closures) and native builtins."""

from __future__ import annotations

from io import StringIO
from typing import Callable, TYPE_CHECKING

from monkey.types.environment import Environment
from monkey.types.objects import ObjectType

if TYPE_CHECKING:
    from monkey import ast
    from monkey.types.objects import Object


class Function:
    """A function literal paired with the environment it was evaluated in.

    `parameters` and `body` are the literal's own AST nodes, shared rather
    than copied.
    """

    __slots__ = ("parameters", "body", "env")
    type = ObjectType.FUNCTION

    def __init__(
        self,
        parameters: tuple[ast.Identifier, ...],
        body: ast.BlockStatement,
        env: Environment,
    ):
        self.parameters = parameters
        self.body = body
        self.env = env

    def inspect(self) -> str:
        with StringIO() as buffer:
            buffer.write("fn(")
            buffer.write(", ".join(str(p) for p in self.parameters))
            buffer.write(") {\n")
            buffer.write(str(self.body))
            buffer.write("\n}")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return self.inspect()


BuiltinFunction = Callable[..., "Object"]


class Builtin:
    __slots__ = ("name", "fn")
    type = ObjectType.BUILTIN

    def __init__(self, name: str, fn: BuiltinFunction):
        self.name = name
        self.fn = fn

    def __call__(self, *args: Object) -> Object:
        return self.fn(*args)

    def inspect(self) -> str:
        return "builtin function"

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"
