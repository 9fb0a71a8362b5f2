"""Abstract syntax tree for Monkey programs.

Nodes are frozen dataclasses. The set of statement and expression classes is
closed: consumers (the evaluator, the indexer) dispatch with `match` over the
`Statement` and `Expression` unions below. Every node keeps the token it was
built from, and `str(node)` re-renders it in canonical form with every
operator application fully parenthesised.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from monkey.reader.token import Token


class NodeMixin:
    token: Token

    def token_literal(self) -> str:
        return self.token.literal


# -------------------------------
# Expressions
# -------------------------------
@dataclass(frozen=True)
class Identifier(NodeMixin):
    token: Token
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class IntegerLiteral(NodeMixin):
    token: Token
    value: int

    def __str__(self) -> str:
        return self.token.literal


@dataclass(frozen=True)
class StringLiteral(NodeMixin):
    token: Token
    value: str

    def __str__(self) -> str:
        return self.token.literal


@dataclass(frozen=True)
class Boolean(NodeMixin):
    token: Token
    value: bool

    def __str__(self) -> str:
        return self.token.literal


@dataclass(frozen=True)
class PrefixExpression(NodeMixin):
    token: Token
    operator: str
    right: Optional[Expression]

    def __str__(self) -> str:
        return f"({self.operator}{_render(self.right)})"


@dataclass(frozen=True)
class InfixExpression(NodeMixin):
    token: Token
    left: Expression
    operator: str
    right: Optional[Expression]

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {_render(self.right)})"


@dataclass(frozen=True)
class IfExpression(NodeMixin):
    token: Token
    condition: Optional[Expression]
    consequence: BlockStatement
    alternative: Optional[BlockStatement] = None

    def __str__(self) -> str:
        text = f"if{_render(self.condition)} {self.consequence}"
        if self.alternative is not None:
            text += f"else {self.alternative}"
        return text


@dataclass(frozen=True)
class FunctionLiteral(NodeMixin):
    token: Token
    parameters: tuple[Identifier, ...]
    body: BlockStatement

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"{self.token_literal()}({params}) {self.body}"


@dataclass(frozen=True)
class CallExpression(NodeMixin):
    token: Token
    function: Expression
    arguments: tuple[Expression, ...]

    def __str__(self) -> str:
        args = ", ".join(str(a) for a in self.arguments)
        return f"{self.function}({args})"


@dataclass(frozen=True)
class ArrayLiteral(NodeMixin):
    token: Token
    elements: tuple[Expression, ...]

    def __str__(self) -> str:
        return "[" + ", ".join(str(e) for e in self.elements) + "]"


@dataclass(frozen=True)
class IndexExpression(NodeMixin):
    token: Token
    left: Expression
    index: Optional[Expression]

    def __str__(self) -> str:
        return f"({self.left}[{_render(self.index)}])"


@dataclass(frozen=True)
class HashLiteral(NodeMixin):
    """Key/value expression pairs, kept in source order."""

    token: Token
    pairs: tuple[tuple[Expression, Expression], ...]

    def __str__(self) -> str:
        return "{" + ", ".join(f"{k}: {v}" for k, v in self.pairs) + "}"


# -------------------------------
# Statements
# -------------------------------
@dataclass(frozen=True)
class LetStatement(NodeMixin):
    token: Token
    name: Identifier
    value: Optional[Expression]

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.name} = {_render(self.value)};"


@dataclass(frozen=True)
class ReturnStatement(NodeMixin):
    token: Token
    value: Optional[Expression]

    def __str__(self) -> str:
        return f"{self.token_literal()} {_render(self.value)};"


@dataclass(frozen=True)
class ExpressionStatement(NodeMixin):
    token: Token
    expression: Optional[Expression]

    def __str__(self) -> str:
        return _render(self.expression)


@dataclass(frozen=True)
class BlockStatement(NodeMixin):
    token: Token
    statements: tuple[Statement, ...]

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)


@dataclass(frozen=True)
class Program:
    """Root of the tree; the only node without a token of its own."""

    statements: tuple[Statement, ...]

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)


def _render(node: Optional[Node]) -> str:
    # Sub-expressions are None only in programs that failed to parse
    return "" if node is None else str(node)


Expression = Union[
    Identifier,
    IntegerLiteral,
    StringLiteral,
    Boolean,
    PrefixExpression,
    InfixExpression,
    IfExpression,
    FunctionLiteral,
    CallExpression,
    ArrayLiteral,
    IndexExpression,
    HashLiteral,
]

Statement = Union[LetStatement, ReturnStatement, ExpressionStatement, BlockStatement]

Node = Union[Program, Statement, Expression]
