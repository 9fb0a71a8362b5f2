from __future__ import annotations

"""
Static indexer for Monkey documents.

The document is run through the real parser, never the evaluator. We keep:
- parse diagnostics, located at the token that triggered them
- top-level `let` bindings: 'function' when bound to a function literal,
  'var' otherwise

Positions are 0-based (line, col), as the language server protocol expects.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from monkey import ast
from monkey.reader.lexer import Lexer
from monkey.reader.parser import Parser


@dataclass
class SymbolDef:
    name: str
    kind: str  # "var" | "function"
    line: int
    col: int


@dataclass
class DiagnosticEntry:
    message: str
    line: int
    col: int


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)


def _zero_based(line: int, column: int) -> tuple[int, int]:
    return max(line - 1, 0), max(column - 1, 0)


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    parser = Parser(Lexer(text))
    program = parser.parse_program()

    for diag in parser.diagnostics:
        line, col = _zero_based(diag.line, diag.column)
        idx.diagnostics.append(DiagnosticEntry(message=diag.message, line=line, col=col))

    for stmt in program.statements:
        if not isinstance(stmt, ast.LetStatement):
            continue
        name = stmt.name.value
        kind = "function" if isinstance(stmt.value, ast.FunctionLiteral) else "var"
        line, col = _zero_based(stmt.name.token.line, stmt.name.token.column)
        # later bindings shadow earlier ones, as at runtime
        idx.symbols[name] = SymbolDef(name=name, kind=kind, line=line, col=col)

    return idx


KEYWORDS: List[str] = ["fn", "let", "true", "false", "if", "else", "return"]

# Builtin signatures for hover and completion without evaluation
BUILTIN_SIGNATURES: Dict[str, str] = {
    "len": "len(x) -> length of a string or array",
    "first": "first(arr) -> first element or null",
    "last": "last(arr) -> last element or null",
    "rest": "rest(arr) -> new array without the first element",
    "push": "push(arr, x) -> new array with x appended",
    "puts": "puts(x, ...) -> print each argument, returns null",
}
