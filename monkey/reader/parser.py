"""Monkey Parser

A Pratt (operator-precedence) parser over a Lexer's token stream.

- exactly two tokens of lookahead: `cur_token` and `peek_token`
- every token type may register a prefix rule; operators also register an
  infix rule and a binding precedence
- errors never raise: a formatted message is appended to `errors`, the
  current statement is dropped and parsing resumes at the next token
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Optional

from monkey import ast
from monkey.reader.lexer import Lexer
from monkey.reader.token import Token, TokenType

logger = logging.getLogger(__name__)

INT64_MAX = 2**63 - 1


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2       # == !=
    LESSGREATER = 3  # < >
    SUM = 4          # + -
    PRODUCT = 5      # * /
    PREFIX = 6       # -x !x
    CALL = 7         # f(x)
    INDEX = 8        # a[i]


PRECEDENCES: dict[TokenType, Precedence] = {
    TokenType.EQ: Precedence.EQUALS,
    TokenType.NOT_EQ: Precedence.EQUALS,
    TokenType.LT: Precedence.LESSGREATER,
    TokenType.GT: Precedence.LESSGREATER,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.ASTERISK: Precedence.PRODUCT,
    TokenType.SLASH: Precedence.PRODUCT,
    TokenType.LPAREN: Precedence.CALL,
    TokenType.LBRACKET: Precedence.INDEX,
}

PrefixParseFn = Callable[[], Optional["ast.Expression"]]
InfixParseFn = Callable[["ast.Expression"], Optional["ast.Expression"]]


@dataclass(frozen=True)
class ParseDiagnostic:
    """A parse error message located at the token that caused it (1-based)."""

    message: str
    line: int
    column: int

    def __str__(self) -> str:
        return self.message


class Parser:
    def __init__(self, lexer: Lexer):
        self.lexer = lexer
        self.diagnostics: list[ParseDiagnostic] = []

        self.prefix_parse_fns: dict[TokenType, PrefixParseFn] = {
            TokenType.IDENT: self.parse_identifier,
            TokenType.INT: self.parse_integer_literal,
            TokenType.STRING: self.parse_string_literal,
            TokenType.TRUE: self.parse_boolean,
            TokenType.FALSE: self.parse_boolean,
            TokenType.BANG: self.parse_prefix_expression,
            TokenType.MINUS: self.parse_prefix_expression,
            TokenType.LPAREN: self.parse_grouped_expression,
            TokenType.IF: self.parse_if_expression,
            TokenType.FUNCTION: self.parse_function_literal,
            TokenType.LBRACKET: self.parse_array_literal,
            TokenType.LBRACE: self.parse_hash_literal,
        }
        self.infix_parse_fns: dict[TokenType, InfixParseFn] = {
            tt: self.parse_infix_expression
            for tt in (
                TokenType.PLUS,
                TokenType.MINUS,
                TokenType.ASTERISK,
                TokenType.SLASH,
                TokenType.EQ,
                TokenType.NOT_EQ,
                TokenType.LT,
                TokenType.GT,
            )
        }
        self.infix_parse_fns[TokenType.LPAREN] = self.parse_call_expression
        self.infix_parse_fns[TokenType.LBRACKET] = self.parse_index_expression

        # Read two tokens so both cur_token and peek_token are set
        self.cur_token: Token = lexer.next_token()
        self.peek_token: Token = lexer.next_token()

    @property
    def errors(self) -> list[str]:
        return [d.message for d in self.diagnostics]

    # -------------------------------
    # Token helpers
    # -------------------------------
    def next_token(self) -> None:
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, tt: TokenType) -> bool:
        return self.cur_token.type is tt

    def peek_token_is(self, tt: TokenType) -> bool:
        return self.peek_token.type is tt

    def expect_peek(self, tt: TokenType) -> bool:
        """Advance if the peek token has type `tt`, otherwise record an error."""
        if self.peek_token_is(tt):
            self.next_token()
            return True
        self.peek_error(tt)
        return False

    def peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek_token.type, Precedence.LOWEST)

    def cur_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.cur_token.type, Precedence.LOWEST)

    # -------------------------------
    # Diagnostics
    # -------------------------------
    def _error(self, message: str, tok: Token) -> None:
        logger.debug("parse error at %d:%d: %s", tok.line, tok.column, message)
        self.diagnostics.append(ParseDiagnostic(message, tok.line, tok.column))

    def peek_error(self, tt: TokenType) -> None:
        self._error(
            f"expected next token to be {tt}, got {self.peek_token.type} instead",
            self.peek_token,
        )

    def no_prefix_parse_fn_error(self, tt: TokenType) -> None:
        self._error(f"no prefix parse function for {tt} found", self.cur_token)

    # -------------------------------
    # Statements
    # -------------------------------
    def parse_program(self) -> ast.Program:
        statements: list[ast.Statement] = []
        while not self.cur_token_is(TokenType.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self.next_token()
        return ast.Program(tuple(statements))

    def parse_statement(self) -> Optional[ast.Statement]:
        if self.cur_token_is(TokenType.LET):
            return self.parse_let_statement()
        if self.cur_token_is(TokenType.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> Optional[ast.LetStatement]:
        token = self.cur_token
        if not self.expect_peek(TokenType.IDENT):
            return None
        name = ast.Identifier(self.cur_token, self.cur_token.literal)
        if not self.expect_peek(TokenType.ASSIGN):
            return None
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None
        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()
        return ast.LetStatement(token, name, value)

    def parse_return_statement(self) -> Optional[ast.ReturnStatement]:
        token = self.cur_token
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None
        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()
        return ast.ReturnStatement(token, value)

    def parse_expression_statement(self) -> Optional[ast.ExpressionStatement]:
        token = self.cur_token
        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None:
            return None
        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()
        return ast.ExpressionStatement(token, expression)

    def parse_block_statement(self) -> ast.BlockStatement:
        token = self.cur_token
        statements: list[ast.Statement] = []
        self.next_token()
        while not self.cur_token_is(TokenType.RBRACE):
            if self.cur_token_is(TokenType.EOF):
                self._error(
                    f"expected next token to be {TokenType.RBRACE}, got {TokenType.EOF} instead",
                    self.cur_token,
                )
                break
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self.next_token()
        return ast.BlockStatement(token, tuple(statements))

    # -------------------------------
    # Expressions
    # -------------------------------
    def parse_expression(self, precedence: Precedence) -> Optional[ast.Expression]:
        prefix = self.prefix_parse_fns.get(self.cur_token.type)
        if prefix is None:
            self.no_prefix_parse_fn_error(self.cur_token.type)
            return None
        left = prefix()

        while (
            left is not None
            and not self.peek_token_is(TokenType.SEMICOLON)
            and precedence < self.peek_precedence()
        ):
            infix = self.infix_parse_fns.get(self.peek_token.type)
            if infix is None:
                return left
            self.next_token()
            left = infix(left)
        return left

    def parse_identifier(self) -> ast.Identifier:
        return ast.Identifier(self.cur_token, self.cur_token.literal)

    def parse_integer_literal(self) -> Optional[ast.IntegerLiteral]:
        token = self.cur_token
        value = int(token.literal)
        if value > INT64_MAX:
            self._error(f'could not parse "{token.literal}" as integer', token)
            return None
        return ast.IntegerLiteral(token, value)

    def parse_string_literal(self) -> ast.StringLiteral:
        return ast.StringLiteral(self.cur_token, self.cur_token.literal)

    def parse_boolean(self) -> ast.Boolean:
        return ast.Boolean(self.cur_token, self.cur_token_is(TokenType.TRUE))

    def parse_prefix_expression(self) -> Optional[ast.PrefixExpression]:
        token = self.cur_token
        self.next_token()
        right = self.parse_expression(Precedence.PREFIX)
        if right is None:
            return None
        return ast.PrefixExpression(token, token.literal, right)

    def parse_infix_expression(self, left: ast.Expression) -> Optional[ast.InfixExpression]:
        token = self.cur_token
        precedence = self.cur_precedence()
        self.next_token()
        right = self.parse_expression(precedence)
        if right is None:
            return None
        return ast.InfixExpression(token, left, token.literal, right)

    def parse_grouped_expression(self) -> Optional[ast.Expression]:
        self.next_token()
        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None or not self.expect_peek(TokenType.RPAREN):
            return None
        return expression

    def parse_if_expression(self) -> Optional[ast.IfExpression]:
        token = self.cur_token
        if not self.expect_peek(TokenType.LPAREN):
            return None
        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)
        if condition is None:
            return None
        if not self.expect_peek(TokenType.RPAREN):
            return None
        if not self.expect_peek(TokenType.LBRACE):
            return None
        consequence = self.parse_block_statement()

        alternative = None
        if self.peek_token_is(TokenType.ELSE):
            self.next_token()
            if not self.expect_peek(TokenType.LBRACE):
                return None
            alternative = self.parse_block_statement()
        return ast.IfExpression(token, condition, consequence, alternative)

    def parse_function_literal(self) -> Optional[ast.FunctionLiteral]:
        token = self.cur_token
        if not self.expect_peek(TokenType.LPAREN):
            return None
        parameters = self.parse_function_parameters()
        if parameters is None:
            return None
        if not self.expect_peek(TokenType.LBRACE):
            return None
        body = self.parse_block_statement()
        return ast.FunctionLiteral(token, parameters, body)

    def parse_function_parameters(self) -> Optional[tuple[ast.Identifier, ...]]:
        if self.peek_token_is(TokenType.RPAREN):
            self.next_token()
            return ()
        identifiers: list[ast.Identifier] = []
        if not self.expect_peek(TokenType.IDENT):
            return None
        identifiers.append(self.parse_identifier())
        while self.peek_token_is(TokenType.COMMA):
            self.next_token()
            if not self.expect_peek(TokenType.IDENT):
                return None
            identifiers.append(self.parse_identifier())
        if not self.expect_peek(TokenType.RPAREN):
            return None
        return tuple(identifiers)

    def parse_expression_list(self, end: TokenType) -> Optional[tuple[ast.Expression, ...]]:
        """Comma-separated expressions up to the closing `end` token."""
        if self.peek_token_is(end):
            self.next_token()
            return ()
        items: list[ast.Expression] = []
        self.next_token()
        item = self.parse_expression(Precedence.LOWEST)
        if item is None:
            return None
        items.append(item)
        while self.peek_token_is(TokenType.COMMA):
            self.next_token()
            self.next_token()
            item = self.parse_expression(Precedence.LOWEST)
            if item is None:
                return None
            items.append(item)
        if not self.expect_peek(end):
            return None
        return tuple(items)

    def parse_call_expression(self, function: ast.Expression) -> Optional[ast.CallExpression]:
        token = self.cur_token
        arguments = self.parse_expression_list(TokenType.RPAREN)
        if arguments is None:
            return None
        return ast.CallExpression(token, function, arguments)

    def parse_array_literal(self) -> Optional[ast.ArrayLiteral]:
        token = self.cur_token
        elements = self.parse_expression_list(TokenType.RBRACKET)
        if elements is None:
            return None
        return ast.ArrayLiteral(token, elements)

    def parse_index_expression(self, left: ast.Expression) -> Optional[ast.IndexExpression]:
        token = self.cur_token
        self.next_token()
        index = self.parse_expression(Precedence.LOWEST)
        if index is None or not self.expect_peek(TokenType.RBRACKET):
            return None
        return ast.IndexExpression(token, left, index)

    def parse_hash_literal(self) -> Optional[ast.HashLiteral]:
        token = self.cur_token
        pairs: list[tuple[ast.Expression, ast.Expression]] = []
        while not self.peek_token_is(TokenType.RBRACE):
            self.next_token()
            key = self.parse_expression(Precedence.LOWEST)
            if key is None or not self.expect_peek(TokenType.COLON):
                return None
            self.next_token()
            value = self.parse_expression(Precedence.LOWEST)
            if value is None:
                return None
            pairs.append((key, value))
            if not self.peek_token_is(TokenType.RBRACE) and not self.expect_peek(TokenType.COMMA):
                return None
        if not self.expect_peek(TokenType.RBRACE):
            return None
        return ast.HashLiteral(token, tuple(pairs))


def parse(source: str) -> tuple[ast.Program, list[str]]:
    """Parse `source`; returns the (possibly partial) program and its diagnostics."""
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    return program, parser.errors
