"""Monkey Lexer

A single-pass, pull-based scanner: each call to `next_token()` returns the
next token of the source. Once the input is exhausted every further call
returns an EOF token.

- identifiers: runs of ASCII letters and '_', checked against the keyword table
- integers: runs of ASCII digits (no sign, no floats)
- strings: double-quoted, no escapes; an unterminated string is ILLEGAL
"""

from __future__ import annotations

from typing import Iterator

from monkey.reader.token import Token, TokenType, lookup_ident


SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.ASTERISK,
    "/": TokenType.SLASH,
    "<": TokenType.LT,
    ">": TokenType.GT,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    ":": TokenType.COLON,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
}

# '!' and '=' need one character of lookahead
TWO_CHAR_TOKENS: dict[str, tuple[TokenType, TokenType]] = {
    "=": (TokenType.ASSIGN, TokenType.EQ),
    "!": (TokenType.BANG, TokenType.NOT_EQ),
}

EOF_CHAR = ""


def is_letter(ch: str) -> bool:
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z") or ch == "_"


def is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


class Lexer:
    __slots__ = ("source", "position", "read_position", "ch", "line", "column")

    def __init__(self, source: str):
        self.source = source
        self.position = 0       # index of self.ch
        self.read_position = 0  # index of the next char to read
        self.ch = EOF_CHAR
        self.line = 1
        self.column = 0
        self._read_char()

    def _read_char(self) -> None:
        if self.ch == "\n":
            self.line += 1
            self.column = 0
        if self.read_position >= len(self.source):
            self.ch = EOF_CHAR
        else:
            self.ch = self.source[self.read_position]
        self.position = self.read_position
        self.read_position += 1
        self.column += 1

    def _peek_char(self) -> str:
        if self.read_position >= len(self.source):
            return EOF_CHAR
        return self.source[self.read_position]

    def _skip_whitespace(self) -> None:
        while self.ch and self.ch.isspace():
            self._read_char()

    def _read_while(self, predicate) -> str:
        start = self.position
        while self.ch and predicate(self.ch):
            self._read_char()
        return self.source[start:self.position]

    def _read_string(self) -> tuple[str, bool]:
        """Read past the opening quote; returns (text, terminated)."""
        start = self.position + 1
        while True:
            self._read_char()
            if self.ch == '"' or self.ch == EOF_CHAR:
                break
        return self.source[start:self.position], self.ch == '"'

    def next_token(self) -> Token:
        self._skip_whitespace()
        line, column = self.line, self.column
        ch = self.ch

        if ch == EOF_CHAR:
            return Token(TokenType.EOF, "", line, column)

        if ch in TWO_CHAR_TOKENS:
            single, double = TWO_CHAR_TOKENS[ch]
            if self._peek_char() == "=":
                self._read_char()
                tok = Token(double, ch + "=", line, column)
            else:
                tok = Token(single, ch, line, column)
        elif ch in SINGLE_CHAR_TOKENS:
            tok = Token(SINGLE_CHAR_TOKENS[ch], ch, line, column)
        elif ch == '"':
            text, terminated = self._read_string()
            if not terminated:
                return Token(TokenType.ILLEGAL, '"' + text, line, column)
            tok = Token(TokenType.STRING, text, line, column)
        elif is_letter(ch):
            # identifier/number readers stop on the first non-matching char
            word = self._read_while(is_letter)
            return Token(lookup_ident(word), word, line, column)
        elif is_digit(ch):
            return Token(TokenType.INT, self._read_while(is_digit), line, column)
        else:
            tok = Token(TokenType.ILLEGAL, ch, line, column)

        self._read_char()
        return tok

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including the first EOF."""
        while True:
            tok = self.next_token()
            yield tok
            if tok.type is TokenType.EOF:
                return


def lex(source: str) -> list[Token]:
    return list(Lexer(source))
