# Copyright 2026 Typealgebra Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recursive-descent parser for type expressions.

Grammar (``&`` binds tighter than ``|``)::

    expr   := inter ('|' inter)*
    inter  := prefix ('&' prefix)*
    prefix := '?' prefix | primary
    primary:= name | '(' expr ')'
    name   := '\\'? IDENT ('\\' IDENT)*

``?T`` is shorthand for ``T | null``.
"""

from __future__ import annotations

from typealgebra.model.types import TypeExpr, intersection, named, union
from typealgebra.parser.lexer import Token, TokenType, tokenize

# ###############
# Public Interface
# ###############


class ParseError(Exception):
    """Raised when the parser encounters a syntactically invalid expression.

    Attributes:
        line: 1-based line number of the error.
        column: 1-based column number of the error.
    """

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"Line {line}, column {column}: {message}")
        self.line = line
        self.column = column


def parse_type(source: str, namespace: str = "") -> TypeExpr:
    """Parse a type expression written in *namespace*.

    Args:
        source: The expression text, e.g. ``int | string``.
        namespace: Namespace recorded on every named reference for relative lookup.

    Returns:
        The normalized type expression.

    Raises:
        LexerError: If the source contains invalid characters.
        ParseError: If the source is syntactically invalid.
    """
    return _Parser(tokenize(source), namespace).parse()


# ################
# Implementation
# ################


class _Parser:
    """Recursive-descent parser over a token list."""

    def __init__(self, tokens: list[Token], namespace: str) -> None:
        self._tokens = tokens
        self._pos = 0
        self._namespace = namespace

    def parse(self) -> TypeExpr:
        if self._check(TokenType.EOF):
            tok = self._peek()
            raise ParseError("Expected a type expression", tok.line, tok.column)
        expr = self._parse_union()
        if not self._check(TokenType.EOF):
            tok = self._peek()
            raise ParseError(f"Unexpected {tok.value!r} after type expression", tok.line, tok.column)
        return expr

    # ------------------------------------------------------------------
    # Token helpers
    # ------------------------------------------------------------------

    def _peek(self) -> Token:
        return self._tokens[self._pos]

    def _check(self, token_type: TokenType) -> bool:
        return self._peek().type == token_type

    def _advance(self) -> Token:
        tok = self._tokens[self._pos]
        if tok.type != TokenType.EOF:
            self._pos += 1
        return tok

    def _expect(self, token_type: TokenType, what: str) -> Token:
        tok = self._peek()
        if tok.type != token_type:
            found = "end of input" if tok.type == TokenType.EOF else repr(tok.value)
            raise ParseError(f"Expected {what}, found {found}", tok.line, tok.column)
        return self._advance()

    # ------------------------------------------------------------------
    # Grammar rules
    # ------------------------------------------------------------------

    def _parse_union(self) -> TypeExpr:
        operands = [self._parse_intersection()]
        while self._check(TokenType.PIPE):
            self._advance()
            operands.append(self._parse_intersection())
        return union(*operands)

    def _parse_intersection(self) -> TypeExpr:
        operands = [self._parse_prefix()]
        while self._check(TokenType.AMPERSAND):
            self._advance()
            operands.append(self._parse_prefix())
        return intersection(*operands)

    def _parse_prefix(self) -> TypeExpr:
        if self._check(TokenType.QUESTION):
            self._advance()
            return union(self._parse_prefix(), named("null"))
        return self._parse_primary()

    def _parse_primary(self) -> TypeExpr:
        if self._check(TokenType.LPAREN):
            self._advance()
            inner = self._parse_union()
            self._expect(TokenType.RPAREN, "')'")
            return inner
        return self._parse_name()

    def _parse_name(self) -> TypeExpr:
        parts: list[str] = []
        if self._check(TokenType.BACKSLASH):
            parts.append(self._advance().value)
        parts.append(self._expect(TokenType.IDENTIFIER, "a type name").value)
        while self._check(TokenType.BACKSLASH):
            parts.append(self._advance().value)
            parts.append(self._expect(TokenType.IDENTIFIER, "a name segment after '\\'").value)
        return named("".join(parts), self._namespace)
