# Copyright 2026 Typealgebra Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexer and parser for type expressions."""

from typealgebra.parser.lexer import LexerError, Token, TokenType, tokenize
from typealgebra.parser.parser import ParseError, parse_type

__all__ = [
    "parse_type",
    "ParseError",
    "tokenize",
    "Token",
    "TokenType",
    "LexerError",
]
