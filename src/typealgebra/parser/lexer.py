# Copyright 2026 Typealgebra Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical scanner for type expressions.

Converts text such as ``?App\\Id | (Countable & Traversable)`` into tokens.
Qualified names are not joined here: ``\\App\\Id`` yields separate
``BACKSLASH`` and ``IDENTIFIER`` tokens and the parser reassembles them.
"""

import enum
import re
from dataclasses import dataclass

# ###############
# Public Interface
# ###############


class TokenType(enum.Enum):
    """Kinds of token in a type expression."""

    PIPE = "|"
    AMPERSAND = "&"
    QUESTION = "?"
    LPAREN = "("
    RPAREN = ")"
    BACKSLASH = "\\"
    IDENTIFIER = "IDENTIFIER"
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """One token and where it starts (``line`` and ``column`` are 1-based)."""

    type: TokenType
    value: str
    line: int
    column: int


class LexerError(Exception):
    """Raised for a character that cannot start any token."""

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"Line {line}, column {column}: {message}")
        self.line = line
        self.column = column


def tokenize(source: str) -> list[Token]:
    """Split *source* into tokens, always terminated by one EOF token.

    Raises:
        LexerError: On a character outside the expression alphabet.
    """
    tokens: list[Token] = []
    line, line_start = 1, 0
    pos = 0
    while pos < len(source):
        match = _TOKEN_PATTERN.match(source, pos)
        if match is None:
            raise LexerError(f"Unexpected character: {source[pos]!r}", line, pos - line_start + 1)
        text = match.group()
        if match.lastgroup == "space":
            newlines = text.count("\n")
            if newlines:
                line += newlines
                line_start = pos + text.rindex("\n") + 1
        else:
            kind = TokenType.IDENTIFIER if match.lastgroup == "ident" else TokenType(text)
            tokens.append(Token(kind, text, line, pos - line_start + 1))
        pos = match.end()
    tokens.append(Token(TokenType.EOF, "", line, pos - line_start + 1))
    return tokens


# ################
# Implementation
# ################

_TOKEN_PATTERN = re.compile(
    r"""
    (?P<space>[ \t\r\n]+)
    | (?P<ident>[^\W\d]\w*)
    | (?P<op>[|&?()\\])
    """,
    re.VERBOSE,
)
