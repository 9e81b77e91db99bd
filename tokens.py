"""Token definitions for the lexer.

This module defines the `TokenType` enum for all token categories recognized
by the lexer and a small `Token` dataclass that holds a category and the
literal text it was scanned from. Tokens are the atomic units produced by the
lexer and consumed by the statement recognizers.
"""

from __future__ import annotations
from enum import Enum, auto
from dataclasses import dataclass


class TokenType(Enum):
    # Keywords
    VARIABLE = auto()  # int, float, string
    CYCLE = auto()  # while
    WRITE = auto()
    READ = auto()
    CONDITION = auto()  # if, else

    # Operators
    COMPARISON = auto()
    ARITHMETIC = auto()
    OPERATOR = auto()  # = and ;

    # Literals
    STRING = auto()
    NUMBER = auto()
    IDENTIFIER = auto()

    # Delimiters
    PAREN_OPEN = auto()
    PAREN_CLOSE = auto()
    BRACE_OPEN = auto()
    BRACE_CLOSE = auto()
    BRACKET_OPEN = auto()
    BRACKET_CLOSE = auto()

    # Sentinel returned by the parser when peeking past the last token.
    # The lexer never emits it.
    EOF = auto()

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Token:
    type: TokenType
    text: str = ""

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.text!r})"

    def is_(self, token_type: TokenType, text: str | None = None) -> bool:
        """Return True if the token has the given category (and text, if given)."""
        if self.type != token_type:
            return False
        return text is None or self.text == text
