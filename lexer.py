"""
Lexer for the mini imperative language.

Overview:
- This module implements a small hand-written lexical analyzer (scanner) that
    transforms an input source string into a list of `Token` objects defined
    in `tokens.py`.
- It recognizes the type keywords (`int`, `float`, `string`), the statement
    keywords (`while`, `if`, `else`, `write`, `read`), identifiers, unsigned
    number literals (`12`, `3.5`), double-quoted strings, comparison,
    arithmetic and assignment operators, and the three bracket pairs.

Examples:
    Input:  "int x = 5;"
    Tokens: [VARIABLE('int'), IDENTIFIER('x'), OPERATOR('='), NUMBER('5'),
             OPERATOR(';')]

Implementation notes:
- Categories are tried in a fixed priority order at each position; the first
    one that matches at the current position wins and the cursor moves past
    the matched text. Keywords are recognized as whole words only, so
    `integer` is an identifier and not `int` followed by `eger`.
- Two-character comparisons are checked before their one-character prefixes
    and before `=`, so `==` is never lexed as two assignments.
- Any character that starts no token (including whitespace and an
    unterminated `"`) is dropped and scanning continues. Nothing is ever
    raised; the dropped characters are kept in `self.skipped`.
- No line or column information is tracked.
"""

from __future__ import annotations
import logging
from typing import Optional, List, Tuple
from tokens import Token, TokenType

logger = logging.getLogger(__name__)


KEYWORDS = {
    "int": TokenType.VARIABLE,
    "float": TokenType.VARIABLE,
    "string": TokenType.VARIABLE,
    "while": TokenType.CYCLE,
    "write": TokenType.WRITE,
    "read": TokenType.READ,
    "if": TokenType.CONDITION,
    "else": TokenType.CONDITION,
}

COMPARISONS = (">=", "<=", "==", "!=", ">", "<")

SINGLE_CHAR_TOKENS = {
    "+": TokenType.ARITHMETIC,
    "-": TokenType.ARITHMETIC,
    "*": TokenType.ARITHMETIC,
    "/": TokenType.ARITHMETIC,
    "=": TokenType.OPERATOR,
    ";": TokenType.OPERATOR,
    ")": TokenType.PAREN_CLOSE,
    "(": TokenType.PAREN_OPEN,
    "]": TokenType.BRACKET_CLOSE,
    "[": TokenType.BRACKET_OPEN,
    "}": TokenType.BRACE_CLOSE,
    "{": TokenType.BRACE_OPEN,
}


def _is_word_start(ch: str) -> bool:
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z") or ch == "_"


def _is_word_char(ch: str) -> bool:
    return _is_word_start(ch) or _is_digit(ch)


def _is_digit(ch: Optional[str]) -> bool:
    return ch is not None and "0" <= ch <= "9"


class Lexer:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.current_char = self.text[self.pos] if self.text else None
        self.skipped: List[Tuple[int, str]] = []

    def advance(self, count: int = 1) -> None:
        """Advance `count` characters."""
        self.pos += count
        if self.pos < len(self.text):
            self.current_char = self.text[self.pos]
        else:
            self.current_char = None

    def peek_char(self, offset: int = 1) -> Optional[str]:
        """Look ahead without consuming."""
        next_pos = self.pos + offset
        if next_pos < len(self.text):
            return self.text[next_pos]
        return None

    def skip_char(self) -> None:
        """Drop the current character; it starts no token."""
        if not self.current_char.isspace():
            logger.debug(f"Skipping unrecognized character {self.current_char!r} at {self.pos}")
            self.skipped.append((self.pos, self.current_char))
        self.advance()

    def word(self) -> str:
        """Scan a run of letters, digits and underscores."""
        start = self.pos
        while self.current_char is not None and _is_word_char(self.current_char):
            self.advance()
        return self.text[start : self.pos]

    def number(self) -> str:
        """Scan digits with an optional `.digits` fraction."""
        start = self.pos
        while _is_digit(self.current_char):
            self.advance()

        # A dot only belongs to the number when a digit follows it: `5.` is
        # the number `5` and a dropped `.`.
        if self.current_char == "." and _is_digit(self.peek_char()):
            self.advance()
            while _is_digit(self.current_char):
                self.advance()

        return self.text[start : self.pos]

    def string(self) -> Optional[str]:
        """Scan a double-quoted string, or return None if it is unterminated."""
        end = self.text.find('"', self.pos + 1)
        if end == -1:
            return None
        literal = self.text[self.pos : end + 1]
        self.advance(len(literal))
        return literal

    def get_next_token(self) -> Optional[Token]:
        """Return the next token, or None at end of input."""
        while self.current_char is not None:
            # Keywords are checked ahead of every other category, identifiers
            # last of all.
            if _is_word_start(self.current_char):
                ident = self.word()
                token_type = KEYWORDS.get(ident, TokenType.IDENTIFIER)
                return Token(token_type, ident)

            # Two-character comparisons first so `>=` is not `>` `=`.
            pair = self.current_char + (self.peek_char() or "")
            if pair in COMPARISONS:
                self.advance(2)
                return Token(TokenType.COMPARISON, pair)
            if self.current_char in COMPARISONS:
                ch = self.current_char
                self.advance()
                return Token(TokenType.COMPARISON, ch)

            if self.current_char in SINGLE_CHAR_TOKENS:
                ch = self.current_char
                self.advance()
                return Token(SINGLE_CHAR_TOKENS[ch], ch)

            if self.current_char == '"':
                literal = self.string()
                if literal is not None:
                    return Token(TokenType.STRING, literal)
                self.skip_char()
                continue

            if _is_digit(self.current_char):
                return Token(TokenType.NUMBER, self.number())

            self.skip_char()

        return None

    def tokenize(self) -> List[Token]:
        """Return all tokens from the input string."""
        tokens = []
        while True:
            token = self.get_next_token()
            if token is None:
                break
            tokens.append(token)
        logger.debug(f"Tokenized {len(tokens)} tokens, skipped {len(self.skipped)} characters")
        return tokens
