"""Error taxonomy for the analyzer.

`ErrorKind` enumerates every way an analysis can fail. Low-level operations
(symbol lookup, type combination, expression building and evaluation) raise
`AnalysisError` carrying one of these kinds; the statement recognizers catch
it and hand it back inside their result instead of letting it escape.

Unrecognized characters dropped by the lexer are not errors and have no kind.
"""

from __future__ import annotations
from enum import Enum, auto


class ErrorKind(Enum):
    DUPLICATE_NAME = auto()
    UNDECLARED_VARIABLE = auto()
    TYPE_MISMATCH = auto()
    SYNTAX_ERROR = auto()
    UNEXPECTED_FACTOR = auto()
    EXPECTED_CLOSE_PAREN = auto()
    UNSUPPORTED_STRING_OPERATION = auto()
    VARIABLE_NOT_FOUND = auto()
    DIVISION_BY_ZERO = auto()
    NUMERIC_OVERFLOW = auto()
    MISSING_SOURCE_FILE = auto()

    def __str__(self) -> str:
        return self.name


class AnalysisError(Exception):
    """An analysis failure of a given `ErrorKind`."""

    def __init__(self, kind: ErrorKind, message: str):
        self.kind = kind
        self.message = message
        super().__init__(f"{kind}: {message}")
