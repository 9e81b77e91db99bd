"""Top-level analysis loop.

`run_analysis(tokens, context)` walks the token list one statement at a
time. Before each statement the type stack is cleared and the recognizers
are tried in their fixed order. The loop has two states: it keeps
`SCANNING` while statements match and moves to `INVALID` on the first
statement that fails or that no recognizer accepts. Nothing after that
point is processed; whatever the earlier statements did to the symbol table
is kept.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional
from context import AnalysisContext
from errors import AnalysisError
from parser import Outcome, Parser
from tokens import Token

logger = logging.getLogger(__name__)


class AnalysisState(Enum):
    SCANNING = auto()
    INVALID = auto()

    def __str__(self) -> str:
        return self.name


@dataclass
class AnalysisResult:
    valid: bool
    error: Optional[AnalysisError] = None
    # Cursor where analysis stopped; the token count when valid
    position: int = 0
    statements: int = 0


def run_analysis(
    tokens: List[Token], context: Optional[AnalysisContext] = None
) -> AnalysisResult:
    """Analyze a token list against `context` and return the verdict."""
    if context is None:
        context = AnalysisContext()
    parser = Parser(tokens, context)
    state = AnalysisState.SCANNING
    error: Optional[AnalysisError] = None
    statements = 0

    while state == AnalysisState.SCANNING and not parser.at_end():
        context.reset_types()

        for recognize in parser.recognizers():
            result = recognize()
            if result.outcome != Outcome.NO_MATCH:
                break

        match result.outcome:
            case Outcome.MATCHED:
                statements += 1
            case Outcome.FAILED:
                error = result.error
                state = AnalysisState.INVALID
            case Outcome.NO_MATCH:
                error = parser.unrecognized()
                state = AnalysisState.INVALID

    if error is not None:
        context.report(f"Error: {error.message}")

    valid = state == AnalysisState.SCANNING
    logger.info(
        f"Analysis {'passed' if valid else 'failed'} after {statements} statements"
    )
    return AnalysisResult(
        valid=valid, error=error, position=parser.pos, statements=statements
    )
