"""Mutable state shared by one analysis run.

An `AnalysisContext` bundles the symbol table, the type stack, the console
messages produced so far and the expression trees that were evaluated. It is
passed explicitly to the parser and the driver; nothing in the analyzer keeps
module-level state.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import List, Tuple
from ast_nodes import ASTNode
from symbols import SymbolTable
from type_checker import TypeStack

logger = logging.getLogger(__name__)


@dataclass
class AnalysisContext:
    symbols: SymbolTable = field(default_factory=SymbolTable)
    type_stack: TypeStack = field(default_factory=TypeStack)
    messages: List[str] = field(default_factory=list)
    # (assigned variable, evaluated tree) for every successful evaluation
    trees: List[Tuple[str, ASTNode]] = field(default_factory=list)

    def report(self, message: str) -> None:
        """Record a console message in program order."""
        logger.debug(message)
        self.messages.append(message)

    def reset_types(self) -> None:
        self.type_stack.reset()
