"""Expression tree node definitions.

Arithmetic expressions are represented by exactly three node kinds:

- `NumberLiteralNode` - a numeric literal with the type it was written as
  (`3` is an int, `3.0` is a float) and its source text.
- `VariableRefNode` - a reference to a declared variable by name.
- `BinaryOpNode` - an arithmetic operator applied to two owned children.

`ExprNode` is the closed union of the three. Consumers (the type checker,
the interpreter, the printers) dispatch over it with `match` and fall
through to an error for anything else. Trees are built per statement,
evaluated and then discarded by the analysis.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Union
from errors import AnalysisError, ErrorKind
from symbols import DataType


class NodeType(Enum):
    NUMBER_LITERAL = auto()
    VARIABLE_REF = auto()
    BINARY_OP = auto()

    def __str__(self) -> str:
        return self.name


# Base node
@dataclass
class ASTNode:
    type: NodeType


@dataclass
class NumberLiteralNode(ASTNode):
    type: NodeType = NodeType.NUMBER_LITERAL
    text: str = "0"
    value: Union[int, float] = 0
    data_type: DataType = DataType.INT

    @classmethod
    def from_text(cls, text: str) -> NumberLiteralNode:
        """Build a literal from its source text; a decimal point makes it a float."""
        if "." in text:
            return cls(text=text, value=float(text), data_type=DataType.FLOAT)
        try:
            value = int(text)
        except ValueError:
            raise AnalysisError(
                ErrorKind.NUMERIC_OVERFLOW,
                f"Integer literal of {len(text)} digits is too large",
            ) from None
        return cls(text=text, value=value, data_type=DataType.INT)


@dataclass
class VariableRefNode(ASTNode):
    type: NodeType = NodeType.VARIABLE_REF
    name: str = ""


@dataclass
class BinaryOpNode(ASTNode):
    type: NodeType = NodeType.BINARY_OP
    operator: str = "+"
    left: ASTNode = field(default_factory=lambda: NumberLiteralNode())
    right: ASTNode = field(default_factory=lambda: NumberLiteralNode())


ExprNode = Union[NumberLiteralNode, VariableRefNode, BinaryOpNode]
