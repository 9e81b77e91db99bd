"""Type checking utilities for expression trees.

Two complementary mechanisms live here:

- `TypeStack` is the auxiliary stack the expression builder drives while it
  parses: every leaf pushes its type, every operator pops the two most recent
  types, combines them with `combine_types` and pushes the result. Once a
  whole expression has been built exactly one entry remains for it.
- `TypeChecker.get_type` derives the type of an already-built tree from the
  live symbol table, independently of the stack. The interpreter uses it
  right before evaluating an operator.

Both raise `AnalysisError` on failure.
"""

from __future__ import annotations
from typing import List
from ast_nodes import *
from errors import AnalysisError, ErrorKind
from symbols import DataType, SymbolTable, combine_types


class TypeStack:
    def __init__(self):
        self._items: List[DataType] = []

    def __len__(self) -> int:
        return len(self._items)

    def reset(self) -> None:
        self._items.clear()

    def push(self, type_: DataType) -> None:
        self._items.append(type_)

    def pop(self) -> DataType:
        if not self._items:
            raise AnalysisError(ErrorKind.SYNTAX_ERROR, "Type stack is empty")
        return self._items.pop()

    def combine(self, op: str) -> DataType:
        """Pop right then left, push and return their combined type."""
        right = self.pop()
        left = self.pop()
        result = combine_types(left, right, op)
        self.push(result)
        return result

    def snapshot(self) -> List[DataType]:
        return list(self._items)


class TypeChecker:
    @staticmethod
    def get_type(node: ASTNode, table: SymbolTable) -> DataType:
        """Return the type of an expression tree against the current table."""
        match node:
            case NumberLiteralNode(data_type=dt):
                return dt
            case VariableRefNode(name=name):
                symbol = table.get(name)
                if symbol is None:
                    raise AnalysisError(
                        ErrorKind.VARIABLE_NOT_FOUND, f"Variable not found: {name}"
                    )
                return symbol.type
            case BinaryOpNode(operator=op, left=left, right=right):
                left_type = TypeChecker.get_type(left, table)
                right_type = TypeChecker.get_type(right, table)
                return combine_types(left_type, right_type, op)
            case _:
                raise AnalysisError(
                    ErrorKind.SYNTAX_ERROR, f"Cannot type check node type: {type(node)}"
                )
