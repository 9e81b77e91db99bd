"""Symbol table, data types and type rules.

This module defines the `DataType` enum, a `Symbol` dataclass for declared
variables and `SymbolTable`, a single flat scope that preserves declaration
order. It also holds the two type rules used everywhere else:

- `is_value_compatible(value, type)` decides whether a textual value may be
  stored in a variable of the given type.
- `combine_types(left, right, op)` gives the result type of a binary
  arithmetic operation, or raises when the operands cannot be combined.
"""

from __future__ import annotations
import re
from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional, Dict, Iterator
from errors import AnalysisError, ErrorKind


class DataType(Enum):
    INT = auto()
    FLOAT = auto()
    STRING = auto()
    UNKNOWN = auto()

    def __str__(self) -> str:
        return self.name.lower()

    @classmethod
    def from_keyword(cls, keyword: str) -> DataType:
        """Map a type keyword (`int`, `float`, `string`) to its DataType."""
        try:
            return cls[keyword.upper()]
        except KeyError:
            return cls.UNKNOWN


_INT_VALUE = re.compile(r"-?\d+")
_FLOAT_VALUE = re.compile(r"-?\d+(\.\d+)?")


def is_value_compatible(value: str, type_: DataType) -> bool:
    """Check whether `value` is a valid literal for `type_`.

    Floats accept plain integers too, strings accept anything.
    """
    match type_:
        case DataType.INT:
            return _INT_VALUE.fullmatch(value) is not None
        case DataType.FLOAT:
            return _FLOAT_VALUE.fullmatch(value) is not None
        case DataType.STRING:
            return True
        case _:
            return False


def combine_types(left: DataType, right: DataType, op: str) -> DataType:
    """Result type of `left op right`.

    An int/float pair promotes to float. Equal types keep their type, except
    that strings only allow `+`. Every other pairing is a type mismatch.
    """
    if {left, right} == {DataType.INT, DataType.FLOAT}:
        return DataType.FLOAT

    if left != right:
        raise AnalysisError(
            ErrorKind.TYPE_MISMATCH,
            f"Cannot apply '{op}' to types '{left}' and '{right}'",
        )

    if left == DataType.STRING and op != "+":
        raise AnalysisError(
            ErrorKind.TYPE_MISMATCH,
            f"Only concatenation (+) is allowed on strings, got '{op}'",
        )

    return left


@dataclass
class Symbol:
    name: str
    type: DataType
    value: str
    id: str

    def __repr__(self) -> str:
        return f"Symbol({self.name}, {self.type}, {self.value!r}, {self.id})"


class SymbolTable:
    def __init__(self):
        self.symbols: Dict[str, Symbol] = {}
        self._next_id = 1

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self.symbols.values())

    def __len__(self) -> int:
        return len(self.symbols)

    def __contains__(self, name: str) -> bool:
        return name in self.symbols

    def declare(self, name: str, type_: DataType, value: str) -> Symbol:
        """Declare a new variable. Ids are only consumed by successful declarations."""
        if name in self.symbols:
            raise AnalysisError(
                ErrorKind.DUPLICATE_NAME, f"Variable '{name}' already declared"
            )

        symbol = Symbol(name, type_, value, f"id{self._next_id}")
        self._next_id += 1
        self.symbols[name] = symbol
        return symbol

    def lookup(self, name: str) -> Symbol:
        """Look up a declared variable."""
        symbol = self.get(name)
        if symbol is None:
            raise AnalysisError(
                ErrorKind.UNDECLARED_VARIABLE, f"Variable '{name}' not declared"
            )
        return symbol

    def get(self, name: str) -> Optional[Symbol]:
        return self.symbols.get(name)

    def assign(self, name: str, value: str) -> Symbol:
        """Overwrite the value of a declared variable in place."""
        symbol = self.lookup(name)
        symbol.value = value
        return symbol
