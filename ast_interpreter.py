"""Evaluator for expression trees.

`evaluate(node, table)` computes the numeric value of a tree built by the
parser. Literals evaluate to their value and variable references to their
symbol's textual value parsed as a number. Before applying an operator the
operator node's type is re-derived from the live table; string-typed
operations are rejected here even though the builder accepts `+` on strings.
Division is always real division.

Results that cannot be represented (a float overflowing to infinity, an
integer too large to convert) raise `NUMERIC_OVERFLOW`.
"""

import math
from decimal import Decimal
from typing import Union
from ast_nodes import *
from errors import AnalysisError, ErrorKind
from symbols import DataType, SymbolTable
from type_checker import TypeChecker

Number = Union[int, float]


def _out_of_range(detail: str) -> AnalysisError:
    return AnalysisError(ErrorKind.NUMERIC_OVERFLOW, f"Value out of range: {detail}")


def _parse_number(text: str) -> Number:
    try:
        if "." in text:
            return float(text)
        return int(text)
    except ValueError:
        raise _out_of_range(f"stored value of {len(text)} characters") from None


def _apply(op: str, lv: Number, rv: Number) -> Number:
    try:
        match op:
            case "+":
                return lv + rv
            case "-":
                return lv - rv
            case "*":
                return lv * rv
            case "/":
                if rv == 0:
                    raise AnalysisError(ErrorKind.DIVISION_BY_ZERO, "Division by zero")
                return lv / rv
            case _:
                raise AnalysisError(ErrorKind.SYNTAX_ERROR, f"Unknown operator: {op}")
    except OverflowError as e:
        raise _out_of_range(f"'{op}' {e}") from None


def evaluate(node: ASTNode, table: SymbolTable) -> Number:
    match node:
        case NumberLiteralNode(value=v):
            return v
        case VariableRefNode(name=name):
            symbol = table.get(name)
            if symbol is None:
                raise AnalysisError(
                    ErrorKind.VARIABLE_NOT_FOUND, f"Variable not found: {name}"
                )
            if symbol.type == DataType.STRING:
                raise AnalysisError(
                    ErrorKind.UNSUPPORTED_STRING_OPERATION,
                    f"String variable '{name}' has no numeric value",
                )
            return _parse_number(symbol.value)
        case BinaryOpNode(operator=op, left=l, right=r):
            if TypeChecker.get_type(node, table) == DataType.STRING:
                raise AnalysisError(
                    ErrorKind.UNSUPPORTED_STRING_OPERATION,
                    "String operations cannot be evaluated",
                )
            lv = evaluate(l, table)
            rv = evaluate(r, table)
            return _apply(op, lv, rv)
        case _:
            raise AnalysisError(
                ErrorKind.SYNTAX_ERROR, f"Unhandled expression node type: {node}"
            )


def format_value(value: Number, target: DataType) -> str:
    """Text stored for `value` in a variable of type `target`.

    Int targets truncate toward zero. Float targets are written in positional
    notation with at least one fractional digit (`0.00001`, `10000000000000000.0`).
    """
    if isinstance(value, float) and not math.isfinite(value):
        raise _out_of_range(str(value))
    try:
        if target == DataType.INT:
            return str(int(value))
        text = format(Decimal(repr(float(value))), "f")
    except (OverflowError, ValueError):
        raise _out_of_range(f"result does not fit a {target} variable") from None
    return text if "." in text else f"{text}.0"
