"""Pretty-printers for tokens, symbols and expression trees.

Provides:
- `PrettyPrinter.print_tokens(tokens)` - the token table shown before
  analysis (category, literal text).
- `PrettyPrinter.print_symbols(table)` - the bordered symbol table shown
  after analysis (name, type, value, id).
- `PrettyPrinter.print_typed(node, table)` - a one-line rendering of an
  expression with the type of every node, e.g. `(x[int] + 2.5[float])[float]`.
- `PrettyPrinter.print_ast(node, indent, prefix)` - an indented multi-line
  tree, intended for debugging and tests.
- `PrettyPrinter.print_surface(node)` - the expression back in source form.

Examples:
    PrettyPrinter.print_typed(root, context.symbols)
"""

from __future__ import annotations
from typing import Iterable
from ast_nodes import *
from errors import AnalysisError
from symbols import SymbolTable
from tokens import Token
from type_checker import TypeChecker

SYMBOL_RULE = "-" * 57


class PrettyPrinter:
    @staticmethod
    def print_tokens(tokens: Iterable[Token]) -> str:
        """Render the token table."""
        lines = [
            "-------------------------------------",
            "|            TOKEN TABLE            |",
            "-------------------------------------",
        ]
        for token in tokens:
            lines.append(f"{str(token.type):<20}|  {token.text:<15}".rstrip())
        return "\n".join(lines)

    @staticmethod
    def print_symbols(table: SymbolTable) -> str:
        """Render the symbol table with one row per declared variable."""
        lines = [
            SYMBOL_RULE,
            "|                     SYMBOL TABLE                      |",
            SYMBOL_RULE,
            "| Name         | Type       | Value      | ID         |",
            SYMBOL_RULE,
        ]
        for symbol in table:
            lines.append(
                f"| {symbol.name:>12} | {str(symbol.type):>10} | "
                f"{symbol.value:>10} | {symbol.id:>10} |"
            )
        lines.append(SYMBOL_RULE)
        return "\n".join(lines)

    @staticmethod
    def _type_label(node: ASTNode, table: SymbolTable) -> str:
        try:
            return str(TypeChecker.get_type(node, table))
        except AnalysisError:
            return "?"

    @staticmethod
    def print_typed(node: ASTNode, table: SymbolTable) -> str:
        """Return the expression with a `[type]` suffix on every node."""
        label = PrettyPrinter._type_label(node, table)
        match node:
            case NumberLiteralNode(text=text):
                return f"{text}[{label}]"
            case VariableRefNode(name=name):
                return f"{name}[{label}]"
            case BinaryOpNode(operator=op, left=left, right=right):
                lhs = PrettyPrinter.print_typed(left, table)
                rhs = PrettyPrinter.print_typed(right, table)
                return f"({lhs} {op} {rhs})[{label}]"
            case _:
                return f"<{type(node).__name__}>"

    @staticmethod
    def print_ast(node: ASTNode, indent: int = 0, prefix: str = "") -> str:
        """Pretty print an expression tree and return it as a string."""
        lines = []
        indent_str = " " * indent

        match node:
            case NumberLiteralNode(text=text, data_type=dt):
                lines.append(f"{indent_str}{prefix}NumberLiteral({text}, type={dt})")

            case VariableRefNode(name=n):
                lines.append(f"{indent_str}{prefix}VariableRef({n})")

            case BinaryOpNode(operator=op, left=left, right=right):
                lines.append(f"{indent_str}{prefix}BinaryOp({op})")
                lines.append(PrettyPrinter.print_ast(left, indent + 2, "left: "))
                lines.append(PrettyPrinter.print_ast(right, indent + 2, "right: "))

            case _:
                lines.append(f"{indent_str}{prefix}Unknown node type: {type(node)}")

        return "\n".join(line for line in lines if line)

    @staticmethod
    def print_surface(node: ASTNode) -> str:
        """Return the expression in source syntax, nested operations parenthesized."""
        match node:
            case NumberLiteralNode(text=text):
                return text
            case VariableRefNode(name=n):
                return n
            case BinaryOpNode(operator=op, left=l, right=r):
                lhs = PrettyPrinter.print_surface(l)
                rhs = PrettyPrinter.print_surface(r)
                if isinstance(l, BinaryOpNode):
                    lhs = f"({lhs})"
                if isinstance(r, BinaryOpNode):
                    rhs = f"({rhs})"
                return f"{lhs} {op} {rhs}"
            case _:
                return str(node)
