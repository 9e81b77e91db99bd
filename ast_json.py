"""Convert expression trees into JSON-serializable structures.

This module provides `ast_to_json(node, table)` which returns a nested
structure of dicts describing an expression tree, with each node's type
resolved against the symbol table, and `trees_to_json(context)` which
exports every tree evaluated during an analysis together with the final
value of the variable it was assigned to.
"""

from typing import Any, Dict, List, Optional
from ast_nodes import *
from context import AnalysisContext
from errors import AnalysisError
from symbols import SymbolTable
from type_checker import TypeChecker


def _type_name(node: ASTNode, table: Optional[SymbolTable]) -> Optional[str]:
    if table is None:
        return None
    try:
        return str(TypeChecker.get_type(node, table))
    except AnalysisError:
        return None


def ast_to_json(node: Optional[ASTNode], table: Optional[SymbolTable] = None) -> Any:
    if node is None:
        return None

    match node:
        case NumberLiteralNode(text=text, value=value, data_type=dt):
            return {
                "node_type": "NumberLiteral",
                "text": text,
                "value": value,
                "data_type": str(dt),
            }
        case VariableRefNode(name=name):
            return {
                "node_type": "VariableRef",
                "name": name,
                "data_type": _type_name(node, table),
            }
        case BinaryOpNode(operator=op, left=left, right=right):
            return {
                "node_type": "BinaryOp",
                "operator": op,
                "data_type": _type_name(node, table),
                "left": ast_to_json(left, table),
                "right": ast_to_json(right, table),
            }
        case _:
            return {"node_type": str(node.type)}


def trees_to_json(context: AnalysisContext) -> List[Dict[str, Any]]:
    table = context.symbols
    export = []
    for target, root in context.trees:
        symbol = table.get(target)
        export.append(
            {
                "target": target,
                "value": symbol.value if symbol is not None else None,
                "tree": ast_to_json(root, table),
            }
        )
    return export
