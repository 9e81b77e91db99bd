"""Graphviz visualization helpers for expression trees.

Provides `render_trees_dot(trees, table)` which returns a `graphviz.Digraph`
object (not rendered) with one cluster per evaluated statement. Each tree
node is a box labelled with its operator, literal or variable name and its
resolved type; edges go from an operator to its left then right operand.
`write_and_render` writes the file to disk and needs the Graphviz binaries.
"""

from typing import List, Optional, Tuple
import html
from graphviz import Digraph
from ast_nodes import *
from errors import AnalysisError
from symbols import SymbolTable
from type_checker import TypeChecker


def _label(node: ASTNode, table: Optional[SymbolTable]) -> str:
    match node:
        case NumberLiteralNode(text=text):
            head = text
        case VariableRefNode(name=name):
            head = name
        case BinaryOpNode(operator=op):
            head = op
        case _:
            head = str(node.type)

    type_name = ""
    if table is not None:
        try:
            type_name = str(TypeChecker.get_type(node, table))
        except AnalysisError:
            type_name = "?"

    escaped = html.escape(head)
    if not type_name:
        return f"<{escaped}>"
    return f'<{escaped}<BR/><FONT POINT-SIZE="8">{html.escape(type_name)}</FONT>>'


def _add_tree(graph: Digraph, node: ASTNode, prefix: str, table: Optional[SymbolTable]) -> str:
    """Add `node` and its children to `graph`; return the node's id."""
    node_id = prefix
    shape = "ellipse" if isinstance(node, BinaryOpNode) else "box"
    graph.node(node_id, label=_label(node, table), shape=shape)

    if isinstance(node, BinaryOpNode):
        left_id = _add_tree(graph, node.left, f"{prefix}_l", table)
        right_id = _add_tree(graph, node.right, f"{prefix}_r", table)
        graph.edge(node_id, left_id)
        graph.edge(node_id, right_id)
    return node_id


def render_trees_dot(
    trees: List[Tuple[str, ASTNode]], table: Optional[SymbolTable] = None
) -> Digraph:
    """Return a graphviz.Digraph with one cluster per (target, tree) pair.

    The caller may call `dot.source` to inspect the dot text, or call
    `dot.render(filename, format=...)` to write files (requires Graphviz installed).
    """
    dot = Digraph(format="svg")
    dot.attr("graph", rankdir="TB")

    for index, (target, root) in enumerate(trees, start=1):
        with dot.subgraph(name=f"cluster_{index}") as c:
            c.attr(label=f"{index}: {target} =")
            c.attr(style="rounded")
            _add_tree(c, root, f"t{index}", table)

    return dot


def write_and_render(
    trees: List[Tuple[str, ASTNode]],
    out_path: str,
    table: Optional[SymbolTable] = None,
    fmt: str = "svg",
) -> None:
    """Write and render the trees to the given path (without extension).

    Example: write_and_render(context.trees, 'out/trees', fmt='png') will
    create out/trees.png (requires Graphviz)."""
    dot = render_trees_dot(trees, table)
    dot.format = fmt
    # render appends the extension itself
    dot.render(out_path, cleanup=True)
