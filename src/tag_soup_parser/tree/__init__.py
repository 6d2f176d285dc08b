"""Tree building for tag-soup markup.

Key Components:
    parse: Parse a buffer into a list of top-level nodes
    TreeBuilder: Tokenizer handler that materializes the node tree
    ElementNode, TextNode, Node: Tree node types
    iter_nodes: Iterative depth-first walk over a node list
"""

from .builder import (
    ElementNode,
    Node,
    TextNode,
    TreeBuilder,
    iter_nodes,
    parse,
)

__all__ = [
    "ElementNode",
    "Node",
    "TextNode",
    "TreeBuilder",
    "iter_nodes",
    "parse",
]
