"""Helpers for walking and serializing a node forest.

All walkers keep an explicit stack, like the builder, so outlines nested
deeper than the interpreter recursion limit are handled.
"""

from typing import Iterator, Optional

from .builder import Node


def walk_tree(nodes: list[Node]) -> Iterator[tuple[Node, list[Node]]]:
    """Yield (node, ancestors) in pre-order; `ancestors` runs root first."""
    stack: list[tuple[Node, list[Node]]] = [(node, []) for node in reversed(nodes)]
    while stack:
        node, ancestors = stack.pop()
        yield node, ancestors
        if node.children:
            path = ancestors + [node]
            stack.extend((child, path) for child in reversed(node.children))


def flatten_tree(nodes: list[Node], depth: int = 0) -> list[tuple[Node, int]]:
    """
    Flatten tree to a pre-order list with normalized depth.

    Returns list of (node, depth) tuples.
    """
    result: list[tuple[Node, int]] = []
    stack = [(node, depth) for node in reversed(nodes)]
    while stack:
        node, level = stack.pop()
        result.append((node, level))
        stack.extend((child, level + 1) for child in reversed(node.children))
    return result


def get_node_path(nodes: list[Node], line: int) -> list[Node]:
    """Get the path from a root to the node built from `line` (empty if none)."""
    for node, ancestors in walk_tree(nodes):
        if node.line == line:
            return ancestors + [node]
    return []


def count_nodes(nodes: list[Node]) -> int:
    return len(flatten_tree(nodes))


def tree_depth(nodes: list[Node]) -> int:
    """Number of levels in the forest (0 for an empty forest)."""
    return max((depth + 1 for _, depth in flatten_tree(nodes)), default=0)


def prune_depth(nodes: list[Node], max_depth: Optional[int]) -> list[Node]:
    """Copy the forest, dropping nodes deeper than `max_depth` (0 = roots only)."""
    if max_depth is None:
        return nodes
    roots: list[Node] = []
    if max_depth < 0:
        return roots

    stack: list[tuple[Node, list[Node], int]] = [(node, roots, 0) for node in reversed(nodes)]
    while stack:
        node, siblings, depth = stack.pop()
        copy = Node(value=node.value, line=node.line, kind=node.kind)
        siblings.append(copy)
        if depth < max_depth:
            stack.extend((child, copy.children, depth + 1) for child in reversed(node.children))
    return roots


def node_to_dict(node: Node, include_lines: bool = True) -> dict:
    """Serialize a node and its subtree for JSON output."""

    def shallow(n: Node) -> dict:
        result: dict = {"value": n.value}
        if include_lines:
            result["line"] = n.line
            result["kind"] = n.kind
        result["children"] = []
        return result

    top = shallow(node)
    stack = [(node, top)]
    while stack:
        current, out = stack.pop()
        for child in current.children:
            child_out = shallow(child)
            out["children"].append(child_out)
            stack.append((child, child_out))
    return top
