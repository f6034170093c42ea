"""Tools to query items within an outline."""

from typing import Optional

from ..parser.builder import build_tree
from ..parser.hierarchy import flatten_tree, get_node_path, node_to_dict, walk_tree
from .parse_outline import resolve_config


def search_items(
    text: str,
    query: str,
    max_results: int = 10,
    max_depth: Optional[int] = None,
    indent_width: Optional[int] = None,
    list_marker: Optional[str] = None,
) -> dict:
    """
    Search outline items whose value contains the query.

    Args:
        text: Outline text
        query: Case-insensitive substring; every word must match
        max_results: Maximum number of results to return
        max_depth: Only search nodes with depth <= this value
        indent_width: Whitespace characters per depth level
        list_marker: Prefix recognized as a list-item marker

    Returns:
        Dict with matching items, their source lines and ancestor paths
    """
    try:
        config = resolve_config(indent_width, list_marker)
    except ValueError as e:
        return {"error": str(e)}

    words = query.lower().split()
    if not words:
        return {"error": "Query must not be empty"}

    forest = build_tree(text, config)
    matches = []
    for node, ancestors in walk_tree(forest):
        depth = len(ancestors)
        if max_depth is not None and depth > max_depth:
            continue
        value = node.value.lower()
        if all(word in value for word in words):
            matches.append({
                "value": node.value,
                "line": node.line,
                "depth": depth,
                "path": [ancestor.value for ancestor in ancestors],
                "child_count": len(node.children),
            })

    results = matches[:max_results]
    return {
        "query": query,
        "result_count": len(results),
        "total_matches": len(matches),
        "results": results,
    }


def get_item(
    text: str,
    line: int,
    indent_width: Optional[int] = None,
    list_marker: Optional[str] = None,
) -> dict:
    """
    Get the subtree built from a given source line.

    Args:
        text: Outline text
        line: 1-based source line number of the item
        indent_width: Whitespace characters per depth level
        list_marker: Prefix recognized as a list-item marker

    Returns:
        Dict with the item subtree and the values of its ancestors
    """
    try:
        config = resolve_config(indent_width, list_marker)
    except ValueError as e:
        return {"error": str(e)}

    forest = build_tree(text, config)
    path = get_node_path(forest, line)
    if not path:
        return {"error": f"No item at line {line}"}

    node = path[-1]
    return {
        "item": node_to_dict(node),
        "depth": len(path) - 1,
        "path": [ancestor.value for ancestor in path[:-1]],
        "descendant_count": len(flatten_tree(node.children)),
    }
