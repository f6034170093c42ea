"""Tool to parse outline text into a nested tree."""

from typing import Optional

from ..config import ParserConfig
from ..parser.builder import build_tree
from ..parser.hierarchy import count_nodes, node_to_dict, prune_depth, tree_depth


def resolve_config(
    indent_width: Optional[int] = None,
    list_marker: Optional[str] = None,
) -> ParserConfig:
    """Environment defaults with tool-argument overrides. Raises ValueError."""
    return ParserConfig.from_env().with_overrides(indent_width, list_marker)


def outline_result(
    text: str,
    config: ParserConfig,
    max_depth: Optional[int] = None,
    include_lines: bool = True,
) -> dict:
    """Parse `text` and build the standard outline response."""
    forest = build_tree(text, config)
    shown = prune_depth(forest, max_depth)
    return {
        "root_count": len(forest),
        "node_count": count_nodes(forest),
        "max_depth": tree_depth(forest),
        "tree": [node_to_dict(node, include_lines) for node in shown],
        "_meta": {
            "indent_width": config.indentation_unit_width,
            "list_marker": config.list_marker,
        },
    }


def parse_outline(
    text: str,
    indent_width: Optional[int] = None,
    list_marker: Optional[str] = None,
    max_depth: Optional[int] = None,
    include_lines: bool = True,
) -> dict:
    """
    Parse a bullet-list document into a forest.

    Args:
        text: Outline text (nested "- " items)
        indent_width: Whitespace characters per depth level
        list_marker: Prefix recognized as a list-item marker
        max_depth: Only include nodes with depth <= this value (0 = roots)
        include_lines: Include source line and kind for each node

    Returns:
        Dict with root/node counts, depth and the nested tree
    """
    try:
        config = resolve_config(indent_width, list_marker)
    except ValueError as e:
        return {"error": str(e)}

    return outline_result(text, config, max_depth, include_lines)
