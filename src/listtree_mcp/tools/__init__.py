"""MCP tool implementations."""

from .parse_outline import parse_outline
from .parse_file import parse_outline_file
from .outline_local import outline_local
from .fetch_outline import fetch_outline
from .search_items import search_items, get_item

__all__ = [
    "parse_outline",
    "parse_outline_file",
    "outline_local",
    "fetch_outline",
    "search_items",
    "get_item",
]
