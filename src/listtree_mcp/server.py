"""MCP Server exposing the nested bullet-list parser."""

import asyncio
import json
import logging
import sys
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from .config import log_level
from .tools.parse_outline import parse_outline as do_parse_outline
from .tools.parse_file import parse_outline_file as do_parse_outline_file
from .tools.outline_local import outline_local as do_outline_local
from .tools.fetch_outline import fetch_outline as do_fetch_outline
from .tools.search_items import search_items as do_search_items, get_item as do_get_item

logger = logging.getLogger(__name__)

_PARSER_OPTIONS = {
    "indent_width": {
        "type": "integer",
        "description": "Whitespace characters per depth level (default: 1, or LISTTREE_INDENT_WIDTH)",
    },
    "list_marker": {
        "type": "string",
        "description": "Prefix recognized as a list-item marker (default: '-')",
    },
}

_MAX_DEPTH = {
    "type": "integer",
    "description": "Only include items with depth <= this value (0 = top-level items only)",
}


# Create MCP server
server = Server("listtree-mcp")


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        Tool(
            name="parse_outline",
            description="""Parse nested bullet-list text into a tree.

Each "- " item becomes a node; indentation decides nesting. Ragged
indentation is normalized: an item indented several levels deeper than
its predecessor becomes its direct child. Blank lines are ignored.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "text": {
                        "type": "string",
                        "description": "Outline text",
                    },
                    **_PARSER_OPTIONS,
                    "max_depth": _MAX_DEPTH,
                    "include_lines": {
                        "type": "boolean",
                        "description": "Include source line and kind for each item",
                        "default": True,
                    },
                },
                "required": ["text"],
            },
        ),
        Tool(
            name="parse_outline_file",
            description="""Read a local UTF-8 outline file and parse it into a tree.

Refuses sensitive files (.env, *.pem, credentials.json, ...) and files
containing secrets. With base_dir set, the path must stay inside it.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "path": {
                        "type": "string",
                        "description": "Path to the outline file",
                    },
                    "base_dir": {
                        "type": "string",
                        "description": "Directory the file must resolve inside",
                    },
                    **_PARSER_OPTIONS,
                    "max_depth": _MAX_DEPTH,
                },
                "required": ["path"],
            },
        ),
        Tool(
            name="outline_local",
            description="""Parse every outline file (.md, .markdown, .txt) under a local directory.

Respects .gitignore, skips sensitive files and files containing secrets,
and does not follow symlinks by default. Returns per-file statistics and
top-level items.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "path": {
                        "type": "string",
                        "description": "Directory to crawl",
                    },
                    "max_depth": {
                        "type": "integer",
                        "description": "Maximum directory depth to crawl (default: 5)",
                        "default": 5,
                    },
                    "include_hidden": {
                        "type": "boolean",
                        "description": "Whether to include hidden files and directories",
                        "default": False,
                    },
                    "follow_symlinks": {
                        "type": "boolean",
                        "description": "Whether to follow symbolic links (default: false for safety)",
                        "default": False,
                    },
                    "extra_ignore_patterns": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Additional gitignore-style patterns to exclude (e.g. 'drafts/')",
                    },
                    **_PARSER_OPTIONS,
                },
                "required": ["path"],
            },
        ),
        Tool(
            name="fetch_outline",
            description="""Fetch a remote outline document over HTTP(S) and parse it.

GitHub blob URLs are fetched from raw.githubusercontent.com. Set
GITHUB_TOKEN for private repositories. Blocked in local-only mode
(LISTTREE_LOCAL_ONLY=true).""",
            inputSchema={
                "type": "object",
                "properties": {
                    "url": {
                        "type": "string",
                        "description": "Document URL",
                    },
                    **_PARSER_OPTIONS,
                    "max_depth": _MAX_DEPTH,
                },
                "required": ["url"],
            },
        ),
        Tool(
            name="search_items",
            description="""Search outline items by text.

Every word of the query must appear in the item (case-insensitive).
Returns each hit with its source line, depth and ancestor path.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "text": {
                        "type": "string",
                        "description": "Outline text",
                    },
                    "query": {
                        "type": "string",
                        "description": "Search query",
                    },
                    "max_results": {
                        "type": "integer",
                        "description": "Maximum number of results to return",
                        "default": 10,
                    },
                    "max_depth": _MAX_DEPTH,
                    **_PARSER_OPTIONS,
                },
                "required": ["text", "query"],
            },
        ),
        Tool(
            name="get_item",
            description="""Get the subtree of the item on a given source line.

Returns the item with all nested children and the values of its ancestors.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "text": {
                        "type": "string",
                        "description": "Outline text",
                    },
                    "line": {
                        "type": "integer",
                        "description": "1-based source line number of the item",
                    },
                    **_PARSER_OPTIONS,
                },
                "required": ["text", "line"],
            },
        ),
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls."""
    try:
        if name == "parse_outline":
            result = do_parse_outline(
                text=arguments["text"],
                indent_width=arguments.get("indent_width"),
                list_marker=arguments.get("list_marker"),
                max_depth=arguments.get("max_depth"),
                include_lines=arguments.get("include_lines", True),
            )
        elif name == "parse_outline_file":
            result = do_parse_outline_file(
                path=arguments["path"],
                base_dir=arguments.get("base_dir"),
                indent_width=arguments.get("indent_width"),
                list_marker=arguments.get("list_marker"),
                max_depth=arguments.get("max_depth"),
            )
        elif name == "outline_local":
            result = do_outline_local(
                path=arguments["path"],
                max_depth=arguments.get("max_depth", 5),
                include_hidden=arguments.get("include_hidden", False),
                follow_symlinks=arguments.get("follow_symlinks", False),
                extra_ignore_patterns=arguments.get("extra_ignore_patterns"),
                indent_width=arguments.get("indent_width"),
                list_marker=arguments.get("list_marker"),
            )
        elif name == "fetch_outline":
            result = await do_fetch_outline(
                url=arguments["url"],
                indent_width=arguments.get("indent_width"),
                list_marker=arguments.get("list_marker"),
                max_depth=arguments.get("max_depth"),
            )
        elif name == "search_items":
            result = do_search_items(
                text=arguments["text"],
                query=arguments["query"],
                max_results=arguments.get("max_results", 10),
                max_depth=arguments.get("max_depth"),
                indent_width=arguments.get("indent_width"),
                list_marker=arguments.get("list_marker"),
            )
        elif name == "get_item":
            result = do_get_item(
                text=arguments["text"],
                line=arguments["line"],
                indent_width=arguments.get("indent_width"),
                list_marker=arguments.get("list_marker"),
            )
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    except Exception as e:
        logger.exception("Tool %s failed", name)
        error_result = {"error": str(e)}
        return [TextContent(type="text", text=json.dumps(error_result, indent=2))]


def configure_logging() -> None:
    """Send logs to stderr; stdout carries the MCP stdio transport."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root = logging.getLogger("listtree_mcp")
    root.setLevel(log_level())
    if not root.handlers:
        root.addHandler(handler)


async def run_server():
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def main():
    """Entry point for the MCP server."""
    configure_logging()
    asyncio.run(run_server())


if __name__ == "__main__":
    main()
