"""Build a forest of nodes from classified lines."""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Literal, Optional

from ..config import ParserConfig
from .classifier import ClassifiedLine, classify_lines

logger = logging.getLogger(__name__)


@dataclass(repr=False, eq=False)
class Node:
    """A list item (or plain-text line) and the items nested under it."""
    value: str
    children: list["Node"] = field(default_factory=list)
    line: int = 0
    kind: Literal["item", "text"] = "item"

    def __repr__(self) -> str:
        return (
            f"Node(value={self.value!r}, line={self.line}, kind={self.kind!r}, "
            f"children=<{len(self.children)}>)"
        )

    def __eq__(self, other: object) -> bool:
        # Iterative: outlines may nest deeper than the recursion limit
        if not isinstance(other, Node):
            return NotImplemented
        pending = [(self, other)]
        while pending:
            a, b = pending.pop()
            if (a.value, a.line, a.kind, len(a.children)) != (b.value, b.line, b.kind, len(b.children)):
                return False
            pending.extend(zip(a.children, b.children))
        return True

    __hash__ = None  # type: ignore[assignment]


def build_forest(lines: Iterable[ClassifiedLine]) -> list[Node]:
    """
    Attach each line under the nearest preceding shallower line.

    Stack position i holds the open node at normalized depth i together with
    the raw depth of its source line. An indentation jump of any size lands
    exactly one level below the deepest open node.
    """
    roots: list[Node] = []
    stack: list[tuple[int, Node]] = []

    for line in lines:
        if not line.text:
            continue

        node = Node(
            value=line.text,
            line=line.raw_index,
            kind="item" if line.is_list_item else "text",
        )

        while stack and stack[-1][0] >= line.depth:
            stack.pop()

        if stack:
            if line.depth > stack[-1][0] + 1:
                logger.debug(
                    "Line %d: depth %d under line %d (depth %d), normalized to %d",
                    line.raw_index, line.depth, stack[-1][1].line, stack[-1][0], len(stack),
                )
            stack[-1][1].children.append(node)
        else:
            roots.append(node)

        # A root always opens depth 0, however far its source line is indented
        stack.append((line.depth if stack else 0, node))

    return roots


def build_tree(text: str, config: Optional[ParserConfig] = None) -> list[Node]:
    """
    Parse nested bullet-list text into an ordered forest of root nodes.

    Total over any string: empty or all-blank input yields an empty list.
    """
    return build_forest(classify_lines(text, config))
