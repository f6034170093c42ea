"""Bullet-list parsing utilities."""

from .classifier import ClassifiedLine, classify_line, classify_lines
from .builder import Node, build_forest, build_tree

__all__ = [
    "ClassifiedLine",
    "classify_line",
    "classify_lines",
    "Node",
    "build_forest",
    "build_tree",
]
