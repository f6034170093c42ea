"""Parse nested bullet-list documents into node trees."""

from .config import ParserConfig
from .parser import Node, build_tree

__all__ = ["ParserConfig", "Node", "build_tree"]
