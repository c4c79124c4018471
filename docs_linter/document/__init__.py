"""Document model: Markdown parsing, node tree and analysis context."""

from __future__ import annotations

from .context import AnalysisContext, HeadingInfo, build_context
from .nodes import Node, NodeType, Position, iter_nodes
from .parser import Document, build_markdown_parser, parse

__all__ = [
    "AnalysisContext",
    "Document",
    "HeadingInfo",
    "Node",
    "NodeType",
    "Position",
    "build_context",
    "build_markdown_parser",
    "iter_nodes",
    "parse",
]
