"""Node tree representing a parsed Markdown document.

Nodes are a closed, tagged union keyed on ``NodeType``. Only the fields that
make sense for a node's type are populated; everything else stays ``None``.
Rules must treat a missing ``position`` as "cannot evaluate this node" and
skip it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator


class NodeType(str, Enum):
    ROOT = "root"
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LIST = "list"
    LIST_ITEM = "listItem"
    BLOCKQUOTE = "blockquote"
    CODE = "code"
    HTML = "html"
    THEMATIC_BREAK = "thematicBreak"
    TABLE = "table"
    TABLE_ROW = "tableRow"
    TABLE_CELL = "tableCell"
    TEXT = "text"
    INLINE_CODE = "inlineCode"
    LINK = "link"
    IMAGE = "image"
    EMPHASIS = "emphasis"
    STRONG = "strong"
    DELETE = "delete"
    BREAK = "break"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Position:
    """1-based, inclusive line span of a node in the source text."""

    line: int
    end_line: int | None = None


@dataclass
class Node:
    type: NodeType
    children: list["Node"] = field(default_factory=list)
    position: Position | None = None
    # text / inlineCode / code body / html / image alt text
    value: str | None = None
    # heading level 1-6
    depth: int | None = None
    # link / image target, exactly as written
    url: str | None = None
    # code fence info string (first word)
    lang: str | None = None
    # list ordering
    ordered: bool | None = None
    # bullet character of a list item, or the fence of a code block
    marker: str | None = None

    @property
    def line(self) -> int | None:
        return self.position.line if self.position is not None else None

    @property
    def end_line(self) -> int | None:
        if self.position is None:
            return None
        return self.position.end_line or self.position.line

    def plain_text(self) -> str:
        """Concatenated text of this node's text-bearing descendants."""
        parts: list[str] = []
        for node in iter_nodes(self):
            if node.type in (NodeType.TEXT, NodeType.INLINE_CODE) and node.value:
                parts.append(node.value)
            elif node.type is NodeType.BREAK:
                parts.append(" ")
        return "".join(parts)


def iter_nodes(node: Node, *types: NodeType) -> Iterator[Node]:
    """Yield ``node`` and its descendants in document order.

    When ``types`` are given, only nodes of those types are yielded, but the
    walk still descends through every node.
    """
    stack = [node]
    while stack:
        current = stack.pop()
        if not types or current.type in types:
            yield current
        stack.extend(reversed(current.children))
