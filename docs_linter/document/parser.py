"""Convert Markdown text into a ``Document`` node tree.

Parsing is delegated to ``markdown-it-py``; this module folds its flat token
stream into nested ``Node`` objects and carries line positions across.
Block tokens expose a 0-based ``map`` of ``[start, end)`` lines; inline
tokens inherit the line of their block and advance it at every soft or hard
line break, so a link on the third line of a paragraph reports that line.

``parse`` never raises. If the parser fails for any reason, the whole text is
returned as a single ``unknown`` node so downstream rules degrade instead of
crashing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from markdown_it import MarkdownIt
from markdown_it.token import Token

from .nodes import Node, NodeType, Position

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Document:
    """Immutable analysis input: the raw text and its parsed tree."""

    text: str
    root: Node


_CONTAINER_TYPES = {
    "heading": NodeType.HEADING,
    "paragraph": NodeType.PARAGRAPH,
    "bullet_list": NodeType.LIST,
    "ordered_list": NodeType.LIST,
    "list_item": NodeType.LIST_ITEM,
    "blockquote": NodeType.BLOCKQUOTE,
    "table": NodeType.TABLE,
    "tr": NodeType.TABLE_ROW,
    "th": NodeType.TABLE_CELL,
    "td": NodeType.TABLE_CELL,
    "link": NodeType.LINK,
    "em": NodeType.EMPHASIS,
    "strong": NodeType.STRONG,
    "s": NodeType.DELETE,
}


def _keep_link_as_written(url: str) -> str:
    return url


def build_markdown_parser() -> MarkdownIt:
    """CommonMark parser with tables and strikethrough.

    Link normalisation is disabled so that rules see URLs exactly as they
    appear in the source (including stray whitespace in ``<...>`` targets).
    """
    md = MarkdownIt("commonmark").enable("table").enable("strikethrough")
    md.normalizeLink = _keep_link_as_written  # type: ignore[method-assign]
    return md


def _block_position(token: Token) -> Position | None:
    if not token.map:
        return None
    start, end = token.map
    return Position(line=start + 1, end_line=max(start + 1, end))


def _strip_final_newline(content: str) -> str:
    return content[:-1] if content.endswith("\n") else content


def _open_node(token: Token, position: Position | None) -> Node:
    base = token.type[: -len("_open")]
    node = Node(type=_CONTAINER_TYPES.get(base, NodeType.UNKNOWN), position=position)
    if node.type is NodeType.HEADING:
        node.depth = int(token.tag[1:]) if token.tag[1:].isdigit() else None
    elif node.type is NodeType.LIST:
        node.ordered = base == "ordered_list"
    elif node.type is NodeType.LIST_ITEM:
        node.marker = token.markup or None
    elif node.type is NodeType.LINK:
        href = token.attrGet("href")
        node.url = str(href) if href is not None else None
    return node


def _leaf_node(token: Token, position: Position | None) -> Node:
    if token.type in ("fence", "code_block"):
        info = (token.info or "").strip()
        return Node(
            type=NodeType.CODE,
            position=position,
            value=_strip_final_newline(token.content),
            lang=info.split()[0] if info else None,
            marker=token.markup or None,
        )
    if token.type == "hr":
        return Node(type=NodeType.THEMATIC_BREAK, position=position)
    if token.type in ("html_block", "html_inline"):
        return Node(type=NodeType.HTML, position=position, value=token.content)
    if token.type == "text":
        return Node(type=NodeType.TEXT, position=position, value=token.content)
    if token.type == "code_inline":
        return Node(type=NodeType.INLINE_CODE, position=position, value=token.content)
    if token.type == "image":
        src = token.attrGet("src")
        return Node(
            type=NodeType.IMAGE,
            position=position,
            url=str(src) if src is not None else None,
            value=token.content,
        )
    return Node(type=NodeType.UNKNOWN, position=position, value=token.content or None)


def _build_inline(children: Sequence[Token], first_line: int | None) -> list[Node]:
    holder = Node(type=NodeType.UNKNOWN)
    stack = [holder]
    line = first_line

    for token in children:
        position = Position(line=line) if line is not None else None
        if token.type in ("softbreak", "hardbreak"):
            stack[-1].children.append(Node(type=NodeType.BREAK, position=position))
            if line is not None:
                line += 1
        elif token.nesting == 1:
            node = _open_node(token, position)
            stack[-1].children.append(node)
            stack.append(node)
        elif token.nesting == -1:
            if len(stack) > 1:
                stack.pop()
        else:
            stack[-1].children.append(_leaf_node(token, position))

    return holder.children


def _build_tree(tokens: Sequence[Token], text: str) -> Node:
    line_count = text.count("\n") + 1
    root = Node(type=NodeType.ROOT, position=Position(line=1, end_line=line_count))
    stack = [root]

    for token in tokens:
        if token.nesting == 1:
            node = _open_node(token, _block_position(token))
            stack[-1].children.append(node)
            stack.append(node)
        elif token.nesting == -1:
            if len(stack) > 1:
                stack.pop()
        elif token.type == "inline":
            first_line = token.map[0] + 1 if token.map else stack[-1].line
            stack[-1].children.extend(_build_inline(token.children or [], first_line))
        else:
            stack[-1].children.append(_leaf_node(token, _block_position(token)))

    return root


def _degraded_tree(text: str) -> Node:
    line_count = text.count("\n") + 1
    position = Position(line=1, end_line=line_count)
    fallback = Node(type=NodeType.UNKNOWN, position=position, value=text)
    return Node(type=NodeType.ROOT, position=position, children=[fallback])


def parse(text: str, md: MarkdownIt | None = None) -> Document:
    """Parse ``text`` into a ``Document``; never raises on malformed input."""

    parser = md or build_markdown_parser()
    try:
        tokens = parser.parse(text)
        root = _build_tree(tokens, text)
    except Exception:
        LOGGER.exception("Markdown parsing failed; falling back to a degenerate tree")
        root = _degraded_tree(text)
    return Document(text=text, root=root)
