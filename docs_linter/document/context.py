"""The shared, read-only context passed to every rule module."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path
from typing import Iterator

from docs_linter.config import LinterOptions
from docs_linter.models import TrainingData

from .nodes import Node, NodeType, iter_nodes
from .parser import Document, parse


@dataclass(frozen=True)
class HeadingInfo:
    depth: int
    text: str
    line: int | None
    node: Node


@dataclass(frozen=True)
class AnalysisContext:
    """Everything a rule needs to inspect one document.

    Rule modules receive the same instance and must not mutate it; the
    derived helpers below are computed lazily and cached.
    """

    file_path: str
    document: Document
    training: TrainingData = field(default_factory=TrainingData)
    options: LinterOptions = field(default_factory=LinterOptions)

    @property
    def text(self) -> str:
        return self.document.text

    @property
    def tree(self) -> Node:
        return self.document.root

    @property
    def is_readme(self) -> bool:
        return self.file_path.endswith("README.md")

    @cached_property
    def lines(self) -> tuple[str, ...]:
        # Carriage returns are dropped so CRLF files behave like LF files.
        return tuple(line.rstrip("\r") for line in self.text.split("\n"))

    @cached_property
    def headings(self) -> tuple[HeadingInfo, ...]:
        found: list[HeadingInfo] = []
        for node in iter_nodes(self.tree, NodeType.HEADING):
            text = node.plain_text().strip()
            if node.depth is None or not text:
                continue
            found.append(HeadingInfo(depth=node.depth, text=text, line=node.line, node=node))
        return tuple(found)

    @cached_property
    def fenced_lines(self) -> frozenset[int]:
        """Line numbers covered by code blocks, fences included."""
        covered: set[int] = set()
        for node in iter_nodes(self.tree, NodeType.CODE):
            if node.line is None:
                continue
            covered.update(range(node.line, (node.end_line or node.line) + 1))
        return frozenset(covered)

    def prose_lines(self) -> Iterator[tuple[int, str]]:
        """Yield ``(line_no, line)`` for every line outside code blocks."""
        fenced = self.fenced_lines
        for line_no, line in enumerate(self.lines, start=1):
            if line_no not in fenced:
                yield line_no, line

    def line_text(self, line: int | None) -> str:
        if line is None or line < 1 or line > len(self.lines):
            return ""
        return self.lines[line - 1]

    def source_block(self, start: int, end: int) -> str:
        """Raw text of lines ``start``..``end`` (inclusive), separators kept."""
        raw_lines = self.text.split("\n")
        start = max(start, 1)
        end = min(end, len(raw_lines))
        if start > end:
            return ""
        return "\n".join(raw_lines[start - 1 : end])


def build_context(
    file_path: str | Path,
    text: str,
    *,
    training: TrainingData | None = None,
    options: LinterOptions | None = None,
) -> AnalysisContext:
    """Parse ``text`` and wrap it in an ``AnalysisContext``."""
    return AnalysisContext(
        file_path=str(file_path),
        document=parse(text),
        training=training if training is not None else TrainingData(),
        options=options if options is not None else LinterOptions(),
    )
