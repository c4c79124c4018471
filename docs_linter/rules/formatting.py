"""Formatting rules: headings, lists, links, code fences, punctuation and spacing."""

from __future__ import annotations

import re
from typing import Iterator, Sequence

from docs_linter.document import AnalysisContext, HeadingInfo, Node, NodeType, iter_nodes
from docs_linter.models import Category, Issue, ReplaceFix, Severity
from docs_linter.utils.text_utils import slugify_id_part, to_title_case

from . import rule_config as cfg
from .base import RuleModule, SubCheck

_STAR_BULLET = re.compile(r"^(?P<lead>[ \t]*(?:>[ \t]?)*[ \t]*)\*(?=[ \t]|$)")
_SPACE_RUN = re.compile(r" {2,}")
_INTERNAL_SPACES = re.compile(r"\S {3,}\S")
_BACKTICK_FENCE = re.compile(r"^(?P<indent>[ \t]*)`{4,}")
_HARD_BREAK = re.compile(r"\S(?P<spaces> {2,})$")
_BLOCK_START = re.compile(r"^[ \t]*(?:#{1,6}(?:[ \t]|$)|`{3,}|~{3,})")


def normalize_spacing(line: str) -> str:
    """Collapse internal runs of spaces and strip trailing whitespace.

    Leading indentation is preserved so list nesting and code indentation
    survive.
    """
    stripped = line.lstrip(" \t")
    indent = line[: len(line) - len(stripped)]
    return indent + _SPACE_RUN.sub(" ", stripped).rstrip()


def _hard_break_spaces(context: AnalysisContext, line_no: int, line: str) -> str:
    """Return the trailing spaces of ``line`` when they form a hard line break.

    Two or more trailing spaces break the line only when the paragraph goes on
    to the next line; before a blank line, a heading or a fence they are
    insignificant and an empty string is returned.
    """
    match = _HARD_BREAK.search(line)
    if match is None or _BLOCK_START.match(line):
        return ""
    following = context.line_text(line_no + 1)
    if not following.strip() or line_no + 1 in context.fenced_lines or _BLOCK_START.match(following):
        return ""
    return match.group("spaces")


def _heading_text_fix(context: AnalysisContext, heading: HeadingInfo, new_text: str) -> ReplaceFix | None:
    raw = context.line_text(heading.line)
    if not raw or heading.text not in raw:
        return None
    return ReplaceFix(from_=raw, to=raw.replace(heading.text, new_text, 1))


def _is_table_line(line: str) -> bool:
    return line.lstrip().startswith("|")


def _list_groups(node: Node) -> Iterator[list[Node]]:
    """Yield runs of adjacent unordered lists that are not nested in another list.

    CommonMark starts a new list whenever the bullet character changes, so a
    visually single list written with mixed bullets arrives as several
    back-to-back sibling lists.
    """
    for parent in iter_nodes(node):
        if parent.type is NodeType.LIST_ITEM:
            continue
        group: list[Node] = []
        for child in parent.children:
            is_bullet_list = child.type is NodeType.LIST and not child.ordered and child.line is not None
            if is_bullet_list and group and child.line == (group[-1].end_line or 0) + 1:
                group.append(child)
                continue
            if group:
                yield group
            group = [child] if is_bullet_list else []
        if group:
            yield group


class FormattingRules(RuleModule):
    name = "formatting"
    category = Category.FORMATTING

    def sub_checks(self) -> Sequence[SubCheck]:
        return (
            self.check_heading_capitalization,
            self.check_list_formatting,
            self.check_link_formatting,
            self.check_code_block_formatting,
            self.check_punctuation_consistency,
            self.check_spacing_consistency,
        )

    def check_heading_capitalization(self, context: AnalysisContext) -> list[Issue]:
        issues: list[Issue] = []

        for heading in context.headings:
            if heading.line is None:
                continue

            correction = cfg.HEADING_CORRECTIONS.get(heading.text)
            if correction is not None:
                corrected, kind, message, suggestion = correction
                fix = _heading_text_fix(context, heading, corrected)
                issues.append(
                    self.make_issue(
                        "heading",
                        severity=Severity.WARNING,
                        message=message,
                        id_parts=(heading.line, kind),
                        line=heading.line,
                        suggestion=suggestion,
                        fix=fix,
                        safe_fix=True,
                    )
                )

            if heading.depth > cfg.TITLE_CASE_MAX_DEPTH:
                continue
            lowered = heading.text.lower()
            if not any(keyword in lowered for keyword in cfg.TITLE_CASE_KEYWORDS):
                continue
            title = to_title_case(heading.text)
            if title == heading.text:
                continue
            issues.append(
                self.make_issue(
                    "heading-title-case",
                    severity=Severity.INFO,
                    message=f'Consider using title case for heading: "{heading.text}"',
                    id_parts=(heading.line,),
                    line=heading.line,
                    suggestion=f'Use: "{title}"',
                    fix=_heading_text_fix(context, heading, title),
                )
            )

        return issues

    def check_list_formatting(self, context: AnalysisContext) -> list[Issue]:
        issues: list[Issue] = []

        for group in _list_groups(context.tree):
            items = [item for lst in group for item in iter_nodes(lst, NodeType.LIST_ITEM)]
            markers = {item.marker for item in items}
            if not {"-", "*"} <= markers:
                continue
            first, last = group[0], group[-1]
            star_lines = {item.line for item in items if item.marker == "*" and item.line is not None}
            issues.append(
                self.make_issue(
                    "list-marker-consistency",
                    severity=Severity.WARNING,
                    message="Mixed bullet markers in list (use consistent - or * throughout)",
                    id_parts=(first.line,),
                    line=first.line,
                    suggestion=f'Use consistent bullet markers (prefer dashes "{cfg.PREFERRED_BULLET}")',
                    fix=self._standardize_markers(context, first.line, last.end_line, star_lines),
                    safe_fix=True,
                )
            )

        for item in iter_nodes(context.tree, NodeType.LIST_ITEM):
            if item.line is None or not item.children:
                continue
            paragraph = item.children[0]
            if paragraph.type is not NodeType.PARAGRAPH or not paragraph.children:
                continue
            text = paragraph.children[0].value or ""
            if "  " not in text.strip():
                continue
            raw = context.line_text(item.line)
            normalized = normalize_spacing(raw) + _hard_break_spaces(context, item.line, raw)
            issues.append(
                self.make_issue(
                    "list-spacing",
                    severity=Severity.INFO,
                    message="Multiple spaces in list item",
                    id_parts=(item.line,),
                    line=item.line,
                    suggestion="Use single spaces between words",
                    fix=ReplaceFix(from_=raw, to=normalized) if raw and normalized != raw else None,
                    safe_fix=True,
                )
            )

        return issues

    def _standardize_markers(
        self, context: AnalysisContext, start: int | None, end: int | None, star_lines: set[int]
    ) -> ReplaceFix | None:
        if start is None or end is None or not star_lines:
            return None
        block = context.source_block(start, end)
        rewritten = [
            _STAR_BULLET.sub(rf"\g<lead>{cfg.PREFERRED_BULLET}", raw, count=1)
            if line_no in star_lines
            else raw
            for line_no, raw in enumerate(block.split("\n"), start=start)
        ]
        replacement = "\n".join(rewritten)
        if not block or replacement == block:
            return None
        return ReplaceFix(from_=block, to=replacement)

    def check_link_formatting(self, context: AnalysisContext) -> list[Issue]:
        issues: list[Issue] = []

        for paragraph in iter_nodes(context.tree, NodeType.PARAGRAPH):
            links = [link for link in iter_nodes(paragraph, NodeType.LINK) if link.line is not None]
            if not links:
                continue
            paragraph_text = paragraph.plain_text().lower()

            for link in links:
                title = link.plain_text()
                if not link.url or not title:
                    continue

                if "refer to" in paragraph_text:
                    issues.append(
                        self.make_issue(
                            "link-context",
                            severity=Severity.INFO,
                            message='Consider using "see" instead of "refer to" for links',
                            id_parts=(link.line, link.url),
                            line=link.line,
                            suggestion='Use "see" for more natural link text',
                        )
                    )

                if title == link.url and len(link.url) > cfg.BARE_URL_TITLE_MIN_LENGTH:
                    issues.append(
                        self.make_issue(
                            "link-title",
                            severity=Severity.INFO,
                            message="Consider using descriptive text instead of bare URL",
                            id_parts=(link.line, link.url),
                            line=link.line,
                            suggestion="Use descriptive link text instead of the full URL",
                        )
                    )

        return issues

    def check_code_block_formatting(self, context: AnalysisContext) -> list[Issue]:
        issues: list[Issue] = []

        for node in iter_nodes(context.tree, NodeType.CODE):
            if node.line is None:
                continue
            body = node.value or ""

            if not node.lang and len(body) > cfg.CODE_LANG_MIN_LENGTH:
                issues.append(
                    self.make_issue(
                        "code-lang",
                        severity=Severity.INFO,
                        message="Consider specifying language for code block",
                        id_parts=(node.line,),
                        line=node.line,
                        suggestion="Add language identifier (e.g., ```bash, ```javascript)",
                    )
                )

            marker = node.marker or ""
            if marker.startswith("`") and len(marker) >= 4:
                issues.append(
                    self.make_issue(
                        "code-fence",
                        severity=Severity.WARNING,
                        message=f"Incorrect code fence formatting ({len(marker)} backticks)",
                        id_parts=(node.line,),
                        line=node.line,
                        suggestion="Use three backticks (```) for code fences",
                        fix=self._shorten_fence(context, node),
                        safe_fix="```" not in body,
                    )
                )

        return issues

    def _shorten_fence(self, context: AnalysisContext, node: Node) -> ReplaceFix | None:
        block = context.source_block(node.line or 0, node.end_line or 0)
        if not block:
            return None
        lines = block.split("\n")
        lines[0] = _BACKTICK_FENCE.sub(r"\g<indent>```", lines[0], count=1)
        if len(lines) > 1 and lines[-1].strip().startswith("````"):
            lines[-1] = _BACKTICK_FENCE.sub(r"\g<indent>```", lines[-1], count=1)
        replacement = "\n".join(lines)
        if replacement == block:
            return None
        return ReplaceFix(from_=block, to=replacement)

    def check_punctuation_consistency(self, context: AnalysisContext) -> list[Issue]:
        typos = context.training.typos
        if not typos:
            return []

        issues: list[Issue] = []
        fenced = context.fenced_lines
        for index, (wrong, correct) in enumerate(typos.items()):
            if not wrong or wrong == correct:
                continue
            discriminator = wrong if slugify_id_part(wrong) else f"entry-{index}"
            for line_no, line in enumerate(context.lines, start=1):
                if line_no in fenced or wrong not in line:
                    continue
                issues.append(
                    self.make_issue(
                        "punctuation",
                        severity=Severity.WARNING,
                        message=f'Punctuation issue: "{wrong}" should be "{correct}"',
                        id_parts=(line_no, discriminator),
                        line=line_no,
                        suggestion=f'Replace "{wrong}" with "{correct}"',
                        fix=ReplaceFix(from_=wrong, to=correct),
                        safe_fix=True,
                    )
                )
        return issues

    def check_spacing_consistency(self, context: AnalysisContext) -> list[Issue]:
        issues: list[Issue] = []
        fenced = context.fenced_lines

        for line_no, line in enumerate(context.lines, start=1):
            if line_no in fenced or not line.strip() or _is_table_line(line):
                continue
            normalized = normalize_spacing(line)
            hard_break = _hard_break_spaces(context, line_no, line)
            # keeps the break; the trailing-space fix below swaps it for a backslash
            kept = normalized + hard_break
            fix = ReplaceFix(from_=line, to=kept) if kept != line else None

            if _INTERNAL_SPACES.search(line.lstrip(" \t")):
                issues.append(
                    self.make_issue(
                        "spacing-multiple",
                        severity=Severity.INFO,
                        message="Multiple consecutive spaces found",
                        id_parts=(line_no,),
                        line=line_no,
                        suggestion="Use single spaces between words",
                        fix=fix,
                        safe_fix=True,
                    )
                )

            if hard_break:
                issues.append(
                    self.make_issue(
                        "spacing-trailing",
                        severity=Severity.INFO,
                        message="Trailing spaces create a line break",
                        id_parts=(line_no,),
                        line=line_no,
                        suggestion="End the line with a backslash to make the line break visible",
                        fix=ReplaceFix(from_=line, to=normalized + "\\"),
                    )
                )
            elif line != line.rstrip():
                issues.append(
                    self.make_issue(
                        "spacing-trailing",
                        severity=Severity.INFO,
                        message="Trailing spaces found",
                        id_parts=(line_no,),
                        line=line_no,
                        suggestion="Remove whitespace at the end of the line",
                        fix=fix,
                        safe_fix=True,
                    )
                )

        return issues
