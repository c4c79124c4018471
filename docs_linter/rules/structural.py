"""Structural rules: required sections, heading hierarchy and document shape."""

from __future__ import annotations

import logging
import re
from typing import Sequence

from docs_linter.document import AnalysisContext, HeadingInfo
from docs_linter.models import Category, InsertAfterFix, Issue, ReplaceFix, Severity
from docs_linter.utils.text_utils import heading_slug

from . import rule_config as cfg
from .base import RuleModule, SubCheck

LOGGER = logging.getLogger(__name__)

_ATX_HEADING = re.compile(r"^(?P<indent> {0,3})(?P<hashes>#{1,6})(?=\s|$)")


def _capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def _has_section(heading_texts: Sequence[str], name: str, alternatives: Sequence[str]) -> bool:
    return any(
        name in heading or any(alt in heading for alt in alternatives)
        for heading in heading_texts
    )


def retarget_heading(raw_line: str, depth: int) -> str | None:
    """Rewrite an ATX heading line to ``depth``; ``None`` for setext headings."""
    match = _ATX_HEADING.match(raw_line)
    if match is None:
        return None
    return f"{match.group('indent')}{'#' * depth}{raw_line[match.end():]}"


class StructuralRules(RuleModule):
    name = "structural"
    category = Category.STRUCTURAL

    def sub_checks(self) -> Sequence[SubCheck]:
        return (
            self.check_required_sections,
            self.check_heading_hierarchy,
            self.check_table_of_contents,
            self.check_section_order,
            self.check_document_length,
        )

    def check_required_sections(self, context: AnalysisContext) -> list[Issue]:
        if not context.is_readme:
            return []

        issues: list[Issue] = []
        heading_texts = [heading.text.lower() for heading in context.headings]

        for name, alternatives in cfg.REQUIRED_README_SECTIONS:
            if _has_section(heading_texts, name, alternatives):
                continue
            title = _capitalize_first(name)
            issues.append(
                self.make_issue(
                    "missing-required-section",
                    severity=Severity.ERROR,
                    message=f"Missing required section: {name}",
                    id_parts=(name,),
                    suggestion=f'Add a "{title}" section',
                    fix=InsertAfterFix(
                        line=1,
                        content=f"\n## {title}\n\n[Add {name} content here]\n",
                    ),
                )
            )

        for name, alternatives in cfg.RECOMMENDED_README_SECTIONS:
            if _has_section(heading_texts, name, alternatives):
                continue
            issues.append(
                self.make_issue(
                    "missing-recommended-section",
                    severity=Severity.INFO,
                    message=f"Consider adding recommended section: {name}",
                    id_parts=(name,),
                    suggestion=f'Add a "{_capitalize_first(name)}" section',
                )
            )

        path = context.file_path.lower()
        is_technical_guide = any(hint in path for hint in cfg.TECHNICAL_GUIDE_PATH_HINTS) or any(
            hint in heading for heading in heading_texts for hint in cfg.TECHNICAL_GUIDE_HEADING_HINTS
        )
        if is_technical_guide and not any(
            hint in heading for heading in heading_texts for hint in cfg.TROUBLESHOOTING_HEADING_HINTS
        ):
            issues.append(
                self.make_issue(
                    "missing-troubleshooting",
                    severity=Severity.WARNING,
                    message="Technical guides should include troubleshooting or known issues section",
                    suggestion='Add "Known Issues" or "Troubleshooting" section',
                )
            )

        return issues

    def check_heading_hierarchy(self, context: AnalysisContext) -> list[Issue]:
        issues: list[Issue] = []
        previous_depth = 0
        seen_h1 = False

        for heading in context.headings:
            depth = heading.depth
            if heading.line is not None and depth > previous_depth + 1:
                target = previous_depth + 1
                issues.append(
                    self.make_issue(
                        "heading-hierarchy-skip",
                        severity=Severity.WARNING,
                        message=f"Heading level skipped: h{depth} after h{previous_depth}",
                        id_parts=(heading.line,),
                        line=heading.line,
                        suggestion=f"Use h{target} instead of h{depth}",
                        fix=self._heading_fix(context, heading, target),
                    )
                )

            if depth == 1:
                if seen_h1 and heading.line is not None:
                    issues.append(
                        self.make_issue(
                            "multiple-h1",
                            severity=Severity.ERROR,
                            message="Multiple h1 headings found - use only one h1 per document",
                            id_parts=(heading.line,),
                            line=heading.line,
                            suggestion="Change to h2 or merge with existing h1",
                            fix=self._heading_fix(context, heading, 2),
                        )
                    )
                seen_h1 = True

            previous_depth = depth

        return issues

    def _heading_fix(self, context: AnalysisContext, heading: HeadingInfo, depth: int) -> ReplaceFix | None:
        raw = context.line_text(heading.line)
        rewritten = retarget_heading(raw, depth)
        if not raw or rewritten is None or rewritten == raw:
            return None
        return ReplaceFix(from_=raw, to=rewritten)

    def check_table_of_contents(self, context: AnalysisContext) -> list[Issue]:
        headings = context.headings
        if len(context.text) <= cfg.TOC_MIN_CONTENT_LENGTH or len(headings) <= cfg.TOC_MIN_HEADINGS:
            return []

        lowered = context.text.lower()
        if cfg.TOC_PHRASE in lowered or "- [" in context.text or "](#" in context.text:
            return []

        first_h1 = next((h for h in headings if h.depth == 1 and h.line is not None), None)
        entries = [
            f"{'  ' * max(heading.depth - 2, 0)}- [{heading.text}](#{heading_slug(heading.text)})"
            for heading in headings
            if heading.depth >= 2
        ]
        content = "\n## Table of Contents\n\n" + "\n".join(entries) + "\n"

        return [
            self.make_issue(
                "missing-toc",
                severity=Severity.INFO,
                message="Long document should include table of contents",
                suggestion="Add table of contents after the overview section",
                fix=InsertAfterFix(line=first_h1.line if first_h1 else 0, content=content),
            )
        ]

    def check_section_order(self, context: AnalysisContext) -> list[Issue]:
        if not context.is_readme:
            return []

        found: list[tuple[int, str, HeadingInfo]] = []
        for heading in context.headings:
            lowered = heading.text.lower()
            for index, section in enumerate(cfg.EXPECTED_SECTION_ORDER):
                if section in lowered:
                    found.append((index, section, heading))

        issues: list[Issue] = []
        for (previous_index, previous_name, _), (index, name, heading) in zip(found, found[1:]):
            if index >= previous_index or heading.line is None:
                continue
            issues.append(
                self.make_issue(
                    "section-order",
                    severity=Severity.INFO,
                    message=f'Section "{name}" should come before "{previous_name}"',
                    id_parts=(heading.line,),
                    line=heading.line,
                    suggestion="Reorder sections to match standard structure",
                )
            )
        return issues

    def check_document_length(self, context: AnalysisContext) -> list[Issue]:
        issues: list[Issue] = []
        non_blank = sum(1 for line in context.lines if line.strip())

        if context.is_readme and non_blank < cfg.SHORT_README_LINES:
            issues.append(
                self.make_issue(
                    "short-readme",
                    severity=Severity.WARNING,
                    message="README appears to be very short - consider adding more content",
                    suggestion="Add sections like Overview, Prerequisites, Usage, and Additional Resources",
                )
            )

        if non_blank > cfg.LONG_DOCUMENT_LINES:
            ratio = len(context.headings) / non_blank
            if ratio < cfg.MIN_HEADING_RATIO:
                LOGGER.debug("Heading ratio %.4f below threshold for %s", ratio, context.file_path)
                issues.append(
                    self.make_issue(
                        "long-unstructured",
                        severity=Severity.INFO,
                        message="Long document should have more headings for better structure",
                        suggestion="Break content into sections with descriptive headings",
                    )
                )

        return issues
