"""Content rules: clarity, completeness, terminology, style and examples."""

from __future__ import annotations

import re
from typing import Sequence

from docs_linter.document import AnalysisContext, NodeType, iter_nodes
from docs_linter.models import Category, Issue, ReplaceFix, Severity
from docs_linter.utils.text_utils import heading_slug, match_case

from . import rule_config as cfg
from .base import RuleModule, SubCheck

_YEAR = re.compile(r"(?<!\d)20\d{2}(?!\d)")
_DUPLICATE_ANCHOR = re.compile(r"^(?P<base>.+)-\d+$")


def _find_ci(line: str, phrase: str) -> str | None:
    """Return ``phrase`` as written in ``line`` (case-insensitive search)."""
    index = line.lower().find(phrase.lower())
    if index < 0:
        return None
    return line[index : index + len(phrase)]


def _variant_pattern(variants: Sequence[str]) -> re.Pattern[str]:
    # Longest first so "SAP BTP" is not also counted as "BTP".
    ordered = sorted(variants, key=len, reverse=True)
    return re.compile(r"(?<!\w)(" + "|".join(re.escape(v) for v in ordered) + r")(?!\w)")


def _nearby_line(context: AnalysisContext, line: int, step: int, reach: int = 2) -> str:
    """First non-blank line within ``reach`` lines from ``line`` going ``step``."""
    for offset in range(1, reach + 1):
        candidate = context.line_text(line + step * offset)
        if candidate.strip():
            return candidate.strip()
    return ""


class ContentRules(RuleModule):
    name = "content"
    category = Category.CONTENT

    def sub_checks(self) -> Sequence[SubCheck]:
        return (
            self.check_content_clarity,
            self.check_completeness,
            self.check_consistency,
            self.check_writing_style,
            self.check_examples,
        )

    def check_content_clarity(self, context: AnalysisContext) -> list[Issue]:
        issues: list[Issue] = []
        pairs = [
            pair
            for pair in context.training.pattern_pairs("content")
            # A rewrite that still contains the original phrase would be
            # flagged again after fixing.
            if pair.before.lower() not in pair.after.lower()
        ]

        for line_no, line in context.prose_lines():
            for pair in pairs:
                matched = _find_ci(line, pair.before)
                if matched is None:
                    continue
                issues.append(
                    self.make_issue(
                        "clarity-improvement",
                        severity=Severity.INFO,
                        message="Content could be clearer based on KM feedback patterns",
                        id_parts=(line_no, pair.before),
                        line=line_no,
                        suggestion=f'Consider: "{pair.after}"',
                        fix=ReplaceFix(from_=matched, to=match_case(matched, pair.after)),
                    )
                )

            lowered = line.lower()
            for phrase, suggestion in cfg.VAGUE_PHRASES:
                if phrase in lowered:
                    issues.append(
                        self.make_issue(
                            "vague-language",
                            severity=Severity.INFO,
                            message=f'Vague language: "{phrase}"',
                            id_parts=(line_no, phrase),
                            line=line_no,
                            suggestion=suggestion,
                        )
                    )

            if any(phrase in lowered for phrase in cfg.PASSIVE_VOICE_PHRASES):
                issues.append(
                    self.make_issue(
                        "passive-voice",
                        severity=Severity.INFO,
                        message="Consider using active voice for clearer instructions",
                        id_parts=(line_no,),
                        line=line_no,
                        suggestion="Rewrite in active voice",
                    )
                )

        return issues

    def check_completeness(self, context: AnalysisContext) -> list[Issue]:
        issues: list[Issue] = []

        for line_no, line in context.prose_lines():
            for marker in cfg.PLACEHOLDER_MARKERS:
                if marker in line:
                    issues.append(
                        self.make_issue(
                            "placeholder",
                            severity=Severity.ERROR,
                            message=f'Placeholder text found: "{marker}"',
                            id_parts=(line_no, marker),
                            line=line_no,
                            suggestion="Replace with actual content",
                        )
                    )

            stripped = line.rstrip().lower()
            introducer = next((lead for lead in cfg.LIST_INTRODUCERS if stripped.endswith(lead)), None)
            if introducer is not None:
                following = _nearby_line(context, line_no, 1)
                if not following.startswith(("-", "*")):
                    issues.append(
                        self.make_issue(
                            "incomplete-list",
                            severity=Severity.WARNING,
                            message=f'Incomplete list or examples after "{introducer}"',
                            id_parts=(line_no,),
                            line=line_no,
                            suggestion="Add list items or examples",
                        )
                    )

        issues.extend(self._broken_internal_links(context))
        return issues

    def _broken_internal_links(self, context: AnalysisContext) -> list[Issue]:
        anchors = {heading_slug(heading.text) for heading in context.headings}
        issues: list[Issue] = []

        for link in iter_nodes(context.tree, NodeType.LINK):
            url = link.url or ""
            if link.line is None or not url.startswith("#") or len(url) < 2:
                continue
            anchor = url[1:]
            if anchor in anchors:
                continue
            duplicate = _DUPLICATE_ANCHOR.match(anchor)
            if duplicate and duplicate.group("base") in anchors:
                continue
            issues.append(
                self.make_issue(
                    "broken-internal-link",
                    severity=Severity.ERROR,
                    message=f"Broken internal link: #{anchor}",
                    id_parts=(link.line, anchor),
                    line=link.line,
                    suggestion="Fix the anchor link or add the missing heading",
                )
            )
        return issues

    def check_consistency(self, context: AnalysisContext) -> list[Issue]:
        issues: list[Issue] = []

        for variants, preferred, message in cfg.TERMINOLOGY_FAMILIES:
            pattern = _variant_pattern(variants)
            found: dict[str, int] = {}
            for line_no, line in context.prose_lines():
                for match in pattern.finditer(line):
                    found.setdefault(match.group(1), line_no)
            if len(found) <= 1:
                continue

            others = {variant: line for variant, line in found.items() if variant != preferred}
            first_line = min(others.values()) if others else None
            listed = ", ".join(f'"{variant}"' for variant in sorted(found))
            issues.append(
                self.make_issue(
                    "terminology-inconsistency",
                    severity=Severity.WARNING,
                    message=f"{message} (found {listed})",
                    id_parts=(preferred,),
                    line=first_line,
                    suggestion=f'Use "{preferred}" consistently throughout the document',
                )
            )

        return issues

    def check_writing_style(self, context: AnalysisContext) -> list[Issue]:
        issues: list[Issue] = []

        for line_no, line in context.prose_lines():
            for phrase, improvement, message in cfg.STYLE_IMPROVEMENTS:
                matched = _find_ci(line, phrase)
                if matched is None:
                    continue
                improved = match_case(matched, improvement)
                issues.append(
                    self.make_issue(
                        "style-improvement",
                        severity=Severity.INFO,
                        message=message,
                        id_parts=(line_no, phrase),
                        line=line_no,
                        suggestion=f'Use: "{improved}"',
                        fix=ReplaceFix(from_=matched, to=improved),
                        safe_fix=True,
                    )
                )

            stripped = line.strip()
            if not stripped or stripped.startswith(("#", "-", "*", "|")):
                continue
            if len(line) > cfg.LONG_SENTENCE_LENGTH and "," in line and "```" not in line:
                issues.append(
                    self.make_issue(
                        "long-sentence",
                        severity=Severity.INFO,
                        message="Long sentence might be hard to read",
                        id_parts=(line_no,),
                        line=line_no,
                        suggestion="Consider breaking into shorter sentences",
                    )
                )

        return issues

    def check_examples(self, context: AnalysisContext) -> list[Issue]:
        issues: list[Issue] = []

        for node in iter_nodes(context.tree, NodeType.CODE):
            if node.line is None or len(node.value or "") <= cfg.CODE_EXPLANATION_MIN_BODY:
                continue
            before = _nearby_line(context, node.line, -1)
            after = _nearby_line(context, node.end_line or node.line, 1)
            explained = (
                len(before) > cfg.EXPLANATION_MIN_LINE_LENGTH
                or ":" in before
                or len(after) > cfg.EXPLANATION_MIN_LINE_LENGTH
                or after.startswith(cfg.EXPLANATORY_OPENERS)
            )
            if not explained:
                issues.append(
                    self.make_issue(
                        "code-needs-explanation",
                        severity=Severity.INFO,
                        message="Code block should have explanation",
                        id_parts=(node.line,),
                        line=node.line,
                        suggestion="Add explanation before or after the code block",
                    )
                )

        current_year = context.options.current_year
        for line_no, line in context.prose_lines():
            lowered = line.lower()
            if any(marker in lowered for marker in cfg.YEAR_EXEMPT_MARKERS):
                continue
            for year in dict.fromkeys(_YEAR.findall(line)):
                if int(year) >= current_year - 1:
                    continue
                issues.append(
                    self.make_issue(
                        "outdated-year",
                        severity=Severity.INFO,
                        message=f"Potentially outdated year reference: {year}",
                        id_parts=(line_no, year),
                        line=line_no,
                        suggestion=f"Consider updating to {current_year}",
                        fix=ReplaceFix(from_=year, to=str(current_year)),
                    )
                )

        return issues
