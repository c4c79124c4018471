"""Tests for heading, list, link, code block, punctuation and spacing checks."""

from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from docs_linter.document import build_context
from docs_linter.engine.fix_engine import apply_fixes, select_fixes
from docs_linter.models import Corrections, ReplaceFix, Severity, TrainingData
from docs_linter.rules.formatting import FormattingRules, normalize_spacing


def _check(text: str, training: TrainingData | None = None):
    context = build_context("guide.md", text, training=training)
    return {issue.id: issue for issue in FormattingRules().check(context)}


class TestHeadings:
    def test_known_heading_correction_is_safe(self) -> None:
        issue = _check("# Doc\n\n## Support ticket checklist\n")["heading-3-title-improvement"]
        assert issue.severity is Severity.WARNING
        assert issue.safe_fix
        assert issue.fix == ReplaceFix(
            from_="## Support ticket checklist", to="## Checklist for Support Tickets"
        )

    def test_title_case_suggestion(self) -> None:
        issue = _check("## getting started\n")["heading-title-case-1"]
        assert issue.severity is Severity.INFO
        assert not issue.safe_fix
        assert issue.fix == ReplaceFix(from_="## getting started", to="## Getting Started")

    def test_title_case_heading_passes(self) -> None:
        assert "heading-title-case-1" not in _check("## Getting Started\n")

    def test_deep_headings_are_not_title_cased(self) -> None:
        assert "heading-title-case-3" not in _check("# A\n\n### getting started\n")


class TestLists:
    def test_mixed_markers_fix_standardises_on_dashes(self) -> None:
        text = "- one\n* two\n- three\n"
        issues = _check(text)
        issue = issues["list-marker-consistency-1"]
        assert issue.severity is Severity.WARNING
        assert issue.safe_fix
        assert apply_fixes(text, select_fixes([issue])) == "- one\n- two\n- three\n"
        assert len([i for i in issues if i.startswith("list-marker-consistency")]) == 1

    def test_consistent_list_passes(self) -> None:
        assert not any(i.startswith("list-marker") for i in _check("- one\n- two\n"))

    def test_nested_mixed_markers_are_reported(self) -> None:
        text = "- one\n  * nested\n- two\n"
        issues = _check(text)
        assert "list-marker-consistency-1" in issues
        fixed = apply_fixes(text, select_fixes([issues["list-marker-consistency-1"]]))
        assert fixed == "- one\n  - nested\n- two\n"

    def test_separate_lists_are_not_grouped(self) -> None:
        text = "- one\n- two\n\nParagraph between.\n\n* three\n* four\n"
        assert not any(i.startswith("list-marker") for i in _check(text))

    def test_double_space_in_list_item(self) -> None:
        issue = _check("- one  two\n")["list-spacing-1"]
        assert issue.fix == ReplaceFix(from_="- one  two", to="- one two")

    def test_list_spacing_fix_keeps_hard_break(self) -> None:
        issue = _check("- one  two   \n  three\n")["list-spacing-1"]
        assert issue.fix == ReplaceFix(from_="- one  two   ", to="- one two   ")


class TestLinks:
    def test_refer_to_context(self) -> None:
        issues = _check("Please refer to [the docs](https://example.com).\n")
        assert issues["link-context-1-https-example-com"].severity is Severity.INFO

    def test_bare_long_url_title(self) -> None:
        url = "https://example.com/a/very/long/path/that/goes/on/and/on/forever"
        issues = _check(f"[{url}]({url})\n")
        assert any(issue_id.startswith("link-title-1-") for issue_id in issues)


class TestCodeBlocks:
    def test_missing_language(self) -> None:
        issues = _check("```\nresult = compute_value(42)\n```\n")
        assert "code-lang-1" in issues

    def test_four_backtick_fence_is_shortened(self) -> None:
        text = "````\nprint('hi')\n````\n"
        issue = _check(text)["code-fence-1"]
        assert issue.safe_fix
        assert apply_fixes(text, select_fixes([issue])) == "```\nprint('hi')\n```\n"

    def test_fence_around_nested_fence_is_not_safe(self) -> None:
        text = "````markdown\n```bash\nls\n```\n````\n"
        issue = _check(text)["code-fence-1"]
        assert issue.fixable and not issue.safe_fix


def test_punctuation_from_correction_dictionary() -> None:
    training = TrainingData(corrections=Corrections(typos={"teh": "the"}))
    issues = _check("teh cat\n\n```\nteh code\n```\n", training)
    issue = issues["punctuation-1-teh"]
    assert issue.safe_fix
    assert issue.fix == ReplaceFix(from_="teh", to="the")
    assert not any(i.startswith("punctuation-4") for i in issues)


class TestSpacing:
    def test_multiple_spaces(self) -> None:
        issue = _check("Some text   here\n")["spacing-multiple-1"]
        assert issue.fix == ReplaceFix(from_="Some text   here", to="Some text here")

    def test_trailing_spaces(self) -> None:
        issue = _check("Hello \n")["spacing-trailing-1"]
        assert issue.fix == ReplaceFix(from_="Hello ", to="Hello")

    def test_hard_line_break_is_not_a_safe_fix(self) -> None:
        text = "Address line one  \nAddress line two\n"
        issue = _check(text)["spacing-trailing-1"]
        assert not issue.safe_fix
        assert issue.fix == ReplaceFix(from_="Address line one  ", to="Address line one\\")
        assert apply_fixes(text, select_fixes([issue], safe_only=True)) == text

    def test_trailing_spaces_before_blank_line_are_not_a_break(self) -> None:
        assert _check("Hello  \n\nWorld\n")["spacing-trailing-1"].safe_fix
        assert _check("Hello  \n# Next\n")["spacing-trailing-1"].safe_fix

    def test_multiple_spaces_fix_keeps_hard_break(self) -> None:
        issue = _check("Some   text  \nmore text\n")["spacing-multiple-1"]
        assert issue.safe_fix
        assert issue.fix == ReplaceFix(from_="Some   text  ", to="Some text  ")

    def test_code_and_tables_are_skipped(self) -> None:
        text = "| a   | b |\n|---|---|\n| 1 | 2 |\n\n```\nx   =   1\n```\n"
        assert not any(i.startswith("spacing") for i in _check(text))

    def test_overlapping_spacing_fixes_converge(self) -> None:
        text = "Some   text  \n"
        issues = _check(text)
        assert {"spacing-multiple-1", "spacing-trailing-1"} <= set(issues)
        assert apply_fixes(text, select_fixes(issues.values(), safe_only=True)) == "Some text\n"


def test_normalize_spacing_keeps_indent() -> None:
    assert normalize_spacing("    two  words  ") == "    two words"
