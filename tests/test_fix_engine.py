"""Tests for fix selection, application, conflicts and atomic writes."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from docs_linter.engine.fix_engine import (
    apply_fixes,
    find_conflicts,
    read_document_text,
    select_fixes,
    write_text_atomic,
)
from docs_linter.models import (
    Category,
    FixAction,
    InsertAfterFix,
    Issue,
    RemoveLineFix,
    ReplaceFix,
    Severity,
)


def _action(issue_id: str, fix) -> FixAction:
    return FixAction(issue_id=issue_id, type=fix.type, description=issue_id, fix=fix)


def _issue(issue_id: str, fix=None, safe: bool = False) -> Issue:
    return Issue(
        id=issue_id,
        category=Category.FORMATTING,
        severity=Severity.INFO,
        message=f"message for {issue_id}",
        fixable=fix is not None,
        safe_fix=safe,
        fix=fix,
    )


class TestApplyFixes:
    def test_empty_actions_return_same_text(self) -> None:
        text = "# Title\r\nbody  \n"
        assert apply_fixes(text, []) is text

    def test_line_edits_refer_to_original_lines(self) -> None:
        text = "a\nb\nc"
        actions = [
            _action("insert", InsertAfterFix(line=1, content="X")),
            _action("remove", RemoveLineFix(line=3)),
        ]
        assert apply_fixes(text, actions) == "a\nX\nb"

    def test_inserts_after_same_line_keep_issue_order(self) -> None:
        actions = [
            _action("first", InsertAfterFix(line=1, content="X")),
            _action("second", InsertAfterFix(line=1, content="Y")),
            _action("third", InsertAfterFix(line=1, content="Z")),
        ]
        assert apply_fixes("a\nb", actions) == "a\nX\nY\nZ\nb"

    def test_replaces_run_in_issue_order(self) -> None:
        actions = [
            _action("first", ReplaceFix(from_="colour", to="color")),
            _action("second", ReplaceFix(from_="color", to="hue")),
        ]
        assert apply_fixes("colour", actions) == "hue"

    def test_insert_at_top(self) -> None:
        assert apply_fixes("a\nb", [_action("top", InsertAfterFix(line=0, content="TOP"))]) == "TOP\na\nb"

    def test_insert_past_end_appends(self) -> None:
        assert apply_fixes("a", [_action("end", InsertAfterFix(line=10, content="Z"))]) == "a\nZ"

    def test_remove_out_of_range_is_skipped(self) -> None:
        assert apply_fixes("a\nb", [_action("gone", RemoveLineFix(line=9))]) == "a\nb"

    def test_replace_runs_after_line_edits(self) -> None:
        text = "one\ntwo"
        actions = [
            _action("rename", ReplaceFix(from_="X", to="Y")),
            _action("insert", InsertAfterFix(line=1, content="X")),
        ]
        assert apply_fixes(text, actions) == "one\nY\ntwo"

    def test_replace_every_occurrence_and_missing_target_is_noop(self) -> None:
        actions = [
            _action("a", ReplaceFix(from_="teh", to="the")),
            _action("b", ReplaceFix(from_="absent", to="x")),
        ]
        assert apply_fixes("teh cat teh dog", actions) == "the cat the dog"

    def test_crlf_is_preserved(self) -> None:
        text = "# T\r\nline\r\n"
        actions = [_action("ins", InsertAfterFix(line=1, content="new\r"))]
        assert apply_fixes(text, actions) == "# T\r\nnew\r\nline\r\n"


def test_select_fixes_honours_safe_only() -> None:
    issues = [
        _issue("safe", ReplaceFix(from_="a", to="b"), safe=True),
        _issue("unsafe", ReplaceFix(from_="c", to="d")),
        _issue("report-only"),
    ]
    assert [a.issue_id for a in select_fixes(issues)] == ["safe", "unsafe"]
    actions = select_fixes(issues, safe_only=True)
    assert [a.issue_id for a in actions] == ["safe"]
    assert actions[0].type == "replace"
    assert actions[0].description == "message for safe"


class TestConflicts:
    def test_same_target_different_replacement(self) -> None:
        conflicts = find_conflicts(
            [
                _action("a", ReplaceFix(from_="x", to="y")),
                _action("b", ReplaceFix(from_="x", to="z")),
            ]
        )
        assert [(c.first_issue_id, c.second_issue_id) for c in conflicts] == [("a", "b")]

    def test_identical_replacements_do_not_conflict(self) -> None:
        fix = ReplaceFix(from_="Some   text", to="Some text")
        assert find_conflicts([_action("a", fix), _action("b", fix)]) == []

    def test_overlapping_replacements(self) -> None:
        conflicts = find_conflicts(
            [
                _action("a", ReplaceFix(from_="2023", to="2026")),
                _action("b", ReplaceFix(from_="since 2023", to="since 2024")),
            ]
        )
        assert conflicts[0].reason == "replace overlapping text"

    def test_line_edits_on_same_line(self) -> None:
        conflicts = find_conflicts(
            [
                _action("a", RemoveLineFix(line=3)),
                _action("b", InsertAfterFix(line=3, content="x")),
                _action("c", InsertAfterFix(line=4, content="y")),
            ]
        )
        assert [(c.first_issue_id, c.second_issue_id) for c in conflicts] == [("a", "b")]

    def test_inserts_after_same_line_do_not_conflict(self) -> None:
        conflicts = find_conflicts(
            [
                _action("overview", InsertAfterFix(line=1, content="## Overview")),
                _action("toc", InsertAfterFix(line=1, content="## Table of Contents")),
                _action("remove", RemoveLineFix(line=1)),
            ]
        )
        assert [(c.first_issue_id, c.second_issue_id) for c in conflicts] == [
            ("overview", "remove"),
            ("toc", "remove"),
        ]


class TestFileIO:
    def test_read_keeps_line_endings(self, tmp_path: Path) -> None:
        path = tmp_path / "README.md"
        path.write_bytes(b"# T\r\nbody\r\n")
        assert read_document_text(path) == "# T\r\nbody\r\n"

    def test_write_text_atomic(self, tmp_path: Path) -> None:
        path = tmp_path / "README.md"
        path.write_text("old", encoding="utf-8")
        write_text_atomic(path, "new\r\ntext")
        assert path.read_bytes() == b"new\r\ntext"
        assert list(tmp_path.iterdir()) == [path]

    def test_write_failure_cleans_up(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "README.md"
        path.write_text("old", encoding="utf-8")

        def boom(self, target):
            raise OSError("disk full")

        monkeypatch.setattr(Path, "replace", boom)
        with pytest.raises(OSError):
            write_text_atomic(path, "new")
        assert path.read_text(encoding="utf-8") == "old"
        assert not (tmp_path / "README.md.tmp").exists()
