"""Tests for the issue, fix and training data models."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from docs_linter.models import (
    Category,
    InsertAfterFix,
    Issue,
    PatternPair,
    ReplaceFix,
    Severity,
    TrainingData,
)


def _issue(**overrides) -> Issue:
    values = {
        "id": "spacing-trailing-3",
        "category": Category.FORMATTING,
        "severity": Severity.INFO,
        "message": "Trailing spaces found",
    }
    values.update(overrides)
    return Issue(**values)


def test_safe_fix_requires_fixable() -> None:
    with pytest.raises(ValidationError):
        _issue(safe_fix=True, fixable=False)


def test_fixable_requires_fix_descriptor() -> None:
    with pytest.raises(ValidationError):
        _issue(fixable=True)


def test_empty_id_rejected() -> None:
    with pytest.raises(ValidationError):
        _issue(id="   ")


def test_to_dict_uses_wire_names() -> None:
    issue = _issue(
        line=3,
        fixable=True,
        safe_fix=True,
        fix=ReplaceFix(from_="a  ", to="a"),
    )
    data = issue.to_dict()
    assert data["safeFix"] is True
    assert data["category"] == "formatting"
    assert data["fix"] == {"type": "replace", "from": "a  ", "to": "a"}
    assert "suggestion" not in data


def test_fix_union_parses_from_wire_format() -> None:
    issue = Issue.model_validate(
        {
            "id": "missing-required-section-overview",
            "category": "structural",
            "severity": "error",
            "message": "Missing required section: overview",
            "fixable": True,
            "fix": {"type": "insertAfter", "line": 1, "content": "\n## Overview\n"},
        }
    )
    assert isinstance(issue.fix, InsertAfterFix)
    assert issue.fix.line == 1


def test_replace_fix_rejects_empty_target() -> None:
    with pytest.raises(ValidationError):
        ReplaceFix(from_="", to="x")


def test_severity_penalties() -> None:
    assert [s.penalty for s in Severity] == [10, 5, 2]
    assert Category.all_values() == ["structural", "formatting", "content", "technical"]


def test_training_data_drops_unusable_pairs() -> None:
    data = TrainingData(
        patterns={
            "content": [
                PatternPair(before="utilize", after="use"),
                PatternPair(before="same", after="same"),
                PatternPair(before="", after="x"),
            ]
        }
    )
    assert [pair.before for pair in data.pattern_pairs("content")] == ["utilize"]
    assert data.pattern_pairs("technical") == []
    assert data.typos == {}
