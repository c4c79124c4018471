from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from docs_linter.engine.scoring import (
    RECOMMEND_EXAMPLES,
    RECOMMEND_FIX_ERRORS,
    RECOMMEND_FORMATTING,
    build_feedback,
    build_recommendations,
    calculate_quality_score,
    rating_for_score,
)
from docs_linter.models import Category, Issue, QualityExample, Severity


def _issues(severity: Severity, count: int, category: Category = Category.CONTENT) -> list[Issue]:
    return [
        Issue(id=f"{severity.value}-{i}", category=category, severity=severity, message="m")
        for i in range(count)
    ]


def test_no_issues_scores_full_marks() -> None:
    assert calculate_quality_score([], "README.md") == 100


def test_penalties_by_severity() -> None:
    issues = _issues(Severity.ERROR, 1) + _issues(Severity.WARNING, 1) + _issues(Severity.INFO, 1)
    assert calculate_quality_score(issues, "README.md") == 83


def test_score_is_clamped_at_zero() -> None:
    assert calculate_quality_score(_issues(Severity.ERROR, 11), "README.md") == 0


def test_quality_example_bonus_is_clamped() -> None:
    examples = [QualityExample(file="./samples/README.md", score=98)]
    assert calculate_quality_score(_issues(Severity.ERROR, 3), "repo/samples/README.md", examples) == 80
    assert calculate_quality_score(_issues(Severity.WARNING, 1), "samples/README.md", examples) == 100
    assert calculate_quality_score(_issues(Severity.ERROR, 3), "other/README.md", examples) == 70


@pytest.mark.parametrize(
    ("score", "rating"),
    [(100, "excellent"), (90, "excellent"), (89, "good"), (75, "good"), (74, "needs-improvement")],
)
def test_rating_for_score(score: int, rating: str) -> None:
    assert rating_for_score(score) == rating


def test_recommendations() -> None:
    issues = _issues(Severity.ERROR, 6) + _issues(Severity.INFO, 4, Category.FORMATTING)
    score = calculate_quality_score(issues, "README.md")
    assert build_recommendations(score, issues) == [
        RECOMMEND_EXAMPLES,
        RECOMMEND_FIX_ERRORS,
        RECOMMEND_FORMATTING,
    ]
    assert build_recommendations(100, []) == []


def test_feedback_mirrors_issues() -> None:
    issue = Issue(
        id="x",
        category=Category.CONTENT,
        severity=Severity.WARNING,
        message="Incomplete list",
        line=4,
        suggestion="Add items",
    )
    (item,) = build_feedback([issue])
    assert (item.type, item.message, item.line, item.suggestion) == (
        Severity.WARNING,
        "Incomplete list",
        4,
        "Add items",
    )
