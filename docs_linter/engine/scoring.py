"""Quality score, feedback and recommendations for validated documents."""

from __future__ import annotations

from typing import Iterable, Sequence

from docs_linter.models import Category, FeedbackItem, Issue, QualityExample, Severity

MAX_SCORE = 100
QUALITY_EXAMPLE_BONUS = 10
LOW_SCORE_THRESHOLD = 50
FORMATTING_ISSUE_THRESHOLD = 3

RATING_THRESHOLDS = (
    (90, "excellent"),
    (75, "good"),
)
DEFAULT_RATING = "needs-improvement"

RECOMMEND_EXAMPLES = "Consider reviewing high-quality examples in the repository"
RECOMMEND_FIX_ERRORS = "Fix critical errors before submitting for review"
RECOMMEND_FORMATTING = "Review formatting standards in the KM style guide"


def is_quality_example(file_path: str, quality_examples: Iterable[QualityExample] | None) -> bool:
    if not quality_examples:
        return False
    return any(
        example.path_fragment and example.path_fragment in file_path
        for example in quality_examples
    )


def calculate_quality_score(
    issues: Iterable[Issue],
    file_path: str,
    quality_examples: Iterable[QualityExample] | None = None,
) -> int:
    """Score a document from 0 to 100.

    Each issue costs its severity penalty (10/5/2). Files that are themselves
    listed as quality examples earn a bonus. The result is clamped.
    """
    score = MAX_SCORE - sum(issue.severity.penalty for issue in issues)
    if is_quality_example(file_path, quality_examples):
        score += QUALITY_EXAMPLE_BONUS
    return max(0, min(MAX_SCORE, score))


def build_feedback(issues: Iterable[Issue]) -> list[FeedbackItem]:
    return [
        FeedbackItem(
            type=issue.severity,
            message=issue.message,
            line=issue.line,
            suggestion=issue.suggestion,
        )
        for issue in issues
    ]


def build_recommendations(score: int, issues: Sequence[Issue]) -> list[str]:
    recommendations: list[str] = []
    if score < LOW_SCORE_THRESHOLD:
        recommendations.append(RECOMMEND_EXAMPLES)
    if any(issue.severity is Severity.ERROR for issue in issues):
        recommendations.append(RECOMMEND_FIX_ERRORS)
    formatting = sum(1 for issue in issues if issue.category is Category.FORMATTING)
    if formatting > FORMATTING_ISSUE_THRESHOLD:
        recommendations.append(RECOMMEND_FORMATTING)
    return recommendations


def rating_for_score(score: int) -> str:
    """Map a score to ``excellent`` (>= 90), ``good`` (>= 75) or ``needs-improvement``."""
    for threshold, rating in RATING_THRESHOLDS:
        if score >= threshold:
            return rating
    return DEFAULT_RATING
