"""Result records handed to the CLI and other consumers.

Field names follow the established JSON contract (``file``, ``issues``,
``summary``, ``changes``, ``applied``, ``score``, ``feedback``,
``recommendations``); additions are optional and default to empty.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from .enums import Category, Severity
from .fix import FixAction, FixConflict
from .issue import Issue


def _empty_categories() -> dict[str, int]:
    return {category.value: 0 for category in Category}


class Summary(BaseModel):
    """Issue counts derived from one issue list. Never stored on its own."""

    model_config = ConfigDict(frozen=True)

    total: int = 0
    errors: int = 0
    warnings: int = 0
    info: int = 0
    fixable: int = 0
    categories: dict[str, int] = Field(default_factory=_empty_categories)


class CheckResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file: str
    issues: List[Issue] = Field(default_factory=list)
    summary: Summary = Field(default_factory=Summary)
    # Rule modules that failed and were skipped for this run.
    warnings: List[str] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(issue.severity is Severity.ERROR for issue in self.issues)

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class FixResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file: str
    changes: List[FixAction] = Field(default_factory=list)
    applied: bool = False
    conflicts: List[FixConflict] = Field(default_factory=list)

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class FeedbackItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Severity
    message: str
    line: int | None = None
    suggestion: str | None = None


class ValidationResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file: str
    score: int = Field(ge=0, le=100)
    feedback: List[FeedbackItem] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
