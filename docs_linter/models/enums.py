"""Enumerations shared by the issue, fix and result models.

Values are the exact strings written to JSON output, so they double as the
wire format consumed by the CLI, git hooks and CI jobs.
"""

from __future__ import annotations

from enum import Enum


class Category(str, Enum):
    """Rule module that produced an issue."""

    STRUCTURAL = "structural"
    FORMATTING = "formatting"
    CONTENT = "content"
    TECHNICAL = "technical"

    @classmethod
    def all_values(cls) -> list[str]:
        return [m.value for m in cls]


class Severity(str, Enum):
    """Issue severity, ordered by decreasing impact on the quality score."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    @property
    def penalty(self) -> int:
        return SEVERITY_PENALTIES[self]

    @classmethod
    def all_values(cls) -> list[str]:
        return [m.value for m in cls]


SEVERITY_PENALTIES = {
    Severity.ERROR: 10,
    Severity.WARNING: 5,
    Severity.INFO: 2,
}


class FixType(str, Enum):
    """Kinds of edit a fix descriptor can perform."""

    REPLACE = "replace"
    INSERT_AFTER = "insertAfter"
    REMOVE_LINE = "removeLine"

    @classmethod
    def all_values(cls) -> list[str]:
        return [m.value for m in cls]
