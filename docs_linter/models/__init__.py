"""Public model exports.

Import from here rather than the submodules:
``from docs_linter.models import Issue, Severity, ReplaceFix``.
"""

from __future__ import annotations

from .enums import SEVERITY_PENALTIES, Category, FixType, Severity
from .fix import Fix, FixAction, FixConflict, InsertAfterFix, RemoveLineFix, ReplaceFix
from .issue import Issue
from .results import CheckResult, FeedbackItem, FixResult, Summary, ValidationResult
from .training_data import Corrections, PatternPair, QualityExample, TrainingData

__all__ = [
    "Category",
    "CheckResult",
    "Corrections",
    "FeedbackItem",
    "Fix",
    "FixAction",
    "FixConflict",
    "FixResult",
    "FixType",
    "InsertAfterFix",
    "Issue",
    "PatternPair",
    "QualityExample",
    "RemoveLineFix",
    "ReplaceFix",
    "SEVERITY_PENALTIES",
    "Severity",
    "Summary",
    "TrainingData",
    "ValidationResult",
]
