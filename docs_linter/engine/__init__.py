"""Linter engine exports.

The facade pulls in every rule module, so exports are resolved lazily and
``from docs_linter.engine import apply_fixes`` stays cheap.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .aggregator import merge_issues, summarize
    from .fix_engine import apply_fixes, find_conflicts, select_fixes, write_text_atomic
    from .linter import DocsLinter, validate_input_path
    from .scoring import (
        build_feedback,
        build_recommendations,
        calculate_quality_score,
        rating_for_score,
    )

__all__ = [
    "DocsLinter",
    "apply_fixes",
    "build_feedback",
    "build_recommendations",
    "calculate_quality_score",
    "find_conflicts",
    "merge_issues",
    "rating_for_score",
    "select_fixes",
    "summarize",
    "validate_input_path",
    "write_text_atomic",
]

_LAZY_EXPORTS = {
    # attribute -> (module, attribute)
    "DocsLinter": (".linter", "DocsLinter"),
    "validate_input_path": (".linter", "validate_input_path"),
    "merge_issues": (".aggregator", "merge_issues"),
    "summarize": (".aggregator", "summarize"),
    "apply_fixes": (".fix_engine", "apply_fixes"),
    "find_conflicts": (".fix_engine", "find_conflicts"),
    "select_fixes": (".fix_engine", "select_fixes"),
    "write_text_atomic": (".fix_engine", "write_text_atomic"),
    "build_feedback": (".scoring", "build_feedback"),
    "build_recommendations": (".scoring", "build_recommendations"),
    "calculate_quality_score": (".scoring", "calculate_quality_score"),
    "rating_for_score": (".scoring", "rating_for_score"),
}


def __getattr__(name: str):
    """Import exported attributes on first access."""

    if name in _LAZY_EXPORTS:
        module_name, attr = _LAZY_EXPORTS[name]
        from importlib import import_module

        mod = import_module(f"docs_linter.engine{module_name}")
        value = getattr(mod, attr)
        globals()[name] = value
        return value
    raise AttributeError(name)


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(_LAZY_EXPORTS.keys()))
