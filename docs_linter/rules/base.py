"""Base class for rule modules.

A rule module is a stateless, ordered collection of sub-checks. Each
sub-check is a plain callable ``(context) -> list[Issue]``; the module runs
them in order and concatenates the results. Sub-check order only affects
issue order, never correctness, because no sub-check reads another's output.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Sequence

from docs_linter.document import AnalysisContext
from docs_linter.models import Category, Fix, Issue, Severity
from docs_linter.utils.text_utils import make_issue_id

SubCheck = Callable[[AnalysisContext], list[Issue]]


class RuleModule(ABC):
    """A fixed pipeline of sub-checks for one issue category."""

    name: str = "base"
    category: Category

    @abstractmethod
    def sub_checks(self) -> Sequence[SubCheck]:
        """Return the ordered sub-checks for this module."""

    def check(self, context: AnalysisContext) -> list[Issue]:
        issues: list[Issue] = []
        for sub_check in self.sub_checks():
            issues.extend(sub_check(context))
        return issues

    def make_issue(
        self,
        rule: str,
        *,
        severity: Severity,
        message: str,
        id_parts: Sequence[object] = (),
        line: int | None = None,
        suggestion: str | None = None,
        fix: Fix | None = None,
        safe_fix: bool = False,
    ) -> Issue:
        """Build an issue in this module's category.

        The id is ``rule`` followed by the slugged ``id_parts``. An issue is
        fixable exactly when a fix descriptor is supplied.
        """
        return Issue(
            id=make_issue_id(rule, *id_parts),
            category=self.category,
            severity=severity,
            message=message,
            line=line,
            suggestion=suggestion,
            fixable=fix is not None,
            safe_fix=safe_fix and fix is not None,
            fix=fix,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
