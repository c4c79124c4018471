"""Merge rule-module output into one issue list and summarise it."""

from __future__ import annotations

import logging
from typing import Iterable

from docs_linter.models import Category, Issue, Severity, Summary

LOGGER = logging.getLogger(__name__)


def merge_issues(*issue_lists: Iterable[Issue]) -> list[Issue]:
    """Concatenate issue lists, keeping first-seen order and unique ids.

    An issue identical to one already kept is dropped. A different issue
    that reuses an existing id is kept under ``<id>-2``, ``<id>-3``, ...
    """
    merged: list[Issue] = []
    taken: set[str] = set()
    # original id -> issues kept for it, compared with their original id
    kept: dict[str, list[Issue]] = {}

    for issues in issue_lists:
        for issue in issues:
            previous = kept.setdefault(issue.id, [])
            if issue in previous:
                continue

            new_id = issue.id
            if previous or new_id in taken:
                suffix = 2
                while f"{issue.id}-{suffix}" in taken:
                    suffix += 1
                new_id = f"{issue.id}-{suffix}"
                LOGGER.warning(
                    "Issue id %s produced twice with different content; keeping the second as %s",
                    issue.id,
                    new_id,
                )

            previous.append(issue)
            taken.add(new_id)
            merged.append(issue if new_id == issue.id else issue.model_copy(update={"id": new_id}))

    return merged


def summarize(issues: Iterable[Issue]) -> Summary:
    """Count issues by severity, fixability and category."""
    categories = {category.value: 0 for category in Category}
    counts = {severity: 0 for severity in Severity}
    total = fixable = 0

    for issue in issues:
        total += 1
        counts[issue.severity] += 1
        categories[issue.category.value] += 1
        if issue.fixable:
            fixable += 1

    return Summary(
        total=total,
        errors=counts[Severity.ERROR],
        warnings=counts[Severity.WARNING],
        info=counts[Severity.INFO],
        fixable=fixable,
        categories=categories,
    )
