"""Select and apply fixes to document text.

All line numbers in fix descriptors refer to the original document. Line
edits are applied bottom-up (highest line first) so that earlier edits never
shift the lines later edits point at; ``replace`` edits sort as line 0 and
therefore run last, on the already line-edited text. Ties on a line are
applied in reverse issue order, so several inserts after the same line end up
in issue order and replaces run in issue order.
"""

from __future__ import annotations

import logging
from itertools import combinations
from pathlib import Path
from typing import Iterable, Sequence

from docs_linter.models import (
    FixAction,
    FixConflict,
    InsertAfterFix,
    Issue,
    RemoveLineFix,
    ReplaceFix,
)

LOGGER = logging.getLogger(__name__)


def select_fixes(issues: Iterable[Issue], safe_only: bool = False) -> list[FixAction]:
    """Build fix actions for fixable issues, in issue order.

    With ``safe_only`` only issues marked as safe to fix are selected.
    """
    actions: list[FixAction] = []
    for issue in issues:
        if not issue.fixable or issue.fix is None:
            continue
        if safe_only and not issue.safe_fix:
            continue
        actions.append(
            FixAction(
                issue_id=issue.id,
                type=issue.fix.type,
                description=issue.message,
                fix=issue.fix,
            )
        )
    return actions


def apply_fixes(text: str, actions: Sequence[FixAction]) -> str:
    """Return ``text`` with every action applied.

    An empty action list returns ``text`` itself. ``replace`` substitutes every
    occurrence of its literal target; a target that is no longer present
    (because an earlier edit already rewrote it) is a no-op.
    """
    if not actions:
        return text

    ordered = [
        action
        for _, action in sorted(
            enumerate(actions),
            key=lambda pair: (pair[1].fix.sort_line, pair[0]),
            reverse=True,
        )
    ]
    lines = text.split("\n")
    replacements: list[ReplaceFix] = []

    for action in ordered:
        fix = action.fix
        if isinstance(fix, ReplaceFix):
            replacements.append(fix)
        elif isinstance(fix, InsertAfterFix):
            if fix.line > len(lines):
                LOGGER.warning(
                    "Fix %s inserts after line %s but the document has %s lines; appending",
                    action.issue_id,
                    fix.line,
                    len(lines),
                )
            lines.insert(min(fix.line, len(lines)), fix.content)
        elif isinstance(fix, RemoveLineFix):
            if fix.line > len(lines):
                LOGGER.warning(
                    "Skipping fix %s: line %s is out of range (%s lines)",
                    action.issue_id,
                    fix.line,
                    len(lines),
                )
                continue
            del lines[fix.line - 1]

    result = "\n".join(lines)
    for fix in reversed(replacements):
        if fix.from_ not in result:
            LOGGER.debug("Replacement target %r no longer present; skipping", fix.from_)
            continue
        result = result.replace(fix.from_, fix.to)
    return result


def find_conflicts(actions: Sequence[FixAction]) -> list[FixConflict]:
    """Report pairs of actions whose edits may interfere.

    Conflicts are diagnostics only; ``apply_fixes`` still applies everything.
    Two inserts after the same line are not reported: they land in issue order.
    """
    conflicts: list[FixConflict] = []

    for first, second in combinations(actions, 2):
        reason = _conflict_reason(first, second)
        if reason is None:
            continue
        conflicts.append(
            FixConflict(
                first_issue_id=first.issue_id,
                second_issue_id=second.issue_id,
                reason=reason,
            )
        )

    for conflict in conflicts:
        LOGGER.info(
            "Fix conflict between %s and %s: %s",
            conflict.first_issue_id,
            conflict.second_issue_id,
            conflict.reason,
        )
    return conflicts


def _conflict_reason(first: FixAction, second: FixAction) -> str | None:
    a, b = first.fix, second.fix
    if isinstance(a, ReplaceFix) and isinstance(b, ReplaceFix):
        if a.from_ == b.from_:
            return None if a.to == b.to else "replace the same text differently"
        if a.from_ in b.from_ or b.from_ in a.from_:
            return "replace overlapping text"
        return None
    if isinstance(a, ReplaceFix) or isinstance(b, ReplaceFix):
        return None
    if isinstance(a, InsertAfterFix) and isinstance(b, InsertAfterFix):
        return None
    if a.line == b.line:
        return f"both edit line {a.line}"
    return None


def read_document_text(path: Path) -> str:
    """Read a Markdown file without translating line endings."""
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def write_text_atomic(path: Path, text: str) -> None:
    """Write ``text`` to ``path`` via a temporary file and an atomic replace."""
    temp_file = path.with_suffix(path.suffix + ".tmp")
    try:
        with open(temp_file, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        temp_file.replace(path)
    except OSError:
        LOGGER.exception("Failed to write fixes to %s", path)
        if temp_file.exists():
            temp_file.unlink()
        raise
