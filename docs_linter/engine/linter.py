"""Linter facade: run the rule modules, apply fixes and score documents."""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Iterable, Sequence

from docs_linter.config import MARKDOWN_SUFFIXES, LinterOptions
from docs_linter.document import build_context
from docs_linter.errors import InvalidInputError
from docs_linter.models import CheckResult, FixAction, FixResult, TrainingData, ValidationResult
from docs_linter.rules import RuleModule, default_rule_modules
from docs_linter.utils.data_loader import load_training_data

from .aggregator import merge_issues, summarize
from .fix_engine import (
    apply_fixes,
    find_conflicts,
    read_document_text,
    select_fixes,
    write_text_atomic,
)
from .scoring import build_feedback, build_recommendations, calculate_quality_score

LOGGER = logging.getLogger(__name__)


def validate_input_path(path: Path | str) -> Path:
    """Return ``path`` as a ``Path`` if it names an existing Markdown file."""
    candidate = Path(path)
    if not candidate.is_file():
        raise FileNotFoundError(f"File not found: {candidate}")
    if candidate.suffix.lower() not in MARKDOWN_SUFFIXES:
        raise InvalidInputError(f"Not a Markdown file: {candidate}")
    return candidate


class DocsLinter:
    """Check, fix and validate Markdown documents.

    Training data is loaded once and shared read-only by every run. Files are
    processed one at a time; each rule module is isolated, so a failing module
    is logged, reported in ``CheckResult.warnings`` and contributes no issues.
    """

    def __init__(
        self,
        training_data: TrainingData | None = None,
        *,
        training_data_dir: Path | str | None = None,
        options: LinterOptions | None = None,
        rule_modules: Sequence[RuleModule] | None = None,
    ) -> None:
        if training_data is None:
            training_data = load_training_data(training_data_dir)
        self.training = training_data
        self.options = options if options is not None else LinterOptions()
        self.rule_modules = list(rule_modules) if rule_modules is not None else default_rule_modules()

    def check_text(
        self,
        text: str,
        file_path: Path | str = "<text>",
        options: LinterOptions | None = None,
    ) -> CheckResult:
        """Lint ``text`` as if it were the contents of ``file_path``."""
        context = build_context(
            file_path,
            text,
            training=self.training,
            options=options if options is not None else self.options,
        )

        issue_lists = []
        warnings: list[str] = []
        for module in self.rule_modules:
            try:
                issue_lists.append(module.check(context))
            except Exception as exc:
                LOGGER.exception("Rule module %s failed for %s", module.name, context.file_path)
                warnings.append(f"{module.name} rules skipped: {exc}")

        issues = merge_issues(*issue_lists)
        LOGGER.debug("%s: %s issue(s)", context.file_path, len(issues))
        return CheckResult(
            file=context.file_path,
            issues=issues,
            summary=summarize(issues),
            warnings=warnings,
        )

    def check_file(self, path: Path | str, options: LinterOptions | None = None) -> CheckResult:
        """Lint one file; with ``auto_fix_safe`` also apply its safe fixes."""
        options = options if options is not None else self.options
        source = validate_input_path(path)
        text = self._read(source)
        result = self.check_text(text, str(path), options)

        if not options.auto_fix_safe:
            return result

        actions = select_fixes(result.issues, safe_only=True)
        if not actions:
            return result
        self._write_fixes(source, text, actions)
        fixed_ids = {action.issue_id for action in actions}
        issues = [
            issue.model_copy(update={"fixed": True}) if issue.id in fixed_ids else issue
            for issue in result.issues
        ]
        return result.model_copy(update={"issues": issues})

    def check_files(
        self, paths: Iterable[Path | str], options: LinterOptions | None = None
    ) -> list[CheckResult]:
        return [self.check_file(path, options) for path in paths]

    def fix_file(self, path: Path | str, *, safe_only: bool = False, dry_run: bool = False) -> FixResult:
        """Apply fixes to ``path``; with ``dry_run`` only report them."""
        source = validate_input_path(path)
        text = self._read(source)
        options = replace(self.options, auto_fix_safe=False)
        result = self.check_text(text, str(path), options)

        actions = select_fixes(result.issues, safe_only=safe_only)
        conflicts = find_conflicts(actions)
        if dry_run:
            return FixResult(file=str(path), changes=actions, applied=False, conflicts=conflicts)

        self._write_fixes(source, text, actions)
        return FixResult(file=str(path), changes=actions, applied=True, conflicts=conflicts)

    def validate_file(self, path: Path | str) -> ValidationResult:
        """Check ``path`` comprehensively and score it."""
        options = replace(self.options, comprehensive=True, auto_fix_safe=False)
        result = self.check_file(path, options)
        score = calculate_quality_score(result.issues, result.file, self.training.quality_examples)
        return ValidationResult(
            file=result.file,
            score=score,
            feedback=build_feedback(result.issues),
            recommendations=build_recommendations(score, result.issues),
        )

    @staticmethod
    def _read(path: Path) -> str:
        try:
            return read_document_text(path)
        except UnicodeDecodeError as exc:
            raise InvalidInputError(f"{path} is not valid UTF-8 text: {exc}") from exc

    @staticmethod
    def _write_fixes(path: Path, text: str, actions: Sequence[FixAction]) -> None:
        if not actions:
            return
        fixed = apply_fixes(text, actions)
        if fixed == text:
            LOGGER.info("Fixes for %s left the text unchanged; not writing", path)
            return
        write_text_atomic(path, fixed)
        LOGGER.info("Applied %s fix(es) to %s", len(actions), path)
