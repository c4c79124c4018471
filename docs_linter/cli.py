"""Command-line interface for the documentation linter.

Examples:
  # Check every README.md below the current directory
  python -m docs_linter check

  # Check specific files and apply safe fixes while checking
  python -m docs_linter check docs/guide.md README.md --auto-fix-safe

  # Show the fixes that would be applied to a file
  python -m docs_linter fix README.md --dry-run

  # Score a file
  python -m docs_linter validate README.md

  # Generate a starter document
  python -m docs_linter template --type guide --output GUIDE.md

Exit codes: 0 when no error-severity issue was found, 1 when at least one
was, 2 when an input file is missing or is not a Markdown file.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterable

from . import __version__
from .config import LinterOptions, load_settings
from .engine.linter import DocsLinter
from .engine.scoring import rating_for_score
from .errors import DocsLinterError
from .models import CheckResult, Severity
from .templates import TemplateGenerator

LOGGER = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ISSUES = 1
EXIT_INPUT_ERROR = 2

IGNORED_DIRS = frozenset({".git", "node_modules", ".venv", "venv", "__pycache__"})

SEVERITY_ICONS = {
    Severity.ERROR: "[error]",
    Severity.WARNING: "[warning]",
    Severity.INFO: "[info]",
}

RATING_MESSAGES = {
    "excellent": "Excellent! This documentation meets KM quality standards.",
    "good": "Good, but could be improved with KM feedback patterns.",
    "needs-improvement": "Needs significant improvement to meet KM standards.",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docs-linter",
        description="Rule-based linter for Markdown documentation, built from KM feedback patterns.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--dotenv",
        type=Path,
        default=None,
        help="Optional .env file to load before reading DOCS_LINTER_* settings.",
    )
    parser.add_argument(
        "--training-data",
        type=Path,
        default=None,
        help="Directory holding the training data JSON files (default: DOCS_LINTER_TRAINING_DATA or ./training-data).",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: DOCS_LINTER_LOG_LEVEL or INFO).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to run")

    check = subparsers.add_parser("check", help="Check documentation files for issues.")
    check.add_argument("files", nargs="*", type=Path, help="Files to check (default: all README.md files).")
    check.add_argument("--auto-fix-safe", action="store_true", help="Apply safe fixes while checking.")
    check.add_argument("--comprehensive", action="store_true", help="Run comprehensive analysis.")
    check.add_argument("--format", choices=["table", "json"], default="table", help="Output format (default: table).")

    fix = subparsers.add_parser("fix", help="Apply fixes to a documentation file.")
    fix.add_argument("file", type=Path, help="File to fix.")
    fix.add_argument("--safe-only", action="store_true", help="Only apply fixes marked as safe.")
    fix.add_argument("--dry-run", action="store_true", help="Show the fixes without applying them.")

    validate = subparsers.add_parser("validate", help="Score a documentation file.")
    validate.add_argument("file", type=Path, help="File to validate.")
    validate.add_argument("--format", choices=["table", "json"], default="table", help="Output format (default: table).")

    template = subparsers.add_parser("template", help="Generate a document from a template.")
    template.add_argument(
        "--type",
        default="sample-app",
        help="Template type: sample-app, guide, api, troubleshooting (default: sample-app).",
    )
    template.add_argument("--output", type=Path, default=Path("README.md"), help="Output file (default: README.md).")
    template.add_argument("--repo-url", default=None, help="Repository URL to fill in.")
    template.add_argument("--project-dir", default=None, help="Project directory to fill in.")
    template.add_argument("--title", default=None, help="Document title to fill in.")
    template.add_argument("--system-name", default=None, help="System or application name to fill in.")
    template.add_argument("--no-date", action="store_true", help="Do not prepend the generation date.")
    template.add_argument("--list", action="store_true", help="List available templates and exit.")

    return parser


def find_readme_files(root: Path) -> list[Path]:
    """All ``README.md`` files below ``root``, skipping VCS and dependency folders."""
    found = []
    for path in sorted(root.rglob("README.md")):
        if any(part in IGNORED_DIRS for part in path.relative_to(root).parts):
            continue
        found.append(path)
    return found


def _print_check_results(results: Iterable[CheckResult]) -> None:
    results = list(results)
    total = errors = warnings = 0

    for result in results:
        for message in result.warnings:
            print(f"Warning ({result.file}): {message}")
        if not result.issues:
            continue
        print(f"\n{result.file}:")
        for issue in result.issues:
            fixed = " (fixed)" if issue.fixed else ""
            print(f"  {SEVERITY_ICONS[issue.severity]} {issue.message}{fixed}")
            if issue.suggestion:
                print(f"      Suggestion: {issue.suggestion}")
            if issue.line:
                print(f"      Line {issue.line}")
        total += result.summary.total
        errors += result.summary.errors
        warnings += result.summary.warnings

    print("\nSummary:")
    print(f"  Files checked: {len(results)}")
    print(f"  Total issues: {total}")
    if errors:
        print(f"  Errors: {errors}")
    if warnings:
        print(f"  Warnings: {warnings}")
    if total == 0:
        print("All files passed KM documentation standards!")


def run_check(linter: DocsLinter, args: argparse.Namespace) -> int:
    files = list(args.files) or find_readme_files(Path.cwd())
    if not files:
        print("No README.md files found.")
        return EXIT_OK

    options = LinterOptions(comprehensive=args.comprehensive, auto_fix_safe=args.auto_fix_safe)
    results = []
    for path in files:
        LOGGER.info("Checking %s", path)
        results.append(linter.check_file(path, options))

    if args.format == "json":
        print(json.dumps([result.to_dict() for result in results], indent=2))
    else:
        _print_check_results(results)

    return EXIT_ISSUES if any(result.has_errors for result in results) else EXIT_OK


def run_fix(linter: DocsLinter, args: argparse.Namespace) -> int:
    result = linter.fix_file(args.file, safe_only=args.safe_only, dry_run=args.dry_run)
    if not result.changes:
        print(f"No fixes to apply to {args.file}")
        return EXIT_OK

    verb = "Would apply" if args.dry_run else "Applied"
    print(f"{verb} {len(result.changes)} fix(es) to {args.file}")
    for change in result.changes:
        print(f"  - {change.description}")
    for conflict in result.conflicts:
        print(f"  ! {conflict.first_issue_id} / {conflict.second_issue_id}: {conflict.reason}")
    return EXIT_OK


def run_validate(linter: DocsLinter, args: argparse.Namespace) -> int:
    result = linter.validate_file(args.file)
    if args.format == "json":
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(f"Validation results for {result.file}:")
        print(f"Score: {result.score}/100")
        print(RATING_MESSAGES[rating_for_score(result.score)])
        for item in result.feedback:
            print(f"  {SEVERITY_ICONS[item.type]} {item.message}")
        for recommendation in result.recommendations:
            print(f"  > {recommendation}")
    has_errors = any(item.type is Severity.ERROR for item in result.feedback)
    return EXIT_ISSUES if has_errors else EXIT_OK


def run_template(args: argparse.Namespace) -> int:
    generator = TemplateGenerator()
    if args.list:
        for info in generator.available_templates():
            print(f"{info.name}: {info.description} ({info.use_case})")
        return EXIT_OK

    content = generator.generate(
        args.type,
        repo_url=args.repo_url,
        project_dir=args.project_dir,
        title=args.title,
        system_name=args.system_name,
        include_date=not args.no_date,
    )
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(content, encoding="utf-8")
    print(f"Generated {args.type} template: {args.output}")
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = load_settings(args.dotenv)
    level = args.log_level or settings.log_level
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "template":
        return run_template(args)

    linter = DocsLinter(training_data_dir=args.training_data or settings.training_data_dir)
    try:
        if args.command == "check":
            return run_check(linter, args)
        if args.command == "fix":
            return run_fix(linter, args)
        if args.command == "validate":
            return run_validate(linter, args)
    except (FileNotFoundError, DocsLinterError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    parser.error(f"Unknown command: {args.command}")
    return EXIT_INPUT_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
