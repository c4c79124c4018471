"""Tests for the docs-linter command-line interface."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from docs_linter.cli import EXIT_INPUT_ERROR, EXIT_ISSUES, EXIT_OK, find_readme_files, main

NO_OVERVIEW = "# App\n\n## Prerequisites\n\nNode.js 20\n"


@pytest.fixture
def empty_training_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "training-data"
    directory.mkdir()
    return directory


def _run(argv: list[str], training_dir: Path) -> int:
    return main(["--training-data", str(training_dir), *argv])


def test_check_exits_1_on_errors(tmp_path: Path, empty_training_dir: Path, capsys) -> None:
    readme = tmp_path / "README.md"
    readme.write_text(NO_OVERVIEW, encoding="utf-8")

    assert _run(["check", str(readme)], empty_training_dir) == EXIT_ISSUES
    out = capsys.readouterr().out
    assert "Missing required section: overview" in out
    assert "Files checked: 1" in out


def test_check_json_output(tmp_path: Path, empty_training_dir: Path, capsys) -> None:
    readme = tmp_path / "README.md"
    readme.write_text(NO_OVERVIEW, encoding="utf-8")

    _run(["check", str(readme), "--format", "json"], empty_training_dir)
    payload = json.loads(capsys.readouterr().out)
    assert payload[0]["file"] == str(readme)
    ids = [issue["id"] for issue in payload[0]["issues"]]
    assert "missing-required-section-overview" in ids
    assert payload[0]["summary"]["errors"] >= 1
    assert all("safeFix" in issue for issue in payload[0]["issues"])


def test_check_clean_guide_exits_0(tmp_path: Path, empty_training_dir: Path) -> None:
    guide = tmp_path / "guide.md"
    guide.write_text("# Guide\n\nAll good here.\n", encoding="utf-8")
    assert _run(["check", str(guide)], empty_training_dir) == EXIT_OK


def test_missing_file_exits_2(tmp_path: Path, empty_training_dir: Path, capsys) -> None:
    assert _run(["check", str(tmp_path / "missing.md")], empty_training_dir) == EXIT_INPUT_ERROR
    assert "File not found" in capsys.readouterr().err


def test_non_markdown_exits_2(tmp_path: Path, empty_training_dir: Path) -> None:
    notes = tmp_path / "notes.txt"
    notes.write_text("hi", encoding="utf-8")
    assert _run(["validate", str(notes)], empty_training_dir) == EXIT_INPUT_ERROR


def test_fix_dry_run(tmp_path: Path, empty_training_dir: Path, capsys) -> None:
    guide = tmp_path / "guide.md"
    guide.write_text("# Guide\n\nSome   text.\n", encoding="utf-8")

    assert _run(["fix", str(guide), "--dry-run", "--safe-only"], empty_training_dir) == EXIT_OK
    assert "Would apply 1 fix(es)" in capsys.readouterr().out
    assert guide.read_text(encoding="utf-8") == "# Guide\n\nSome   text.\n"

    assert _run(["fix", str(guide), "--safe-only"], empty_training_dir) == EXIT_OK
    assert guide.read_text(encoding="utf-8") == "# Guide\n\nSome text.\n"


def test_validate_prints_score(tmp_path: Path, empty_training_dir: Path, capsys) -> None:
    guide = tmp_path / "guide.md"
    guide.write_text("# Guide\n\nAll good here.\n", encoding="utf-8")

    assert _run(["validate", str(guide)], empty_training_dir) == EXIT_OK
    out = capsys.readouterr().out
    assert "Score: 100/100" in out
    assert "Excellent" in out


def test_template_writes_output(tmp_path: Path, empty_training_dir: Path) -> None:
    output = tmp_path / "docs" / "GUIDE.md"
    code = _run(
        ["template", "--type", "guide", "--output", str(output), "--title", "My Guide", "--no-date"],
        empty_training_dir,
    )
    assert code == EXIT_OK
    assert output.read_text(encoding="utf-8").startswith("# My Guide")


def test_template_list(empty_training_dir: Path, capsys) -> None:
    assert _run(["template", "--list"], empty_training_dir) == EXIT_OK
    assert "troubleshooting:" in capsys.readouterr().out


def test_find_readme_files_skips_dependency_dirs(tmp_path: Path) -> None:
    (tmp_path / "a").mkdir()
    (tmp_path / "a" / "README.md").write_text("# A\n", encoding="utf-8")
    (tmp_path / "node_modules" / "pkg").mkdir(parents=True)
    (tmp_path / "node_modules" / "pkg" / "README.md").write_text("# P\n", encoding="utf-8")
    (tmp_path / "README.md").write_text("# Root\n", encoding="utf-8")

    assert find_readme_files(tmp_path) == [tmp_path / "README.md", tmp_path / "a" / "README.md"]
