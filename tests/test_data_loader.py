"""Tests for loading the training data tables."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from docs_linter.utils.data_loader import (
    CORRECTIONS_FILENAME,
    PATTERNS_FILENAME,
    QUALITY_EXAMPLES_FILENAME,
    load_training_data,
)


def _write_json(path: Path, payload) -> None:
    path.write_text(json.dumps(payload), encoding="utf-8")


def test_loads_all_tables(tmp_path: Path) -> None:
    _write_json(
        tmp_path / PATTERNS_FILENAME,
        {"content": [{"before": "utilize", "after": "use", "commit": "abc123"}]},
    )
    _write_json(tmp_path / CORRECTIONS_FILENAME, {"typos": {"teh": "the"}, "terminology": {}})
    _write_json(tmp_path / QUALITY_EXAMPLES_FILENAME, [{"file": "./samples/README.md", "score": 95, "size": 10}])

    data = load_training_data(tmp_path)

    assert [(p.before, p.after) for p in data.pattern_pairs("content")] == [("utilize", "use")]
    assert data.typos == {"teh": "the"}
    assert data.quality_examples is not None
    assert data.quality_examples[0].path_fragment == "samples/README.md"


def test_corrections_keep_only_typos(tmp_path: Path) -> None:
    _write_json(
        tmp_path / CORRECTIONS_FILENAME,
        {"typos": {"recieve": "receive"}, "terminology": {"node": "Node.js"}, "punctuation": {"..": "."}},
    )

    corrections = load_training_data(tmp_path).corrections

    assert corrections is not None
    assert corrections.model_dump() == {"typos": {"recieve": "receive"}}


def test_missing_directory_gives_empty_data(tmp_path: Path) -> None:
    data = load_training_data(tmp_path / "nope")
    assert data.patterns is None
    assert data.corrections is None
    assert data.quality_examples is None


def test_none_directory_gives_empty_data() -> None:
    assert load_training_data(None).typos == {}


def test_malformed_file_is_ignored_without_losing_others(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    (tmp_path / PATTERNS_FILENAME).write_text("{not json", encoding="utf-8")
    _write_json(tmp_path / CORRECTIONS_FILENAME, {"typos": {"teh": "the"}})
    _write_json(tmp_path / QUALITY_EXAMPLES_FILENAME, {"file": "not a list"})

    with caplog.at_level(logging.WARNING):
        data = load_training_data(tmp_path)

    assert data.patterns is None
    assert data.quality_examples is None
    assert data.typos == {"teh": "the"}
    assert PATTERNS_FILENAME in caplog.text
    assert QUALITY_EXAMPLES_FILENAME in caplog.text
