"""Load the training data tables from a directory of JSON files.

Expected files (all optional):

- ``km-feedback-patterns.json``: ``{category: [{"before": ..., "after": ...}]}``
- ``correction-dictionary.json``: ``{"typos": {wrong: right}, ...}``
- ``quality-examples.json``: ``[{"file": ..., "score": ...}]``

A missing file disables the checks that depend on it. An unreadable or
malformed file is logged and treated as missing, so one bad file never stops
the linter or takes the other tables down with it.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from docs_linter.models import Corrections, QualityExample, TrainingData

LOGGER = logging.getLogger(__name__)

PATTERNS_FILENAME = "km-feedback-patterns.json"
CORRECTIONS_FILENAME = "correction-dictionary.json"
QUALITY_EXAMPLES_FILENAME = "quality-examples.json"


def _read_json(path: Path) -> Any | None:
    if not path.is_file():
        LOGGER.debug("Training data file not found: %s", path)
        return None
    try:
        with path.open("r", encoding="utf-8") as fh:
            return json.load(fh)
    except (OSError, json.JSONDecodeError) as exc:
        LOGGER.warning("Could not load training data from %s: %s", path, exc)
        return None


def load_training_data(directory: Path | str | None) -> TrainingData:
    """Load whichever training tables exist under ``directory``."""

    if directory is None:
        return TrainingData()
    root = Path(directory)
    if not root.is_dir():
        LOGGER.info("Training data directory %s not found; pattern checks disabled", root)
        return TrainingData()

    values: dict[str, Any] = {}

    raw_patterns = _read_json(root / PATTERNS_FILENAME)
    if raw_patterns is not None:
        try:
            values["patterns"] = TrainingData.model_validate(
                {"patterns": raw_patterns}
            ).patterns
        except ValidationError as exc:
            LOGGER.warning("Ignoring malformed %s: %s", PATTERNS_FILENAME, exc)

    raw_corrections = _read_json(root / CORRECTIONS_FILENAME)
    if raw_corrections is not None:
        try:
            values["corrections"] = Corrections.model_validate(raw_corrections)
        except ValidationError as exc:
            LOGGER.warning("Ignoring malformed %s: %s", CORRECTIONS_FILENAME, exc)

    raw_examples = _read_json(root / QUALITY_EXAMPLES_FILENAME)
    if raw_examples is not None:
        try:
            if not isinstance(raw_examples, list):
                raise TypeError("expected a JSON list")
            values["quality_examples"] = [
                QualityExample.model_validate(item) for item in raw_examples
            ]
        except (TypeError, ValidationError) as exc:
            LOGGER.warning("Ignoring malformed %s: %s", QUALITY_EXAMPLES_FILENAME, exc)

    data = TrainingData(**values)
    LOGGER.debug(
        "Loaded training data from %s (patterns=%s, corrections=%s, examples=%s)",
        root,
        data.patterns is not None,
        data.corrections is not None,
        len(data.quality_examples or []),
    )
    return data
