"""Configuration for linter runs.

``LinterSettings`` holds process-level settings resolved from the environment
(optionally seeded from a ``.env`` file). ``LinterOptions`` holds the per-run
switches that travel with every analysis context.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from dotenv import load_dotenv

ENV_TRAINING_DATA_DIR = "DOCS_LINTER_TRAINING_DATA"
ENV_LOG_LEVEL = "DOCS_LINTER_LOG_LEVEL"

DEFAULT_TRAINING_DATA_DIR = Path("training-data")
DEFAULT_LOG_LEVEL = "INFO"

MARKDOWN_SUFFIXES = frozenset({".md", ".markdown"})


def _current_year() -> int:
    return date.today().year


@dataclass(frozen=True)
class LinterOptions:
    """Run options visible to every rule module."""

    comprehensive: bool = False
    auto_fix_safe: bool = False
    # Injected so year-based checks are reproducible in tests.
    current_year: int = field(default_factory=_current_year)


@dataclass(frozen=True)
class LinterSettings:
    training_data_dir: Path = DEFAULT_TRAINING_DATA_DIR
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings(dotenv_path: str | Path | None = None) -> LinterSettings:
    """Resolve settings from the environment.

    A ``.env`` file is loaded first without overriding variables that are
    already set, so explicit exports always win.
    """
    if dotenv_path is not None:
        load_dotenv(dotenv_path=Path(dotenv_path))
    else:
        load_dotenv()

    training_dir = os.environ.get(ENV_TRAINING_DATA_DIR)
    log_level = os.environ.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).strip().upper()
    return LinterSettings(
        training_data_dir=Path(training_dir) if training_dir else DEFAULT_TRAINING_DATA_DIR,
        log_level=log_level or DEFAULT_LOG_LEVEL,
    )
