"""Models for the externally supplied training data.

The JSON files are produced by an offline pattern-extraction job, so they
carry extra bookkeeping fields (commit, file, size, ...) that the linter does
not use. Those are accepted and ignored.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PatternPair(BaseModel):
    """A phrase that reviewers rewrote (``before``) and its rewrite (``after``)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    before: str = ""
    after: str = ""

    @field_validator("before", "after", mode="before")
    def _strip_strings(cls, value: object) -> str:
        return str(value or "").strip()

    @property
    def usable(self) -> bool:
        return bool(self.before and self.after and self.before != self.after)


class Corrections(BaseModel):
    """Correction dictionary: wrong -> right token mappings."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    typos: dict[str, str] = Field(default_factory=dict)


class QualityExample(BaseModel):
    """A reference document regarded as high quality."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    file: str
    score: float | None = None

    @property
    def path_fragment(self) -> str:
        """The file path without a leading ``./``, used for substring matching."""
        return self.file[2:] if self.file.startswith("./") else self.file


class TrainingData(BaseModel):
    """Read-only tables injected into every analysis context.

    Any part may be missing; checks that depend on a missing table simply
    do not run.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    patterns: dict[str, List[PatternPair]] | None = None
    corrections: Corrections | None = None
    quality_examples: List[QualityExample] | None = Field(
        default=None, alias="qualityExamples"
    )

    def pattern_pairs(self, category: str) -> list[PatternPair]:
        if not self.patterns:
            return []
        return [pair for pair in self.patterns.get(category, []) if pair.usable]

    @property
    def typos(self) -> dict[str, str]:
        if self.corrections is None:
            return {}
        return dict(self.corrections.typos)
