"""Pydantic model for a single linter finding.

Issues are immutable once produced. The serialised field names (``safeFix``
in particular) are shared with existing consumers, so the Python attribute
names are mapped through aliases.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .enums import Category, Severity
from .fix import Fix


class Issue(BaseModel):
    """One rule finding.

    Contract:
    - id: deterministic for unchanged input (rule name plus line/context)
    - category / severity: enum-backed
    - safe_fix: only when the fix is a pure, meaning-preserving substitution;
      ``safe_fix`` implies ``fixable``
    - fixable: the issue carries a fix descriptor the engine can apply
    - fixed: set on copies returned after an auto-fix-safe pass
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    id: str
    category: Category
    severity: Severity
    message: str
    line: int | None = Field(default=None, ge=1)
    suggestion: str | None = None
    fixable: bool = False
    safe_fix: bool = Field(default=False, alias="safeFix")
    fix: Fix | None = None
    fixed: bool = False

    @field_validator("id", "message", mode="before")
    def _strip_strings(cls, value: object) -> str:
        return str(value or "").strip()

    @field_validator("suggestion", mode="before")
    def _strip_suggestion(cls, value: object) -> str | None:
        if value is None:
            return None
        return str(value).strip() or None

    @model_validator(mode="after")
    def final_checks(self) -> "Issue":
        if not self.id:
            raise ValueError("id must not be empty")
        if not self.message:
            raise ValueError("message must not be empty")
        if self.safe_fix and not self.fixable:
            raise ValueError("safeFix requires fixable")
        if self.fixable and self.fix is None:
            raise ValueError("fixable issues must carry a fix descriptor")
        return self

    def to_dict(self) -> dict:
        """Serialise with the wire field names, omitting unset optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
