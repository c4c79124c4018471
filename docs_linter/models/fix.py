"""Fix descriptors attached to issues and the actions built from them.

A fix is a tagged union over three edits. Line numbers always refer to the
original, unmodified document; reconciling several edits against shifting
line numbers is the fix engine's job.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ReplaceFix(BaseModel):
    """Replace every occurrence of ``from`` with ``to``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    type: Literal["replace"] = "replace"
    from_: str = Field(alias="from")
    to: str

    @field_validator("from_")
    def _non_empty_target(cls, value: str) -> str:
        if not value:
            raise ValueError("replace fix needs a non-empty 'from' string")
        return value

    @property
    def sort_line(self) -> int:
        return 0


class InsertAfterFix(BaseModel):
    """Insert ``content`` after original line ``line`` (0 inserts at the top)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    type: Literal["insertAfter"] = "insertAfter"
    line: int = Field(ge=0)
    content: str

    @property
    def sort_line(self) -> int:
        return self.line


class RemoveLineFix(BaseModel):
    """Remove original line ``line`` (1-based)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    type: Literal["removeLine"] = "removeLine"
    line: int = Field(ge=1)

    @property
    def sort_line(self) -> int:
        return self.line


Fix = Annotated[
    Union[ReplaceFix, InsertAfterFix, RemoveLineFix],
    Field(discriminator="type"),
]


class FixAction(BaseModel):
    """A fix selected for application, tied back to the issue it resolves."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    issue_id: str = Field(alias="issueId")
    type: str
    description: str
    fix: Fix


class FixConflict(BaseModel):
    """Two actions whose edits may interfere with each other."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    first_issue_id: str = Field(alias="firstIssueId")
    second_issue_id: str = Field(alias="secondIssueId")
    reason: str
