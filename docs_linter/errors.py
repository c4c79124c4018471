"""Exception hierarchy for docs-linter."""

from __future__ import annotations


class DocsLinterError(Exception):
    """Base class for errors raised by docs-linter."""


class InvalidInputError(DocsLinterError):
    """Raised when an input file cannot be linted (wrong type, unreadable)."""
