"""Rule-based linter for Markdown documentation."""

from __future__ import annotations

__version__ = "1.0.0"

__all__ = [
    "cli",
    "config",
    "document",
    "engine",
    "models",
    "rules",
    "templates",
    "utils",
]
