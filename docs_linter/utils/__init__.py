"""Utility modules for the documentation linter."""

from __future__ import annotations

from . import data_loader, text_utils

__all__ = [
    "data_loader",
    "text_utils",
]
