"""Documentation templates."""

from __future__ import annotations

from .generator import AVAILABLE_TEMPLATES, TemplateGenerator, TemplateInfo

__all__ = ["AVAILABLE_TEMPLATES", "TemplateGenerator", "TemplateInfo"]
