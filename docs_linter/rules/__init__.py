"""Rule modules, one per issue category."""

from __future__ import annotations

from .base import RuleModule, SubCheck
from .content import ContentRules
from .formatting import FormattingRules
from .structural import StructuralRules
from .technical import TechnicalRules


def default_rule_modules() -> list[RuleModule]:
    """The four rule modules in the order the linter runs them."""
    return [StructuralRules(), FormattingRules(), ContentRules(), TechnicalRules()]


__all__ = [
    "ContentRules",
    "FormattingRules",
    "RuleModule",
    "StructuralRules",
    "SubCheck",
    "TechnicalRules",
    "default_rule_modules",
]
