"""Render documentation templates in docs_linter/templates/templateFiles using pystache.

Each template is a Markdown file with Mustache placeholders
(``{{{repo_url}}}``, ``{{{project_dir}}}``, ``{{{title}}}``,
``{{{system_name}}}``). Unset placeholders render as visible markers such
as ``[REPOSITORY_URL]`` so a generated document fails the placeholder checks
until it has been filled in.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path

import pystache

from docs_linter import __version__

LOGGER = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templateFiles"
DEFAULT_TEMPLATE = "default"
FALLBACK_SUGGESTION = "sample-app"

PLACEHOLDER_DEFAULTS = {
    "repo_url": "[REPOSITORY_URL]",
    "project_dir": "[PROJECT_DIRECTORY]",
    "title": "[GUIDE_TITLE]",
    "system_name": "[SYSTEM_NAME]",
}

# (template, keywords) checked in order against the lower-cased document
SUGGESTION_KEYWORDS = (
    ("api", ("api", "endpoint", "rest")),
    ("troubleshooting", ("troubleshooting", "issues", "error")),
    ("guide", ("guide", "step", "configuration")),
)


@dataclass(frozen=True)
class TemplateInfo:
    name: str
    description: str
    use_case: str

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "description": self.description, "useCase": self.use_case}


AVAILABLE_TEMPLATES = (
    TemplateInfo(
        "sample-app",
        "Template for sample application documentation",
        "Use for demo applications and code samples",
    ),
    TemplateInfo(
        "guide",
        "Template for technical guides and how-to documentation",
        "Use for step-by-step instructions and configuration guides",
    ),
    TemplateInfo(
        "api",
        "Template for API documentation",
        "Use for REST API documentation and reference guides",
    ),
    TemplateInfo(
        "troubleshooting",
        "Template for troubleshooting and support guides",
        "Use for problem resolution and diagnostic information",
    ),
)


def _read_template(name: str) -> str:
    p = TEMPLATES_DIR / f"{name}.md"
    if not p.exists():
        raise FileNotFoundError(f"Template file not found: {p}")
    return p.read_text(encoding="utf-8")


class TemplateGenerator:
    """Generate starter documents from the bundled templates."""

    def __init__(self, renderer: pystache.Renderer | None = None) -> None:
        self.renderer = renderer or pystache.Renderer(missing_tags="ignore")

    def available_templates(self) -> list[TemplateInfo]:
        return list(AVAILABLE_TEMPLATES)

    def template_names(self) -> list[str]:
        return [info.name for info in AVAILABLE_TEMPLATES]

    def generate(
        self,
        template_type: str,
        *,
        repo_url: str | None = None,
        project_dir: str | None = None,
        title: str | None = None,
        system_name: str | None = None,
        include_date: bool = True,
        today: date | None = None,
    ) -> str:
        """Render ``template_type``; unknown types fall back to the default template."""
        name = template_type if template_type in self.template_names() else DEFAULT_TEMPLATE
        if name != template_type:
            LOGGER.info("Unknown template type %r; using the default template", template_type)

        values = {
            "repo_url": repo_url,
            "project_dir": project_dir,
            "title": title,
            "system_name": system_name,
        }
        context = {key: value or PLACEHOLDER_DEFAULTS[key] for key, value in values.items()}
        context["version"] = __version__

        rendered = self.renderer.render(_read_template(name), context)
        if include_date:
            stamp = (today or date.today()).isoformat()
            rendered = f"<!-- Generated on {stamp} -->\n{rendered}"
        return rendered

    def suggest_template_type(self, file_path: Path | str) -> str:
        """Pick a template by keywords in an existing document."""
        path = Path(file_path)
        if not path.is_file():
            return FALLBACK_SUGGESTION
        content = path.read_text(encoding="utf-8", errors="replace").lower()
        for name, keywords in SUGGESTION_KEYWORDS:
            if any(keyword in content for keyword in keywords):
                return name
        return FALLBACK_SUGGESTION
