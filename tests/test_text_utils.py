from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from docs_linter.utils.text_utils import heading_slug, make_issue_id, match_case, to_title_case


def test_make_issue_id_slugs_parts_and_skips_none() -> None:
    assert make_issue_id("vague-language", 12, "you can") == "vague-language-12-you-can"
    assert make_issue_id("insecure-url", 3, None) == "insecure-url-3"
    assert make_issue_id("placeholder", 1, "[TODO]") == "placeholder-1-todo"


def test_make_issue_id_caps_long_parts() -> None:
    issue_id = make_issue_id("link-title", 1, "x" * 200)
    assert issue_id == "link-title-1-" + "x" * 48


def test_heading_slug() -> None:
    assert heading_slug("Getting Started!") == "getting-started"
    assert heading_slug("  Step 1: Configure  ") == "step-1-configure"


def test_to_title_case_keeps_small_words_and_acronyms() -> None:
    assert to_title_case("getting started with the app") == "Getting Started with the App"
    assert to_title_case("overview of SAP btp") == "Overview of SAP Btp"


def test_match_case() -> None:
    assert match_case("Utilize", "use") == "Use"
    assert match_case("utilize", "use") == "use"
