"""Small text helpers shared by the rule modules and the issue model."""

from __future__ import annotations

import re

_ID_UNSAFE = re.compile(r"[^a-z0-9]+")
_MAX_ID_PART_LENGTH = 48
_ANCHOR_STRIP = re.compile(r"[^\w\s-]")
_WHITESPACE_RUN = re.compile(r"\s+")

SMALL_WORDS = frozenset(
    {"a", "an", "and", "as", "at", "but", "by", "for", "in", "of", "on", "or", "the", "to", "up"}
)
_TITLE_WORD = re.compile(r"\w\S*")


def slugify_id_part(value: object) -> str:
    """Lower-case ``value`` and collapse anything non-alphanumeric to ``-``."""
    return _ID_UNSAFE.sub("-", str(value).lower()).strip("-")


def make_issue_id(rule: str, *parts: object) -> str:
    """Build a deterministic issue id from a rule name and discriminators.

    ``None`` and empty parts are skipped so callers can pass an optional line
    number without branching.

    >>> make_issue_id("vague-language", 12, "you can")
    'vague-language-12-you-can'
    """
    pieces = [rule]
    for part in parts:
        if part is None:
            continue
        slug = slugify_id_part(part)[:_MAX_ID_PART_LENGTH].rstrip("-")
        if slug:
            pieces.append(slug)
    return "-".join(pieces)


def heading_slug(text: str) -> str:
    """Anchor slug for a heading: lower-case, strip punctuation, hyphenate spaces."""
    stripped = _ANCHOR_STRIP.sub("", text.strip().lower())
    return _WHITESPACE_RUN.sub("-", stripped)


def to_title_case(text: str) -> str:
    """Title-case ``text``, keeping small words lower-case after the first word.

    Words written entirely in capitals (acronyms such as ``SAP``) are kept.
    """
    position = 0

    def _convert(match: re.Match[str]) -> str:
        nonlocal position
        word = match.group(0)
        first = position == 0
        position += 1
        lower = word.lower()
        if not first and lower in SMALL_WORDS:
            return lower
        letters = [ch for ch in word if ch.isalpha()]
        if len(letters) > 1 and all(ch.isupper() for ch in letters):
            return word
        return word[0].upper() + word[1:].lower()

    return _TITLE_WORD.sub(_convert, text)


def match_case(template: str, replacement: str) -> str:
    """Give ``replacement`` the leading capitalisation of ``template``."""
    if template[:1].isupper() and replacement:
        return replacement[0].upper() + replacement[1:]
    return replacement
