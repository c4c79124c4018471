"""Technical rules: URLs, shell commands, configuration blocks and versions."""

from __future__ import annotations

import ipaddress
import json
import logging
import re
from collections import Counter
from typing import Iterator, Sequence
from urllib.parse import SplitResult, urlsplit

from docs_linter.document import AnalysisContext, Node, NodeType, iter_nodes
from docs_linter.models import Category, Issue, ReplaceFix, Severity

from . import rule_config as cfg
from .base import RuleModule, SubCheck

LOGGER = logging.getLogger(__name__)

_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")
_HOST_LABEL = re.compile(r"^[a-z0-9_]([a-z0-9_-]*[a-z0-9_])?$")
_SAP_SUBDOMAIN = re.compile(cfg.SAP_SUBDOMAIN_PATTERN)
_PROMPT = re.compile(r"^(?P<indent>\s*)\$(?:\s+|$)")
_CLI_FLAG = re.compile(r"(?:^|\s)--?[A-Za-z]")
_SSL = re.compile(r"\bssl\b")
_TLS = re.compile(r"\btls\b")
_NODE_VERSION = re.compile(r"\bnode(?:\.?js)?\s+v?(\d+)", re.IGNORECASE)
_DOTTED_VERSION = re.compile(r"(\d+)\.(\d+)")
_YEAR = re.compile(r"(?<!\d)20\d{2}(?!\d)")


def _valid_hostname(hostname: str) -> bool:
    try:
        ipaddress.ip_address(hostname)
        return True
    except ValueError:
        pass
    labels = hostname.rstrip(".").split(".")
    return all(_HOST_LABEL.match(label) for label in labels)


def split_http_url(url: str) -> SplitResult | None:
    """Split an http(s) URL, returning ``None`` when it is not well formed.

    A URL is well formed when it has a syntactically valid host name or IP
    address and, if present, a numeric port in range.
    """
    try:
        parts = urlsplit(url)
        _ = parts.port
    except ValueError:
        return None
    if parts.scheme.lower() not in ("http", "https"):
        return None
    hostname = parts.hostname or ""
    if not hostname or not _valid_hostname(hostname):
        return None
    return parts


def is_verified_sap_host(hostname: str) -> bool:
    """True for ``sap.com`` itself or a single-label subdomain such as ``help.sap.com``.

    Matching is on the parsed host only, so ``evil.com/community.sap.com`` and
    ``community.sap.com.evil.com`` are rejected.
    """
    hostname = hostname.lower()
    return hostname == cfg.SAP_ROOT_DOMAIN or bool(_SAP_SUBDOMAIN.match(hostname))


def _ordinal_links(context: AnalysisContext) -> Iterator[tuple[Node, int | None]]:
    """Yield links with an ordinal for the second and later links on a line."""
    seen: Counter[int] = Counter()
    for link in iter_nodes(context.tree, NodeType.LINK):
        if link.line is None or not link.url:
            continue
        seen[link.line] += 1
        ordinal = seen[link.line]
        yield link, ordinal if ordinal > 1 else None


def _body_lines(node: Node) -> Iterator[tuple[int, str]]:
    """Yield ``(source_line, text)`` for the non-blank lines of a code block."""
    if node.line is None or node.value is None:
        return
    # Fenced blocks start one line below the opening fence.
    first = node.line + 1 if node.marker else node.line
    for offset, text in enumerate(node.value.split("\n")):
        if text.strip():
            yield first + offset, text


class TechnicalRules(RuleModule):
    name = "technical"
    category = Category.TECHNICAL

    def sub_checks(self) -> Sequence[SubCheck]:
        return (
            self.check_urls,
            self.check_command_syntax,
            self.check_configuration_examples,
            self.check_technical_accuracy,
            self.check_version_references,
        )

    def check_urls(self, context: AnalysisContext) -> list[Issue]:
        issues: list[Issue] = []
        typos = context.training.typos

        for link, ordinal in _ordinal_links(context):
            url = link.url or ""
            line = link.line
            if not _SCHEME.match(url):
                continue
            scheme = url.split(":", 1)[0].lower()
            parts = split_http_url(url) if scheme in ("http", "https") else None

            if scheme in ("http", "https") and parts is None:
                issues.append(
                    self.make_issue(
                        "invalid-url",
                        severity=Severity.WARNING,
                        message=f"Invalid URL: {url}",
                        id_parts=(line, ordinal),
                        line=line,
                        suggestion="Check the host name and port of the URL",
                    )
                )
                continue

            hostname = (parts.hostname or "") if parts is not None else ""
            for wrong, correct in typos.items():
                if not wrong:
                    continue
                index = url.lower().find(wrong.lower())
                if wrong.lower() not in hostname and index < 0:
                    continue
                matched = url[index : index + len(wrong)] if index >= 0 else wrong
                issues.append(
                    self.make_issue(
                        "url-correction",
                        severity=Severity.ERROR,
                        message=f'URL contains known error: "{wrong}"',
                        id_parts=(line, ordinal, wrong),
                        line=line,
                        suggestion=f'Should be: "{correct}"',
                        fix=ReplaceFix(from_=matched, to=correct) if matched != correct else None,
                        safe_fix=True,
                    )
                )

            is_local = any(marker in url for marker in cfg.LOCALHOST_MARKERS)
            if is_local:
                issues.append(
                    self.make_issue(
                        "localhost-url",
                        severity=Severity.WARNING,
                        message="Localhost URL in documentation",
                        id_parts=(line, ordinal),
                        line=line,
                        suggestion="Replace with example or placeholder URL",
                    )
                )

            if parts is None:
                continue

            if scheme == "http" and not is_local:
                secure = "https://" + url.split("://", 1)[1]
                issues.append(
                    self.make_issue(
                        "insecure-url",
                        severity=Severity.INFO,
                        message="Consider using HTTPS instead of HTTP",
                        id_parts=(line, ordinal),
                        line=line,
                        suggestion="Use HTTPS for better security",
                        fix=ReplaceFix(from_=url, to=secure),
                    )
                )

            if is_verified_sap_host(hostname) and re.search(r"\s", url):
                issues.append(
                    self.make_issue(
                        "malformed-sap-url",
                        severity=Severity.ERROR,
                        message="Malformed SAP URL with spaces",
                        id_parts=(line, ordinal),
                        line=line,
                        suggestion="Remove spaces from URL",
                        fix=ReplaceFix(from_=url, to=re.sub(r"\s+", "", url)),
                        safe_fix=True,
                    )
                )

        return issues

    def check_command_syntax(self, context: AnalysisContext) -> list[Issue]:
        issues: list[Issue] = []

        for node in iter_nodes(context.tree, NodeType.CODE):
            if node.line is None:
                continue
            lang = (node.lang or "").lower()
            if lang and lang not in cfg.SHELL_LANGUAGES:
                continue
            body = node.value or ""

            for source_line, command in _body_lines(node):
                stripped = command.strip()

                if _PROMPT.match(command):
                    raw = context.line_text(source_line) or command
                    issues.append(
                        self.make_issue(
                            "command-prompt",
                            severity=Severity.INFO,
                            message="Avoid including $ prompt in command examples",
                            id_parts=(source_line,),
                            line=source_line,
                            suggestion="Remove $ prompt for cleaner copy-paste experience",
                            fix=ReplaceFix(from_=raw, to=_PROMPT.sub(r"\g<indent>", raw, count=1)),
                            safe_fix=True,
                        )
                    )

                if any(dangerous in stripped for dangerous in cfg.DANGEROUS_COMMANDS):
                    issues.append(
                        self.make_issue(
                            "dangerous-command",
                            severity=Severity.WARNING,
                            message="Potentially dangerous command in documentation",
                            id_parts=(source_line,),
                            line=source_line,
                            suggestion="Add warning or use safer alternative",
                        )
                    )

                if "curl" in stripped and len(stripped) > cfg.CURL_MIN_LENGTH and not _CLI_FLAG.search(stripped):
                    issues.append(
                        self.make_issue(
                            "curl-formatting",
                            severity=Severity.INFO,
                            message="Complex curl command might benefit from formatting",
                            id_parts=(source_line,),
                            line=source_line,
                            suggestion="Consider using line breaks and flags for readability",
                        )
                    )

                targets_space = any(command_name in stripped for command_name in cfg.CF_TARGETED_COMMANDS)
                if (
                    targets_space
                    and "--help" not in stripped
                    and "cf target" not in body
                    and "-t " not in stripped
                ):
                    issues.append(
                        self.make_issue(
                            "cf-target-missing",
                            severity=Severity.INFO,
                            message="CF command without target context",
                            id_parts=(source_line,),
                            line=source_line,
                            suggestion="Consider showing cf target command or specifying org/space",
                        )
                    )

        return issues

    def check_configuration_examples(self, context: AnalysisContext) -> list[Issue]:
        issues: list[Issue] = []
        mentions_destinations = "destination" in context.text.lower() or "BTP" in context.text

        for node in iter_nodes(context.tree, NodeType.CODE):
            lang = (node.lang or "").lower()
            if node.line is None or lang not in cfg.CONFIG_LANGUAGES:
                continue
            body = node.value or ""

            if lang == "json":
                try:
                    json.loads(body)
                except ValueError as exc:
                    LOGGER.debug("JSON block at line %s does not parse: %s", node.line, exc)
                    issues.append(
                        self.make_issue(
                            "invalid-json",
                            severity=Severity.ERROR,
                            message="Invalid json syntax",
                            id_parts=(node.line,),
                            line=node.line,
                            suggestion="Fix syntax errors",
                        )
                    )

            for placeholder, key in cfg.CONFIG_PLACEHOLDERS.items():
                if placeholder in body:
                    issues.append(
                        self.make_issue(
                            "config-placeholder",
                            severity=Severity.WARNING,
                            message=f"Configuration contains placeholder: {placeholder}",
                            id_parts=(node.line, key),
                            line=node.line,
                            suggestion="Replace with example values or clear instructions",
                        )
                    )

            if not mentions_destinations:
                continue

            missing = [prop for prop in cfg.DESTINATION_REQUIRED_PROPERTIES if prop not in body]
            if missing and "Type" in body:
                issues.append(
                    self.make_issue(
                        "incomplete-destination-config",
                        severity=Severity.WARNING,
                        message=f"Destination configuration missing properties: {', '.join(missing)}",
                        id_parts=(node.line,),
                        line=node.line,
                        suggestion="Add missing required properties",
                    )
                )

            if "OAuth" in body and not any(prop in body for prop in cfg.OAUTH_PROPERTIES):
                issues.append(
                    self.make_issue(
                        "incomplete-oauth-config",
                        severity=Severity.WARNING,
                        message="OAuth configuration missing required properties",
                        id_parts=(node.line,),
                        line=node.line,
                        suggestion="Add clientId, clientSecret, and tokenServiceURL",
                    )
                )

        return issues

    def check_technical_accuracy(self, context: AnalysisContext) -> list[Issue]:
        issues: list[Issue] = []
        pairs = [
            pair
            for pair in context.training.pattern_pairs("technical")
            if pair.before not in pair.after
        ]

        for line_no, line in enumerate(context.lines, start=1):
            for pair in pairs:
                if pair.before not in line:
                    continue
                issues.append(
                    self.make_issue(
                        "technical-accuracy",
                        severity=Severity.WARNING,
                        message="Technical information could be more accurate",
                        id_parts=(line_no, pair.before),
                        line=line_no,
                        suggestion=f'Consider: "{pair.after}"',
                        fix=ReplaceFix(from_=pair.before, to=pair.after),
                    )
                )

        for line_no, line in context.prose_lines():
            lowered = line.lower()
            if (
                _SSL.search(lowered)
                and not _TLS.search(lowered)
                and any(word in lowered for word in cfg.SSL_CONTEXT_WORDS)
            ):
                issues.append(
                    self.make_issue(
                        "ssl-outdated",
                        severity=Severity.INFO,
                        message="Consider mentioning TLS in addition to SSL",
                        id_parts=(line_no,),
                        line=line_no,
                        suggestion='Use "SSL/TLS" or "TLS" for modern security',
                    )
                )

            for phrase in cfg.VAGUE_VERSION_PHRASES:
                if phrase in lowered:
                    issues.append(
                        self.make_issue(
                            "version-vague",
                            severity=Severity.INFO,
                            message=f'Vague version reference: "{phrase}"',
                            id_parts=(line_no, phrase),
                            line=line_no,
                            suggestion="Specify exact version numbers when possible",
                        )
                    )

        return issues

    def check_version_references(self, context: AnalysisContext) -> list[Issue]:
        issues: list[Issue] = []
        current_year = context.options.current_year

        for line_no, line in enumerate(context.lines, start=1):
            node_match = _NODE_VERSION.search(line)
            if node_match and int(node_match.group(1)) < cfg.MIN_NODE_VERSION:
                version = int(node_match.group(1))
                issues.append(
                    self.make_issue(
                        "node-version",
                        severity=Severity.WARNING,
                        message=f"Node.js version {version} is outdated",
                        id_parts=(line_no,),
                        line=line_no,
                        suggestion="Recommend Node.js 18+ for better support",
                    )
                )

            if "UI5" in line:
                dotted = _DOTTED_VERSION.search(line)
                if dotted:
                    version = (int(dotted.group(1)), int(dotted.group(2)))
                    if version < cfg.MIN_UI5_VERSION:
                        issues.append(
                            self.make_issue(
                                "ui5-version",
                                severity=Severity.INFO,
                                message=f"UI5 version {dotted.group(0)} might be outdated",
                                id_parts=(line_no,),
                                line=line_no,
                                suggestion="Consider referencing newer UI5 versions",
                            )
                        )

        for line_no, line in context.prose_lines():
            lowered = line.lower()
            if not any(re.search(rf"\b{word}\b", lowered) for word in cfg.VERSION_CONTEXT_WORDS):
                continue
            for year in dict.fromkeys(_YEAR.findall(line)):
                if int(year) > current_year - 2:
                    continue
                issues.append(
                    self.make_issue(
                        "outdated-version-year",
                        severity=Severity.INFO,
                        message=f"Release or version information from {year} might be outdated",
                        id_parts=(line_no, year),
                        line=line_no,
                        suggestion="Check that the referenced version is still current",
                    )
                )

        return issues
