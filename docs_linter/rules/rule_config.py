"""Fixed rule tables used by the rule modules.

These are the phrase lists, thresholds and reference orderings distilled from
reviewer feedback on the repository's documentation. Tables that come from
the training data (pattern corpus, correction dictionary) are loaded at run
time instead and live in ``TrainingData``.
"""

from __future__ import annotations

# --- Structural -----------------------------------------------------------

# (name, accepted alternatives); matched as case-insensitive substrings of
# heading text.
REQUIRED_README_SECTIONS = (
    ("overview", ("introduction", "about")),
    ("prerequisites", ("requirements",)),
)

RECOMMENDED_README_SECTIONS = (
    ("getting started", ("usage", "how to use")),
    ("additional resources", ("resources", "links", "references")),
)

TECHNICAL_GUIDE_PATH_HINTS = ("onpremise", "destination")
TECHNICAL_GUIDE_HEADING_HINTS = ("configuration", "setup")
TROUBLESHOOTING_HEADING_HINTS = ("troubleshooting", "issues", "checklist")

EXPECTED_SECTION_ORDER = (
    "overview",
    "prerequisites",
    "getting started",
    "configuration",
    "usage",
    "troubleshooting",
    "additional resources",
    "license",
)

TOC_MIN_CONTENT_LENGTH = 10_000
TOC_MIN_HEADINGS = 8
TOC_PHRASE = "table of contents"

SHORT_README_LINES = 20
LONG_DOCUMENT_LINES = 500
MIN_HEADING_RATIO = 0.02

# --- Formatting -----------------------------------------------------------

# Exact heading text -> (corrected text, correction type, message, suggestion)
HEADING_CORRECTIONS = {
    "Support ticket checklist": (
        "Checklist for Support Tickets",
        "title-improvement",
        "Heading should be more descriptive",
        'Use "Checklist for Support Tickets"',
    ),
    "Common causes for deployment errors": (
        "Common Causes for Deployment Errors",
        "capitalization",
        "Heading should use title case",
        "Capitalize important words in headings",
    ),
}

TITLE_CASE_KEYWORDS = ("overview", "introduction", "getting started", "prerequisites", "conclusion")
TITLE_CASE_MAX_DEPTH = 2

PREFERRED_BULLET = "-"
CODE_LANG_MIN_LENGTH = 20
BARE_URL_TITLE_MIN_LENGTH = 50

# --- Content --------------------------------------------------------------

VAGUE_PHRASES = (
    ("it is recommended", "Use specific recommendation"),
    ("you can", "Be more specific about actions"),
    ("some users", "Specify which users or scenarios"),
    ("in some cases", "Specify the cases"),
    ("might work", "Be definitive about outcomes"),
)

PASSIVE_VOICE_PHRASES = (
    "is being", "are being", "was being", "were being",
    "is done", "are done", "was done", "were done",
    "is created", "are created", "was created", "were created",
)

PLACEHOLDER_MARKERS = (
    "[TODO]",
    "[TBD]",
    "[Add content here]",
    "[Description]",
    "[Insert]",
    "Lorem ipsum",
)

LIST_INTRODUCERS = ("such as:", "including:", "for example:", "like:")

# (variants, preferred spelling, message)
TERMINOLOGY_FAMILIES = (
    (("onpremise", "on premise", "on-premise"), "on-premise", "Inconsistent terminology for on-premise"),
    (("BTP", "Business Technology Platform", "SAP BTP"), "SAP BTP", "Use consistent SAP BTP terminology"),
    (("Cloud Connector", "cloud connector", "SCC"), "Cloud Connector", "Use consistent Cloud Connector terminology"),
)

# (phrase, improvement, message)
STYLE_IMPROVEMENTS = (
    ("for more information around", "for more information about", 'Use "about" instead of "around"'),
    ("refer to this", "see this", 'Use "see" instead of "refer to" for more natural language'),
    ("for these purposes", "for this purpose", "Use singular form for clarity"),
)

LONG_SENTENCE_LENGTH = 150

CODE_EXPLANATION_MIN_BODY = 50
EXPLANATION_MIN_LINE_LENGTH = 20
EXPLANATORY_OPENERS = ("This", "The above", "Here", "In this", "Note")

YEAR_EXEMPT_MARKERS = ("©", "since")

# --- Technical ------------------------------------------------------------

LOCALHOST_MARKERS = ("localhost", "127.0.0.1")
SAP_ROOT_DOMAIN = "sap.com"
SAP_SUBDOMAIN_PATTERN = r"^[a-z0-9]+\.sap\.com$"

SHELL_LANGUAGES = frozenset({"bash", "sh", "shell", "zsh", "console"})
DANGEROUS_COMMANDS = ("rm -rf", "dd if=", "mkfs", "fdisk")
CURL_MIN_LENGTH = 20
CF_TARGETED_COMMANDS = ("cf push", "cf create-service", "cf bind-service")

CONFIG_LANGUAGES = frozenset({"json", "yaml", "yml"})
# placeholder -> id discriminator
CONFIG_PLACEHOLDERS = {
    "<YOUR_VALUE>": "your-value",
    "[YOUR_VALUE]": "your-value-bracketed",
    "TODO": "todo",
    "CHANGEME": "changeme",
}
DESTINATION_REQUIRED_PROPERTIES = ("Name", "Type", "URL")
OAUTH_PROPERTIES = ("clientId", "clientSecret", "tokenServiceURL")

SSL_CONTEXT_WORDS = ("certificate", "connection")
VAGUE_VERSION_PHRASES = (
    "current version",
    "latest version",
    "new feature",
    "recently added",
    "now supports",
)

MIN_NODE_VERSION = 16
MIN_UI5_VERSION = (1, 90)
VERSION_CONTEXT_WORDS = ("version", "release", "released", "runtime", "sdk", "lts", "supported")
