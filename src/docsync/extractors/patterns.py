"""
Compiled regex patterns for comment tags, slugs and markdown links.

All patterns use re.VERBOSE for readability and are pre-compiled for performance.
Patterns are grouped by the module that uses them.
"""
import re

# =============================================================================
# Feature Tag Patterns
# =============================================================================

FEATURE_TAG_LINE = re.compile(
    r"""
    @feature            # tag marker
    [ \t]+              # at least one space on the same line
    ([^\r\n]+)          # rest of the line (captured)
    """,
    re.VERBOSE,
)

# =============================================================================
# Slug Patterns
# =============================================================================

SLUG_CAMEL_BOUNDARY = re.compile(
    r"""
    ([a-z])             # lowercase letter (captured)
    ([A-Z])             # followed by uppercase letter (captured)
    """,
    re.VERBOSE,
)

SLUG_SEPARATORS = re.compile(
    r"""
    [\s_/\\-]+          # whitespace, underscores, path separators, hyphens
    """,
    re.VERBOSE,
)

# =============================================================================
# Markdown Patterns
# =============================================================================

MARKDOWN_LINK = re.compile(
    r"""
    \[                  # opening bracket
    ([^\]]*)            # link text (captured, may be empty or wrap lines)
    \]                  # closing bracket
    \(                  # opening paren
    ([^)\n]*)           # target (captured, single line)
    \)                  # closing paren
    """,
    re.VERBOSE,
)

# =============================================================================
# Lint Output Patterns
# =============================================================================

# markdownlint-cli style: "docs/a.md:3:1 MD022/blanks-around-headings message"
LINT_OUTPUT_LINE = re.compile(
    r"""
    ^
    (?P<file>.+?\.md)           # document path
    :(?P<line>\d+)              # line number
    (?::\d+)?                   # optional column
    \s+
    (?:(?P<rule>MD\d+)\S*\s+)?  # optional rule id with alias
    (?P<message>.+)             # message
    $
    """,
    re.VERBOSE,
)
