"""
Centralized constants for the docsync package.

This module contains:
- Default project locations for source and documentation trees
- File extension sets for the extractor and the validator
- Directory ignore patterns for scanning
- Link and lint settings used by the validator
"""

# =============================================================================
# Project Layout Defaults
# =============================================================================

# All relative to the current working directory
DEFAULT_SOURCE_DIR = "lib"
DEFAULT_PROJECT_DIR = ".project"
DEFAULT_FEATURES_DIR = ".project/features"

# =============================================================================
# Tree Walker Constants
# =============================================================================

# Directories to ignore when scanning
DEFAULT_IGNORE_DIRS: frozenset[str] = frozenset({
    '.git', '.hg', '.svn',              # Version control
    'node_modules', 'bower_components',  # JS dependencies
    'vendor', 'jspm_packages',           # Other dependency managers
    '__pycache__', '.pytest_cache',      # Python cache
    'venv', '.venv',                     # Virtual environments
    '.idea', '.vscode',                  # IDE configs
    'dist', 'build', 'coverage',         # Build outputs
    '.tox', '.nox',                      # Test runners
})

# Directories skipped when collecting the documentation corpus (VCS and
# dependency trees only; build and IDE folders may hold documents)
DOC_IGNORE_DIRS: frozenset[str] = frozenset({
    '.git', '.hg', '.svn',
    'node_modules',
})

# Source files scanned for @feature comments
SOURCE_EXTENSIONS: frozenset[str] = frozenset({
    '.js', '.mjs', '.cjs',
})

# Documentation files making up the corpus
DOC_EXTENSIONS: frozenset[str] = frozenset({
    '.md',
})

# =============================================================================
# Document Writer Constants
# =============================================================================

FEATURE_TAG = "@feature"
FEATURE_HEADING_PREFIX = "Feature: "
FEATURE_SEPARATOR = "---"
DOCUMENT_SUFFIX = ".md"

# Filename used when a key slugs down to nothing
FALLBACK_SLUG = "untitled"

# =============================================================================
# Link Validation Constants
# =============================================================================

# Link targets starting with one of these are never resolved
URL_SCHEMES: tuple[str, ...] = (
    "http://",
    "https://",
    "ftp://",
    "mailto:",
)

# =============================================================================
# Lint Collaborator
# =============================================================================

DEFAULT_LINT_COMMAND: tuple[str, ...] = ("markdownlint",)

# Glob handed to the linter, relative to the docs root
LINT_GLOB = "**/*.md"

# =============================================================================
# Serialization
# =============================================================================

# Version string for saved validation reports (for format compatibility)
REPORT_FILE_VERSION = "1.0"
