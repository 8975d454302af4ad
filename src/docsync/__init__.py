"""
docsync - Feature documentation sync and validation.

Extracts @feature-tagged doc comments from source code into one
markdown document per feature, and validates a documentation tree
by linting it and checking every relative link.
"""

__version__ = "0.1.0"

# Models
from docsync.models import (
    AnnotatedComment,
    LinkReference,
    BrokenLink,
    LintFinding,
)

# Extraction pipeline
from docsync.walker import walk_files, build_corpus, FilesystemError
from docsync.extractors.js_comments import ScanError
from docsync.extractors.feature_tags import scan_source, match_feature_tag
from docsync.aggregator import aggregate_features
from docsync.writer import slugify, render_feature_document, WriteError
from docsync.sync import SyncResult, synchronize, synchronize_async

# Validation pipeline
from docsync.extractors.markdown_links import extract_links, scan_document
from docsync.graph import DocumentGraph
from docsync.links import resolve_links
from docsync.lint import LintRunner, MarkdownLintRunner, LintToolError
from docsync.reporter import ValidationReport, ReportSerializer
from docsync.validate import validate, validate_async

__all__ = [
    # Version
    "__version__",
    # Models
    "AnnotatedComment",
    "LinkReference",
    "BrokenLink",
    "LintFinding",
    # Walker
    "walk_files",
    "build_corpus",
    "FilesystemError",
    # Extraction
    "ScanError",
    "scan_source",
    "match_feature_tag",
    "aggregate_features",
    "slugify",
    "render_feature_document",
    "WriteError",
    "SyncResult",
    "synchronize",
    "synchronize_async",
    # Validation
    "extract_links",
    "scan_document",
    "DocumentGraph",
    "resolve_links",
    "LintRunner",
    "MarkdownLintRunner",
    "LintToolError",
    "ValidationReport",
    "ReportSerializer",
    "validate",
    "validate_async",
]
