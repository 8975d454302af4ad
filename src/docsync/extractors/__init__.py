"""
Extractors for source and documentation files.

Source extractors:
- js_comments: block comments from JavaScript (tree-sitter parse)
- feature_tags: @feature-tagged doc comments

Documentation extractors:
- markdown_links: relative [text](target) links
"""

from docsync.extractors import js_comments
from docsync.extractors import feature_tags
from docsync.extractors import markdown_links

__all__ = [
    "js_comments",
    "feature_tags",
    "markdown_links",
]
