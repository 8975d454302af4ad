"""
Extract @feature-tagged doc comments from JavaScript source.

Two stages, kept separate:
- js_comments isolates block comments with a real parser
- match_feature_tag applies the tag regex to one comment's text only
"""
from pathlib import Path
from typing import Optional

from docsync.extractors.js_comments import iter_block_comments
from docsync.extractors.patterns import FEATURE_TAG_LINE
from docsync.models import AnnotatedComment

__all__ = [
    "match_feature_tag",
    "scan_source",
]


def match_feature_tag(comment_value: str) -> Optional[str]:
    """
    Find the feature key in a comment body.

    Only the first @feature line counts.

    Args:
        comment_value: Comment text without its /* */ delimiters

    Returns:
        The rest of the tag line, trimmed, or None if there is no tag
    """
    match = FEATURE_TAG_LINE.search(comment_value)
    if not match:
        return None
    key = match.group(1).strip()
    return key or None


def scan_source(source: str, filepath: Optional[Path] = None) -> list[AnnotatedComment]:
    """
    Extract every tagged doc comment from a source file.

    Args:
        source: JavaScript source code as a string
        filepath: Path recorded on each comment and used in errors

    Returns:
        list: AnnotatedComment objects in source order

    Raises:
        ScanError: If the source does not parse
    """
    comments = []

    for comment in iter_block_comments(source, filepath):
        if not comment.is_doc_comment:
            continue
        key = match_feature_tag(comment.value)
        if key is None:
            continue
        comments.append(AnnotatedComment(
            feature_key=key,
            body=comment.text,
            source=filepath,
            line=comment.line,
        ))

    return comments
