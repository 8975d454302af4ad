"""
Extract relative links from Markdown files.
"""
import os
from pathlib import Path

from docsync.constants import URL_SCHEMES
from docsync.extractors.patterns import MARKDOWN_LINK
from docsync.models import LinkInfo, LinkReference

__all__ = [
    "is_external",
    "extract_links",
    "scan_document",
]


def is_external(target: str) -> bool:
    """True if target starts with a recognized URL scheme."""
    return target.lower().startswith(URL_SCHEMES)


def extract_links(content: str) -> list[LinkInfo]:
    """
    Extract inline markdown links [text](target) that point at files.

    Skips targets with a URL scheme and pure in-document anchors
    like [x](#section), which cannot be broken.

    Args:
        content: Markdown content as a string

    Returns:
        list: [{'text': 'see', 'target': './a.md#x', 'path': './a.md', 'line': 5}, ...]
    """
    links = []

    for match in MARKDOWN_LINK.finditer(content):
        target = match.group(2).strip()
        if is_external(target):
            continue

        path = target.split('#', 1)[0]
        if not path:
            continue

        links.append({
            'text': match.group(1),
            'target': target,
            'path': path,
            # line of the opening bracket; the label may wrap
            'line': content.count('\n', 0, match.start()) + 1,
        })

    return links


def scan_document(filepath: Path, content: str) -> list[LinkReference]:
    """
    Turn a document's links into references resolved against its directory.

    Resolution is lexical: '..' segments are collapsed, symlinks are not
    followed and case is preserved.

    Args:
        filepath: Absolute path of the document
        content: Its markdown content

    Returns:
        list: LinkReference objects in document order
    """
    base_dir = os.path.dirname(os.path.abspath(filepath))
    references = []

    for link in extract_links(content):
        resolved = os.path.normpath(os.path.join(base_dir, link['path']))
        references.append(LinkReference(
            source_file=Path(filepath),
            raw_target=link['target'],
            resolved_path=Path(resolved),
            line=link['line'],
        ))

    return references
