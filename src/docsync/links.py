"""
Link resolution against the document corpus.

A reference is broken iff its resolved path is not a corpus member.
No normalization beyond lexical path resolution happens here, so a
separator or case mismatch is reported as breakage.
"""
import logging
from pathlib import Path
from typing import Iterable, Optional, Sequence

from docsync.extractors.markdown_links import scan_document
from docsync.graph import DocumentGraph
from docsync.models import BrokenLink, LinkReference

logger = logging.getLogger(__name__)


def collect_references(
    documents: Sequence[Path],
    contents: Sequence[Optional[str]],
) -> list[LinkReference]:
    """
    Scan documents for relative links.

    Unreadable documents (content None) contribute no links.
    """
    references: list[LinkReference] = []
    for path, content in zip(documents, contents):
        if content is None:
            logger.warning("Could not read %s; its links were not checked", path)
            continue
        references.extend(scan_document(path, content))
    return references


def resolve_links(
    references: Iterable[LinkReference],
    corpus: Iterable[Path] | DocumentGraph,
) -> list[BrokenLink]:
    """
    Membership-test every reference against the corpus.

    Args:
        references: Links to check, in report order
        corpus: Absolute paths of every document, or a DocumentGraph
            built over them (which also records each link edge)

    Returns:
        list: One BrokenLink per unresolvable reference occurrence
    """
    graph = corpus if isinstance(corpus, DocumentGraph) else DocumentGraph(corpus)

    broken = []
    for ref in references:
        graph.add_reference(ref)
        if not graph.contains(ref.resolved_path):
            logger.debug("Broken link %s (resolved to %s)", ref, ref.resolved_path)
            broken.append(BrokenLink.from_reference(ref))

    return broken
