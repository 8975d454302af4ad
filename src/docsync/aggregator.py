"""
Group tagged comments into per-feature documents.
"""
from types import MappingProxyType
from typing import Iterable

from docsync.models import AnnotatedComment, FeatureGroups


def aggregate_features(comments: Iterable[AnnotatedComment]) -> FeatureGroups:
    """
    Fold comments into a feature key -> bodies mapping.

    Keys keep first-seen order and bodies keep input order. Identical
    bodies are not deduplicated. The result is read-only; every call
    starts from an empty map.

    Args:
        comments: Comments in file-traversal then in-file order

    Returns:
        Read-only mapping of feature key to a tuple of comment bodies
    """
    groups: dict[str, list[str]] = {}
    for comment in comments:
        groups.setdefault(comment.feature_key, []).append(comment.body)

    return MappingProxyType({key: tuple(bodies) for key, bodies in groups.items()})
