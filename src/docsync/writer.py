"""
Render and write per-feature markdown documents.

Each feature becomes <slug(feature key)>.md under the output root.
Writes are atomic per file (temp file + rename) and overwrite any
previous document at the same path.
"""
import asyncio
import logging
import os
import tempfile
from pathlib import Path
from typing import Sequence

from docsync.constants import (
    DOCUMENT_SUFFIX,
    FALLBACK_SLUG,
    FEATURE_HEADING_PREFIX,
    FEATURE_SEPARATOR,
)
from docsync.extractors.patterns import SLUG_CAMEL_BOUNDARY, SLUG_SEPARATORS
from docsync.models import FeatureGroups

logger = logging.getLogger(__name__)


class WriteError(Exception):
    """Raised when a feature document cannot be written."""

    def __init__(self, feature_key: str, path: Path, reason: str):
        super().__init__(f'Cannot write "{feature_key}" to {path}: {reason}')
        self.feature_key = feature_key
        self.path = path
        self.reason = reason


def slugify(title: str) -> str:
    """
    Derive a filesystem-safe, lowercase, hyphenated name from a title.

    Examples:
        "Login" -> "login"
        "UserProfile" -> "user-profile"
        "Password  reset_flow" -> "password-reset-flow"
    """
    slug = SLUG_CAMEL_BOUNDARY.sub(r"\1-\2", title)
    slug = SLUG_SEPARATORS.sub("-", slug).strip("-").lower()
    return slug or FALLBACK_SLUG


def document_filename(feature_key: str) -> str:
    return f"{slugify(feature_key)}{DOCUMENT_SUFFIX}"


def render_feature_document(feature_key: str, bodies: Sequence[str]) -> str:
    """
    Build the markdown for one feature.

    A level-1 heading with the literal key, then the bodies separated
    by horizontal rules, each rule surrounded by blank lines.
    """
    separator = f"\n\n{FEATURE_SEPARATOR}\n\n"
    return f"# {FEATURE_HEADING_PREFIX}{feature_key}\n\n{separator.join(bodies)}\n"


def write_document(path: Path, content: str) -> None:
    """
    Atomically write content to path, creating parent directories.

    The content goes to a temp file in the same directory which is then
    renamed over the target, so readers never see a partial document.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


def _write_feature(feature_key: str, bodies: Sequence[str], output_dir: Path) -> Path:
    path = output_dir / document_filename(feature_key)
    try:
        write_document(path, render_feature_document(feature_key, bodies))
    except OSError as e:
        raise WriteError(feature_key, path, e.strerror or str(e)) from e
    return path


def _warn_on_collisions(groups: FeatureGroups) -> None:
    seen: dict[str, str] = {}
    for key in groups:
        filename = document_filename(key)
        if filename in seen:
            logger.warning(
                'Features "%s" and "%s" both map to %s; the later one wins',
                seen[filename], key, filename
            )
        seen[filename] = key


async def write_feature_documents_async(
    groups: FeatureGroups,
    output_dir: Path,
) -> tuple[list[Path], list[WriteError]]:
    """
    Write one document per feature, concurrently.

    A failure for one feature never stops the others.

    Args:
        groups: Feature key -> comment bodies
        output_dir: Directory receiving the documents

    Returns:
        Tuple of (written paths, write errors), each in feature order
    """
    _warn_on_collisions(groups)

    # Colliding keys must land in order, so they share one task
    by_filename: dict[str, list[str]] = {}
    for key in groups:
        by_filename.setdefault(document_filename(key), []).append(key)

    def write_all(keys: list[str]) -> list[Path | WriteError]:
        outcomes: list[Path | WriteError] = []
        for key in keys:
            try:
                outcomes.append(_write_feature(key, groups[key], output_dir))
            except WriteError as e:
                logger.warning("%s", e)
                outcomes.append(e)
        return outcomes

    results = await asyncio.gather(
        *(asyncio.to_thread(write_all, keys) for keys in by_filename.values())
    )

    written: list[Path] = []
    errors: list[WriteError] = []
    for outcomes in results:
        for outcome in outcomes:
            if isinstance(outcome, WriteError):
                errors.append(outcome)
            else:
                written.append(outcome)

    return written, errors
