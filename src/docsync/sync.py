"""
Extraction pipeline: source tree -> @feature comments -> feature documents.

Stages run in a fixed order. Reads fan out concurrently, scanning and
aggregation are sequential over the gathered results, then writes fan
out again. Every run recomputes from scratch.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from docsync.aggregator import aggregate_features
from docsync.constants import SOURCE_EXTENSIONS
from docsync.extractors.feature_tags import scan_source
from docsync.extractors.js_comments import ScanError
from docsync.models import AnnotatedComment, FeatureGroups
from docsync.readers import read_files_async
from docsync.walker import walk_files
from docsync.writer import WriteError, document_filename, write_feature_documents_async

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    """Outcome of one synchronize() run."""
    output_dir: Path
    files_scanned: int = 0
    groups: FeatureGroups = field(default_factory=dict)
    written: list[Path] = field(default_factory=list)
    scan_errors: list[ScanError] = field(default_factory=list)
    write_errors: list[WriteError] = field(default_factory=list)
    dry_run: bool = False

    @property
    def features_written(self) -> int:
        return len(self.written)

    @property
    def nothing_to_do(self) -> bool:
        """No tagged comments were found anywhere."""
        return not self.groups

    @property
    def ok(self) -> bool:
        """False only when there was something to write and every write failed."""
        if self.nothing_to_do or self.dry_run:
            return True
        return bool(self.written) or not self.write_errors

    def planned_paths(self) -> list[Path]:
        """Where each feature's document goes, in feature order."""
        return [self.output_dir / document_filename(key) for key in self.groups]


def _scan_all(
    paths: list[Path],
    contents: list[Optional[str]],
) -> tuple[list[AnnotatedComment], list[ScanError]]:
    comments: list[AnnotatedComment] = []
    errors: list[ScanError] = []

    for path, content in zip(paths, contents):
        if content is None:
            error = ScanError("unreadable file", path=path)
            logger.warning("Skipping %s", error)
            errors.append(error)
            continue
        try:
            comments.extend(scan_source(content, path))
        except ScanError as e:
            logger.warning("Skipping %s", e)
            errors.append(e)

    return comments, errors


async def synchronize_async(
    source_root: Path | str,
    output_root: Path | str,
    extensions: Iterable[str] = SOURCE_EXTENSIONS,
    ignore_dirs: Optional[frozenset[str]] = None,
    dry_run: bool = False,
) -> SyncResult:
    """
    Regenerate one markdown document per feature found under source_root.

    Args:
        source_root: Directory of source files to scan
        output_root: Directory receiving <slug>.md documents
        extensions: Source file suffixes to scan
        ignore_dirs: Directory names to skip (default: DEFAULT_IGNORE_DIRS)
        dry_run: Compute groups but write nothing

    Returns:
        SyncResult describing what was scanned and written

    Raises:
        FilesystemError: If source_root exists but cannot be listed
    """
    output_dir = Path(output_root).absolute()
    paths = list(walk_files(source_root, extensions, ignore_dirs=ignore_dirs))
    logger.debug("Scanning %d source files under %s", len(paths), source_root)

    contents = await read_files_async(paths)
    comments, scan_errors = _scan_all(paths, contents)
    groups = aggregate_features(comments)

    result = SyncResult(
        output_dir=output_dir,
        files_scanned=len(paths),
        groups=groups,
        scan_errors=scan_errors,
        dry_run=dry_run,
    )

    if result.nothing_to_do:
        logger.info("No @feature tags found under %s; nothing to sync", source_root)
        return result

    if dry_run:
        return result

    result.written, result.write_errors = await write_feature_documents_async(groups, output_dir)
    return result


def synchronize(
    source_root: Path | str,
    output_root: Path | str,
    extensions: Iterable[str] = SOURCE_EXTENSIONS,
    ignore_dirs: Optional[frozenset[str]] = None,
    dry_run: bool = False,
) -> SyncResult:
    """Blocking wrapper around synchronize_async()."""
    return asyncio.run(synchronize_async(
        source_root,
        output_root,
        extensions=extensions,
        ignore_dirs=ignore_dirs,
        dry_run=dry_run,
    ))
