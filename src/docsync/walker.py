"""
Tree walker shared by the extractor and the validator.

Provides utilities for:
- Recursively enumerating files under a root, filtered by extension
- Skipping dependency, VCS and build directories
- Building the corpus of documents used as the link oracle

Traversal is depth-first with directory entries in name order, so the
sequence is stable for a given filesystem state. Feature grouping relies
on that order.
"""
import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, Optional

from docsync.constants import DEFAULT_IGNORE_DIRS

logger = logging.getLogger(__name__)


class FilesystemError(Exception):
    """Raised when a walk root exists but cannot be listed."""
    pass


def should_ignore(name: str, ignore_dirs: frozenset[str]) -> bool:
    """
    Check if a directory should be skipped.

    Args:
        name: Directory name (not a path)
        ignore_dirs: Set of directory names to ignore

    Returns:
        True if the directory is excluded from the walk
    """
    return name in ignore_dirs


def _normalize_extensions(extensions: Iterable[str]) -> frozenset[str]:
    normalized = set()
    for ext in extensions:
        ext = ext.lower()
        normalized.add(ext if ext.startswith('.') else f'.{ext}')
    return frozenset(normalized)


def walk_files(
    root: Path | str,
    extensions: Iterable[str],
    ignore_dirs: Optional[frozenset[str]] = None,
) -> Iterator[Path]:
    """
    Enumerate every regular file under root matching one of extensions.

    The root is checked eagerly; the walk itself is lazy.

    Args:
        root: Directory to walk (string or Path object)
        extensions: File suffixes to keep, e.g. {'.md'}
        ignore_dirs: Directory names to skip (default: DEFAULT_IGNORE_DIRS)

    Returns:
        Iterator of absolute Path objects. Empty if root does not exist.

    Raises:
        FilesystemError: If root is not a directory or cannot be listed
    """
    if ignore_dirs is None:
        ignore_dirs = DEFAULT_IGNORE_DIRS

    root_path = Path(os.path.abspath(root))

    if not root_path.exists():
        logger.debug("Walk root does not exist: %s", root_path)
        return iter(())

    if not root_path.is_dir():
        raise FilesystemError(f"Path is not a directory: {root_path}")

    try:
        entries = _list_entries(root_path)
    except OSError as e:
        raise FilesystemError(f"Cannot read directory {root_path}: {e}") from e

    return _walk(entries, _normalize_extensions(extensions), frozenset(ignore_dirs))


def _list_entries(directory: Path) -> list[os.DirEntry]:
    with os.scandir(directory) as it:
        return sorted(it, key=lambda entry: entry.name)


def _walk(
    entries: list[os.DirEntry],
    extensions: frozenset[str],
    ignore_dirs: frozenset[str],
) -> Iterator[Path]:
    for entry in entries:
        try:
            if entry.is_dir(follow_symlinks=False):
                if should_ignore(entry.name, ignore_dirs):
                    continue
                try:
                    children = _list_entries(Path(entry.path))
                except PermissionError:
                    logger.warning("Permission denied for %s", entry.path)
                    continue
                yield from _walk(children, extensions, ignore_dirs)
            elif entry.is_file():
                if os.path.splitext(entry.name)[1].lower() in extensions:
                    yield Path(entry.path)
        except OSError as e:
            logger.warning("Skipping %s: %s", entry.path, e)
            continue


def build_corpus(
    root: Path | str,
    extensions: Iterable[str],
    ignore_dirs: Optional[frozenset[str]] = None,
) -> frozenset[Path]:
    """
    Materialize the walk into a set of absolute paths.

    Used as the resolvability oracle during link validation.
    """
    return frozenset(walk_files(root, extensions, ignore_dirs=ignore_dirs))
