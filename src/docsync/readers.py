"""
File readers for source and documentation files.

Provides safe file reading with:
- Automatic encoding detection (UTF-8 with latin-1 fallback)
- Graceful error handling for missing/inaccessible files
- Concurrent fan-out reads for a batch of files
"""
import asyncio
import logging
from pathlib import Path
from typing import Callable, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

# Exceptions that indicate file access problems (not encoding issues)
_FILE_ACCESS_ERRORS = (FileNotFoundError, PermissionError, IsADirectoryError)

T = TypeVar('T')


def _read_with_fallback(
    path: Path,
    reader: Callable[[object], T],
    default: T,
    encodings: tuple[str, ...] = ('utf-8', 'latin-1'),
) -> T:
    """
    Read a file using a reader function, trying multiple encodings.

    Args:
        path: Path to the file
        reader: Function that takes a file handle and returns the result
        default: Value to return if file can't be read
        encodings: Tuple of encodings to try in order

    Returns:
        Result from reader function, or default if file can't be read
    """
    for i, encoding in enumerate(encodings):
        try:
            with path.open('r', encoding=encoding) as f:
                return reader(f)
        except UnicodeDecodeError:
            if i < len(encodings) - 1:
                logger.debug(
                    "%s decode failed for %s, trying %s",
                    encoding, path, encodings[i + 1]
                )
                continue
            logger.warning("All encodings failed for %s", path)
            return default
        except _FILE_ACCESS_ERRORS as e:
            logger.warning("%s: %s", type(e).__name__, path)
            return default


def read_file_safe(filepath: Path | str) -> Optional[str]:
    """
    Read a file and return its contents.

    Handles encoding issues gracefully by trying UTF-8 first,
    then falling back to latin-1 (which accepts any byte sequence).

    Args:
        filepath: Path to file (string or Path object)

    Returns:
        File contents as string, or None if file can't be read
    """
    return _read_with_fallback(
        path=Path(filepath),
        reader=lambda f: f.read(),
        default=None,
    )


async def read_files_async(paths: Sequence[Path]) -> list[Optional[str]]:
    """
    Read many files concurrently.

    No file's content depends on another's, so every read is started
    at once and awaited together.

    Args:
        paths: Files to read

    Returns:
        Contents in the same order as paths; None for unreadable files
    """
    return list(await asyncio.gather(
        *(asyncio.to_thread(read_file_safe, path) for path in paths)
    ))
