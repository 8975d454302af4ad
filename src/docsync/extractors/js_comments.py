"""
Extract block comments from JavaScript source using tree-sitter.

A real parse is used instead of a regex over raw text, so comment-like
text inside string and template literals is never reported.
"""
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Iterator, Optional

import tree_sitter_javascript
from tree_sitter import Language, Node, Parser

logger = logging.getLogger(__name__)

__all__ = [
    "BlockComment",
    "ScanError",
    "iter_block_comments",
    "parse_block_comments",
]


class ScanError(Exception):
    """Raised when a source file cannot be parsed or read."""

    def __init__(self, message: str, path: Optional[Path] = None, line: Optional[int] = None):
        super().__init__(message)
        self.path = path
        self.line = line

    def __str__(self) -> str:
        message = super().__str__()
        if self.path is not None and self.line is not None:
            return f"{self.path}:{self.line}: {message}"
        if self.path is not None:
            return f"{self.path}: {message}"
        return message


@dataclass(frozen=True)
class BlockComment:
    """A /* ... */ comment. value excludes the delimiters."""
    value: str
    line: int

    @property
    def is_doc_comment(self) -> bool:
        """True for the /** ... */ convention."""
        return self.value.startswith('*')

    @property
    def text(self) -> str:
        """The comment re-wrapped in its delimiters, verbatim."""
        return f"/*{self.value}*/"


@lru_cache(maxsize=1)
def _get_parser() -> Parser:
    return Parser(Language(tree_sitter_javascript.language()))


def _iter_nodes(root: Node) -> Iterator[Node]:
    """Pre-order walk, children in source order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def _first_error_line(root: Node) -> Optional[int]:
    for node in _iter_nodes(root):
        if node.type == "ERROR" or node.is_missing:
            return node.start_point[0] + 1
    return None


def iter_block_comments(source: str, filepath: Optional[Path] = None) -> Iterator[BlockComment]:
    """
    Parse source and yield its block comments in source order.

    Line comments (// ...) are skipped.

    Args:
        source: JavaScript source code as string
        filepath: Used only in error messages

    Yields:
        BlockComment objects

    Raises:
        ScanError: If the source does not parse cleanly
    """
    tree = _get_parser().parse(source.encode("utf-8"))
    root = tree.root_node

    if root.has_error:
        line = _first_error_line(root)
        raise ScanError("syntax error", path=filepath, line=line)

    for node in _iter_nodes(root):
        if node.type != "comment":
            continue
        text = node.text.decode("utf-8")
        if not text.startswith("/*"):
            continue
        yield BlockComment(value=text[2:-2], line=node.start_point[0] + 1)


def parse_block_comments(source: str, filepath: Optional[Path] = None) -> list[BlockComment]:
    """Eager variant of iter_block_comments()."""
    return list(iter_block_comments(source, filepath))
