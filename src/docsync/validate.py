"""
Validation pipeline: docs tree -> links -> corpus membership -> report.

The linter is an external collaborator behind LintRunner, so link
checking works (and is tested) without any subprocess.
"""
import asyncio
import logging
import os
from pathlib import Path
from typing import Iterable, Optional

from docsync.constants import DOC_EXTENSIONS, DOC_IGNORE_DIRS, LINT_GLOB
from docsync.graph import DocumentGraph
from docsync.links import collect_references, resolve_links
from docsync.lint import LintRunner, MarkdownLintRunner
from docsync.models import LintFinding
from docsync.readers import read_files_async
from docsync.reporter import ValidationReport
from docsync.walker import FilesystemError, build_corpus

logger = logging.getLogger(__name__)


async def _run_lint(runner: Optional[LintRunner], root: Path) -> list[LintFinding]:
    if runner is None:
        return []
    return await asyncio.to_thread(runner.run, [str(root / LINT_GLOB)])


async def validate_async(
    docs_root: Path | str,
    lint_runner: Optional[LintRunner] = None,
    lint: bool = True,
    extensions: Iterable[str] = DOC_EXTENSIONS,
    ignore_dirs: Optional[frozenset[str]] = None,
) -> ValidationReport:
    """
    Lint a documentation tree and check every relative link.

    Args:
        docs_root: Directory holding the documents
        lint_runner: Linter to use (default: MarkdownLintRunner())
        lint: Set False to skip linting entirely
        extensions: Document suffixes forming the corpus
        ignore_dirs: Directory names to skip (default: DOC_IGNORE_DIRS)

    Returns:
        ValidationReport with lint findings, broken links and unreadable documents

    Raises:
        FilesystemError: If docs_root is missing or cannot be listed
        LintToolError: If the linter cannot be run
    """
    root = Path(os.path.abspath(docs_root))
    if not root.exists():
        raise FilesystemError(f"Documentation directory does not exist: {root}")

    if lint and lint_runner is None:
        lint_runner = MarkdownLintRunner()
    runner = lint_runner if lint else None

    if ignore_dirs is None:
        ignore_dirs = DOC_IGNORE_DIRS

    corpus = build_corpus(root, extensions, ignore_dirs=ignore_dirs)
    documents = sorted(corpus)
    logger.debug("Validating %d documents under %s", len(documents), root)

    lint_findings, contents = await asyncio.gather(
        _run_lint(runner, root),
        read_files_async(documents),
    )

    graph = DocumentGraph(corpus)
    references = collect_references(documents, contents)
    read_errors = [path for path, content in zip(documents, contents) if content is None]
    broken_links = resolve_links(references, graph)

    return ValidationReport(
        docs_root=root,
        documents_checked=len(documents),
        lint_findings=lint_findings,
        broken_links=broken_links,
        read_errors=read_errors,
        unreferenced=graph.unreferenced_documents(),
        lint_skipped=runner is None,
    )


def validate(
    docs_root: Path | str,
    lint_runner: Optional[LintRunner] = None,
    lint: bool = True,
    extensions: Iterable[str] = DOC_EXTENSIONS,
    ignore_dirs: Optional[frozenset[str]] = None,
) -> ValidationReport:
    """Blocking wrapper around validate_async()."""
    return asyncio.run(validate_async(
        docs_root,
        lint_runner=lint_runner,
        lint=lint,
        extensions=extensions,
        ignore_dirs=ignore_dirs,
    ))
