"""
Command-line interface for docsync
"""
from __future__ import annotations

import argparse
import logging
import shlex
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape as rich_escape
from rich.panel import Panel
from rich.text import Text

from docsync.constants import (
    DEFAULT_FEATURES_DIR,
    DEFAULT_LINT_COMMAND,
    DEFAULT_PROJECT_DIR,
    DEFAULT_SOURCE_DIR,
)
from docsync.lint import LintToolError, MarkdownLintRunner
from docsync.reporter import ReportSerializer, ValidationReport
from docsync.sync import SyncResult, synchronize
from docsync.validate import validate
from docsync.walker import FilesystemError

# Create a console instance for all output
console = Console()


def configure_logging(verbose: bool) -> None:
    """Route library logging through rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=verbose)],
        force=True,
    )


def _relative_path(filepath: str | Path, base_dir: Path) -> Path:
    """Get path relative to base_dir, or absolute if not under base_dir."""
    path = Path(filepath)
    try:
        return path.relative_to(base_dir)
    except ValueError:
        return path


def print_sync_result(result: SyncResult, base_dir: Path) -> None:
    """Print what synchronize() did."""
    for error in result.scan_errors:
        console.print(f"  [yellow]Skipped:[/] {rich_escape(str(error))}")

    if result.nothing_to_do:
        console.print("[yellow]No @feature tags found in source files. Nothing to sync.[/]")
        return

    console.print(f"Found [bold]{len(result.groups)}[/] features in {result.files_scanned} files.")

    if result.dry_run:
        console.print("[dim]Dry run, nothing written:[/]")
        for key, path in zip(result.groups, result.planned_paths()):
            rel_path = _relative_path(path, base_dir)
            console.print(
                f"  [dim]•[/] \"{rich_escape(key)}\" "
                f"({len(result.groups[key])} comments) -> [cyan]{rich_escape(str(rel_path))}[/]"
            )
        return

    for path in result.written:
        rel_path = _relative_path(path, base_dir)
        console.print(f"  [green]✓[/] Wrote [cyan]{rich_escape(str(rel_path))}[/]")

    for error in result.write_errors:
        console.print(f"  [red]✗[/] {rich_escape(str(error))}")

    if result.ok:
        console.print("\n[bold green]Synchronization complete![/]")
    else:
        console.print("\n[bold red]Synchronization failed:[/] no document could be written")


def print_validation_report(report: ValidationReport, base_dir: Path) -> None:
    """Print a validation report."""
    summary = Text()
    summary.append("Documents: ", style="bold")
    summary.append(f"{report.documents_checked}\n", style="cyan bold")
    summary.append("Lint findings: ", style="bold")
    if report.lint_skipped:
        summary.append("skipped\n", style="dim")
    else:
        summary.append(f"{len(report.lint_findings)}\n", style="red bold" if report.lint_findings else "green bold")
    summary.append("Broken links: ", style="bold")
    summary.append(f"{len(report.broken_links)}", style="red bold" if report.broken_links else "green bold")

    console.print(Panel(summary, title="[bold blue]Validation[/]", border_style="blue"))

    if report.lint_findings:
        console.print("\n[bold red]Linter errors found:[/]")
        for finding in report.lint_findings:
            console.print(f"  [dim]•[/] {rich_escape(str(finding))}")
    elif not report.lint_skipped:
        console.print("[green]✓ No linting issues found.[/]")

    if report.broken_links:
        console.print("\n[bold red]Broken links found:[/]")
        for link in report.broken_links:
            rel_path = _relative_path(link.source_file, base_dir)
            console.print(
                f"  [dim]•[/] In [green]{rich_escape(str(rel_path))}[/]:{link.line} "
                f"link to [yellow]\"{rich_escape(link.target)}\"[/] is broken"
            )
    else:
        console.print("[green]✓ No broken links found.[/]")

    if report.read_errors:
        console.print("\n[bold red]Unreadable documents (links not checked):[/]")
        for path in report.read_errors:
            console.print(f"  [dim]•[/] [green]{rich_escape(str(_relative_path(path, base_dir)))}[/]")

    if report.unreferenced:
        console.print(f"\n[dim]{len(report.unreferenced)} documents are not linked from any other document.[/]")

    if report.passed:
        console.print("\n[bold green]Validation successful![/]")
    else:
        console.print("\n[bold red]Validation failed.[/]")


def run_sync(args: argparse.Namespace) -> int:
    console.print(f"[bold]Synchronizing:[/] [blue]{rich_escape(str(args.source))}[/] -> [blue]{rich_escape(str(args.output))}[/]")

    ignore_dirs = frozenset() if args.no_ignore else None

    try:
        result = synchronize(args.source, args.output, ignore_dirs=ignore_dirs, dry_run=args.dry_run)
    except FilesystemError as e:
        console.print(f"[bold red]Error:[/] {rich_escape(str(e))}")
        return 1

    print_sync_result(result, Path.cwd())
    return 0 if result.ok else 1


def run_validate(args: argparse.Namespace) -> int:
    console.print(f"[bold]Validating:[/] [blue]{rich_escape(str(args.docs))}[/]")

    ignore_dirs = frozenset() if args.no_ignore else None
    runner = MarkdownLintRunner(command=shlex.split(args.lint_command), timeout=args.lint_timeout)

    try:
        report = validate(args.docs, lint_runner=runner, lint=not args.no_lint, ignore_dirs=ignore_dirs)
    except (FilesystemError, LintToolError) as e:
        console.print(f"[bold red]Error:[/] {rich_escape(str(e))}")
        console.print("\n[bold red]Validation failed.[/]")
        return 1

    print_validation_report(report, Path.cwd())

    if args.output:
        ReportSerializer.save(report, args.output)
        console.print(f"\n[bold green]✓[/] Report saved to [underline]{rich_escape(str(args.output))}[/]")

    return report.exit_code


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Keep feature documentation in sync with source comments"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    sync_parser = subparsers.add_parser(
        "sync",
        help="Generate one document per @feature tag found in source comments"
    )
    sync_parser.add_argument(
        "--source",
        type=Path,
        default=Path(DEFAULT_SOURCE_DIR),
        help=f"Source directory to scan (default: {DEFAULT_SOURCE_DIR})"
    )
    sync_parser.add_argument(
        "--output",
        type=Path,
        default=Path(DEFAULT_FEATURES_DIR),
        help=f"Directory for feature documents (default: {DEFAULT_FEATURES_DIR})"
    )
    sync_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be written without writing"
    )
    sync_parser.add_argument(
        "--no-ignore",
        action="store_true",
        help="Don't ignore common directories (.git, node_modules, etc.)"
    )
    sync_parser.set_defaults(handler=run_sync)

    validate_parser = subparsers.add_parser(
        "validate",
        help="Lint documents and check relative links"
    )
    validate_parser.add_argument(
        "--docs",
        type=Path,
        default=Path(DEFAULT_PROJECT_DIR),
        help=f"Documentation directory (default: {DEFAULT_PROJECT_DIR})"
    )
    validate_parser.add_argument(
        "--lint-command",
        type=str,
        default=shlex.join(DEFAULT_LINT_COMMAND),
        help="Markdown linter command (default: %(default)s)"
    )
    validate_parser.add_argument(
        "--lint-timeout",
        type=float,
        default=None,
        help="Seconds to wait for the linter (default: no limit)"
    )
    validate_parser.add_argument(
        "--no-lint",
        action="store_true",
        help="Only check links"
    )
    validate_parser.add_argument(
        "--output",
        type=Path,
        help="Save the report to a JSON file"
    )
    validate_parser.add_argument(
        "--no-ignore",
        action="store_true",
        help="Don't ignore common directories (.git, node_modules, etc.)"
    )
    validate_parser.set_defaults(handler=run_validate)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    return args.handler(args)


if __name__ == "__main__":
    exit(main())
