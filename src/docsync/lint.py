"""Markdown linter invocation and output parsing."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Optional, Protocol, Sequence

from docsync.constants import DEFAULT_LINT_COMMAND
from docsync.extractors.patterns import LINT_OUTPUT_LINE
from docsync.models import LintFinding

logger = logging.getLogger(__name__)


class LintToolError(Exception):
    """Raised when the linter cannot be run at all (as opposed to finding problems)."""
    pass


class LintRunner(Protocol):
    """Anything that lints a set of file patterns."""

    def run(self, patterns: Sequence[str]) -> list[LintFinding]:
        ...


def parse_lint_output(output: str) -> list[LintFinding]:
    """
    Turn linter output into findings, one per non-empty line.

    Lines in the markdownlint "file:line[:col] RULE/alias message" shape
    are split into fields; anything else is kept as a bare message.
    """
    findings = []

    for line in output.splitlines():
        line = line.strip()
        if not line:
            continue

        match = LINT_OUTPUT_LINE.match(line)
        if match:
            findings.append(LintFinding(
                message=match.group("message").strip(),
                file=match.group("file"),
                line=int(match.group("line")),
                rule=match.group("rule"),
            ))
        else:
            findings.append(LintFinding(message=line))

    return findings


class MarkdownLintRunner:
    """
    Runs an external markdown linter as a subprocess.

    The verdict comes from the exit code: 0 means clean, whatever was
    printed. A non-zero exit yields the printed lines as findings.
    """

    def __init__(
        self,
        command: Sequence[str] = DEFAULT_LINT_COMMAND,
        cwd: Optional[Path] = None,
        timeout: Optional[float] = None,
    ):
        self.command = list(command)
        self.cwd = cwd
        self.timeout = timeout

    def run(self, patterns: Sequence[str]) -> list[LintFinding]:
        """
        Lint the files matching patterns.

        Args:
            patterns: File globs passed to the linter as arguments

        Returns:
            Findings; empty when the linter exits 0

        Raises:
            LintToolError: If the linter is missing, not executable, or times out
        """
        args = self.command + list(patterns)
        try:
            result = subprocess.run(
                args,
                cwd=self.cwd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            raise LintToolError(f"Linter timed out after {self.timeout}s")
        except FileNotFoundError:
            raise LintToolError(f"Linter is not installed or not in PATH: {self.command[0]}")
        except PermissionError:
            raise LintToolError(f"Linter is not executable: {self.command[0]}")

        if result.returncode == 0:
            if result.stdout.strip() or result.stderr.strip():
                logger.debug("Linter output on success: %s%s", result.stdout, result.stderr)
            return []

        findings = parse_lint_output(result.stdout) + parse_lint_output(result.stderr)
        if not findings:
            findings.append(LintFinding(
                message=f"{self.command[0]} exited with status {result.returncode}"
            ))
        return findings
