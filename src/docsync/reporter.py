"""
Validation verdict and report persistence.

A run fails if the linter or the link resolver produced any finding,
or if a document could not be read. Unreferenced documents are
informational only.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

from docsync.constants import REPORT_FILE_VERSION
from docsync.models import BrokenLink, LintFinding


@dataclass
class ValidationReport:
    """Findings from one validate() run."""
    docs_root: Path
    documents_checked: int = 0
    lint_findings: list[LintFinding] = field(default_factory=list)
    broken_links: list[BrokenLink] = field(default_factory=list)
    read_errors: list[Path] = field(default_factory=list)
    unreferenced: list[Path] = field(default_factory=list)
    lint_skipped: bool = False

    @property
    def passed(self) -> bool:
        return not (self.lint_findings or self.broken_links or self.read_errors)

    @property
    def exit_code(self) -> int:
        return 0 if self.passed else 1

    def to_dict(self) -> dict:
        """JSON-serializable representation."""
        return {
            "docs_root": str(self.docs_root),
            "passed": self.passed,
            "documents_checked": self.documents_checked,
            "lint_skipped": self.lint_skipped,
            "lint_findings": [f.to_dict() for f in self.lint_findings],
            "broken_links": [b.to_dict() for b in self.broken_links],
            "read_errors": [str(p) for p in self.read_errors],
            "unreferenced": [str(p) for p in self.unreferenced],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ValidationReport":
        """Reconstruct from dictionary."""
        return cls(
            docs_root=Path(data["docs_root"]),
            documents_checked=data.get("documents_checked", 0),
            lint_findings=[LintFinding.from_dict(f) for f in data.get("lint_findings", [])],
            broken_links=[BrokenLink.from_dict(b) for b in data.get("broken_links", [])],
            read_errors=[Path(p) for p in data.get("read_errors", [])],
            unreferenced=[Path(p) for p in data.get("unreferenced", [])],
            lint_skipped=data.get("lint_skipped", False),
        )


class ReportSerializer:
    """Saves and loads validation reports as JSON files."""

    @staticmethod
    def save(report: ValidationReport, filepath: Path) -> None:
        data = {
            "version": REPORT_FILE_VERSION,
            "created_at": datetime.now().isoformat(),
            "report": report.to_dict(),
        }

        filepath = Path(filepath)
        with filepath.open("w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    @staticmethod
    def load(filepath: Path) -> ValidationReport:
        """
        Load a report saved by save().

        Raises:
            ValueError: If the file was written by an incompatible version
        """
        filepath = Path(filepath)
        with filepath.open("r", encoding="utf-8") as f:
            data = json.load(f)

        version: Optional[str] = data.get("version")
        if version != REPORT_FILE_VERSION:
            raise ValueError(f"Unsupported report version: {version!r}")

        return ValidationReport.from_dict(data["report"])
