"""
Data models for feature comments, document links and validation findings.

All models are immutable (frozen) dataclasses for safety and hashability.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, TypedDict


# TypedDicts for extractor return types
class LinkInfo(TypedDict):
    """A relative link extracted from a markdown document."""
    text: str
    target: str
    path: str
    line: int


# Feature key -> comment bodies, in traversal order
FeatureGroups = Mapping[str, tuple[str, ...]]


@dataclass(frozen=True)
class AnnotatedComment:
    """A doc comment carrying an @feature tag. Immutable and hashable."""
    feature_key: str
    body: str
    source: Optional[Path] = None
    line: int = 1

    def __str__(self) -> str:
        if self.source is not None:
            return f"@feature {self.feature_key} ({self.source}:{self.line})"
        return f"@feature {self.feature_key}"


@dataclass(frozen=True)
class LinkReference:
    """
    A relative link found in a document. Immutable and hashable.

    raw_target is the target exactly as written (anchor included);
    resolved_path is absolute, anchor stripped, resolved against the
    directory of source_file.
    """
    source_file: Path
    raw_target: str
    resolved_path: Path
    line: int = 1

    def __str__(self) -> str:
        return f"{self.source_file}:{self.line} -> {self.raw_target}"

    @property
    def path_portion(self) -> str:
        """Target with any #anchor removed."""
        return self.raw_target.split('#', 1)[0]


@dataclass(frozen=True)
class BrokenLink:
    """A link whose resolved path is not in the corpus."""
    source_file: Path
    target: str
    resolved_path: Path
    line: int = 1

    def __str__(self) -> str:
        return f'In "{self.source_file}": link to "{self.target}" is broken.'

    @classmethod
    def from_reference(cls, ref: LinkReference) -> "BrokenLink":
        return cls(
            source_file=ref.source_file,
            target=ref.raw_target,
            resolved_path=ref.resolved_path,
            line=ref.line,
        )

    def to_dict(self) -> dict:
        """JSON-serializable representation."""
        return {
            "source_file": str(self.source_file),
            "target": self.target,
            "resolved_path": str(self.resolved_path),
            "line": self.line,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BrokenLink":
        """Reconstruct from dictionary."""
        return cls(
            source_file=Path(data["source_file"]),
            target=data["target"],
            resolved_path=Path(data["resolved_path"]),
            line=data.get("line", 1),
        )


@dataclass(frozen=True)
class LintFinding:
    """One problem reported by the markdown linter."""
    message: str
    file: Optional[str] = None
    line: Optional[int] = None
    rule: Optional[str] = None

    def __str__(self) -> str:
        if self.file and self.line:
            return f"{self.file}:{self.line} {self.message}"
        return self.message

    def to_dict(self) -> dict:
        """JSON-serializable representation."""
        return {
            "message": self.message,
            "file": self.file,
            "line": self.line,
            "rule": self.rule,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LintFinding":
        """Reconstruct from dictionary."""
        return cls(
            message=data["message"],
            file=data.get("file"),
            line=data.get("line"),
            rule=data.get("rule"),
        )
