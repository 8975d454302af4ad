"""
Graph structure for document-to-document links.

Uses networkx as the single source of truth for link relationships.
The graph is purely structural - resolution against the corpus happens
in links.py.
"""
from pathlib import Path
from typing import Iterable, Iterator

import networkx as nx

from docsync.models import LinkReference


class DocumentGraph:
    """
    Directed graph of a documentation corpus.

    Node types (identified by 'kind' attribute):
    - 'document': A file in the corpus
    - 'missing': A link target that is not in the corpus

    Edges carry 'targets' (raw targets as written) and 'lines', one entry
    per link occurrence, plus 'broken' when the target is missing.
    """

    def __init__(self, corpus: Iterable[Path] = ()):
        self._graph = nx.DiGraph()
        self._corpus: set[Path] = set()
        for path in corpus:
            self.add_document(path)

    # --- Node management ---

    def add_document(self, path: Path) -> None:
        """Add a corpus document."""
        self._corpus.add(path)
        self._graph.add_node(path, kind="document")

    def add_reference(self, ref: LinkReference) -> None:
        """Add a link edge from ref.source_file to ref.resolved_path."""
        target = ref.resolved_path
        broken = target not in self._corpus

        if ref.source_file not in self._graph:
            self._graph.add_node(ref.source_file, kind="document")
        if target not in self._graph:
            self._graph.add_node(target, kind="missing")

        if self._graph.has_edge(ref.source_file, target):
            data = self._graph.edges[ref.source_file, target]
            data["targets"].append(ref.raw_target)
            data["lines"].append(ref.line)
        else:
            self._graph.add_edge(
                ref.source_file,
                target,
                targets=[ref.raw_target],
                lines=[ref.line],
                broken=broken,
            )

    # --- Queries ---

    def contains(self, path: Path) -> bool:
        """Membership test against the corpus (not against link targets)."""
        return path in self._corpus

    def documents(self) -> Iterator[Path]:
        for node, data in self._graph.nodes(data=True):
            if data.get("kind") == "document":
                yield node

    def missing_targets(self) -> list[Path]:
        """Resolved paths that some document links to but do not exist."""
        return sorted(
            node for node, data in self._graph.nodes(data=True)
            if data.get("kind") == "missing"
        )

    def links_from(self, path: Path) -> list[Path]:
        """Resolved targets linked from a document."""
        if path not in self._graph:
            return []
        return list(self._graph.successors(path))

    def linked_from(self, path: Path) -> list[Path]:
        """Documents that link to path."""
        if path not in self._graph:
            return []
        return list(self._graph.predecessors(path))

    def unreferenced_documents(self) -> list[Path]:
        """
        Documents no other document links to.

        Self-links do not count as references.
        """
        orphans = []
        for path in self.documents():
            sources = [p for p in self._graph.predecessors(path) if p != path]
            if not sources:
                orphans.append(path)
        return sorted(orphans)

    # --- Stats ---

    @property
    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    @property
    def broken_edge_count(self) -> int:
        return sum(1 for _, _, d in self._graph.edges(data=True) if d.get("broken"))

    # --- Serialization ---

    def to_dict(self) -> dict:
        """Export graph as JSON-serializable dict."""
        return {
            "nodes": [
                {"id": str(n), **d}
                for n, d in self._graph.nodes(data=True)
            ],
            "edges": [
                {"source": str(u), "target": str(v), **d}
                for u, v, d in self._graph.edges(data=True)
            ],
        }
