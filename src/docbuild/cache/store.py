"""
Store: the in-memory state owned by one build or dev-server session.

Holds:
- Five artifact maps, one per Namespace, keyed by the artifact's resolved path
- dirty_doc_map: source key -> set of document keys derived from it
- written_files: output path -> digest of the content last written there

Entries are added lazily by the namespace accessors and removed only by
the invalidator. There is no size-based eviction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from docbuild.exceptions import UnknownNamespaceError
from docbuild.types import CacheStats, Namespace


def _blank_stats() -> dict[Namespace, CacheStats]:
    return {namespace: CacheStats() for namespace in Namespace}


@dataclass
class Store:
    """Mutable cache state for a single build session.

    Attributes:
        markdown: Parsed markdown documents keyed by docs key.
        core_docs: Core-doc artifacts keyed by the same docs key as markdown.
        partials: Partials keyed by path relative to the partials root.
        typedocs: Typedoc entries keyed by path relative to the typedoc root.
        tooltips: Tooltip definitions keyed by path relative to the tooltip root.
        dirty_doc_map: Inverted dependency graph, source key -> dependent keys.
        written_files: Output path -> digest of last-written content.
        stats: Per-namespace counters.
    """

    markdown: dict[str, Any] = field(default_factory=dict)
    core_docs: dict[str, Any] = field(default_factory=dict)
    partials: dict[str, Any] = field(default_factory=dict)
    typedocs: dict[str, Any] = field(default_factory=dict)
    tooltips: dict[str, Any] = field(default_factory=dict)
    dirty_doc_map: dict[str, set[str]] = field(default_factory=dict)
    written_files: dict[str, str] = field(default_factory=dict)
    stats: dict[Namespace, CacheStats] = field(default_factory=_blank_stats)

    def artifacts(self, namespace: Namespace | str) -> dict[str, Any]:
        """Return the live artifact map for a namespace.

        Args:
            namespace: A Namespace or its string value.

        Returns:
            The map itself, not a copy.

        Raises:
            UnknownNamespaceError: If the name matches no namespace.
        """
        return getattr(self, coerce_namespace(namespace).value)

    def clear(self) -> None:
        """Drop every cached artifact, edge and written-file record."""
        for namespace in Namespace:
            self.artifacts(namespace).clear()
            self.stats[namespace].reset()
        self.dirty_doc_map.clear()
        self.written_files.clear()

    def summary(self) -> dict[str, Any]:
        """Entry counts per namespace plus graph and output sizes."""
        return {
            "artifacts": {
                namespace.value: len(self.artifacts(namespace)) for namespace in Namespace
            },
            "dependency_sources": len(self.dirty_doc_map),
            "dependency_edges": sum(len(deps) for deps in self.dirty_doc_map.values()),
            "written_files": len(self.written_files),
            "stats": {
                namespace.value: self.stats[namespace].to_dict() for namespace in Namespace
            },
        }


def create_blank_store() -> Store:
    """Create an empty store at build or dev-server start."""
    return Store()


def coerce_namespace(namespace: Namespace | str) -> Namespace:
    """Convert a namespace name to a Namespace.

    Raises:
        UnknownNamespaceError: If the name matches no namespace.
    """
    if isinstance(namespace, Namespace):
        return namespace
    try:
        return Namespace(namespace.strip().lower().replace("-", "_"))
    except ValueError:
        raise UnknownNamespaceError(
            "Unknown cache namespace",
            context={"namespace": namespace, "known": [n.value for n in Namespace]},
        ) from None
