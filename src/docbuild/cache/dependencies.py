"""
Dependency tracker.

Records that a document's output was derived from another source (a partial
it embeds, a typedoc entry it looks up, a tooltip it references). Edges are
stored inverted, source key -> dependent document keys, so the invalidator
can find every direct dependent of a changed source in one lookup.

Only direct adjacency is tracked. There is no removal API: a recomputed
document re-registers the edges that still apply.
"""

from __future__ import annotations

from docbuild.cache.store import Store

PARTIALS_PREFIX = "_partials/"


def partial_source_key(relative_path: str) -> str:
    """Source identity that partial dependency edges are recorded under.

    Args:
        relative_path: Partial path relative to the partials root.

    Returns:
        The prefixed key, e.g. "_partials/billing/note.mdx".
    """
    return f"{PARTIALS_PREFIX}{relative_path.lstrip('/')}"


class DependencyTracker:
    """Maintains the store's dirty_doc_map."""

    def __init__(self, store: Store) -> None:
        self.store = store

    def mark_dirty(self, document_key: str, depends_on_key: str) -> None:
        """Record that document_key's output depends on depends_on_key.

        Recording the same edge twice is a no-op.
        """
        self.store.dirty_doc_map.setdefault(depends_on_key, set()).add(document_key)

    def dependents_of(self, source_key: str) -> frozenset[str]:
        """Snapshot of the documents recorded as depending on source_key."""
        return frozenset(self.store.dirty_doc_map.get(source_key, ()))

    def sources(self) -> list[str]:
        """Every source key with at least one recorded dependent."""
        return list(self.store.dirty_doc_map)
