"""
Core types for the documentation build cache.

This module defines the small set of shared data structures:
- Namespace enum naming the five artifact kinds
- CacheStats counters kept per namespace
- EvictionRecord describing a single removal from an artifact map
- generate_id() for time-ordered session IDs
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from uuid6 import uuid7


def generate_id(prefix: str = "") -> str:
    """Generate a time-ordered unique ID using UUID7.

    Args:
        prefix: Optional prefix for the ID (e.g., "session").

    Returns:
        A unique ID string, optionally prefixed.
    """
    uid = str(uuid7())
    return f"{prefix}_{uid}" if prefix else uid


class Namespace(str, Enum):
    """Artifact kinds held by the store, each with its own key space."""

    MARKDOWN = "markdown"
    CORE_DOCS = "core_docs"
    PARTIALS = "partials"
    TYPEDOCS = "typedocs"
    TOOLTIPS = "tooltips"

    @classmethod
    def docs_pair(cls) -> tuple[Namespace, Namespace]:
        """Namespaces that share the docs-derived key and are evicted together."""
        return (cls.MARKDOWN, cls.CORE_DOCS)


@dataclass
class CacheStats:
    """Hit/miss/eviction counters for one namespace.

    Informational only; nothing in the cache consults these to decide behavior.
    """

    hits: int = 0
    misses: int = 0
    stores: int = 0
    evictions: int = 0

    @property
    def lookups(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        """Fraction of lookups served from the cache (0.0 when unused)."""
        if self.lookups == 0:
            return 0.0
        return self.hits / self.lookups

    def reset(self) -> None:
        self.hits = 0
        self.misses = 0
        self.stores = 0
        self.evictions = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "stores": self.stores,
            "evictions": self.evictions,
            "hit_rate": round(self.hit_rate, 4),
        }


@dataclass(frozen=True)
class EvictionRecord:
    """A single key removed from an artifact map.

    Attributes:
        namespace: The map the key was removed from.
        key: The removed key.
        source_key: Key its dependents were recorded under in the dependency map.
        cascaded: True when the removal came from a dependent of the changed path.
    """

    namespace: Namespace
    key: str
    source_key: str
    cascaded: bool = False
