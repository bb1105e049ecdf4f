"""
Namespace cache accessors.

One NamespaceCache per artifact kind wraps the matching Store map with the
same get-or-compute contract:

- hit: return a deep copy of the cached value
- miss: await compute(key), store a deep copy, return the original result
- compute failure: propagate unchanged, cache nothing

Every read and write crosses a copy.deepcopy boundary so callers can mutate
what they receive without corrupting the cache. Concurrent misses on the same
key may both compute; wrap with SingleFlightCache when that matters.
"""

from __future__ import annotations

import copy
from typing import Any, Iterator

from docbuild.cache.base import CacheProtocol, ComputeFn
from docbuild.cache.store import Store, coerce_namespace
from docbuild.logging import get_logger, log_context
from docbuild.types import Namespace

logger = get_logger(__name__)


class NamespaceCache(CacheProtocol):
    """Get-or-compute accessor over one Store namespace."""

    def __init__(self, store: Store, namespace: Namespace | str) -> None:
        self.store = store
        self.namespace = coerce_namespace(namespace)

    @property
    def _map(self) -> dict[str, Any]:
        return self.store.artifacts(self.namespace)

    async def get_or_compute(self, key: str, compute: ComputeFn) -> Any:
        """Return the artifact for key, computing it on a miss.

        Args:
            key: Resolved path of the artifact in this namespace.
            compute: Async function producing the artifact from the key.

        Returns:
            A deep copy of the cached value on a hit, or compute's own
            result on a miss.
        """
        stats = self.store.stats[self.namespace]
        artifacts = self._map

        # Presence by key: a cached None or empty value is still a hit
        if key in artifacts:
            stats.hits += 1
            return copy.deepcopy(artifacts[key])

        stats.misses += 1
        with log_context(namespace=self.namespace.value):
            logger.debug("Cache miss", key=key)
            result = await compute(key)

        artifacts[key] = copy.deepcopy(result)
        stats.stores += 1
        return result

    def contains(self, key: str) -> bool:
        return key in self._map

    def evict(self, key: str) -> bool:
        if self._map.pop(key, _MISSING) is _MISSING:
            return False
        self.store.stats[self.namespace].evictions += 1
        return True

    def keys(self) -> Iterator[str]:
        return iter(list(self._map))

    def __len__(self) -> int:
        return len(self._map)

    def __repr__(self) -> str:
        return f"NamespaceCache({self.namespace.value!r}, entries={len(self)})"


_MISSING = object()


def markdown_cache(store: Store) -> NamespaceCache:
    """Accessor for parsed markdown documents."""
    return NamespaceCache(store, Namespace.MARKDOWN)


def core_docs_cache(store: Store) -> NamespaceCache:
    """Accessor for core-doc artifacts (keyed like markdown)."""
    return NamespaceCache(store, Namespace.CORE_DOCS)


def partials_cache(store: Store) -> NamespaceCache:
    """Accessor for partials."""
    return NamespaceCache(store, Namespace.PARTIALS)


def typedocs_cache(store: Store) -> NamespaceCache:
    """Accessor for typedoc entries."""
    return NamespaceCache(store, Namespace.TYPEDOCS)


def tooltips_cache(store: Store) -> NamespaceCache:
    """Accessor for tooltip definitions."""
    return NamespaceCache(store, Namespace.TOOLTIPS)
