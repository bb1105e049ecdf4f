"""
Cache package for incremental documentation builds.

This package provides:
- Store (store.py): the in-memory artifact maps, dependency edges and written-file digests
- Namespace accessors (namespace.py): get-or-compute memoization per artifact kind
- Single-flight wrapper (inflight.py): one in-flight computation per key
- Dependency tracker (dependencies.py): source -> dependent document edges
- Invalidator (invalidation.py): path-driven eviction with a one-hop cascade
- Written files (written.py): skip output writes whose content did not change
"""

from docbuild.cache.dependencies import DependencyTracker, partial_source_key
from docbuild.cache.inflight import SingleFlightCache
from docbuild.cache.invalidation import Invalidator
from docbuild.cache.namespace import (
    NamespaceCache,
    core_docs_cache,
    markdown_cache,
    partials_cache,
    tooltips_cache,
    typedocs_cache,
)
from docbuild.cache.store import Store, create_blank_store
from docbuild.cache.written import OutputWriter, content_digest, needs_write

__all__ = [
    "DependencyTracker",
    "Invalidator",
    "NamespaceCache",
    "OutputWriter",
    "SingleFlightCache",
    "Store",
    "content_digest",
    "core_docs_cache",
    "create_blank_store",
    "markdown_cache",
    "needs_write",
    "partial_source_key",
    "partials_cache",
    "tooltips_cache",
    "typedocs_cache",
]
