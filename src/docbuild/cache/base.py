"""
Base classes for caching.

CacheProtocol is the interface every artifact accessor implements: an async
get-or-compute plus the synchronous presence/eviction hooks the invalidator
needs.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Iterator

ComputeFn = Callable[[str], Awaitable[Any]]


class CacheProtocol(ABC):
    """Abstract interface for namespace cache implementations."""

    @abstractmethod
    async def get_or_compute(self, key: str, compute: ComputeFn) -> Any:
        """Return the cached value for key, computing and storing it on a miss."""
        ...

    @abstractmethod
    def contains(self, key: str) -> bool:
        """Check if a key is cached."""
        ...

    @abstractmethod
    def evict(self, key: str) -> bool:
        """Remove a key. Returns True if it was present."""
        ...

    @abstractmethod
    def keys(self) -> Iterator[str]:
        """Iterate over the cached keys."""
        ...

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains(key)
