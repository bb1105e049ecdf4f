"""
Single-flight wrapper for namespace accessors.

NamespaceCache computes at least once per concurrent miss. SingleFlightCache
shares one in-flight task per key so concurrent misses compute exactly once.
The task holds a private snapshot of the computed value and every caller,
the first included, receives its own deep copy of it. A failed computation
is raised to every waiter and not cached.
"""

from __future__ import annotations

import asyncio
import copy
from typing import Any, Iterator

from docbuild.cache.base import CacheProtocol, ComputeFn


class SingleFlightCache(CacheProtocol):
    """Deduplicates concurrent misses for the same key."""

    def __init__(self, inner: CacheProtocol) -> None:
        self.inner = inner
        self._inflight: dict[str, asyncio.Task[Any]] = {}

    @property
    def inflight_keys(self) -> list[str]:
        return list(self._inflight)

    async def get_or_compute(self, key: str, compute: ComputeFn) -> Any:
        task = self._inflight.get(key)
        if task is None:
            if self.inner.contains(key):
                return await self.inner.get_or_compute(key, compute)

            task = asyncio.create_task(self._snapshot(key, compute))
            self._inflight[key] = task
            task.add_done_callback(lambda done: self._forget(key, done))

        snapshot = await asyncio.shield(task)
        return copy.deepcopy(snapshot)

    async def _snapshot(self, key: str, compute: ComputeFn) -> Any:
        # Never handed out directly; callers only see copies
        result = await self.inner.get_or_compute(key, compute)
        return copy.deepcopy(result)

    def _forget(self, key: str, task: asyncio.Task[Any]) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]

    def contains(self, key: str) -> bool:
        return self.inner.contains(key)

    def evict(self, key: str) -> bool:
        return self.inner.evict(key)

    def keys(self) -> Iterator[str]:
        return self.inner.keys()
