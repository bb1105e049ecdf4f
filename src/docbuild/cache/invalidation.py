"""
Invalidator: evicts cached artifacts when a source file changes.

Invalidation runs in two phases:

1. Direct eviction. The changed path is made relative to each configured
   root (docs, partials, typedoc, tooltips when configured). Each namespace
   holding its candidate key loses that entry. The markdown and core-docs
   maps share the docs-derived key and are always evicted together.
2. Cascade. Dependents recorded against every evicted source are evicted
   once, through phase 1 only. Dependents of dependents are not visited.

A path under none of the roots resolves to nothing and is a silent no-op.
"""

from __future__ import annotations

import os
import posixpath
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Iterable

from docbuild.cache.dependencies import DependencyTracker, partial_source_key
from docbuild.cache.store import Store
from docbuild.config import BuildConfig
from docbuild.logging import get_logger, log_context
from docbuild.types import EvictionRecord, Namespace

logger = get_logger(__name__)


def _canonical(path: str | os.PathLike[str]) -> str:
    """Absolute path with symlinked directories resolved; the final name is kept."""
    absolute = os.path.abspath(os.fspath(path))
    return os.path.join(os.path.realpath(os.path.dirname(absolute)), os.path.basename(absolute))


def relative_key(root: Path, path: str | os.PathLike[str]) -> str | None:
    """Path of `path` relative to `root` in posix form.

    Directories on both sides are resolved so a root reached through a
    symlink matches paths reported through either spelling.

    Returns:
        The relative path, or None when `path` is not under `root`.
    """
    try:
        rel = os.path.relpath(_canonical(path), os.path.realpath(root))
    except ValueError:
        # Different drives on Windows
        return None
    rel_posix = PurePath(rel).as_posix()
    if rel_posix == ".." or rel_posix.startswith("../"):
        return None
    return rel_posix


def docs_key(config: BuildConfig, path: str | os.PathLike[str]) -> str | None:
    """Key shared by the markdown and core-docs maps for a docs source file."""
    rel = relative_key(config.docs_path, path)
    if rel is None:
        return None
    return posixpath.normpath(posixpath.join(config.base_docs_link, rel))


@dataclass(frozen=True)
class CandidateKeys:
    """Per-namespace keys a path would occupy. None means not under that root."""

    docs: str | None
    partials: str | None
    typedocs: str | None
    tooltips: str | None

    def as_dict(self) -> dict[str, str | None]:
        return {
            "docs": self.docs,
            "partials": self.partials,
            "typedocs": self.typedocs,
            "tooltips": self.tooltips,
        }


class Invalidator:
    """Evicts artifacts for changed paths and cascades one hop to dependents."""

    def __init__(self, store: Store, config: BuildConfig) -> None:
        self.store = store
        self.config = config
        self.tracker = DependencyTracker(store)

    def resolve(self, path: str | os.PathLike[str]) -> CandidateKeys:
        """Compute the candidate key for every configured namespace."""
        tooltips = None
        if self.config.tooltips is not None:
            tooltips = relative_key(self.config.tooltips.input_path, path)

        return CandidateKeys(
            docs=docs_key(self.config, path),
            partials=relative_key(self.config.partials_path, path),
            typedocs=relative_key(self.config.typedoc_path, path),
            tooltips=tooltips,
        )

    def invalidate(self, changed_path: str | os.PathLike[str], cascade: bool = True) -> None:
        """Evict everything cached for changed_path.

        Args:
            changed_path: Filesystem path reported by the watcher.
            cascade: Also evict the direct dependents of what was evicted.
        """
        logger.info(f"invalidating {os.fspath(changed_path)}")

        evicted = self.evict_direct(changed_path)
        if cascade and evicted:
            self.cascade_from(evicted)

    def invalidate_many(
        self, changed_paths: Iterable[str | os.PathLike[str]], cascade: bool = True
    ) -> None:
        """Invalidate a batch of changed paths in order."""
        for path in changed_paths:
            self.invalidate(path, cascade=cascade)

    def evict_direct(
        self, path: str | os.PathLike[str], cascaded: bool = False
    ) -> list[EvictionRecord]:
        """Phase 1: remove the entries path maps to, without cascading.

        Args:
            path: Changed file path, or a dependent document key when cascaded.
            cascaded: Mark the records as cascade evictions. Also matches
                path verbatim against the docs maps, since dependents may be
                recorded by docs key instead of file path.

        Returns:
            One record per entry actually removed.
        """
        candidates = self.resolve(path)
        records: list[EvictionRecord] = []

        docs_candidates = [candidates.docs]
        if cascaded:
            docs_candidates.append(os.fspath(path))
        for key in dict.fromkeys(k for k in docs_candidates if k is not None):
            records.extend(self._evict_docs_pair(key, cascaded))

        if candidates.partials is not None:
            records.extend(
                self._evict_one(
                    Namespace.PARTIALS,
                    candidates.partials,
                    partial_source_key(candidates.partials),
                    cascaded,
                )
            )

        if candidates.typedocs is not None:
            records.extend(
                self._evict_one(Namespace.TYPEDOCS, candidates.typedocs, candidates.typedocs, cascaded)
            )

        if candidates.tooltips is not None:
            records.extend(
                self._evict_one(Namespace.TOOLTIPS, candidates.tooltips, candidates.tooltips, cascaded)
            )

        return records

    def cascade_from(self, evicted: Iterable[EvictionRecord]) -> list[EvictionRecord]:
        """Phase 2: evict the direct dependents of already-evicted sources.

        Each dependent goes through evict_direct only, so the cascade stops
        after one hop.
        """
        dependents: set[str] = set()
        for source_key in dict.fromkeys(record.source_key for record in evicted):
            dependents.update(self.tracker.dependents_of(source_key))

        records: list[EvictionRecord] = []
        for dependent in sorted(dependents):
            logger.debug("Invalidating dependent", dependent=dependent)
            records.extend(self.evict_direct(dependent, cascaded=True))
        return records

    def _evict_docs_pair(self, key: str, cascaded: bool) -> list[EvictionRecord]:
        """Remove key from markdown and core docs together if either holds it."""
        pair = Namespace.docs_pair()
        if not any(key in self.store.artifacts(namespace) for namespace in pair):
            return []

        records: list[EvictionRecord] = []
        for namespace in pair:
            records.extend(self._evict_one(namespace, key, key, cascaded))
        return records

    def _evict_one(
        self, namespace: Namespace, key: str, source_key: str, cascaded: bool
    ) -> list[EvictionRecord]:
        artifacts = self.store.artifacts(namespace)
        if key not in artifacts:
            return []

        del artifacts[key]
        self.store.stats[namespace].evictions += 1
        with log_context(namespace=namespace.value):
            logger.debug("Evicted", key=key, cascaded=cascaded)
        return [EvictionRecord(namespace, key, source_key, cascaded)]
