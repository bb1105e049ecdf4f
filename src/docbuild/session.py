"""
BuildSession: one build or dev-server session and the store it owns.

The session is the only place a Store is created. Build steps receive the
session (or its accessors) explicitly; there is no module-level store.
"""

from __future__ import annotations

import os
from typing import Iterable

from docbuild.cache.dependencies import DependencyTracker
from docbuild.cache.invalidation import CandidateKeys, Invalidator
from docbuild.cache.namespace import (
    NamespaceCache,
    core_docs_cache,
    markdown_cache,
    partials_cache,
    tooltips_cache,
    typedocs_cache,
)
from docbuild.cache.store import Store, create_blank_store
from docbuild.cache.written import OutputWriter
from docbuild.config import BuildConfig, Settings
from docbuild.logging import get_logger, log_context
from docbuild.types import generate_id

logger = get_logger(__name__)


class BuildSession:
    """Owns the cache state for one build or dev-server lifetime.

    Attributes:
        session_id: Time-ordered ID, attached to log records.
        config: Roots used to resolve changed paths.
        store: The session's Store.
    """

    def __init__(self, config: BuildConfig, store: Store | None = None) -> None:
        self.session_id = generate_id("session")
        self.config = config
        self.store = store if store is not None else create_blank_store()

        self.markdown: NamespaceCache = markdown_cache(self.store)
        self.core_docs: NamespaceCache = core_docs_cache(self.store)
        self.partials: NamespaceCache = partials_cache(self.store)
        self.typedocs: NamespaceCache = typedocs_cache(self.store)
        self.tooltips: NamespaceCache = tooltips_cache(self.store)

        self.dependencies = DependencyTracker(self.store)
        self.invalidator = Invalidator(self.store, config)
        self.writer = OutputWriter(self.store)

        with log_context(session_id=self.session_id):
            logger.debug(
                "Build session started",
                docs_path=str(config.docs_path),
                tooltips=config.tooltips is not None,
            )

    @classmethod
    def from_settings(cls, settings: Settings, strict: bool = True) -> BuildSession:
        """Create a session from environment settings."""
        return cls(settings.to_build_config(strict=strict))

    def mark_dirty(self, document_key: str, depends_on_key: str) -> None:
        """Record that document_key's output depends on depends_on_key."""
        self.dependencies.mark_dirty(document_key, depends_on_key)

    def invalidate(self, changed_path: str | os.PathLike[str], cascade: bool = True) -> None:
        """Evict what changed_path maps to, plus its direct dependents."""
        with log_context(session_id=self.session_id):
            self.invalidator.invalidate(changed_path, cascade=cascade)

    def invalidate_many(
        self, changed_paths: Iterable[str | os.PathLike[str]], cascade: bool = True
    ) -> None:
        with log_context(session_id=self.session_id):
            self.invalidator.invalidate_many(changed_paths, cascade=cascade)

    def resolve(self, path: str | os.PathLike[str]) -> CandidateKeys:
        return self.invalidator.resolve(path)

    def reset(self) -> None:
        """Drop all cached state, e.g. before a forced full rebuild."""
        with log_context(session_id=self.session_id):
            logger.info("Clearing build cache")
            self.store.clear()
