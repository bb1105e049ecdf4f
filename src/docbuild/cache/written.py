"""
Written-file tracking.

The store's written_files map records, per output path, the SHA-256 digest
of the content last written there. The emission step compares digests by
equality and skips writes whose content has not changed, which keeps file
watchers downstream of the build from firing on no-op rebuilds.
"""

from __future__ import annotations

import hashlib
import os
from pathlib import Path

from docbuild.cache.store import Store
from docbuild.logging import get_logger

logger = get_logger(__name__)


def content_digest(content: str | bytes) -> str:
    """SHA-256 hex digest of text (UTF-8 encoded) or bytes."""
    if isinstance(content, str):
        content = content.encode("utf-8")
    return hashlib.sha256(content).hexdigest()


def _output_key(path: str | os.PathLike[str]) -> str:
    return os.path.abspath(os.fspath(path))


def needs_write(store: Store, path: str | os.PathLike[str], content: str | bytes) -> bool:
    """True when content differs from what was last written to path."""
    return store.written_files.get(_output_key(path)) != content_digest(content)


class OutputWriter:
    """Writes build outputs, skipping files whose content is unchanged."""

    def __init__(self, store: Store) -> None:
        self.store = store

    def write(self, path: str | os.PathLike[str], content: str | bytes) -> bool:
        """Write content to path unless the last write had the same digest.

        Args:
            path: Output file path. Parent directories are created.
            content: Text (written as UTF-8) or bytes.

        Returns:
            True if the file was written, False if skipped.
        """
        key = _output_key(path)
        digest = content_digest(content)

        if self.store.written_files.get(key) == digest:
            logger.debug("Skipping unchanged output", path=key)
            return False

        output = Path(key)
        output.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, str):
            output.write_text(content, encoding="utf-8")
        else:
            output.write_bytes(content)

        self.store.written_files[key] = digest
        return True

    def forget(self, path: str | os.PathLike[str]) -> bool:
        """Drop the record for path so the next write always happens."""
        return self.store.written_files.pop(_output_key(path), None) is not None
