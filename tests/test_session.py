"""
Tests for the build session.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from docbuild.config import BuildConfig, Settings
from docbuild.session import BuildSession


class TestBuildSession:
    """Test session ownership and the end-to-end rebuild flow."""

    def test_each_session_owns_a_store(self, build_config: BuildConfig) -> None:
        """Test that sessions do not share state."""
        a = BuildSession(build_config)
        b = BuildSession(build_config)

        a.store.markdown["k"] = 1

        assert b.store.markdown == {}
        assert a.session_id != b.session_id
        assert a.session_id.startswith("session_")

    def test_accessors_share_session_store(self, build_config: BuildConfig) -> None:
        session = BuildSession(build_config)

        assert session.markdown.store is session.store
        assert session.tooltips.store is session.store
        assert session.invalidator.store is session.store

    @pytest.mark.asyncio
    async def test_partial_edit_rebuild(
        self, build_config: BuildConfig, docs_root: Path, make_recorder
    ) -> None:
        """Test a dev-mode cycle: build, edit a partial, rebuild."""
        session = BuildSession(build_config)
        page_key = "/docs/guides/billing.mdx"
        parse_page = make_recorder()
        read_partial = make_recorder()

        async def build() -> None:
            await session.markdown.get_or_compute(page_key, parse_page)
            await session.core_docs.get_or_compute(page_key, parse_page)
            await session.partials.get_or_compute("note.mdx", read_partial)
            session.mark_dirty(page_key, "_partials/note.mdx")

        await build()
        await build()
        assert len(parse_page.calls) == 2
        assert read_partial.calls == ["note.mdx"]

        session.invalidate(docs_root / "_partials" / "note.mdx")
        await build()

        assert len(parse_page.calls) == 4
        assert read_partial.calls == ["note.mdx", "note.mdx"]

    def test_invalidate_many_and_reset(self, build_config: BuildConfig, docs_root: Path) -> None:
        session = BuildSession(build_config)
        session.store.markdown["/docs/a.mdx"] = {}
        session.store.typedocs["x.mdx"] = {}
        session.store.written_files["/out/a"] = "d"

        session.invalidate_many([docs_root / "a.mdx"])
        assert session.store.markdown == {}
        assert session.store.typedocs == {"x.mdx": {}}

        session.reset()
        assert session.store.typedocs == {}
        assert session.store.written_files == {}

    def test_resolve(self, build_config: BuildConfig, docs_root: Path) -> None:
        session = BuildSession(build_config)

        assert session.resolve(docs_root / "_typedoc" / "a.mdx").typedocs == "a.mdx"

    def test_from_settings(self, mock_settings: Settings, docs_root: Path) -> None:
        """Test building a session from environment settings."""
        session = BuildSession.from_settings(mock_settings)

        assert session.config.docs_path == docs_root.resolve()
        assert session.config.tooltips is not None
