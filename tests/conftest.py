"""
Pytest configuration and fixtures for documentation build cache tests.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Generator
from unittest.mock import patch

import pytest

from docbuild.cache.store import Store, create_blank_store
from docbuild.config import BuildConfig, Settings, clear_settings_cache


class ComputeRecorder:
    """Async compute function that records the keys it was called with."""

    def __init__(self, make_value: Any = None, fail: BaseException | None = None) -> None:
        self.calls: list[str] = []
        self._make_value = make_value or (lambda key: {"key": key, "children": [key]})
        self._fail = fail

    async def __call__(self, key: str) -> Any:
        self.calls.append(key)
        if self._fail is not None:
            raise self._fail
        return self._make_value(key)


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """Provide a temporary directory for test outputs."""
    return tmp_path


@pytest.fixture
def docs_root(temp_dir: Path) -> Path:
    """Docs tree with partials, typedoc and tooltip roots."""
    root = temp_dir / "docs"
    for sub in ("guides", "_partials", "_typedoc", "_tooltips"):
        (root / sub).mkdir(parents=True)
    return root


@pytest.fixture
def build_config(docs_root: Path) -> BuildConfig:
    """BuildConfig with tooltips enabled."""
    return BuildConfig.from_roots(
        docs_path=docs_root,
        base_docs_link="/docs/",
        partials_path=docs_root / "_partials",
        typedoc_path=docs_root / "_typedoc",
        tooltips_path=docs_root / "_tooltips",
    )


@pytest.fixture
def build_config_no_tooltips(docs_root: Path) -> BuildConfig:
    """BuildConfig without tooltip configuration."""
    return BuildConfig.from_roots(docs_path=docs_root, base_docs_link="/docs/")


@pytest.fixture
def store() -> Store:
    """Provide an empty store."""
    return create_blank_store()


@pytest.fixture
def recorder() -> ComputeRecorder:
    """Provide a recording compute function."""
    return ComputeRecorder()


@pytest.fixture
def mock_env_vars(docs_root: Path) -> Generator[dict[str, str], None, None]:
    """Provide mock environment variables for testing."""
    env_vars = {
        "DOCS_PATH": str(docs_root),
        "BASE_DOCS_LINK": "/docs/",
        "TOOLTIPS_INPUT_PATH": str(docs_root / "_tooltips"),
        "LOG_LEVEL": "DEBUG",
    }

    with patch.dict(os.environ, env_vars, clear=False):
        clear_settings_cache()
        yield env_vars


@pytest.fixture
def mock_settings(mock_env_vars: dict[str, str]) -> Generator[Settings, None, None]:
    """Provide a Settings instance loaded from the mock environment."""
    from docbuild.config import get_settings

    yield get_settings()
    clear_settings_cache()


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Automatically reset settings cache before and after each test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def make_recorder() -> type[ComputeRecorder]:
    """Factory for recording compute functions with custom values or failures."""
    return ComputeRecorder
