"""
Tests for configuration module.
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from docbuild.config import BuildConfig, Settings, get_settings
from docbuild.exceptions import ConfigurationError


class TestSettingsValidation:
    """Tests for Settings validation."""

    def test_settings_loads_from_env(self, mock_env_vars: dict[str, str], docs_root: Path) -> None:
        """Test that settings correctly loads from environment variables."""
        settings = get_settings()

        assert settings.DOCS_PATH == docs_root
        assert settings.BASE_DOCS_LINK == "/docs/"
        assert settings.LOG_LEVEL == "DEBUG"
        assert settings.tooltips_enabled is True

    def test_default_roots_under_docs(self, docs_root: Path) -> None:
        """Test that partials and typedoc default to folders in the docs root."""
        settings = Settings(_env_file=None, DOCS_PATH=docs_root)

        assert settings.PARTIALS_PATH == docs_root / "_partials"
        assert settings.TYPEDOC_PATH == docs_root / "_typedoc"
        assert settings.tooltips_enabled is False

    def test_docs_path_required(self) -> None:
        """Test that validation fails without DOCS_PATH."""
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValidationError):
                Settings(_env_file=None)

    @pytest.mark.parametrize("link", ["docs/", "/docs", "docs"])
    def test_base_docs_link_must_be_slash_delimited(self, docs_root: Path, link: str) -> None:
        """Test BASE_DOCS_LINK validation."""
        with pytest.raises(ValidationError) as exc_info:
            Settings(_env_file=None, DOCS_PATH=docs_root, BASE_DOCS_LINK=link)

        assert "BASE_DOCS_LINK" in str(exc_info.value)

    def test_unknown_tooltip_settings_ignored(self, docs_root: Path) -> None:
        """Test that only the tooltip input root is configurable."""
        settings = Settings(_env_file=None, DOCS_PATH=docs_root, TOOLTIPS_OUTPUT_PATH="out")

        assert settings.tooltips_enabled is False
        assert "TOOLTIPS_OUTPUT_PATH" not in settings.display()


class TestBuildConfig:
    """Tests for converting settings into a BuildConfig."""

    def test_to_build_config(self, mock_settings: Settings, docs_root: Path) -> None:
        config = mock_settings.to_build_config()

        assert config.docs_path == docs_root.resolve()
        assert config.partials_path == (docs_root / "_partials").resolve()
        assert config.tooltips is not None
        assert config.tooltips.input_path == (docs_root / "_tooltips").resolve()

    def test_missing_docs_root_strict(self, temp_dir: Path) -> None:
        """Test that a missing docs root raises ConfigurationError."""
        settings = Settings(_env_file=None, DOCS_PATH=temp_dir / "missing")

        with pytest.raises(ConfigurationError) as exc_info:
            settings.to_build_config()

        assert "missing" in exc_info.value.context["docs_path"]

    def test_missing_docs_root_lenient(self, temp_dir: Path) -> None:
        settings = Settings(_env_file=None, DOCS_PATH=temp_dir / "missing")

        config = settings.to_build_config(strict=False)

        assert config.tooltips is None

    def test_unvalidated_settings_default_roots(self, docs_root: Path) -> None:
        """Test root defaults when settings skipped validation."""
        settings = Settings.model_construct(DOCS_PATH=docs_root)

        config = settings.to_build_config()

        assert config.partials_path == (docs_root / "_partials").resolve()
        assert config.typedoc_path == (docs_root / "_typedoc").resolve()
        assert config.tooltips is None

    def test_from_roots_defaults(self, docs_root: Path) -> None:
        config = BuildConfig.from_roots(docs_root)

        assert config.base_docs_link == "/docs/"
        assert config.typedoc_path == docs_root.resolve() / "_typedoc"
        assert config.tooltips is None

    def test_display(self, mock_settings: Settings) -> None:
        display = mock_settings.display()

        assert display["BASE_DOCS_LINK"] == "/docs/"
        assert display["TOOLTIPS_INPUT_PATH"].endswith("_tooltips")
        assert display["PARTIALS_PATH"].endswith("_partials")
