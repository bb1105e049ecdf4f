"""
Configuration management using pydantic-settings.

Loads the documentation roots from environment variables and .env files,
validates them, and converts them into the immutable BuildConfig that the
cache and invalidator consume.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from docbuild.exceptions import ConfigurationError


@dataclass(frozen=True)
class TooltipsConfig:
    """Tooltip roots. Absent entirely when the site has no tooltips."""

    input_path: Path


@dataclass(frozen=True)
class BuildConfig:
    """Filesystem roots the cache resolves changed paths against.

    Attributes:
        docs_path: Root of the markdown sources (also keys core docs).
        base_docs_link: URL prefix docs keys are joined onto, e.g. "/docs/".
        partials_path: Root of partial sources.
        typedoc_path: Root of typedoc input.
        tooltips: Tooltip roots, or None when tooltips are not configured.
    """

    docs_path: Path
    base_docs_link: str
    partials_path: Path
    typedoc_path: Path
    tooltips: TooltipsConfig | None = None

    @classmethod
    def from_roots(
        cls,
        docs_path: Path | str,
        base_docs_link: str = "/docs/",
        partials_path: Path | str | None = None,
        typedoc_path: Path | str | None = None,
        tooltips_path: Path | str | None = None,
    ) -> BuildConfig:
        """Build a config from plain roots, defaulting partials/typedoc under docs."""
        docs = Path(docs_path).resolve()
        return cls(
            docs_path=docs,
            base_docs_link=base_docs_link,
            partials_path=Path(partials_path).resolve() if partials_path else docs / "_partials",
            typedoc_path=Path(typedoc_path).resolve() if typedoc_path else docs / "_typedoc",
            tooltips=TooltipsConfig(Path(tooltips_path).resolve()) if tooltips_path else None,
        )


class Settings(BaseSettings):
    """Build settings loaded from environment variables.

    Required:
        DOCS_PATH: Root directory of the markdown sources

    Optional:
        BASE_DOCS_LINK: URL prefix for docs keys (default "/docs/")
        PARTIALS_PATH: Partials root (default DOCS_PATH/_partials)
        TYPEDOC_PATH: Typedoc input root (default DOCS_PATH/_typedoc)
        TOOLTIPS_INPUT_PATH: Tooltip sources; tooltips are disabled when unset
        LOG_LEVEL: Logging level
        LOG_FILE: JSON-lines log file
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Required - markdown root
    DOCS_PATH: Path = Field(..., description="Root directory of the markdown sources")

    BASE_DOCS_LINK: str = Field(
        default="/docs/", description="URL prefix docs keys are joined onto"
    )
    PARTIALS_PATH: Path | None = Field(default=None, description="Partials root")
    TYPEDOC_PATH: Path | None = Field(default=None, description="Typedoc input root")

    # Tooltips are optional as a whole
    TOOLTIPS_INPUT_PATH: Path | None = Field(
        default=None, description="Tooltip sources root"
    )

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    LOG_FILE: Path | None = Field(default=None, description="JSON-lines log file")

    @field_validator("BASE_DOCS_LINK")
    @classmethod
    def validate_base_docs_link(cls, v: str) -> str:
        """Validate that BASE_DOCS_LINK is a slash-delimited URL prefix."""
        if not v.startswith("/") or not v.endswith("/"):
            raise ValueError("BASE_DOCS_LINK must start and end with '/'")
        return v

    @model_validator(mode="after")
    def fill_default_roots(self) -> Settings:
        """Default partials and typedoc roots to folders inside the docs root."""
        if self.PARTIALS_PATH is None:
            self.PARTIALS_PATH = self.DOCS_PATH / "_partials"
        if self.TYPEDOC_PATH is None:
            self.TYPEDOC_PATH = self.DOCS_PATH / "_typedoc"
        return self

    @property
    def tooltips_enabled(self) -> bool:
        """Whether the tooltip namespace exists for this build."""
        return self.TOOLTIPS_INPUT_PATH is not None

    def to_build_config(self, strict: bool = True) -> BuildConfig:
        """Resolve the configured roots into a BuildConfig.

        Args:
            strict: Require the docs root to exist on disk.

        Returns:
            BuildConfig with absolute roots.

        Raises:
            ConfigurationError: If strict and the docs root is not a directory.
        """
        docs_path = self.DOCS_PATH.resolve()
        if strict and not docs_path.is_dir():
            raise ConfigurationError(
                "Docs root does not exist or is not a directory",
                context={"docs_path": str(docs_path)},
            )

        tooltips = None
        if self.TOOLTIPS_INPUT_PATH is not None:
            tooltips = TooltipsConfig(input_path=self.TOOLTIPS_INPUT_PATH.resolve())

        partials_path = self.PARTIALS_PATH or self.DOCS_PATH / "_partials"
        typedoc_path = self.TYPEDOC_PATH or self.DOCS_PATH / "_typedoc"
        return BuildConfig(
            docs_path=docs_path,
            base_docs_link=self.BASE_DOCS_LINK,
            partials_path=partials_path.resolve(),
            typedoc_path=typedoc_path.resolve(),
            tooltips=tooltips,
        )

    def display(self) -> dict[str, str | None]:
        """Return settings as strings for display."""
        def as_str(value: Path | str | None) -> str | None:
            return str(value) if value is not None else None

        return {
            "DOCS_PATH": as_str(self.DOCS_PATH),
            "BASE_DOCS_LINK": self.BASE_DOCS_LINK,
            "PARTIALS_PATH": as_str(self.PARTIALS_PATH),
            "TYPEDOC_PATH": as_str(self.TYPEDOC_PATH),
            "TOOLTIPS_INPUT_PATH": as_str(self.TOOLTIPS_INPUT_PATH),
            "LOG_LEVEL": self.LOG_LEVEL,
            "LOG_FILE": as_str(self.LOG_FILE),
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton.

    Returns:
        Settings instance loaded from environment.

    Raises:
        ValidationError: If required settings are missing or invalid.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
