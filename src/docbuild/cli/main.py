"""
CLI for the documentation build cache.

Commands:
    docbuild config - Show current configuration
    docbuild resolve PATH - Show the cache key a path maps to in each namespace
    docbuild version - Print version
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from docbuild import __version__
from docbuild.cache.store import coerce_namespace
from docbuild.config import Settings, clear_settings_cache, get_settings
from docbuild.exceptions import UnknownNamespaceError
from docbuild.logging import setup_logging
from docbuild.session import BuildSession
from docbuild.types import Namespace

app = typer.Typer(
    name="docbuild",
    help="Documentation build cache - inspect configuration and cache key resolution",
    no_args_is_help=True,
)

console = Console()
error_console = Console(stderr=True)

# Markdown and core docs share the docs-derived key
_CANDIDATE_FIELD = {
    Namespace.MARKDOWN: "docs",
    Namespace.CORE_DOCS: "docs",
    Namespace.PARTIALS: "partials",
    Namespace.TYPEDOCS: "typedocs",
    Namespace.TOOLTIPS: "tooltips",
}


def _get_settings_safe() -> Settings | None:
    """Get settings, returning None if configuration is invalid."""
    try:
        clear_settings_cache()
        return get_settings()
    except Exception:
        return None


def _require_settings() -> Settings:
    settings = _get_settings_safe()
    if settings is None:
        error_console.print("[red]Configuration is invalid or incomplete.[/red]")
        error_console.print()
        error_console.print("Required environment variables:")
        error_console.print("  - DOCS_PATH (root directory of the markdown sources)")
        error_console.print()
        error_console.print("Create a .env file or set environment variables.")
        raise typer.Exit(1)

    setup_logging(log_level=settings.LOG_LEVEL, log_file=settings.LOG_FILE)
    return settings


@app.command()
def config() -> None:
    """Show current configuration."""
    console.print()
    console.print("[bold]Documentation Build Cache Configuration[/bold]")
    console.print()

    settings = _require_settings()

    table = Table(title="Settings", show_header=True)
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")

    for key, value in settings.display().items():
        display_value = str(value) if value is not None else "[dim]not set[/dim]"
        table.add_row(key, display_value)

    console.print(table)
    console.print()

    if settings.tooltips_enabled:
        console.print("[bold]Tooltips:[/bold] enabled")
    else:
        console.print("[yellow]Tooltips not configured.[/yellow]")

    console.print()


@app.command()
def resolve(
    path: Annotated[Path, typer.Argument(help="Changed file path to resolve")],
    namespace: Annotated[
        Optional[str],
        typer.Option("--namespace", "-n", help="Only show this namespace"),
    ] = None,
) -> None:
    """Show the cache key PATH maps to in each namespace.

    Namespaces the path is not under are shown as "not matched".
    """
    settings = _require_settings()
    session = BuildSession.from_settings(settings, strict=False)

    namespaces = list(Namespace)
    if namespace is not None:
        try:
            namespaces = [coerce_namespace(namespace)]
        except UnknownNamespaceError as e:
            error_console.print(f"[red]Error:[/red] {e}")
            raise typer.Exit(1)

    candidates = session.resolve(path).as_dict()

    table = Table(title=str(path), show_header=True)
    table.add_column("Namespace", style="cyan", no_wrap=True)
    table.add_column("Key", style="green")

    for ns in namespaces:
        if ns is Namespace.TOOLTIPS and not settings.tooltips_enabled:
            table.add_row(ns.value, "[dim]not configured[/dim]")
            continue
        key = candidates[_CANDIDATE_FIELD[ns]]
        table.add_row(ns.value, key if key is not None else "[dim]not matched[/dim]")

    console.print(table)


@app.command()
def version() -> None:
    """Print the version number."""
    console.print(f"docbuild-cache version {__version__}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
