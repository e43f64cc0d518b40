"""CLI entry point for content-source."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from content_source.config import ContentSourcesConfig, load_config
from content_source.config.loader import DEFAULT_CONFIG_TEMPLATE
from content_source.errors import ContentSourceError
from content_source.links import get_content_path, get_rendered_title
from content_source.registry import ContentSourceRegistry
from content_source.source import ContentSource

app = typer.Typer(
    name="content-source",
    help="Rewrite links between content sources and render content for the app.",
)

config_app = typer.Typer(help="Manage content-source configuration.")
app.add_typer(config_app, name="config")

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

# Global state
_config: ContentSourcesConfig | None = None


def _get_config() -> ContentSourcesConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to content-source.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)
    logging.basicConfig(
        level=_LOG_LEVELS[_config.log_level],
        format="%(levelname)s %(name)s: %(message)s",
    )


def _read_input(file: str) -> str:
    if file == "-":
        return sys.stdin.read()
    path = Path(file)
    if not path.is_file():
        rprint(f"[red]File not found:[/red] {file}")
        raise typer.Exit(1)
    return path.read_text(encoding="utf-8")


def _select_source(cfg: ContentSourcesConfig, source_id: str | None) -> ContentSource:
    """Pick --source, else the configured default, else the only configured source."""
    registry = ContentSourceRegistry.from_config(cfg)
    source_id = source_id or cfg.default_source
    if source_id is None:
        if len(registry) != 1:
            rprint("[red]No source selected.[/red] Pass --source or set default_source.")
            raise typer.Exit(1)
        source_id = registry.ids()[0]
    return registry.get(source_id)


@app.command()
def rewrite(
    file: str = typer.Argument(..., help="HTML file to rewrite, or - for stdin"),
    source: str | None = typer.Option(None, "--source", "-s", help="Content source id"),
    home_url: str | None = typer.Option(None, "--home-url", help="Base URL for rewritten paths"),
) -> None:
    """Rewrite links owned by a content source into app paths."""
    cfg = _get_config()
    content = _read_input(file)
    try:
        src = _select_source(cfg, source)
        result = src.rewrite_internal_links(content, home_url or cfg.home_url)
    except ContentSourceError as e:
        rprint(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)
    typer.echo(result, nl=False)


@app.command()
def render(
    file: str = typer.Argument(..., help="HTML file to render, or - for stdin"),
    source: str | None = typer.Option(None, "--source", "-s", help="Content source id"),
    home_url: str | None = typer.Option(None, "--home-url", help="Base URL for rewritten paths"),
) -> None:
    """Rewrite links, then decode HTML entities for display."""
    cfg = _get_config()
    content = _read_input(file)
    try:
        src = _select_source(cfg, source)
        result = src.get_rendered_content(content, home_url or cfg.home_url)
    except ContentSourceError as e:
        rprint(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)
    typer.echo(result, nl=False)


@app.command()
def title(text: str = typer.Argument(..., help="Title with HTML entities")) -> None:
    """Decode HTML entities in a title."""
    typer.echo(get_rendered_title(text))


@app.command()
def path(
    content_type: str = typer.Argument(..., help="section | post | comment"),
    id: int = typer.Argument(..., min=1, help="Content id"),
) -> None:
    """Print the app path for a content item."""
    try:
        typer.echo(get_content_path(content_type, id))
    except ContentSourceError as e:
        rprint(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)


@app.command()
def sources() -> None:
    """List configured content sources."""
    cfg = _get_config()
    if not cfg.sources:
        rprint("[yellow]No content sources configured.[/yellow]")
        return
    table = Table(title=f"Content Sources ({len(cfg.sources)})")
    table.add_column("ID", style="cyan")
    table.add_column("Base URLs", style="green")
    table.add_column("Rules", justify="right")
    table.add_column("Entity Types", style="yellow")
    for sc in cfg.sources:
        entity_types = ", ".join(f"{ct.value}={et}" for ct, et in sc.entity_types.items() if et)
        table.add_row(
            sc.id + (" (default)" if sc.id == cfg.default_source else ""),
            "\n".join(sc.base_urls) or "-",
            str(len(sc.rules)),
            entity_types or "-",
        )
    rprint(table)


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(mode="json"), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default content-source.yaml in current directory."""
    target = Path("content-source.yaml")
    if target.exists() and not force:
        rprint("[yellow]content-source.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()
