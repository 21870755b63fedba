"""Saved collection commands."""

import typer
from rich.table import Table

from .common import console, get_config

collections_app = typer.Typer(help="Inspect saved collections")


@collections_app.command("list")
def collections_list(ctx: typer.Context) -> None:
    """List collections remembered from earlier manifests."""
    config = get_config(ctx)
    collections = config.config.saved_collections

    if not collections:
        console.print("[yellow]No saved collections yet.[/yellow]")
        return

    table = Table(title="Saved Collections")
    table.add_column("Name", style="cyan")
    table.add_column("Year", style="green")
    table.add_column("Authors")
    table.add_column("Default type", style="magenta")

    for collection in collections:
        table.add_row(
            collection.name,
            collection.year,
            collection.authors,
            collection.default_source_type.label,
        )

    console.print(table)


@collections_app.command("show")
def collections_show(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Collection name"),
) -> None:
    """Show one saved collection."""
    config = get_config(ctx)
    collection = config.config.find_collection(name)
    if collection is None:
        console.print(f"[red]Collection '{name}' not found.[/red]")
        raise typer.Exit(1)

    console.print(f"[bold]{collection.name}[/bold]")
    console.print(f"  Year: {collection.year}")
    console.print(f"  Authors: {collection.authors or '-'}")
    console.print(f"  Default type: {collection.default_source_type.label}")
