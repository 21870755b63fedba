"""Add and ingest commands."""

from pathlib import Path
from typing import Dict, List, Optional

import typer
from rich.table import Table

from ..config import SourceType
from ..errors import ManifestValidationError, PipelineError
from ..manifest import ManifestBuilder
from ..models.manifest import ManifestResult
from ..pipeline import PipelineClient
from .common import console, fail, get_config, run_async


async def run_ingest(client: PipelineClient, manifest_path: Path, dry_run: bool) -> None:
    """Run ingest or dry-run on a manifest and report the outcome."""
    console.print("[dim]Running dry-run...[/dim]" if dry_run else "[dim]Starting ingest...[/dim]")
    if dry_run:
        await client.dry_run(str(manifest_path))
        console.print("[green]✅ Dry-run complete, no files published[/green]")
    else:
        result = await client.ingest(str(manifest_path))
        console.print(f"[green]✅ Done: {result.published} published, {result.failed} failed[/green]")


def parse_title_overrides(values: Optional[List[str]]) -> Dict[str, str]:
    """Turn repeated FILE=TITLE options into a file name -> title map."""
    overrides = {}
    for value in values or []:
        name, sep, title = value.partition("=")
        if not sep:
            raise typer.BadParameter(f"Expected FILE=TITLE, got {value!r}", param_hint="--title")
        overrides[Path(name.strip()).name] = title.strip()
    return overrides


def print_manifest_summary(result: ManifestResult) -> None:
    table = Table(title=f"Manifest: {result.manifest_path.name}")
    table.add_column("Title", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("Citation key", style="green")
    for row in result.rows:
        table.add_row(row.chapter_or_title, row.source_type.label, row.citation_key)
    console.print(table)
    console.print(f"✅ Copied {len(result.rows)} file(s) to {result.dest_dir}")
    console.print(f"✅ Wrote manifest: {result.manifest_path}")


def add_command(
    ctx: typer.Context,
    files: List[Path] = typer.Argument(..., help="PDF files to add"),
    collection: Optional[str] = typer.Option(
        None, "--collection", "-c", help="Book or collection name (default: last used)"
    ),
    year: Optional[str] = typer.Option(None, "--year", "-y", help="Year or edition"),
    authors: Optional[str] = typer.Option(None, "--authors", "-a", help="Authors"),
    source_type: Optional[SourceType] = typer.Option(
        None,
        "--type",
        "-t",
        case_sensitive=False,
        help="Source type for every file (default: guessed per file name)",
    ),
    titles: Optional[List[str]] = typer.Option(
        None, "--title", help="Title override as FILE=TITLE (repeatable)"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Dry-run instead of ingesting"),
    run: bool = typer.Option(True, "--run/--no-run", help="Start the pipeline after writing the manifest"),
) -> None:
    """Copy PDFs into the pipeline, write a manifest and ingest it."""
    config = get_config(ctx)
    builder = ManifestBuilder(config)

    try:
        builder.add_files(files)
    except OSError as e:
        fail(str(e), "Could not read file")

    overrides = parse_title_overrides(titles)
    for entry in builder.entries:
        if source_type is not None:
            entry.source_type = source_type
        if entry.name in overrides:
            entry.title = overrides[entry.name]

    name, year, authors = builder.prefill(collection, year, authors)

    try:
        result = builder.build(name, year, authors)
    except ManifestValidationError as e:
        fail(str(e))
    except OSError as e:
        fail(str(e), "Failed to prepare ingest")

    print_manifest_summary(result)

    if not run:
        return

    try:
        run_async(run_ingest(PipelineClient(config), result.manifest_path, dry_run))
    except PipelineError as e:
        fail(str(e), "Ingest failed")


def ingest_command(
    ctx: typer.Context,
    manifest: Path = typer.Argument(..., help="Manifest CSV to ingest"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Process without publishing"),
) -> None:
    """Ingest an existing manifest."""
    config = get_config(ctx)
    manifest = manifest.expanduser()
    if not manifest.exists():
        fail(f"Manifest not found: {manifest}")

    try:
        run_async(run_ingest(PipelineClient(config), manifest.resolve(), dry_run))
    except PipelineError as e:
        fail(str(e), "Ingest failed")
