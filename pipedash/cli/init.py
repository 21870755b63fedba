"""Init command implementation."""

from pathlib import Path

import typer
from rich.panel import Panel

from ..config import ConfigModel, save_config
from .common import config_path_from, console


def init_command(
    ctx: typer.Context,
    pipeline_dir: Path = typer.Option(
        Path.home() / "ent-pipeline",
        "--pipeline-dir",
        "-p",
        help="Root of the ingestion pipeline checkout",
    ),
    python_path: str = typer.Option(
        "python3",
        "--python",
        help="python3, python, or an absolute interpreter path",
    ),
    auto_refresh_sec: int = typer.Option(
        30,
        "--refresh",
        min=0,
        help="Dashboard polling interval in seconds (0 disables)",
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing config"),
) -> None:
    """Create the pipedash configuration file."""
    console.print(Panel.fit("Ingestion Pipeline Dashboard - Initialization", style="bold blue"))

    config_path = config_path_from(ctx)
    if config_path.exists() and not force:
        console.print(f"[yellow]Config already exists: {config_path} (use --force to overwrite)[/yellow]")
        raise typer.Exit(1)

    config = ConfigModel(
        pipeline_dir=str(pipeline_dir),
        python_path=python_path,
        auto_refresh_sec=auto_refresh_sec,
    )
    save_config(config, config_path)
    console.print(f"✅ Created config: {config_path}")

    script_path = pipeline_dir.expanduser() / "scripts" / "pipeline.py"
    if not script_path.exists():
        console.print(f"[yellow]⚠️  Pipeline script not found yet: {script_path}[/yellow]")

    console.print(
        Panel(
            f"[green]✅ pipedash initialized![/green]\n\n"
            f"Configuration: {config_path}\n"
            f"Pipeline: {pipeline_dir}\n\n"
            f"Next steps:\n"
            f"1. Add PDFs: [bold]pipedash add *.pdf --collection 'My Book' --year 2024[/bold]\n"
            f"2. Watch runs: [bold]pipedash watch[/bold]",
            style="green",
        )
    )
