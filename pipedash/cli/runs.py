"""Retry and reconcile commands."""


import typer

from ..errors import PipelineError
from ..pipeline import PipelineClient
from .common import console, fail, get_config, run_async


def retry_command(
    ctx: typer.Context,
    run_id: str = typer.Argument(..., help="Run to retry"),
) -> None:
    """Ask the pipeline to retry a failed or partially failed run."""
    client = PipelineClient(get_config(ctx))
    try:
        run_async(client.retry(run_id))
    except PipelineError as e:
        fail(str(e), "Retry failed")
    console.print(f"[green]✅ Retry queued for run {run_id}[/green]")


def reconcile_command(
    ctx: typer.Context,
    scope: str = typer.Option("all", "--scope", help="Which links to reconcile"),
) -> None:
    """Resolve unresolved links across published notes."""
    client = PipelineClient(get_config(ctx))
    console.print("[dim]Reconciling unresolved links...[/dim]")
    try:
        resolved = run_async(client.reconcile_links(scope))
    except PipelineError as e:
        fail(str(e), "Reconcile failed")
    console.print(f"[green]✅ Reconciled: {resolved} link(s) resolved[/green]")
