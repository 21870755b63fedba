"""Status and watch commands."""

import asyncio
import signal
from typing import List, Optional

import typer
from rich.live import Live
from rich.markup import escape

from ..dashboard import DashboardState, load_detail, refresh, render_dashboard
from ..errors import PipelineError
from ..pipeline import PipelineClient, StatusPoller
from .common import console, fail, get_config, run_async


def status_command(
    ctx: typer.Context,
    run_id: Optional[str] = typer.Argument(None, help="Show one run in detail"),
    as_json: bool = typer.Option(False, "--json", help="Print the pipeline's JSON unchanged"),
) -> None:
    """Show pipeline runs, or one run's summary and dead letters."""
    client = PipelineClient(get_config(ctx))

    args = ["status"] if run_id is None else ["status", "--run-id", run_id]
    if as_json:
        try:
            data = run_async(client.run_json(args))
        except PipelineError as e:
            fail(str(e), "Status failed")
        console.print_json(data=data)
        return

    state = DashboardState()
    if run_id is None:
        run_async(refresh(state, client))
        console.print(render_dashboard(state))
        if state.error:
            raise typer.Exit(1)
        return

    try:
        detail = run_async(load_detail(state, client, run_id))
    except PipelineError as e:
        fail(str(e), "Failed to load run details")
    state.runs = [detail.run]
    console.print(render_dashboard(state))


async def _watch(poller: StatusPoller, live: Live, expand: List[str]) -> None:
    for run_id in expand:
        try:
            await load_detail(poller.state, poller.client, run_id)
        except PipelineError as e:
            console.print(f"[yellow]Could not load run {escape(run_id)}: {escape(str(e))}[/yellow]")

    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, stop.set)
    except (NotImplementedError, RuntimeError):
        # Windows event loops; Ctrl-C then raises KeyboardInterrupt instead
        pass
    try:
        await poller.run(stop, on_update=lambda state: live.update(render_dashboard(state)))
    finally:
        try:
            loop.remove_signal_handler(signal.SIGINT)
        except (NotImplementedError, RuntimeError):
            pass


def watch_command(
    ctx: typer.Context,
    interval: Optional[int] = typer.Option(
        None,
        "--interval",
        "-i",
        min=0,
        help="Seconds between refreshes (default from config, 0 renders once)",
    ),
    detail: Optional[List[str]] = typer.Option(
        None, "--detail", "-d", help="Keep a run's detail expanded, reloaded every refresh (repeatable)"
    ),
) -> None:
    """Live dashboard that polls run status until Ctrl-C."""
    config = get_config(ctx)
    if interval is None:
        interval = config.config.auto_refresh_sec

    poller = StatusPoller(PipelineClient(config), interval=interval)
    try:
        with Live(render_dashboard(poller.state), console=console, refresh_per_second=4) as live:
            asyncio.run(_watch(poller, live, detail or []))
    except KeyboardInterrupt:
        pass
    if interval:
        console.print("[yellow]Stopped watching[/yellow]")
