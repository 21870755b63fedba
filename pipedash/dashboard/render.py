"""Map dashboard state to rich renderables. Nothing here does I/O."""

from datetime import datetime
from typing import List

import pendulum
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..models.run import RunDetail
from .state import DashboardState

TITLE = "Ingestion Pipeline"
EMPTY_MESSAGE = "No pipeline runs yet."
EMPTY_HINT = "Run 'pipedash add' to get started."
PLACEHOLDER = "—"
COLUMNS = ["Run ID", "Status", "Published", "Failed", "Dead", "Links", "Started"]

STATUS_STYLES = {
    "running": "yellow",
    "done": "green",
    "published": "green",
    "failed": "bold red",
    "partial_failed": "red",
    "pending": "dim",
}


def fmt_time(value: datetime) -> str:
    """Short local time, e.g. 'Oct 17 14:05'. Naive values are already local."""
    local = pendulum.local_timezone()
    return pendulum.instance(value, tz=local).in_timezone(local).format("MMM D HH:mm")


def status_badge(status: str) -> Text:
    """Status text with underscores shown as spaces."""
    return Text(status.replace("_", " "), style=STATUS_STYLES.get(status, "cyan"))


def render_header(state: DashboardState) -> Text:
    header = Text(TITLE, style="bold blue")
    if state.refreshed_at is not None:
        header.append(f"  refreshed {fmt_time(state.refreshed_at)}", style="dim")
    return header


def render_run_table(state: DashboardState) -> Table:
    """One row per run; counts stay as placeholders until a run's detail is loaded."""
    table = Table(expand=True)
    table.add_column(COLUMNS[0], style="cyan", no_wrap=True)
    table.add_column(COLUMNS[1])
    for column in COLUMNS[2:6]:
        table.add_column(column, justify="right")
    table.add_column(COLUMNS[6], style="dim")

    for run in state.runs:
        detail = state.details.get(run.id)
        if detail is None:
            counts = [PLACEHOLDER] * 4
        else:
            summary = detail.summary
            counts = [
                str(summary.published),
                str(summary.failed),
                str(summary.dead_letters),
                str(summary.unresolved_links),
            ]
        table.add_row(run.id, status_badge(run.status), *counts, fmt_time(run.created_at))
    return table


def render_detail(detail: RunDetail) -> Panel:
    """Sources by status, dead letters, manifest and errors for one run."""
    run = detail.run
    summary = detail.summary
    parts: List[RenderableType] = []

    sources = Text("Sources: ", style="bold")
    for status, count in summary.sources.items():
        sources.append(f"{status} {count}", style=STATUS_STYLES.get(status, "cyan"))
        sources.append("  ")
    parts.append(sources)

    parts.append(
        Text(f"Dead letters: {summary.dead_letters}    Unresolved links: {summary.unresolved_links}")
    )

    if detail.dead_letters:
        parts.append(Text("Dead letters:", style="bold"))
        for dead in detail.dead_letters:
            parts.append(Text(f"  [{dead.stage}] {dead.error or ''}", style="red"))

    if run.manifest_path:
        manifest = Text("Manifest: ", style="bold")
        manifest.append(run.manifest_path, style="magenta")
        parts.append(manifest)

    if run.error:
        parts.append(Text(f"Error: {run.error}", style="red"))

    if run.is_retryable:
        parts.append(Text(f"Retry with: pipedash retry {run.id}", style="yellow"))

    return Panel(Group(*parts), title=f"Run {run.id}", title_align="left")


def render_dashboard(state: DashboardState) -> Group:
    """Header followed by the error, the empty message, or the run table."""
    parts: List[RenderableType] = [render_header(state)]

    if state.error:
        parts.append(Text(state.error, style="red"))
    elif not state.runs:
        parts.append(Text(EMPTY_MESSAGE))
        parts.append(Text(EMPTY_HINT, style="dim"))
    else:
        parts.append(render_run_table(state))
        for run in state.runs:
            detail = state.details.get(run.id)
            if detail is not None:
                parts.append(render_detail(detail))

    return Group(*parts)

