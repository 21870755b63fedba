"""Main CLI application."""

from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .collections import collections_app
from .common import setup_logging
from .ingest import add_command, ingest_command
from .init import init_command
from .runs import reconcile_command, retry_command
from .status import status_command, watch_command

app = typer.Typer(
    name="pipedash",
    help="Ingestion Pipeline Dashboard - run history, retries and manifest builder",
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        envvar="PIPEDASH_CONFIG",
        help="Config file (default: ~/.config/pipedash/config.yaml)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
) -> None:
    setup_logging(verbose)
    ctx.obj = {"config_path": config_path.expanduser() if config_path else None}


# Register commands
app.command("init")(init_command)
app.command("status")(status_command)
app.command("watch")(watch_command)
app.command("add")(add_command)
app.command("ingest")(ingest_command)
app.command("retry")(retry_command)
app.command("reconcile")(reconcile_command)
app.add_typer(collections_app, name="collections", help="Inspect saved collections")


if __name__ == "__main__":
    app()
