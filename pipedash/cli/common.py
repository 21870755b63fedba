"""Helpers shared by CLI commands."""

import asyncio
import logging
from pathlib import Path
from typing import Any, Coroutine, NoReturn, Optional, TypeVar

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from ..config import Config, default_config_path

console = Console()

T = TypeVar("T")

INTERRUPTED_EXIT_CODE = 130


def setup_logging(verbose: bool) -> None:
    """Route pipedash logs through rich; debug output only when verbose."""
    logger = logging.getLogger("pipedash")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    logger.handlers[:] = [handler]
    logger.propagate = False


def config_path_from(ctx: typer.Context) -> Path:
    """Config path chosen by the global --config option, or the default."""
    if ctx.obj and ctx.obj.get("config_path"):
        return ctx.obj["config_path"]
    return default_config_path()


def get_config(ctx: typer.Context) -> Config:
    """Load the config, exiting with a notice if it is missing or invalid."""
    config = Config(config_path_from(ctx))
    try:
        config.config
    except FileNotFoundError:
        console.print(
            f"[red]Config not found at {config.config_path}. Run 'pipedash init' first.[/red]",
            soft_wrap=True,
        )
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)
    return config


def fail(message: str, prefix: Optional[str] = None) -> NoReturn:
    """Print a red notice and exit 1."""
    text = f"{prefix}: {message}" if prefix else message
    console.print(f"[red]❌ {escape(text)}[/red]", highlight=False, soft_wrap=True)
    raise typer.Exit(1)


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine to completion; Ctrl-C stops waiting but leaves the pipeline running."""
    try:
        return asyncio.run(coro)
    except KeyboardInterrupt:
        console.print(
            "[yellow]Interrupted. A pipeline process that already started keeps running.[/yellow]",
            soft_wrap=True,
        )
        raise typer.Exit(INTERRUPTED_EXIT_CODE)
