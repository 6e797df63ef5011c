"""Shared utilities for CLI commands."""

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.markup import escape

from obsidian_workbench.application.services.workbench_service import WorkbenchService
from obsidian_workbench.config import Config, load_config, set_config
from obsidian_workbench.exceptions import ObsidianWorkbenchError
from obsidian_workbench.utils.logging import configure_logging, get_logger

# Shared console for all commands
console = Console()

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Path to workbench.yaml", exists=True),
]
LogLevelOption = Annotated[
    str | None,
    typer.Option("--log-level", help="Log level (DEBUG, INFO, WARN, ERROR)"),
]


def get_config_and_logger(
    config_path: Path | None = None,
    log_level: str | None = None,
    verbose: bool = False,
) -> tuple[Config, Any]:
    """Load configuration and configure logging for one command."""
    config = load_config(config_path)
    set_config(config)
    configure_logging(
        log_level or config.log_level,
        log_dir=config.get_log_dir(),
        verbose=verbose,
    )
    return config, get_logger("cli")


def print_error(error: ObsidianWorkbenchError) -> None:
    console.print(f"\n[bold red]Error:[/bold red] {escape(error.message)}")
    if error.suggestion:
        console.print(f"[yellow]Suggestion:[/yellow] {escape(error.suggestion)}")


@contextmanager
def command_boundary(event: str) -> Iterator[None]:
    """Report workbench errors to the user and exit with status 1."""
    logger = get_logger("cli")
    try:
        yield
    except ObsidianWorkbenchError as e:
        logger.warning(f"{event}_failed", error=e.message, error_code=e.error_code)
        print_error(e)
        raise typer.Exit(code=1) from e


@contextmanager
def open_service(
    config_path: Path | None, log_level: str | None, event: str
) -> Iterator[WorkbenchService]:
    """Load config, logging and the store, then run a command body."""
    with command_boundary(event):
        config, _ = get_config_and_logger(config_path, log_level)
        yield WorkbenchService.from_config(config)
