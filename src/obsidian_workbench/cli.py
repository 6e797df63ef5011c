"""Command-line interface for obsidian-workbench."""

from __future__ import annotations

import typer

from .cli_commands import card_commands, workbench_commands

app = typer.Typer(
    name="obsidian-workbench",
    help="Collect headings from Obsidian notes into named workbenches.",
    no_args_is_help=True,
)

workbench_commands.register(app)
card_commands.register(app)


def cli() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    cli()
