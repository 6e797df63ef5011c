"""Workbench management CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from ..workbench.presentation import WorkbenchView
from .shared import ConfigOption, LogLevelOption, console, open_service


def register(app: typer.Typer) -> None:
    """Register workbench commands on the given Typer app."""

    @app.command(name="list")
    def list_workbenches(
        config_path: ConfigOption = None,
        log_level: LogLevelOption = None,
    ) -> None:
        """List workbenches and their card counts."""
        with open_service(config_path, log_level, "list_workbenches") as service:
            store = service.store
            table = Table(title="Workbenches")
            table.add_column("", width=1)
            table.add_column("Name", style="cyan")
            table.add_column("Cards", justify="right")
            for name in store.names():
                marker = "*" if name == store.current_name else ""
                table.add_row(marker, escape(name), str(len(store.workbench(name))))
            console.print(table)

    @app.command()
    def create(
        name: Annotated[str, typer.Argument(help="Name of the new workbench")],
        config_path: ConfigOption = None,
        log_level: LogLevelOption = None,
    ) -> None:
        """Create a workbench and make it current."""
        with open_service(config_path, log_level, "create_workbench") as service:
            service.store.create_workbench(name)
            console.print(f"[green]Created workbench[/green] {escape(service.store.current_name)}")

    @app.command()
    def switch(
        name: Annotated[str, typer.Argument(help="Workbench to make current")],
        config_path: ConfigOption = None,
        log_level: LogLevelOption = None,
    ) -> None:
        """Make another workbench current."""
        with open_service(config_path, log_level, "switch_workbench") as service:
            service.store.switch_to(name)
            console.print(f"Current workbench: [cyan]{escape(service.store.current_name)}[/cyan]")

    @app.command()
    def rename(
        old_name: Annotated[str, typer.Argument(help="Existing workbench")],
        new_name: Annotated[str, typer.Argument(help="New name")],
        config_path: ConfigOption = None,
        log_level: LogLevelOption = None,
    ) -> None:
        """Rename a workbench."""
        with open_service(config_path, log_level, "rename_workbench") as service:
            service.store.rename_workbench(old_name, new_name)
            console.print(
                f"[green]Renamed[/green] {escape(old_name)} -> {escape(new_name.strip())}"
            )

    @app.command()
    def delete(
        name: Annotated[str, typer.Argument(help="Workbench to delete")],
        config_path: ConfigOption = None,
        log_level: LogLevelOption = None,
    ) -> None:
        """Delete a workbench (the default workbench is protected)."""
        with open_service(config_path, log_level, "delete_workbench") as service:
            service.store.delete_workbench(name)
            console.print(f"[green]Deleted workbench[/green] {escape(name)}")

    @app.command()
    def clear(
        name: Annotated[
            str | None, typer.Argument(help="Workbench to clear (default: current)")
        ] = None,
        config_path: ConfigOption = None,
        log_level: LogLevelOption = None,
    ) -> None:
        """Remove every card from a workbench."""
        with open_service(config_path, log_level, "clear_workbench") as service:
            service.store.clear_workbench(name)
            console.print(
                f"[green]Cleared[/green] {escape(name or service.store.current_name)}"
            )

    @app.command()
    def show(
        name: Annotated[
            str | None, typer.Argument(help="Workbench to show (default: current)")
        ] = None,
        raw: Annotated[
            bool,
            typer.Option("--raw", help="Print the editable outline with card markers"),
        ] = False,
        output: Annotated[
            Path | None,
            typer.Option("--output", "-o", help="Write the editable outline to a file"),
        ] = None,
        config_path: ConfigOption = None,
        log_level: LogLevelOption = None,
    ) -> None:
        """Show a workbench as a flat outline."""
        with open_service(config_path, log_level, "show_workbench") as service:
            view = WorkbenchView(service.store, name)
            try:
                if output is not None:
                    output.write_text(view.text, encoding="utf-8")
                    console.print(f"Wrote {len(view.blocks)} cards to {escape(str(output))}")
                elif raw:
                    console.print(view.text, markup=False, highlight=False, end="")
                elif not view.blocks:
                    console.print(f"[yellow]Workbench {escape(view.name)} is empty.[/yellow]")
                else:
                    console.print(f"[bold]{escape(view.name)}[/bold]\n")
                    for position, block in enumerate(view.blocks, start=1):
                        card = block.card
                        title = escape(card.title)
                        origin = (
                            f" [dim]({escape(Path(card.file).name)})[/dim]" if card.file else ""
                        )
                        console.print(
                            f"[bold cyan]{position}.[/bold cyan] [bold]{title}[/bold]{origin}",
                            highlight=False,
                        )
                        if card.content:
                            console.print(card.content, markup=False, highlight=False)
                        console.print()
            finally:
                view.close()
