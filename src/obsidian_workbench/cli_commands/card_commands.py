"""Card CLI commands: add, remove, sync, reorder, jump."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from ..domain.interfaces.outline_host import Location
from ..workbench.presentation import apply_reorder, keys_from_rendered
from .shared import ConfigOption, LogLevelOption, console, open_service

WorkbenchOption = Annotated[
    str | None,
    typer.Option("--workbench", "-w", help="Target workbench (default: current)"),
]


def register(app: typer.Typer) -> None:
    """Register card commands on the given Typer app."""

    @app.command()
    def add(
        file: Annotated[Path, typer.Argument(help="Note containing the heading")],
        line: Annotated[
            int, typer.Argument(help="Line of the heading or inside its section", min=1)
        ],
        workbench: WorkbenchOption = None,
        config_path: ConfigOption = None,
        log_level: LogLevelOption = None,
    ) -> None:
        """Add the heading at FILE:LINE as a card."""
        with open_service(config_path, log_level, "add_card") as service:
            result = service.add_card_at(Location(file=file, line=line), workbench)
            if result.added:
                console.print(
                    f"[green]Added[/green] {escape(result.card.title)} "
                    f"to {escape(result.workbench)}",
                    highlight=False,
                )
            else:
                console.print(
                    f"[yellow]Already present:[/yellow] {escape(result.card.title)} "
                    f"in {escape(result.workbench)}",
                    highlight=False,
                )

    @app.command()
    def remove(
        position: Annotated[int, typer.Argument(help="1-based card position", min=1)],
        workbench: WorkbenchOption = None,
        config_path: ConfigOption = None,
        log_level: LogLevelOption = None,
    ) -> None:
        """Remove the card at POSITION."""
        with open_service(config_path, log_level, "remove_card") as service:
            card = service.remove_card(position, workbench)
            console.print(f"[green]Removed[/green] {escape(card.title)}", highlight=False)

    @app.command()
    def sync(
        position: Annotated[int, typer.Argument(help="1-based card position", min=1)],
        workbench: WorkbenchOption = None,
        config_path: ConfigOption = None,
        log_level: LogLevelOption = None,
    ) -> None:
        """Re-read the card at POSITION from its source heading."""
        with open_service(config_path, log_level, "sync_card") as service:
            outcome = service.sync_card(position, workbench)
            if outcome.succeeded:
                console.print(
                    f"[green]Synced[/green] {escape(outcome.fresh.title)}", highlight=False
                )
            else:
                reason = outcome.error or "card has no identifier"
                console.print(
                    f"[red]Sync failed[/red] for {escape(outcome.card.title)}: {escape(reason)}",
                    highlight=False,
                )
                raise typer.Exit(code=1)

    @app.command(name="sync-all")
    def sync_all(
        workbench: WorkbenchOption = None,
        config_path: ConfigOption = None,
        log_level: LogLevelOption = None,
    ) -> None:
        """Re-read every identified card in a workbench."""
        with open_service(config_path, log_level, "sync_all") as service:
            report = service.sync_all(workbench)
            console.print(
                f"Synced {report.synced}/{report.total} cards in {escape(report.workbench)}"
            )
            for failure in report.failures:
                console.print(
                    f"  [red]FAIL[/red] {escape(failure.card.title)}: {escape(failure.error)}",
                    highlight=False,
                )

    @app.command()
    def reorder(
        positions: Annotated[
            list[int] | None,
            typer.Argument(help="New order as 1-based positions; unlisted cards are removed"),
        ] = None,
        from_file: Annotated[
            Path | None,
            typer.Option(
                "--from-file",
                exists=True,
                help="Edited outline written by 'show --output'",
            ),
        ] = None,
        workbench: WorkbenchOption = None,
        config_path: ConfigOption = None,
        log_level: LogLevelOption = None,
    ) -> None:
        """Store a new card order."""
        if not positions and from_file is None:
            console.print("[red]Give positions or --from-file[/red]")
            raise typer.Exit(code=2)
        with open_service(config_path, log_level, "reorder") as service:
            if from_file is not None:
                keys = keys_from_rendered(from_file.read_text(encoding="utf-8"))
                cards = apply_reorder(service.store, workbench, keys)
            else:
                cards = service.reorder(positions or [], workbench)
            for index, card in enumerate(cards, start=1):
                console.print(f"{index}. {escape(card.title)}", highlight=False)

    @app.command()
    def jump(
        identifier: Annotated[str, typer.Argument(help="Block id of a heading")],
        config_path: ConfigOption = None,
        log_level: LogLevelOption = None,
    ) -> None:
        """Print FILE:LINE of the heading carrying IDENTIFIER."""
        with open_service(config_path, log_level, "jump") as service:
            console.print(
                str(service.jump(identifier)), markup=False, highlight=False, soft_wrap=True
            )
