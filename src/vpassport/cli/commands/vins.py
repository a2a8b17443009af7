"""Saved VIN management command implementation."""

import logging
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.prompt import Confirm
from rich.table import Table

from vpassport.cli.ui import error_panel, success_panel
from vpassport.core.config import ConfigManager
from vpassport.exceptions import ConfigError
from vpassport.models import UserConfig

logger = logging.getLogger(__name__)
console = Console()


def run_vins(
    add: Optional[str] = None,
    nickname: Optional[str] = None,
    remove: Optional[str] = None,
) -> None:
    """Run the vins management command."""
    console.print()

    manager = ConfigManager()
    try:
        config = manager.load() if manager.exists else UserConfig()
    except ConfigError as e:
        console.print(error_panel(e.message, e.details))
        raise typer.Exit(1)

    if add:
        _handle_add(manager, config, add, nickname)
    elif remove:
        _handle_remove(manager, config, remove)
    else:
        _handle_list(config)


def _handle_list(config) -> None:
    """Display saved VINs."""
    if not config.saved_vins:
        console.print("[dim]  No saved VINs. Add one with 'vpassport vins --add VIN'.[/dim]")
        return

    table = Table(title="Saved VINs", show_lines=False)
    table.add_column("#", style="dim", width=3)
    table.add_column("VIN", style="bold")
    table.add_column("Nickname")
    table.add_column("Added", style="dim")

    for i, entry in enumerate(config.saved_vins, 1):
        table.add_row(
            str(i),
            entry.vin,
            entry.nickname or "[dim]-[/dim]",
            entry.added_at.strftime("%Y-%m-%d"),
        )

    console.print(table)
    console.print()
    console.print(f"[dim]  {len(config.saved_vins)} VIN(s) saved.[/dim]")


def _handle_add(manager, config, vin: str, nickname: Optional[str]) -> None:
    """Save a VIN."""
    try:
        updated = config.add_vin(vin, nickname=(nickname or "").strip() or None)
    except ValidationError as e:
        console.print(error_panel(f"Invalid VIN '{vin}'.", e.errors()[0]["msg"]))
        raise typer.Exit(1)
    except ValueError as e:
        console.print(error_panel(str(e), "Use 'vpassport vins' to list saved VINs."))
        raise typer.Exit(1)

    manager.save(updated)
    entry = updated.saved_vins[-1]
    logger.info("Saved VIN %s", entry.vin)
    console.print(success_panel(f"VIN {entry.display_name} saved."))


def _handle_remove(manager, config, vin: str) -> None:
    """Remove a saved VIN."""
    entry = config.get_vin(vin)
    if not entry:
        saved = ", ".join(v.vin for v in config.saved_vins) or "none"
        console.print(error_panel(f"VIN '{vin}' not found.", f"Saved VINs: {saved}"))
        raise typer.Exit(1)

    if not Confirm.ask(f"  Remove [bold]{entry.display_name}[/bold]?", default=False):
        console.print("[dim]  Cancelled.[/dim]")
        return

    manager.save(config.remove_vin(entry.vin))
    logger.info("Removed VIN %s", entry.vin)
    console.print()
    console.print(success_panel(f"VIN {entry.vin} removed."))
