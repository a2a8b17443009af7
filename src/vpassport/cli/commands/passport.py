"""Passport command implementation."""

import asyncio
import logging
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from vpassport.cli.ui import (
    AUCTION_COLORS,
    CHARGING_COLORS,
    DTC_COLORS,
    HEALTH_COLORS,
    create_dtc_table,
    create_timeline_table,
    create_wheel_table,
    error_panel,
    ev_detection_panel,
    format_number,
    tyre_assessment_panel,
    verification_panel,
)
from vpassport.core.client import PassportClient
from vpassport.core.config import ConfigManager, capability_table_for
from vpassport.core.keychain import ApiKeyKeychain
from vpassport.core.lookup import lookup_passport
from vpassport.exceptions import (
    BackendUnavailableError,
    ConfigError,
    VinFormatError,
    VpassportError,
)
from vpassport.inspection.vin import CapabilityTable
from vpassport.inspection.view import build_view
from vpassport.models import (
    AuctionState,
    Audience,
    DtcStatus,
    LookupResult,
    PassportView,
    UserConfig,
)
from vpassport.models.view import AuctionView, BatteryView

logger = logging.getLogger(__name__)
console = Console()


def _load_config() -> UserConfig:
    """Load saved config (or defaults), exiting on a broken config file."""
    manager = ConfigManager()
    try:
        return manager.load_or_default()
    except ConfigError as e:
        console.print(error_panel(e.message, e.details))
        raise typer.Exit(1)


def _load_table(config: UserConfig) -> CapabilityTable:
    """Load the configured WMI table, exiting if it can't be read."""
    try:
        return capability_table_for(config)
    except ConfigError as e:
        console.print(error_panel(e.message, e.details))
        raise typer.Exit(1)


def _select_vin(config: UserConfig, vin: Optional[str] = None) -> str:
    """Pick the VIN to look up, prompting among saved VINs if needed."""
    if vin:
        return vin

    if not config.saved_vins:
        console.print(error_panel(
            "No VIN given.",
            "Pass a VIN, or save one with 'vpassport vins --add VIN'.",
        ))
        raise typer.Exit(1)

    # Single saved VIN → auto-select
    if len(config.saved_vins) == 1:
        return config.saved_vins[0].vin

    console.print()
    console.print("[bold]Select a vehicle:[/bold]")
    for i, entry in enumerate(config.saved_vins, 1):
        nickname = f" [dim]({entry.nickname})[/dim]" if entry.nickname else ""
        console.print(f"  {i}. {entry.vin}{nickname}")

    console.print()
    choice = Prompt.ask("  Vehicle number", default="1")

    try:
        idx = int(choice) - 1
        if 0 <= idx < len(config.saved_vins):
            return config.saved_vins[idx].vin
    except ValueError:
        pass

    console.print(error_panel("Invalid selection."))
    raise typer.Exit(1)


async def _lookup(config: UserConfig, vin: str) -> LookupResult:
    """Fetch and verify one passport against the configured backend."""
    client = PassportClient.from_config(config, api_key=ApiKeyKeychain.retrieve())
    async with client:
        return await lookup_passport(client, vin)


def fetch_result(config: UserConfig, vin: str, command: str) -> LookupResult:
    """Run a lookup, turning failures into an error panel and exit code 1."""
    try:
        return asyncio.run(_lookup(config, vin))
    except VinFormatError as e:
        console.print()
        console.print(error_panel(e.message, e.details))
        raise typer.Exit(1)
    except BackendUnavailableError as e:
        console.print()
        console.print(error_panel(
            e.message,
            f"{e.details}. Check the backend URL with 'vpassport config'.",
        ))
        raise typer.Exit(1)
    except VpassportError as e:
        console.print()
        console.print(error_panel(e.message, e.details))
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print()
        console.print("[yellow]Cancelled.[/yellow]")
        raise typer.Exit(1)
    except Exception as e:
        logger.exception("Unexpected error in %s", command)
        console.print()
        console.print(error_panel("Unexpected error.", str(e)))
        raise typer.Exit(1)


def run_passport(
    vin: Optional[str] = None,
    internal: bool = False,
    all_vins: bool = False,
) -> None:
    """Run the passport command."""
    console.print()

    config = _load_config()
    table = _load_table(config)
    audience = Audience.INTERNAL if internal else config.audience

    if all_vins:
        if not config.saved_vins:
            console.print(error_panel(
                "No saved VINs.",
                "Save one with 'vpassport vins --add VIN'.",
            ))
            raise typer.Exit(1)
        for entry in config.saved_vins:
            _run_single_passport(config, entry.vin, audience, table)
        return

    _run_single_passport(config, _select_vin(config, vin), audience, table)


def _run_single_passport(
    config: UserConfig,
    vin: str,
    audience: Audience,
    table: CapabilityTable,
) -> None:
    """Look up and display one passport."""
    console.print(f"  Looking up [bold]{vin.strip().upper()}[/bold]...")
    logger.info("Passport command: vin=%s audience=%s", vin, audience.value)

    result = fetch_result(config, vin, "passport")
    view = build_view(
        result,
        audience=audience,
        soc_good_pct=config.soc_good_pct,
        soc_warning_pct=config.soc_warning_pct,
        table=table,
    )
    _display_view(view)


def _display_view(view: PassportView) -> None:
    """Display a passport view with Rich formatting."""
    console.print()
    console.print(verification_panel(view.status, view.status_title, view.status_message, view.vin))

    if view.seal is not None:
        _display_seal(view)

    if view.lot_id or view.odometer_km is not None or view.dekra_url:
        _display_summary(view)

    console.print()
    console.print(ev_detection_panel(view.vin, view.ev_detection))

    if view.dtc_lines or view.dtc_status is not DtcStatus.NA:
        _display_dtc(view)

    if any(w.depth_mm is not None for w in view.wheels):
        _display_tyres(view)

    if view.battery is not None:
        _display_battery(view.battery)

    if view.auction is not None:
        _display_auction(view.auction)

    if view.timeline:
        console.print()
        console.print(Panel(
            create_timeline_table(view.timeline),
            title="Timeline",
            border_style="blue",
            padding=(1, 2),
        ))


def _display_seal(view: PassportView) -> None:
    seal = view.seal
    color = "green" if seal.valid else "red"
    lines = [
        f"Integrity:  [{color}]{'Valid' if seal.valid else 'Invalid'}[/{color}]",
        f"Sealed:     {seal.sealed_at.strftime('%Y-%m-%d %H:%M')}",
    ]
    if view.show_technical:
        lines.append(f"Key ID:     {seal.key_id}")
        lines.append(f"Hash:       [dim]{seal.hash_short}[/dim]")

    console.print()
    console.print(Panel("\n".join(lines), title="Seal", border_style=color, padding=(1, 2)))


def _display_summary(view: PassportView) -> None:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Field", style="dim")
    table.add_column("Value")

    table.add_row("Lot", view.lot_id or "-")
    table.add_row("Odometer", format_number(view.odometer_km, "km"))
    if view.dekra_url:
        table.add_row("DEKRA report", f"[link={view.dekra_url}]{view.dekra_url}[/link]")

    console.print()
    console.print(Panel(table, title="Vehicle", border_style="blue", padding=(1, 2)))


def _display_dtc(view: PassportView) -> None:
    color = DTC_COLORS.get(view.dtc_status, "white")
    header = f"[{color}]\u25cf {view.dtc_label}[/{color}]"

    console.print()
    if view.dtc_lines:
        body = Table.grid()
        body.add_row(header)
        body.add_row("")
        body.add_row(create_dtc_table(view.dtc_lines, view.dtc_hidden))
    else:
        body = header
    console.print(Panel(body, title="Diagnostics", border_style=color, padding=(1, 2)))


def _display_tyres(view: PassportView) -> None:
    if view.tyre_assessment is not None:
        console.print()
        console.print(tyre_assessment_panel(view.tyre_assessment))
    console.print()
    console.print(create_wheel_table(view.wheels))


def _display_battery(battery: BatteryView) -> None:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Field", style="dim")
    table.add_column("Value")

    table.add_row("Capacity", format_number(battery.capacity_kwh, "kWh"))

    health = battery.health
    if health is not None:
        if health.soc_pct is not None:
            color = HEALTH_COLORS.get(battery.soc, "white")
            table.add_row("Charge (SoC)", f"[{color}]{health.soc_pct:.0f}%[/{color}]")
        if health.soh_pct is not None:
            color = HEALTH_COLORS.get(battery.soh, "white")
            table.add_row("Health (SoH)", f"[{color}]{health.soh_pct:.0f}%[/{color}]")
        if health.range_km is not None:
            table.add_row("Range", format_number(health.range_km, "km"))
        if health.charging_status is not None:
            color = CHARGING_COLORS.get(battery.charging, "white")
            table.add_row(
                "Charging",
                f"[{color}]{health.charging_status.value.capitalize()}[/{color}]",
            )
        if health.last_updated is not None:
            table.add_row("Updated", health.last_updated.strftime("%Y-%m-%d %H:%M"))

    console.print()
    console.print(Panel(table, title="Battery", border_style="blue", padding=(1, 2)))


def _display_auction(auction: AuctionView) -> None:
    state = auction.countdown.state
    color = AUCTION_COLORS.get(state, "white")

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Field", style="dim")
    table.add_column("Value")

    table.add_row("Status", f"[{color}]{state.value.capitalize()}[/{color}]")
    if auction.countdown.display is not None:
        label = "Opens in" if state is AuctionState.UPCOMING else "Closes in"
        table.add_row(label, f"[bold]{auction.countdown.display}[/bold]")
    table.add_row("Current bid", auction.current_bid_display)
    table.add_row("Bids", str(auction.info.bids))
    table.add_row(
        "Reserve",
        "[green]Met[/green]" if auction.info.reserve_met else "[dim]Not met[/dim]",
    )
    if auction.info.url:
        table.add_row("Listing", f"[link={auction.info.url}]{auction.info.url}[/link]")

    console.print()
    console.print(Panel(table, title="Auction", border_style=color, padding=(1, 2)))
