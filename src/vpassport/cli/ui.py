"""Rich console UI helpers."""

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from vpassport.models import (
    DtcLine,
    DtcStatus,
    EvDetectionResult,
    HealthBand,
    TimelineEntry,
    TyreAssessment,
    TyreBand,
    VerificationStatus,
    WearStatus,
    WheelView,
)
from vpassport.models.inspection import AuctionState, ChargingTone

console = Console()

# Rich colour per derived state
VERIFICATION_STYLES = {
    VerificationStatus.VERIFIED: ("green", "\u2713"),
    VerificationStatus.FAILED: ("red", "\u2717"),
    VerificationStatus.UNSEALED: ("yellow", "\u26a0"),
    VerificationStatus.NOT_FOUND: ("yellow", "\u26a0"),
}

DTC_COLORS = {
    DtcStatus.GREEN: "green",
    DtcStatus.AMBER: "yellow",
    DtcStatus.RED: "red",
    DtcStatus.NA: "dim",
}

WEAR_COLORS = {
    WearStatus.CRITICAL: "red",
    WearStatus.POOR: "red",
    WearStatus.FAIR: "yellow",
    WearStatus.UNEVEN: "yellow",
    WearStatus.GOOD: "green",
}

TYRE_BAND_COLORS = {
    TyreBand.EXCELLENT: "green",
    TyreBand.GOOD: "green",
    TyreBand.FAIR: "yellow",
    TyreBand.LEGAL_MINIMUM: "yellow",
    TyreBand.BELOW_LEGAL: "red",
}

HEALTH_COLORS = {
    HealthBand.GOOD: "green",
    HealthBand.WARNING: "yellow",
    HealthBand.CRITICAL: "red",
}

CHARGING_COLORS = {
    ChargingTone.POSITIVE: "green",
    ChargingTone.CAUTION: "yellow",
    ChargingTone.NEUTRAL: "white",
}

AUCTION_COLORS = {
    AuctionState.UPCOMING: "blue",
    AuctionState.LIVE: "green",
    AuctionState.CLOSED: "dim",
}


def success_panel(message: str) -> Panel:
    """Create a success message panel."""
    return Panel(
        f"[green]\u2713[/green] {message}",
        border_style="green",
        padding=(0, 1),
    )


def error_panel(message: str, details: str | None = None) -> Panel:
    """Create an error message panel."""
    content = f"[red]\u2717[/red] {message}"
    if details:
        content += f"\n\n[dim]{details}[/dim]"
    return Panel(
        content,
        title="Error",
        border_style="red",
        padding=(0, 1),
    )


def warning_panel(message: str, details: str | None = None) -> Panel:
    """Create a warning message panel."""
    content = f"[yellow]\u26a0[/yellow] {message}"
    if details:
        content += f"\n\n[dim]{details}[/dim]"
    return Panel(
        content,
        border_style="yellow",
        padding=(0, 1),
    )


def info_panel(message: str, title: str | None = None) -> Panel:
    """Create an info message panel."""
    return Panel(
        message,
        title=title,
        border_style="blue",
        padding=(1, 2),
    )


def masked_value(value: str, visible_chars: int = 4) -> str:
    """Mask a value, showing only last N characters."""
    if len(value) <= visible_chars:
        return "*" * len(value)
    return "*" * (len(value) - visible_chars) + value[-visible_chars:]


def format_number(value: Optional[float], unit: str = "", decimals: int = 0) -> str:
    """Format a number with thin grouping and a unit, or '-' when absent."""
    if value is None:
        return "-"
    text = f"{value:,.{decimals}f}".replace(",", " ")
    return f"{text} {unit}".strip()


def verification_panel(
    status: VerificationStatus,
    title: str,
    message: str,
    vin: str,
) -> Panel:
    """Headline panel for a lookup outcome."""
    color, icon = VERIFICATION_STYLES.get(status, ("white", "?"))
    content = f"[{color}]{icon} [bold]{title}[/bold][/{color}]\n{message}\n\n[dim]VIN {vin}[/dim]"
    return Panel(
        content,
        title="Passport Verification",
        border_style=color,
        padding=(1, 2),
    )


def ev_detection_panel(vin: str, result: EvDetectionResult) -> Panel:
    """Panel showing the VIN heuristic EV verdict."""
    if not result.is_valid_vin:
        return warning_panel(
            "Please enter a valid 17-character VIN",
            f"{vin or '(empty)'}: {result.error.value}",
        )

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Field", style="dim")
    table.add_column("Value")

    if result.is_electric:
        table.add_row("Electric", "[green]\u2713 Likely electric[/green]")
        table.add_row("Make", result.make or "-")
        table.add_row("Battery (est.)", format_number(result.battery_estimate_kwh, "kWh"))
        table.add_row(
            "Smartcar",
            "[green]Supported[/green]" if result.smartcar_compatible else "[dim]Not supported[/dim]",
        )
        table.add_row("Confidence", f"{result.confidence:.0%}")
        if result.caveat:
            table.add_row("Note", f"[yellow]{result.caveat}[/yellow]")
    else:
        table.add_row("Electric", "[dim]No EV match for this manufacturer prefix[/dim]")
        table.add_row("Confidence", f"{result.confidence:.0%}")

    table.add_row("Source", f"[dim]{result.source}[/dim]")

    return Panel(
        table,
        title=f"EV Detection \u00b7 {vin}",
        border_style="green" if result.is_electric else "blue",
        padding=(1, 2),
    )


def create_dtc_table(lines: list[DtcLine], hidden: int = 0) -> Table:
    """Create a table of trouble codes and their descriptions."""
    table = Table(show_header=True, box=None, padding=(0, 2))
    table.add_column("Code", style="bold")
    table.add_column("Description")

    for line in lines:
        table.add_row(line.code, line.description or "[dim]Unknown code[/dim]")

    if hidden:
        table.add_row("", f"[dim]+{hidden} more[/dim]")

    return table


def tyre_assessment_panel(assessment: TyreAssessment) -> Panel:
    """Panel summarising the aggregate tyre verdict."""
    color = WEAR_COLORS.get(assessment.status, "white")
    content = (
        f"[{color}][bold]{assessment.status.value}[/bold][/{color}]\n"
        f"{assessment.message}\n\n"
        f"Recommendation:  {assessment.recommendation}\n"
        f"[dim]Min {assessment.min_mm:.1f} mm \u00b7 Max {assessment.max_mm:.1f} mm"
        f" \u00b7 Avg {assessment.avg_mm:.1f} mm"
        f" \u00b7 Spread {assessment.variance_mm:.1f} mm"
        f" \u00b7 {assessment.readings} reading(s)[/dim]"
    )
    return Panel(
        content,
        title="Tyre Condition",
        border_style=color,
        padding=(1, 2),
    )


def create_wheel_table(wheels: list[WheelView]) -> Table:
    """Create a per-wheel tread depth table."""
    table = Table(show_header=True, box=None, padding=(0, 2))
    table.add_column("Wheel", style="bold")
    table.add_column("Depth", justify="right")
    table.add_column("Condition")

    for wheel in wheels:
        if wheel.depth_mm is None or wheel.condition is None:
            table.add_row(wheel.position, "[dim]-[/dim]", "[dim]No reading[/dim]")
            continue
        color = TYRE_BAND_COLORS.get(wheel.condition.band, "white")
        table.add_row(
            wheel.position,
            f"{wheel.depth_mm:.1f} mm",
            f"[{color}]{wheel.condition.band.value}[/{color}]"
            f" [dim]{wheel.condition.description}[/dim]",
        )

    return table


def create_timeline_table(entries: list[TimelineEntry]) -> Table:
    """Create a table of timeline events, oldest first."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("When", style="dim")
    table.add_column("Event")

    for entry in entries:
        event = f"[bold]{entry.title}[/bold]"
        if entry.note:
            event += f" [dim]{entry.note}[/dim]"
        table.add_row(entry.ts.strftime("%Y-%m-%d %H:%M"), event)

    return table
