"""DTC lookup command implementation."""

import typer
from rich.console import Console
from rich.table import Table

from vpassport.cli.ui import error_panel
from vpassport.inspection.dtc import describe, normalize_code

console = Console()


def run_dtc(codes: list[str]) -> None:
    """Run the dtc command: describe each code given."""
    console.print()

    table = Table(title="Trouble Codes", show_lines=False)
    table.add_column("Code", style="bold")
    table.add_column("Description")

    invalid = 0
    for raw in codes:
        description = describe(raw)
        if description is None:
            invalid += 1
            table.add_row(raw.strip() or "[dim](empty)[/dim]", "[red]Not a valid DTC[/red]")
        else:
            table.add_row(normalize_code(raw), description)

    console.print(table)

    if invalid == len(codes):
        console.print()
        console.print(error_panel(
            "No valid trouble codes.",
            "Codes look like P0301: a system letter (P, B, C, U) and four hex digits.",
        ))
        raise typer.Exit(1)
