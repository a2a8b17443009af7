"""Verify command implementation."""

import logging

import typer
from rich.console import Console

from vpassport.cli.ui import verification_panel
from vpassport.models import LookupResult, VerificationStatus

logger = logging.getLogger(__name__)
console = Console()


def run_verify(vin: str) -> None:
    """Run the verify command.

    Exits with code 1 when the seal fails verification, so the command can
    gate scripts.
    """
    from vpassport.cli.commands.passport import _load_config, fetch_result

    console.print()

    config = _load_config()
    console.print(f"  Verifying [bold]{vin.strip().upper()}[/bold]...")
    logger.info("Verify command: vin=%s", vin)

    result = fetch_result(config, vin, "verify")
    _display_result(result)

    if result.status is VerificationStatus.FAILED:
        raise typer.Exit(1)


def _display_result(result: LookupResult) -> None:
    """Display the verification outcome."""
    console.print()
    console.print(
        verification_panel(result.status, result.status_title, result.status_message, result.vin)
    )

    if result.record and result.record.sealed:
        seal = result.record.sealed.seal
        console.print(f"[dim]  Sealed {seal.sealed_ts.strftime('%Y-%m-%d %H:%M')}[/dim]")

    for reason in result.reasons:
        console.print(f"  [red]\u2717[/red] {reason}")
