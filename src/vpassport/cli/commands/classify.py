"""Classify command implementation."""

import logging

import typer
from rich.console import Console

from vpassport.cli.ui import ev_detection_panel
from vpassport.inspection.vin import classify, normalize_vin

logger = logging.getLogger(__name__)
console = Console()


def run_classify(vin: str) -> None:
    """Run the classify command."""
    from vpassport.cli.commands.passport import _load_config, _load_table

    console.print()

    table = _load_table(_load_config())
    result = classify(vin, table)
    logger.info(
        "Classified %s: electric=%s make=%s error=%s",
        vin,
        result.is_electric,
        result.make,
        result.error.value if result.error else None,
    )

    console.print(ev_detection_panel(normalize_vin(vin), result))

    if not result.is_valid_vin:
        raise typer.Exit(1)
