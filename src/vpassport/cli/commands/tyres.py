"""Tyres command implementation."""

from typing import Optional

import typer
from rich.console import Console

from vpassport.cli.ui import create_wheel_table, tyre_assessment_panel, warning_panel
from vpassport.inspection.tyres import assess, wheel_conditions
from vpassport.models import TyreDepths, WheelView

console = Console()


def run_tyres(
    fl: Optional[float] = None,
    fr: Optional[float] = None,
    rl: Optional[float] = None,
    rr: Optional[float] = None,
) -> None:
    """Run the tyres command."""
    console.print()

    depths = TyreDepths(fl=fl, fr=fr, rl=rl, rr=rr)
    assessment = assess(depths)
    if assessment is None:
        console.print(warning_panel(
            "No tyre readings given.",
            "Pass at least one of --fl, --fr, --rl, --rr (tread depth in mm).",
        ))
        raise typer.Exit(1)

    console.print(tyre_assessment_panel(assessment))

    conditions = wheel_conditions(depths)
    wheels = [
        WheelView(position=pos, depth_mm=mm, condition=conditions[pos])
        for pos, mm in depths.by_position().items()
    ]
    console.print()
    console.print(create_wheel_table(wheels))
