"""Main CLI application."""

from typing import Optional

import typer
from rich.console import Console

from vpassport import __version__
from vpassport.logging import setup_logging

app = typer.Typer(
    name="vpassport",
    help="Look up, verify and inspect digital vehicle passports.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit.",
    ),
) -> None:
    """vpassport - digital vehicle passport CLI."""
    if version:
        console.print(f"vpassport v{__version__}")
        raise typer.Exit()
    setup_logging()


@app.command()
def classify(
    vin: str = typer.Argument(..., help="17-character VIN"),
) -> None:
    """Detect whether a VIN likely belongs to an electric vehicle."""
    from vpassport.cli.commands.classify import run_classify

    run_classify(vin)


@app.command()
def dtc(
    codes: list[str] = typer.Argument(..., help="Trouble codes, e.g. P0301 U0100"),
) -> None:
    """Describe OBD-II diagnostic trouble codes."""
    from vpassport.cli.commands.dtc import run_dtc

    run_dtc(codes)


@app.command()
def tyres(
    fl: Optional[float] = typer.Option(None, "--fl", help="Front-left tread depth (mm)"),
    fr: Optional[float] = typer.Option(None, "--fr", help="Front-right tread depth (mm)"),
    rl: Optional[float] = typer.Option(None, "--rl", help="Rear-left tread depth (mm)"),
    rr: Optional[float] = typer.Option(None, "--rr", help="Rear-right tread depth (mm)"),
) -> None:
    """Assess tyre wear from tread depth readings."""
    from vpassport.cli.commands.tyres import run_tyres

    run_tyres(fl=fl, fr=fr, rl=rl, rr=rr)


@app.command()
def passport(
    vin: Optional[str] = typer.Argument(None, help="VIN to look up (defaults to a saved VIN)"),
    internal: bool = typer.Option(False, "--internal", help="Show seal key id and hash"),
    all_vins: bool = typer.Option(False, "--all", help="Show all saved VINs"),
) -> None:
    """Show a vehicle's digital passport."""
    from vpassport.cli.commands.passport import run_passport

    run_passport(vin=vin, internal=internal, all_vins=all_vins)


@app.command()
def verify(
    vin: str = typer.Argument(..., help="VIN to verify"),
) -> None:
    """Check whether a vehicle's passport seal is intact."""
    from vpassport.cli.commands.verify import run_verify

    run_verify(vin)


@app.command()
def config(
    base_url: str = typer.Option(None, "--base-url", help="Set the passport backend URL"),
    set_api_key: bool = typer.Option(False, "--set-api-key", help="Store an API key in the keychain"),
    clear_api_key: bool = typer.Option(False, "--clear-api-key", help="Remove the stored API key"),
    reset: bool = typer.Option(False, "--reset", help="Delete all saved settings"),
) -> None:
    """Show or update settings."""
    from vpassport.cli.commands.config import run_config

    run_config(
        base_url=base_url,
        set_api_key=set_api_key,
        clear_api_key=clear_api_key,
        reset=reset,
    )


@app.command()
def vins(
    add: str = typer.Option(None, "--add", help="Save a VIN"),
    nickname: str = typer.Option(None, "--nickname", help="Nickname for --add"),
    remove: str = typer.Option(None, "--remove", help="Remove a saved VIN"),
) -> None:
    """Manage saved VINs."""
    from vpassport.cli.commands.vins import run_vins

    run_vins(add=add, nickname=nickname, remove=remove)


if __name__ == "__main__":
    app()
