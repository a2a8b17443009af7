"""Config command implementation."""

import logging
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from vpassport.cli.ui import error_panel, masked_value, success_panel
from vpassport.core.config import ConfigManager
from vpassport.core.keychain import ENV_API_KEY, ApiKeyKeychain
from vpassport.exceptions import ConfigError
from vpassport.models import UserConfig

logger = logging.getLogger(__name__)
console = Console()


def run_config(
    base_url: Optional[str] = None,
    set_api_key: bool = False,
    clear_api_key: bool = False,
    reset: bool = False,
) -> None:
    """Run the config command."""
    console.print()

    manager = ConfigManager()

    if reset:
        _handle_reset(manager)
        return

    try:
        config = manager.load() if manager.exists else UserConfig()
    except ConfigError as e:
        console.print(error_panel(
            e.message,
            f"{e.details}\nFix {manager.config_path} or run 'vpassport config --reset'.",
        ))
        raise typer.Exit(1)

    changed = False
    if base_url is not None:
        try:
            config = UserConfig.model_validate(
                {**config.model_dump(), "api_base_url": base_url}
            )
        except ValidationError as e:
            console.print(error_panel("Invalid backend URL.", e.errors()[0]["msg"]))
            raise typer.Exit(1)
        manager.save(config)
        logger.info("Backend URL set to %s", config.api_base_url)
        console.print(success_panel(f"Backend URL set to {config.api_base_url}"))
        changed = True

    if set_api_key:
        api_key = Prompt.ask("  API key", password=True)
        try:
            ApiKeyKeychain.store(api_key)
        except ValueError as e:
            console.print(error_panel("API key not saved.", str(e)))
            raise typer.Exit(1)
        console.print(success_panel("API key saved to system keychain."))
        changed = True

    if clear_api_key:
        ApiKeyKeychain.delete()
        console.print(success_panel("API key removed from system keychain."))
        changed = True

    if not changed:
        _display_config(manager, config)


def _handle_reset(manager: ConfigManager) -> None:
    """Delete saved config and the stored API key."""
    deleted = manager.delete()
    ApiKeyKeychain.delete()
    if deleted:
        console.print(success_panel("Configuration reset."))
    else:
        console.print("[dim]  No configuration to reset.[/dim]")


def _display_config(manager: ConfigManager, config: UserConfig) -> None:
    """Display current settings."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Field", style="dim")
    table.add_column("Value")

    api_key = ApiKeyKeychain.retrieve()
    if api_key and not ApiKeyKeychain.exists():
        key_display = f"{masked_value(api_key)} [dim](from {ENV_API_KEY})[/dim]"
    elif api_key:
        key_display = masked_value(api_key)
    else:
        key_display = "[dim]not set[/dim]"

    table.add_row("Backend", config.api_base_url)
    table.add_row("API key", key_display)
    table.add_row("Timeout", f"{config.timeout_seconds:g}s")
    table.add_row("Audience", config.audience.value)
    table.add_row(
        "SoC bands",
        f"good \u2265 {config.soc_good_pct:g}%, warning \u2265 {config.soc_warning_pct:g}%",
    )
    table.add_row("EV table", str(config.ev_table_path) if config.ev_table_path else "built-in")
    table.add_row("Saved VINs", str(len(config.saved_vins)))

    source = str(manager.config_path) if manager.exists else "defaults (not saved)"
    console.print(Panel(table, title="Configuration", subtitle=source, border_style="blue", padding=(1, 2)))
