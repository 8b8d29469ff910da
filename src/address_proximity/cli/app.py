"""Typer CLI root application."""

import typer

from address_proximity.core.config import get_settings
from address_proximity.core.logging import setup_logging

app = typer.Typer(name="address-proximity", help="Geocoded address storage and proximity search CLI")


@app.callback()
def _main_callback() -> None:
    """Initialize logging for all CLI commands."""
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir)


def _register_commands() -> None:
    """Register all CLI commands."""
    from address_proximity.cli.geocode_cmd import lookup, save_address
    from address_proximity.cli.search_cmd import search

    app.command("lookup")(lookup)
    app.command("save-address")(save_address)
    app.command("search")(search)


_register_commands()
