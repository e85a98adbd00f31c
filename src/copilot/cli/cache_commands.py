"""Inspect and clear the cached application user."""

import typer
from rich.console import Console
from rich.table import Table

from src.copilot.core.storage import UserCache, get_durable_store
from src.copilot.runtime.context import get_config

console = Console()

cache_app = typer.Typer(help="Inspect the durable user cache")


def get_user_cache() -> UserCache:
    config = get_config()
    return UserCache(get_durable_store(config), key=config.session.cache_key)


@cache_app.command("show")
def show_cache() -> None:
    """Show the cached user, if any."""
    user = get_user_cache().load()
    if user is None:
        console.print("[yellow]No cached user[/yellow]")
        return

    table = Table(title="Cached user")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("User ID", user.id)
    table.add_row("Identity", user.identity.id)
    table.add_row("Email", user.identity.email or "")
    table.add_row("Wallet", user.identity.wallet_address or "")
    table.add_row("Early access", "✅" if user.early_access else "❌")
    console.print(table)


@cache_app.command("clear")
def clear_cache() -> None:
    """Remove the cached user."""
    get_user_cache().clear()
    console.print("[green]Cached user cleared[/green]")
