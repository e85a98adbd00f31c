"""Main CLI application module."""

import typer

from src.copilot.runtime.startup import configure_logging

from .cache_commands import cache_app
from .verify_commands import verify

app = typer.Typer(
    help="Copilot client core CLI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command("verify")(verify)
app.add_typer(cache_app, name="cache")


@app.callback()
def setup() -> None:
    """Configure logging before any command runs."""
    configure_logging()


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
