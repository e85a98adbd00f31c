"""Transaction verification CLI command."""

import asyncio

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel

from src.copilot.core.models import VerificationStatus
from src.copilot.core.services import ConsoleNotificationSink, VerificationPoller
from src.copilot.runtime.context import get_config
from src.copilot.runtime.dependencies import build_oracle

console = Console()


def verify(
    tx_hash: str = typer.Argument(..., help="Transaction hash or signature to verify"),
    interval_ms: int | None = typer.Option(
        None, "--interval-ms", "-i", help="Delay between checks in milliseconds"
    ),
    max_attempts: int | None = typer.Option(
        None, "--max-attempts", "-n", help="Checks before giving up"
    ),
    oracle: str | None = typer.Option(
        None, "--oracle", "-o", help="Oracle to ask: http or solana"
    ),
) -> None:
    """Poll until a purchase transaction is verified or the attempt budget runs out."""
    config = get_config()
    updates = {
        key: value
        for key, value in {
            "poll_interval_ms": interval_ms,
            "max_attempts": max_attempts,
            "oracle": oracle,
        }.items()
        if value is not None
    }
    try:
        verification = config.verification.model_validate(
            {**config.verification.model_dump(), **updates}
        )
    except ValidationError as e:
        console.print(f"[red]❌ Invalid verification options: {e}[/red]")
        raise typer.Exit(code=2) from e
    config = config.model_copy(update={"verification": verification})

    console.print(
        Panel.fit(
            f"[bold]Verifying[/bold] {tx_hash}\n"
            f"oracle={verification.oracle} interval={verification.poll_interval_ms}ms "
            f"max_attempts={verification.max_attempts}",
            border_style="blue",
        )
    )

    poller = VerificationPoller(
        build_oracle(config), ConsoleNotificationSink(console), config=verification
    )

    async def _run():
        poller.register(tx_hash)
        with console.status("Waiting for confirmation..."):
            return await poller.wait()

    result = asyncio.run(_run())
    if result is None or result.status != VerificationStatus.SUCCEEDED:
        raise typer.Exit(code=1)
