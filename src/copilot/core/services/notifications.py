"""Fire-and-forget user notifications (toasts in the browser client)."""

from abc import ABC, abstractmethod

from loguru import logger
from rich.console import Console


class NotificationSink(ABC):
    @abstractmethod
    def notify_success(self, title: str, description: str | None = None) -> None:
        raise NotImplementedError

    @abstractmethod
    def notify_error(self, title: str, description: str | None = None) -> None:
        raise NotImplementedError


class LoggingNotificationSink(NotificationSink):
    def notify_success(self, title: str, description: str | None = None) -> None:
        logger.success(f"{title}: {description}" if description else title)

    def notify_error(self, title: str, description: str | None = None) -> None:
        logger.error(f"{title}: {description}" if description else title)


class ConsoleNotificationSink(NotificationSink):
    """Prints notifications with rich; used by the CLI."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    def notify_success(self, title: str, description: str | None = None) -> None:
        self._console.print(f"[green]✅ {title}[/green]")
        if description:
            self._console.print(f"   {description}")

    def notify_error(self, title: str, description: str | None = None) -> None:
        self._console.print(f"[red]❌ {title}[/red]")
        if description:
            self._console.print(f"   {description}")
