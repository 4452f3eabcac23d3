"""Progress reporting utilities."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Optional

from rich.console import Console


class StepReporter:
    """Spinner and outcome lines for long-running steps."""

    def __init__(self, console: Optional[Console] = None, enabled: bool = True):
        """Initialize step reporter.

        Args:
            console: Optional Rich console
            enabled: Show spinners; outcome lines are always printed
        """
        self.console = console or Console()
        self.enabled = enabled

    @contextmanager
    def status(self, description: str) -> Iterator[None]:
        """Show a spinner while the block runs.

        Do not wrap steps that inherit the terminal (installers, prompts):
        the spinner would redraw over their output.
        """
        if not self.enabled:
            yield
            return

        with self.console.status(description, spinner="dots"):
            yield

    def succeed(self, message: str) -> None:
        self.console.print(f"[green]✔[/green] {message}")

    def warn(self, message: str) -> None:
        self.console.print(f"[yellow]❗️ {message}[/yellow]")

    def fail(self, message: str) -> None:
        self.console.print(f"[red]✖ {message}[/red]")

    def info(self, message: str) -> None:
        self.console.print(f"👉 {message}")
