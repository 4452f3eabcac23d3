"""User prompt utilities."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence, Tuple

from rich.console import Console
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table

from tsp.core.lib_logger import get_logger

logger = get_logger(__name__)

Choice = Tuple[str, str]


class Prompter(ABC):
    """Interactive capability handed to the scaffolding flow."""

    @abstractmethod
    def select(self, message: str, choices: Sequence[Choice], default: Optional[str] = None) -> str:
        """Pick one value from a list of (value, label) pairs."""

    @abstractmethod
    def text(self, message: str, default: Optional[str] = None) -> str:
        """Read free text, falling back to ``default`` on empty input."""

    @abstractmethod
    def confirm(self, message: str, default: bool = False) -> bool:
        """Ask a yes/no question."""


class ConsolePrompter(Prompter):
    """Prompter backed by Rich prompts on the terminal."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize the prompter.

        Args:
            console: Optional Rich console
        """
        self.console = console or Console()

    def select(self, message: str, choices: Sequence[Choice], default: Optional[str] = None) -> str:
        """Show a numbered table of choices and read the number of one of them."""
        if not choices:
            raise ValueError("No choices to select from")

        values = [value for value, _ in choices]
        default_index = values.index(default) if default in values else 0

        self.console.print(f"\n[cyan]{message}[/cyan]")
        table = Table(show_header=False, show_edge=False)
        table.add_column("Key", style="yellow")
        table.add_column("Option")
        for i, (_, label) in enumerate(choices):
            marker = "→" if i == default_index else " "
            table.add_row(f"{marker} {i + 1}", label)
        self.console.print(table)

        number = IntPrompt.ask(
            "Select option",
            choices=[str(i) for i in range(1, len(choices) + 1)],
            default=default_index + 1,
            show_choices=False,
            console=self.console
        )
        return values[number - 1]

    def text(self, message: str, default: Optional[str] = None) -> str:
        try:
            answer = Prompt.ask(message, default=default, console=self.console)
        except EOFError:
            return default or ""
        return (answer or default or "").strip()

    def confirm(self, message: str, default: bool = False) -> bool:
        try:
            return Confirm.ask(message, default=default, console=self.console)
        except EOFError:
            return False
